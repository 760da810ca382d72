"""
Protocol-fixed constants for the sqrt-price kernels.

These are not configuration: changing any of them changes the pricing of every
pool and breaks parity with other implementations.
"""

from __future__ import annotations

# Q64.96 fixed point
RESOLUTION: int = 96
Q96: int = 1 << RESOLUTION

# Fee rates are expressed in pips (1e-6, i.e. hundredths of a basis point).
PIPS_DENOMINATOR: int = 1_000_000

MAX_UINT128: int = (1 << 128) - 1
MAX_UINT160: int = (1 << 160) - 1
MAX_UINT256: int = (1 << 256) - 1
MAX_INT256: int = (1 << 255) - 1
MIN_INT256: int = -(1 << 255)

# sqrt prices at the extreme ticks (-887272 / 887272)
MIN_SQRT_RATIO: int = 4295128739
MAX_SQRT_RATIO: int = 1461446703485210103287273052203988822378723970342
