"""
Full-precision multiply/divide kernel.

Python integers are arbitrary precision, so the 512-bit intermediate product of
the on-chain version comes for free. What this module adds is the *contract*:
- inputs must be uint256 values,
- the rounding direction is an explicit argument (`Rounding.DOWN` / `Rounding.UP`),
- a zero denominator or a quotient wider than 256 bits raises instead of wrapping.
"""

from __future__ import annotations

from enum import Enum, unique

from .constants import MAX_INT256, MAX_UINT160, MAX_UINT256, MIN_INT256
from .errors import MathDivisionByZeroError, MulDivOverflowError, PriceOutOfBoundsError


@unique
class Rounding(Enum):
    """Rounding direction for a full-precision division."""
    DOWN = "down"
    UP = "up"


def require_uint(name: str, value: int, bits: int = 256) -> None:
    """Reject non-ints, bools, negatives and values wider than `bits`."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")
    if value >> bits:
        raise ValueError(f"{name} must fit in uint{bits}: {value}")


def mul_div(a: int, b: int, denominator: int, rounding: Rounding = Rounding.DOWN) -> int:
    """
    Compute `a * b / denominator` exactly, rounded per `rounding`.

    Raises:
        MathDivisionByZeroError: if `denominator == 0`
        MulDivOverflowError: if the rounded quotient does not fit in uint256
    """
    require_uint("a", a)
    require_uint("b", b)
    require_uint("denominator", denominator)
    if not isinstance(rounding, Rounding):
        raise TypeError("rounding must be a Rounding")
    if denominator == 0:
        raise MathDivisionByZeroError("mul_div: denominator is zero")

    quotient, remainder = divmod(a * b, denominator)
    if rounding is Rounding.UP and remainder:
        quotient += 1
    if quotient > MAX_UINT256:
        raise MulDivOverflowError(f"mul_div: result does not fit in uint256 ({rounding.value})")
    return quotient


def mul_div_rounding_up(a: int, b: int, denominator: int) -> int:
    """`ceil(a * b / denominator)`."""
    return mul_div(a, b, denominator, Rounding.UP)


def div_rounding_up(x: int, y: int) -> int:
    """`ceil(x / y)` for uint256 operands."""
    require_uint("x", x)
    require_uint("y", y)
    if y == 0:
        raise MathDivisionByZeroError("div_rounding_up: divisor is zero")
    return -(-x // y)


def to_uint160(value: int) -> int:
    if value < 0 or value > MAX_UINT160:
        raise PriceOutOfBoundsError(f"value does not fit in uint160: {value}")
    return value


def to_int256(value: int) -> int:
    if value < MIN_INT256 or value > MAX_INT256:
        raise MulDivOverflowError(f"value does not fit in int256: {value}")
    return value
