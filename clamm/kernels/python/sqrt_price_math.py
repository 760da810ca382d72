"""
Sqrt-price arithmetic kernel (Q64.96 prices, uint128 liquidity).

Each function matches the on-chain concentrated-liquidity library bit for bit,
including its overflow fallback branches, which give different (coarser)
results than the precise formula on the inputs that reach them.

Rounding conventions:
- amount0 price updates round the price UP, amount1 price updates round it DOWN,
  so an exact-in step never moves price further than paid for and an exact-out
  step always moves price at least as far as delivered;
- deltas take the rounding direction from the caller.
"""

from __future__ import annotations

import math

from .constants import MAX_UINT160, MAX_UINT256, Q96, RESOLUTION
from .errors import MulDivOverflowError, PriceOutOfBoundsError
from .full_math import Rounding, div_rounding_up, mul_div, mul_div_rounding_up, require_uint, to_int256, to_uint160


def require_sqrt_price(name: str, value: int) -> None:
    """Reject anything that is not a positive uint160 sqrt price."""
    require_uint(name, value, 160)
    if value == 0:
        raise ValueError(f"{name} must be positive")


def _require_bool(name: str, value: bool) -> None:
    if not isinstance(value, bool):
        raise TypeError(f"{name} must be a bool")


def get_next_sqrt_price_from_amount0_rounding_up(
    sqrt_price_x96: int,
    liquidity: int,
    amount: int,
    add: bool,
) -> int:
    """
    Next sqrt price after adding/removing `amount` of token0.

    Precise form: `L * p / (L +- amount * p)` (with L scaled by 2**96). When the
    product or the sum does not fit in 256 bits the on-chain version falls back
    to `L / (L / p + amount)`; so does this one.
    """
    require_sqrt_price("sqrt_price_x96", sqrt_price_x96)
    require_uint("liquidity", liquidity, 128)
    require_uint("amount", amount)
    _require_bool("add", add)

    # Short circuit: the formula is not guaranteed to return `p` for a zero amount.
    if amount == 0:
        return sqrt_price_x96

    numerator1 = liquidity << RESOLUTION
    product = amount * sqrt_price_x96

    if add:
        if product <= MAX_UINT256:
            denominator = numerator1 + product
            if denominator <= MAX_UINT256:
                return to_uint160(mul_div_rounding_up(numerator1, sqrt_price_x96, denominator))
        fallback_denominator = numerator1 // sqrt_price_x96 + amount
        if fallback_denominator > MAX_UINT256:
            raise MulDivOverflowError("amount0 price update: denominator overflows uint256")
        return to_uint160(div_rounding_up(numerator1, fallback_denominator))

    # Removing token0: the product must fit and must not exhaust the virtual reserves.
    if product > MAX_UINT256 or numerator1 <= product:
        raise PriceOutOfBoundsError("amount0 out exceeds the virtual reserves at this price")
    denominator = numerator1 - product
    return to_uint160(mul_div_rounding_up(numerator1, sqrt_price_x96, denominator))


def get_next_sqrt_price_from_amount1_rounding_down(
    sqrt_price_x96: int,
    liquidity: int,
    amount: int,
    add: bool,
) -> int:
    """
    Next sqrt price after adding/removing `amount` of token1: `p +- amount / L`.

    Adding rounds the quotient down, removing rounds it up; both round the
    resulting price down.
    """
    require_sqrt_price("sqrt_price_x96", sqrt_price_x96)
    require_uint("liquidity", liquidity, 128)
    require_uint("amount", amount)
    _require_bool("add", add)

    if add:
        if amount <= MAX_UINT160:
            quotient = mul_div(amount << RESOLUTION, 1, liquidity)
        else:
            quotient = mul_div(amount, Q96, liquidity)
        return to_uint160(sqrt_price_x96 + quotient)

    if amount <= MAX_UINT160:
        quotient = div_rounding_up(amount << RESOLUTION, liquidity)
    else:
        quotient = mul_div_rounding_up(amount, Q96, liquidity)
    if sqrt_price_x96 <= quotient:
        raise PriceOutOfBoundsError("amount1 out exceeds the virtual reserves at this price")
    return sqrt_price_x96 - quotient


def get_next_sqrt_price_from_input(
    sqrt_price_x96: int,
    liquidity: int,
    amount_in: int,
    zero_for_one: bool,
) -> int:
    """Price after swapping `amount_in` of token0 (zero_for_one) or token1 into the pool."""
    require_sqrt_price("sqrt_price_x96", sqrt_price_x96)
    require_uint("liquidity", liquidity, 128)
    if liquidity == 0:
        raise ValueError("liquidity must be positive")

    # Round so that the step never passes the target price.
    if zero_for_one:
        return get_next_sqrt_price_from_amount0_rounding_up(sqrt_price_x96, liquidity, amount_in, True)
    return get_next_sqrt_price_from_amount1_rounding_down(sqrt_price_x96, liquidity, amount_in, True)


def get_next_sqrt_price_from_output(
    sqrt_price_x96: int,
    liquidity: int,
    amount_out: int,
    zero_for_one: bool,
) -> int:
    """Price after taking `amount_out` of token1 (zero_for_one) or token0 out of the pool."""
    require_sqrt_price("sqrt_price_x96", sqrt_price_x96)
    require_uint("liquidity", liquidity, 128)
    if liquidity == 0:
        raise ValueError("liquidity must be positive")

    # Round so that the step always reaches at least the delivered amount.
    if zero_for_one:
        return get_next_sqrt_price_from_amount1_rounding_down(sqrt_price_x96, liquidity, amount_out, False)
    return get_next_sqrt_price_from_amount0_rounding_up(sqrt_price_x96, liquidity, amount_out, False)


def get_amount0_delta(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int, round_up: bool) -> int:
    """
    Token0 between two prices: `L * (sqrt(upper) - sqrt(lower)) / (sqrt(upper) * sqrt(lower))`.
    """
    require_sqrt_price("sqrt_ratio_a_x96", sqrt_ratio_a_x96)
    require_sqrt_price("sqrt_ratio_b_x96", sqrt_ratio_b_x96)
    require_uint("liquidity", liquidity, 128)
    _require_bool("round_up", round_up)

    lower, upper = sorted((sqrt_ratio_a_x96, sqrt_ratio_b_x96))
    numerator1 = liquidity << RESOLUTION
    numerator2 = upper - lower

    if round_up:
        return div_rounding_up(mul_div(numerator1, numerator2, upper, Rounding.UP), lower)
    return mul_div(numerator1, numerator2, upper, Rounding.DOWN) // lower


def get_amount1_delta(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity: int, round_up: bool) -> int:
    """Token1 between two prices: `L * (sqrt(upper) - sqrt(lower))`."""
    require_sqrt_price("sqrt_ratio_a_x96", sqrt_ratio_a_x96)
    require_sqrt_price("sqrt_ratio_b_x96", sqrt_ratio_b_x96)
    require_uint("liquidity", liquidity, 128)
    _require_bool("round_up", round_up)

    lower, upper = sorted((sqrt_ratio_a_x96, sqrt_ratio_b_x96))
    rounding = Rounding.UP if round_up else Rounding.DOWN
    return mul_div(liquidity, upper - lower, Q96, rounding)


def _require_int128(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if not (-(1 << 127) <= value < (1 << 127)):
        raise ValueError(f"{name} must fit in int128: {value}")


def get_amount0_delta_signed(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity_delta: int) -> int:
    """
    Signed token0 delta for a liquidity change.

    Added liquidity (positive) is owed to the pool and rounds up; removed liquidity
    (negative) is owed to the position and rounds down.
    """
    _require_int128("liquidity_delta", liquidity_delta)
    if liquidity_delta < 0:
        return -to_int256(get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, -liquidity_delta, False))
    return to_int256(get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity_delta, True))


def get_amount1_delta_signed(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, liquidity_delta: int) -> int:
    """Signed token1 delta for a liquidity change (same rounding rule as token0)."""
    _require_int128("liquidity_delta", liquidity_delta)
    if liquidity_delta < 0:
        return -to_int256(get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, -liquidity_delta, False))
    return to_int256(get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity_delta, True))


def encode_sqrt_price_x96(amount1: int, amount0: int) -> int:
    """
    Encode the reserve ratio `amount1 / amount0` as a Q64.96 sqrt price.

    Uses integer square root: `floor(sqrt(amount1 * 2**192 / amount0))`.
    """
    for name, v in (("amount1", amount1), ("amount0", amount0)):
        require_uint(name, v)
        if v == 0:
            raise ValueError(f"{name} must be positive")
    sqrt_price = math.isqrt((amount1 << (2 * RESOLUTION)) // amount0)
    if sqrt_price == 0:
        raise PriceOutOfBoundsError("ratio too small to encode as a sqrt price")
    return to_uint160(sqrt_price)
