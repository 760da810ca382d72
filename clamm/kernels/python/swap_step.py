"""
Swap-step kernel for a single liquidity segment.

Given the current sqrt price, the bound the step may not cross, the active
liquidity, the requested amount and the fee rate, compute the next sqrt price
and the (amount_in, amount_out, fee_amount) of this one step.

Rounding always favors the pool:
- required inputs round UP,
- promised outputs round DOWN,
- fees round UP.

The kernel is a pure function: no state between calls, no I/O. Walking a swap
across several bounds is the caller's job (each call's current price is the
previous call's next price).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .constants import MAX_INT256, MIN_INT256, PIPS_DENOMINATOR
from .full_math import Rounding, mul_div, require_uint
from .sqrt_price_math import (
    get_amount0_delta,
    get_amount1_delta,
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
    require_sqrt_price,
)


@dataclass(frozen=True)
class ExactIn:
    """Deliver exactly `amount` (fee included) into the pool."""

    amount: int

    def __post_init__(self) -> None:
        require_uint("amount", self.amount)


@dataclass(frozen=True)
class ExactOut:
    """Extract exactly `amount` from the pool."""

    amount: int

    def __post_init__(self) -> None:
        require_uint("amount", self.amount)


AmountSpec = Union[ExactIn, ExactOut]


def amount_spec_from_signed(amount_remaining: int) -> AmountSpec:
    """
    Convert the signed int256 convention (>= 0 exact-in, < 0 exact-out).

    This is the only place where the sign of an amount selects the swap mode.
    """
    if not isinstance(amount_remaining, int) or isinstance(amount_remaining, bool):
        raise TypeError("amount_remaining must be an int")
    if not (MIN_INT256 <= amount_remaining <= MAX_INT256):
        raise ValueError(f"amount_remaining must fit in int256: {amount_remaining}")
    if amount_remaining >= 0:
        return ExactIn(amount_remaining)
    return ExactOut(-amount_remaining)


def is_falling_price(sqrt_price_current_x96: int, sqrt_price_target_x96: int) -> bool:
    """True when the step moves price down, i.e. token0 in and token1 out (zeroForOne)."""
    return sqrt_price_current_x96 >= sqrt_price_target_x96


@dataclass(frozen=True)
class SwapStepRequest:
    sqrt_price_current_x96: int
    sqrt_price_target_x96: int
    liquidity: int
    amount: AmountSpec
    fee_pips: int

    def __post_init__(self) -> None:
        require_sqrt_price("sqrt_price_current_x96", self.sqrt_price_current_x96)
        require_sqrt_price("sqrt_price_target_x96", self.sqrt_price_target_x96)
        require_uint("liquidity", self.liquidity, 128)
        if self.liquidity == 0:
            raise ValueError("liquidity must be positive")
        if not isinstance(self.amount, (ExactIn, ExactOut)):
            raise TypeError("amount must be ExactIn or ExactOut")
        require_uint("fee_pips", self.fee_pips)
        if self.fee_pips >= PIPS_DENOMINATOR:
            raise ValueError(f"fee_pips must be in [0, {PIPS_DENOMINATOR}): {self.fee_pips}")

    @property
    def falling_price(self) -> bool:
        return is_falling_price(self.sqrt_price_current_x96, self.sqrt_price_target_x96)

    @property
    def exact_in(self) -> bool:
        return isinstance(self.amount, ExactIn)


@dataclass(frozen=True)
class SwapStepResult:
    sqrt_price_next_x96: int
    amount_in: int
    amount_out: int
    fee_amount: int
    falling_price: bool
    exact_in: bool
    reached_target: bool

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """(next sqrt price, amount in, amount out, fee amount)."""
        return (self.sqrt_price_next_x96, self.amount_in, self.amount_out, self.fee_amount)


def _amount_in_delta(falling_price: bool, price_a: int, price_b: int, liquidity: int) -> int:
    # The input side is token0 when price falls and token1 when it rises; always rounded up.
    if falling_price:
        return get_amount0_delta(price_a, price_b, liquidity, True)
    return get_amount1_delta(price_a, price_b, liquidity, True)


def _amount_out_delta(falling_price: bool, price_a: int, price_b: int, liquidity: int) -> int:
    # Output side is the other token; always rounded down.
    if falling_price:
        return get_amount1_delta(price_a, price_b, liquidity, False)
    return get_amount0_delta(price_a, price_b, liquidity, False)


def compute_swap_step(request: SwapStepRequest) -> SwapStepResult:
    """
    Compute one bounded swap step.

    Raises:
        SwapMathError: if an intermediate result cannot be represented
    """
    current = request.sqrt_price_current_x96
    target = request.sqrt_price_target_x96
    liquidity = request.liquidity
    fee_pips = request.fee_pips
    falling_price = request.falling_price
    exact_in = request.exact_in
    requested = request.amount.amount

    amount_in = 0
    amount_out = 0

    if exact_in:
        net_amount = mul_div(requested, PIPS_DENOMINATOR - fee_pips, PIPS_DENOMINATOR, Rounding.DOWN)
        amount_in = _amount_in_delta(falling_price, target, current, liquidity)
        if net_amount >= amount_in:
            sqrt_price_next = target
        else:
            sqrt_price_next = get_next_sqrt_price_from_input(current, liquidity, net_amount, falling_price)
    else:
        amount_out = _amount_out_delta(falling_price, target, current, liquidity)
        if requested >= amount_out:
            sqrt_price_next = target
        else:
            sqrt_price_next = get_next_sqrt_price_from_output(current, liquidity, requested, falling_price)

    reached_target = sqrt_price_next == target

    # Amounts from the actual next price. When the target was reached, the
    # provisional amount on the fixed side is already exact.
    if not (reached_target and exact_in):
        amount_in = _amount_in_delta(falling_price, sqrt_price_next, current, liquidity)
    if not (reached_target and not exact_in):
        amount_out = _amount_out_delta(falling_price, sqrt_price_next, current, liquidity)

    if not exact_in and amount_out > requested:
        amount_out = requested

    if exact_in and not reached_target:
        # The step consumed the whole request: everything not used as input is fee.
        fee_amount = requested - amount_in
    else:
        fee_amount = mul_div(amount_in, fee_pips, PIPS_DENOMINATOR - fee_pips, Rounding.UP)

    return SwapStepResult(
        sqrt_price_next_x96=sqrt_price_next,
        amount_in=amount_in,
        amount_out=amount_out,
        fee_amount=fee_amount,
        falling_price=falling_price,
        exact_in=exact_in,
        reached_target=reached_target,
    )
