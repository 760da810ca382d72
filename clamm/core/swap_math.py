"""
Checked swap-step entry points.

Thin layer over `clamm.kernels.python.swap_step`:
- builds and validates the request (fail-closed preconditions),
- runs the kernel,
- verifies the post-conditions in `clamm.core.invariants` unless disabled.

The legacy signed-amount API (`amount_remaining >= 0` means exact-in) is kept
as `compute_swap_step_signed`; the sign is converted once, at the boundary.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..kernels.python.errors import SwapStepInvariantError
from ..kernels.python.swap_step import (
    AmountSpec,
    SwapStepRequest,
    SwapStepResult,
    amount_spec_from_signed,
)
from ..kernels.python.swap_step import compute_swap_step as _kernel_compute_swap_step
from .config import SwapStepConfig
from .invariants import check_all

logger = logging.getLogger(__name__)


def quote_swap_step(request: SwapStepRequest, *, config: Optional[SwapStepConfig] = None) -> SwapStepResult:
    """
    Run the kernel on a prebuilt request.

    Without an explicit `config` the settings come from the environment
    (`SwapStepConfig.from_env()`).

    Raises:
        SwapMathError: arithmetic infeasibility inside the kernel
        SwapStepInvariantError: a post-condition failed (only when verification is on)
    """
    cfg = config if config is not None else SwapStepConfig.from_env()
    result = _kernel_compute_swap_step(request)

    logger.debug(
        "swap step: current=%d target=%d liquidity=%d %s=%d fee_pips=%d -> next=%d in=%d out=%d fee=%d reached=%s",
        request.sqrt_price_current_x96,
        request.sqrt_price_target_x96,
        request.liquidity,
        "exact_in" if request.exact_in else "exact_out",
        request.amount.amount,
        request.fee_pips,
        result.sqrt_price_next_x96,
        result.amount_in,
        result.amount_out,
        result.fee_amount,
        result.reached_target,
    )

    if cfg.verify_postconditions:
        violations = check_all(request, result)
        if violations:
            logger.error("swap step violated post-conditions: %s (request=%r)", violations, request)
            raise SwapStepInvariantError(violations)

    return result


def compute_swap_step(
    sqrt_price_current_x96: int,
    sqrt_price_target_x96: int,
    liquidity: int,
    amount: AmountSpec,
    fee_pips: int,
    *,
    config: Optional[SwapStepConfig] = None,
) -> SwapStepResult:
    """
    Compute one bounded swap step.

    Args:
        sqrt_price_current_x96: Current Q64.96 sqrt price
        sqrt_price_target_x96: Price the step may not cross
        liquidity: Liquidity active in this segment (must be positive)
        amount: `ExactIn(n)` or `ExactOut(n)`
        fee_pips: Fee rate in pips, in [0, 1_000_000)

    Returns:
        SwapStepResult with the next price and (amount_in, amount_out, fee_amount)

    Raises:
        TypeError / ValueError: on invalid inputs
        SwapMathError: arithmetic infeasibility
        SwapStepInvariantError: a post-condition failed
    """
    request = SwapStepRequest(
        sqrt_price_current_x96=sqrt_price_current_x96,
        sqrt_price_target_x96=sqrt_price_target_x96,
        liquidity=liquidity,
        amount=amount,
        fee_pips=fee_pips,
    )
    return quote_swap_step(request, config=config)


def compute_swap_step_signed(
    sqrt_price_current_x96: int,
    sqrt_price_target_x96: int,
    liquidity: int,
    amount_remaining: int,
    fee_pips: int,
    *,
    config: Optional[SwapStepConfig] = None,
) -> Tuple[int, int, int, int]:
    """
    Signed-amount variant returning `(next_price, amount_in, amount_out, fee_amount)`.

    `amount_remaining >= 0` is an exact input, `< 0` an exact output of `-amount_remaining`.
    """
    amount = amount_spec_from_signed(amount_remaining)
    result = compute_swap_step(
        sqrt_price_current_x96,
        sqrt_price_target_x96,
        liquidity,
        amount,
        fee_pips,
        config=config,
    )
    return result.as_tuple()
