"""Post-condition checkers for a single swap step.

Each function returns True when the invariant holds for a (request, result)
pair, and `check_all()` returns the list of violated invariant IDs
(empty = all pass).
"""

from __future__ import annotations

from typing import Callable

from ..kernels.python.constants import PIPS_DENOMINATOR
from ..kernels.python.full_math import mul_div_rounding_up
from ..kernels.python.swap_step import SwapStepRequest, SwapStepResult


def inv_price_within_bounds(req: SwapStepRequest, res: SwapStepResult) -> bool:
    lo = min(req.sqrt_price_current_x96, req.sqrt_price_target_x96)
    hi = max(req.sqrt_price_current_x96, req.sqrt_price_target_x96)
    return lo <= res.sqrt_price_next_x96 <= hi


def inv_direction_consistent(req: SwapStepRequest, res: SwapStepResult) -> bool:
    if res.falling_price != req.falling_price or res.exact_in != req.exact_in:
        return False
    if res.falling_price:
        return res.sqrt_price_next_x96 <= req.sqrt_price_current_x96
    return res.sqrt_price_next_x96 >= req.sqrt_price_current_x96


def inv_reached_flag_consistent(req: SwapStepRequest, res: SwapStepResult) -> bool:
    return res.reached_target == (res.sqrt_price_next_x96 == req.sqrt_price_target_x96)


def inv_amounts_nonneg(req: SwapStepRequest, res: SwapStepResult) -> bool:
    return res.amount_in >= 0 and res.amount_out >= 0 and res.fee_amount >= 0


def inv_exact_out_capped(req: SwapStepRequest, res: SwapStepResult) -> bool:
    if req.exact_in:
        return True
    return res.amount_out <= req.amount.amount


def inv_exact_in_within_budget(req: SwapStepRequest, res: SwapStepResult) -> bool:
    if not req.exact_in:
        return True
    return res.amount_in + res.fee_amount <= req.amount.amount


def inv_partial_exact_in_consumes_request(req: SwapStepRequest, res: SwapStepResult) -> bool:
    if not req.exact_in or res.reached_target:
        return True
    return res.amount_in + res.fee_amount == req.amount.amount


def inv_fee_rounds_up(req: SwapStepRequest, res: SwapStepResult) -> bool:
    if req.exact_in and not res.reached_target:
        # Remainder rule; covered by inv_partial_exact_in_consumes_request.
        return True
    expected = mul_div_rounding_up(res.amount_in, req.fee_pips, PIPS_DENOMINATOR - req.fee_pips)
    return res.fee_amount == expected


def inv_no_movement_no_amounts(req: SwapStepRequest, res: SwapStepResult) -> bool:
    if res.sqrt_price_next_x96 != req.sqrt_price_current_x96:
        return True
    return res.amount_in == 0 and res.amount_out == 0


# ---------------------------------------------------------------------------
# Registry + check_all
# ---------------------------------------------------------------------------

INVARIANT_REGISTRY: dict[str, Callable[[SwapStepRequest, SwapStepResult], bool]] = {
    "inv_price_within_bounds": inv_price_within_bounds,
    "inv_direction_consistent": inv_direction_consistent,
    "inv_reached_flag_consistent": inv_reached_flag_consistent,
    "inv_amounts_nonneg": inv_amounts_nonneg,
    "inv_exact_out_capped": inv_exact_out_capped,
    "inv_exact_in_within_budget": inv_exact_in_within_budget,
    "inv_partial_exact_in_consumes_request": inv_partial_exact_in_consumes_request,
    "inv_fee_rounds_up": inv_fee_rounds_up,
    "inv_no_movement_no_amounts": inv_no_movement_no_amounts,
}


def check_all(request: SwapStepRequest, result: SwapStepResult) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(request, result)
    ]
