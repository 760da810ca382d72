"""
clamm: single-step pricing kernel for concentrated-liquidity AMMs.

Integer-only, deterministic, rounding in favor of the pool.
"""

from .core import SwapStepConfig, check_all, compute_swap_step, compute_swap_step_signed, quote_swap_step
from .kernels.python.errors import (
    MathDivisionByZeroError,
    MulDivOverflowError,
    PriceOutOfBoundsError,
    SwapMathError,
    SwapStepInvariantError,
)
from .kernels.python.full_math import Rounding, mul_div, mul_div_rounding_up
from .kernels.python.swap_step import (
    AmountSpec,
    ExactIn,
    ExactOut,
    SwapStepRequest,
    SwapStepResult,
    amount_spec_from_signed,
    is_falling_price,
)

__version__ = "0.1.0"

__all__ = [
    "compute_swap_step",
    "compute_swap_step_signed",
    "quote_swap_step",
    "check_all",
    "SwapStepConfig",
    "AmountSpec",
    "ExactIn",
    "ExactOut",
    "SwapStepRequest",
    "SwapStepResult",
    "amount_spec_from_signed",
    "is_falling_price",
    "Rounding",
    "mul_div",
    "mul_div_rounding_up",
    "SwapMathError",
    "MulDivOverflowError",
    "MathDivisionByZeroError",
    "PriceOutOfBoundsError",
    "SwapStepInvariantError",
]
