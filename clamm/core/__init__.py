"""
Checked swap-step API (functional core).
"""

from .config import SwapStepConfig
from .invariants import INVARIANT_REGISTRY, check_all
from .swap_math import compute_swap_step, compute_swap_step_signed, quote_swap_step

__all__ = [
    "SwapStepConfig",
    "INVARIANT_REGISTRY",
    "check_all",
    "compute_swap_step",
    "compute_swap_step_signed",
    "quote_swap_step",
]
