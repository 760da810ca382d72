"""Exception types for the sqrt-price kernels.

Precondition failures (wrong type, out-of-range argument) are reported with the
builtin ``TypeError`` / ``ValueError``. The classes below are reserved for
*arithmetic infeasibility*, i.e. inputs that are individually well-formed but
whose exact result cannot be represented, and for post-condition failures.
"""

from __future__ import annotations


class SwapMathError(ArithmeticError):
    """Base class for arithmetic infeasibility in the swap kernels."""


class MulDivOverflowError(SwapMathError):
    """Raised when an exact quotient (or a cast) does not fit its integer width."""


class MathDivisionByZeroError(SwapMathError, ZeroDivisionError):
    """Raised when a full-precision division is asked to divide by zero."""


class PriceOutOfBoundsError(SwapMathError):
    """Raised when a price update would leave the representable sqrt-price range."""


class SwapStepInvariantError(Exception):
    """Raised when a computed swap step violates one or more post-conditions."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")
