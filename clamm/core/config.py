"""Runtime configuration for the checked swap-step facade."""

from __future__ import annotations

import os
from dataclasses import dataclass

ENV_VERIFY_POSTCONDITIONS = "CLAMM_VERIFY_POSTCONDITIONS"


def _bool_env(name: str, *, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return bool(default)
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return bool(default)


@dataclass(frozen=True)
class SwapStepConfig:
    """
    Runtime config for `clamm.core.swap_math`.

    Protocol constants (fee denominator, Q96 scale) are not configurable; see
    `clamm.kernels.python.constants`.
    """

    verify_postconditions: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.verify_postconditions, bool):
            raise TypeError("verify_postconditions must be a bool")

    @classmethod
    def from_env(cls) -> "SwapStepConfig":
        return cls(verify_postconditions=_bool_env(ENV_VERIFY_POSTCONDITIONS, default=True))
