# [TESTER] v1

from __future__ import annotations

import logging
from dataclasses import replace

import pytest

from clamm.core import swap_math
from clamm.core.config import ENV_VERIFY_POSTCONDITIONS, SwapStepConfig
from clamm.core.swap_math import compute_swap_step, compute_swap_step_signed, quote_swap_step
from clamm.kernels.python.constants import Q96
from clamm.kernels.python.errors import SwapStepInvariantError
from clamm.kernels.python.swap_step import ExactIn, ExactOut, SwapStepRequest
from clamm.kernels.python.swap_step import compute_swap_step as kernel_compute_swap_step

L = 1_000_000


def test_facade_matches_kernel() -> None:
    req = SwapStepRequest(
        sqrt_price_current_x96=2 * Q96,
        sqrt_price_target_x96=Q96,
        liquidity=L,
        amount=ExactOut(500_000),
        fee_pips=3000,
    )
    assert quote_swap_step(req) == kernel_compute_swap_step(req)
    assert compute_swap_step(2 * Q96, Q96, L, ExactOut(500_000), 3000) == kernel_compute_swap_step(req)


def test_signed_entry_point_exact_in() -> None:
    assert compute_swap_step_signed(Q96, 2 * Q96, L, 2_000_000, 3000) == (2 * Q96, 1_000_000, 500_000, 3010)


def test_signed_entry_point_exact_out() -> None:
    # Oversized exact-out: stops at the target, pays the exact maximum, fee on the resulting input.
    assert compute_swap_step_signed(2 * Q96, Q96, L, -2_000_000, 3000) == (Q96, 500_000, 1_000_000, 1505)


def test_zero_liquidity_is_rejected() -> None:
    with pytest.raises(ValueError, match="liquidity"):
        compute_swap_step(Q96, 2 * Q96, 0, ExactIn(1), 3000)


def test_full_fee_rate_is_rejected() -> None:
    with pytest.raises(ValueError, match="fee_pips"):
        compute_swap_step_signed(Q96, 2 * Q96, L, 1, 1_000_000)


def test_postcondition_failure_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ENV_VERIFY_POSTCONDITIONS, raising=False)

    def bad_kernel(request: SwapStepRequest):
        good = kernel_compute_swap_step(request)
        return replace(good, amount_out=good.amount_out + 1)

    monkeypatch.setattr(swap_math, "_kernel_compute_swap_step", bad_kernel)

    with pytest.raises(SwapStepInvariantError) as excinfo:
        compute_swap_step(2 * Q96, Q96, L, ExactOut(500_000), 3000)
    assert "inv_exact_out_capped" in excinfo.value.violations

    # Verification can be switched off.
    res = compute_swap_step(
        2 * Q96, Q96, L, ExactOut(500_000), 3000, config=SwapStepConfig(verify_postconditions=False)
    )
    assert res.amount_out == 500_001


def test_env_switch_disables_postconditions(monkeypatch: pytest.MonkeyPatch) -> None:
    def over_delivering_kernel(request: SwapStepRequest):
        good = kernel_compute_swap_step(request)
        return replace(good, amount_out=good.amount_out + 1)

    monkeypatch.setattr(swap_math, "_kernel_compute_swap_step", over_delivering_kernel)
    monkeypatch.setenv(ENV_VERIFY_POSTCONDITIONS, "0")

    res = compute_swap_step(2 * Q96, Q96, L, ExactOut(500_000), 3000)
    assert res.amount_out == 500_001

    # An explicit config wins over the environment.
    with pytest.raises(SwapStepInvariantError):
        compute_swap_step(2 * Q96, Q96, L, ExactOut(500_000), 3000, config=SwapStepConfig())


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ENV_VERIFY_POSTCONDITIONS, raising=False)
    assert SwapStepConfig.from_env().verify_postconditions is True
    monkeypatch.setenv(ENV_VERIFY_POSTCONDITIONS, "off")
    assert SwapStepConfig.from_env().verify_postconditions is False
    monkeypatch.setenv(ENV_VERIFY_POSTCONDITIONS, "nonsense")
    assert SwapStepConfig.from_env().verify_postconditions is True


def test_config_rejects_non_bool() -> None:
    with pytest.raises(TypeError):
        SwapStepConfig(verify_postconditions=1)  # type: ignore[arg-type]


def test_steps_are_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="clamm.core.swap_math"):
        compute_swap_step(Q96, 2 * Q96, L, ExactIn(500_000), 0)
    assert any("swap step" in r.getMessage() for r in caplog.records)


def test_walking_two_segments_chains_prices() -> None:
    # The caller serializes steps: the second step starts where the first ended.
    first = compute_swap_step(Q96, 2 * Q96, L, ExactIn(1_500_000), 0)
    assert first.reached_target
    remaining = 1_500_000 - first.amount_in - first.fee_amount
    second = compute_swap_step(first.sqrt_price_next_x96, 3 * Q96, 2 * L, ExactIn(remaining), 0)
    assert not second.reached_target
    assert second.amount_in == remaining
    assert 2 * Q96 < second.sqrt_price_next_x96 < 3 * Q96
