# [TESTER] v1

from __future__ import annotations

import pytest

from clamm.kernels.python.constants import Q96
from clamm.kernels.python.errors import PriceOutOfBoundsError
from clamm.kernels.python.sqrt_price_math import (
    encode_sqrt_price_x96,
    get_amount0_delta,
    get_amount0_delta_signed,
    get_amount1_delta,
    get_amount1_delta_signed,
    get_next_sqrt_price_from_amount0_rounding_up,
    get_next_sqrt_price_from_amount1_rounding_down,
    get_next_sqrt_price_from_input,
    get_next_sqrt_price_from_output,
)

E18 = 10**18
PRICE_1_1 = Q96
PRICE_121_100 = 87150978765690771352898345369  # floor(1.1 * 2**96)


def test_encode_sqrt_price() -> None:
    assert encode_sqrt_price_x96(1, 1) == Q96
    assert encode_sqrt_price_x96(4, 1) == 2 * Q96
    assert encode_sqrt_price_x96(1, 4) == Q96 // 2
    assert encode_sqrt_price_x96(121, 100) == PRICE_121_100
    with pytest.raises(ValueError):
        encode_sqrt_price_x96(0, 1)


def test_next_price_from_input_rejects_zero_price_and_liquidity() -> None:
    with pytest.raises(ValueError, match="positive"):
        get_next_sqrt_price_from_input(0, 1, 10**17, False)
    with pytest.raises(ValueError, match="liquidity"):
        get_next_sqrt_price_from_input(1, 0, 10**17, True)


def test_next_price_from_input_zero_amount_is_identity() -> None:
    assert get_next_sqrt_price_from_input(PRICE_1_1, E18 // 10, 0, True) == PRICE_1_1
    assert get_next_sqrt_price_from_input(PRICE_1_1, E18 // 10, 0, False) == PRICE_1_1


def test_next_price_from_input_token1() -> None:
    # p + amount / L, rounded down: 2**96 + floor(2**96 / 10)
    assert get_next_sqrt_price_from_input(PRICE_1_1, E18, E18 // 10, False) == 87150978765690771352898345369
    assert get_next_sqrt_price_from_input(Q96, 1_000_000, 500_000, False) == Q96 + Q96 // 2


def test_next_price_from_input_token0() -> None:
    # ceil(L * p / (L + amount * p)) = ceil(10 * 2**96 / 11)
    assert get_next_sqrt_price_from_input(PRICE_1_1, E18, E18 // 10, True) == 72025602285694852357767227579
    assert get_next_sqrt_price_from_input(2 * Q96, 1_000_000, 250_000, True) == (4 * Q96 + 2) // 3


def test_next_price_from_input_token0_uses_fallback_for_huge_amounts() -> None:
    # amount * p overflows 256 bits, so the L / (L / p + amount) form is used.
    price = 2 * Q96
    liquidity = 1
    amount = 1 << 200
    numerator1 = liquidity << 96
    expected = -(-numerator1 // (numerator1 // price + amount))
    assert get_next_sqrt_price_from_amount0_rounding_up(price, liquidity, amount, True) == expected


def test_next_price_from_output_token1() -> None:
    # p - ceil(amount / L)
    assert get_next_sqrt_price_from_output(PRICE_1_1, E18, E18 // 10, True) == 71305346262837903834189555302


def test_next_price_from_output_token0() -> None:
    # ceil(L * p / (L - amount * p)) = ceil(10 * 2**96 / 9)
    assert get_next_sqrt_price_from_output(PRICE_1_1, E18, E18 // 10, False) == 88031291682515930659493278152


def test_next_price_from_output_cannot_drain_token0_reserves() -> None:
    price = 1 << 104  # sqrt price 2**8
    with pytest.raises(PriceOutOfBoundsError):
        get_next_sqrt_price_from_output(price, 1024, 4, False)
    with pytest.raises(PriceOutOfBoundsError):
        get_next_sqrt_price_from_output(price, 1024, 5, False)


def test_next_price_from_output_cannot_drain_token1_reserves() -> None:
    price = 1 << 104
    with pytest.raises(PriceOutOfBoundsError):
        get_next_sqrt_price_from_output(price, 1024, 262144, True)
    assert get_next_sqrt_price_from_output(price, 1024, 262143, True) == 77371252455336267181195264


def test_amount1_price_update_overflowing_uint160_raises() -> None:
    with pytest.raises(PriceOutOfBoundsError):
        get_next_sqrt_price_from_amount1_rounding_down((1 << 160) - 1, 1, 1, True)


def test_amount0_delta() -> None:
    assert get_amount0_delta(PRICE_1_1, 2 * Q96, 0, True) == 0
    assert get_amount0_delta(PRICE_1_1, PRICE_1_1, E18, True) == 0
    assert get_amount0_delta(PRICE_1_1, PRICE_121_100, E18, True) == 90909090909090910
    assert get_amount0_delta(PRICE_1_1, PRICE_121_100, E18, False) == 90909090909090909
    # Order of the two prices does not matter.
    assert get_amount0_delta(PRICE_121_100, PRICE_1_1, E18, True) == 90909090909090910


def test_amount0_delta_requires_positive_prices() -> None:
    with pytest.raises(ValueError):
        get_amount0_delta(0, PRICE_1_1, E18, True)


def test_amount1_delta() -> None:
    assert get_amount1_delta(PRICE_1_1, 2 * Q96, 0, True) == 0
    assert get_amount1_delta(PRICE_1_1, PRICE_1_1, E18, False) == 0
    assert get_amount1_delta(PRICE_1_1, PRICE_121_100, E18, True) == 10**17
    assert get_amount1_delta(PRICE_1_1, PRICE_121_100, E18, False) == 10**17 - 1
    assert get_amount1_delta(PRICE_121_100, PRICE_1_1, E18, False) == 10**17 - 1


def test_signed_deltas_round_against_the_position() -> None:
    assert get_amount0_delta_signed(PRICE_1_1, PRICE_121_100, E18) == 90909090909090910
    assert get_amount0_delta_signed(PRICE_1_1, PRICE_121_100, -E18) == -90909090909090909
    assert get_amount1_delta_signed(PRICE_1_1, PRICE_121_100, E18) == 10**17
    assert get_amount1_delta_signed(PRICE_1_1, PRICE_121_100, -E18) == -(10**17 - 1)
    with pytest.raises(ValueError, match="int128"):
        get_amount1_delta_signed(PRICE_1_1, PRICE_121_100, 1 << 127)


def test_rejects_bool_flags() -> None:
    with pytest.raises(TypeError):
        get_amount1_delta(PRICE_1_1, PRICE_121_100, E18, 1)  # type: ignore[arg-type]
