from __future__ import annotations

import math

import pytest

from equation_plotter.power_resolver import rational_approximation, resolve_power


@pytest.mark.parametrize("base", [0.0, 5.0, -3.0, -0.5, 1e300])
def test_zero_exponent_is_one_for_every_base(base: float) -> None:
    assert resolve_power(base, 0) == (1.0,)


def test_zero_base() -> None:
    assert resolve_power(0, -1) == ()
    assert resolve_power(0, -0.5) == ()
    assert resolve_power(0, 2) == (0.0,)


def test_positive_base_uses_real_power() -> None:
    assert resolve_power(2, 3) == (8.0,)
    assert resolve_power(9, 0.5) == (3.0,)
    assert resolve_power(4, -1) == pytest.approx((0.25,))


def test_negative_base_integer_exponent_keeps_sign() -> None:
    assert resolve_power(-2, 3) == (-8.0,)
    assert resolve_power(-2, 2) == (4.0,)
    assert resolve_power(-2, -1) == (-0.5,)


def test_negative_base_odd_root_is_single_negative_value() -> None:
    assert resolve_power(-8, 1 / 3) == pytest.approx((-2.0,))
    assert resolve_power(-32, 0.2) == pytest.approx((-2.0,))


def test_negative_base_even_root_with_odd_numerator_has_both_branches() -> None:
    assert resolve_power(-4, 1 / 2) == (2.0, -2.0)
    assert resolve_power(-16, 0.25) == pytest.approx((2.0, -2.0))
    assert resolve_power(-4, 1.5) == pytest.approx((8.0, -8.0))


def test_positive_branch_comes_first() -> None:
    values = resolve_power(-9, 0.5)
    assert values[0] > 0 > values[1]


def test_irrational_exponent_of_negative_base_is_undefined() -> None:
    assert resolve_power(-2, math.pi) == ()
    assert resolve_power(-2, math.sqrt(2)) == ()


def test_non_finite_inputs() -> None:
    assert resolve_power(float("nan"), 2) == ()
    assert resolve_power(-2, float("nan")) == ()
    assert resolve_power(-2, float("inf")) == ()


def test_overflow_yields_no_value() -> None:
    assert resolve_power(10, 400) == ()
    assert resolve_power(-10, 401) == ()


def test_custom_denominator_limit() -> None:
    assert resolve_power(-8, 1 / 3, max_denominator=2) == ()


def test_rational_approximation_reduces_fraction() -> None:
    assert rational_approximation(0.75) == (3, 4)
    assert rational_approximation(-0.5) == (-1, 2)
    assert rational_approximation(2.0) == (2, 1)
    assert rational_approximation(0.5, max_denominator=100) == (1, 2)


def test_rational_approximation_gives_up() -> None:
    assert rational_approximation(math.pi) is None
    assert rational_approximation(355 / 113) is None
    assert rational_approximation(355 / 113, max_denominator=113) == (355, 113)
    assert rational_approximation(float("inf")) is None
