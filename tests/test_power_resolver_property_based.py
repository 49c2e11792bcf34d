"""Property-based checks of the real-branch rules of ``resolve_power``."""

from __future__ import annotations

import math

import pytest

from equation_plotter.power_resolver import resolve_power

try:
    from hypothesis import given
    from hypothesis import strategies as st
except ModuleNotFoundError:  # pragma: no cover - environment-specific fallback
    pytest.skip("hypothesis is required for property-based tests", allow_module_level=True)


FINITE_FLOATS = st.floats(allow_nan=False, allow_infinity=False, width=64)
NEGATIVE_BASES = st.floats(min_value=-1e3, max_value=-1e-3, allow_nan=False)
POSITIVE_BASES = st.floats(min_value=1e-3, max_value=1e3, allow_nan=False)
MODERATE_EXPONENTS = st.floats(min_value=-5.0, max_value=5.0, allow_nan=False)
ODD_INTEGERS = st.integers(min_value=-7, max_value=7).map(lambda k: 2 * k + 1)
ODD_DENOMINATORS = st.integers(min_value=1, max_value=49).map(lambda k: 2 * k + 1)


@given(base=FINITE_FLOATS)
def test_zero_exponent_always_resolves_to_one(base: float) -> None:
    assert resolve_power(base, 0.0) == (1.0,)


@given(base=FINITE_FLOATS, exponent=FINITE_FLOATS)
def test_at_most_two_finite_or_infinite_values(base: float, exponent: float) -> None:
    values = resolve_power(base, exponent)
    assert len(values) <= 2
    assert not any(math.isnan(value) for value in values)


@given(base=POSITIVE_BASES, exponent=MODERATE_EXPONENTS)
def test_positive_base_matches_real_power(base: float, exponent: float) -> None:
    assert resolve_power(base, exponent) == pytest.approx((base**exponent,))


@given(base=NEGATIVE_BASES, exponent=ODD_INTEGERS)
def test_negative_base_odd_integer_exponent_is_negative(base: float, exponent: int) -> None:
    values = resolve_power(base, exponent)
    assert len(values) == 1
    assert values[0] < 0
    assert values[0] == pytest.approx(base**exponent, rel=1e-12)


@given(base=NEGATIVE_BASES, denominator=ODD_DENOMINATORS)
def test_negative_base_odd_root_is_negative_real_root(base: float, denominator: int) -> None:
    values = resolve_power(base, 1.0 / denominator)
    assert len(values) == 1
    assert values[0] == pytest.approx(-(abs(base) ** (1.0 / denominator)))


@given(base=NEGATIVE_BASES)
def test_negative_base_square_root_has_symmetric_branches(base: float) -> None:
    positive, negative = resolve_power(base, 0.5)
    assert positive == -negative
    assert positive == pytest.approx(math.sqrt(-base))
