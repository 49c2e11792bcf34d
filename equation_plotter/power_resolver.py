"""Real-valued exponentiation with explicit branch sets.

Purpose
-------
``resolve_power`` returns every real value of ``base ** exponent`` that the
usual real-root conventions admit. A plain ``float`` power of a negative base
with a fractional exponent is either an error or a complex number in Python,
which would silently drop legitimate branches of a curve such as the cube
root of a negative number or both square-root branches of ``(-x) ** (1/2)``.

Branch rules
------------
For a negative base the exponent is approximated by a reduced fraction
``p/q`` (denominators ``1..100``):

- odd ``q``: the single real root is negative;
- even ``q`` with odd ``p``: both ``+m`` and ``-m`` are returned, positive
  first;
- even ``q`` with even ``p``: only ``+m``.

Irrational-looking exponents of negative bases have no real value and yield
an empty tuple, and so does a result too large to represent as a float.

Examples
--------
>>> resolve_power(-8, 1 / 3)
(-2.0,)
>>> resolve_power(-4, 0.5)
(2.0, -2.0)
>>> resolve_power(0, 0)
(1.0,)
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

MAX_DENOMINATOR = 100
RATIONAL_TOLERANCE = 1e-10

__all__ = [
    "MAX_DENOMINATOR",
    "RATIONAL_TOLERANCE",
    "rational_approximation",
    "resolve_power",
]


def _real_pow(base: float, exponent: float) -> Optional[float]:
    """``math.pow`` returning ``None`` instead of raising on overflow."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return None


def rational_approximation(
    value: float,
    max_denominator: int = MAX_DENOMINATOR,
    tolerance: float = RATIONAL_TOLERANCE,
) -> Optional[Tuple[int, int]]:
    """Return ``(numerator, denominator)`` in lowest terms, or ``None``.

    Denominators are scanned in increasing order and the first one whose
    rounded numerator reproduces ``value`` within ``tolerance`` wins.
    """
    if not math.isfinite(value):
        return None
    for denominator in range(1, int(max_denominator) + 1):
        numerator = round(value * denominator)
        if abs(numerator / denominator - value) < tolerance:
            divisor = math.gcd(abs(numerator), denominator)
            return numerator // divisor, denominator // divisor
    return None


def resolve_power(
    base: float,
    exponent: float,
    *,
    max_denominator: int = MAX_DENOMINATOR,
    tolerance: float = RATIONAL_TOLERANCE,
) -> Tuple[float, ...]:
    """Return the real values of ``base ** exponent`` (zero, one or two).

    Parameters
    ----------
    base, exponent : float
        Real operands.
    max_denominator : int, optional
        Largest denominator tried when a negative base needs a rational
        exponent.
    tolerance : float, optional
        Acceptance tolerance of the rational approximation.

    Returns
    -------
    tuple[float, ...]
        Ordered results; empty when no real value exists.
    """
    base = float(base)
    exponent = float(exponent)

    if exponent == 0:
        return (1.0,)
    if math.isnan(base) or math.isnan(exponent):
        return ()

    if base == 0:
        if exponent < 0:
            return ()
        return (0.0,)

    if base > 0 or exponent.is_integer():
        value = _real_pow(base, exponent)
        return () if value is None else (value,)

    fraction = rational_approximation(exponent, max_denominator, tolerance)
    if fraction is None:
        return ()
    numerator, denominator = fraction

    magnitude = _real_pow(-base, exponent)
    if magnitude is None:
        return ()
    if denominator % 2 == 1:
        return (-magnitude,)
    if numerator % 2 == 1:
        return (magnitude, -magnitude)
    return (magnitude,)
