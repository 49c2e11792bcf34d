"""Shallow textual guard against self-referential equations.

``y = y + 1`` cannot be sampled: the sampler evaluates the right-hand side
for values of the independent variable only. ``validate_self_reference``
rejects formulas in which the dependent variable appears as a bare term.

This is a syntactic check, not a solver. Identifiers other than ``x`` and
``y`` are replaced by a neutral placeholder, the text is split on
``+ - * / ( )`` and a bare token equal to the dependent name fails the check.
Terms such as ``y^2`` or ``2y`` survive the split and are not caught; they
are left for the evaluator, where the unknown name yields no points.
"""

from __future__ import annotations

import re

__all__ = ["validate_self_reference"]

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_TERM_SEPARATORS = re.compile(r"[+\-*/()]")
_VARIABLE_NAMES = ("x", "y")


def _mask_identifiers(expression: str) -> str:
    """Replace every identifier except the axis names with ``1``."""
    return _IDENTIFIER.sub(
        lambda match: match.group(0) if match.group(0) in _VARIABLE_NAMES else "1",
        expression,
    )


def validate_self_reference(expression: str, dependent: str) -> bool:
    """Return ``True`` when ``expression`` does not reference ``dependent`` bare.

    Parameters
    ----------
    expression : str
        Right-hand side as typed by the user.
    dependent : str
        Name of the dependent variable (``"y"`` for ``y = f(x)``).

    Examples
    --------
    >>> validate_self_reference("y + 1", "y")
    False
    >>> validate_self_reference("sin(x)", "y")
    True
    """
    masked = _mask_identifiers(expression)
    if dependent not in masked:
        return True
    terms = _TERM_SEPARATORS.split(masked)
    return not any(term.strip() == dependent for term in terms)
