"""Curve sampling: from an equation and a domain to a renderable point set.

Purpose
-------
``sample`` is the engine behind the plotter. It validates the equation,
sweeps the independent variable across the domain, evaluates the formula at
each sample and collects every finite value into a ``PointSet``. It never
raises for user input; every failure mode is reported as an
``EvaluationOutcome`` tag.

Concepts and structure
----------------------
1. Blank formula -> ``EMPTY_EXPRESSION``.
2. Bare self-reference (``y = y + 1``) -> ``SELF_REFERENTIAL``.
3. Parse failure -> ``SYNTAX_OR_RUNTIME_ERROR``.
4. Step selection (``choose_step``): ``(end - start) / 200`` normally; a
   unit step when the formula calls ``pow`` on a negative literal base, which
   keeps fractional-power branching cheap and lands on integer inputs.
5. Sweep (``sweep_values``): samples ``start + i * step`` up to and including
   ``end``; clamped to ``SamplerConfig.max_samples``.
6. Per-sample failures (domain errors, division by zero, unknown names) only
   skip that sample. Non-finite values are dropped.
7. No points at all -> ``NO_VALID_POINTS``; otherwise ``POINTS``.

Logging
-------
This module uses the standard Python ``logging`` framework and installs a
``NullHandler``; enable output with, for example::

    import logging
    logging.getLogger("equation_plotter.sampler").setLevel(logging.DEBUG)

Examples
--------
>>> from equation_plotter import Domain, Equation, Orientation, sample
>>> outcome = sample(Equation(Orientation.Y_OF_X, "x^2"), Domain(-1, 1))
>>> outcome.ok, len(outcome.points)
(True, 201)
"""

from __future__ import annotations

import logging
import math
import re
from typing import List

import numpy as np

from .Equation import Domain, Equation, Orientation
from .EvaluationOutcome import EvaluationOutcome, OutcomeKind, PointSet
from .config import DEFAULT_CONFIG, SamplerConfig
from .expression import EvaluationError, ExpressionSyntaxError, function_table, parse_expression
from .validation import validate_self_reference

__all__ = ["choose_step", "sample", "sweep_values"]

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
# - Callers can enable logs via standard logging configuration.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

_NEGATIVE_POW_BASE = re.compile(r"pow\s*\(\s*-\d+")

# Absorbs rounding in (end - start) / step so the end point is not lost.
_ENDPOINT_SLACK = 1e-9


def choose_step(expression: str, domain: Domain, config: SamplerConfig = DEFAULT_CONFIG) -> float:
    """Return the sweep step for ``expression`` over ``domain``.

    The unit step applies whenever the text contains ``pow(`` followed by a
    negative integer literal, e.g. ``pow(-8, 1/x)``.
    """
    if _NEGATIVE_POW_BASE.search(expression):
        return float(config.unit_step)
    return domain.span / config.divisions


def sweep_values(domain: Domain, step: float, config: SamplerConfig = DEFAULT_CONFIG) -> np.ndarray:
    """Return the ascending sample values ``start, start + step, ..., <= end``.

    Returns an empty array when ``step <= 0``, when ``start > end`` or when a
    bound or the step is not finite. At most ``config.max_samples`` values
    are produced; a longer sweep is truncated and a warning is logged.
    """
    start, end = domain.start, domain.end
    if not (math.isfinite(start) and math.isfinite(end) and math.isfinite(step)):
        return np.empty(0, dtype=float)
    if step <= 0 or start > end:
        return np.empty(0, dtype=float)

    ratio = (end - start) / step
    if math.isfinite(ratio):
        count = math.floor(ratio + _ENDPOINT_SLACK) + 1
    else:
        count = config.max_samples + 1
    if count > config.max_samples:
        logger.warning(
            "Sweep over [%g, %g] with step %g needs %s samples; truncated to %d.",
            start,
            end,
            step,
            count if math.isfinite(ratio) else "unbounded",
            config.max_samples,
        )
        count = config.max_samples

    values = start + step * np.arange(count, dtype=float)
    return np.minimum(values, end)


def sample(
    equation: Equation,
    domain: Domain,
    *,
    config: SamplerConfig = DEFAULT_CONFIG,
) -> EvaluationOutcome:
    """Sample ``equation`` over ``domain``.

    Parameters
    ----------
    equation : Equation
        Orientation and formula text.
    domain : Domain
        Inclusive range of the independent variable.
    config : SamplerConfig, optional
        Step and sample-count limits.

    Returns
    -------
    EvaluationOutcome
        ``POINTS`` with the collected ``PointSet``, or one of the failure
        tags with an empty point set.
    """
    if equation.is_blank:
        return EvaluationOutcome.failure(OutcomeKind.EMPTY_EXPRESSION)

    orientation = equation.orientation
    if not validate_self_reference(equation.expression, orientation.dependent):
        return EvaluationOutcome.failure(
            OutcomeKind.SELF_REFERENTIAL,
            detail=f"'{orientation.dependent}' appears as a bare term",
        )

    try:
        parsed = parse_expression(equation.expression)
        functions = function_table(
            max_denominator=config.max_denominator,
            tolerance=config.tolerance,
        )
        step = choose_step(equation.expression, domain, config)
        samples = sweep_values(domain, step, config)
    except ExpressionSyntaxError as exc:
        logger.debug("Rejected formula %r: %s", equation.expression, exc)
        return EvaluationOutcome.failure(OutcomeKind.SYNTAX_OR_RUNTIME_ERROR, detail=str(exc))
    except Exception as exc:
        logger.warning("Could not prepare formula %r for sampling", equation.expression, exc_info=True)
        return EvaluationOutcome.failure(
            OutcomeKind.SYNTAX_OR_RUNTIME_ERROR,
            detail=f"{type(exc).__name__}: {exc}",
        )

    logger.debug(
        "Sampling %s over [%g, %g]: step=%g samples=%d",
        equation.label,
        domain.start,
        domain.end,
        step,
        samples.size,
    )

    independent = orientation.independent
    xs: List[float] = []
    ys: List[float] = []
    skipped = 0
    first_skip = ""
    for value in samples.tolist():
        try:
            candidates = parsed.evaluate({independent: value}, functions)
        except EvaluationError as exc:
            skipped += 1
            if not first_skip:
                first_skip = f"{independent}={value:g}: {exc}"
            continue
        for candidate in candidates:
            if not math.isfinite(candidate):
                continue
            if orientation is Orientation.Y_OF_X:
                xs.append(value)
                ys.append(candidate)
            else:
                xs.append(candidate)
                ys.append(value)

    if skipped:
        logger.debug("Skipped %d of %d samples (first: %s)", skipped, samples.size, first_skip)

    if not xs:
        return EvaluationOutcome.failure(
            OutcomeKind.NO_VALID_POINTS,
            detail=first_skip or "every sample was undefined or non-finite",
        )
    return EvaluationOutcome(kind=OutcomeKind.POINTS, points=PointSet(xs=xs, ys=ys))
