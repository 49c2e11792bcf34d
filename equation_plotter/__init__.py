"""Top-level public API for the ``equation_plotter`` package.

This module re-exports the sampling engine and the notebook-facing
convenience surface so users can import from a single namespace, for example:

>>> from equation_plotter import Domain, Equation, Orientation, sample
>>> sample(Equation(Orientation.Y_OF_X, "pow(x, 1/3)"), Domain(-8, 8)).ok
True

The notebook widget is available as ``EquationPlotter``:

>>> from equation_plotter import EquationPlotter  # doctest: +SKIP
>>> EquationPlotter(expression="sin(x)")  # doctest: +SKIP
"""

from .config import DEFAULT_CONFIG, DEFAULT_DOMAIN, DEFAULT_EXPRESSION, SamplerConfig
from .Equation import Domain, Equation, Orientation
from .EquationPlotter import EquationPlotter
from .EvaluationOutcome import OUTCOME_MESSAGES, EvaluationOutcome, OutcomeKind, PointSet
from .expression import (
    EvaluationError,
    ExpressionError,
    ExpressionSyntaxError,
    ParsedExpression,
    parse_expression,
)
from .figure_plot import apply_outcome, build_figure, plot_equation
from .InputConvert import InputConvert
from .power_resolver import rational_approximation, resolve_power
from .sampler import choose_step, sample, sweep_values
from .validation import validate_self_reference

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_DOMAIN",
    "DEFAULT_EXPRESSION",
    "Domain",
    "Equation",
    "EquationPlotter",
    "EvaluationError",
    "EvaluationOutcome",
    "ExpressionError",
    "ExpressionSyntaxError",
    "InputConvert",
    "OUTCOME_MESSAGES",
    "Orientation",
    "OutcomeKind",
    "ParsedExpression",
    "PointSet",
    "SamplerConfig",
    "apply_outcome",
    "build_figure",
    "choose_step",
    "parse_expression",
    "plot_equation",
    "rational_approximation",
    "resolve_power",
    "sample",
    "sweep_values",
    "validate_self_reference",
]
