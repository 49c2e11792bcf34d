"""Plotly figures for sampled equations.

Purpose
-------
Turns an :class:`~equation_plotter.EvaluationOutcome.EvaluationOutcome` into
a single ``lines+markers`` scatter trace on the dark plotter layout. This is
the only place the package talks to Plotly; the sampler knows nothing about
rendering.

Important gotchas
-----------------
- A failed outcome still produces a figure (with an empty trace), so a
  caller that forces generation past an error gets an empty plot instead of
  an exception.
- ``apply_outcome`` updates the first trace of an existing figure in place;
  it works for both ``go.Figure`` and ``go.FigureWidget``.

Examples
--------
>>> from equation_plotter.figure_plot import plot_equation
>>> outcome, fig = plot_equation("sin(x)")  # doctest: +SKIP
>>> fig.show()  # doctest: +SKIP
"""

from __future__ import annotations

from typing import Any, Optional, Tuple, Union

import plotly.graph_objects as go

from .Equation import Domain, Equation, Orientation
from .EvaluationOutcome import EvaluationOutcome
from .config import DEFAULT_DOMAIN
from .expression import ExpressionError, parse_expression
from .plot_style import dark_layout, resolve_style_aliases, trace_style
from .sampler import sample

FigureLike = Union[go.Figure, go.FigureWidget]
RangeLike = Tuple[Any, Any]

__all__ = ["apply_outcome", "build_figure", "figure_title", "plot_equation"]


def figure_title(equation: Optional[Equation]) -> str:
    """Return a MathJax title such as ``$y = x^{2}$``.

    Falls back to the upper-cased header text when the formula does not parse.
    """
    if equation is None or equation.is_blank:
        return ""
    try:
        body = parse_expression(equation.expression).latex()
    except ExpressionError:
        return equation.label
    return f"${equation.orientation.dependent} = {body}$"


def build_figure(
    outcome: EvaluationOutcome,
    domain: Domain,
    equation: Optional[Equation] = None,
    *,
    color: Optional[str] = None,
    thickness: Optional[Union[int, float]] = None,
    width: Optional[Union[int, float]] = None,
    mode: Optional[str] = None,
    marker_size: Optional[Union[int, float]] = None,
    widget: bool = False,
) -> FigureLike:
    """Create a figure showing ``outcome`` over ``domain``.

    Parameters
    ----------
    outcome : EvaluationOutcome
        Result of :func:`equation_plotter.sampler.sample`.
    domain : Domain
        Used as both axis ranges.
    equation : Equation, optional
        When given, its LaTeX rendering becomes the figure title.
    color, thickness, width, mode, marker_size
        Trace style; see ``PLOT_STYLE_OPTIONS``.
    widget : bool, optional
        Return a ``go.FigureWidget`` (for notebooks) instead of ``go.Figure``.

    Returns
    -------
    plotly.graph_objects.Figure or plotly.graph_objects.FigureWidget
    """
    thickness = resolve_style_aliases(thickness=thickness, width=width)
    data = outcome.points.to_dict()
    trace = go.Scatter(
        x=data["x"],
        y=data["y"],
        **trace_style(color=color, thickness=thickness, mode=mode, marker_size=marker_size),
    )
    figure_cls = go.FigureWidget if widget else go.Figure
    fig = figure_cls(data=[trace])
    fig.update_layout(**dark_layout(domain, title=figure_title(equation)))
    return fig


def apply_outcome(
    fig: FigureLike,
    outcome: EvaluationOutcome,
    domain: Optional[Domain] = None,
    equation: Optional[Equation] = None,
) -> None:
    """Push ``outcome`` into the first trace of ``fig`` (adding one if missing).

    When ``domain`` is given both axis ranges are reset to it. When
    ``equation`` is given the title is refreshed.
    """
    data = outcome.points.to_dict()
    with fig.batch_update():
        if not fig.data:
            fig.add_trace(go.Scatter(x=[], y=[], **trace_style()))
        fig.data[0].x = data["x"]
        fig.data[0].y = data["y"]
        if domain is not None:
            fig.update_xaxes(range=[domain.start, domain.end])
            fig.update_yaxes(range=[domain.start, domain.end])
        if equation is not None:
            fig.update_layout(title=dict(text=figure_title(equation)))


def plot_equation(
    expression: str,
    orientation: Union[str, Orientation] = Orientation.Y_OF_X,
    domain: Optional[Union[Domain, RangeLike]] = None,
    **style: Any,
) -> Tuple[EvaluationOutcome, go.Figure]:
    """Sample ``expression`` and build its figure in one call.

    ``domain`` may be a :class:`Domain` or a ``(start, end)`` pair of numbers
    or formula text; it defaults to ``[-10, 10]``.
    """
    if domain is None:
        resolved = DEFAULT_DOMAIN
    elif isinstance(domain, Domain):
        resolved = domain
    else:
        resolved = Domain.from_values(domain[0], domain[1])
    equation = Equation(Orientation.from_name(orientation), expression)
    outcome = sample(equation, resolved)
    return outcome, build_figure(outcome, resolved, equation, **style)
