"""Notebook front end: type an equation, see its curve.

``EquationPlotter`` is an ``ipywidgets.VBox`` with two faces:

- the *form*: orientation (``y =`` or ``x =``), formula text, range mode
  (automatic or manual start/end), a help toggle, a live error banner and the
  Generate button;
- the *graph*: a Plotly ``FigureWidget`` with the sampled curve, the equation
  header and an Edit button that returns to the form.

All computation goes through :func:`equation_plotter.sampler.sample`; the
widget only holds the current field values and the last outcome.

Design notes
------------
- The error banner is recomputed on every edit, so Generate is refused while
  the equation is known to be invalid. Tick "Force" (or call
  ``generate(force=True)``) to show the graph anyway.
- Start/end accept formulas such as ``-2*pi``. If parsing fails, the field
  reverts to the previous committed value.
- In automatic range mode, panning the plot resamples over the visible x
  range (debounced).
"""

from __future__ import annotations

import html
import logging
from typing import Any, Optional, Sequence

import ipywidgets as widgets
import traitlets

from .Equation import Domain, Equation, Orientation
from .EvaluationOutcome import EvaluationOutcome, OutcomeKind
from .InputConvert import InputConvert
from .config import DEFAULT_CONFIG, DEFAULT_DOMAIN, DEFAULT_EXPRESSION, SamplerConfig
from .debouncing import Debouncer
from .figure_plot import apply_outcome, build_figure
from .plot_style import ACCENT_COLOR
from .sampler import sample

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

RANGE_MODES = (
    ("Automatically Generate Range Of Numbers", "auto"),
    ("Manually Decide Number Range", "manual"),
)

FORMULA_HELP_HTML = """
<div style="background:#333;color:#fff;padding:15px;border-radius:4px;">
  <h3>Available Functions and Constants:</h3>
  <ul>
    <li>Basic operators: +, -, *, /, ^</li>
    <li>Math functions: sin(), cos(), tan(), sqrt(), abs()</li>
    <li>Logarithms: log(x, base) - default base is e</li>
    <li>Power: pow(base, exponent)</li>
    <li>Constants: pi, e</li>
  </ul>
  <h3>Examples:</h3>
  <ul>
    <li>y = sin(x) * pow(2, x)</li>
    <li>x = log(y + 1, e)</li>
    <li>y = sqrt(abs(x)) * pi</li>
  </ul>
</div>
"""


def _error_html(message: str) -> str:
    if not message:
        return ""
    return (
        "<div style='color:#ff6b6b;background:rgba(255,107,107,0.1);"
        "padding:10px;border-radius:4px;text-align:center;'>"
        f"{html.escape(message)}</div>"
    )


class EquationPlotter(widgets.VBox):
    """Interactive equation plotter for notebooks.

    Parameters
    ----------
    expression : str, optional
        Initial formula (right-hand side).
    orientation : {"y", "x"} or Orientation, optional
        Left-hand side variable.
    domain : Domain or (start, end), optional
        Initial sweep range; also the axis range of the plot.
    range_mode : {"auto", "manual"}, optional
        ``"manual"`` shows the start/end fields; ``"auto"`` follows panning.
    config : SamplerConfig, optional
        Forwarded to :func:`sample`.
    relayout_delay_ms : int, optional
        Debounce delay for pan/zoom resampling.
    """

    expression = traitlets.Unicode(DEFAULT_EXPRESSION)
    orientation = traitlets.Unicode(Orientation.Y_OF_X.value)
    error_message = traitlets.Unicode("")
    show_graph = traitlets.Bool(False)

    def __init__(
        self,
        expression: str = DEFAULT_EXPRESSION,
        orientation: Any = Orientation.Y_OF_X,
        domain: Any = DEFAULT_DOMAIN,
        range_mode: str = "auto",
        config: SamplerConfig = DEFAULT_CONFIG,
        relayout_delay_ms: int = 300,
        **kwargs: Any,
    ) -> None:
        if range_mode not in ("auto", "manual"):
            raise ValueError("range_mode must be 'auto' or 'manual'")
        self._config = config
        self._domain = domain if isinstance(domain, Domain) else Domain.from_values(*domain)
        self._outcome: Optional[EvaluationOutcome] = None

        # Internal guard to prevent circular updates (figure -> fields -> figure -> ...)
        self._syncing = False

        # --- Form -------------------------------------------------------------
        self.header = widgets.HTML(
            f"<h1 style='color:{ACCENT_COLOR};margin:0;text-align:center;'>Equation Plotter</h1>"
        )
        self.orientation_select = widgets.Dropdown(
            options=[(member.value, member.value) for member in Orientation],
            value=Orientation.from_name(orientation).value,
            layout=widgets.Layout(width="60px"),
        )
        self.expression_input = widgets.Text(
            value=expression,
            placeholder="Enter equation (e.g., x^2, sin(x))",
            continuous_update=True,
            layout=widgets.Layout(width="100%"),
        )
        self.range_mode_select = widgets.Dropdown(
            options=list(RANGE_MODES),
            value=range_mode,
            layout=widgets.Layout(width="auto"),
        )
        self.start_input = widgets.Text(
            value=f"{self._domain.start:.4g}",
            placeholder="Start",
            continuous_update=False,
            layout=widgets.Layout(width="90px"),
        )
        self.end_input = widgets.Text(
            value=f"{self._domain.end:.4g}",
            placeholder="End",
            continuous_update=False,
            layout=widgets.Layout(width="90px"),
        )
        self.range_inputs = widgets.HBox(
            [self.start_input, self.end_input],
            layout=widgets.Layout(gap="6px", display="flex" if range_mode == "manual" else "none"),
        )
        self.error_banner = widgets.HTML("")

        self.btn_help = widgets.ToggleButton(
            value=False,
            description="?",
            tooltip="Show available functions",
            layout=widgets.Layout(width="36px"),
        )
        self.force_override = widgets.Checkbox(
            value=False,
            description="Force",
            indent=False,
            tooltip="Generate the graph even if the equation has an error",
            layout=widgets.Layout(width="80px"),
        )
        self.btn_generate = widgets.Button(
            description="Generate Graph",
            button_style="primary",
            tooltip="Generate Graph",
        )
        self.help_panel = widgets.HTML(FORMULA_HELP_HTML, layout=widgets.Layout(display="none"))

        self.form = widgets.VBox(
            [
                self.header,
                widgets.HBox(
                    [self.orientation_select, widgets.Label("="), self.expression_input],
                    layout=widgets.Layout(align_items="center", gap="6px"),
                ),
                widgets.HBox(
                    [self.range_mode_select, self.range_inputs],
                    layout=widgets.Layout(align_items="center", gap="6px"),
                ),
                self.error_banner,
                widgets.HBox(
                    [self.btn_help, self.force_override, self.btn_generate],
                    layout=widgets.Layout(justify_content="space-between", align_items="center"),
                ),
                self.help_panel,
            ],
            layout=widgets.Layout(padding="10px", border="1px solid #333"),
        )

        # --- Graph ------------------------------------------------------------
        self.figure_widget = build_figure(
            EvaluationOutcome.failure(OutcomeKind.EMPTY_EXPRESSION),
            self._domain,
            widget=True,
        )
        self.equation_header = widgets.HTML("")
        self.btn_edit = widgets.Button(description="Edit", button_style="primary")
        self.graph_view = widgets.VBox(
            [
                self.figure_widget,
                widgets.HBox(
                    [self.equation_header, self.btn_edit],
                    layout=widgets.Layout(justify_content="space-between", align_items="center"),
                ),
            ],
            layout=widgets.Layout(display="none"),
        )

        super().__init__([self.form, self.graph_view], **kwargs)

        # --- Wiring -----------------------------------------------------------
        traitlets.link((self, "expression"), (self.expression_input, "value"))
        traitlets.link((self, "orientation"), (self.orientation_select, "value"))
        self.observe(self._on_equation_change, names=["expression", "orientation"])
        self.observe(self._on_show_graph, names="show_graph")

        self.range_mode_select.observe(self._on_range_mode, names="value")
        self.start_input.observe(self._commit_start, names="value")
        self.end_input.observe(self._commit_end, names="value")

        self.btn_help.observe(self._toggle_help, names="value")
        self.btn_generate.on_click(self._on_generate_click)
        self.btn_edit.on_click(self._on_edit_click)

        self._relayout_debouncer = Debouncer(self._resample_to, delay_ms=relayout_delay_ms)
        self.figure_widget.layout.on_change(self._on_relayout, "xaxis.range")

        # Initialize traits from constructor arguments
        self.expression = expression
        self.orientation = Orientation.from_name(orientation).value
        self.refresh()

    # --- State ----------------------------------------------------------------

    @property
    def equation(self) -> Equation:
        """The equation currently typed in the form."""
        return Equation(Orientation.from_name(self.orientation), self.expression)

    @property
    def domain(self) -> Domain:
        return self._domain

    @property
    def outcome(self) -> Optional[EvaluationOutcome]:
        """Outcome of the most recent sampling of the current inputs."""
        return self._outcome

    @property
    def range_mode(self) -> str:
        return self.range_mode_select.value

    def set_domain(self, start: Any, end: Any) -> None:
        """Set the sweep range from numbers or formula text and resample."""
        self._domain = Domain.from_values(start, end)
        self._sync_bound_texts()
        self.refresh()

    def refresh(self) -> EvaluationOutcome:
        """Resample the current inputs and update the error banner (and graph)."""
        outcome = sample(self.equation, self._domain, config=self._config)
        self._outcome = outcome
        self.error_message = outcome.message
        self.error_banner.value = _error_html(outcome.message)
        if self.show_graph:
            self._push_to_figure(outcome)
        return outcome

    def generate(self, force: bool = False) -> bool:
        """Show the graph for the current equation.

        Returns ``False`` (and stays on the form) when the current equation
        has an error, unless ``force`` is true.
        """
        outcome = self.refresh()
        if not outcome.ok and not force:
            logger.info("Generate refused: %s", outcome.message)
            return False
        logger.info(
            "Generate %s over [%g, %g] (%r)",
            self.equation.label,
            self._domain.start,
            self._domain.end,
            outcome,
        )
        self._push_to_figure(outcome)
        self.equation_header.value = (
            f"<h2 style='margin:10px 0;'><code>{html.escape(self.equation.label)}</code></h2>"
        )
        self.show_graph = True
        return True

    def edit(self) -> None:
        """Return to the form."""
        self._relayout_debouncer.cancel()
        self.show_graph = False

    # --- Helpers --------------------------------------------------------------

    def _push_to_figure(self, outcome: EvaluationOutcome) -> None:
        self._syncing = True
        try:
            apply_outcome(self.figure_widget, outcome, self._domain, self.equation)
        finally:
            self._syncing = False

    def _sync_bound_texts(self) -> None:
        """Set the start/end fields from the domain, without triggering parse logic."""
        self._syncing = True
        try:
            self.start_input.value = f"{self._domain.start:.4g}"
            self.end_input.value = f"{self._domain.end:.4g}"
        finally:
            self._syncing = False

    def _commit_bound(self, change, *, bound: str) -> None:
        """Parse a start/end field; on failure revert to the previous value."""
        if self._syncing:
            return
        raw = (change.new or "").strip()
        try:
            value = float(InputConvert(raw, dest_type=float))
        except (ValueError, TypeError):
            self._sync_bound_texts()
            return
        if bound == "start":
            self._domain = Domain(value, self._domain.end)
        else:
            self._domain = Domain(self._domain.start, value)
        self.refresh()

    def _commit_start(self, change) -> None:
        self._commit_bound(change, bound="start")

    def _commit_end(self, change) -> None:
        self._commit_bound(change, bound="end")

    def _resample_to(self, x_range: Sequence[float]) -> None:
        """Adopt ``x_range`` as the new domain (automatic range mode only)."""
        if self.range_mode != "auto" or not self.show_graph:
            return
        try:
            new_domain = Domain.from_values(x_range[0], x_range[1])
        except (ValueError, TypeError, IndexError):
            return
        if new_domain == self._domain:
            return
        logger.info("Relayout resample to [%g, %g]", new_domain.start, new_domain.end)
        self._domain = new_domain
        self._sync_bound_texts()
        self.refresh()

    # --- Event handlers -------------------------------------------------------

    def _on_equation_change(self, change) -> None:
        self.refresh()

    def _on_show_graph(self, change) -> None:
        self.form.layout.display = "none" if change.new else "flex"
        self.graph_view.layout.display = "flex" if change.new else "none"

    def _on_range_mode(self, change) -> None:
        self.range_inputs.layout.display = "flex" if change.new == "manual" else "none"

    def _toggle_help(self, change) -> None:
        self.help_panel.layout.display = "flex" if change.new else "none"
        self.btn_help.tooltip = "Hide available functions" if change.new else "Show available functions"

    def _on_generate_click(self, _) -> None:
        self.generate(force=bool(self.force_override.value))

    def _on_edit_click(self, _) -> None:
        self.edit()

    def _on_relayout(self, _layout, x_range) -> None:
        if self._syncing or x_range is None:
            return
        if self.range_mode == "auto" and self.show_graph:
            self._relayout_debouncer(tuple(x_range))


__all__ = ["EquationPlotter", "FORMULA_HELP_HTML", "RANGE_MODES"]
