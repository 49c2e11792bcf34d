"""Plot-style contracts for equation figures.

Centralizes the dark theme of the plotter and the discoverable style
keywords accepted by :func:`equation_plotter.figure_plot.build_figure`, so
tests can lock the look in one place.
"""

from __future__ import annotations

from typing import Any, Dict

from .Equation import Domain

ACCENT_COLOR = "#c35528"

PLOT_STYLE_OPTIONS: dict[str, str] = {
    "color": "Line and marker color. Accepts CSS-like names, hex (#RRGGBB), or rgb()/rgba() strings.",
    "thickness": "Line width in pixels.",
    "width": "Alias for thickness.",
    "mode": "Plotly scatter mode. Defaults to 'lines+markers'.",
    "marker_size": "Marker diameter in pixels.",
}


def resolve_style_aliases(
    *,
    thickness: int | float | None,
    width: int | float | None,
) -> int | float | None:
    """Resolve ``width`` into the canonical ``thickness``.

    Raises
    ------
    ValueError
        If both are provided with different values.
    """
    if width is not None:
        if thickness is not None and width != thickness:
            raise ValueError(
                "build_figure() received both thickness= and width= with different values; use only one."
            )
        thickness = width if thickness is None else thickness
    return thickness


def trace_style(
    *,
    color: str | None = None,
    thickness: int | float | None = None,
    mode: str | None = None,
    marker_size: int | float | None = None,
) -> Dict[str, Any]:
    """Return scatter-trace keyword arguments for the plotter's curve."""
    line: Dict[str, Any] = {"color": color or ACCENT_COLOR}
    if thickness is not None:
        line["width"] = float(thickness)
    style: Dict[str, Any] = {"mode": mode or "lines+markers", "line": line}
    if marker_size is not None:
        style["marker"] = {"size": float(marker_size), "color": line["color"]}
    return style


def _axis(title: str, domain: Domain, side: str) -> Dict[str, Any]:
    return dict(
        title=dict(text=title),
        gridcolor="#3c3c3c",
        zerolinecolor="#ffffff",
        color="#fff",
        range=[domain.start, domain.end],
        side=side,
    )


def dark_layout(
    domain: Domain,
    *,
    title: str = "",
    width: int | None = 760,
    height: int | None = 500,
) -> Dict[str, Any]:
    """Return the dark Plotly layout with both axis ranges set to ``domain``."""
    return dict(
        width=width,
        height=height,
        title=dict(text=title),
        paper_bgcolor="#1e1e1e",
        plot_bgcolor="#1a1a1a",
        font=dict(color="#fff"),
        margin=dict(l=50, r=30, t=30 if not title else 60, b=50),
        xaxis=_axis("X-axis", domain, "bottom"),
        yaxis=_axis("Y-axis", domain, "left"),
        dragmode="pan",
        showlegend=False,
    )


__all__ = [
    "ACCENT_COLOR",
    "PLOT_STYLE_OPTIONS",
    "dark_layout",
    "resolve_style_aliases",
    "trace_style",
]
