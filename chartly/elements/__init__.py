"""Drawable plot elements and the render dispatcher."""
from __future__ import annotations

from typing import Callable

from .._graphics import Graphics
from .._logging import get_logger
from .._types import ElementKind
from ._axes import (
    ContinuousAxis, ContinuousAxisLabels, ContinuousAxisTicks, ContinuousAxisTitle, Grid,
    format_tick_value, plot_axis, plot_axis_title, plot_grid, plot_labels, plot_ticks,
)
from ._bars import Bars, plot_bars
from ._base import PlotElement
from ._box import BoxPlot, plot_box
from ._pie import Pie, plot_pie
from ._points import (
    Area, DataLabels, DataLine, ScatterPoints, TextLabel,
    plot_area, plot_data_labels, plot_data_line, plot_scatter_points, plot_text_label,
)
from ._swarm import Swarm, plot_swarm
from ._symbols import CIRCLE, ActionSymbol, PathSymbol, path_symbol, tick_symbol
from ._violin import Violin, plot_violin, violin_bins

logger = get_logger(__name__)

RENDERERS: dict[ElementKind, Callable] = {
    ElementKind.SWARM: plot_swarm,
    ElementKind.BOX_PLOT: plot_box,
    ElementKind.VIOLIN: plot_violin,
    ElementKind.PIE: plot_pie,
    ElementKind.SCATTER_POINTS: plot_scatter_points,
    ElementKind.DATA_LINE: plot_data_line,
    ElementKind.AREA: plot_area,
    ElementKind.TEXT_LABEL: plot_text_label,
    ElementKind.DATA_LABELS: plot_data_labels,
    ElementKind.AXIS: plot_axis,
    ElementKind.AXIS_TICKS: plot_ticks,
    ElementKind.AXIS_LABELS: plot_labels,
    ElementKind.AXIS_TITLE: plot_axis_title,
    ElementKind.GRID: plot_grid,
    ElementKind.BARS: plot_bars,
}


def render_element(element, target: Graphics) -> None:
    """Draw *element* onto *target* using the renderer for its kind."""
    kind = getattr(element, "kind", None)
    renderer = RENDERERS.get(kind)
    if renderer is None:
        raise TypeError(
            f"cannot render {type(element).__name__!r}: unknown element kind {kind!r}")
    logger.debug("rendering %s", type(element).__name__)
    renderer(element, target)


__all__ = [
    "PlotElement", "RENDERERS", "render_element",
    "Swarm", "BoxPlot", "Violin", "Pie", "Bars",
    "ScatterPoints", "DataLine", "Area", "TextLabel", "DataLabels",
    "ContinuousAxis", "ContinuousAxisTicks", "ContinuousAxisLabels",
    "ContinuousAxisTitle", "Grid",
    "PathSymbol", "ActionSymbol", "path_symbol", "tick_symbol", "CIRCLE",
    "format_tick_value", "violin_bins",
]
