"""chartly — composite statistical charts built from matplotlib vector primitives.

Usage:
    # One call builds a complete chart
    plot = chartly.create_swarm_plot([("a", a_values), ("b", b_values)],
                                     y_axis_title="Value")
    plot.save("swarm.svg")

    # Or compose elements by hand on a coordinate system
    cs = chartly.LinearCoordinateSystem2D(0, 10, 0, 100)
    plot = chartly.Plot([chartly.Swarm((5, 0), (0, 1), values, cs)])
    plot.show()  # inside Jupyter
"""
from __future__ import annotations

import logging

__version__ = "0.1.0"

from ._canvas import PlotCanvas
from ._coords import (
    CartesianCoordinateSystem2D, ContinuousCoordinateSystem, LinearCoordinateSystem2D,
    LinLogCoordinateSystem2D, LogarithmicCoordinateSystem2D, LogLinCoordinateSystem2D,
)
from ._create import (
    create_area_chart, create_bar_chart, create_box_plot, create_distribution,
    create_function_plot, create_histogram, create_line_chart, create_pie_chart,
    create_scatter_plot, create_stacked_area_chart, create_swarm_plot, create_violin_plot,
)
from ._errors import ChartlyError, InvalidInputError, NonConvergenceWarning
from ._geometry import modulus, normalize, perpendicular_vector
from ._graphics import Graphics, GraphicsPath
from ._logging import configure_logging, get_logger
from ._plot import Plot
from ._stats import BoxStats, box_statistics, histogram_bins, iqr, quartiles
from ._style import (
    DEFAULT_STYLE, ChartStyle, Font, PresentationAttributes, delete_profile, list_profiles,
    load_profile, palette_from_colormap, save_profile,
)
from ._types import ElementKind, TextAnchor, TextBaseline, ViolinSide
from .elements import (
    CIRCLE, ActionSymbol, Area, Bars, BoxPlot, ContinuousAxis, ContinuousAxisLabels,
    ContinuousAxisTicks, ContinuousAxisTitle, DataLabels, DataLine, Grid, PathSymbol, Pie,
    PlotElement, ScatterPoints, Swarm, TextLabel, Violin, path_symbol, render_element,
    tick_symbol,
)

logging.getLogger("chartly").addHandler(logging.NullHandler())

__all__ = [
    # coordinates and geometry
    "ContinuousCoordinateSystem", "CartesianCoordinateSystem2D", "LinearCoordinateSystem2D",
    "LogarithmicCoordinateSystem2D", "LogLinCoordinateSystem2D", "LinLogCoordinateSystem2D",
    "perpendicular_vector", "modulus", "normalize",
    # drawing surface
    "Graphics", "GraphicsPath",
    # elements
    "PlotElement", "ElementKind", "render_element",
    "Swarm", "BoxPlot", "Violin", "Pie", "Bars", "ScatterPoints", "DataLine", "Area",
    "TextLabel", "DataLabels", "ContinuousAxis", "ContinuousAxisTicks",
    "ContinuousAxisLabels", "ContinuousAxisTitle", "Grid",
    "PathSymbol", "ActionSymbol", "path_symbol", "tick_symbol", "CIRCLE",
    "TextAnchor", "TextBaseline", "ViolinSide",
    # plots
    "Plot", "PlotCanvas",
    "create_swarm_plot", "create_box_plot", "create_violin_plot", "create_pie_chart",
    "create_scatter_plot", "create_area_chart", "create_function_plot",
    "create_bar_chart", "create_histogram", "create_distribution", "create_line_chart",
    "create_stacked_area_chart",
    # style
    "ChartStyle", "DEFAULT_STYLE", "Font", "PresentationAttributes", "palette_from_colormap",
    "list_profiles", "load_profile", "save_profile", "delete_profile",
    # statistics
    "BoxStats", "box_statistics", "histogram_bins", "iqr", "quartiles",
    # errors and logging
    "ChartlyError", "InvalidInputError", "NonConvergenceWarning",
    "configure_logging", "get_logger",
]
