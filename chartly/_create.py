"""High-level chart constructors.

Every constructor lays the chart out the same way: the data rectangle is
mapped through the coordinate system, a 10-unit margin is added around it in
plot space, and grid lines, axes, ticks, tick labels and axis titles are
placed on that frame.  Data elements go on top, the chart title last.
"""
from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

import numpy as np

from ._coords import (
    CartesianCoordinateSystem2D, ContinuousCoordinateSystem, LinearCoordinateSystem2D,
)
from ._errors import InvalidInputError
from ._graphics import Graphics
from ._logging import get_logger
from ._plot import Plot
from ._stats import box_statistics, histogram_bins
from ._style import DEFAULT_STYLE, ChartStyle, PresentationAttributes, cycle
from ._types import TextAnchor, TextBaseline, ViolinSide
from .elements import (
    CIRCLE, Area, Bars, BoxPlot, ContinuousAxis, ContinuousAxisLabels, ContinuousAxisTicks,
    ContinuousAxisTitle, DataLabels, DataLine, Grid, Pie, ScatterPoints, Swarm, TextLabel,
    Violin, tick_symbol,
)

logger = get_logger(__name__)

MARGIN = 10.0

Attrs = Optional[PresentationAttributes]
AttrsList = Optional[Sequence[PresentationAttributes]]

# ---------------------------------------------------------------------------
# Input normalisation
# ---------------------------------------------------------------------------


def _is_number(v) -> bool:
    return isinstance(v, numbers.Real)


def _groups(data) -> list[tuple[Optional[str], tuple[float, ...]]]:
    """Accept ``values``, ``[values, ...]`` or ``[(label, values), ...]``."""
    items = list(data)
    if not items:
        raise InvalidInputError("chart needs at least one group of values")
    if all(_is_number(v) for v in items):
        items = [(None, items)]
    out = []
    for item in items:
        if (isinstance(item, tuple) and len(item) == 2
                and (item[0] is None or isinstance(item[0], str))):
            label, values = item
        else:
            label, values = None, item
        values = tuple(float(v) for v in values)
        name = label if label is not None else f"#{len(out)}"
        if not values:
            raise InvalidInputError(f"group {name} has no values")
        if not np.all(np.isfinite(values)):
            raise InvalidInputError(f"group {name} contains non-finite values")
        out.append((label, values))
    return out


def _point_groups(points) -> list[tuple[tuple[float, float], ...]]:
    """Accept ``[(x, y), ...]`` or ``[[(x, y), ...], ...]``."""
    items = list(points)
    if not items:
        raise InvalidInputError("chart needs at least one point")
    if _is_number(items[0][0]):
        items = [items]
    out = []
    for group in items:
        pts = tuple((float(p[0]), float(p[1])) for p in group)
        if not pts:
            raise InvalidInputError("point group is empty")
        if not np.all(np.isfinite(pts)):
            raise InvalidInputError("points contain non-finite coordinates")
        out.append(pts)
    return out


def _non_empty_range(lo: float, hi: float) -> tuple[float, float]:
    if lo == hi:
        pad = max(abs(lo), 1.0) * 0.5
        return lo - pad, hi + pad
    return lo, hi


def _data_range(groups, lo=None, hi=None) -> tuple[float, float]:
    arr = np.concatenate([np.asarray(v, dtype=float) for v in groups])
    return _non_empty_range(float(arr.min()) if lo is None else lo,
                            float(arr.max()) if hi is None else hi)


def _along(position: float, value: float, vertical: bool) -> tuple[float, float]:
    """Data point at *value* on the value axis and *position* on the other."""
    return (position, value) if vertical else (value, position)


# ---------------------------------------------------------------------------
# Frame: data rectangle plus margins, in data coordinates
# ---------------------------------------------------------------------------


@dataclass
class _Frame:
    cs: ContinuousCoordinateSystem
    bottom_left: np.ndarray
    bottom_right: np.ndarray
    top_left: np.ndarray
    top_right: np.ndarray
    # Edges of the data rectangle, pushed out by the margin.
    top_start: np.ndarray
    top_end: np.ndarray
    bottom_start: np.ndarray
    bottom_end: np.ndarray
    left_top: np.ndarray
    left_bottom: np.ndarray
    right_top: np.ndarray
    right_bottom: np.ndarray
    title_anchor: np.ndarray


def _frame(cs: ContinuousCoordinateSystem, min_x, min_y, max_x, max_y) -> _Frame:
    corners = np.array([cs.to_plot_coordinates(p) for p in
                        ((min_x, max_y), (max_x, max_y), (max_x, min_y), (min_x, min_y))])
    left, top = corners.min(axis=0)
    right, bottom = corners.max(axis=0)
    m = MARGIN
    data = cs.to_data_coordinates
    return _Frame(
        cs=cs,
        bottom_left=data((left - m, bottom + m)),
        bottom_right=data((right + m, bottom + m)),
        top_left=data((left - m, top - m)),
        top_right=data((right + m, top - m)),
        top_start=data((left, top - m)),
        top_end=data((right, top - m)),
        bottom_start=data((left, bottom + m)),
        bottom_end=data((right, bottom + m)),
        left_top=data((left - m, top)),
        left_bottom=data((left - m, bottom)),
        right_top=data((right + m, top)),
        right_bottom=data((right + m, bottom)),
        title_anchor=data(((left + right) / 2, top - 2 * m)),
    )


def _points_frame(groups, coordinate_system, width, height) -> _Frame:
    pts = np.array([p for g in groups for p in g])
    cs = coordinate_system or LinearCoordinateSystem2D.from_data(pts, width, height)
    min_x, max_x = _non_empty_range(float(pts[:, 0].min()), float(pts[:, 0].max()))
    min_y, max_y = _non_empty_range(float(pts[:, 1].min()), float(pts[:, 1].max()))
    return _frame(cs, min_x, min_y, max_x, max_y)


def _category_frame(span, lo, hi, vertical, coordinate_system, width, height,
                    start: float = 0.0) -> _Frame:
    """Frame for charts whose x (or y, when not *vertical*) axis spans
    ``[start, span]`` and whose value axis spans ``[lo, hi]``."""
    if vertical:
        bounds = (start, lo, span, hi)
    else:
        bounds = (lo, start, hi, span)
    cs = coordinate_system or LinearCoordinateSystem2D(
        bounds[0], bounds[2], bounds[1], bounds[3], width, height)
    return _frame(cs, *bounds)


# ---------------------------------------------------------------------------
# Decorations
# ---------------------------------------------------------------------------


@dataclass
class _Decor:
    """Presentation overrides shared by every chart with axes."""

    axis: Attrs = None
    labels: Attrs = None
    axis_title: Attrs = None
    title: Attrs = None
    grid: Attrs = None
    arrow_size: float = 3.0

    def resolved(self, style: ChartStyle) -> "_Decor":
        return _Decor(
            axis=self.axis or PresentationAttributes(
                fill=style.axis_color, stroke=style.axis_color,
                line_width=style.line_width, font=style.font),
            labels=self.labels or PresentationAttributes(
                fill=style.axis_color, stroke=None, font=style.font),
            axis_title=self.axis_title or PresentationAttributes(
                fill=style.axis_color, stroke=None, font=style.axis_title_font),
            title=self.title or PresentationAttributes(
                fill=style.axis_color, stroke=None, font=style.title_font),
            grid=self.grid or PresentationAttributes(
                stroke=style.grid_color, line_width=style.line_width),
            arrow_size=self.arrow_size,
        )


def _extent(element, index: int) -> float:
    """Width (index 0) or height (index 1) of what *element* draws."""
    g = Graphics()
    element.plot(g)
    bounds = g.get_bounds()
    if bounds is None:
        return 0.0
    return bounds[2 + index] - bounds[index]


def _decorate(plot: Plot, frame: _Frame, decor: _Decor, x_title, y_title,
              categories=None, vertical: bool = True) -> None:
    """Add grids, axes, ticks, labels and axis titles to *plot*.

    With *categories* (``[(label, position), ...]``) the categorical axis
    (x when *vertical*, y otherwise) gets one tick and label per group, no
    arrow and no grid lines.
    """
    cs = frame.cs
    x_grid = Grid(frame.top_start, frame.top_end, frame.bottom_start, frame.bottom_end, cs,
                  interval_count=5, presentation=decor.grid)
    y_grid = Grid(frame.left_top, frame.left_bottom, frame.right_top, frame.right_bottom, cs,
                  interval_count=5, presentation=decor.grid)
    if categories is None:
        plot.add_all(x_grid, y_grid)
    else:
        plot.add(y_grid if vertical else x_grid)

    x_categorical = categories is not None and vertical
    y_categorical = categories is not None and not vertical
    x_axis = ContinuousAxis(frame.bottom_left, frame.bottom_right, cs,
                            arrow_size=0 if x_categorical else decor.arrow_size,
                            presentation=decor.axis)
    y_axis = ContinuousAxis(frame.bottom_left, frame.top_left, cs,
                            arrow_size=0 if y_categorical else decor.arrow_size,
                            presentation=decor.axis)

    if x_categorical:
        names = [name for name, _ in categories]
        pts = [(pos, frame.bottom_start[1]) for _, pos in categories]
        x_ticks = ScatterPoints(pts, cs, size=1, symbol=tick_symbol(vertical=True),
                                presentation=decor.axis)
        x_labels = DataLabels(pts, lambda i, p: names[i], cs,
                              margin=lambda i, p: (0.0, MARGIN),
                              anchor=TextAnchor.CENTER, baseline=TextBaseline.TOP,
                              presentation=decor.labels)
    else:
        x_ticks = ContinuousAxisTicks(frame.bottom_start, frame.bottom_end, cs,
                                      presentation=decor.axis)
        x_labels = ContinuousAxisLabels(frame.bottom_start, frame.bottom_end, cs,
                                        interval_count=5, rotation=0.0,
                                        anchor=TextAnchor.CENTER, baseline=TextBaseline.TOP,
                                        presentation=decor.labels)

    if y_categorical:
        names = [name for name, _ in categories]
        pts = [(frame.left_bottom[0], pos) for _, pos in categories]
        y_ticks = ScatterPoints(pts, cs, size=1, symbol=tick_symbol(vertical=False),
                                presentation=decor.axis)
        y_labels = DataLabels(pts, lambda i, p: names[i], cs,
                              margin=lambda i, p: (-MARGIN, 0.0),
                              anchor=TextAnchor.RIGHT, baseline=TextBaseline.MIDDLE,
                              presentation=decor.labels)
    else:
        y_ticks = ContinuousAxisTicks(frame.left_bottom, frame.left_top, cs,
                                      presentation=decor.axis)
        y_labels = ContinuousAxisLabels(frame.left_bottom, frame.left_top, cs,
                                        interval_count=5, rotation=0.0,
                                        position=lambda i: -MARGIN, anchor=TextAnchor.RIGHT,
                                        presentation=decor.labels)

    x_title_el = ContinuousAxisTitle(x_title, frame.bottom_left, frame.bottom_right, cs,
                                     position=_extent(x_labels, 1) + 2 * MARGIN,
                                     baseline=TextBaseline.TOP,
                                     presentation=decor.axis_title)
    y_title_el = ContinuousAxisTitle(y_title, frame.bottom_left, frame.top_left, cs,
                                     position=-2 * MARGIN - _extent(y_labels, 0),
                                     baseline=TextBaseline.BOTTOM,
                                     presentation=decor.axis_title)

    plot.add_all(x_axis, y_axis, x_ticks, y_ticks, x_labels, y_labels, x_title_el, y_title_el)


def _title(frame: _Frame, decor: _Decor, title: Optional[str]) -> TextLabel:
    return TextLabel(title or "", frame.title_anchor, frame.cs,
                     baseline=TextBaseline.BOTTOM, presentation=decor.title)


def _outlined(style: ChartStyle, line_width: float | None = None) -> list[PresentationAttributes]:
    """Light fills with dark outlines, one per palette colour."""
    lw = style.line_width if line_width is None else line_width
    return [PresentationAttributes(fill=style.light_color(i), stroke=style.color(i), line_width=lw)
            for i in range(len(style.palette))]


def _solid(style: ChartStyle) -> list[PresentationAttributes]:
    return [PresentationAttributes(fill=style.color(i), stroke=None)
            for i in range(len(style.palette))]


def _lines(style: ChartStyle) -> list[PresentationAttributes]:
    return [PresentationAttributes(fill=None, stroke=style.color(i), line_width=style.line_width)
            for i in range(len(style.palette))]


def _box(position, direction, stats, cs, width, notch_size, box_attrs,
         median_attrs=None, whisker_width=0.5) -> BoxPlot:
    m = stats.median
    return BoxPlot(position, direction,
                   stats.whisker_low - m, stats.q1 - m, stats.q3 - m, stats.whisker_high - m, cs,
                   width=width, whisker_width=whisker_width, notch_size=notch_size,
                   box_presentation=box_attrs, whiskers_presentation=box_attrs,
                   centre_presentation=median_attrs or PresentationAttributes(fill=None, stroke=None))


# ---------------------------------------------------------------------------
# Distribution charts
# ---------------------------------------------------------------------------


def create_swarm_plot(data, show_box_plots: bool = True, box_width: float = 0.04,
                      spacing: float = 10, data_range_min: float | None = None,
                      data_range_max: float | None = None, vertical: bool = True,
                      width: float = 350, height: float = 250, *,
                      x_axis_title: str | None = None, y_axis_title: str | None = None,
                      title: str | None = None, axis_arrow_size: float = 3,
                      point_size: float | None = None, point_margin: float | None = None,
                      symbol: Any = None,
                      swarm_presentation: AttrsList = None,
                      box_presentation: AttrsList = None,
                      median_presentation: AttrsList = None,
                      axis_presentation: Attrs = None, label_presentation: Attrs = None,
                      axis_title_presentation: Attrs = None, title_presentation: Attrs = None,
                      grid_presentation: Attrs = None,
                      coordinate_system: ContinuousCoordinateSystem | None = None,
                      style: ChartStyle | None = None) -> Plot:
    """Swarm plot of one or more groups, optionally over a slim box plot.

    *data* is a list of values, a list of value lists, or a list of
    ``(label, values)`` pairs.  Group ``i`` sits at ``spacing * (i + 0.5)``
    on the categorical axis.  With box plots shown, points get light fills
    with dark outlines and the box is drawn in the dark colour.
    """
    style = style or DEFAULT_STYLE
    groups = _groups(data)
    n = len(groups)
    point_size = style.point_size if point_size is None else point_size
    point_margin = style.point_margin if point_margin is None else point_margin

    if swarm_presentation is None:
        swarm_presentation = _outlined(style, 0) if show_box_plots else _solid(style)
    if box_presentation is None:
        box_presentation = [PresentationAttributes(fill=a.stroke or a.fill, stroke=a.stroke or a.fill)
                            for a in swarm_presentation]
    if median_presentation is None:
        median_presentation = [PresentationAttributes(fill=a.fill, stroke=None)
                               for a in swarm_presentation]

    lo, hi = _data_range([v for _, v in groups], data_range_min, data_range_max)
    frame = _category_frame(spacing * n, lo, hi, vertical, coordinate_system, width, height)
    cs = frame.cs
    decor = _Decor(axis_presentation, label_presentation, axis_title_presentation,
                   title_presentation, grid_presentation, axis_arrow_size).resolved(style)

    plot = Plot()
    _decorate(plot, frame, decor, x_axis_title, y_axis_title,
              categories=[(name, spacing * (i + 0.5)) for i, (name, _) in enumerate(groups)],
              vertical=vertical)

    direction = (0.0, 1.0) if vertical else (1.0, 0.0)
    for i, (_, values) in enumerate(groups):
        centre = spacing * (i + 0.5)
        plot.add(Swarm(_along(centre, 0.0, vertical), direction, values, cs,
                       point_size=point_size, point_margin=point_margin,
                       symbol=symbol or CIRCLE, presentation=cycle(swarm_presentation, i)))
        if show_box_plots:
            stats = box_statistics(values)
            plot.add(_box(_along(centre, stats.median, vertical), direction, stats, cs,
                          width=spacing * box_width * 0.5, notch_size=0,
                          box_attrs=cycle(box_presentation, i),
                          median_attrs=cycle(median_presentation, i), whisker_width=0))

    plot.add(_title(frame, decor, title))
    logger.debug("created swarm plot with %d groups", n)
    return plot


def create_box_plot(data, whisker_type: str = "iqr", use_notches: bool = True,
                    proportional_width: bool = False, show_outliers: bool = True,
                    box_width: float = 10, spacing: float = 0.1,
                    data_range_min: float | None = None, data_range_max: float | None = None,
                    vertical: bool = True, width: float = 350, height: float = 250, *,
                    x_axis_title: str | None = None, y_axis_title: str | None = None,
                    title: str | None = None, axis_arrow_size: float = 3,
                    box_presentation: AttrsList = None,
                    outlier_presentation: AttrsList = None, outlier_symbol: Any = None,
                    axis_presentation: Attrs = None, label_presentation: Attrs = None,
                    axis_title_presentation: Attrs = None, title_presentation: Attrs = None,
                    grid_presentation: Attrs = None,
                    coordinate_system: ContinuousCoordinateSystem | None = None,
                    style: ChartStyle | None = None) -> Plot:
    """Box plots, one per group, with optional notches and outlier points.

    Notch half-height is ``1.58 * IQR / sqrt(n)``.  ``spacing`` is the gap
    between boxes as a fraction of ``box_width``.
    """
    style = style or DEFAULT_STYLE
    groups = _groups(data)
    n = len(groups)
    box_presentation = box_presentation or _outlined(style)
    if outlier_presentation is None:
        outlier_presentation = [PresentationAttributes(fill=a.stroke or a.fill, stroke=None)
                                for a in box_presentation]

    stats = [box_statistics(v, whisker_type=whisker_type) for _, v in groups]
    max_count = max(len(v) for _, v in groups)
    lo, hi = _data_range([v for _, v in groups], data_range_min, data_range_max)
    span = (n * (spacing + 1) - spacing) * box_width
    frame = _category_frame(span, lo, hi, vertical, coordinate_system, width, height)
    cs = frame.cs
    decor = _Decor(axis_presentation, label_presentation, axis_title_presentation,
                   title_presentation, grid_presentation, axis_arrow_size).resolved(style)

    def centre(i):
        return (i * (spacing + 1) + 0.5) * box_width

    plot = Plot()
    _decorate(plot, frame, decor, x_axis_title, y_axis_title,
              categories=[(name, centre(i)) for i, (name, _) in enumerate(groups)],
              vertical=vertical)

    direction = (0.0, 1.0) if vertical else (1.0, 0.0)
    for i, ((_, values), st) in enumerate(zip(groups, stats)):
        half = box_width * 0.5 * (len(values) / max_count if proportional_width else 1)
        notch = 1.58 * (st.q3 - st.q1) / np.sqrt(len(values)) if use_notches else 0
        plot.add(_box(_along(centre(i), st.median, vertical), direction, st, cs,
                      width=half, notch_size=notch, box_attrs=cycle(box_presentation, i)))

    if show_outliers:
        for i, st in enumerate(stats):
            if st.outliers:
                plot.add(ScatterPoints([_along(centre(i), v, vertical) for v in st.outliers], cs,
                                       size=style.point_size, symbol=outlier_symbol or CIRCLE,
                                       presentation=cycle(outlier_presentation, i)))

    plot.add(_title(frame, decor, title))
    logger.debug("created box plot with %d groups", n)
    return plot


def create_violin_plot(data, proportional_width: bool = False, smooth: bool = True,
                       sides: ViolinSide = ViolinSide.BOTH, show_box_plots: bool = True,
                       violin_width: float = 10, box_width: float = 0.05, spacing: float = 0.1,
                       data_range_min: float | None = None, data_range_max: float | None = None,
                       vertical: bool = True, width: float = 350, height: float = 250, *,
                       x_axis_title: str | None = None, y_axis_title: str | None = None,
                       title: str | None = None, axis_arrow_size: float = 3,
                       violin_presentation: AttrsList = None,
                       box_presentation: AttrsList = None,
                       median_presentation: AttrsList = None,
                       axis_presentation: Attrs = None, label_presentation: Attrs = None,
                       axis_title_presentation: Attrs = None, title_presentation: Attrs = None,
                       grid_presentation: Attrs = None,
                       coordinate_system: ContinuousCoordinateSystem | None = None,
                       style: ChartStyle | None = None) -> Plot:
    """Violin plots, one per group, optionally with a slim box inside.

    ``box_width`` is the box half-width as a fraction of the violin's.
    """
    style = style or DEFAULT_STYLE
    groups = _groups(data)
    n = len(groups)
    violin_presentation = violin_presentation or _outlined(style)
    if box_presentation is None:
        box_presentation = [PresentationAttributes(fill=a.stroke or a.fill, stroke=a.stroke or a.fill)
                            for a in violin_presentation]
    if median_presentation is None:
        median_presentation = [PresentationAttributes(fill=a.fill, stroke=None)
                               for a in violin_presentation]

    max_count = max(len(v) for _, v in groups)
    lo, hi = _data_range([v for _, v in groups], data_range_min, data_range_max)
    span = (n * (spacing + 1) - spacing) * violin_width
    frame = _category_frame(span, lo, hi, vertical, coordinate_system, width, height)
    cs = frame.cs
    decor = _Decor(axis_presentation, label_presentation, axis_title_presentation,
                   title_presentation, grid_presentation, axis_arrow_size).resolved(style)

    def centre(i):
        return (i * (spacing + 1) + 0.5) * violin_width

    plot = Plot()
    _decorate(plot, frame, decor, x_axis_title, y_axis_title,
              categories=[(name, centre(i)) for i, (name, _) in enumerate(groups)],
              vertical=vertical)

    direction = (0.0, 1.0) if vertical else (1.0, 0.0)
    for i, (_, values) in enumerate(groups):
        half = violin_width * 0.5 * (len(values) / max_count if proportional_width else 1)
        plot.add(Violin(_along(centre(i), 0.0, vertical), direction, values, cs,
                        width=half, smooth=smooth, sides=sides,
                        presentation=cycle(violin_presentation, i)))
        if show_box_plots:
            st = box_statistics(values)
            plot.add(_box(_along(centre(i), st.median, vertical), direction, st, cs,
                          width=half * box_width, notch_size=0,
                          box_attrs=cycle(box_presentation, i),
                          median_attrs=cycle(median_presentation, i), whisker_width=0))

    plot.add(_title(frame, decor, title))
    logger.debug("created violin plot with %d groups", n)
    return plot


# ---------------------------------------------------------------------------
# Bar charts and histograms
# ---------------------------------------------------------------------------


def _bar_rows(data) -> list[tuple[Optional[str], tuple[float, ...]]]:
    """Accept ``values``, ``[values, ...]`` or either form labelled as
    ``(label, value)`` / ``(label, values)`` pairs."""
    items = list(data)
    if not items:
        raise InvalidInputError("bar chart needs at least one value")
    out = []
    for item in items:
        label = None
        if (isinstance(item, tuple) and len(item) == 2
                and (item[0] is None or isinstance(item[0], str))):
            label, item = item
        values = (float(item),) if _is_number(item) else tuple(float(v) for v in item)
        name = label if label is not None else f"#{len(out)}"
        if not values:
            raise InvalidInputError(f"bar {name} has no values")
        if not np.all(np.isfinite(values)):
            raise InvalidInputError(f"bar {name} contains non-finite values")
        out.append((label, values))
    return out


def create_bar_chart(data, stacked: bool = False, vertical: bool = True, margin: float = 0.25,
                     cluster_margin: float = 0.0, width: float = 350, height: float = 250, *,
                     x_axis_title: str | None = None, y_axis_title: str | None = None,
                     title: str | None = None, axis_arrow_size: float = 3,
                     bar_presentation: AttrsList = None,
                     axis_presentation: Attrs = None, label_presentation: Attrs = None,
                     axis_title_presentation: Attrs = None, title_presentation: Attrs = None,
                     grid_presentation: Attrs = None,
                     coordinate_system: ContinuousCoordinateSystem | None = None,
                     style: ChartStyle | None = None) -> Plot:
    """Bar chart with one bar, stack or cluster per row of *data*.

    *data* is a list of values, a list of value lists, or either of those
    labelled as ``(label, value)`` pairs.  Rows holding several values are
    stacked when *stacked* is set and clustered side by side otherwise;
    segment ``j`` of every row takes colour ``j``.  Row ``i`` sits at
    ``i + 0.5`` on the categorical axis.  ``margin`` is the gap between
    neighbouring bars and ``cluster_margin`` the gap inside a cluster, both
    as fractions of the space available.
    """
    style = style or DEFAULT_STYLE
    rows = _bar_rows(data)
    n = len(rows)
    base = _baseline_value(coordinate_system, vertical)
    levels = [np.cumsum(v) if stacked else np.asarray(v) for _, v in rows]
    lo, hi = _data_range(levels + [np.array([base])])
    frame = _category_frame(n, lo, hi, vertical, coordinate_system, width, height)
    decor = _Decor(axis_presentation, label_presentation, axis_title_presentation,
                   title_presentation, grid_presentation, axis_arrow_size).resolved(style)

    plot = Plot()
    _decorate(plot, frame, decor, x_axis_title, y_axis_title,
              categories=[(label, i + 0.5) for i, (label, _) in enumerate(rows)],
              vertical=vertical)
    plot.add(Bars([(i + 0.5, *values) for i, (_, values) in enumerate(rows)], frame.cs,
                  vertical=vertical, stacked=stacked, baseline=base, margin=margin,
                  cluster_margin=cluster_margin,
                  presentation=bar_presentation or _solid(style)))
    plot.add(_title(frame, decor, title))
    logger.debug("created bar chart with %d rows", n)
    return plot


def create_histogram(values: Sequence[float], bin_count: int | None = None,
                     margin: float = 0.0, vertical: bool = True,
                     width: float = 350, height: float = 250, *,
                     x_axis_title: str | None = None, y_axis_title: str | None = None,
                     title: str | None = None, axis_arrow_size: float = 3,
                     bar_presentation: Attrs = None,
                     axis_presentation: Attrs = None, label_presentation: Attrs = None,
                     axis_title_presentation: Attrs = None, title_presentation: Attrs = None,
                     grid_presentation: Attrs = None,
                     coordinate_system: ContinuousCoordinateSystem | None = None,
                     style: ChartStyle | None = None) -> Plot:
    """Histogram of *values*, one bar per bin on a continuous bin axis.

    Bins follow :func:`histogram_bins`.  Bars touch unless *margin* is set.
    """
    style = style or DEFAULT_STYLE
    counts, edges = histogram_bins(values, bin_count)
    base = _baseline_value(coordinate_system, vertical)
    # Empty bins sit on the baseline, which is 1 on a logarithmic count axis.
    heights = np.maximum(counts, base)
    lo, hi = _non_empty_range(base, float(heights.max()))
    frame = _category_frame(float(edges[-1]), lo, hi, vertical, coordinate_system,
                            width, height, start=float(edges[0]))
    decor = _Decor(axis_presentation, label_presentation, axis_title_presentation,
                   title_presentation, grid_presentation, axis_arrow_size).resolved(style)

    plot = Plot()
    _decorate(plot, frame, decor, x_axis_title, y_axis_title)
    centres = (edges[:-1] + edges[1:]) / 2
    plot.add(Bars(list(zip(centres, heights)), frame.cs, vertical=vertical, baseline=base,
                  margin=margin,
                  presentation=bar_presentation or PresentationAttributes(
                      fill=style.color(0), stroke=style.color(0), line_width=0.5)))
    plot.add(_title(frame, decor, title))
    logger.debug("created histogram with %d bins", len(counts))
    return plot


def create_distribution(values: Sequence[float], bin_count: int | None = None,
                        vertical: bool = True, smooth: bool = False,
                        width: float = 350, height: float = 250, **kwargs) -> Plot:
    """Area chart through the bin counts of *values*, at the bin centres.

    Keyword arguments are passed on to :func:`create_area_chart`.
    """
    counts, edges = histogram_bins(values, bin_count)
    centres = (edges[:-1] + edges[1:]) / 2
    points = [(c, n) if vertical else (n, c) for c, n in zip(centres.tolist(), counts.tolist())]
    return create_area_chart(points, vertical=vertical, smooth=smooth,
                             width=width, height=height, **kwargs)


# ---------------------------------------------------------------------------
# Pie / doughnut
# ---------------------------------------------------------------------------


def create_pie_chart(values: Sequence[float], inner_radius: float = 0,
                     labels: Sequence[str] | None = None, clockwise: bool = False,
                     start_angle: float = 0, width: float = 350, height: float = 250, *,
                     title: str | None = None, presentation: AttrsList = None,
                     label_presentation: Attrs = None, title_presentation: Attrs = None,
                     coordinate_system: ContinuousCoordinateSystem | None = None,
                     style: ChartStyle | None = None) -> Plot:
    """Pie chart of *values* with unit outer radius; a doughnut when
    ``0 < inner_radius < 1``.  Optional *labels* are placed just outside
    each slice."""
    style = style or DEFAULT_STYLE
    if not 0 <= inner_radius < 1:
        raise InvalidInputError(f"inner_radius must be in [0, 1), got {inner_radius}")
    values = [float(v) for v in values]
    if labels is not None and len(labels) != len(values):
        raise InvalidInputError(
            f"got {len(labels)} labels for {len(values)} pie values")

    if coordinate_system is None:
        # Keep the data window's aspect ratio equal to the plot's, so the pie stays round.
        pie_w = pie_h = 2.5
        if width / height > 1:
            pie_w = pie_h * width / height
        else:
            pie_h = pie_w * height / width
        coordinate_system = LinearCoordinateSystem2D(-pie_w / 2, pie_w / 2, -pie_h / 2, pie_h / 2,
                                                     width, height)
    cs = coordinate_system

    presentation = presentation or [PresentationAttributes(fill=style.color(i), stroke="white")
                                    for i in range(len(style.palette))]
    pie = Pie(values, (0.0, 0.0), (1.0, 1.0), cs, inner_radius=(inner_radius, inner_radius),
              start_angle=start_angle, clockwise=clockwise, presentation=presentation)

    plot = Plot([pie])
    if labels is not None:
        attrs = label_presentation or PresentationAttributes(fill=style.axis_color, stroke=None,
                                                             font=style.font)
        total = sum(values)
        angle = start_angle
        sign = -1 if clockwise else 1
        for label, v in zip(labels, values):
            mid = angle + v / total * np.pi
            angle += v / total * 2 * np.pi
            if v == 0 or not label:
                continue
            cos, sin = np.cos(sign * mid), np.sin(sign * mid)
            plot.add(TextLabel(label, (1.1 * cos, 1.1 * sin), cs,
                               anchor=TextAnchor.LEFT if cos >= 0 else TextAnchor.RIGHT,
                               presentation=attrs))

    top = cs.to_plot_coordinates((0.0, 1.0))
    title_attrs = title_presentation or PresentationAttributes(fill=style.axis_color, stroke=None,
                                                               font=style.title_font)
    plot.add(TextLabel(title or "", cs.to_data_coordinates((top[0], top[1] - MARGIN)), cs,
                       baseline=TextBaseline.BOTTOM, presentation=title_attrs))
    logger.debug("created pie chart with %d slices", len(values))
    return plot


# ---------------------------------------------------------------------------
# Point charts
# ---------------------------------------------------------------------------


def create_scatter_plot(points, width: float = 350, height: float = 250, *,
                        x_axis_title: str | None = None, y_axis_title: str | None = None,
                        title: str | None = None, axis_arrow_size: float = 3,
                        point_size: float | Sequence[float] | None = None,
                        symbol: Any = None, presentation: AttrsList = None,
                        axis_presentation: Attrs = None, label_presentation: Attrs = None,
                        axis_title_presentation: Attrs = None, title_presentation: Attrs = None,
                        grid_presentation: Attrs = None,
                        coordinate_system: ContinuousCoordinateSystem | None = None,
                        style: ChartStyle | None = None) -> Plot:
    """Scatter plot of one or more groups of ``(x, y)`` points."""
    style = style or DEFAULT_STYLE
    groups = _point_groups(points)
    frame = _points_frame(groups, coordinate_system, width, height)
    decor = _Decor(axis_presentation, label_presentation, axis_title_presentation,
                   title_presentation, grid_presentation, axis_arrow_size).resolved(style)
    presentation = presentation or _solid(style)
    if point_size is None:
        sizes: Sequence[float] = (style.point_size,)
    elif _is_number(point_size):
        sizes = (float(point_size),)
    else:
        sizes = tuple(point_size)

    plot = Plot()
    _decorate(plot, frame, decor, x_axis_title, y_axis_title)
    for i, pts in enumerate(groups):
        plot.add(ScatterPoints(pts, frame.cs, size=cycle(sizes, i), symbol=symbol or CIRCLE,
                               presentation=cycle(presentation, i)))
    plot.add(_title(frame, decor, title))
    return plot


def _baseline_value(cs: ContinuousCoordinateSystem | None, vertical: bool) -> float:
    """Area baseline: 0, or 1 where the value axis is logarithmic."""
    if isinstance(cs, CartesianCoordinateSystem2D):
        if cs.log_y if vertical else cs.log_x:
            return 1.0
    return 0.0


def create_area_chart(points, vertical: bool = True, smooth: bool = False,
                      width: float = 350, height: float = 250, *,
                      x_axis_title: str | None = None, y_axis_title: str | None = None,
                      title: str | None = None, axis_arrow_size: float = 3,
                      presentation: Attrs = None,
                      axis_presentation: Attrs = None, label_presentation: Attrs = None,
                      axis_title_presentation: Attrs = None, title_presentation: Attrs = None,
                      grid_presentation: Attrs = None,
                      coordinate_system: ContinuousCoordinateSystem | None = None,
                      style: ChartStyle | None = None) -> Plot:
    """Area between the line through *points* and the value-axis baseline."""
    style = style or DEFAULT_STYLE
    pts = _point_groups(points)[0]
    base = _baseline_value(coordinate_system, vertical)

    if vertical:
        def baseline(p):
            return (p[0], base)
    else:
        def baseline(p):
            return (base, p[1])

    frame = _points_frame([pts, [baseline(p) for p in pts]], coordinate_system, width, height)
    decor = _Decor(axis_presentation, label_presentation, axis_title_presentation,
                   title_presentation, grid_presentation, axis_arrow_size).resolved(style)
    presentation = presentation or PresentationAttributes(
        fill=style.light_color(0), stroke=style.color(0), line_width=style.line_width)

    plot = Plot()
    _decorate(plot, frame, decor, x_axis_title, y_axis_title)
    plot.add(Area(pts, baseline, frame.cs, smooth=smooth, presentation=presentation))
    plot.add(_title(frame, decor, title))
    return plot


def create_function_plot(fn: Union[Callable[[float], float], Sequence[Callable[[float], float]]],
                         min_x: float, max_x: float, n_samples: int = 100,
                         vertical: bool = True, smooth: bool = False,
                         width: float = 350, height: float = 250, *,
                         x_axis_title: str | None = None, y_axis_title: str | None = None,
                         title: str | None = None, axis_arrow_size: float = 3,
                         presentation: AttrsList = None,
                         axis_presentation: Attrs = None, label_presentation: Attrs = None,
                         axis_title_presentation: Attrs = None, title_presentation: Attrs = None,
                         grid_presentation: Attrs = None,
                         coordinate_system: ContinuousCoordinateSystem | None = None,
                         style: ChartStyle | None = None) -> Plot:
    """Line plot of one or more functions sampled at *n_samples* points.

    Samples where a function returns a non-finite value are dropped.  With
    ``vertical=False`` the function's argument runs along the y axis.
    """
    style = style or DEFAULT_STYLE
    if not max_x > min_x:
        raise InvalidInputError(f"need min_x < max_x, got {min_x}, {max_x}")
    if n_samples < 2:
        raise InvalidInputError(f"n_samples must be at least 2, got {n_samples}")
    fns = [fn] if callable(fn) else list(fn)

    xs = np.linspace(min_x, max_x, n_samples)
    groups = []
    for f in fns:
        pts = [(float(x), float(y)) if vertical else (float(y), float(x))
               for x, y in ((x, f(x)) for x in xs) if np.isfinite(y)]
        if not pts:
            raise InvalidInputError("function has no finite values on the sampled range")
        groups.append(pts)

    frame = _points_frame(groups, coordinate_system, width, height)
    decor = _Decor(axis_presentation, label_presentation, axis_title_presentation,
                   title_presentation, grid_presentation, axis_arrow_size).resolved(style)
    presentation = presentation or _lines(style)

    plot = Plot()
    _decorate(plot, frame, decor, x_axis_title, y_axis_title)
    for i, pts in enumerate(groups):
        plot.add(DataLine(pts, frame.cs, smooth=smooth, presentation=cycle(presentation, i)))
    plot.add(_title(frame, decor, title))
    return plot


def create_stacked_area_chart(data, vertical: bool = True, smooth: bool = False,
                              width: float = 350, height: float = 250, *,
                              x_axis_title: str | None = None, y_axis_title: str | None = None,
                              title: str | None = None, axis_arrow_size: float = 3,
                              presentation: AttrsList = None,
                              axis_presentation: Attrs = None, label_presentation: Attrs = None,
                              axis_title_presentation: Attrs = None,
                              title_presentation: Attrs = None,
                              grid_presentation: Attrs = None,
                              coordinate_system: ContinuousCoordinateSystem | None = None,
                              style: ChartStyle | None = None) -> Plot:
    """Areas piled on top of each other.

    Rows of *data* are ``(position, value1, value2, ...)``, all of the same
    length and with distinct positions.  Area ``j`` fills the band between
    the running totals of the first ``j`` and ``j + 1`` values.
    """
    style = style or DEFAULT_STYLE
    rows = sorted(tuple(float(v) for v in row) for row in data)
    if not rows:
        raise InvalidInputError("stacked area chart needs at least one row")
    if len({len(r) for r in rows}) != 1 or len(rows[0]) < 2:
        raise InvalidInputError("stacked area rows need a position and the same number of values")
    if not np.all(np.isfinite(rows)):
        raise InvalidInputError("stacked area data contains non-finite values")
    positions = [r[0] for r in rows]
    if len(set(positions)) != len(positions):
        raise InvalidInputError("stacked area rows need distinct positions")

    base = _baseline_value(coordinate_system, vertical)
    totals = np.cumsum(np.asarray([r[1:] for r in rows]), axis=1)

    def at(position, value):
        return _along(position, float(value), vertical)

    series = [[at(p, totals[i, j]) for i, p in enumerate(positions)]
              for j in range(totals.shape[1])]
    lower = [dict.fromkeys(positions, base)]
    lower += [{p: float(totals[i, j]) for i, p in enumerate(positions)}
              for j in range(totals.shape[1] - 1)]

    frame = _points_frame(series + [[at(p, base) for p in positions]], coordinate_system,
                          width, height)
    decor = _Decor(axis_presentation, label_presentation, axis_title_presentation,
                   title_presentation, grid_presentation, axis_arrow_size).resolved(style)
    presentation = presentation or _solid(style)

    plot = Plot()
    _decorate(plot, frame, decor, x_axis_title, y_axis_title)
    for j, pts in enumerate(series):
        def baseline(p, below=lower[j]):
            position = p[0] if vertical else p[1]
            return at(position, below[position])
        plot.add(Area(pts, baseline, frame.cs, smooth=smooth,
                      presentation=cycle(presentation, j)))
    plot.add(_title(frame, decor, title))
    logger.debug("created stacked area chart with %d series", len(series))
    return plot


def _line_series(data) -> list[tuple[tuple[float, float], ...]]:
    """Plain values are plotted against their index."""
    items = list(data)
    if items and all(_is_number(v) for v in items):
        items = list(enumerate(items))
    return _point_groups(items)


def create_line_chart(data, smooth: bool = False, width: float = 350, height: float = 250, *,
                      x_axis_title: str | None = None, y_axis_title: str | None = None,
                      title: str | None = None, axis_arrow_size: float = 3,
                      point_size: float | Sequence[float] = 0, symbol: Any = None,
                      line_presentation: AttrsList = None,
                      point_presentation: AttrsList = None,
                      axis_presentation: Attrs = None, label_presentation: Attrs = None,
                      axis_title_presentation: Attrs = None, title_presentation: Attrs = None,
                      grid_presentation: Attrs = None,
                      coordinate_system: ContinuousCoordinateSystem | None = None,
                      style: ChartStyle | None = None) -> Plot:
    """Line chart of one or more series.

    *data* is a list of values (plotted against their index), a list of
    ``(x, y)`` points, or a list of point lists.  Points are joined in the
    order given.  Series with a positive *point_size* also get a symbol at
    every point, filled with the line colour.
    """
    style = style or DEFAULT_STYLE
    groups = _line_series(data)
    sizes = (float(point_size),) if _is_number(point_size) else tuple(point_size)
    if not sizes:
        raise InvalidInputError("point_size needs at least one value")
    frame = _points_frame(groups, coordinate_system, width, height)
    decor = _Decor(axis_presentation, label_presentation, axis_title_presentation,
                   title_presentation, grid_presentation, axis_arrow_size).resolved(style)
    line_presentation = line_presentation or _lines(style)
    if point_presentation is None:
        point_presentation = [PresentationAttributes(fill=a.stroke, stroke=None)
                              for a in line_presentation]

    plot = Plot()
    _decorate(plot, frame, decor, x_axis_title, y_axis_title)
    for i, pts in enumerate(groups):
        plot.add(DataLine(pts, frame.cs, smooth=smooth,
                          presentation=cycle(line_presentation, i)))
        if cycle(sizes, i) > 0:
            plot.add(ScatterPoints(pts, frame.cs, size=cycle(sizes, i), symbol=symbol or CIRCLE,
                                   presentation=cycle(point_presentation, i)))
    plot.add(_title(frame, decor, title))
    logger.debug("created line chart with %d series", len(groups))
    return plot
