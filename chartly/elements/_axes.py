"""Continuous axes: axis line, ticks, tick labels, axis title and grid.

Axes are defined by two data-space end points.  Where the coordinate system
maps the axis direction to a straight plot-space line, tick positions are
spaced evenly in plot space (so a logarithmic axis gets geometrically spaced
values); otherwise they are spaced evenly in data space.  Tick and label
orientation follows the local plot-space tangent, estimated with
``get_around`` one resolution step either side of the tick.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

import numpy as np

from .._coords import ContinuousCoordinateSystem
from .._errors import InvalidInputError
from .._geometry import as_vector, modulus, normalize
from .._graphics import Graphics, GraphicsPath
from .._style import DEFAULT_AXIS_TITLE_FONT, GRID_COLOR, PresentationAttributes
from .._types import ElementKind, TextAnchor, TextBaseline
from ._base import PlotElement
from ._points import draw_text


def _segment(start, end, name) -> tuple[tuple[float, ...], tuple[float, ...]]:
    s = as_vector(start, f"{name} start")
    e = as_vector(end, f"{name} end")
    if s.size != e.size:
        raise InvalidInputError(f"{name} start and end have different lengths")
    if not np.any(e - s):
        raise InvalidInputError(f"{name} start and end coincide at {s.tolist()}")
    return tuple(s.tolist()), tuple(e.tolist())


def _check_intervals(count, name):
    if count < 1:
        raise InvalidInputError(f"{name} interval_count must be at least 1, got {count}")


def axis_point(cs: ContinuousCoordinateSystem, start: Sequence[float],
               end: Sequence[float], t: float) -> np.ndarray:
    """Data-space point a fraction *t* of the way along the axis."""
    s = np.asarray(start, dtype=float)
    e = np.asarray(end, dtype=float)
    if cs.is_direction_straight(e - s):
        ps, pe = cs.to_plot_coordinates(s), cs.to_plot_coordinates(e)
        return cs.to_data_coordinates(ps * (1 - t) + pe * t)
    return s + (e - s) * t


def axis_normal(cs: ContinuousCoordinateSystem, point: np.ndarray,
                unit_direction: np.ndarray) -> np.ndarray:
    """Plot-space unit normal to the axis at *point* (tangent rotated +90 deg)."""
    prev = cs.to_plot_coordinates(cs.get_around(point, -unit_direction))
    nxt = cs.to_plot_coordinates(cs.get_around(point, unit_direction))
    deriv = normalize(nxt - prev)
    return np.array([-deriv[1], deriv[0]])


def _unit(start, end) -> np.ndarray:
    return normalize(np.asarray(end, dtype=float) - np.asarray(start, dtype=float))


def _major_minor(i: int) -> float:
    return 3.0 if i % 2 == 0 else 2.0


# ---------------------------------------------------------------------------
# Axis line
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ContinuousAxis(PlotElement):
    kind = ElementKind.AXIS

    start: Sequence[float]
    end: Sequence[float]
    coordinate_system: ContinuousCoordinateSystem
    arrow_size: float = 3.0
    presentation: PresentationAttributes = field(default_factory=PresentationAttributes)
    tag: Optional[str] = None

    def __post_init__(self):
        start, end = _segment(self.start, self.end, "axis")
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)


def plot_axis(axis: ContinuousAxis, target: Graphics) -> None:
    cs = axis.coordinate_system
    start = np.asarray(axis.start)
    end = np.asarray(axis.end)
    direction = end - start
    p_start, p_end = cs.to_plot_coordinates(start), cs.to_plot_coordinates(end)

    if cs.is_linear or cs.is_direction_straight(direction):
        path = GraphicsPath().move_to(p_start).line_to(p_end)
        angle = np.arctan2(p_end[1] - p_start[1], p_end[0] - p_start[0])
    else:
        res = cs.resolution
        count = max(1, int(np.max(np.ceil(np.abs(direction[:len(res)]) / res))))
        samples = [cs.to_plot_coordinates(start + direction * i / count) for i in range(count + 1)]
        path = GraphicsPath()
        for p in samples:
            path.line_to(p)
        angle = np.arctan2(samples[-1][1] - samples[-2][1], samples[-1][0] - samples[-2][0])

    pa = axis.presentation
    if pa.stroke is not None:
        target.stroke_path(path, pa.stroke, pa.line_width, pa.line_cap, pa.line_join,
                           pa.line_dash, tag=axis.tag)

    if axis.arrow_size > 0:
        s = axis.arrow_size * pa.line_width
        arrow = GraphicsPath().move_to(-s, -s).line_to(s, 0).line_to(-s, s).close()
        target.save()
        target.translate(p_end[0], p_end[1])
        target.rotate(angle)
        if pa.fill is not None:
            target.fill_path(arrow, pa.fill, tag=target.unique_tag(axis.tag, "@arrowFill"))
        if pa.stroke is not None:
            target.stroke_path(arrow, pa.stroke, pa.line_width, pa.line_cap, pa.line_join,
                               pa.line_dash, tag=target.unique_tag(axis.tag, "@arrowStroke"))
        target.restore()


# ---------------------------------------------------------------------------
# Ticks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ContinuousAxisTicks(PlotElement):
    """``interval_count + 1`` ticks; ``size_above(i)``/``size_below(i)`` give
    each tick's extent on either side of the axis."""

    kind = ElementKind.AXIS_TICKS

    start: Sequence[float]
    end: Sequence[float]
    coordinate_system: ContinuousCoordinateSystem
    interval_count: int = 10
    size_above: Callable[[int], float] = _major_minor
    size_below: Callable[[int], float] = _major_minor
    presentation: PresentationAttributes = field(default_factory=PresentationAttributes)
    tag: Optional[str] = None

    def __post_init__(self):
        start, end = _segment(self.start, self.end, "ticks")
        _check_intervals(self.interval_count, "ticks")
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)


def plot_ticks(ticks: ContinuousAxisTicks, target: Graphics) -> None:
    pa = ticks.presentation
    if pa.stroke is None:
        return
    cs = ticks.coordinate_system
    unit = _unit(ticks.start, ticks.end)

    path = GraphicsPath()
    for i in range(ticks.interval_count + 1):
        pt = axis_point(cs, ticks.start, ticks.end, i / ticks.interval_count)
        point = cs.to_plot_coordinates(pt)
        perp = axis_normal(cs, pt, unit)
        above, below = ticks.size_above(i), ticks.size_below(i)
        if above + below > 0:
            path.move_to(point - above * perp).line_to(point + below * perp)

    target.stroke_path(path, pa.stroke, pa.line_width, pa.line_cap, pa.line_join,
                       pa.line_dash, tag=ticks.tag)


# ---------------------------------------------------------------------------
# Tick labels
# ---------------------------------------------------------------------------

def format_tick_value(value: float, span: float) -> str:
    """Format *value* with enough decimals for ticks *span* apart."""
    span = abs(span)
    if span >= 10:
        decimals = 0
    elif span >= 1:
        decimals = 1
    else:
        decimals = -int(np.floor(np.log10(span))) + 1
    return f"{round(value, decimals) + 0.0:.{decimals}f}"


@dataclass(frozen=True)
class ContinuousAxisLabels(PlotElement):
    """Tick labels at ``interval_count + 1`` positions along an axis.

    ``position(i)`` is the offset from the axis along its normal.  With
    ``rotation`` unset, labels are rotated to point along the normal.
    ``text_format(point, i)`` returns the label text or None to skip it;
    the default is :meth:`default_format`.
    """

    kind = ElementKind.AXIS_LABELS

    start: Sequence[float]
    end: Sequence[float]
    coordinate_system: ContinuousCoordinateSystem
    interval_count: int = 10
    position: Callable[[int], float] = lambda i: 10.0
    text_format: Optional[Callable[[np.ndarray, int], Optional[str]]] = None
    rotation: Optional[float] = None
    anchor: TextAnchor = TextAnchor.LEFT
    baseline: TextBaseline = TextBaseline.MIDDLE
    presentation: PresentationAttributes = field(
        default_factory=lambda: PresentationAttributes(stroke=None))
    tag: Optional[str] = None

    def __post_init__(self):
        start, end = _segment(self.start, self.end, "labels")
        _check_intervals(self.interval_count, "labels")
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    def default_format(self, point: Sequence[float]) -> str:
        """Axis-aligned axes show the value of the dominant component;
        oblique axes show the fraction of the way along the axis."""
        start = np.asarray(self.start)
        direction = np.asarray(self.end) - start
        length = modulus(direction)
        k = int(np.argmax(np.abs(direction)))
        if abs(direction[k]) / length >= 0.9:
            return format_tick_value(float(point[k]), direction[k] / self.interval_count)
        return f"{modulus(np.asarray(point)[:len(start)] - start) / length:.0%}"

    def label(self, point: np.ndarray, i: int) -> Optional[str]:
        if self.text_format is None:
            return self.default_format(point)
        return self.text_format(point, i)


def plot_labels(labels: ContinuousAxisLabels, target: Graphics) -> None:
    cs = labels.coordinate_system
    unit = _unit(labels.start, labels.end)

    for i in range(labels.interval_count + 1):
        pt = axis_point(cs, labels.start, labels.end, i / labels.interval_count)
        text = labels.label(pt, i)
        if text is None:
            continue
        point = cs.to_plot_coordinates(pt)
        perp = axis_normal(cs, pt, unit)
        origin = point + labels.position(i) * perp

        target.save()
        target.translate(origin[0], origin[1])
        target.rotate(np.arctan2(perp[1], perp[0]) if labels.rotation is None else labels.rotation)
        draw_text(target, text, labels.presentation, labels.anchor, labels.baseline,
                  target.unique_tag(labels.tag, f"@{i}"),
                  target.unique_tag(labels.tag, f"@stroke{i}"))
        target.restore()


# ---------------------------------------------------------------------------
# Axis title
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ContinuousAxisTitle(PlotElement):
    """Title centred on an axis, ``position`` units away along its normal."""

    kind = ElementKind.AXIS_TITLE

    title: Optional[str]
    start: Sequence[float]
    end: Sequence[float]
    coordinate_system: ContinuousCoordinateSystem
    position: float = 30.0
    rotation: Optional[float] = None
    anchor: TextAnchor = TextAnchor.CENTER
    baseline: TextBaseline = TextBaseline.MIDDLE
    presentation: PresentationAttributes = field(
        default_factory=lambda: PresentationAttributes(stroke=None, font=DEFAULT_AXIS_TITLE_FONT))
    tag: Optional[str] = None

    def __post_init__(self):
        start, end = _segment(self.start, self.end, "axis title")
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)


def plot_axis_title(title: ContinuousAxisTitle, target: Graphics) -> None:
    if not title.title:
        return
    cs = title.coordinate_system
    pt = axis_point(cs, title.start, title.end, 0.5)
    perp = axis_normal(cs, pt, _unit(title.start, title.end))
    origin = cs.to_plot_coordinates(pt) + title.position * perp
    base_angle = np.arctan2(perp[1], perp[0]) if title.rotation is None else title.rotation

    target.save()
    target.translate(origin[0], origin[1])
    target.rotate(base_angle - np.pi / 2)
    draw_text(target, title.title, title.presentation, title.anchor, title.baseline,
              title.tag, target.unique_tag(title.tag, "@stroke"))
    target.restore()


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Grid(PlotElement):
    """``interval_count + 1`` lines, each joining matching points on two sides."""

    kind = ElementKind.GRID

    side1_start: Sequence[float]
    side1_end: Sequence[float]
    side2_start: Sequence[float]
    side2_end: Sequence[float]
    coordinate_system: ContinuousCoordinateSystem
    interval_count: int = 10
    presentation: PresentationAttributes = field(
        default_factory=lambda: PresentationAttributes(stroke=GRID_COLOR))
    tag: Optional[str] = None

    def __post_init__(self):
        s1, e1 = _segment(self.side1_start, self.side1_end, "grid side 1")
        s2, e2 = _segment(self.side2_start, self.side2_end, "grid side 2")
        _check_intervals(self.interval_count, "grid")
        object.__setattr__(self, "side1_start", s1)
        object.__setattr__(self, "side1_end", e1)
        object.__setattr__(self, "side2_start", s2)
        object.__setattr__(self, "side2_end", e2)


def plot_grid(grid: Grid, target: Graphics) -> None:
    pa = grid.presentation
    if pa.stroke is None:
        return
    cs = grid.coordinate_system
    path = GraphicsPath()
    for i in range(grid.interval_count + 1):
        t = i / grid.interval_count
        p1 = cs.to_plot_coordinates(axis_point(cs, grid.side1_start, grid.side1_end, t))
        p2 = cs.to_plot_coordinates(axis_point(cs, grid.side2_start, grid.side2_end, t))
        path.move_to(p1).line_to(p2)
    target.stroke_path(path, pa.stroke, pa.line_width, pa.line_cap, pa.line_join,
                       pa.line_dash, tag=grid.tag)
