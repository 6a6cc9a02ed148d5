"""Point-based elements: scatter symbols, lines, areas and text labels."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

import numpy as np

from .._coords import ContinuousCoordinateSystem
from .._errors import InvalidInputError
from .._graphics import Graphics, GraphicsPath
from .._style import PresentationAttributes
from .._types import ElementKind, TextAnchor, TextBaseline, Vector
from ._base import PlotElement
from ._symbols import CIRCLE


def _points(data, name) -> tuple[tuple[float, ...], ...]:
    pts = tuple(tuple(float(c) for c in p) for p in data)
    if not pts:
        raise InvalidInputError(f"{name} needs at least one point")
    return pts


@dataclass(frozen=True)
class ScatterPoints(PlotElement):
    kind = ElementKind.SCATTER_POINTS

    data: Sequence[Vector]
    coordinate_system: ContinuousCoordinateSystem
    size: float = 2.0
    symbol: Any = CIRCLE
    presentation: PresentationAttributes = field(default_factory=PresentationAttributes)
    tag: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "data", _points(self.data, "scatter"))


def plot_scatter_points(el: ScatterPoints, target: Graphics) -> None:
    for i, p in enumerate(el.data):
        pt = el.coordinate_system.to_plot_coordinates(p)
        target.save()
        target.translate(pt[0], pt[1])
        target.scale(el.size)
        el.symbol.plot(target, el.presentation, target.unique_tag(el.tag, f"@{i}"))
        target.restore()


@dataclass(frozen=True)
class DataLine(PlotElement):
    kind = ElementKind.DATA_LINE

    data: Sequence[Vector]
    coordinate_system: ContinuousCoordinateSystem
    smooth: bool = False
    presentation: PresentationAttributes = field(default_factory=PresentationAttributes)
    tag: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "data", _points(self.data, "line"))


def _trace(path: GraphicsPath, points: np.ndarray, smooth: bool) -> GraphicsPath:
    if smooth:
        return path.add_smooth_spline(points)
    for p in points:
        path.line_to(p)
    return path


def plot_data_line(el: DataLine, target: Graphics) -> None:
    pa = el.presentation
    if pa.stroke is None:
        return
    pts = np.array([el.coordinate_system.to_plot_coordinates(p) for p in el.data])
    path = _trace(GraphicsPath(), pts, el.smooth)
    target.stroke_path(path, pa.stroke, pa.line_width, pa.line_cap, pa.line_join,
                       pa.line_dash, tag=el.tag)


@dataclass(frozen=True)
class Area(PlotElement):
    """Region between a line through ``data`` and ``baseline(point)``."""

    kind = ElementKind.AREA

    data: Sequence[Vector]
    baseline: Callable[[tuple[float, ...]], Vector]
    coordinate_system: ContinuousCoordinateSystem
    smooth: bool = False
    presentation: PresentationAttributes = field(default_factory=PresentationAttributes)
    tag: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "data", _points(self.data, "area"))


def plot_area(el: Area, target: Graphics) -> None:
    cs = el.coordinate_system
    pts = np.array([cs.to_plot_coordinates(p) for p in el.data])
    base = np.array([cs.to_plot_coordinates(el.baseline(p)) for p in el.data])[::-1]

    outline = _trace(GraphicsPath(), pts, el.smooth)
    outline = _trace(outline, base, el.smooth).close()

    pa = el.presentation
    if pa.fill is not None:
        target.fill_path(outline, pa.fill, tag=el.tag)
    if pa.stroke is not None:
        target.stroke_path(_trace(GraphicsPath(), pts, el.smooth), pa.stroke, pa.line_width,
                           pa.line_cap, pa.line_join, pa.line_dash,
                           tag=target.unique_tag(el.tag, "@stroke"))


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

def _anchor_offset(text: str, attributes: PresentationAttributes, anchor: TextAnchor) -> float:
    if anchor is TextAnchor.LEFT:
        return 0.0
    width, _ = Graphics.measure_text(text, attributes.font)
    return -width if anchor is TextAnchor.RIGHT else -width * 0.5


def draw_text(target: Graphics, text: str, attributes: PresentationAttributes,
              anchor: TextAnchor, baseline: TextBaseline,
              fill_tag: Optional[str], stroke_tag: Optional[str]) -> None:
    """Draw *text* at the current origin, honouring anchor and baseline."""
    x = _anchor_offset(text, attributes, anchor)
    if attributes.fill is not None:
        target.fill_text(x, 0, text, attributes.font, attributes.fill, baseline, tag=fill_tag)
    if attributes.stroke is not None:
        target.stroke_text(x, 0, text, attributes.font, attributes.stroke, baseline,
                           attributes.line_width, attributes.line_cap, attributes.line_join,
                           attributes.line_dash, tag=stroke_tag)


@dataclass(frozen=True)
class TextLabel(PlotElement):
    kind = ElementKind.TEXT_LABEL

    text: str
    position: Vector
    coordinate_system: ContinuousCoordinateSystem
    rotation: float = 0.0
    anchor: TextAnchor = TextAnchor.CENTER
    baseline: TextBaseline = TextBaseline.MIDDLE
    presentation: PresentationAttributes = field(
        default_factory=lambda: PresentationAttributes(stroke=None))
    tag: Optional[str] = None


def plot_text_label(el: TextLabel, target: Graphics) -> None:
    if not el.text:
        return
    pt = el.coordinate_system.to_plot_coordinates(el.position)
    target.save()
    target.translate(pt[0], pt[1])
    target.rotate(el.rotation)
    draw_text(target, el.text, el.presentation, el.anchor, el.baseline,
              el.tag, target.unique_tag(el.tag, "@stroke"))
    target.restore()


@dataclass(frozen=True)
class DataLabels(PlotElement):
    """One label per data point; ``label(i, point)`` returning None skips it."""

    kind = ElementKind.DATA_LABELS

    data: Sequence[Vector]
    label: Callable[[int, tuple[float, ...]], Any]
    coordinate_system: ContinuousCoordinateSystem
    rotation: Callable[[int, tuple[float, ...]], float] = lambda i, p: 0.0
    margin: Callable[[int, tuple[float, ...]], tuple[float, float]] = lambda i, p: (0.0, 0.0)
    anchor: TextAnchor = TextAnchor.CENTER
    baseline: TextBaseline = TextBaseline.MIDDLE
    presentation: PresentationAttributes = field(
        default_factory=lambda: PresentationAttributes(stroke=None))
    tag: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "data", _points(self.data, "labels"))


def plot_data_labels(el: DataLabels, target: Graphics) -> None:
    for i, p in enumerate(el.data):
        text = el.label(i, p)
        if text is None:
            continue
        pt = el.coordinate_system.to_plot_coordinates(p) + np.asarray(el.margin(i, p), dtype=float)
        target.save()
        target.translate(pt[0], pt[1])
        target.rotate(el.rotation(i, p))
        draw_text(target, str(text), el.presentation, el.anchor, el.baseline,
                  target.unique_tag(el.tag, f"@{i}"), target.unique_tag(el.tag, f"@stroke{i}"))
        target.restore()
