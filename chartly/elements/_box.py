"""Box plot element — box, whiskers, median line, optional notch and centre symbol."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import numpy as np

from .._coords import ContinuousCoordinateSystem
from .._geometry import as_vector, modulus
from .._graphics import Graphics, GraphicsPath
from .._style import PresentationAttributes
from .._types import ElementKind
from ._base import PlotElement
from ._symbols import CIRCLE


@dataclass(frozen=True)
class BoxPlot(PlotElement):
    """A single box along ``direction`` from ``position``.

    ``whisker1 <= box1 <= box2 <= whisker2`` are offsets along the direction
    (usually the lower whisker, quartiles and upper whisker minus the
    median, with ``position`` sitting on the median).  ``width`` is the
    half-width of the box in data units, perpendicular to the direction.
    """

    kind = ElementKind.BOX_PLOT

    position: Sequence[float]
    direction: Sequence[float]
    whisker1: float
    box1: float
    box2: float
    whisker2: float
    coordinate_system: ContinuousCoordinateSystem
    width: float = 10.0
    whisker_width: float = 0.5
    notch_width: float = 0.5
    notch_size: float = 0.0
    box_presentation: PresentationAttributes = field(
        default_factory=lambda: PresentationAttributes(fill="white"))
    whiskers_presentation: PresentationAttributes = field(
        default_factory=lambda: PresentationAttributes(fill=None))
    centre_presentation: PresentationAttributes = field(
        default_factory=lambda: PresentationAttributes(fill=None, stroke=None))
    centre_symbol: Any = CIRCLE
    tag: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "position", tuple(as_vector(self.position, "box position").tolist()))
        object.__setattr__(self, "direction", tuple(as_vector(self.direction, "box direction").tolist()))


def plot_box(box: BoxPlot, target: Graphics) -> None:
    cs = box.coordinate_system
    pos = np.asarray(box.position)[:2]
    d = np.asarray(box.direction)[:2]
    perp = np.array([-d[1], d[0]])

    def at(along, across=0.0):
        return cs.to_plot_coordinates(pos + d * along + perp * across)

    ww = box.width * box.whisker_width

    whisker1, whisker2 = at(box.whisker1), at(box.whisker2)
    whisker1_left, whisker1_right = at(box.whisker1, ww), at(box.whisker1, -ww)
    whisker2_left, whisker2_right = at(box.whisker2, ww), at(box.whisker2, -ww)
    box1_left, box1_right = at(box.box1, box.width), at(box.box1, -box.width)
    box2_left, box2_right = at(box.box2, box.width), at(box.box2, -box.width)

    whiskers = (GraphicsPath()
                .move_to(whisker1_left).line_to(whisker1_right)
                .move_to(whisker1).line_to(whisker2)
                .move_to(whisker2_left).line_to(whisker2_right))

    notched = box.notch_size != 0 and box.notch_width != 1
    if notched:
        nw = box.width * box.notch_width
        median_left, median_right = at(0, nw), at(0, -nw)
        notch1_left, notch1_right = at(-box.notch_size, box.width), at(-box.notch_size, -box.width)
        notch2_left, notch2_right = at(box.notch_size, box.width), at(box.notch_size, -box.width)
        outline = (GraphicsPath().move_to(box1_left).line_to(box1_right)
                   .line_to(notch1_right).line_to(median_right).line_to(notch2_right)
                   .line_to(box2_right).line_to(box2_left)
                   .line_to(notch2_left).line_to(median_left).line_to(notch1_left)
                   .close())
    else:
        median_left, median_right = at(0, box.width), at(0, -box.width)
        outline = (GraphicsPath().move_to(box1_left).line_to(box1_right)
                   .line_to(box2_right).line_to(box2_left).close())
    median = GraphicsPath().move_to(median_left).line_to(median_right)

    wp, bp = box.whiskers_presentation, box.box_presentation
    if wp.stroke is not None:
        target.stroke_path(whiskers, wp.stroke, wp.line_width, wp.line_cap, wp.line_join,
                           wp.line_dash, tag=target.unique_tag(box.tag, "@whiskers"))
    if bp.fill is not None:
        target.fill_path(outline, bp.fill, tag=box.tag)
    if bp.stroke is not None:
        target.stroke_path(outline, bp.stroke, bp.line_width, bp.line_cap, bp.line_join,
                           bp.line_dash, tag=target.unique_tag(box.tag, "@stroke"))
        target.stroke_path(median, bp.stroke, bp.line_width * 2,
                           bp.line_cap if notched else "butt", bp.line_join,
                           bp.line_dash, tag=target.unique_tag(box.tag, "@median"))

    cp = box.centre_presentation
    if cp.draws_anything:
        radius = min(modulus(median_left - median_right),
                     modulus(box1_left - box2_left),
                     modulus(box1_right - box2_right)) * 0.45
        centre = (median_left + median_right) * 0.5
        target.save()
        target.translate(centre[0], centre[1])
        target.scale(radius)
        box.centre_symbol.plot(target, cp, target.unique_tag(box.tag, "@centre"))
        target.restore()
