"""Pie and doughnut chart element."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import numpy as np

from .._coords import ContinuousCoordinateSystem
from .._errors import InvalidInputError
from .._geometry import as_vector
from .._graphics import Graphics, GraphicsPath
from .._style import PresentationAttributes, cycle
from .._types import ElementKind
from ._base import PlotElement


@dataclass(frozen=True)
class Pie(PlotElement):
    """Slices proportional to ``data``.

    Radii are per-axis data-space lengths, so a pie drawn in a system with
    unequal scales still comes out circular if the radii compensate.  A
    nonzero ``inner_radius`` makes a doughnut.
    """

    kind = ElementKind.PIE

    data: Iterable[float]
    centre: Sequence[float]
    outer_radius: Sequence[float]
    coordinate_system: ContinuousCoordinateSystem
    inner_radius: Sequence[float] = (0.0, 0.0)
    start_angle: float = 0.0
    clockwise: bool = False
    presentation: Sequence[PresentationAttributes] = field(
        default_factory=lambda: (PresentationAttributes(),))
    tag: Optional[str] = None

    def __post_init__(self):
        values = np.asarray(list(self.data), dtype=float)
        if values.size == 0 or not np.all(np.isfinite(values)):
            raise InvalidInputError("pie needs a non-empty list of finite values")
        if np.any(values < 0):
            raise InvalidInputError("pie values must not be negative")
        if not np.any(values > 0):
            raise InvalidInputError("pie needs at least one positive value")
        if not self.presentation:
            raise InvalidInputError("pie needs at least one presentation attribute set")
        object.__setattr__(self, "data", tuple(values.tolist()))
        object.__setattr__(self, "presentation", tuple(self.presentation))
        for name in ("centre", "outer_radius", "inner_radius"):
            object.__setattr__(self, name, tuple(as_vector(getattr(self, name), f"pie {name}").tolist()))

    @property
    def is_doughnut(self) -> bool:
        return any(r != 0 for r in self.inner_radius)


def _ring(pie: Pie, radius: np.ndarray, angles: np.ndarray) -> np.ndarray:
    cs = pie.coordinate_system
    centre = np.asarray(pie.centre)[:2]
    sign = -1 if pie.clockwise else 1
    return np.array([cs.to_plot_coordinates(centre + radius * [np.cos(sign * a), np.sin(sign * a)])
                     for a in angles])


def plot_pie(pie: Pie, target: Graphics) -> None:
    values = np.asarray(pie.data)
    total = values.sum()
    min_angle = values[values > 0].min() / total * 2 * np.pi
    min_angle = min(max(min_angle, 0.1), 1.0)

    outer = np.asarray(pie.outer_radius)[:2]
    inner = np.asarray(pie.inner_radius)[:2]
    centre = pie.coordinate_system.to_plot_coordinates(np.asarray(pie.centre)[:2])

    current = pie.start_angle
    for i, value in enumerate(values):
        end = current + value / total * 2 * np.pi
        n = int((end - current) / min_angle * 10) + 1
        angles = np.linspace(current, end, max(n, 2))
        current = end

        path = GraphicsPath()
        outer_arc = _ring(pie, outer, angles)[::-1]
        if pie.is_doughnut:
            path.add_smooth_spline(_ring(pie, inner, angles))
            path.line_to(outer_arc[0])
        else:
            path.move_to(centre).line_to(outer_arc[0])
        path.add_smooth_spline(outer_arc)
        path.close()

        attributes = cycle(pie.presentation, i)
        if attributes.fill is not None:
            target.fill_path(path, attributes.fill, tag=target.unique_tag(pie.tag, f"@{i}"))
        if attributes.stroke is not None:
            target.stroke_path(path, attributes.stroke, attributes.line_width,
                               attributes.line_cap, attributes.line_join, attributes.line_dash,
                               tag=target.unique_tag(pie.tag, f"@{i}_stroke"))
