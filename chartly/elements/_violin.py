"""Violin plot element — histogram silhouette, one- or two-sided."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import numpy as np

from .._coords import ContinuousCoordinateSystem
from .._errors import InvalidInputError
from .._geometry import as_vector
from .._graphics import Graphics, GraphicsPath
from .._stats import iqr
from .._style import PresentationAttributes
from .._types import ElementKind, ViolinSide
from ._base import PlotElement


@dataclass(frozen=True)
class Violin(PlotElement):
    kind = ElementKind.VIOLIN

    position: Sequence[float]
    direction: Sequence[float]
    data: Iterable[float]
    coordinate_system: ContinuousCoordinateSystem
    width: float = 10.0
    smooth: bool = True
    sides: ViolinSide = ViolinSide.BOTH
    presentation: PresentationAttributes = field(
        default_factory=lambda: PresentationAttributes(fill="white"))
    tag: Optional[str] = None

    def __post_init__(self):
        values = np.asarray(list(self.data), dtype=float)
        if values.size == 0:
            raise InvalidInputError("violin needs at least one data value")
        if not np.all(np.isfinite(values)):
            raise InvalidInputError("violin data contains non-finite values")
        object.__setattr__(self, "data", tuple(values.tolist()))
        object.__setattr__(self, "position", tuple(as_vector(self.position, "violin position").tolist()))
        object.__setattr__(self, "direction", tuple(as_vector(self.direction, "violin direction").tolist()))


def violin_bins(data: Sequence[float]) -> np.ndarray:
    """Histogram counts with Freedman-Diaconis bin width (at least one bin)."""
    values = np.asarray(data, dtype=float)
    lo, hi = values.min(), values.max()
    h = 2 * iqr(values) / len(values) ** (1 / 3)
    if hi > lo and h > 0:
        count = max(1, int(np.ceil((hi - lo) / h)))
    else:
        count = 1
    bins = np.zeros(count, dtype=int)
    if hi > lo:
        idx = np.minimum(count - 1, np.floor((values - lo) / (hi - lo) * count).astype(int))
        np.add.at(bins, idx, 1)
    else:
        bins[0] = len(values)
    return bins


def plot_violin(violin: Violin, target: Graphics) -> None:
    cs = violin.coordinate_system
    values = np.asarray(violin.data)
    lo, hi = float(values.min()), float(values.max())
    bins = violin_bins(values)
    count = len(bins)
    bin_max = bins.max()

    pos = np.asarray(violin.position)[:2]
    d = np.asarray(violin.direction)[:2]
    perp = np.array([d[1], -d[0]])

    def at(along, across=0.0):
        return cs.to_plot_coordinates(pos + d * along + perp * across)

    side, opposite = [], []
    for i, n in enumerate(bins):
        start = lo + (hi - lo) / count * i
        end = lo + (hi - lo) / count * (i + 1)
        half = n / bin_max * violin.width

        if i == 0:
            # Taper to the axis when the silhouette widens after the first bin.
            if count > 1 and bins[1] > n:
                side.append(at(start))
                opposite.append(at(start))
            else:
                side.append(at(start, half))
                opposite.append(at(start, -half))

        side.append(at((start + end) / 2, half))
        opposite.append(at((start + end) / 2, -half))

        if i == count - 1:
            if count > 1 and bins[i - 1] > n:
                side.append(at(end))
                opposite.append(at(end))
            else:
                side.append(at(end, half))
                opposite.append(at(end, -half))

    opposite.reverse()
    bottom, top = at(lo), at(hi)

    path = GraphicsPath()
    if violin.sides in (ViolinSide.LEFT, ViolinSide.BOTH):
        if violin.smooth:
            path.add_smooth_spline(opposite)
        else:
            for p in opposite:
                path.line_to(p)
    else:
        path.move_to(top).line_to(bottom)

    if violin.sides in (ViolinSide.RIGHT, ViolinSide.BOTH):
        if violin.smooth:
            path.add_smooth_spline(side)
        else:
            for p in side:
                path.line_to(p)
    else:
        path.line_to(bottom).line_to(top)
    path.close()

    pa = violin.presentation
    if pa.fill is not None:
        target.fill_path(path, pa.fill, tag=violin.tag)
    if pa.stroke is not None:
        target.stroke_path(path, pa.stroke, pa.line_width, pa.line_cap, pa.line_join,
                           pa.line_dash, tag=target.unique_tag(violin.tag, "@stroke"))
