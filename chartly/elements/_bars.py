"""Bar element: plain, stacked and clustered bars on a categorical axis.

Each bar reaches halfway to its neighbours along the categorical axis, less
``margin``; the outermost bars mirror their one neighbour, and a lone bar
pretends its neighbour sits one data unit away.  Bar edges are found in
plot space, so bars stay rectangular on logarithmic value axes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from .._coords import ContinuousCoordinateSystem
from .._errors import InvalidInputError
from .._graphics import Graphics, GraphicsPath
from .._style import PresentationAttributes
from .._types import ElementKind
from ._base import PlotElement


def _fraction(value: float, name: str) -> float:
    if not 0 <= value <= 1:
        raise InvalidInputError(f"{name} must be within [0, 1], got {value}")
    return float(value)


@dataclass(frozen=True)
class Bars(PlotElement):
    """Bars rising from ``baseline`` at each categorical position.

    ``data`` rows are ``(position, value, ...)``: the position on the
    categorical axis (x when ``vertical``) followed by one or more values.
    A single value draws one bar.  Several values are piled up from the
    baseline when ``stacked``, and stand side by side otherwise, separated
    by ``cluster_margin`` (a fraction of one bar's width).  Segment ``j`` of
    every row uses ``presentation[j % len(presentation)]``.
    """

    kind = ElementKind.BARS

    data: Sequence[Sequence[float]]
    coordinate_system: ContinuousCoordinateSystem
    vertical: bool = True
    stacked: bool = False
    baseline: float = 0.0
    margin: float = 0.0
    cluster_margin: float = 0.0
    presentation: Sequence[PresentationAttributes] = field(
        default_factory=lambda: (PresentationAttributes(),))
    tag: Optional[str] = None

    def __post_init__(self):
        rows = tuple(tuple(float(v) for v in row) for row in self.data)
        if not rows:
            raise InvalidInputError("bars need at least one row")
        for row in rows:
            if len(row) < 2:
                raise InvalidInputError(f"bar row {row} needs a position and at least one value")
            if not np.all(np.isfinite(row)):
                raise InvalidInputError(f"bar row {row} contains non-finite values")
        if not np.isfinite(self.baseline):
            raise InvalidInputError(f"bar baseline must be finite, got {self.baseline}")
        _fraction(self.margin, "margin")
        _fraction(self.cluster_margin, "cluster_margin")

        presentation = self.presentation
        if isinstance(presentation, PresentationAttributes):
            presentation = (presentation,)
        presentation = tuple(presentation)
        if not presentation:
            raise InvalidInputError("bars need at least one presentation")

        object.__setattr__(self, "data", tuple(sorted(rows, key=lambda r: r[0])))
        object.__setattr__(self, "presentation", presentation)

    def _point(self, position: float, value: float) -> np.ndarray:
        pt = (position, value) if self.vertical else (value, position)
        with np.errstate(divide="ignore", invalid="ignore"):
            out = self.coordinate_system.to_plot_coordinates(pt)
        if not np.all(np.isfinite(out)):
            raise InvalidInputError(
                f"bar point {pt} has no finite plot position in {self.coordinate_system!r}")
        return out

    def slots(self) -> list[tuple[np.ndarray, np.ndarray, np.ndarray]]:
        """``(base, side1, side2)`` per row, in plot space.

        ``base`` is the row's baseline point; ``side1`` and ``side2`` are
        where the bar's two long edges meet the baseline.
        """
        bases = [self._point(row[0], self.baseline) for row in self.data]
        keep = 0.5 + self.margin * 0.5
        reach = 0.5 - self.margin * 0.5

        def mid(i, j):
            return bases[i] * keep + bases[j] * reach

        out = []
        n = len(bases)
        for i, base in enumerate(bases):
            if n == 1:
                lone = self._point(self.data[0][0] + 1, self.baseline)
                side2 = base * keep + lone * reach
                side1 = 2 * base - side2
            elif i == 0:
                side2 = mid(i, i + 1)
                side1 = 2 * base - side2
            elif i == n - 1:
                side1 = mid(i, i - 1)
                side2 = 2 * base - side1
            else:
                side1, side2 = mid(i, i - 1), mid(i, i + 1)
            out.append((base, side1, side2))
        return out

    def segments(self) -> list[list[tuple[int, GraphicsPath]]]:
        """Closed outlines per row, each paired with its segment index."""
        out = []
        for row, (base, side1, side2) in zip(self.data, self.slots()):
            position, values = row[0], row[1:]
            quads = []

            def quad(start, end, lo, hi):
                a = side1 + (side2 - side1) * start
                b = side1 + (side2 - side1) * end
                lo_shift = self._point(position, lo) - base
                hi_shift = self._point(position, hi) - base
                return (GraphicsPath().move_to(a + lo_shift).line_to(a + hi_shift)
                        .line_to(b + hi_shift).line_to(b + lo_shift).close())

            if len(values) == 1 or self.stacked:
                levels = np.concatenate([[self.baseline], np.cumsum(values)])
                for j in range(len(values)):
                    if levels[j] != levels[j + 1]:
                        quads.append((j, quad(0.0, 1.0, levels[j], levels[j + 1])))
            else:
                k = len(values)
                for j, v in enumerate(values):
                    start = (j + self.cluster_margin * 0.5) / k
                    end = (j + 1 - self.cluster_margin * 0.5) / k
                    if v != self.baseline:
                        quads.append((j, quad(start, end, self.baseline, v)))
            out.append(quads)
        return out


def plot_bars(bars: Bars, target: Graphics) -> None:
    for i, (row, quads) in enumerate(zip(bars.data, bars.segments())):
        for j, path in quads:
            suffix = f"@{i}" if len(row) == 2 else f"@{i}/{j}"
            pa = bars.presentation[j % len(bars.presentation)]
            if pa.fill is not None:
                target.fill_path(path, pa.fill, tag=target.unique_tag(bars.tag, suffix))
            if pa.stroke is not None:
                target.stroke_path(path, pa.stroke, pa.line_width, pa.line_cap, pa.line_join,
                                   pa.line_dash, tag=target.unique_tag(bars.tag, f"{suffix}_stroke"))
