"""Swarm (beeswarm) plot element — non-overlapping point packing along an axis.

Values are placed in ascending order.  Each point starts at its natural
position on the swarm axis; if it is closer than ``required_distance`` to a
point already placed, it is pushed sideways, once towards each perpendicular
direction, until it clears every placed point.  The side that ends up closer
to the natural position wins, so smaller values settle nearest the centre
line and later points fan out around them.
"""
from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

import numpy as np

from .._coords import ContinuousCoordinateSystem
from .._errors import InvalidInputError, NonConvergenceWarning
from .._geometry import as_vector, modulus, normalize, perpendicular_vector
from .._graphics import Graphics
from .._logging import get_logger
from .._style import PresentationAttributes
from .._types import ElementKind
from ._base import PlotElement
from ._symbols import CIRCLE

logger = get_logger(__name__)

DEFAULT_MAX_ITERATIONS = 1000

# Steps overshoot the exact separation slightly so that a point never ends
# up tangent to its neighbour because of rounding.
OVERSHOOT = 1.0001


@dataclass(frozen=True)
class Swarm(PlotElement):
    """Swarm of ``data`` values along ``direction`` starting at ``position``.

    ``data`` is stored as a tuple sorted ascending; the order is what makes
    the placement deterministic.  ``point_size`` (the symbol radius) and the
    separation are in plot units; ``point_margin`` is a fraction of
    ``point_size``.
    """

    kind = ElementKind.SWARM

    position: Sequence[float]
    direction: Sequence[float]
    data: Iterable[float]
    coordinate_system: ContinuousCoordinateSystem
    point_size: float = 2.0
    point_margin: float = 0.25
    symbol: Any = CIRCLE
    presentation: PresentationAttributes = field(
        default_factory=lambda: PresentationAttributes(fill="white"))
    tag: Optional[str] = None
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self):
        position = as_vector(self.position, "swarm position")
        direction = as_vector(self.direction, "swarm direction")
        if position.size != direction.size:
            raise InvalidInputError(
                f"swarm position has {position.size} components but direction "
                f"has {direction.size}")
        if not np.any(direction):
            raise InvalidInputError("swarm direction must not be the zero vector")

        values = np.asarray(list(self.data), dtype=float)
        if values.size == 0:
            raise InvalidInputError("swarm needs at least one data value")
        if not np.all(np.isfinite(values)):
            raise InvalidInputError("swarm data contains non-finite values")
        if not self.point_size > 0:
            raise InvalidInputError(f"point_size must be positive, got {self.point_size}")
        if self.point_margin < 0:
            raise InvalidInputError(f"point_margin must be >= 0, got {self.point_margin}")
        if self.max_iterations < 1:
            raise InvalidInputError(
                f"max_iterations must be at least 1, got {self.max_iterations}")

        object.__setattr__(self, "position", tuple(position.tolist()))
        object.__setattr__(self, "direction", tuple(direction.tolist()))
        object.__setattr__(self, "data", tuple(sorted(values.tolist())))

    @property
    def required_distance(self) -> float:
        """Minimum centre-to-centre distance between two swarm points."""
        return self.point_size * 2 + self.point_margin * self.point_size

    # -- placement -----------------------------------------------------------

    @staticmethod
    def _nearest(pt: np.ndarray, placed: np.ndarray) -> tuple[np.ndarray | None, float]:
        if len(placed) == 0:
            return None, np.inf
        dists = np.hypot(placed[:, 0] - pt[0], placed[:, 1] - pt[1])
        i = int(np.argmin(dists))
        return placed[i], float(dists[i])

    def _local_perpendicular(self, pt: np.ndarray, perp: np.ndarray) -> np.ndarray:
        """Plot-space unit vector following *perp* at *pt* (finite difference)."""
        cs = self.coordinate_system
        around = cs.to_plot_coordinates(cs.get_around(cs.to_data_coordinates(pt), perp))
        u = normalize(around - pt)
        if not np.all(np.isfinite(u)) or modulus(u) == 0:
            raise InvalidInputError(
                f"perpendicular direction {perp.tolist()} collapses in plot space at {pt.tolist()}")
        return u

    def _propose(self, proj: np.ndarray, placed: np.ndarray,
                 perp: np.ndarray) -> tuple[np.ndarray, int]:
        """Push *proj* along *perp* until it clears every placed point."""
        required = self.required_distance
        pt = proj.copy()
        closest, min_dist = self._nearest(pt, placed)

        iterations = 0
        while min_dist < required:
            if iterations >= self.max_iterations:
                msg = (f"swarm point at {proj.tolist()} still {min_dist:.4g} from its "
                       f"neighbour (needs {required:.4g}) after {iterations} iterations")
                logger.warning(msg)
                warnings.warn(msg, NonConvergenceWarning, stacklevel=4)
                break
            u = self._local_perpendicular(pt, perp)
            d = pt - closest
            along = float(d @ u)
            disc = max(along * along - float(d @ d) + required * required, 0.0)
            pt = pt + u * (-along + np.sqrt(disc)) * OVERSHOOT
            closest, min_dist = self._nearest(pt, placed)
            iterations += 1
        return pt, iterations

    def place(self) -> np.ndarray:
        """Plot-space centres of the swarm points, shape ``(len(data), 2)``.

        Row ``i`` belongs to ``data[i]``.  Of the two candidate positions the
        one nearer the unperturbed projection is kept; on an exact tie the
        candidate pushed along ``+perpendicular_vector(direction)`` wins.
        """
        cs = self.coordinate_system
        position = np.asarray(self.position)
        direction = np.asarray(self.direction)
        perp1 = perpendicular_vector(direction)
        perp2 = -perp1

        out = np.empty((len(self.data), 2))
        worst = 0
        for i, value in enumerate(self.data):
            with np.errstate(divide="ignore", invalid="ignore"):
                proj = cs.to_plot_coordinates(position + value * direction)
            if not np.all(np.isfinite(proj)):
                raise InvalidInputError(
                    f"swarm value {value} at {(position + value * direction).tolist()} "
                    f"has no finite plot position in {cs!r}")
            placed = out[:i]
            pt1, it1 = self._propose(proj, placed, perp1)
            pt2, it2 = self._propose(proj, placed, perp2)
            out[i] = pt1 if modulus(pt1 - proj) <= modulus(pt2 - proj) else pt2
            worst = max(worst, it1, it2)

        logger.debug("placed %d swarm points (max %d iterations per side)",
                     len(out), worst)
        return out


def plot_swarm(swarm: Swarm, target: Graphics) -> None:
    for i, pt in enumerate(swarm.place()):
        target.save()
        target.translate(pt[0], pt[1])
        target.scale(swarm.point_size)
        swarm.symbol.plot(target, swarm.presentation, target.unique_tag(swarm.tag, f"@{i}"))
        target.restore()
