"""Coordinate systems mapping data space to plot space.

Plot space follows the drawing-surface convention: x grows to the right and
y grows downwards, so the top edge of the plot area is ``y = 0`` and the
bottom edge is ``y = scale_y``.

Logarithmic axes store their bounds as natural logarithms and are linear in
log space.  Finite-difference helpers (``get_around``) step one
``resolution`` along a direction, in log space on log axes, which is what
ticks, labels and the swarm packer use to estimate local tangents.
"""
from __future__ import annotations

import abc
from typing import Iterable

import numpy as np

from ._errors import InvalidInputError
from ._geometry import as_vector
from ._types import Vector


class ContinuousCoordinateSystem(abc.ABC):
    """Invertible mapping between n-dimensional data space and 2D plot space."""

    @property
    @abc.abstractmethod
    def is_linear(self) -> bool:
        """True when every straight data-space line stays straight."""

    @abc.abstractmethod
    def is_direction_straight(self, direction: Vector) -> bool:
        """Whether lines along *direction* map to straight plot-space lines."""

    @property
    @abc.abstractmethod
    def resolution(self) -> np.ndarray:
        """Per-axis step used for finite differences."""

    @abc.abstractmethod
    def to_plot_coordinates(self, data_point: Vector) -> np.ndarray:
        """Map a data-space point to a plot-space ``(x, y)`` array."""

    @abc.abstractmethod
    def to_data_coordinates(self, plot_point: Vector) -> np.ndarray:
        """Map a plot-space point back to data space."""

    @abc.abstractmethod
    def get_around(self, point: Vector, direction: Vector) -> np.ndarray:
        """Data-space point one resolution step from *point* along *direction*."""


class CartesianCoordinateSystem2D(ContinuousCoordinateSystem):
    """Rectangular 2D system with an optional logarithmic transform per axis."""

    log_x: bool = False
    log_y: bool = False

    def __init__(self, min_x: float, max_x: float, min_y: float, max_y: float,
                 scale_x: float = 350, scale_y: float = 250):
        bounds = as_vector([min_x, max_x, min_y, max_y], "coordinate bounds", 4)
        scales = as_vector([scale_x, scale_y], "coordinate scales")
        if np.any(scales == 0):
            raise InvalidInputError(f"scales must be nonzero, got {scales.tolist()}")

        self.min_x, self.max_x = self._axis_bounds(bounds[0], bounds[1], self.log_x, "x")
        self.min_y, self.max_y = self._axis_bounds(bounds[2], bounds[3], self.log_y, "y")
        self.scale_x = float(scale_x)
        self.scale_y = float(scale_y)
        self._resolution: np.ndarray | None = None

    @staticmethod
    def _axis_bounds(lo: float, hi: float, log: bool, axis: str) -> tuple[float, float]:
        if log:
            if lo <= 0 or hi <= 0:
                raise InvalidInputError(
                    f"logarithmic {axis} axis needs positive bounds, got ({lo}, {hi})")
            lo, hi = float(np.log(lo)), float(np.log(hi))
        if lo == hi:
            raise InvalidInputError(f"{axis} axis has an empty range at {lo}")
        return float(lo), float(hi)

    @classmethod
    def from_data(cls, points: Iterable[Vector], scale_x: float = 350,
                  scale_y: float = 250) -> "CartesianCoordinateSystem2D":
        """Fit the bounds to *points*, padded by 10% of the range on each side.

        Padding is applied in log space on logarithmic axes.
        """
        arr = np.asarray([np.asarray(p, dtype=float)[:2] for p in points])
        if arr.size == 0:
            raise InvalidInputError("cannot fit a coordinate system to no points")
        if not np.all(np.isfinite(arr)):
            raise InvalidInputError("cannot fit a coordinate system to non-finite points")

        def _padded(values, log):
            if log:
                if np.any(values <= 0):
                    raise InvalidInputError("logarithmic axis needs positive data")
                values = np.log(values)
            lo, hi = float(values.min()), float(values.max())
            # A single distinct value is padded by half its magnitude, at least 0.5.
            rng = (hi - lo) or max(abs(lo), 1.0) * 5
            lo, hi = lo - rng * 0.1, hi + rng * 0.1
            if log:
                lo, hi = float(np.exp(lo)), float(np.exp(hi))
            return lo, hi

        min_x, max_x = _padded(arr[:, 0], cls.log_x)
        min_y, max_y = _padded(arr[:, 1], cls.log_y)
        return cls(min_x, max_x, min_y, max_y, scale_x, scale_y)

    # -- ContinuousCoordinateSystem ------------------------------------------

    @property
    def is_linear(self) -> bool:
        return not (self.log_x or self.log_y)

    def is_direction_straight(self, direction: Vector) -> bool:
        if self.is_linear:
            return True
        d = np.asarray(direction, dtype=float)
        return bool(d[0] == 0 or d[1] == 0)

    @property
    def resolution(self) -> np.ndarray:
        if self._resolution is not None:
            return self._resolution.copy()

        def _step(lo, hi, log):
            if log:
                return (np.exp(hi) - np.exp(lo)) * 0.01
            return (hi - lo) * 0.01

        return np.array([_step(self.min_x, self.max_x, self.log_x),
                         _step(self.min_y, self.max_y, self.log_y)])

    @resolution.setter
    def resolution(self, value: Vector | None) -> None:
        self._resolution = None if value is None else as_vector(value, "resolution")

    def to_plot_coordinates(self, data_point: Vector) -> np.ndarray:
        p = np.asarray(data_point, dtype=float)
        x = np.log(p[0]) if self.log_x else p[0]
        y = np.log(p[1]) if self.log_y else p[1]
        return np.array([
            (x - self.min_x) / (self.max_x - self.min_x) * self.scale_x,
            self.scale_y - (y - self.min_y) / (self.max_y - self.min_y) * self.scale_y,
        ])

    def to_data_coordinates(self, plot_point: Vector) -> np.ndarray:
        p = np.asarray(plot_point, dtype=float)
        x = p[0] / self.scale_x * (self.max_x - self.min_x) + self.min_x
        y = (self.scale_y - p[1]) / self.scale_y * (self.max_y - self.min_y) + self.min_y
        return np.array([np.exp(x) if self.log_x else x,
                         np.exp(y) if self.log_y else y])

    def get_around(self, point: Vector, direction: Vector) -> np.ndarray:
        p = np.asarray(point, dtype=float)
        d = np.asarray(direction, dtype=float)
        res = self.resolution
        out = []
        for i, (log, lo, hi) in enumerate(((self.log_x, self.min_x, self.max_x),
                                           (self.log_y, self.min_y, self.max_y))):
            if log:
                out.append(np.exp(np.log(p[i]) + d[i] * (hi - lo) * 0.01))
            else:
                out.append(p[i] + d[i] * res[i])
        return np.array(out)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(x=[{self.min_x:g}, {self.max_x:g}], "
                f"y=[{self.min_y:g}, {self.max_y:g}], "
                f"scale=({self.scale_x:g}, {self.scale_y:g}))")


class LinearCoordinateSystem2D(CartesianCoordinateSystem2D):
    """Linear on both axes."""


class LogarithmicCoordinateSystem2D(CartesianCoordinateSystem2D):
    """Logarithmic on both axes."""

    log_x = True
    log_y = True


class LogLinCoordinateSystem2D(CartesianCoordinateSystem2D):
    """Linear X, logarithmic Y."""

    log_y = True


class LinLogCoordinateSystem2D(CartesianCoordinateSystem2D):
    """Logarithmic X, linear Y."""

    log_x = True
