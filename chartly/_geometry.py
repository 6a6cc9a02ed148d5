"""Vector helpers shared by coordinate systems and plot elements."""
from __future__ import annotations

import numpy as np

from ._errors import InvalidInputError
from ._types import Vector


def as_vector(v: Vector, name: str = "vector", min_length: int = 2) -> np.ndarray:
    """Convert *v* to a finite float array, or raise InvalidInputError."""
    arr = np.asarray(v, dtype=float)
    if arr.ndim != 1 or arr.size < min_length:
        raise InvalidInputError(
            f"{name} must be a flat sequence of at least {min_length} "
            f"components, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError(f"{name} has non-finite components: {arr.tolist()}")
    return arr


def modulus(v: Vector) -> float:
    return float(np.hypot.reduce(np.asarray(v, dtype=float)))


def normalize(v: Vector) -> np.ndarray:
    """Unit vector along *v*; the zero vector is returned unchanged."""
    arr = np.asarray(v, dtype=float)
    mod = modulus(arr)
    if mod == 0:
        return arr.copy()
    return arr / mod


def perpendicular_vector(v: Vector) -> np.ndarray:
    """Unit vector perpendicular to *v*.

    The result lies in the plane of the first nonzero component of *v* and
    one other component (component 1 when the first nonzero is component 0,
    component 0 otherwise).  In more than two dimensions this is *a*
    perpendicular, not the only one.  The zero vector has no perpendicular
    and maps to the zero vector.
    """
    arr = np.asarray(v, dtype=float)
    if arr.ndim != 1 or arr.size < 2:
        raise InvalidInputError(
            f"perpendicular_vector needs at least 2 components, got {arr.tolist()}")

    out = np.zeros_like(arr)
    nonzero = np.flatnonzero(arr)
    if nonzero.size == 0:
        return out

    m = int(nonzero[0])
    n = 0 if m != 0 else 1
    mod = np.hypot(arr[m], arr[n])

    out[m] = -arr[n] / mod
    out[n] = arr[m] / mod
    return out


def smooth_spline_controls(points: np.ndarray) -> np.ndarray:
    """Cubic Bezier control points for a Catmull-Rom spline through *points*.

    Returns an array of shape ``(3 * (len(points) - 1), 2)``: for each
    segment the two control points followed by the segment end point.
    """
    pts = np.asarray(points, dtype=float)
    n = len(pts)
    # Reflect the end points so the first and last segments have tangents.
    padded = np.vstack([2 * pts[0] - pts[1], pts, 2 * pts[-1] - pts[-2]])

    out = np.empty((3 * (n - 1), 2))
    for i in range(n - 1):
        p0, p1, p2, p3 = padded[i], padded[i + 1], padded[i + 2], padded[i + 3]
        out[3 * i] = p1 + (p2 - p0) / 6
        out[3 * i + 1] = p2 - (p3 - p1) / 6
        out[3 * i + 2] = p2
    return out
