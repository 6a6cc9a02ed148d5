"""Summary statistics for box, violin, swarm and histogram charts."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from ._errors import InvalidInputError


def _values(data: Iterable[float]) -> np.ndarray:
    arr = np.asarray(list(data), dtype=float)
    if arr.size == 0:
        raise InvalidInputError("statistics need at least one value")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError("statistics input contains non-finite values")
    return arr


def quartiles(data: Iterable[float]) -> tuple[float, float, float]:
    """Lower quartile, median and upper quartile.

    Uses the approximately median-unbiased quantile estimator (Hyndman & Fan
    type 8).
    """
    q1, med, q3 = np.quantile(_values(data), [0.25, 0.5, 0.75], method="median_unbiased")
    return float(q1), float(med), float(q3)


def iqr(data: Iterable[float]) -> float:
    q1, _, q3 = quartiles(data)
    return q3 - q1


@dataclass(frozen=True)
class BoxStats:
    median: float
    q1: float
    q3: float
    whisker_low: float
    whisker_high: float
    outliers: tuple[float, ...]


WHISKER_TYPES = ("iqr", "range", "std")


def box_statistics(data: Iterable[float], whisker_range: float = 1.5,
                   whisker_type: str = "iqr") -> BoxStats:
    """Quartiles plus whiskers at the most extreme values inside the fences.

    ``whisker_type`` picks the fences: ``"iqr"`` is ``whisker_range * IQR``
    beyond the box, ``"range"`` takes every value, ``"std"`` is two sample
    standard deviations either side of the mean.
    """
    arr = _values(data)
    q1, med, q3 = quartiles(arr)
    if whisker_type == "iqr":
        spread = (q3 - q1) * whisker_range
        low, high = q1 - spread, q3 + spread
    elif whisker_type == "range":
        low, high = -np.inf, np.inf
    elif whisker_type == "std":
        sd = float(arr.std(ddof=1)) if arr.size > 1 else 0.0
        low, high = arr.mean() - 2 * sd, arr.mean() + 2 * sd
    else:
        raise InvalidInputError(
            f"whisker_type must be one of {WHISKER_TYPES}, got {whisker_type!r}")
    inside = arr[(arr >= low) & (arr <= high)]
    lo, hi = float(inside.min()), float(inside.max())
    outliers = tuple(sorted(float(v) for v in arr[(arr < lo) | (arr > hi)]))
    return BoxStats(med, q1, q3, lo, hi, outliers)


def histogram_bins(data: Iterable[float],
                   bin_count: int | None = None) -> tuple[np.ndarray, np.ndarray]:
    """Counts and bin edges of *data* over ``[min, max]``.

    With *bin_count* unset (or below 2) the count follows the
    Freedman-Diaconis rule, with at least two bins.  The maximum falls in
    the last bin.  Constant data gives one bin of width 1 centred on the
    value.
    """
    arr = _values(data)
    lo, hi = float(arr.min()), float(arr.max())
    if lo == hi:
        return np.array([arr.size]), np.array([lo - 0.5, hi + 0.5])

    if bin_count is None or bin_count < 2:
        h = 2 * iqr(arr) / arr.size ** (1 / 3)
        bin_count = max(2, int(np.ceil((hi - lo) / h))) if h > 0 else 2

    idx = np.minimum(bin_count - 1, np.floor((arr - lo) / (hi - lo) * bin_count).astype(int))
    counts = np.bincount(idx, minlength=bin_count)
    return counts, np.linspace(lo, hi, bin_count + 1)
