"""Element kinds, text placement enums and shared aliases."""
from __future__ import annotations

from enum import Enum, auto
from typing import Sequence, Union

import numpy as np

# A data-space or plot-space coordinate tuple.
Vector = Union[Sequence[float], np.ndarray]


class ElementKind(Enum):
    SWARM = auto()
    BOX_PLOT = auto()
    VIOLIN = auto()
    PIE = auto()
    SCATTER_POINTS = auto()
    DATA_LINE = auto()
    AREA = auto()
    TEXT_LABEL = auto()
    DATA_LABELS = auto()
    AXIS = auto()
    AXIS_TICKS = auto()
    AXIS_LABELS = auto()
    AXIS_TITLE = auto()
    GRID = auto()
    BARS = auto()


class TextAnchor(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class TextBaseline(Enum):
    TOP = "top"
    MIDDLE = "center"
    BASELINE = "baseline"
    BOTTOM = "bottom"


class ViolinSide(Enum):
    LEFT = auto()
    RIGHT = auto()
    BOTH = auto()
