"""Point symbols drawn at unit size around the origin.

Callers translate and scale the surface before plotting a symbol, so a
symbol never needs to know where it is or how big it is.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from matplotlib.path import Path

from .._graphics import Graphics, GraphicsPath, as_mpl_path
from .._style import PresentationAttributes


@dataclass(frozen=True)
class PathSymbol:
    """Fills and/or strokes a fixed path; defaults to the unit circle."""

    path: Path = field(default_factory=Path.unit_circle)

    def plot(self, target: Graphics, attributes: PresentationAttributes,
             tag: Optional[str] = None) -> None:
        if attributes.fill is not None:
            target.fill_path(self.path, attributes.fill, tag=tag)
        if attributes.stroke is not None:
            target.stroke_path(self.path, attributes.stroke, attributes.line_width,
                               attributes.line_cap, attributes.line_join,
                               attributes.line_dash,
                               tag=target.unique_tag(tag, "@stroke"))


@dataclass(frozen=True)
class ActionSymbol:
    """Delegates drawing to a callable ``fn(target, attributes, tag)``."""

    fn: Callable[[Graphics, PresentationAttributes, Optional[str]], None]

    def plot(self, target: Graphics, attributes: PresentationAttributes,
             tag: Optional[str] = None) -> None:
        self.fn(target, attributes, tag)


def path_symbol(path: "GraphicsPath | Path") -> PathSymbol:
    return PathSymbol(as_mpl_path(path))


def tick_symbol(vertical: bool = True, length: float = 3) -> PathSymbol:
    """A short line segment centred on the origin, used for categorical ticks."""
    if vertical:
        pth = GraphicsPath().move_to(0, -length).line_to(0, length)
    else:
        pth = GraphicsPath().move_to(-length, 0).line_to(length, 0)
    return path_symbol(pth)


CIRCLE = PathSymbol()
