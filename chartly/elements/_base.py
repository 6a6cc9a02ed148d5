"""Base class for drawable plot elements."""
from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from .._types import ElementKind

if TYPE_CHECKING:
    from .._coords import ContinuousCoordinateSystem
    from .._graphics import Graphics


class PlotElement:
    """A drawable element: plain data plus an ``ElementKind`` tag.

    Elements do not draw themselves; ``render_element`` looks the kind up in
    ``RENDERERS`` and calls the matching draw function.
    """

    kind: ClassVar[ElementKind]
    coordinate_system: "ContinuousCoordinateSystem"
    tag: str | None

    def plot(self, target: "Graphics") -> None:
        """Draw this element onto *target*."""
        from . import render_element
        render_element(self, target)
