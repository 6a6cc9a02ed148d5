"""Plot container — an ordered list of elements rendered in sequence."""
from __future__ import annotations

from typing import Iterable, Iterator, Optional

from matplotlib.figure import Figure

from ._graphics import Graphics
from ._logging import get_logger
from ._types import ElementKind
from .elements import PlotElement, render_element

logger = get_logger(__name__)


def _matches(element, selector):
    """Element (or its coordinate system) matching *selector*, else None."""
    if isinstance(selector, ElementKind):
        return element if getattr(element, "kind", None) is selector else None
    if isinstance(element, selector):
        return element
    cs = getattr(element, "coordinate_system", None)
    if isinstance(cs, selector):
        return cs
    return None


class Plot:
    """Ordered collection of plot elements.

    Elements are drawn in insertion order, so later elements paint over
    earlier ones.  The element list itself is an immutable tuple that is
    replaced on every change.
    """

    def __init__(self, elements: Iterable[PlotElement] = ()):
        self._elements: tuple[PlotElement, ...] = tuple(elements)

    @property
    def elements(self) -> tuple[PlotElement, ...]:
        return self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[PlotElement]:
        return iter(self._elements)

    def add(self, element: PlotElement) -> "Plot":
        self._elements = self._elements + (element,)
        return self

    def add_all(self, *elements: PlotElement) -> "Plot":
        self._elements = self._elements + tuple(elements)
        return self

    def remove(self, element: PlotElement) -> "Plot":
        """Remove the first occurrence of *element* (by identity)."""
        for i, el in enumerate(self._elements):
            if el is element:
                self._elements = self._elements[:i] + self._elements[i + 1:]
                return self
        raise ValueError(f"{type(element).__name__} is not part of this plot")

    def get_first(self, selector) -> Optional[object]:
        """First element of the given ``ElementKind`` or class.

        When *selector* is a class, an element's coordinate system is
        matched too, so ``plot.get_first(LinearCoordinateSystem2D)`` finds
        the system the plot was built on.
        """
        for el in self._elements:
            hit = _matches(el, selector)
            if hit is not None:
                return hit
        return None

    def get_all(self, selector) -> list:
        out = []
        for el in self._elements:
            hit = _matches(el, selector)
            if hit is not None:
                out.append(hit)
        return out

    # -- rendering -----------------------------------------------------------

    def render(self, target: Graphics) -> Graphics:
        for el in self._elements:
            render_element(el, target)
        logger.debug("rendered %d elements", len(self._elements))
        return target

    def to_graphics(self, use_unique_tags: bool = True) -> Graphics:
        return self.render(Graphics(use_unique_tags=use_unique_tags))

    def to_figure(self, dpi: float = 100) -> Figure:
        """Render onto a matplotlib Figure cropped to the drawn content."""
        return self.to_graphics().to_figure(dpi=dpi)

    def save(self, fname, format: str | None = None, dpi: float = 100) -> None:
        """Render and write to *fname*; the format follows the extension."""
        self.to_graphics().export(fname, format=format, dpi=dpi)
        logger.info("saved plot with %d elements to %s", len(self._elements), fname)

    def show(self):
        """Display an interactive preview in Jupyter."""
        from ._canvas import PlotCanvas
        canvas = PlotCanvas(self)
        canvas.display()
        return canvas

    def __repr__(self) -> str:
        return f"Plot({len(self._elements)} elements)"
