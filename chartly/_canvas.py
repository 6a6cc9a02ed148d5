"""Canvas management — renders a Plot as PNG in an Output widget."""
from __future__ import annotations

import time
from typing import TYPE_CHECKING

import ipywidgets as widgets

from ._logging import get_logger

if TYPE_CHECKING:
    from ._plot import Plot

logger = get_logger(__name__)


class PlotCanvas:
    """Wraps a Plot for display in Jupyter.

    The plot is rendered to a PNG and shown inside an ipywidgets.Output
    widget.  Call :meth:`redraw` after changing the plot's elements.
    """

    _MIN_DRAW_INTERVAL_S = 0.08  # 80ms throttle

    def __init__(self, plot: "Plot", dpi: float = 100):
        self._plot = plot
        self._dpi = dpi
        self._last_draw = 0.0
        self._output = widgets.Output()
        self._render()

    @property
    def plot(self) -> "Plot":
        return self._plot

    @property
    def widget(self) -> widgets.Widget:
        return self._output

    def _render(self) -> None:
        self._output.clear_output(wait=True)
        with self._output:
            from IPython.display import Image, display as ipy_display
            png = self._plot.to_graphics().to_png_bytes(dpi=self._dpi)
            ipy_display(Image(data=png))
        logger.debug("canvas rendered %d elements", len(self._plot))

    def redraw(self) -> None:
        """Request a canvas redraw, throttled to avoid excess repaints."""
        now = time.monotonic()
        if now - self._last_draw < self._MIN_DRAW_INTERVAL_S:
            return
        self._last_draw = now
        self._render()

    def force_redraw(self) -> None:
        """Redraw immediately, bypassing the throttle."""
        self._last_draw = time.monotonic()
        self._render()

    def display(self) -> None:
        from IPython.display import display as ipy_display
        ipy_display(self._output)
