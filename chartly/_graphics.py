"""Drawing surface — records fill/stroke instructions and exports via matplotlib.

``Graphics`` is a scene recorder: elements draw into it in plot-space units
(y grows downwards) through a save/restore transform stack, and the recorded
scene is turned into a matplotlib Figure only on export.  One plot unit is
one typographic point, so font sizes and line widths mean the same thing in
the scene and in the exported file.  Tags become artist ``gid``s, which
matplotlib writes out as SVG element ids.
"""
from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch
from matplotlib.path import Path
from matplotlib.textpath import TextPath
from matplotlib.transforms import Affine2D

from ._geometry import smooth_spline_controls
from ._logging import get_logger
from ._style import DEFAULT_FONT, Font
from ._types import TextBaseline, Vector

logger = get_logger(__name__)


def _xy(x, y=None) -> tuple[float, float]:
    if y is None:
        x, y = x
    return float(x), float(y)


# ---------------------------------------------------------------------------
# Path construction
# ---------------------------------------------------------------------------

class GraphicsPath:
    """Chainable path builder producing a ``matplotlib.path.Path``."""

    def __init__(self):
        self._vertices: list[tuple[float, float]] = []
        self._codes: list[int] = []
        self._figure_start: tuple[float, float] | None = None

    @property
    def is_empty(self) -> bool:
        return not self._vertices

    @property
    def current_point(self) -> tuple[float, float] | None:
        return self._vertices[-1] if self._vertices else None

    def move_to(self, x, y=None) -> "GraphicsPath":
        pt = _xy(x, y)
        self._vertices.append(pt)
        self._codes.append(Path.MOVETO)
        self._figure_start = pt
        return self

    def line_to(self, x, y=None) -> "GraphicsPath":
        """Line to the point; starts a new figure when there is no current point."""
        if self._figure_start is None:
            return self.move_to(x, y)
        self._vertices.append(_xy(x, y))
        self._codes.append(Path.LINETO)
        return self

    def cubic_bezier_to(self, c1: Vector, c2: Vector, end: Vector) -> "GraphicsPath":
        if self._figure_start is None:
            self.move_to(c1)
        for pt in (c1, c2, end):
            self._vertices.append(_xy(pt))
            self._codes.append(Path.CURVE4)
        return self

    def close(self) -> "GraphicsPath":
        if self._figure_start is not None:
            self._vertices.append(self._figure_start)
            self._codes.append(Path.CLOSEPOLY)
            self._figure_start = None
        return self

    def arc(self, cx: float, cy: float, radius: float, start_angle: float,
            end_angle: float) -> "GraphicsPath":
        """Circular arc, angles in radians, continuing the current figure."""
        if start_angle == end_angle:
            return self.line_to(cx + radius * np.cos(start_angle),
                                cy + radius * np.sin(start_angle))
        lo, hi = sorted((start_angle, end_angle))
        unit = Path.arc(np.degrees(lo), np.degrees(hi))
        verts = Affine2D().scale(radius).translate(cx, cy).transform(unit.vertices)
        codes = list(unit.codes)
        if end_angle < start_angle:
            # Path.arc always runs counter-clockwise; reverse the Bezier chain.
            verts = verts[::-1]
        self.line_to(verts[0])
        for v, c in zip(verts[1:], codes[1:]):
            self._vertices.append(_xy(v))
            self._codes.append(c)
        return self

    def add_smooth_spline(self, points: Sequence[Vector]) -> "GraphicsPath":
        """Smooth curve through *points*, joined to the current figure."""
        pts = np.asarray(points, dtype=float)
        if len(pts) == 0:
            return self
        if len(pts) < 3:
            for p in pts:
                self.line_to(p)
            return self
        self.line_to(pts[0])
        ctrl = smooth_spline_controls(pts)
        for i in range(0, len(ctrl), 3):
            self.cubic_bezier_to(ctrl[i], ctrl[i + 1], ctrl[i + 2])
        return self

    def add_path(self, other: "GraphicsPath") -> "GraphicsPath":
        self._vertices.extend(other._vertices)
        self._codes.extend(other._codes)
        self._figure_start = other._figure_start
        return self

    def to_path(self) -> Path:
        if not self._vertices:
            return Path(np.empty((0, 2)))
        return Path(np.asarray(self._vertices), list(self._codes))


def as_mpl_path(path: "GraphicsPath | Path") -> Path:
    return path.to_path() if isinstance(path, GraphicsPath) else path


# ---------------------------------------------------------------------------
# Recorded scene
# ---------------------------------------------------------------------------

@dataclass
class DrawCommand:
    """One recorded instruction, already in absolute plot-space coordinates."""

    op: str  # "fill_path" | "stroke_path" | "fill_text" | "stroke_text"
    path: Optional[Path] = None
    text: str = ""
    origin: tuple[float, float] = (0.0, 0.0)
    rotation: float = 0.0  # radians, plot space
    font: Font = DEFAULT_FONT
    baseline: TextBaseline = TextBaseline.MIDDLE
    style: dict[str, Any] = field(default_factory=dict)
    tag: Optional[str] = None


_CAPS = {"butt": "butt", "round": "round", "square": "projecting", "projecting": "projecting"}


class Graphics:
    """Scene recorder with a canvas-style transform stack."""

    def __init__(self, use_unique_tags: bool = True):
        self.use_unique_tags = use_unique_tags
        self._commands: list[DrawCommand] = []
        self._transform = Affine2D()
        self._stack: list[Affine2D] = []

    @property
    def commands(self) -> tuple[DrawCommand, ...]:
        return tuple(self._commands)

    def unique_tag(self, tag: str | None, suffix: str) -> str | None:
        """``tag + suffix`` when unique tags are on and *tag* is set, else *tag*."""
        if tag and self.use_unique_tags:
            return f"{tag}{suffix}"
        return tag

    # -- transform stack -----------------------------------------------------

    def save(self) -> None:
        self._stack.append(self._transform.frozen())

    def restore(self) -> None:
        self._transform = Affine2D(self._stack.pop().get_matrix())

    def _compose(self, local: Affine2D) -> None:
        self._transform = Affine2D(self._transform.get_matrix() @ local.get_matrix())

    def translate(self, x, y=None) -> None:
        self._compose(Affine2D().translate(*_xy(x, y)))

    def scale(self, sx: float, sy: float | None = None) -> None:
        self._compose(Affine2D().scale(sx, sx if sy is None else sy))

    def rotate(self, angle: float) -> None:
        """Rotate by *angle* radians (clockwise on screen, since y points down)."""
        self._compose(Affine2D().rotate(angle))

    def _line_scale(self) -> float:
        m = self._transform.get_matrix()
        return float(np.sqrt(abs(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])))

    def _rotation(self) -> float:
        m = self._transform.get_matrix()
        return float(np.arctan2(m[1, 0], m[0, 0]))

    # -- drawing -------------------------------------------------------------

    def fill_path(self, path: "GraphicsPath | Path", fill, tag: str | None = None) -> None:
        mpl_path = as_mpl_path(path)
        if len(mpl_path.vertices) == 0:
            return
        self._commands.append(DrawCommand(
            "fill_path", path=mpl_path.transformed(self._transform),
            style={"facecolor": fill}, tag=tag))

    def stroke_path(self, path: "GraphicsPath | Path", stroke, line_width: float = 1.0,
                    line_cap: str = "projecting", line_join: str = "miter",
                    line_dash: Sequence[float] | None = None,
                    tag: str | None = None) -> None:
        mpl_path = as_mpl_path(path)
        if len(mpl_path.vertices) == 0:
            return
        self._commands.append(DrawCommand(
            "stroke_path", path=mpl_path.transformed(self._transform),
            style={"edgecolor": stroke,
                   "linewidth": line_width * self._line_scale(),
                   "capstyle": _CAPS.get(line_cap, line_cap),
                   "joinstyle": line_join,
                   "dashes": tuple(line_dash) if line_dash else None},
            tag=tag))

    def fill_text(self, x: float, y: float, text: str, font: Font, fill,
                  baseline: TextBaseline = TextBaseline.MIDDLE,
                  tag: str | None = None) -> None:
        if not text:
            return
        origin = self._transform.transform((x, y))
        self._commands.append(DrawCommand(
            "fill_text", text=text, origin=(float(origin[0]), float(origin[1])),
            rotation=self._rotation(), font=font, baseline=baseline,
            path=self._text_outline(x, y, text, font, baseline),
            style={"color": fill}, tag=tag))

    def stroke_text(self, x: float, y: float, text: str, font: Font, stroke,
                    baseline: TextBaseline = TextBaseline.MIDDLE,
                    line_width: float = 1.0, line_cap: str = "projecting",
                    line_join: str = "miter",
                    line_dash: Sequence[float] | None = None,
                    tag: str | None = None) -> None:
        if not text:
            return
        self._commands.append(DrawCommand(
            "stroke_path", path=self._text_outline(x, y, text, font, baseline),
            style={"edgecolor": stroke,
                   "linewidth": line_width * self._line_scale(),
                   "capstyle": _CAPS.get(line_cap, line_cap),
                   "joinstyle": line_join,
                   "dashes": tuple(line_dash) if line_dash else None},
            tag=tag))

    # -- text ----------------------------------------------------------------

    @staticmethod
    def measure_text(text: str, font: Font = DEFAULT_FONT) -> tuple[float, float]:
        """Width and height of *text* in plot units."""
        if not text:
            return 0.0, 0.0
        ext = TextPath((0, 0), text, prop=font.properties()).get_extents()
        return float(ext.width), float(ext.height)

    def _text_outline(self, x, y, text, font, baseline) -> Path:
        """Glyph outlines placed at (x, y) with the requested baseline, y down."""
        tp = TextPath((0, 0), text, prop=font.properties())
        verts = tp.vertices * np.array([1.0, -1.0])
        if len(verts):
            ext = Path(verts, tp.codes).get_extents()
            top, bottom = ext.y0, ext.y1
            if baseline is TextBaseline.TOP:
                verts[:, 1] -= top
            elif baseline is TextBaseline.BOTTOM:
                verts[:, 1] -= bottom
            elif baseline is TextBaseline.MIDDLE:
                verts[:, 1] -= (top + bottom) / 2
        local = Path(verts + np.array([x, y]), tp.codes)
        return local.transformed(self._transform)

    # -- bounds & export -----------------------------------------------------

    def get_bounds(self) -> tuple[float, float, float, float] | None:
        """``(x0, y0, x1, y1)`` of everything drawn, or None when empty."""
        boxes = []
        for cmd in self._commands:
            if cmd.path is None or len(cmd.path.vertices) == 0:
                continue
            ext = cmd.path.get_extents()
            pad = cmd.style.get("linewidth", 0) / 2 if cmd.op == "stroke_path" else 0
            boxes.append((ext.x0 - pad, ext.y0 - pad, ext.x1 + pad, ext.y1 + pad))
        if not boxes:
            return None
        arr = np.asarray(boxes)
        return (float(arr[:, 0].min()), float(arr[:, 1].min()),
                float(arr[:, 2].max()), float(arr[:, 3].max()))

    def to_figure(self, padding: float = 0.01, dpi: float = 100) -> Figure:
        """Render the recorded scene onto a new, cropped matplotlib Figure."""
        bounds = self.get_bounds() or (0.0, 0.0, 1.0, 1.0)
        x0, y0, x1, y1 = bounds
        w = max(x1 - x0, 1e-6)
        h = max(y1 - y0, 1e-6)
        x0, x1 = x0 - w * padding, x1 + w * padding
        y0, y1 = y0 - h * padding, y1 + h * padding

        fig = Figure(figsize=((x1 - x0) / 72, (y1 - y0) / 72), dpi=dpi)
        ax = fig.add_axes((0, 0, 1, 1))
        ax.set_xlim(x0, x1)
        ax.set_ylim(y1, y0)
        ax.set_axis_off()

        for cmd in self._commands:
            if cmd.op == "fill_path":
                ax.add_patch(PathPatch(cmd.path, facecolor=cmd.style["facecolor"],
                                       edgecolor="none", linewidth=0, gid=cmd.tag))
            elif cmd.op == "stroke_path":
                patch = PathPatch(cmd.path, fill=False, edgecolor=cmd.style["edgecolor"],
                                  linewidth=cmd.style["linewidth"],
                                  capstyle=cmd.style["capstyle"],
                                  joinstyle=cmd.style["joinstyle"], gid=cmd.tag)
                if cmd.style["dashes"]:
                    patch.set_linestyle((0, cmd.style["dashes"]))
                ax.add_patch(patch)
            elif cmd.op == "fill_text":
                ax.text(cmd.origin[0], cmd.origin[1], cmd.text,
                        fontproperties=cmd.font.properties(),
                        color=cmd.style["color"], ha="left",
                        va=cmd.baseline.value,
                        rotation=-np.degrees(cmd.rotation),
                        rotation_mode="anchor", gid=cmd.tag)
        logger.debug("exported %d draw commands to a %.0fx%.0f figure",
                     len(self._commands), x1 - x0, y1 - y0)
        return fig

    def export(self, fname, format: str | None = None, dpi: float = 100) -> None:
        """Write the scene to *fname* (SVG, PDF, PNG... by extension or *format*)."""
        fig = self.to_figure(dpi=dpi)
        fig.savefig(fname, format=format, dpi=dpi, facecolor="white",
                    edgecolor="none")

    def to_png_bytes(self, dpi: float = 100) -> bytes:
        buf = io.BytesIO()
        self.export(buf, format="png", dpi=dpi)
        return buf.getvalue()
