"""Tests for the path builder, the recording surface and figure export.

Run:  python -m pytest tests/test_graphics.py -v
"""
from __future__ import annotations

import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")  # headless backend

import numpy as np
import pytest
from matplotlib.figure import Figure
from matplotlib.path import Path as MplPath

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from chartly import Font, Graphics, GraphicsPath, TextBaseline


def _square(size=10):
    return GraphicsPath().move_to(0, 0).line_to(size, 0).line_to(size, size).line_to(0, size).close()


# ---------------------------------------------------------------------------
# GraphicsPath
# ---------------------------------------------------------------------------

class TestGraphicsPath:

    def test_codes(self):
        path = _square().to_path()
        assert list(path.codes) == [MplPath.MOVETO] + [MplPath.LINETO] * 3 + [MplPath.CLOSEPOLY]

    def test_line_to_without_current_point_starts_figure(self):
        path = GraphicsPath().line_to(1, 2).line_to(3, 4)
        assert list(path.to_path().codes) == [MplPath.MOVETO, MplPath.LINETO]

    def test_close_starts_new_figure(self):
        path = GraphicsPath().move_to(0, 0).line_to(1, 0).close().line_to(5, 5)
        assert path.to_path().codes[-1] == MplPath.MOVETO

    def test_empty(self):
        assert GraphicsPath().is_empty
        assert len(GraphicsPath().to_path().vertices) == 0

    def test_arc_ends_on_circle(self):
        path = GraphicsPath().arc(0, 0, 2, 0, np.pi / 2)
        np.testing.assert_allclose(path.to_path().vertices[-1], [0, 2], atol=1e-9)

    def test_reversed_arc(self):
        path = GraphicsPath().arc(0, 0, 1, np.pi / 2, 0)
        np.testing.assert_allclose(path.current_point, [1, 0], atol=1e-9)

    def test_smooth_spline_passes_through_points(self):
        pts = [(0, 0), (1, 2), (2, 0), (3, 2)]
        verts = GraphicsPath().add_smooth_spline(pts).to_path().vertices
        for p in pts:
            assert np.any(np.all(np.isclose(verts, p), axis=1))


# ---------------------------------------------------------------------------
# Graphics
# ---------------------------------------------------------------------------

class TestGraphics:

    def test_unique_tags(self):
        assert Graphics().unique_tag("box", "@stroke") == "box@stroke"
        assert Graphics().unique_tag(None, "@stroke") is None
        assert Graphics(use_unique_tags=False).unique_tag("box", "@stroke") == "box"

    def test_transform_applied_at_record_time(self):
        g = Graphics()
        g.save()
        g.translate(100, 50)
        g.scale(2)
        g.fill_path(_square(), "red", tag="sq")
        g.restore()
        g.fill_path(_square(), "blue")
        moved, plain = g.commands
        assert moved.path.get_extents().bounds == pytest.approx((100, 50, 20, 20))
        assert plain.path.get_extents().bounds == pytest.approx((0, 0, 10, 10))
        assert moved.tag == "sq"

    def test_stroke_width_follows_scale(self):
        g = Graphics()
        g.scale(3)
        g.stroke_path(_square(), "black", line_width=0.5)
        assert g.commands[0].style["linewidth"] == pytest.approx(1.5)

    def test_empty_path_not_recorded(self):
        g = Graphics()
        g.fill_path(GraphicsPath(), "red")
        g.fill_text(0, 0, "", Font(), "black")
        assert g.commands == ()

    def test_bounds_include_half_stroke(self):
        g = Graphics()
        g.stroke_path(_square(), "black", line_width=2)
        assert g.get_bounds() == pytest.approx((-1, -1, 11, 11))
        assert Graphics().get_bounds() is None

    def test_text_baselines(self):
        g = Graphics()
        g.fill_text(0, 0, "HT", Font(), "black", baseline=TextBaseline.TOP)
        g.fill_text(0, 0, "HT", Font(), "black", baseline=TextBaseline.BOTTOM)
        top, bottom = (c.path.get_extents() for c in g.commands)
        assert top.y0 == pytest.approx(0)
        assert bottom.y1 == pytest.approx(0)

    def test_measure_text(self):
        w, h = Graphics.measure_text("hello", Font(size=12))
        assert w > h > 0
        assert Graphics.measure_text("") == (0.0, 0.0)
        assert Graphics.measure_text("hello", Font(size=24))[0] == pytest.approx(2 * w, rel=0.05)


class TestExport:

    def test_to_figure(self):
        g = Graphics()
        g.fill_path(_square(), "red")
        fig = g.to_figure()
        assert isinstance(fig, Figure)
        assert len(fig.axes[0].patches) == 1

    def test_svg_carries_tags(self, tmp_path):
        g = Graphics()
        g.fill_path(_square(), "red", tag="mysquare")
        g.fill_text(0, 20, "label", Font(), "black", tag="mylabel")
        out = tmp_path / "scene.svg"
        g.export(out)
        svg = out.read_text()
        assert 'id="mysquare"' in svg
        assert 'id="mylabel"' in svg

    def test_export_leaves_transform_stack_usable(self, tmp_path):
        g = Graphics()
        g.save()
        g.translate(5, 5)
        g.fill_path(_square(), "red")
        g.restore()
        g.export(tmp_path / "scene.png")
        g.save()
        g.scale(2)
        g.fill_path(_square(), "blue")
        g.restore()
        assert (tmp_path / "scene.png").read_bytes().startswith(b"\x89PNG")
        assert g.commands[1].path.get_extents().bounds == pytest.approx((0, 0, 20, 20))

    def test_png_bytes(self):
        g = Graphics()
        g.stroke_path(_square(), "black")
        assert g.to_png_bytes().startswith(b"\x89PNG")
