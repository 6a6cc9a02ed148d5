"""Tests for the Plot container, chart constructors and the Jupyter canvas.

Run:  python -m pytest tests/test_plot.py -v
"""
from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import MagicMock

import matplotlib
matplotlib.use("Agg")  # headless backend

import numpy as np
import pytest
from matplotlib.figure import Figure

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import chartly
from chartly import (
    DataLine, ElementKind, InvalidInputError, LinearCoordinateSystem2D,
    LogLinCoordinateSystem2D, Plot, PlotCanvas, ViolinSide, create_area_chart,
    create_bar_chart, create_box_plot, create_distribution, create_function_plot,
    create_histogram, create_line_chart, create_pie_chart, create_scatter_plot,
    create_stacked_area_chart, create_swarm_plot, create_violin_plot,
)

GROUPS = [("a", [1, 2, 3, 4, 100]), ("b", [1, 2, 3])]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _texts(plot):
    return [c.text for c in plot.to_graphics().commands if c.op == "fill_text"]


def _kinds(plot, kind):
    return plot.get_all(kind)


@pytest.fixture
def cs():
    return LinearCoordinateSystem2D(0, 10, 0, 10, 100, 100)


# ---------------------------------------------------------------------------
# Plot container
# ---------------------------------------------------------------------------

class TestPlot:

    def test_add_and_order(self, cs):
        a = DataLine([(0, 0), (1, 1)], cs)
        b = DataLine([(0, 1), (1, 0)], cs)
        plot = Plot().add(a).add(b)
        assert plot.elements == (a, b)
        assert len(plot) == 2
        assert list(plot) == [a, b]

    def test_remove_by_identity(self, cs):
        a = DataLine([(0, 0), (1, 1)], cs)
        twin = DataLine([(0, 0), (1, 1)], cs)
        plot = Plot([a, twin])
        plot.remove(twin)
        assert plot.elements[0] is a
        with pytest.raises(ValueError):
            plot.remove(twin)

    def test_get_first_by_kind_or_class(self, cs):
        line = DataLine([(0, 0), (1, 1)], cs)
        plot = Plot([line])
        assert plot.get_first(ElementKind.DATA_LINE) is line
        assert plot.get_first(DataLine) is line
        assert plot.get_first(LinearCoordinateSystem2D) is cs
        assert plot.get_first(ElementKind.PIE) is None

    def test_render_returns_target(self, cs):
        plot = Plot([DataLine([(0, 0), (1, 1)], cs, tag="l")])
        g = plot.to_graphics()
        assert [c.tag for c in g.commands] == ["l"]
        assert isinstance(plot.to_figure(), Figure)

    def test_save_svg(self, cs, tmp_path):
        plot = Plot([DataLine([(0, 0), (1, 1)], cs, tag="myline")])
        out = tmp_path / "plot.svg"
        plot.save(out)
        assert 'id="myline"' in out.read_text()


# ---------------------------------------------------------------------------
# Swarm plots
# ---------------------------------------------------------------------------

class TestCreateSwarmPlot:

    def test_structure(self):
        plot = create_swarm_plot(GROUPS)
        assert len(_kinds(plot, ElementKind.SWARM)) == 2
        assert len(_kinds(plot, ElementKind.BOX_PLOT)) == 2
        assert len(_kinds(plot, ElementKind.GRID)) == 1
        x_axis, y_axis = _kinds(plot, ElementKind.AXIS)
        assert x_axis.arrow_size == 0
        assert y_axis.arrow_size == 3
        assert plot.elements[-1].kind is ElementKind.TEXT_LABEL

    def test_groups_spaced_along_x(self):
        swarms = _kinds(create_swarm_plot(GROUPS, spacing=10), ElementKind.SWARM)
        assert [s.position for s in swarms] == [(5.0, 0.0), (15.0, 0.0)]
        assert all(s.direction == (0.0, 1.0) for s in swarms)

    def test_category_labels_rendered(self):
        texts = _texts(create_swarm_plot(GROUPS, title="Swarm", y_axis_title="Value"))
        for expected in ("a", "b", "Swarm", "Value"):
            assert expected in texts

    def test_without_boxes_points_are_solid(self):
        plot = create_swarm_plot(GROUPS, show_box_plots=False)
        assert _kinds(plot, ElementKind.BOX_PLOT) == []
        swarm = plot.get_first(ElementKind.SWARM)
        assert swarm.presentation.stroke is None
        assert swarm.presentation.fill == chartly.DEFAULT_STYLE.color(0)

    def test_horizontal(self):
        plot = create_swarm_plot(GROUPS, vertical=False)
        assert plot.get_first(ElementKind.SWARM).direction == (1.0, 0.0)
        x_axis, y_axis = _kinds(plot, ElementKind.AXIS)
        assert (x_axis.arrow_size, y_axis.arrow_size) == (3, 0)

    def test_data_range_override(self):
        plot = create_swarm_plot(GROUPS, data_range_min=0, data_range_max=200)
        cs = plot.get_first(LinearCoordinateSystem2D)
        assert (cs.min_y, cs.max_y) == (0, 200)

    def test_plain_values(self):
        plot = create_swarm_plot([3, 1, 2])
        assert len(_kinds(plot, ElementKind.SWARM)) == 1
        plot.to_graphics()

    @pytest.mark.parametrize("data", [[], [("a", [])], [[1, float("nan")]]])
    def test_invalid(self, data):
        with pytest.raises(InvalidInputError):
            create_swarm_plot(data)


# ---------------------------------------------------------------------------
# Box and violin plots
# ---------------------------------------------------------------------------

class TestCreateBoxPlot:

    def test_outliers_drawn(self):
        plot = create_box_plot(GROUPS)
        assert len(_kinds(plot, ElementKind.BOX_PLOT)) == 2
        # One for the categorical ticks, one for group a's outlier.
        tick, outliers = _kinds(plot, ElementKind.SCATTER_POINTS)
        assert outliers.data == ((5.0, 100.0),)

    def test_hide_outliers(self):
        plot = create_box_plot(GROUPS, show_outliers=False)
        assert len(_kinds(plot, ElementKind.SCATTER_POINTS)) == 1

    def test_range_whiskers_have_no_outliers(self):
        plot = create_box_plot(GROUPS, whisker_type="range")
        assert len(_kinds(plot, ElementKind.SCATTER_POINTS)) == 1
        assert _kinds(plot, ElementKind.BOX_PLOT)[0].whisker2 == 97

    def test_notches(self):
        notched = create_box_plot(GROUPS).get_first(ElementKind.BOX_PLOT)
        plain = create_box_plot(GROUPS, use_notches=False).get_first(ElementKind.BOX_PLOT)
        assert notched.notch_size > 0
        assert plain.notch_size == 0

    def test_proportional_width(self):
        a, b = _kinds(create_box_plot(GROUPS, proportional_width=True), ElementKind.BOX_PLOT)
        assert a.width == pytest.approx(5)
        assert b.width == pytest.approx(3)

    def test_box_centres(self):
        a, b = _kinds(create_box_plot(GROUPS, box_width=10, spacing=0.1), ElementKind.BOX_PLOT)
        assert a.position == (5.0, 3.0)
        assert b.position[0] == pytest.approx(16)

    def test_unknown_whisker_type(self):
        with pytest.raises(InvalidInputError):
            create_box_plot(GROUPS, whisker_type="mad")

    def test_renders(self):
        assert "a" in _texts(create_box_plot(GROUPS, vertical=False))


class TestCreateViolinPlot:

    def test_structure(self):
        data = [("x", np.random.default_rng(4).normal(size=50)), ("y", [1, 2, 2, 3])]
        plot = create_violin_plot(data, sides=ViolinSide.LEFT)
        violins = _kinds(plot, ElementKind.VIOLIN)
        assert len(violins) == 2
        assert all(v.sides is ViolinSide.LEFT for v in violins)
        boxes = _kinds(plot, ElementKind.BOX_PLOT)
        assert boxes[0].width == pytest.approx(violins[0].width * 0.05)
        plot.to_graphics()

    def test_without_boxes(self):
        plot = create_violin_plot(GROUPS, show_box_plots=False)
        assert _kinds(plot, ElementKind.BOX_PLOT) == []


# ---------------------------------------------------------------------------
# Pie charts
# ---------------------------------------------------------------------------

class TestCreatePieChart:

    def test_labels(self):
        plot = create_pie_chart([1, 2, 3], labels=["a", "b", "c"], title="Pie")
        assert len(_kinds(plot, ElementKind.PIE)) == 1
        texts = _texts(plot)
        for expected in ("a", "b", "c", "Pie"):
            assert expected in texts

    def test_equal_aspect(self):
        cs = create_pie_chart([1, 1], width=350, height=250).get_first(LinearCoordinateSystem2D)
        assert (cs.max_x - cs.min_x) / (cs.max_y - cs.min_y) == pytest.approx(350 / 250)

    def test_doughnut(self):
        assert create_pie_chart([1, 1], inner_radius=0.5).get_first(ElementKind.PIE).is_doughnut

    @pytest.mark.parametrize("kw", [{"inner_radius": 1}, {"labels": ["only one"]}])
    def test_invalid(self, kw):
        with pytest.raises(InvalidInputError):
            create_pie_chart([1, 2], **kw)


# ---------------------------------------------------------------------------
# Point charts
# ---------------------------------------------------------------------------

class TestCreateScatterPlot:

    def test_groups(self):
        plot = create_scatter_plot([[(0, 0), (1, 1)], [(2, 2), (3, 5)]], point_size=[2, 4])
        pts = _kinds(plot, ElementKind.SCATTER_POINTS)
        assert [p.size for p in pts] == [2, 4]
        assert pts[0].presentation.fill != pts[1].presentation.fill
        assert len(_kinds(plot, ElementKind.GRID)) == 2
        assert all(a.arrow_size == 3 for a in _kinds(plot, ElementKind.AXIS))

    def test_single_group_renders(self):
        plot = create_scatter_plot([(0, 0), (1, 1), (2, 4)], x_axis_title="x")
        assert "x" in _texts(plot)


class TestCreateAreaChart:

    def test_baseline_zero(self):
        area = create_area_chart([(0, 1), (1, 3), (2, 2)]).get_first(ElementKind.AREA)
        assert area.baseline((1, 3)) == (1, 0.0)

    def test_baseline_one_on_log_axis(self):
        cs = LogLinCoordinateSystem2D(0, 2, 0.5, 5)
        area = create_area_chart([(0, 1), (1, 3), (2, 2)],
                                 coordinate_system=cs).get_first(ElementKind.AREA)
        assert area.baseline((1, 3)) == (1, 1.0)

    def test_horizontal(self):
        area = create_area_chart([(1, 0), (3, 1)], vertical=False).get_first(ElementKind.AREA)
        assert area.baseline((3, 1)) == (0.0, 1)


class TestCreateFunctionPlot:

    def test_samples(self):
        line = create_function_plot(np.sin, 0, 6).get_first(ElementKind.DATA_LINE)
        assert len(line.data) == 100
        assert line.data[0] == (0.0, 0.0)

    def test_several_functions(self):
        plot = create_function_plot([np.sin, np.cos], 0, 6, n_samples=20)
        lines = _kinds(plot, ElementKind.DATA_LINE)
        assert len(lines) == 2
        assert lines[0].presentation.stroke != lines[1].presentation.stroke

    def test_non_finite_samples_dropped(self):
        fn = lambda x: 1 / x if x > 0 else float("nan")  # noqa: E731
        line = create_function_plot(fn, -1, 1).get_first(ElementKind.DATA_LINE)
        assert len(line.data) == 50

    def test_horizontal_swaps_axes(self):
        line = create_function_plot(lambda x: 2 * x, 0, 1, n_samples=2,
                                    vertical=False).get_first(ElementKind.DATA_LINE)
        assert line.data == ((0.0, 0.0), (2.0, 1.0))

    @pytest.mark.parametrize("args", [(1, 1), (0, 1, 1)])
    def test_invalid(self, args):
        with pytest.raises(InvalidInputError):
            create_function_plot(np.sin, *args)

    def test_no_finite_values(self):
        with pytest.raises(InvalidInputError):
            create_function_plot(lambda x: float("nan"), 0, 1)


class TestCreateBarChart:

    def test_rows_centred_on_categories(self):
        bars = create_bar_chart([3, 5, 2]).get_first(ElementKind.BARS)
        assert bars.data == ((0.5, 3.0), (1.5, 5.0), (2.5, 2.0))
        assert bars.margin == 0.25
        assert bars.baseline == 0.0

    def test_labels(self):
        assert {"a", "b"} <= set(_texts(create_bar_chart([("a", 1), ("b", 2)])))

    def test_stacked(self):
        plot = create_bar_chart([[1, 2], [3, 4]], stacked=True)
        bars = plot.get_first(ElementKind.BARS)
        assert bars.stacked
        assert [len(q) for q in bars.segments()] == [2, 2]
        assert bars.presentation[0].fill != bars.presentation[1].fill
        plot.to_graphics()

    def test_clustered(self):
        bars = create_bar_chart([("x", [1, 2, 3])], cluster_margin=0.2).get_first(ElementKind.BARS)
        assert not bars.stacked
        assert bars.cluster_margin == 0.2
        assert len(bars.segments()[0]) == 3

    def test_log_value_axis_starts_at_one(self):
        cs = LogLinCoordinateSystem2D(0, 2, 1, 200)
        plot = create_bar_chart([10, 100], coordinate_system=cs)
        assert plot.get_first(ElementKind.BARS).baseline == 1.0
        plot.to_graphics()

    def test_horizontal_renders(self):
        assert "a" in _texts(create_bar_chart([("a", 1), ("b", 2)], vertical=False))

    @pytest.mark.parametrize("data", [[], [float("nan")], [[]]])
    def test_invalid(self, data):
        with pytest.raises(InvalidInputError):
            create_bar_chart(data)


class TestCreateHistogram:

    def test_bars_on_bin_centres(self):
        plot = create_histogram([1, 2, 2, 3, 3, 3, 4, 4, 4, 4], bin_count=3)
        bars = plot.get_first(ElementKind.BARS)
        np.testing.assert_allclose(bars.data, [(1.5, 1), (2.5, 2), (3.5, 7)])
        assert bars.margin == 0.0
        plot.to_graphics()

    def test_empty_bins_on_log_axis(self):
        cs = LogLinCoordinateSystem2D(0, 10, 1, 10)
        plot = create_histogram([0, 0, 0, 10], bin_count=5, coordinate_system=cs)
        bars = plot.get_first(ElementKind.BARS)
        assert [v for _, v in bars.data] == [3, 1, 1, 1, 1]
        assert len(plot.to_graphics().commands) > 0

    def test_invalid(self):
        with pytest.raises(InvalidInputError):
            create_histogram([])


class TestCreateDistribution:

    def test_area_through_bin_counts(self):
        area = create_distribution([1, 2, 2, 3, 3, 3, 4, 4, 4, 4],
                                   bin_count=3).get_first(ElementKind.AREA)
        np.testing.assert_allclose(area.data, [(1.5, 1), (2.5, 2), (3.5, 7)])

    def test_horizontal(self):
        area = create_distribution([1, 2, 2, 3], bin_count=2,
                                   vertical=False).get_first(ElementKind.AREA)
        np.testing.assert_allclose(area.data, [(1, 1.5), (3, 2.5)])


class TestCreateLineChart:

    def test_values_plotted_against_index(self):
        plot = create_line_chart([3, 1, 2])
        assert plot.get_first(ElementKind.DATA_LINE).data == ((0, 3), (1, 1), (2, 2))
        assert _kinds(plot, ElementKind.SCATTER_POINTS) == []

    def test_several_series(self):
        lines = _kinds(create_line_chart([[(0, 0), (1, 1)], [(0, 1), (1, 0)]]),
                       ElementKind.DATA_LINE)
        assert len(lines) == 2
        assert lines[0].presentation.stroke != lines[1].presentation.stroke

    def test_points_take_line_colour(self):
        plot = create_line_chart([3, 1, 2], point_size=2, y_axis_title="y")
        line = plot.get_first(ElementKind.DATA_LINE)
        pts = plot.get_first(ElementKind.SCATTER_POINTS)
        assert pts.size == 2
        assert pts.presentation.fill == line.presentation.stroke
        assert "y" in _texts(plot)

    def test_point_size_per_series(self):
        plot = create_line_chart([[(0, 0), (1, 1)], [(0, 1), (1, 0)]], point_size=[0, 3])
        assert [p.size for p in _kinds(plot, ElementKind.SCATTER_POINTS)] == [3]

    @pytest.mark.parametrize("kw", [{"data": []}, {"data": [1, 2], "point_size": []}])
    def test_invalid(self, kw):
        with pytest.raises(InvalidInputError):
            create_line_chart(kw.pop("data"), **kw)


class TestCreateStackedAreaChart:

    def test_bands(self):
        plot = create_stacked_area_chart([(1, 3, 1), (0, 1, 2)])
        lower, upper = _kinds(plot, ElementKind.AREA)
        assert lower.data == ((0, 1), (1, 3))
        assert upper.data == ((0, 3), (1, 4))
        assert lower.baseline((1, 3)) == (1, 0.0)
        assert upper.baseline((1, 4)) == (1, 3.0)
        assert lower.presentation.fill != upper.presentation.fill
        plot.to_graphics()

    def test_horizontal(self):
        upper = _kinds(create_stacked_area_chart([(0, 1, 2), (1, 3, 1)], vertical=False),
                       ElementKind.AREA)[1]
        assert upper.data == ((3, 0), (4, 1))
        assert upper.baseline((4, 1)) == (3.0, 1)

    @pytest.mark.parametrize("data", [
        [],
        [(0,)],
        [(0, 1), (1, 2, 3)],
        [(0, 1), (0, 2)],
        [(0, float("nan"))],
    ])
    def test_invalid(self, data):
        with pytest.raises(InvalidInputError):
            create_stacked_area_chart(data)


# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------

class TestPlotCanvas:

    @pytest.fixture
    def shown(self, monkeypatch):
        shown = []
        monkeypatch.setattr("chartly._canvas.widgets.Output", MagicMock)
        monkeypatch.setattr("IPython.display.display", lambda obj: shown.append(obj))
        return shown

    def test_redraw_throttled(self, cs, shown):
        canvas = PlotCanvas(Plot([DataLine([(0, 0), (1, 1)], cs)]))
        assert len(shown) == 1
        canvas._MIN_DRAW_INTERVAL_S = 60.0
        canvas._last_draw = float("-inf")
        canvas.redraw()
        canvas.redraw()
        assert len(shown) == 2
        canvas.force_redraw()
        assert len(shown) == 3

    def test_show(self, cs, shown):
        plot = Plot([DataLine([(0, 0), (1, 1)], cs)])
        canvas = plot.show()
        assert canvas.plot is plot
        assert shown[-1] is canvas.widget
