"""Tests for vector helpers and coordinate systems.

Run:  python -m pytest tests/test_geometry.py -v
"""
from __future__ import annotations

import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")  # headless backend

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from chartly import (
    InvalidInputError, LinearCoordinateSystem2D, LinLogCoordinateSystem2D,
    LogarithmicCoordinateSystem2D, LogLinCoordinateSystem2D, modulus, normalize,
    perpendicular_vector,
)


# ---------------------------------------------------------------------------
# perpendicular_vector
# ---------------------------------------------------------------------------

class TestPerpendicularVector:

    @pytest.mark.parametrize("v, expected", [
        ((1, 0), (0, 1)),
        ((0, 1), (1, 0)),
        ((3, 4), (-0.8, 0.6)),
        ((0, 0, 2), (1, 0, 0)),
    ])
    def test_known_values(self, v, expected):
        np.testing.assert_allclose(perpendicular_vector(v), expected, atol=1e-12)

    @pytest.mark.parametrize("v", [(1, 0), (2, -7), (0.1, 3), (1, 2, 3), (0, 5, -1, 2)])
    def test_unit_and_orthogonal(self, v):
        p = perpendicular_vector(v)
        assert modulus(p) == pytest.approx(1.0)
        assert float(np.dot(p, v)) == pytest.approx(0.0, abs=1e-12)

    def test_zero_vector_maps_to_zero(self):
        np.testing.assert_array_equal(perpendicular_vector((0, 0, 0)), [0, 0, 0])

    def test_too_short_rejected(self):
        with pytest.raises(InvalidInputError):
            perpendicular_vector((1,))

    def test_normalize_leaves_zero_alone(self):
        np.testing.assert_array_equal(normalize((0, 0)), [0, 0])
        np.testing.assert_allclose(normalize((3, 4)), [0.6, 0.8])


# ---------------------------------------------------------------------------
# Coordinate systems
# ---------------------------------------------------------------------------

class TestLinearCoordinateSystem:

    @pytest.fixture
    def cs(self):
        return LinearCoordinateSystem2D(0, 10, 0, 100, 350, 250)

    def test_corners_map_to_plot_area(self, cs):
        np.testing.assert_allclose(cs.to_plot_coordinates((0, 0)), [0, 250])
        np.testing.assert_allclose(cs.to_plot_coordinates((10, 100)), [350, 0])
        np.testing.assert_allclose(cs.to_plot_coordinates((5, 50)), [175, 125])

    def test_inverse(self, cs):
        for p in [(1.5, 20), (9, 99), (-3, 140)]:
            np.testing.assert_allclose(
                cs.to_data_coordinates(cs.to_plot_coordinates(p)), p)

    def test_resolution_defaults_to_one_percent(self, cs):
        np.testing.assert_allclose(cs.resolution, [0.1, 1.0])

    def test_resolution_override(self, cs):
        cs.resolution = (0.5, 0.5)
        np.testing.assert_allclose(cs.get_around((5, 50), (1, 0)), [5.5, 50])
        cs.resolution = None
        np.testing.assert_allclose(cs.get_around((5, 50), (0, -1)), [5, 49])

    def test_every_direction_straight(self, cs):
        assert cs.is_linear
        assert cs.is_direction_straight((1, 1))

    def test_empty_range_rejected(self):
        with pytest.raises(InvalidInputError):
            LinearCoordinateSystem2D(1, 1, 0, 10)

    def test_zero_scale_rejected(self):
        with pytest.raises(InvalidInputError):
            LinearCoordinateSystem2D(0, 1, 0, 10, 0, 100)


class TestLogCoordinateSystems:

    def test_log_log_midpoint(self):
        cs = LogarithmicCoordinateSystem2D(1, 100, 1, 100, 200, 200)
        np.testing.assert_allclose(cs.to_plot_coordinates((10, 10)), [100, 100])
        np.testing.assert_allclose(cs.to_data_coordinates((100, 100)), [10, 10])

    def test_mixed_axes(self):
        loglin = LogLinCoordinateSystem2D(0, 10, 1, 100, 100, 100)
        np.testing.assert_allclose(loglin.to_plot_coordinates((5, 10)), [50, 50])
        linlog = LinLogCoordinateSystem2D(1, 100, 0, 10, 100, 100)
        np.testing.assert_allclose(linlog.to_plot_coordinates((10, 5)), [50, 50])

    def test_axis_aligned_directions_straight(self):
        cs = LogarithmicCoordinateSystem2D(1, 100, 1, 100)
        assert not cs.is_linear
        assert cs.is_direction_straight((1, 0))
        assert cs.is_direction_straight((0, 2))
        assert not cs.is_direction_straight((1, 1))

    def test_nonpositive_bounds_rejected(self):
        with pytest.raises(InvalidInputError):
            LogarithmicCoordinateSystem2D(0, 10, 1, 10)

    def test_get_around_steps_in_log_space(self):
        cs = LogarithmicCoordinateSystem2D(1, 100, 1, 100)
        step = np.log(100) * 0.01
        np.testing.assert_allclose(cs.get_around((10, 10), (1, 0)),
                                   [10 * np.exp(step), 10])


class TestFromData:

    def test_padding_is_ten_percent(self):
        cs = LinearCoordinateSystem2D.from_data([(0, 0), (10, 20)])
        assert (cs.min_x, cs.max_x) == pytest.approx((-1, 11))
        assert (cs.min_y, cs.max_y) == pytest.approx((-2, 22))

    def test_single_point_gets_a_range(self):
        cs = LinearCoordinateSystem2D.from_data([(5, 0)])
        assert (cs.min_x, cs.max_x) == pytest.approx((2.5, 7.5))
        assert (cs.min_y, cs.max_y) == pytest.approx((-0.5, 0.5))

    def test_log_axis_rejects_nonpositive_data(self):
        with pytest.raises(InvalidInputError):
            LogLinCoordinateSystem2D.from_data([(1, 0), (2, 5)])

    def test_empty_rejected(self):
        with pytest.raises(InvalidInputError):
            LinearCoordinateSystem2D.from_data([])
