"""Tests for presentation attributes, chart styles and saved profiles.

Run:  python -m pytest tests/test_style.py -v
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import chartly
from chartly import (
    ChartStyle, Font, InvalidInputError, PresentationAttributes, configure_logging,
    create_swarm_plot, delete_profile, list_profiles, load_profile, palette_from_colormap,
    save_profile,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _profiles_dir(tmp_path, monkeypatch):
    """Keep profile files out of the user's home directory."""
    monkeypatch.setattr("chartly._style.PROFILES_DIR", tmp_path / "profiles")


@pytest.fixture
def chartly_logger():
    logger = logging.getLogger("chartly")
    level, handlers = logger.level, logger.handlers[:]
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


# ---------------------------------------------------------------------------
# Presentation attributes
# ---------------------------------------------------------------------------

class TestPresentationAttributes:

    def test_defaults(self):
        pa = PresentationAttributes()
        assert (pa.fill, pa.stroke, pa.line_width) == ("black", "black", 1.0)
        assert pa.draws_anything

    def test_nothing_drawn(self):
        assert not PresentationAttributes(fill=None, stroke=None).draws_anything

    def test_replace(self):
        pa = PresentationAttributes().replace(stroke=None)
        assert pa.stroke is None and pa.fill == "black"

    @pytest.mark.parametrize("kw", [{"fill": "notacolour"}, {"stroke": (2, 0, 0)},
                                    {"line_width": -1}])
    def test_invalid(self, kw):
        with pytest.raises(InvalidInputError):
            PresentationAttributes(**kw)


# ---------------------------------------------------------------------------
# Chart style
# ---------------------------------------------------------------------------

class TestChartStyle:

    def test_colours_cycle(self):
        style = ChartStyle(palette=("red", "blue"), light_palette=())
        assert [style.color(i) for i in range(3)] == ["red", "blue", "red"]
        assert style.light_color(1) == "blue"

    def test_empty_palette_rejected(self):
        with pytest.raises(InvalidInputError):
            ChartStyle(palette=())

    def test_dict_round_trip_ignores_unknown_keys(self):
        style = ChartStyle(palette=("#111111",), point_size=3,
                           title_font=Font(size=20, weight="bold"))
        data = style.to_dict()
        data["unknown"] = 1
        assert ChartStyle.from_dict(data) == style

    def test_palette_from_colormap(self):
        colors = palette_from_colormap("tab10", 3)
        assert colors == ("#1f77b4", "#ff7f0e", "#2ca02c")
        assert len(palette_from_colormap("viridis", 5)) == 5

    def test_unknown_colormap(self):
        with pytest.raises(InvalidInputError):
            palette_from_colormap("no-such-map")

    def test_style_reaches_chart(self):
        style = ChartStyle(palette=("#123456",), light_palette=("#abcdef",))
        plot = create_swarm_plot([1, 2, 3], style=style)
        swarm = plot.get_first(chartly.ElementKind.SWARM)
        assert swarm.presentation.fill == "#abcdef"
        assert swarm.presentation.stroke == "#123456"


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

class TestProfiles:

    def test_save_list_load_delete(self):
        style = ChartStyle(palette=("#000000", "#ffffff"), line_width=2)
        path = save_profile("mono", style)
        assert json.loads(path.read_text())["line_width"] == 2
        assert list_profiles() == ["mono"]
        assert load_profile("mono") == style
        delete_profile("mono")
        assert list_profiles() == []

    def test_missing_profile(self):
        with pytest.raises(FileNotFoundError):
            load_profile("nope")

    def test_delete_missing_is_noop(self):
        delete_profile("nope")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

class TestLogging:

    def test_package_logger_has_null_handler(self):
        assert any(isinstance(h, logging.NullHandler)
                   for h in logging.getLogger("chartly").handlers)

    def test_configure_once(self, chartly_logger):
        configure_logging("DEBUG")
        configure_logging("DEBUG")
        streams = [h for h in chartly_logger.handlers
                   if type(h) is logging.StreamHandler and h.stream is sys.stderr]
        assert len(streams) == 1
        assert chartly_logger.level == logging.DEBUG

    def test_env_level(self, chartly_logger, monkeypatch):
        monkeypatch.setenv("CHARTLY_LOG_LEVEL", "warning")
        configure_logging(force=True)
        assert chartly_logger.level == logging.WARNING

    def test_save_logged(self, chartly_logger, caplog, tmp_path):
        plot = create_swarm_plot([1, 2, 3])
        with caplog.at_level(logging.INFO, logger="chartly"):
            plot.save(tmp_path / "out.png")
        assert "saved plot" in caplog.text
