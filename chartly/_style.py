"""Presentation attributes, default palettes and fonts, saved style profiles."""
from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Optional, Sequence

import matplotlib
from matplotlib.colors import ListedColormap, is_color_like, to_hex
from matplotlib.font_manager import FontProperties

from ._errors import InvalidInputError
from ._logging import get_logger

logger = get_logger(__name__)

# Any matplotlib colour spec: name, hex string or RGB(A) tuple.
Color = Any

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Font:
    family: str = "sans-serif"
    size: float = 12
    weight: str = "normal"

    def properties(self) -> FontProperties:
        return FontProperties(family=self.family, size=self.size, weight=self.weight)


DEFAULT_FONT = Font()
DEFAULT_AXIS_TITLE_FONT = Font(size=14, weight="bold")
DEFAULT_TITLE_FONT = Font(size=18, weight="bold")

# ---------------------------------------------------------------------------
# Palettes
# ---------------------------------------------------------------------------

# Okabe-Ito colour-blind safe palette.
DEFAULT_PALETTE: tuple[str, ...] = (
    "#0072b2", "#d55e00", "#cc79a7", "#e69f00", "#56b4e9", "#009e73", "#f0e442",
)

# Light tints of DEFAULT_PALETTE, used as fills under darker outlines.
DEFAULT_LIGHT_PALETTE: tuple[str, ...] = (
    "#c5ebff", "#ffe9da", "#ffdef0", "#fff2d8", "#d6f1ff", "#cbffef", "#fff9bd",
)

GRID_COLOR = "#dcdcdc"


def _cmap_color(cmap, i, n):
    """Sample color i of n from a colormap.

    Small qualitative colormaps (tab10, Set1, ...) give their discrete
    colours in order; anything else is interpolated across [0, 1].
    """
    if isinstance(cmap, ListedColormap) and cmap.N <= 20:
        return cmap(i % cmap.N)
    return cmap(i / max(n - 1, 1))


def palette_from_colormap(name: str, n: int = 7) -> tuple[str, ...]:
    """*n* hex colours sampled from the matplotlib colormap *name*."""
    try:
        cmap = matplotlib.colormaps[name]
    except KeyError:
        raise InvalidInputError(f"unknown colormap: {name!r}") from None
    return tuple(to_hex(_cmap_color(cmap, i, n)) for i in range(n))


def _check_color(value, name):
    if value is not None and not is_color_like(value):
        raise InvalidInputError(f"{name} is not a valid colour: {value!r}")


# ---------------------------------------------------------------------------
# Presentation attributes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PresentationAttributes:
    """How a plot element is filled, stroked and labelled.

    ``fill`` or ``stroke`` set to None means that component is not drawn.
    """

    fill: Optional[Color] = "black"
    stroke: Optional[Color] = "black"
    line_width: float = 1.0
    line_dash: Optional[tuple[float, ...]] = None
    line_cap: str = "projecting"
    line_join: str = "miter"
    font: Font = DEFAULT_FONT

    def __post_init__(self):
        _check_color(self.fill, "fill")
        _check_color(self.stroke, "stroke")
        if self.line_width < 0:
            raise InvalidInputError(f"line_width must be >= 0, got {self.line_width}")

    @property
    def draws_anything(self) -> bool:
        return self.fill is not None or self.stroke is not None

    def replace(self, **changes) -> "PresentationAttributes":
        return replace(self, **changes)


# ---------------------------------------------------------------------------
# Chart style (configuration shared by the chart constructors)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChartStyle:
    palette: tuple[str, ...] = DEFAULT_PALETTE
    light_palette: tuple[str, ...] = DEFAULT_LIGHT_PALETTE
    font: Font = DEFAULT_FONT
    axis_title_font: Font = DEFAULT_AXIS_TITLE_FONT
    title_font: Font = DEFAULT_TITLE_FONT
    grid_color: str = GRID_COLOR
    axis_color: str = "black"
    line_width: float = 1.0
    point_size: float = 2.0
    point_margin: float = 0.25

    def __post_init__(self):
        if not self.palette:
            raise InvalidInputError("palette must not be empty")
        for c in (*self.palette, *self.light_palette, self.grid_color, self.axis_color):
            _check_color(c, "style colour")

    def color(self, i: int) -> str:
        return self.palette[i % len(self.palette)]

    def light_color(self, i: int) -> str:
        if not self.light_palette:
            return self.color(i)
        return self.light_palette[i % len(self.light_palette)]

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["palette"] = list(self.palette)
        data["light_palette"] = list(self.light_palette)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChartStyle":
        """Build a style from a profile dict; unknown keys are ignored."""
        kwargs: dict[str, Any] = {}
        for key in ("grid_color", "axis_color", "line_width", "point_size", "point_margin"):
            if key in data:
                kwargs[key] = data[key]
        for key in ("palette", "light_palette"):
            if key in data:
                kwargs[key] = tuple(data[key])
        for key in ("font", "axis_title_font", "title_font"):
            if key in data:
                kwargs[key] = Font(**data[key])
        return cls(**kwargs)


DEFAULT_STYLE = ChartStyle()

# ---------------------------------------------------------------------------
# Saved profiles
# ---------------------------------------------------------------------------

PROFILES_DIR = Path(os.environ.get("CHARTLY_PROFILES_DIR",
                                   Path.home() / ".chartly" / "profiles"))


def _ensure_dir() -> None:
    PROFILES_DIR.mkdir(parents=True, exist_ok=True)


def list_profiles() -> list[str]:
    """Return sorted list of saved profile names (without .json)."""
    _ensure_dir()
    return sorted(p.stem for p in PROFILES_DIR.glob("*.json"))


def load_profile(name: str) -> ChartStyle:
    path = PROFILES_DIR / f"{name}.json"
    if not path.exists():
        raise FileNotFoundError(f"no chartly profile named {name!r} in {PROFILES_DIR}")
    return ChartStyle.from_dict(json.loads(path.read_text()))


def save_profile(name: str, style: ChartStyle) -> Path:
    _ensure_dir()
    path = PROFILES_DIR / f"{name}.json"
    path.write_text(json.dumps(style.to_dict(), indent=2))
    logger.info("saved style profile %r to %s", name, path)
    return path


def delete_profile(name: str) -> None:
    path = PROFILES_DIR / f"{name}.json"
    if path.exists():
        path.unlink()


def cycle(items: Sequence, i: int):
    return items[i % len(items)]
