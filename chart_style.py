# chart_style.py
# Read-only style constants shared by the donut and bar renderers.
# Defaults live here; Configs/config.toml may override any of them.

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple

# --- anchor everything to this file's folder ---
HERE = Path(__file__).parent
CONFIG_PATH = HERE / "Configs" / "config.toml"


def load_cfg(path: Path | None = None) -> dict:
    cfg_path = Path(path) if path is not None else CONFIG_PATH
    if cfg_path.exists():
        with open(cfg_path, "rb") as f:
            return tomllib.load(f)
    return {}


# =======================
# Defaults
# =======================
LANGUAGE_COLORS: Dict[str, str] = {
    "TypeScript": "#3178c6",
    "Dart": "#00B4AB",
    "Python": "#FFD43B",
    "C#": "#9B4F96",
    "Rust": "#f74c00",
}

LANGUAGE_STROKE_COLORS: Dict[str, str] = {
    "TypeScript": "#1e4d7a",
    "Dart": "#006b66",
    "Python": "#b39429",
    "C#": "#5a2e5a",
    "Rust": "#8f2d00",
}


@dataclass(frozen=True)
class StyleConfig:
    """Palette, fonts, spacing and per-chart constants.

    Sizes are in px; angles in radians.
    """

    # colors
    background: str = "#0d1117"
    legend_text: str = "#c9d1d9"
    title_color: str = "#58a6ff"
    percent_text: str = "#ffffff"
    axis_color: str = "#8b949e"
    bar_fill: str = "#58a6ff"
    bar_stroke: str = "#1f6feb"
    fallback_fill: str = "#666666"
    fallback_stroke: str = "#333333"
    language_colors: Dict[str, str] = field(default_factory=lambda: dict(LANGUAGE_COLORS))
    language_stroke_colors: Dict[str, str] = field(default_factory=lambda: dict(LANGUAGE_STROKE_COLORS))

    # fonts
    font_family: str = "sans-serif"
    size_legend: str = "14px"
    size_title: str = "18px"
    size_percent: str = "12px"
    size_axis: str = "10px"
    size_caption: str = "11px"

    # spacing
    width: int = 400
    content_height: int = 200
    border_radius: int = 10
    title_height: int = 50
    title_baseline: int = 30
    content_padding: int = 20
    legend_item_height: int = 30
    legend_icon_size: int = 15
    legend_icon_margin: int = 10

    # donut
    legend_width_ratio: float = 0.4
    chart_width_ratio: float = 0.6
    chart_margin: int = 20
    inner_radius_ratio: float = 0.6
    pad_angle: float = 0.03
    corner_radius: float = 1
    stroke_width: float = 1
    min_label_threshold: float = 10.0  # slices below this % get no label
    percent_shadow: str = "0 1px 2px rgba(0,0,0,0.6)"

    # bar chart
    bar_margins: Tuple[int, int, int, int] = (50, 20, 50, 45)  # top, right, bottom, left
    band_padding: float = 0.2
    bar_corner_radius: float = 2
    y_tick_count: int = 5
    x_label_every: int = 3
    tick_size: int = 6
    caption: str = "Hour of day (Asia/Tokyo)"

    @property
    def height(self) -> int:
        return self.title_height + self.content_height + self.content_padding

    def fill_for(self, name: str) -> str:
        return self.language_colors.get(name, self.fallback_fill)

    def stroke_for(self, name: str) -> str:
        return self.language_stroke_colors.get(name, self.fallback_stroke)


def style_from_config(cfg: dict) -> StyleConfig:
    """Build a StyleConfig, letting config.toml sections override the defaults.

    Recognised sections: [colors], [language_colors], [language_stroke_colors],
    [fonts] and [bar]. Unknown keys are ignored.
    """
    known = set(StyleConfig.__dataclass_fields__)
    overrides: dict = {}
    for section in ("colors", "fonts", "bar"):
        for key, value in (cfg.get(section, {}) or {}).items():
            if key in known:
                overrides[key] = tuple(value) if isinstance(value, list) else value

    fills = dict(LANGUAGE_COLORS)
    fills.update(cfg.get("language_colors", {}) or {})
    strokes = dict(LANGUAGE_STROKE_COLORS)
    strokes.update(cfg.get("language_stroke_colors", {}) or {})

    return StyleConfig(language_colors=fills, language_stroke_colors=strokes, **overrides)


CFG = load_cfg()
STYLE = style_from_config(CFG)
