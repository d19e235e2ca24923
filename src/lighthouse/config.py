from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from lighthouse.paths import config_root

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "debug": False,
    "display": {
        "font_name": "sans",
        "font_size": 20,
        "horiz_padding": 5,
        "cursor_padding": 4,
        "height": 30,
        "width": 500,
        "max_height": 500,
        "desc_size": 300,
        "x": None,
        "y": None,
        "auto_center": True,
        "cursor_is_underline": False,
        "colors": {
            "query_fg": "#BBBBBB",
            "query_bg": "#222222",
            "result_fg": "#7DCFFF",
            "result_bg": "#191919",
            "highlight_fg": "#CCCCCC",
            "highlight_bg": "#000000",
        },
    },
}


@dataclass(frozen=True)
class Color:
    r: float
    g: float
    b: float

    @classmethod
    def parse(cls, value: Any) -> "Color":
        if isinstance(value, str):
            text = value.strip().lstrip("#")
            if len(text) == 3:
                text = "".join(ch * 2 for ch in text)
            if len(text) != 6:
                raise ValueError(f"Bad color {value!r}")
            channels = [int(text[i : i + 2], 16) for i in (0, 2, 4)]
            return cls(*(channel / 255 for channel in channels))
        if isinstance(value, (list, tuple)) and len(value) == 3:
            channels = [float(channel) for channel in value]
            # Lists may be given either as 0-255 ints or normalized floats.
            if any(channel > 1 for channel in channels):
                channels = [channel / 255 for channel in channels]
            return cls(*(max(0.0, min(1.0, channel)) for channel in channels))
        raise ValueError(f"Bad color {value!r}")

    def to_rgb255(self) -> tuple[int, int, int]:
        return (
            int(round(self.r * 255)),
            int(round(self.g * 255)),
            int(round(self.b * 255)),
        )


@dataclass(frozen=True)
class Settings:
    debug: bool = False
    font_name: str = "sans"
    font_size: int = 20
    horiz_padding: int = 5
    cursor_padding: int = 4
    height: int = 30
    width: int = 500
    max_height: int = 500
    desc_size: int = 300
    x: Optional[int] = None
    y: Optional[int] = None
    auto_center: bool = True
    cursor_is_underline: bool = False
    query_fg: Color = Color.parse("#BBBBBB")
    query_bg: Color = Color.parse("#222222")
    result_fg: Color = Color.parse("#7DCFFF")
    result_bg: Color = Color.parse("#191919")
    highlight_fg: Color = Color.parse("#CCCCCC")
    highlight_bg: Color = Color.parse("#000000")

    @property
    def max_rows(self) -> int:
        return max(0, self.max_height // self.height - 1)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(value, dict)
        ):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _candidate_config_paths() -> list[Path]:
    env_path = os.environ.get("LIGHTHOUSE_CONFIG")
    paths = []
    if env_path:
        paths.append(Path(env_path).expanduser())
    paths.extend([
        Path("lighthouserc.yaml"),
        config_root() / "lighthouserc.yaml",
    ])
    return paths


def load_config() -> Dict[str, Any]:
    config = dict(DEFAULT_CONFIG)
    for path in _candidate_config_paths():
        if path.exists():
            try:
                with path.open("r", encoding="utf-8") as handle:
                    data = yaml.safe_load(handle) or {}
            except (OSError, yaml.YAMLError) as exc:
                logger.warning("Cannot read config %s: %s", path, exc)
                break
            if isinstance(data, dict):
                config = _deep_merge(config, data)
            break
    return config


def _coerce_int(value: object, default: int, *, minimum: int = 0) -> int:
    if value is None:
        return default
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.warning("Bad number %r in config, using %d", value, default)
        return default
    return max(minimum, number)


def _coerce_optional_int(value: object) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        logger.warning("Bad position %r in config, centering instead", value)
        return None


def _coerce_color(value: object, default: Color) -> Color:
    if value is None:
        return default
    try:
        return Color.parse(value)
    except (TypeError, ValueError):
        logger.warning("Bad color %r in config, using default", value)
        return default


def settings_from_config(config: Dict[str, Any]) -> Settings:
    display = config.get("display", {}) or {}
    colors = display.get("colors", {}) or {}
    defaults = Settings()
    return Settings(
        debug=bool(config.get("debug", defaults.debug)),
        font_name=str(display.get("font_name", defaults.font_name)),
        font_size=_coerce_int(display.get("font_size"), defaults.font_size, minimum=1),
        horiz_padding=_coerce_int(display.get("horiz_padding"), defaults.horiz_padding),
        cursor_padding=_coerce_int(display.get("cursor_padding"), defaults.cursor_padding),
        height=_coerce_int(display.get("height"), defaults.height, minimum=1),
        width=_coerce_int(display.get("width"), defaults.width, minimum=1),
        max_height=_coerce_int(display.get("max_height"), defaults.max_height, minimum=1),
        desc_size=_coerce_int(display.get("desc_size"), defaults.desc_size),
        x=_coerce_optional_int(display.get("x")),
        y=_coerce_optional_int(display.get("y")),
        auto_center=bool(display.get("auto_center", defaults.auto_center)),
        cursor_is_underline=bool(display.get("cursor_is_underline", defaults.cursor_is_underline)),
        query_fg=_coerce_color(colors.get("query_fg"), defaults.query_fg),
        query_bg=_coerce_color(colors.get("query_bg"), defaults.query_bg),
        result_fg=_coerce_color(colors.get("result_fg"), defaults.result_fg),
        result_bg=_coerce_color(colors.get("result_bg"), defaults.result_bg),
        highlight_fg=_coerce_color(colors.get("highlight_fg"), defaults.highlight_fg),
        highlight_bg=_coerce_color(colors.get("highlight_bg"), defaults.highlight_bg),
    )


def load_settings() -> Settings:
    return settings_from_config(load_config())
