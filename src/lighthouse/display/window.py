from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from lighthouse.config import Settings
from lighthouse.display.viewport import Result, ViewportState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WindowPlacement:
    x: int
    x_with_desc: int
    y: int

    @classmethod
    def centered(cls, settings: Settings, screen_width: int, screen_height: int) -> "WindowPlacement":
        if settings.x is not None:
            x = x_with_desc = settings.x
        else:
            x = (screen_width - settings.width) // 2
            x_with_desc = (screen_width - settings.width - settings.desc_size) // 2
        if settings.y is not None:
            y = settings.y
        else:
            y = (screen_height - settings.max_height) // 2
        return cls(x=max(0, x), x_with_desc=max(0, x_with_desc), y=max(0, y))


@dataclass(frozen=True)
class WindowGeometry:
    width: int
    height: int
    x: Optional[int] = None
    y: Optional[int] = None


def highlighted_desc(results: Sequence[Result], state: ViewportState) -> Optional[str]:
    if 0 <= state.result_highlight < min(state.result_count, len(results)):
        desc = results[state.result_highlight].desc
        if desc:
            return desc
    return None


def compute_geometry(
    settings: Settings,
    state: ViewportState,
    results: Sequence[Result],
    placement: WindowPlacement,
) -> WindowGeometry:
    height = min(settings.height * (state.result_count + 1), settings.max_height)
    with_desc = highlighted_desc(results, state) is not None
    width = settings.width + settings.desc_size if with_desc else settings.width
    if not settings.auto_center:
        return WindowGeometry(width=width, height=height)
    x = placement.x_with_desc if with_desc else placement.x
    return WindowGeometry(width=width, height=height, x=x, y=placement.y)


def sync_geometry(window, canvas, geometry: WindowGeometry) -> None:
    """Ask the window system for ``geometry`` and resize the surface to match."""
    if geometry.x is not None and geometry.y is not None:
        window.move(geometry.x, geometry.y)
    window.resize(geometry.width, geometry.height)
    canvas.resize(geometry.width, geometry.height)
    logger.debug("Window geometry %ix%i at %s,%s", geometry.width, geometry.height, geometry.x, geometry.y)
