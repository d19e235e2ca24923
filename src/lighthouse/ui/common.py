from __future__ import annotations

import logging
import os
from typing import Dict, Optional, Tuple

import pygame

from lighthouse.config import Color, Settings

logger = logging.getLogger(__name__)

Size = Tuple[int, int]

_FONT_CACHE: Dict[Tuple[str, int, bool], pygame.font.Font] = {}


def create_font(name: str, size: int, bold: bool = False) -> pygame.font.Font:
    key = (name, size, bold)
    cached = _FONT_CACHE.get(key)
    if cached is not None:
        return cached
    if not pygame.font.get_init():
        pygame.font.init()
    if pygame.font.match_font(name):
        font = pygame.font.SysFont(name, size, bold=bold)
    else:
        logger.debug("Font %s not found, using the default font", name)
        font = pygame.font.Font(None, size)
        font.set_bold(bold)
    _FONT_CACHE[key] = font
    return font


class PygameCanvas:
    """Off-screen drawing surface copied to the window on :meth:`flush`."""

    def __init__(self, settings: Settings, size: Size) -> None:
        self.surface = pygame.Surface(size)
        self._regular = create_font(settings.font_name, settings.font_size)
        self._bold = create_font(settings.font_name, settings.font_size, bold=True)

    def _font(self, bold: bool) -> pygame.font.Font:
        return self._bold if bold else self._regular

    @property
    def font_ascent(self) -> int:
        return self._regular.get_ascent()

    def fill_rect(self, x: int, y: int, width: int, height: int, color: Color) -> None:
        self.surface.fill(color.to_rgb255(), pygame.Rect(x, y, width, height))

    def text_advance(self, text: str, bold: bool = False) -> int:
        return self._font(bold).size(text)[0]

    def draw_text(self, text: str, x: int, baseline: int, color: Color, bold: bool = False) -> int:
        font = self._font(bold)
        if text:
            rendered = font.render(text, True, color.to_rgb255())
            self.surface.blit(rendered, (x, baseline - font.get_ascent()))
        return font.size(text)[0]

    def draw_bar(self, x: int, y: int, height: int, color: Color) -> None:
        pygame.draw.line(self.surface, color.to_rgb255(), (x, y), (x, y + height))

    def blit(self, image: pygame.Surface, x: int, y: int) -> None:
        self.surface.blit(image, (x, y))

    def resize(self, width: int, height: int) -> None:
        if self.surface.get_size() == (width, height):
            return
        resized = pygame.Surface((width, height))
        resized.blit(self.surface, (0, 0))
        self.surface = resized

    def flush(self) -> None:
        target = pygame.display.get_surface()
        if target is not None:
            target.blit(self.surface, (0, 0))


class PygameWindow:
    """Borderless pygame display window that can be resized and moved."""

    def __init__(self, flags: int = pygame.NOFRAME) -> None:
        self.flags = flags
        self.size: Optional[Size] = None
        self.position: Optional[Tuple[int, int]] = None

    def resize(self, width: int, height: int) -> None:
        if self.size == (width, height) and pygame.display.get_surface() is not None:
            return
        pygame.display.set_mode((width, height), self.flags)
        self.size = (width, height)

    def move(self, x: int, y: int) -> None:
        if self.position == (x, y):
            return
        self.position = (x, y)
        if pygame.display.get_surface() is None:
            # Picked up by SDL when the window is created.
            os.environ["SDL_VIDEO_WINDOW_POS"] = f"{x},{y}"
            return
        try:
            from pygame._sdl2.video import Window

            Window.from_display_module().position = (x, y)
        except (ImportError, AttributeError, pygame.error) as exc:
            logger.warning("Cannot move window to %i,%i: %s", x, y, exc)

    def flush(self) -> None:
        if pygame.display.get_surface() is not None:
            pygame.display.flip()
