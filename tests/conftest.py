import os
import threading
import time

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame
import pytest

from lighthouse.config import Settings
from lighthouse.display.images import clear_image_cache
from lighthouse.display.renderer import Renderer
from lighthouse.display.viewport import ViewportState
from lighthouse.display.window import WindowPlacement


class FakeCanvas:
    """Monospace canvas: 10px per glyph, 12px per bold glyph, ascent 12."""

    font_ascent = 12

    def __init__(self, *, yield_threads=False):
        self.ops = []
        self.log = []
        self.yield_threads = yield_threads

    def _record(self, op):
        self.ops.append(op)
        self.log.append((threading.get_ident(), op))
        if self.yield_threads:
            time.sleep(0)

    def text_advance(self, text, bold=False):
        return len(text) * (12 if bold else 10)

    def fill_rect(self, x, y, width, height, color):
        self._record(("fill", x, y, width, height, color))

    def draw_text(self, text, x, baseline, color, bold=False):
        self._record(("text", text, x, baseline, bold))
        return self.text_advance(text, bold)

    def draw_bar(self, x, y, height, color):
        self._record(("bar", x, y, height))

    def blit(self, image, x, y):
        self._record(("blit", image.get_size(), x, y))

    def resize(self, width, height):
        self._record(("resize", width, height))

    def flush(self):
        self._record(("flush",))


class FakeWindow:
    def __init__(self):
        self.calls = []

    def resize(self, width, height):
        self.calls.append(("resize", width, height))

    def move(self, x, y):
        self.calls.append(("move", x, y))

    def flush(self):
        self.calls.append(("flush",))


@pytest.fixture(autouse=True)
def _fresh_image_cache():
    clear_image_cache()
    yield
    clear_image_cache()


@pytest.fixture
def settings():
    return Settings(
        font_size=20,
        horiz_padding=5,
        cursor_padding=4,
        height=30,
        width=300,
        max_height=330,
        desc_size=200,
        auto_center=True,
    )


@pytest.fixture
def placement():
    return WindowPlacement(x=100, x_with_desc=50, y=20)


@pytest.fixture
def canvas():
    return FakeCanvas()


@pytest.fixture
def window():
    return FakeWindow()


@pytest.fixture
def renderer(settings, canvas, window, placement):
    return Renderer(settings, ViewportState(), canvas, window, placement)


@pytest.fixture
def write_png(tmp_path):
    def _write(name, size, color=(200, 30, 30, 255)):
        path = tmp_path / name
        surface = pygame.Surface(size, pygame.SRCALPHA)
        surface.fill(color)
        pygame.image.save(surface, str(path))
        return path

    return _write
