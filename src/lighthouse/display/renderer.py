from __future__ import annotations

import logging
import threading
from typing import List, Optional, Sequence

import pygame

from lighthouse.config import Color, Settings
from lighthouse.display.geometry import (
    EMPTY_IMAGE,
    ImageFormat,
    Offset,
    line_offset,
    typed_line_layout,
)
from lighthouse.display.images import draw_image
from lighthouse.display.viewport import Result, ViewportState, scroll_viewport
from lighthouse.display.window import (
    WindowPlacement,
    compute_geometry,
    highlighted_desc,
    sync_geometry,
)
from lighthouse.markup import BoldText, Image, LineBreak, PlainText, Segment, iter_segments
from lighthouse.logging_setup import configure_logging
from lighthouse.ui.common import PygameCanvas, PygameWindow

logger = logging.getLogger(__name__)

# Gap between the cursor position and the drawn bar.
CURSOR_INSET = 2
# Left margin of the description pane's first line.
PANE_INSET = 2


class Renderer:
    """Draws the query line, the visible results and the description pane.

    Every drawing call holds ``lock`` for its whole body, so a result producer
    thread and the input thread can both trigger redraws. The lock is taken
    per row rather than per frame.
    """

    def __init__(
        self,
        settings: Settings,
        viewport: ViewportState,
        canvas,
        window,
        placement: WindowPlacement,
    ) -> None:
        self.settings = settings
        self.viewport = viewport
        self.canvas = canvas
        self.window = window
        self.placement = placement
        self.results: List[Result] = []
        self.lock = threading.RLock()

    def set_results(self, results: Sequence[Result]) -> None:
        with self.lock:
            self.results = list(results)
            self.viewport.set_result_count(len(self.results))

    def _measure(self, text: str, bold: bool) -> int:
        return self.canvas.text_advance(text, bold)

    def _line_offset(self, line: int) -> Offset:
        return line_offset(
            line,
            padding=self.settings.horiz_padding,
            row_height=self.settings.height,
            ascent=self.canvas.font_ascent,
        )

    def _render_segment(
        self,
        segment: Segment,
        offset: Offset,
        foreground: Color,
        max_width: int,
        max_height: int,
    ) -> ImageFormat:
        if isinstance(segment, (PlainText, BoldText)):
            bold = isinstance(segment, BoldText)
            offset.x += self.canvas.draw_text(segment.text, offset.x, offset.y, foreground, bold)
            return EMPTY_IMAGE
        if isinstance(segment, Image):
            image = draw_image(self.canvas, segment.path, offset, max_width, max_height)
            offset.x += image.width
            return image
        return EMPTY_IMAGE

    def draw_typed_line(self, text: str, line: int, cursor: int, foreground: Color, background: Color) -> None:
        s = self.settings
        with self.lock:
            self.canvas.fill_rect(0, line * s.height, s.width, s.height, background)
            offset = self._line_offset(line)

            cursor = max(0, min(cursor, len(text)))
            text_x, cursor_x = typed_line_layout(
                self._measure(text, False),
                self._measure(text[:cursor], False),
                offset.x,
                s.width - offset.x,
            )
            advance = self.canvas.draw_text(text, text_x, offset.y, foreground, False)

            if s.cursor_is_underline:
                # Drawn after the text, not at the cursor index.
                self.canvas.draw_text("_", text_x + advance, offset.y, foreground, False)
            else:
                top = offset.y - s.font_size - s.cursor_padding
                self.canvas.draw_bar(cursor_x + CURSOR_INSET, top, s.font_size + 2 * s.cursor_padding, foreground)

    def draw_line(self, text: str, line: int, foreground: Color, background: Color) -> None:
        s = self.settings
        with self.lock:
            self.canvas.fill_rect(0, line * s.height, s.width, s.height, background)
            offset = self._line_offset(line)
            for segment in iter_segments(text, self._measure, lambda: s.width - offset.x):
                if isinstance(segment, LineBreak):
                    break
                self._render_segment(segment, offset, foreground, s.width - offset.x, s.height)

    def _pane_line_break(self, offset: Offset) -> None:
        offset.x = self.settings.width
        offset.y += self.settings.font_size
        offset.image_y += self.settings.font_size

    def draw_desc(self, text: str, foreground: Color, background: Color) -> None:
        s = self.settings
        with self.lock:
            pane_height = s.height * (self.viewport.result_count + 1)
            right = s.width + s.desc_size
            self.canvas.fill_rect(s.width, 0, s.desc_size, pane_height, background)
            offset = Offset(x=s.width + PANE_INSET, y=self.canvas.font_ascent, image_y=0)

            for segment in iter_segments(text, self._measure, lambda: right - offset.x, wrap=True):
                if isinstance(segment, LineBreak):
                    self._pane_line_break(offset)
                elif isinstance(segment, Image):
                    image = self._render_segment(segment, offset, foreground, s.desc_size, pane_height - offset.image_y)
                    if image.height:
                        # Captions continue beside the image; a line break drops below it.
                        offset.image_y += image.height
                        offset.y = offset.image_y
                else:
                    self._render_segment(segment, offset, foreground, s.desc_size, pane_height - offset.image_y)
                if offset.x + s.font_size > right:
                    self._pane_line_break(offset)

    def flush_surface(self) -> None:
        with self.lock:
            self.canvas.flush()

    def draw_query_text(self, text: str, cursor: int) -> None:
        s = self.settings
        self.draw_typed_line(text, 0, cursor, s.query_fg, s.query_bg)
        self.flush_surface()

    def draw_result_text(self, results: Optional[Sequence[Result]] = None) -> None:
        s = self.settings
        with self.lock:
            if results is None:
                results = self.results
            offset, display = scroll_viewport(self.viewport, s.max_rows)
            geometry = compute_geometry(s, self.viewport, results, self.placement)
            sync_geometry(self.window, self.canvas, geometry)
            highlight = self.viewport.result_highlight
            desc = highlighted_desc(results, self.viewport)

        for line, index in enumerate(range(offset, offset + display), start=1):
            if index >= len(results):
                break
            if index == highlight:
                self.draw_line(results[index].text, line, s.highlight_fg, s.highlight_bg)
            else:
                self.draw_line(results[index].text, line, s.result_fg, s.result_bg)
        if desc is not None:
            self.draw_desc(desc, s.highlight_fg, s.highlight_bg)

        self.flush_surface()
        with self.lock:
            self.window.flush()

    def redraw_all(self, query: str, cursor: int) -> None:
        self.draw_query_text(query, cursor)
        self.draw_result_text()


def create_renderer(settings: Settings, viewport: ViewportState) -> Renderer:
    """Build a renderer drawing into a borderless pygame window."""
    configure_logging(debug=settings.debug)
    if not pygame.display.get_init():
        pygame.display.init()
    info = pygame.display.Info()
    placement = WindowPlacement.centered(settings, info.current_w, info.current_h)
    canvas = PygameCanvas(settings, (settings.width, settings.height))
    logger.debug("Screen %ix%i, window placement %s", info.current_w, info.current_h, placement)
    return Renderer(settings, viewport, canvas, PygameWindow(), placement)
