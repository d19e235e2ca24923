from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Result:
    text: str
    desc: Optional[str] = None

    @property
    def has_desc(self) -> bool:
        return bool(self.desc)


@dataclass
class ViewportState:
    """Selection and scroll position of the result list.

    Input handling moves ``result_highlight`` and reports ``result_count``;
    only :func:`scroll_viewport` writes ``result_offset`` and
    ``display_results``.
    """

    result_count: int = 0
    result_highlight: int = 0
    result_offset: int = 0
    display_results: int = 0

    def set_result_count(self, count: int) -> None:
        self.result_count = max(0, count)

    def move_highlight(self, delta: int) -> None:
        if self.result_count <= 0:
            self.result_highlight = 0
            return
        self.result_highlight = max(0, min(self.result_count - 1, self.result_highlight + delta))

    def reset(self) -> None:
        self.result_highlight = 0
        self.result_offset = 0
        self.display_results = 0


def scroll_viewport(state: ViewportState, max_rows: int) -> Tuple[int, int]:
    """Clamp the highlight and scroll so it stays inside the visible window.

    Returns ``(result_offset, display_results)``; the visible slice is
    ``[result_offset, result_offset + display_results)``.
    """
    count = state.result_count
    if count <= 0:
        state.result_highlight = 0
        state.result_offset = 0
        state.display_results = 0
        return 0, 0

    state.result_highlight = max(0, min(state.result_highlight, count - 1))
    highlight = state.result_highlight
    offset = max(0, state.result_offset)

    display = min(count, max(1, max_rows))
    if offset + display < highlight + 1:
        offset = highlight - (display - 1)
        display = min(display, count - offset)
    elif offset > highlight:
        offset = highlight

    # The list may have shrunk under a scrolled window.
    if offset + display > count:
        offset = max(0, count - display)
    display = min(display, count - offset)

    state.result_offset = offset
    state.display_results = display
    return offset, display
