from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass
class Offset:
    """Layout cursor.

    ``y`` is a text baseline (text is anchored bottom-left) while ``image_y`` is
    the top edge for the next image (images are anchored top-left). They are
    allowed to drift apart inside the description pane: placing an image moves
    ``image_y`` down and pulls ``y`` along with it, and a line break advances
    both.
    """

    x: int
    y: int
    image_y: int


@dataclass(frozen=True)
class ImageFormat:
    width: int
    height: int


EMPTY_IMAGE = ImageFormat(0, 0)


def line_offset(line: int, *, padding: int, row_height: int, ascent: int) -> Offset:
    top = row_height * line
    return Offset(x=padding, y=top + ascent, image_y=top)


def scale_to_fit(width: int, height: int, max_width: int, max_height: int) -> Tuple[int, int]:
    if width <= max_width and height <= max_height:
        return width, height
    prop = min(max_width / width, max_height / height)
    return int(round(prop * width)), int(round(prop * height))


def typed_line_layout(text_width: int, cursor_advance: int, base_x: int, available_width: int) -> Tuple[int, int]:
    """Place an editable line so the cursor stays visible.

    Returns ``(text_x, cursor_x)``. Text wider than the line is right-aligned;
    if that pushes the cursor past the left edge, the text is shifted back by
    exactly that overflow and the cursor pinned at 0. This corrects one frame at
    a time and is not a full scroll solver.
    """
    if text_width > available_width:
        base_x -= text_width - available_width
    cursor_x = base_x + cursor_advance
    if cursor_x < 0:
        base_x -= cursor_x
        cursor_x = 0
    return base_x, cursor_x
