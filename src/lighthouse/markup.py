"""Result/description markup.

Markup is plain text with a few ``%`` escapes:

``%B<text>%``  bold text
``%I<path>%``  inline image (the path may use ``~`` and ``$VAR``)
``%N``         line break
``%%``         a literal percent sign

An unknown escape is drawn literally. Text is cut so that every emitted
segment fits the width budget asked for at the moment it is produced. In wrap
mode a segment that does not fit is preceded by a line break instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Union


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class BoldText:
    text: str


@dataclass(frozen=True)
class Image:
    path: str


@dataclass(frozen=True)
class LineBreak:
    pass


Segment = Union[PlainText, BoldText, Image, LineBreak]
Measure = Callable[[str, bool], int]


def fit_prefix(text: str, measure: Measure, bold: bool, budget: int) -> int:
    """Return how many leading characters of ``text`` fit in ``budget`` pixels."""
    if budget <= 0 or not text:
        return 0
    if measure(text, bold) <= budget:
        return len(text)
    lo, hi = 0, len(text)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if measure(text[:mid], bold) <= budget:
            lo = mid
        else:
            hi = mid - 1
    return lo


def _next_marker(text: str, start: int) -> int:
    idx = text.find("%", start)
    return len(text) if idx == -1 else idx


def iter_segments(
    text: str,
    measure: Measure,
    budget: Callable[[], int],
    wrap: bool = False,
) -> Iterator[Segment]:
    """Lazily split ``text`` into segments.

    ``budget`` is asked for the remaining width before each text segment, so the
    caller can advance its cursor between segments. The stream ends at the end
    of the text or as soon as not a single character of the next text fits.
    With ``wrap`` set, a text that does not fit first gets a ``LineBreak`` and is
    retried on the fresh line; the stream only ends if it does not fit there
    either.
    """
    pos = 0
    fresh = True
    bold_end: Optional[int] = None
    while True:
        if bold_end is not None:
            if pos >= bold_end:
                pos = bold_end + 1
                bold_end = None
                continue
            chunk = text[pos:bold_end]
            bold = True
        else:
            if pos >= len(text):
                return
            tag = text[pos + 1] if text[pos] == "%" and pos + 1 < len(text) else ""
            if tag == "N":
                pos += 2
                fresh = True
                yield LineBreak()
                continue
            if tag == "I":
                end = _next_marker(text, pos + 2)
                path = text[pos + 2 : end]
                pos = end + 1
                if path:
                    fresh = False
                    yield Image(path)
                continue
            if tag == "B":
                pos += 2
                bold_end = _next_marker(text, pos)
                continue
            if tag == "%":
                if fit_prefix("%", measure, False, budget()) == 0:
                    if not wrap or fresh:
                        return
                    fresh = True
                    yield LineBreak()
                    continue
                pos += 2
                fresh = False
                yield PlainText("%")
                continue
            # Unescaped text runs to the next marker; a stray "%" is kept as text.
            chunk = text[pos : _next_marker(text, pos + 1 if text[pos] == "%" else pos)]
            bold = False

        count = fit_prefix(chunk, measure, bold, budget())
        if count == 0:
            if not wrap or fresh:
                return
            fresh = True
            yield LineBreak()
            continue
        pos += count
        fresh = False
        yield BoldText(chunk[:count]) if bold else PlainText(chunk[:count])
