"""ANSI-aware width measurement, clipping and padding for styled rows.

Escape sequences never count toward width; wide characters count as two
columns so rows stay aligned with the terminal grid.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
_WIDE_EAST_ASIAN = frozenset({"W", "F"})


def cell_width(ch: str, column: int) -> int:
    """Columns occupied by ``ch`` when drawn at ``column``."""
    if ch == "\t":
        return TAB_STOP - column % TAB_STOP
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in _WIDE_EAST_ASIAN else 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    column = 0
    for ch in strip_ansi(text):
        column += cell_width(ch, column)
    return column


def style(text: str, sgr: str, reset: str = "\033[0m") -> str:
    """Wrap ``text`` in ``sgr``; empty styles leave the text untouched."""
    if not sgr or not text:
        return text
    return f"{sgr}{text}{reset}"


def _segments(text: str) -> Iterator[tuple[bool, str]]:
    """Yield ``(is_escape, chunk)`` pairs in order."""
    position = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        if match.start() > position:
            yield False, text[position : match.start()]
        yield True, match.group(0)
        position = match.end()
    if position < len(text):
        yield False, text[position:]


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut a styled line to ``max_cols`` display columns.

    Escape sequences seen before the cut are kept. Tabs become spaces so the
    result lines up with terminal cells; a wide character that would straddle
    the limit is dropped.
    """
    if max_cols <= 0:
        return ""
    pieces: list[str] = []
    column = 0
    for is_escape, chunk in _segments(text):
        if is_escape:
            pieces.append(chunk)
            continue
        for ch in chunk:
            width = cell_width(ch, column)
            if column + width > max_cols:
                return "".join(pieces)
            pieces.append(" " * width if ch == "\t" else ch)
            column += width
    return "".join(pieces)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip or right-pad a styled line to exactly ``width`` columns."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


def truncate_middle(text: str, max_cols: int) -> str:
    """Shorten plain text to ``max_cols`` by replacing its middle with ``...``."""
    if max_cols <= 0:
        return ""
    if len(text) <= max_cols:
        return text
    if max_cols <= 3:
        return text[:max_cols]
    keep = max_cols - 3
    head = (keep + 1) // 2
    tail = keep - head
    return text[:head] + "..." + (text[-tail:] if tail else "")
