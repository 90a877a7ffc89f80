"""Speech bubble layout."""

from __future__ import annotations

import wcwidth as _wcwidth

BUBBLE_PADDING = 4
BUBBLE_MAX_WIDTH = 60
MIN_WRAP_COLUMNS = 10


def visible_width(text: str) -> int:
    """Terminal columns occupied by *text*; unprintable text falls back to ``len``."""
    width = _wcwidth.wcswidth(text)
    return width if width >= 0 else len(text)


def pad_line(line: str, width: int) -> str:
    missing = width - visible_width(line)
    if missing <= 0:
        return line
    return line + " " * missing


def _break_word(word: str, width: int) -> list[str]:
    """Split a word wider than *width* into chunks that each fit."""
    chunks: list[str] = []
    current: list[str] = []
    current_width = 0
    for ch in word:
        ch_width = visible_width(ch)
        if current_width + ch_width > width and current:
            chunks.append("".join(current))
            current = []
            current_width = 0
        current.append(ch)
        current_width += ch_width
    if current:
        chunks.append("".join(current))
    return chunks


def wrap_words(text: str, width: int) -> list[str]:
    """Word-wrap *text* so no line exceeds *width* terminal columns.

    Runs of whitespace collapse to one space. Words wider than the line
    are broken at the column limit.
    """
    lines: list[str] = []
    current = ""
    current_width = 0

    for word in text.split():
        word_width = visible_width(word)
        if word_width > width:
            if current:
                lines.append(current)
            *full, current = _break_word(word, width)
            lines.extend(full)
            current_width = visible_width(current)
            continue
        if not current:
            current, current_width = word, word_width
        elif current_width + 1 + word_width <= width:
            current += " " + word
            current_width += 1 + word_width
        else:
            lines.append(current)
            current, current_width = word, word_width

    if current:
        lines.append(current)
    return lines


def _edges(index: int, count: int) -> tuple[str, str]:
    if count == 1:
        return "<", ">"
    if index == 0:
        return "/", "\\"
    if index == count - 1:
        return "\\", "/"
    return "|", "|"


def render_bubble(text: str, term_cols: int) -> list[str]:
    """Lay *text* out as a bordered speech bubble fitting *term_cols* columns.

    On a terminal too narrow to hold a useful box the message comes back
    unchanged as a single line. A message that wraps to nothing (empty or
    all whitespace) yields no lines.
    """
    if term_cols <= BUBBLE_PADDING + MIN_WRAP_COLUMNS:
        return [text]

    bubble_width = min(term_cols - BUBBLE_PADDING, BUBBLE_MAX_WIDTH)
    wrapped = wrap_words(text, bubble_width)
    if not wrapped:
        return []

    longest = max(visible_width(line) for line in wrapped)
    lines = [" " + "_" * (longest + 2)]
    for index, line in enumerate(wrapped):
        left, right = _edges(index, len(wrapped))
        lines.append(f"{left} {pad_line(line, longest)} {right}")
    lines.append(" " + "-" * (longest + 2))
    return lines
