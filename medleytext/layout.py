"""Geometry of the editor view: lines, clicks, scrolling and vertical moves.

Offsets are character indexes into the buffer. Lines are separated by
``"\\n"``, and a buffer always has at least one (possibly empty) line.
"""

from __future__ import annotations

import math

LINE_HEIGHT = 22.0
VIEWPORT_HEIGHT = 538.0
CHAR_WIDTH = 7.2
HEADER_HEIGHT = 30.0
PADDING = 16.0


def _line_offsets(lines: list[str]) -> list[int]:
    """Offset at which each line begins."""
    starts = []
    position = 0
    for line in lines:
        starts.append(position)
        position += len(line) + 1
    return starts


def line_number(content: str, offset: int) -> int:
    """The 1-based number of the line holding *offset*."""
    return content.count("\n", 0, offset) + 1


def line_start(content: str, offset: int) -> int:
    """Offset of the first character of the line holding *offset*."""
    return content.rfind("\n", 0, offset) + 1


def offset_at_click(content: str, x: float, y: float, scroll_offset: float) -> int:
    """Buffer offset under a click at window coordinates (*x*, *y*).

    Clicks past the last line land on the last line, and clicks past the end
    of a line land at its end.
    """
    click_x = x - PADDING
    click_y = y - PADDING - HEADER_HEIGHT + scroll_offset

    clicked_line = math.floor(max(click_y / LINE_HEIGHT, 0.0))
    # Round half away from zero; the value is never negative here.
    clicked_col = math.floor(max(click_x / CHAR_WIDTH, 0.0) + 0.5)

    lines = content.split("\n")
    target = min(clicked_line, len(lines) - 1)
    return _line_offsets(lines)[target] + min(clicked_col, len(lines[target]))


def clamp_scroll(content: str, scroll_offset: float) -> float:
    """Limit *scroll_offset* to the range the content can scroll through."""
    total_height = (content.count("\n") + 1) * LINE_HEIGHT
    max_scroll = max(total_height - VIEWPORT_HEIGHT, 0.0)
    return min(max(scroll_offset, 0.0), max_scroll)


def scroll_to_show(content: str, offset: int, scroll_offset: float) -> float:
    """Scroll offset that brings the line holding *offset* into view.

    The current offset is kept when that line is already fully visible.
    """
    consumed = 0
    for idx, line in enumerate(content.split("\n")):
        if offset <= consumed + len(line):
            top = idx * LINE_HEIGHT
            bottom = top + LINE_HEIGHT
            if top < scroll_offset:
                return max(top, 0.0)
            if bottom > scroll_offset + VIEWPORT_HEIGHT:
                return max(bottom - VIEWPORT_HEIGHT, 0.0)
            return scroll_offset
        consumed += len(line) + 1
    return scroll_offset


def move_vertically(content: str, offset: int, delta: int) -> int:
    """Offset reached by moving *delta* lines from *offset*, keeping the column.

    The column is clamped to the length of the target line. A move past the
    first or last line leaves the offset unchanged.
    """
    lines = content.split("\n")
    starts = _line_offsets(lines)

    current_line = 0
    column = 0
    for idx, (start, line) in enumerate(zip(starts, lines)):
        if start + len(line) >= offset:
            current_line = idx
            column = offset - start
            break

    target = current_line + delta
    if not 0 <= target < len(lines):
        return offset
    return starts[target] + min(column, len(lines[target]))