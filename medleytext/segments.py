"""Split a highlighted token into coloured runs with selection, search and caret."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Union

from medleytext.find import FindPanelState

_KIND_STYLE = {
    # kind name: (priority, background, text colour)
    "SELECTION": (3, 0x264F78, 0xFFFFFF),
    "SEARCH_ACTIVE": (2, 0xF8C555, 0x1E1E1E),
    "SEARCH_MATCH": (1, 0x3D315B, 0xFFFFFF),
}


class HighlightKind(enum.Enum):
    """Kinds of background highlight a run of text can carry."""

    SELECTION = "selection"
    SEARCH_ACTIVE = "search_active"
    SEARCH_MATCH = "search_match"

    def priority(self) -> int:
        """Higher priorities win where highlights overlap."""
        return _KIND_STYLE[self.name][0]

    def background(self) -> int:
        """Background colour as 0xRRGGBB."""
        return _KIND_STYLE[self.name][1]

    def text_color(self, fallback: int) -> int:
        """Text colour drawn over this highlight; *fallback* is the token's own."""
        return _KIND_STYLE[self.name][2]


@dataclass(frozen=True)
class RenderRun:
    """A piece of text drawn in one colour, optionally on a background."""

    text: str
    text_color: int
    background: int | None = None


@dataclass(frozen=True)
class Cursor:
    """Marks where the caret is drawn between runs."""


Segment = Union[RenderRun, Cursor]


@dataclass(frozen=True)
class _Slice:
    start: int
    end: int
    kind: HighlightKind


def _highlight_slices(
    token_start: int,
    token_end: int,
    selection_range: tuple[int, int] | None,
    search_panel: FindPanelState | None,
) -> list[_Slice]:
    slices: list[_Slice] = []

    if selection_range is not None:
        sel_start, sel_end = selection_range
        if sel_end > token_start and sel_start < token_end:
            slices.append(
                _Slice(
                    max(sel_start, token_start) - token_start,
                    min(sel_end, token_end) - token_start,
                    HighlightKind.SELECTION,
                )
            )

    if search_panel is not None and search_panel.has_query():
        active_index = search_panel.current_index()
        for idx, match in enumerate(search_panel.matches):
            if match.end <= token_start:
                continue
            if match.start >= token_end:
                break
            kind = (
                HighlightKind.SEARCH_ACTIVE
                if idx == active_index
                else HighlightKind.SEARCH_MATCH
            )
            slices.append(
                _Slice(
                    max(match.start, token_start) - token_start,
                    min(match.end, token_end) - token_start,
                    kind,
                )
            )

    return slices


def build_segments(
    text: str,
    token_color: int,
    token_start: int,
    selection_range: tuple[int, int] | None = None,
    cursor_position: int | None = None,
    search_panel: FindPanelState | None = None,
) -> list[Segment]:
    """Cut the token *text*, which starts at *token_start* in the buffer, into runs.

    Runs are split wherever the selection or a search match begins or ends;
    the highest-priority highlight covering a run sets its colours. The caret
    is placed inside the token when *cursor_position* falls within it and the
    selection does not touch the token.
    """
    if not text:
        return []

    token_end = token_start + len(text)
    slices = _highlight_slices(token_start, token_end, selection_range, search_panel)

    boundaries = {0, len(text)}
    for piece in slices:
        boundaries.update((piece.start, piece.end))
    ordered = sorted(boundaries)

    segments: list[Segment] = []
    for start, end in zip(ordered, ordered[1:]):
        covering = [s for s in slices if s.start < end and s.end > start]
        if covering:
            kind = max(covering, key=lambda s: s.kind.priority()).kind
            run = RenderRun(text[start:end], kind.text_color(token_color), kind.background())
        else:
            run = RenderRun(text[start:end], token_color)
        segments.append(run)

    if cursor_position is not None:
        overlaps_selection = (
            selection_range is not None
            and selection_range[1] > token_start
            and selection_range[0] < token_end
        )
        if not overlaps_selection and token_start <= cursor_position < token_end:
            return insert_cursor(segments, cursor_position - token_start)

    return segments


def insert_cursor(segments: Iterable[Segment], cursor_offset: int) -> list[Segment]:
    """Place a caret *cursor_offset* characters into *segments*.

    A run containing the offset is split around the caret; an offset past
    the end puts the caret last.
    """
    result: list[Segment] = []
    consumed = 0
    inserted = False

    for segment in segments:
        if isinstance(segment, Cursor):
            result.append(segment)
            continue

        length = len(segment.text)
        if not inserted and consumed <= cursor_offset <= consumed + length:
            local = cursor_offset - consumed
            if local == 0:
                result.extend((Cursor(), segment))
            elif local == length:
                result.extend((segment, Cursor()))
            else:
                result.extend(
                    (
                        RenderRun(segment.text[:local], segment.text_color, segment.background),
                        Cursor(),
                        RenderRun(segment.text[local:], segment.text_color, segment.background),
                    )
                )
            inserted = True
        else:
            result.append(segment)
        consumed += length

    if not inserted:
        result.append(Cursor())
    return result