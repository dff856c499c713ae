"""Find/replace panel state and plain substring search."""

from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass(frozen=True)
class SearchMatch:
    """Half-open range [start, end) of a hit within the buffer."""

    start: int
    end: int


class ActiveInput(enum.Enum):
    """Which input row of the panel receives typing."""

    QUERY = "query"
    REPLACE = "replace"


def find_all(haystack: str, needle: str) -> list[SearchMatch]:
    """Return every non-overlapping occurrence of *needle*, left to right."""
    if not needle:
        return []
    matches = []
    offset = haystack.find(needle)
    while offset != -1:
        end = offset + len(needle)
        matches.append(SearchMatch(offset, end))
        offset = haystack.find(needle, end)
    return matches


class FindPanelState:
    """Query, replacement, matches and the selected match of the find panel."""

    def __init__(self, initial_query: str | None = None) -> None:
        self.query = initial_query or ""
        self.replace = ""
        self.matches: list[SearchMatch] = []
        self.selected_index = 0
        self.show_replace = False
        self.active_input = ActiveInput.QUERY
        self._last_anchor: int | None = None

    def has_query(self) -> bool:
        return bool(self.query)

    def has_matches(self) -> bool:
        return bool(self.matches)

    def current_match(self) -> SearchMatch | None:
        """The focused match, if any."""
        if 0 <= self.selected_index < len(self.matches):
            return self.matches[self.selected_index]
        return None

    def current_index(self) -> int | None:
        """The selected index, or None when there are no matches."""
        return self.selected_index if self.matches else None

    def push_char(self, c: str, content: str) -> None:
        """Append *c* to the active input, re-searching when it is the query."""
        if self.active_input is ActiveInput.QUERY:
            self.query += c
            self._last_anchor = None
            self.recompute_matches(content)
        else:
            self.replace += c

    def backspace(self, content: str) -> None:
        """Remove the last character of the active input."""
        if self.active_input is ActiveInput.QUERY:
            self.query = self.query[:-1]
            self._last_anchor = None
            self.recompute_matches(content)
        else:
            self.replace = self.replace[:-1]

    def toggle_replace(self) -> None:
        """Show or hide the replace row, moving input focus with it."""
        self.show_replace = not self.show_replace
        self.active_input = ActiveInput.REPLACE if self.show_replace else ActiveInput.QUERY

    def recompute_matches(self, content: str) -> None:
        """Search *content* again, keeping the selection near its old place."""
        if not self.query:
            self.matches = []
            self.selected_index = 0
            self._last_anchor = None
            return

        current = self.current_match()
        anchor = current.start if current is not None else self._last_anchor

        self.matches = find_all(content, self.query)
        if not self.matches:
            self.selected_index = 0
            self._last_anchor = None
            return

        if anchor is not None:
            self.selected_index = next(
                (idx for idx, m in enumerate(self.matches) if m.start >= anchor),
                len(self.matches) - 1,
            )
        else:
            self.selected_index = min(self.selected_index, len(self.matches) - 1)

        self._last_anchor = self.matches[self.selected_index].start

    def cycle(self, direction: int) -> SearchMatch | None:
        """Move the selection by *direction*, wrapping at either end."""
        if not self.matches:
            return None
        count = len(self.matches)
        idx = self.selected_index + direction
        if idx < 0:
            idx += count
        elif idx >= count:
            idx -= count
        self.selected_index = idx
        self._last_anchor = self.matches[idx].start
        return self.current_match()

    def refresh_anchor(self) -> None:
        """Anchor future searches at the selected match."""
        current = self.current_match()
        self._last_anchor = current.start if current is not None else None