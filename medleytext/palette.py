"""Command palette: fuzzy search over the markdown files of a directory."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

from medleytext.keymap import Keystroke

MAX_VISIBLE_ITEMS = 10
_WORD_BOUNDARIES = frozenset("/-_ ")


@dataclass(frozen=True)
class FileEntry:
    """A markdown file offered by the palette.

    ``path`` is absolute, ``display_name`` is relative to the directory it
    was found in, and ``score`` is the fuzzy match score (None before ranking).
    """

    path: Path
    display_name: str
    score: int | None = None


def scan_markdown_files(directory: str | os.PathLike) -> list[FileEntry]:
    """Find ``.md`` files under *directory*, skipping hidden names.

    Unreadable directories yield no entries. Each entry's display name is
    relative to the directory that directly contains the scan level.
    """
    directory = Path(directory)
    try:
        children = sorted(directory.iterdir())
    except OSError:
        return []

    files: list[FileEntry] = []
    for path in children:
        if path.name.startswith("."):
            continue
        if path.is_dir():
            files.extend(scan_markdown_files(path))
        elif path.suffix == ".md":
            try:
                absolute = path.resolve(strict=True)
            except OSError:
                continue
            files.append(FileEntry(absolute, str(path.relative_to(directory))))
    return files


def fuzzy_match(query: str, target: str) -> int | None:
    """Score how well *target* matches *query*, case-insensitively.

    Every query character must appear in order. Matches earn a base score,
    a growing bonus for runs of consecutive matches, and bonuses at the start
    of the target and after a word boundary. Returns None when the query
    does not match; an empty query scores 0.
    """
    if not query:
        return 0

    wanted = query.lower()
    haystack = target.lower()
    score = 0
    matched = 0
    consecutive = 0
    previous = None

    for position, char in enumerate(haystack):
        if matched >= len(wanted):
            break
        if char == wanted[matched]:
            score += 10
            consecutive += 1
            score += consecutive * 5
            if position == 0:
                score += 20
            elif previous in _WORD_BOUNDARIES:
                score += 15
            matched += 1
        else:
            consecutive = 0
        previous = char

    return score if matched == len(wanted) else None


class Palette:
    """Search query, ranked results and selection of the file palette."""

    def __init__(self, working_dir: str | os.PathLike) -> None:
        self.query = ""
        self.all_files = scan_markdown_files(working_dir)
        self.filtered_files = list(self.all_files)
        self.selected_index = 0
        self.should_open = False
        self.should_close = False

    def _update_filtered_files(self) -> None:
        ranked = []
        for entry in self.all_files:
            score = fuzzy_match(self.query, entry.display_name)
            if score is not None:
                ranked.append(replace(entry, score=score))
        ranked.sort(key=lambda entry: entry.score or 0, reverse=True)
        self.filtered_files = ranked
        self.selected_index = 0

    def type_char(self, c: str) -> None:
        """Append *c* to the query and re-rank the files."""
        self.query += c
        self._update_filtered_files()

    def backspace(self) -> None:
        """Drop the last character of the query and re-rank the files."""
        self.query = self.query[:-1]
        self._update_filtered_files()

    def move_up(self) -> None:
        """Select the previous result, stopping at the first."""
        if self.selected_index > 0:
            self.selected_index -= 1

    def move_down(self) -> None:
        """Select the next result, stopping at the last."""
        if self.selected_index < len(self.filtered_files) - 1:
            self.selected_index += 1

    def selected_file(self) -> Path | None:
        """Absolute path of the selected result, if there is one."""
        if 0 <= self.selected_index < len(self.filtered_files):
            return self.filtered_files[self.selected_index].path
        return None

    def visible_files(self) -> list[tuple[bool, FileEntry]]:
        """The results shown in the list, each paired with its selection state."""
        return [
            (idx == self.selected_index, entry)
            for idx, entry in enumerate(self.filtered_files[:MAX_VISIBLE_ITEMS])
        ]

    def prompt_text(self) -> str:
        """Text of the search line."""
        return f"> {self.query or 'Type to search...'}"

    def key_down(self, keystroke: Keystroke) -> None:
        """React to a key press while the palette has focus."""
        key = keystroke.key
        if key == "enter":
            self.should_open = True
        elif key == "escape":
            self.should_close = True
        elif key == "backspace":
            self.backspace()
        elif key == "up":
            self.move_up()
        elif key == "down":
            self.move_down()
        elif keystroke.is_plain_char():
            c = keystroke.key_char
            if c == " " or (c.isascii() and c.isprintable()):
                self.type_char(c)

    def footer_text(self) -> str:
        """Hint line shown under the results."""
        return (
            f"{len(self.filtered_files)} files | ↑↓ navigate | "
            "Enter to open | Esc to close"
        )