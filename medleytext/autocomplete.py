"""Inline suggestions for markdown syntax while typing."""

from __future__ import annotations

import re
from dataclasses import dataclass

SELECTED_BG = 0x094771
NORMAL_BG = 0x2D2D2D
SELECTED_TEXT = 0xFFFFFF
NORMAL_TEXT = 0xD4D4D4

_EMPHASIS_MARKER = re.compile(r"\*\*|\*")


@dataclass(frozen=True)
class Suggestion:
    """A completion: the text to insert and a human-friendly label."""

    insert_text: str
    label: str


_HEADINGS = tuple(
    Suggestion("#" * level + " ", f"Heading {level}") for level in range(1, 7)
)

_LISTS = (
    Suggestion("- ", "Unordered list"),
    Suggestion("- [ ] ", "Unchecked checkbox"),
    Suggestion("- [x] ", "Checked checkbox"),
)

_CODE_BLOCKS = (
    Suggestion("```\n\n```", "Code block"),
    Suggestion("```rust\n\n```", "Rust code block"),
    Suggestion("```javascript\n\n```", "JavaScript code block"),
    Suggestion("```python\n\n```", "Python code block"),
)

_BLOCKQUOTE = (Suggestion("> ", "Blockquote"),)
_LINK = (Suggestion("[text](url)", "Link"),)
_INLINE_CODE = (Suggestion("``", "Inline code"),)
_EMPHASIS = (Suggestion("**", "Bold"), Suggestion("*", "Italic"))


def _emphasis_is_open(text: str) -> bool:
    """Tell whether *text* leaves a bold or italic marker unpaired."""
    markers = _EMPHASIS_MARKER.findall(text)
    doubles = markers.count("**")
    singles = len(markers) - doubles
    return singles % 2 == 1 or doubles % 2 == 1


def suggestions_for(trigger: str, line_content: str) -> list[Suggestion]:
    """Return the suggestions for *trigger* typed at the end of *line_content*.

    An empty list means nothing should be offered.
    """
    trimmed = line_content.lstrip()

    if trigger == "#" and trimmed.startswith("#") and not trimmed.startswith("######"):
        return list(_HEADINGS)

    if trigger == "-" and trimmed == "-":
        return list(_LISTS)

    if trigger == "`" and trimmed.startswith("``"):
        return list(_CODE_BLOCKS)

    if trigger == ">" and trimmed == ">":
        return list(_BLOCKQUOTE)

    if trigger == "[" and line_content:
        return list(_LINK)

    before_trigger = line_content[:-1]

    if trigger == "`" and trimmed and not trimmed.startswith("``"):
        # An even count before the new backtick means it opens inline code.
        if before_trigger.count("`") % 2 == 0:
            return list(_INLINE_CODE)
        return []

    if trigger == "*" and line_content:
        if _emphasis_is_open(before_trigger):
            return []
        return list(_EMPHASIS)

    return []


class Autocomplete:
    """A list of suggestions with one of them selected."""

    def __init__(self, suggestions) -> None:
        self.suggestions: list[Suggestion] = list(suggestions)
        if not self.suggestions:
            raise ValueError("autocomplete needs at least one suggestion")
        self.selected_index = 0

    def selected(self) -> Suggestion | None:
        """Return the selected suggestion."""
        if 0 <= self.selected_index < len(self.suggestions):
            return self.suggestions[self.selected_index]
        return None

    def move_up(self) -> None:
        """Select the previous suggestion, stopping at the first."""
        if self.selected_index > 0:
            self.selected_index -= 1

    def move_down(self) -> None:
        """Select the next suggestion, stopping at the last."""
        if self.selected_index < len(self.suggestions) - 1:
            self.selected_index += 1

    def display(self) -> list[tuple[bool, Suggestion]]:
        """Return every suggestion paired with whether it is selected."""
        return [
            (idx == self.selected_index, suggestion)
            for idx, suggestion in enumerate(self.suggestions)
        ]


def open_autocomplete(trigger: str, line_content: str) -> Autocomplete | None:
    """Open a menu for *trigger*, or return None when nothing applies."""
    suggestions = suggestions_for(trigger, line_content)
    return Autocomplete(suggestions) if suggestions else None


def item_bg_color(is_selected: bool) -> int:
    """Background colour of a menu item as 0xRRGGBB."""
    return SELECTED_BG if is_selected else NORMAL_BG


def item_text_color(is_selected: bool) -> int:
    """Text colour of a menu item as 0xRRGGBB."""
    return SELECTED_TEXT if is_selected else NORMAL_TEXT