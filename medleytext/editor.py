"""The text editor: buffer, caret, selection, find/replace, palette and file I/O.

Offsets are character indexes into ``content``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from medleytext import layout
from medleytext.autocomplete import Autocomplete, open_autocomplete
from medleytext.find import ActiveInput, FindPanelState, SearchMatch
from medleytext.keymap import Action, Keystroke, action_for
from medleytext.palette import Palette

log = logging.getLogger(__name__)

WELCOME_TEXT = "Welcome to MedleyText!\n\nStart typing..."
_AUTOCOMPLETE_TRIGGERS = frozenset("#-`>[*")


def _is_typeable(c: str) -> bool:
    """Printable ASCII other than control characters, or a space."""
    return c == " " or "!" <= c <= "~"


class TextEditor:
    """Document state and the commands that edit, navigate and save it."""

    def __init__(
        self,
        content: str = WELCOME_TEXT,
        current_file: str | os.PathLike | None = None,
        working_dir: str | os.PathLike | None = None,
    ) -> None:
        self.content = content
        self.cursor_position = 0
        self.selection_start: int | None = None
        self.current_file = None if current_file is None else str(current_file)
        self.scroll_offset = 0.0
        self.palette: Palette | None = None
        self.working_dir = Path(working_dir) if working_dir is not None else Path.cwd()
        self.is_dirty = False
        self.autocomplete: Autocomplete | None = None
        self.find_panel: FindPanelState | None = None
        self.clipboard: str | None = None
        self.should_quit = False
        self._suppress_next_enter = False

    @classmethod
    def from_file(cls, file_path: str | os.PathLike | None = None) -> "TextEditor":
        """Open *file_path*, creating it empty when it does not exist.

        Without a path the editor starts with a welcome message and no file.
        A file that cannot be read opens as an empty buffer bound to its path.
        """
        if file_path is None:
            return cls()
        path = Path(file_path)
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            content = ""
            try:
                path.write_text("", encoding="utf-8")
            except OSError as err:
                log.warning("Failed to create file: %s", err)
        except OSError as err:
            log.warning("Failed to open file: %s", err)
            content = ""
        return cls(content, str(file_path))

    # ----- queries -------------------------------------------------------

    def line_number(self) -> int:
        """1-based line number of the caret."""
        return layout.line_number(self.content, self.cursor_position)

    def current_line_content(self) -> str:
        """Text of the caret's line up to the caret."""
        start = layout.line_start(self.content, self.cursor_position)
        return self.content[start:self.cursor_position]

    def selection_range(self) -> tuple[int, int] | None:
        """The selection as an ordered (start, end) pair, or None."""
        if self.selection_start is None:
            return None
        return tuple(sorted((self.selection_start, self.cursor_position)))

    def selected_text(self) -> str | None:
        """The selected text, or None without a selection."""
        selection = self.selection_range()
        if selection is None:
            return None
        start, end = selection
        return self.content[start:end]

    # ----- editing -------------------------------------------------------

    def _delete_selection(self) -> bool:
        selection = self.selection_range()
        if selection is None:
            return False
        start, end = selection
        self.content = self.content[:start] + self.content[end:]
        self.cursor_position = start
        self.selection_start = None
        return True

    def _insert_text(self, text: str) -> None:
        pos = self.cursor_position
        self.content = self.content[:pos] + text + self.content[pos:]
        self.cursor_position = pos + len(text)
        self.is_dirty = True

    def insert_char(self, c: str) -> None:
        """Type *c* over the selection, opening or closing autocomplete."""
        self._delete_selection()
        self._insert_text(c)
        if c in _AUTOCOMPLETE_TRIGGERS:
            self.autocomplete = open_autocomplete(c, self.current_line_content())
        elif c in (" ", "\n"):
            self.autocomplete = None
        self._refresh_search_matches()

    def backspace(self) -> None:
        """Delete the selection or the character before the caret.

        While the find panel is open this edits the panel's active input.
        """
        if self.find_panel is not None:
            self._find_backspace()
            return
        self.autocomplete = None
        if self._delete_selection():
            self.is_dirty = True
        elif self.cursor_position > 0:
            pos = self.cursor_position - 1
            self.content = self.content[:pos] + self.content[pos + 1:]
            self.cursor_position = pos
            self.is_dirty = True
        self._refresh_search_matches()

    def enter(self) -> None:
        """Accept the selected suggestion, or insert a line break."""
        if self._suppress_next_enter:
            self._suppress_next_enter = False
            return
        if self.autocomplete is not None:
            suggestion = self.autocomplete.selected()
            if suggestion is not None:
                start = layout.line_start(self.content, self.cursor_position)
                self.content = (
                    self.content[:start]
                    + suggestion.insert_text
                    + self.content[self.cursor_position:]
                )
                self.cursor_position = start + len(suggestion.insert_text)
                self.is_dirty = True
            self.autocomplete = None
            self._refresh_search_matches()
            return
        self._insert_text("\n")
        self._refresh_search_matches()

    # ----- caret movement ------------------------------------------------

    def move_left(self) -> None:
        self.autocomplete = None
        self.selection_start = None
        if self.cursor_position > 0:
            self.cursor_position -= 1

    def move_right(self) -> None:
        self.autocomplete = None
        self.selection_start = None
        if self.cursor_position < len(self.content):
            self.cursor_position += 1

    def move_up(self) -> None:
        """Move a line up, or to the previous suggestion when the menu is open."""
        if self.autocomplete is not None:
            self.autocomplete.move_up()
            return
        self.selection_start = None
        self.cursor_position = layout.move_vertically(self.content, self.cursor_position, -1)

    def move_down(self) -> None:
        """Move a line down, or to the next suggestion when the menu is open."""
        if self.autocomplete is not None:
            self.autocomplete.move_down()
            return
        self.selection_start = None
        self.cursor_position = layout.move_vertically(self.content, self.cursor_position, 1)

    def _anchor_selection(self) -> None:
        if self.selection_start is None:
            self.selection_start = self.cursor_position

    def select_left(self) -> None:
        self._anchor_selection()
        if self.cursor_position > 0:
            self.cursor_position -= 1

    def select_right(self) -> None:
        self._anchor_selection()
        if self.cursor_position < len(self.content):
            self.cursor_position += 1

    def select_up(self) -> None:
        self._anchor_selection()
        self.cursor_position = layout.move_vertically(self.content, self.cursor_position, -1)

    def select_down(self) -> None:
        self._anchor_selection()
        self.cursor_position = layout.move_vertically(self.content, self.cursor_position, 1)

    def select_all(self) -> None:
        self.selection_start = 0
        self.cursor_position = len(self.content)

    # ----- clipboard -----------------------------------------------------

    def copy(self) -> str | None:
        """Put the selected text on the clipboard and return it."""
        text = self.selected_text()
        if text is not None:
            self.clipboard = text
        return text

    def cut(self) -> str | None:
        """Move the selected text to the clipboard and return it."""
        text = self.selected_text()
        if text is None:
            return None
        self.clipboard = text
        self._delete_selection()
        self.is_dirty = True
        self._refresh_search_matches()
        return text

    def paste(self, text: str) -> None:
        """Insert *text* over the selection, leaving the caret after it."""
        self._delete_selection()
        self._insert_text(text)
        self._refresh_search_matches()

    # ----- files ---------------------------------------------------------

    def save(self, path: str | os.PathLike | None = None) -> str:
        """Write the buffer to *path*, or to the current file, and return the path."""
        target = str(path) if path is not None else self.current_file
        if not target or not target.strip():
            raise ValueError("no file path provided")
        target = target.strip()
        Path(target).write_text(self.content, encoding="utf-8")
        self.current_file = target
        self.is_dirty = False
        return target

    def load_file(self, path: str | os.PathLike) -> None:
        """Replace the buffer with the contents of *path*."""
        content = Path(path).read_text(encoding="utf-8")
        self.content = content
        self.cursor_position = 0
        self.selection_start = None
        self.scroll_offset = 0.0
        self.current_file = str(path)
        self.is_dirty = False

    # ----- find / replace ------------------------------------------------

    def _ensure_visible(self, offset: int) -> None:
        self.scroll_offset = layout.scroll_to_show(self.content, offset, self.scroll_offset)

    def _focus_match(self, match: SearchMatch) -> None:
        self.selection_start = match.start
        self.cursor_position = match.end
        self._ensure_visible(match.start)

    def _focus_current_match(self) -> bool:
        if self.find_panel is None:
            return False
        match = self.find_panel.current_match()
        if match is None:
            return False
        self._focus_match(match)
        return True

    def _refresh_search_matches(self) -> None:
        if self.find_panel is None:
            return
        self.find_panel.recompute_matches(self.content)
        if not self._focus_current_match():
            self.selection_start = None

    def _open_find_panel(self) -> None:
        initial = self.selected_text()
        if initial is not None and (not initial.strip() or "\n" in initial):
            initial = None
        panel = FindPanelState(initial)
        panel.recompute_matches(self.content)
        self.find_panel = panel

    def _advance_search(self, direction: int) -> SearchMatch | None:
        panel = self.find_panel
        if panel is None or not panel.has_matches():
            return None
        match = panel.cycle(direction)
        panel.refresh_anchor()
        return match

    def _find_backspace(self) -> None:
        panel = self.find_panel
        panel.backspace(self.content)
        if panel.has_matches():
            panel.refresh_anchor()
            self._focus_current_match()
        else:
            self.selection_start = None

    def toggle_find(self) -> None:
        """Open the find panel seeded from the selection, or close it."""
        if self.find_panel is not None:
            self.find_panel = None
        else:
            self._open_find_panel()
            self._focus_current_match()

    def _find_step(self, direction: int) -> None:
        if self.find_panel is None:
            self._open_find_panel()
            self._focus_current_match()
            return
        match = self._advance_search(direction)
        if match is not None:
            self._focus_match(match)

    def find_next(self) -> None:
        """Select the next match, opening the panel first if needed."""
        self._find_step(1)

    def find_previous(self) -> None:
        """Select the previous match, opening the panel first if needed."""
        self._find_step(-1)

    def replace_current_match(self) -> bool:
        """Replace the focused match when the replace row is shown."""
        panel = self.find_panel
        if panel is None or not panel.has_matches() or not panel.query:
            return False
        if not panel.show_replace:
            return False
        match = panel.current_match()
        replacement = panel.replace
        self.content = self.content[:match.start] + replacement + self.content[match.end:]
        self.cursor_position = match.start + len(replacement)
        self.selection_start = match.start
        self.is_dirty = True
        self._refresh_search_matches()
        if self.find_panel is not None:
            self.find_panel.refresh_anchor()
        return True

    def replace_all_matches(self) -> int:
        """Replace every occurrence of the query and return how many there were."""
        panel = self.find_panel
        if panel is None or not panel.has_query() or not panel.show_replace:
            return 0
        needle, replacement = panel.query, panel.replace

        replaced = 0
        search_index = 0
        while True:
            start = self.content.find(needle, search_index)
            if start == -1:
                break
            self.content = self.content[:start] + replacement + self.content[start + len(needle):]
            search_index = start + len(replacement)
            replaced += 1

        if replaced:
            self.cursor_position = min(self.cursor_position, len(self.content))
            self.selection_start = None
            self.is_dirty = True
            self._refresh_search_matches()
            if self.find_panel is not None:
                self.find_panel.refresh_anchor()
        return replaced

    # ----- palette -------------------------------------------------------

    def toggle_palette(self) -> None:
        """Open the file palette over the working directory, or close it."""
        if self.palette is not None:
            self.palette = None
        else:
            self.find_panel = None
            self.palette = Palette(self.working_dir)

    def _sync_palette(self) -> None:
        palette = self.palette
        if palette is None:
            return
        if palette.should_open:
            selected = palette.selected_file()
            if selected is not None:
                self.palette = None
                self.load_file(selected)
        elif palette.should_close:
            self.palette = None

    # ----- pointer -------------------------------------------------------

    def click(self, x: float, y: float) -> None:
        """Place the caret under a click at window coordinates."""
        self.selection_start = None
        self.cursor_position = layout.offset_at_click(self.content, x, y, self.scroll_offset)

    def scroll(self, delta: float) -> None:
        """Scroll by a wheel delta in pixels; positive values scroll up."""
        self.scroll_offset = layout.clamp_scroll(self.content, self.scroll_offset - delta)

    # ----- dispatch ------------------------------------------------------

    def perform(self, action: Action) -> None:
        """Run the command bound to *action*."""
        if action is Action.QUIT:
            self.should_quit = True
        elif action is Action.SAVE:
            self.save()
        elif action is Action.PASTE:
            if self.clipboard is not None:
                self.paste(self.clipboard)
        else:
            handlers = {
                Action.MOVE_LEFT: self.move_left,
                Action.MOVE_RIGHT: self.move_right,
                Action.MOVE_UP: self.move_up,
                Action.MOVE_DOWN: self.move_down,
                Action.BACKSPACE: self.backspace,
                Action.ENTER: self.enter,
                Action.COPY: self.copy,
                Action.CUT: self.cut,
                Action.SELECT_LEFT: self.select_left,
                Action.SELECT_RIGHT: self.select_right,
                Action.SELECT_UP: self.select_up,
                Action.SELECT_DOWN: self.select_down,
                Action.SELECT_ALL: self.select_all,
                Action.TOGGLE_FIND: self.toggle_find,
                Action.FIND_NEXT: self.find_next,
                Action.FIND_PREVIOUS: self.find_previous,
                Action.TOGGLE_PALETTE: self.toggle_palette,
            }
            handlers[action]()

    def _find_key_event(self, keystroke: Keystroke) -> bool:
        panel = self.find_panel
        if panel is None:
            return False
        key = keystroke.key
        command = keystroke.control and not keystroke.alt and not keystroke.platform

        if key == "escape":
            self.find_panel = None
            return True
        if key == "tab" and panel.show_replace:
            panel.active_input = (
                ActiveInput.REPLACE
                if panel.active_input is ActiveInput.QUERY
                else ActiveInput.QUERY
            )
            return True
        if key == "h" and command:
            panel.toggle_replace()
            return True
        if key == "r" and command:
            if keystroke.shift:
                self.replace_all_matches()
            else:
                self.replace_current_match()
            return True
        if key == "enter":
            match = self._advance_search(-1 if keystroke.shift else 1)
            if match is not None:
                self._focus_match(match)
            self._suppress_next_enter = True
            return True
        if keystroke.is_plain_char():
            panel.push_char(keystroke.key_char, self.content)
            if panel.has_matches():
                panel.refresh_anchor()
                self._focus_current_match()
            return True
        return False

    def _key_event(self, keystroke: Keystroke) -> None:
        if self._find_key_event(keystroke):
            return
        if keystroke.key == "escape" and self.autocomplete is not None:
            self.autocomplete = None
            return
        if self.find_panel is None and keystroke.is_plain_char():
            if _is_typeable(keystroke.key_char):
                self.insert_char(keystroke.key_char)

    def key_down(self, keystroke: Keystroke) -> None:
        """Handle a key press, then run any command bound to it.

        While the palette is open it receives every key press.
        """
        if self.palette is not None:
            self.palette.key_down(keystroke)
            self._sync_palette()
            return
        self._key_event(keystroke)
        action = action_for(keystroke)
        if action is not None:
            self.perform(action)

    # ----- display text --------------------------------------------------

    def header_text(self) -> str:
        """Title line shown above the buffer."""
        name = self.current_file if self.current_file is not None else "[unsaved]"
        return f"MedleyText - {name} | Ctrl+P: files | Ctrl+S: save | Ctrl+Q: quit"

    def status_text(self) -> tuple[str, str]:
        """Left and right parts of the status bar."""
        return (
            f"Line {self.line_number()}",
            "● unsaved" if self.is_dirty else "✓ saved",
        )

    def find_status_text(self) -> str | None:
        """Status line of the find panel, or None when it is closed."""
        panel = self.find_panel
        if panel is None:
            return None
        if not panel.has_query():
            return "Type to search"
        if not panel.has_matches():
            return "No matches"
        position = (panel.current_index() or 0) + 1
        return f"{position} / {len(panel.matches)} matches"