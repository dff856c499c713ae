"""Editor actions and the key bindings that trigger them."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Action(enum.Enum):
    """Commands the editor responds to."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    BACKSPACE = "backspace"
    ENTER = "enter"
    SAVE = "save"
    QUIT = "quit"
    COPY = "copy"
    PASTE = "paste"
    CUT = "cut"
    SELECT_LEFT = "select_left"
    SELECT_RIGHT = "select_right"
    SELECT_UP = "select_up"
    SELECT_DOWN = "select_down"
    SELECT_ALL = "select_all"
    TOGGLE_FIND = "toggle_find"
    FIND_NEXT = "find_next"
    FIND_PREVIOUS = "find_previous"
    TOGGLE_PALETTE = "toggle_palette"


@dataclass(frozen=True)
class Keystroke:
    """A key press: the key name, the character it types and its modifiers."""

    key: str
    key_char: str | None = None
    control: bool = False
    alt: bool = False
    shift: bool = False
    platform: bool = False

    def is_plain_char(self) -> bool:
        """True when this press types one character without a command modifier."""
        return (
            self.key_char is not None
            and len(self.key_char) == 1
            and not (self.control or self.alt or self.platform)
        )


_MODIFIERS = {
    "ctrl": "control",
    "alt": "alt",
    "shift": "shift",
    "cmd": "platform",
}


def parse_binding(spec: str) -> Keystroke:
    """Parse a binding such as ``"ctrl-s"`` or ``"shift-f3"``."""
    *modifiers, key = spec.split("-")
    if not key:
        raise ValueError(f"binding has no key: {spec!r}")
    flags = {}
    for name in modifiers:
        try:
            flags[_MODIFIERS[name]] = True
        except KeyError:
            raise ValueError(f"unknown modifier {name!r} in {spec!r}") from None
    return Keystroke(key=key, **flags)


KEY_BINDINGS: dict[str, Action] = {
    "left": Action.MOVE_LEFT,
    "right": Action.MOVE_RIGHT,
    "up": Action.MOVE_UP,
    "down": Action.MOVE_DOWN,
    "backspace": Action.BACKSPACE,
    "enter": Action.ENTER,
    "ctrl-s": Action.SAVE,
    "ctrl-q": Action.QUIT,
    "ctrl-c": Action.COPY,
    "ctrl-v": Action.PASTE,
    "ctrl-x": Action.CUT,
    "shift-left": Action.SELECT_LEFT,
    "shift-right": Action.SELECT_RIGHT,
    "shift-up": Action.SELECT_UP,
    "shift-down": Action.SELECT_DOWN,
    "ctrl-a": Action.SELECT_ALL,
    "ctrl-p": Action.TOGGLE_PALETTE,
    "ctrl-f": Action.TOGGLE_FIND,
    "f3": Action.FIND_NEXT,
    "shift-f3": Action.FIND_PREVIOUS,
}


def _chord(keystroke: Keystroke) -> tuple:
    return (
        keystroke.key,
        keystroke.control,
        keystroke.alt,
        keystroke.shift,
        keystroke.platform,
    )


_BY_CHORD = {_chord(parse_binding(spec)): action for spec, action in KEY_BINDINGS.items()}


def action_for(keystroke: Keystroke) -> Action | None:
    """Return the action bound to *keystroke*, or None when it is unbound."""
    return _BY_CHORD.get(_chord(keystroke))