"""Editor commands and the decoder that produces them from input events.

Decoding is a pure classification: one :data:`~pi.edit.keys.Event` in, one
:data:`Command` out.  The quit binding is checked before anything else.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from pi.edit.errors import DecodeError
from pi.edit.keybindings import EditorAction, EditorKeybindingsManager
from pi.edit.keys import Event, KeyEvent, ResizeEvent
from pi.edit.utils import is_printable_grapheme


class Direction(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "pageUp"
    PAGE_DOWN = "pageDown"
    HOME = "home"
    END = "end"


class SpecialKey(enum.Enum):
    BACKSPACE = "backspace"
    DELETE = "delete"
    ENTER = "enter"
    TAB = "tab"
    BACK_TAB = "backTab"
    INSERT = "insert"
    CAPS_LOCK = "capsLock"


@dataclass(frozen=True)
class MoveCaret:
    direction: Direction


@dataclass(frozen=True)
class SpecialKeyCommand:
    key: SpecialKey


@dataclass(frozen=True)
class OrdinaryChar:
    char: str


@dataclass(frozen=True)
class FunctionKey:
    number: int


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Unknown:
    key: str | None = None


Command = (
    MoveCaret | SpecialKeyCommand | OrdinaryChar | FunctionKey | Resize | Quit | Unknown
)

_ACTION_COMMANDS: dict[EditorAction, Command] = {
    "quit": Quit(),
    "cursorUp": MoveCaret(Direction.UP),
    "cursorDown": MoveCaret(Direction.DOWN),
    "cursorLeft": MoveCaret(Direction.LEFT),
    "cursorRight": MoveCaret(Direction.RIGHT),
    "cursorLineStart": MoveCaret(Direction.HOME),
    "cursorLineEnd": MoveCaret(Direction.END),
    "pageUp": MoveCaret(Direction.PAGE_UP),
    "pageDown": MoveCaret(Direction.PAGE_DOWN),
    "deleteCharBackward": SpecialKeyCommand(SpecialKey.BACKSPACE),
    "deleteCharForward": SpecialKeyCommand(SpecialKey.DELETE),
    "newLine": SpecialKeyCommand(SpecialKey.ENTER),
    "tab": SpecialKeyCommand(SpecialKey.TAB),
    "backTab": SpecialKeyCommand(SpecialKey.BACK_TAB),
    "insert": SpecialKeyCommand(SpecialKey.INSERT),
    "capsLock": SpecialKeyCommand(SpecialKey.CAPS_LOCK),
}

_FKEY_RE = re.compile(r"^f(\d{1,2})$")


def decode(
    event: Event, keybindings: EditorKeybindingsManager | None = None
) -> Command:
    """Classify *event* into an editor command.

    Raises :class:`~pi.edit.errors.DecodeError` for events that are neither
    key presses nor resizes.
    """
    if isinstance(event, ResizeEvent):
        return Resize(event.width, event.height)
    if not isinstance(event, KeyEvent):
        raise DecodeError(event)

    bindings = keybindings if keybindings is not None else EditorKeybindingsManager()
    key = event.key

    if bindings.matches(key, "quit"):
        return Quit()

    action = bindings.action_for(key)
    if action is not None:
        return _ACTION_COMMANDS[action]

    fkey = _FKEY_RE.match(key)
    if fkey and 1 <= int(fkey.group(1)) <= 12:
        return FunctionKey(int(fkey.group(1)))

    if key == "space":
        return OrdinaryChar(" ")
    if is_printable_grapheme(key):
        return OrdinaryChar(key)

    return Unknown(key)
