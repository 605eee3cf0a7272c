"""pi-edit: grapheme-aware terminal text editor."""

from pi.edit._version import NAME, VERSION

# Document model
from pi.edit.buffer import Buffer
from pi.edit.line import GraphemeWidth, Line, TextFragment

# Coordinates and viewport
from pi.edit.geometry import Location, Position, Size
from pi.edit.viewport import Viewport

# Input decoding
from pi.edit.commands import (
    Command,
    Direction,
    FunctionKey,
    MoveCaret,
    OrdinaryChar,
    Quit,
    Resize,
    SpecialKey,
    SpecialKeyCommand,
    Unknown,
    decode,
)
from pi.edit.keybindings import (
    DEFAULT_EDITOR_KEYBINDINGS,
    EditorAction,
    EditorKeybindingsManager,
)
from pi.edit.keys import Event, KeyEvent, KeyId, ResizeEvent, UnsupportedEvent, parse_key

# Editing, rendering, session
from pi.edit.config import Config, load_config
from pi.edit.editor import Editor
from pi.edit.errors import DecodeError, EditorError, TerminalError
from pi.edit.render import Renderer
from pi.edit.session import Session
from pi.edit.terminal import ProcessTerminal, Terminal

__version__ = VERSION

__all__ = [
    "NAME",
    "VERSION",
    # Document model
    "Buffer",
    "GraphemeWidth",
    "Line",
    "TextFragment",
    # Coordinates and viewport
    "Location",
    "Position",
    "Size",
    "Viewport",
    # Commands
    "Command",
    "Direction",
    "FunctionKey",
    "MoveCaret",
    "OrdinaryChar",
    "Quit",
    "Resize",
    "SpecialKey",
    "SpecialKeyCommand",
    "Unknown",
    "decode",
    # Keybindings
    "DEFAULT_EDITOR_KEYBINDINGS",
    "EditorAction",
    "EditorKeybindingsManager",
    # Keys
    "Event",
    "KeyEvent",
    "KeyId",
    "ResizeEvent",
    "UnsupportedEvent",
    "parse_key",
    # Editing, rendering, session
    "Config",
    "load_config",
    "Editor",
    "DecodeError",
    "EditorError",
    "TerminalError",
    "Renderer",
    "Session",
    "ProcessTerminal",
    "Terminal",
]
