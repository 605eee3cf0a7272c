"""Raw terminal input -> key identifiers and input events.

Splits a chunk read from stdin into complete sequences, then maps each
sequence to a key identifier string such as ``"a"``, ``"ctrl+q"``,
``"shift+tab"``, ``"pageUp"`` or ``"f5"``.  Legacy xterm/VT sequences are
supported, as is the CSI-u form (``ESC [ codepoint ; modifier u``) used by
terminals with enhanced keyboard reporting.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pi.edit.utils import is_printable_grapheme, segment

KeyId = str

ESC = "\x1b"

# ---------------------------------------------------------------------------
# Input events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyEvent:
    key: KeyId


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


@dataclass(frozen=True)
class UnsupportedEvent:
    """Raw input that is not a key press (mouse reports, stray responses)."""

    data: str


Event = KeyEvent | ResizeEvent | UnsupportedEvent

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

LOCK_MASK = 64 + 128

CODEPOINTS: dict[int, str] = {
    9: "tab",
    13: "enter",
    27: "escape",
    32: "space",
    127: "backspace",
    57358: "capsLock",
    57414: "enter",  # keypad enter
}

# Legacy escape sequences -> key names
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1bOP": "f1",
    "\x1bOQ": "f2",
    "\x1bOR": "f3",
    "\x1bOS": "f4",
    "\x1b[11~": "f1",
    "\x1b[12~": "f2",
    "\x1b[13~": "f3",
    "\x1b[14~": "f4",
    "\x1b[15~": "f5",
    "\x1b[17~": "f6",
    "\x1b[18~": "f7",
    "\x1b[19~": "f8",
    "\x1b[20~": "f9",
    "\x1b[21~": "f10",
    "\x1b[23~": "f11",
    "\x1b[24~": "f12",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
    "\x1b[E": "clear",
    "\x1b[Z": "shift+tab",
}

# xterm-style modified sequences: ESC [ 1 ; <mod> <final> and ESC [ <n> ; <mod> ~
_MODIFIED_LETTER_RE = re.compile(r"^\x1b\[1;(\d+)([A-HPQRS])$")
_MODIFIED_TILDE_RE = re.compile(r"^\x1b\[(\d+);(\d+)~$")
_CSI_U_RE = re.compile(r"^\x1b\[(\d+)(?::\d*)*(?:;(\d+)(?::\d+)?)?u$")

_LETTER_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
    "P": "f1",
    "Q": "f2",
    "R": "f3",
    "S": "f4",
}

_TILDE_KEYS: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    15: "f5",
    17: "f6",
    18: "f7",
    19: "f8",
    20: "f9",
    21: "f10",
    23: "f11",
    24: "f12",
}


def _modifier_prefix(modifier: int) -> str:
    mod = (modifier - 1) & ~LOCK_MASK
    prefix = ""
    if mod & MODIFIERS["ctrl"]:
        prefix += "ctrl+"
    if mod & MODIFIERS["shift"]:
        prefix += "shift+"
    if mod & MODIFIERS["alt"]:
        prefix += "alt+"
    return prefix


# ---------------------------------------------------------------------------
# Sequence splitting
# ---------------------------------------------------------------------------


def _is_complete_sequence(data: str) -> bool:
    """True when *data* (starting with ESC) needs no more characters."""
    if len(data) == 1:
        return False

    after_esc = data[1:]

    # CSI sequences: ESC [ ... final byte in 0x40..0x7E
    if after_esc.startswith("["):
        if after_esc.startswith("[M"):
            return len(data) >= 6
        if len(data) < 3:
            return False
        return 0x40 <= ord(data[-1]) <= 0x7E

    # OSC sequences: ESC ] ... (BEL | ST)
    if after_esc.startswith("]"):
        return data.endswith(f"{ESC}\\") or data.endswith("\x07")

    # SS3 sequences: ESC O <char>
    if after_esc.startswith("O"):
        return len(after_esc) >= 2

    # Meta key: ESC followed by a single character
    return True


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete key sequences.

    Plain text is split into grapheme clusters.  Returns
    ``(sequences, remainder)`` where *remainder* is an escape sequence that
    has not been fully received yet.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        if buffer[pos] == ESC:
            end = pos + 1
            while end <= len(buffer) and not _is_complete_sequence(buffer[pos:end]):
                end += 1
            if end > len(buffer):
                return sequences, buffer[pos:]
            sequences.append(buffer[pos:end])
            pos = end
        else:
            nxt = buffer.find(ESC, pos)
            chunk = buffer[pos:] if nxt == -1 else buffer[pos:nxt]
            sequences.extend(segment(chunk))
            pos += len(chunk)

    return sequences, ""


# ---------------------------------------------------------------------------
# parse_key -- determine what key was pressed from raw input
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:  # noqa: C901
    """Parse one complete input sequence and return its key identifier.

    Returns ``None`` when *data* is not recognisable as a key.
    """
    if not data:
        return None

    if data in LEGACY_KEY_SEQUENCES:
        return LEGACY_KEY_SEQUENCES[data]

    match = _MODIFIED_LETTER_RE.match(data)
    if match:
        return _modifier_prefix(int(match.group(1))) + _LETTER_KEYS[match.group(2)]

    match = _MODIFIED_TILDE_RE.match(data)
    if match:
        name = _TILDE_KEYS.get(int(match.group(1)))
        if name is None:
            return None
        return _modifier_prefix(int(match.group(2))) + name

    match = _CSI_U_RE.match(data)
    if match:
        cp = int(match.group(1))
        prefix = _modifier_prefix(int(match.group(2) or 1))
        name = CODEPOINTS.get(cp)
        if name is not None:
            return prefix + name
        if cp > 0:
            ch = chr(cp)
            if ch.isprintable():
                return prefix + (ch.lower() if prefix else ch)
        return None

    # --- Simple single-byte keys ---
    if data == ESC:
        return "escape"
    if data in ("\r", "\n", "\r\n"):
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data in ("\x7f", "\x08"):
        return "backspace"
    if data == "\x00":
        return "ctrl+space"

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == ESC:
        ch = data[1]
        if ch in ("\r", "\n"):
            return "alt+enter"
        if ch in ("\x7f", "\x08"):
            return "alt+backspace"
        if 1 <= ord(ch) <= 26:
            return "ctrl+alt+" + chr(ord(ch) + ord("a") - 1)
        if ch.isupper():
            return "shift+alt+" + ch.lower()
        if ch.isprintable():
            return "alt+" + ch.lower()

    # --- Plain printable character (one grapheme cluster) ---
    if is_printable_grapheme(data):
        return data

    return None


def to_event(data: str) -> Event:
    """Wrap one complete input sequence as an :data:`Event`."""
    key = parse_key(data)
    if key is None:
        return UnsupportedEvent(data)
    return KeyEvent(key)
