"""Exception hierarchy for pi-edit."""

from __future__ import annotations


class EditorError(Exception):
    """Base class for all pi-edit errors."""


class DecodeError(EditorError):
    """An input event has no editor meaning at all (not even ``Unknown``)."""

    def __init__(self, event: object) -> None:
        super().__init__(f"Unsupported event for editor command: {event!r}")
        self.event = event


class TerminalError(EditorError):
    """The terminal adapter failed to read or write."""
