"""The editor session loop and its guaranteed terminal teardown.

One loop iteration is: refresh the screen, block for one input event,
decode it, apply it.  The terminal is restored exactly once, through a
single exit path, whether the loop ends by quitting or by an exception.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from collections.abc import Iterator
from typing import TYPE_CHECKING, TextIO

from pi.edit.buffer import Buffer
from pi.edit.commands import decode
from pi.edit.editor import Editor
from pi.edit.errors import DecodeError
from pi.edit.keybindings import EditorKeybindingsManager

if TYPE_CHECKING:
    from pi.edit.config import Config
    from pi.edit.terminal import Terminal

logger = logging.getLogger(__name__)

GOODBYE_MESSAGE = "Goodbye.\r\n"
CRASH_MESSAGE = "Editor crashed unexpectedly. Terminal state restored."


class Session:
    """Owns the editor and drives it against a terminal."""

    def __init__(
        self,
        terminal: Terminal,
        text: str = "",
        config: Config | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.terminal = terminal
        self.debug = bool(config.debug) if config is not None else False
        self.keybindings = EditorKeybindingsManager(
            config.keybindings if config is not None else None
        )
        self.editor = Editor(Buffer.from_text(text), terminal.size)
        self._stderr = stderr
        self._terminated = False

    @contextlib.contextmanager
    def _terminal_guard(self) -> Iterator[None]:
        """Start the terminal and make sure it is restored on every exit."""
        self.terminal.start()
        try:
            yield
        except BaseException:
            self.terminate()
            logger.exception("Session aborted")
            print(CRASH_MESSAGE, file=self._stderr or sys.stderr)
            raise
        else:
            self.terminate()
            self.terminal.write(GOODBYE_MESSAGE)
            self.terminal.flush()

    def terminate(self) -> None:
        """Restore the terminal; only the first call has an effect."""
        if self._terminated:
            return
        self._terminated = True
        self.terminal.stop()

    def run(self) -> None:
        """Run until the user quits."""
        with self._terminal_guard():
            while True:
                self.editor.refresh_screen(self.terminal)
                if self.editor.should_quit:
                    break
                self.process_event()

    def process_event(self) -> None:
        """Read, decode and apply one input event."""
        event = self.terminal.read_event()
        try:
            command = decode(event, self.keybindings)
        except DecodeError:
            if self.debug:
                raise
            logger.debug("Dropping undecodable event %r", event)
            return
        self.editor.handle_command(command)
