"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages raw mode, the alternate screen, cursor
visibility and screen clearing via ANSI escape sequences, and turns stdin
bytes and SIGWINCH signals into input events on a single blocking read.
"""

from __future__ import annotations

import codecs
import collections
import logging
import os
import select
import signal
import sys
import termios
import tty
from typing import Protocol, TextIO

from pi.edit.errors import TerminalError
from pi.edit.geometry import Size
from pi.edit.keys import Event, ResizeEvent, split_sequences, to_event

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENABLE = "\x1b[?1049h"
_ALT_SCREEN_DISABLE = "\x1b[?1049l"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_LINE = "\x1b[2K"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_MOVE_TO_FMT = "\x1b[{};{}H"

# Seconds to wait for the rest of a split escape sequence.
_ESCAPE_TIMEOUT = 0.01


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    @property
    def size(self) -> Size: ...

    def read_event(self) -> Event: ...

    def write(self, data: str) -> None: ...

    def move_cursor_to(self, x: int, y: int) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def clear_line(self) -> None: ...

    def clear_screen(self) -> None: ...

    def flush(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal backed by the process's stdin/stdout.

    Output is queued and only reaches the terminal on :meth:`flush`.
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._out: list[str] = []
        self._pending: collections.deque[Event] = collections.deque()
        self._partial: str = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._original_termios: list | None = None
        self._prev_sigwinch_handler: signal.Handlers | None = None
        self._wakeup_r: int | None = None
        self._wakeup_w: int | None = None
        self._started = False

    # -- properties ---------------------------------------------------------

    @property
    def size(self) -> Size:
        try:
            ts = os.get_terminal_size(self._stdout.fileno())
        except (ValueError, OSError):
            return Size(80, 24)
        return Size(ts.columns, ts.lines)

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enable raw mode, enter the alternate screen and watch for resizes."""
        if self._started:
            return
        fd = self._stdin.fileno()
        try:
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (termios.error, OSError) as e:
            raise TerminalError(f"Error enabling raw mode: {e}") from e

        self._wakeup_r, self._wakeup_w = os.pipe()
        os.set_blocking(self._wakeup_w, False)
        self._prev_sigwinch_handler = signal.getsignal(signal.SIGWINCH)
        signal.signal(signal.SIGWINCH, self._on_sigwinch)
        self._started = True

        self.write(_ALT_SCREEN_ENABLE)
        self.clear_screen()
        self.flush()

    def stop(self) -> None:
        """Leave the alternate screen and restore terminal attributes.

        Safe to call more than once; only the first call does anything.
        """
        if not self._started:
            return
        self._started = False
        self._out.clear()

        try:
            self._stdout.write(_ALT_SCREEN_DISABLE + _SHOW_CURSOR)
            self._stdout.flush()
        except OSError:
            logger.exception("Failed to leave the alternate screen")

        if self._prev_sigwinch_handler is not None:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler)
            self._prev_sigwinch_handler = None
        for fd in (self._wakeup_r, self._wakeup_w):
            if fd is not None:
                os.close(fd)
        self._wakeup_r = self._wakeup_w = None

        if self._original_termios is not None:
            try:
                termios.tcsetattr(
                    self._stdin.fileno(), termios.TCSADRAIN, self._original_termios
                )
            except (termios.error, OSError):
                logger.exception("Failed to restore terminal attributes")
            self._original_termios = None

    # -- input --------------------------------------------------------------

    def read_event(self) -> Event:
        """Block until one input event is available and return it."""
        while not self._pending:
            self._fill_pending()
        return self._pending.popleft()

    def _fill_pending(self) -> None:
        stdin_fd = self._stdin.fileno()
        watched = [stdin_fd]
        if self._wakeup_r is not None:
            watched.append(self._wakeup_r)

        timeout = _ESCAPE_TIMEOUT if self._partial else None
        try:
            ready, _, _ = select.select(watched, [], [], timeout)
        except OSError as e:
            raise TerminalError(f"Error waiting for input: {e}") from e

        if not ready:
            # A lone ESC (or a truncated sequence) that nothing followed.
            self._pending.append(to_event(self._partial))
            self._partial = ""
            return

        if self._wakeup_r is not None and self._wakeup_r in ready:
            os.read(self._wakeup_r, 512)
            size = self.size
            self._pending.append(ResizeEvent(size.width, size.height))

        if stdin_fd in ready:
            try:
                raw = os.read(stdin_fd, 4096)
            except OSError as e:
                raise TerminalError(f"Error reading input: {e}") from e
            if not raw:
                raise TerminalError("Input stream closed")
            sequences, self._partial = split_sequences(
                self._partial + self._decoder.decode(raw)
            )
            for sequence in sequences:
                self._pending.append(to_event(sequence))

    def _on_sigwinch(self, signum: int, frame: object) -> None:
        if self._wakeup_w is not None:
            try:
                os.write(self._wakeup_w, b"\0")
            except BlockingIOError:
                pass

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        self._out.append(data)

    def move_cursor_to(self, x: int, y: int) -> None:
        self.write(_MOVE_TO_FMT.format(y + 1, x + 1))

    def hide_cursor(self) -> None:
        self.write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(_SHOW_CURSOR)

    def clear_line(self) -> None:
        self.write(_CLEAR_LINE)

    def clear_screen(self) -> None:
        self.write(_CLEAR_SCREEN)

    def flush(self) -> None:
        if not self._out:
            return
        data = "".join(self._out)
        self._out.clear()
        try:
            self._stdout.write(data)
            self._stdout.flush()
        except OSError as e:
            raise TerminalError(f"Error writing to terminal: {e}") from e
