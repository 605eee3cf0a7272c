"""Edit/navigation state machine.

The editor state is the caret :class:`~pi.edit.geometry.Location`, the
:class:`~pi.edit.viewport.Viewport` (scroll offset, size, dirty flag) and the
:class:`~pi.edit.buffer.Buffer`.  Each command handler is synchronous and
leaves the caret inside the document.

Vertical moves do not remember a preferred column: moving through a short
line pulls the caret left and it stays there.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pi.edit.buffer import Buffer
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
)
from pi.edit.geometry import Location, Position, Size
from pi.edit.render import Renderer
from pi.edit.viewport import Viewport

if TYPE_CHECKING:
    from pi.edit.terminal import Terminal

logger = logging.getLogger(__name__)


class Editor:
    """Applies editor commands to a buffer and keeps the caret on screen."""

    def __init__(self, buffer: Buffer, size: Size) -> None:
        self.buffer = buffer
        self.viewport = Viewport(size)
        self.location = Location()
        self.should_quit = False

    # -- convenience accessors ---------------------------------------------

    @property
    def size(self) -> Size:
        return self.viewport.size

    @property
    def scroll_offset(self) -> Location:
        return self.viewport.scroll_offset

    @property
    def needs_render(self) -> bool:
        return self.viewport.needs_render

    def caret_position(self) -> Position:
        return self.viewport.caret_position(self.location)

    # -- dispatch -----------------------------------------------------------

    def handle_command(self, command: Command) -> None:
        if isinstance(command, MoveCaret):
            self.move_caret(command.direction)
        elif isinstance(command, OrdinaryChar):
            self.insert_char(command.char)
        elif isinstance(command, SpecialKeyCommand):
            self.handle_special_key(command.key)
        elif isinstance(command, Resize):
            self.resize(Size(command.width, command.height))
        elif isinstance(command, Quit):
            self.should_quit = True
        elif isinstance(command, FunctionKey):
            logger.debug("Function key F%d has no binding", command.number)
        elif isinstance(command, Unknown):
            logger.debug("Dropping unknown key %r", command.key)

    # -- caret movement -----------------------------------------------------

    def move_caret(self, direction: Direction) -> None:
        row, col = self.location.line_index, self.location.grapheme_index
        last_row = self.buffer.line_count() - 1
        line_len = self.buffer.grapheme_count(row)
        height = self.viewport.size.height

        if direction is Direction.UP:
            if row > 0:
                row -= 1
                col = min(col, self.buffer.grapheme_count(row))
        elif direction is Direction.DOWN:
            if row < last_row:
                row += 1
                col = min(col, self.buffer.grapheme_count(row))
        elif direction is Direction.LEFT:
            if col > 0:
                col -= 1
            elif row > 0:
                row -= 1
                col = self.buffer.grapheme_count(row)
        elif direction is Direction.RIGHT:
            if col < line_len:
                col += 1
            elif row < last_row:
                row += 1
                col = 0
        elif direction is Direction.PAGE_UP:
            row = max(row - height, 0)
            col = min(col, self.buffer.grapheme_count(row))
        elif direction is Direction.PAGE_DOWN:
            row = min(row + height, last_row)
            col = min(col, self.buffer.grapheme_count(row))
        elif direction is Direction.HOME:
            col = 0
        elif direction is Direction.END:
            col = max(line_len - 1, 0)

        self.location = Location(row, col)
        self.viewport.scroll_location_into_view(self.location)

    # -- edits --------------------------------------------------------------

    def insert_char(self, ch: str) -> None:
        row = self.location.line_index
        old_len = self.buffer.grapheme_count(row)
        self.buffer.insert_char(self.location, ch)
        if self.buffer.grapheme_count(row) > old_len:
            self.move_caret(Direction.RIGHT)
        self.viewport.mark_dirty()

    def handle_special_key(self, key: SpecialKey) -> None:
        if key is SpecialKey.ENTER:
            self.buffer.insert_newline(self.location)
            self.move_caret(Direction.RIGHT)
            self.viewport.mark_dirty()
        elif key is SpecialKey.DELETE:
            self.buffer.delete(self.location)
            self.viewport.mark_dirty()
        elif key is SpecialKey.BACKSPACE:
            self.backspace()
        elif key is SpecialKey.TAB:
            self.insert_char("\t")
        else:
            logger.debug("Special key %s is not implemented", key.value)

    def backspace(self) -> None:
        row, col = self.location.line_index, self.location.grapheme_index
        if col > 0:
            self.buffer.delete(Location(row, col - 1))
            self.move_caret(Direction.LEFT)
            self.viewport.mark_dirty()
        elif row > 0:
            # Forward delete at the end of the previous line merges this one.
            prev_len = self.buffer.grapheme_count(row - 1)
            self.buffer.delete(Location(row - 1, prev_len))
            self.location = Location(row - 1, prev_len)
            self.viewport.scroll_location_into_view(self.location)
            self.viewport.mark_dirty()

    def resize(self, size: Size) -> None:
        self.viewport.resize(size, self.location)

    # -- drawing ------------------------------------------------------------

    def refresh_screen(self, terminal: Terminal) -> None:
        """Draw a frame if needed, then put the caret back and flush."""
        position = self.caret_position()
        terminal.hide_cursor()
        Renderer(terminal).render(self.buffer, self.viewport)
        terminal.move_cursor_to(position.x, position.y)
        terminal.show_cursor()
        terminal.flush()
