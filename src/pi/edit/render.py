"""Full-frame renderer.

Draws every viewport row whenever the viewport is dirty.  There is no
differential update: a frame is a sequence of move-to / clear-line / print
instructions sent to a :class:`~pi.edit.terminal.Terminal`.

::

    row 0
    row 1
    row 2  +---------------+ <- scroll_offset.line_index (screen row 0)
    row 3  |               |
    row 4  +---------------+ <- scroll_offset.line_index + height - 1
    row 5
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pi.edit._version import NAME, VERSION
from pi.edit.utils import text_width, truncate_to_width

if TYPE_CHECKING:
    from pi.edit.buffer import Buffer
    from pi.edit.terminal import Terminal
    from pi.edit.viewport import Viewport

FILLER = "~"


def build_welcome_message(width: int) -> str:
    """Centered ``name editor -- version`` banner, truncated to *width*."""
    message = f"{NAME} editor -- version {VERSION}"
    padding = max(width - text_width(message), 0) // 2
    spaces = " " * max(padding - 1, 0)
    return truncate_to_width(f"{FILLER}{spaces}{message}", width)


class Renderer:
    """Draws the visible part of a buffer onto a terminal."""

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal

    def render(self, buffer: Buffer, viewport: Viewport) -> bool:
        """Redraw every row if *viewport* is dirty.

        Returns ``True`` when a frame was drawn.  The caller restores the
        caret afterwards.
        """
        if not viewport.needs_render:
            return False
        width, height = viewport.size.width, viewport.size.height
        if width == 0 or height == 0:
            return False

        top = viewport.scroll_offset.line_index
        left = viewport.scroll_offset.grapheme_index
        for row in range(height):
            self.terminal.move_cursor_to(0, row)
            self.terminal.clear_line()
            self.terminal.write(self._row_text(buffer, top + row, row, left, width, height))

        viewport.mark_clean()
        return True

    @staticmethod
    def _row_text(
        buffer: Buffer, index: int, row: int, left: int, width: int, height: int
    ) -> str:
        line = buffer.get(index)
        if line is not None:
            right = min(left + width, line.width())
            return line.visible_graphemes(left, right)
        if row == height // 3 and buffer.is_empty():
            return build_welcome_message(width)
        return FILLER
