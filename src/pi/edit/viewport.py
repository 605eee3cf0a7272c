"""Viewport state: size, scroll offset and the dirty flag.

The scroll offset is the document :class:`Location` shown in the top-left
cell.  Only :meth:`Viewport.scroll_location_into_view` moves it.
"""

from __future__ import annotations

from pi.edit.geometry import Location, Position, Size


class Viewport:
    """Tracks which window of the document is on screen."""

    def __init__(self, size: Size) -> None:
        self.size: Size = size
        self.scroll_offset: Location = Location()
        # A fresh viewport has never been drawn.
        self.needs_render: bool = True

    def mark_dirty(self) -> None:
        self.needs_render = True

    def mark_clean(self) -> None:
        self.needs_render = False

    def caret_position(self, location: Location) -> Position:
        return location.to_position(self.scroll_offset)

    def scroll_location_into_view(self, location: Location) -> None:
        """Shift the offset by the least amount that puts *location* on screen.

        ::

            row 2  +---------------+ <- offset_row
            row 3  |               |
            row 4  +---------------+ <- offset_row + height - 1
            row 5    <- target row, scrolls to offset_row = 5 - height + 1
        """
        target_row = location.line_index
        target_col = location.grapheme_index
        offset_row = self.scroll_offset.line_index
        offset_col = self.scroll_offset.grapheme_index
        width, height = self.size.width, self.size.height

        if target_row < offset_row:
            offset_row = target_row
        elif height > 0 and target_row >= offset_row + height:
            offset_row = max(target_row - height + 1, 0)

        if target_col < offset_col:
            offset_col = target_col
        elif width > 0 and target_col >= offset_col + width:
            offset_col = max(target_col - width + 1, 0)

        new_offset = Location(offset_row, offset_col)
        if new_offset != self.scroll_offset:
            self.scroll_offset = new_offset
            self.needs_render = True

    def resize(self, size: Size, location: Location) -> None:
        self.size = size
        self.scroll_location_into_view(location)
        self.needs_render = True

