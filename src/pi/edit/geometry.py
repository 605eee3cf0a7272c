"""Document and screen coordinates.

* :class:`Location` -- absolute position in the document, measured in
  grapheme clusters.
* :class:`Position` -- a cell on the rendered viewport.
* :class:`Size` -- viewport dimensions in cells.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Size:
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class Position:
    """Screen cell coordinates; never negative."""

    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Location:
    """Absolute document coordinates.

    ``grapheme_index`` may equal the line's grapheme count, which is the
    append position at the end of the line.
    """

    line_index: int = 0
    grapheme_index: int = 0

    def to_position(self, scroll_offset: Location) -> Position:
        """Map to a viewport cell given the current *scroll_offset*.

        Each axis saturates at zero, so a location above or left of the
        viewport lands on its edge.
        """
        return Position(
            x=max(self.grapheme_index - scroll_offset.grapheme_index, 0),
            y=max(self.line_index - scroll_offset.line_index, 0),
        )
