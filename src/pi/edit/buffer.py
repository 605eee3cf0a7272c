"""Document buffer: the ordered list of lines and every structural edit.

All operations are total.  Out-of-range indices are clamped or ignored, never
raised; keeping the caret consistent afterwards is the caller's job.

Lines are addressed by list index, so inserting or removing a line shifts
every index after it (O(n) per structural edit).
"""

from __future__ import annotations

import logging

from pi.edit.geometry import Location
from pi.edit.line import Line

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split *text* on ``\\n``, dropping one trailing ``\\r`` per line.

    A final line terminator does not start an extra, empty line.
    """
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


class Buffer:
    """An editable document; never holds zero lines."""

    def __init__(self, text: str = "") -> None:
        self._lines: list[Line] = [Line.from_str(s) for s in split_lines(text)]
        if not self._lines:
            self._lines.append(Line())

    @classmethod
    def from_text(cls, text: str) -> Buffer:
        return cls(text)

    # -- read access --------------------------------------------------------

    @property
    def lines(self) -> list[Line]:
        return self._lines

    def line_count(self) -> int:
        return len(self._lines)

    def get(self, index: int) -> Line | None:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def grapheme_count(self, index: int) -> int:
        """Grapheme count of line *index*, or 0 when there is no such line."""
        line = self.get(index)
        return line.grapheme_count() if line is not None else 0

    def is_empty(self) -> bool:
        """True for a document that is a single empty line."""
        return len(self._lines) == 1 and self._lines[0].is_empty()

    def text(self) -> str:
        return "\n".join(str(line) for line in self._lines)

    def __repr__(self) -> str:
        return f"Buffer({[str(line) for line in self._lines]!r})"

    # -- edits --------------------------------------------------------------

    def insert_char(self, location: Location, ch: str) -> None:
        """Insert *ch* at *location*.

        One line past the end appends a new line holding only *ch*.
        """
        index = location.line_index
        if index == len(self._lines):
            self._lines.append(Line.from_str(ch))
            return
        line = self.get(index)
        if line is None:
            logger.debug("insert_char ignored: no line %d", index)
            return
        if 0 <= location.grapheme_index <= line.grapheme_count():
            line.insert_char(ch, location.grapheme_index)

    def new_line(self, after_index: int, line: Line | None = None) -> None:
        """Insert *line* (default empty) right after *after_index*.

        An index past the last line appends at the end instead.
        """
        new = line if line is not None else Line()
        if 0 <= after_index < len(self._lines):
            self._lines.insert(after_index + 1, new)
        else:
            self._lines.append(new)

    def insert_newline(self, location: Location, carry: Line | None = None) -> None:
        """Break the line at *location* and put the tail on a new line after it.

        With an explicit *carry* line the addressed line is left whole and
        *carry* is inserted after it instead.
        """
        if carry is None:
            carry = self.split(location.line_index, location.grapheme_index)
        self.new_line(location.line_index, carry)

    def split(self, line_index: int, grapheme_index: int) -> Line:
        """Remove and return the tail of a line; out of range gives an empty line."""
        line = self.get(line_index)
        if line is None:
            return Line()
        return line.split(grapheme_index)

    def delete(self, location: Location) -> None:
        """Forward delete at *location*.

        At or past the end of a line the next line is merged onto it.
        """
        line = self.get(location.line_index)
        if line is None:
            return
        at = location.grapheme_index
        if at >= line.grapheme_count():
            following = self.get(location.line_index + 1)
            if following is not None:
                line.append(following)
                del self._lines[location.line_index + 1]
        elif at >= 0:
            line.delete(at)
