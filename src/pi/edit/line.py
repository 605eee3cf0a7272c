"""Grapheme line model.

A :class:`Line` is an ordered list of :class:`TextFragment` values, one per
grapheme cluster.  Each fragment knows how many terminal cells it occupies
and, for characters that would otherwise be invisible or misrender, which
single-cell glyph to draw instead.

Character-level edits never patch the fragment list in place: they rebuild
the line from its text so that a cluster boundary is never split mid-unit.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from pi.edit.utils import grapheme_width, is_blank, is_control_char, segment

TAB_REPLACEMENT = " "
BLANK_REPLACEMENT = "␣"
CONTROL_REPLACEMENT = "▯"
CLIP_MARKER = "⋯"


class GraphemeWidth(enum.IntEnum):
    """Rendered width class of a grapheme cluster."""

    HALF = 1
    FULL = 2

    @classmethod
    def from_measured(cls, width: int) -> GraphemeWidth:
        return cls.HALF if width <= 1 else cls.FULL


@dataclass(frozen=True)
class TextFragment:
    """One grapheme cluster and how it is drawn."""

    grapheme: str
    rendered_width: GraphemeWidth = GraphemeWidth.HALF
    replacement: str | None = None

    @classmethod
    def from_grapheme(cls, g: str) -> TextFragment:
        """Measure *g* and apply the substitution rules, first match wins."""
        measured = grapheme_width(g)
        if g == "\t":
            return cls(g, GraphemeWidth.HALF, TAB_REPLACEMENT)
        if measured > 0 and is_blank(g):
            return cls(g, GraphemeWidth.HALF, BLANK_REPLACEMENT)
        if measured == 0 and is_control_char(g):
            return cls(g, GraphemeWidth.HALF, CONTROL_REPLACEMENT)
        return cls(g, GraphemeWidth.from_measured(measured))

    @property
    def glyph(self) -> str:
        """What the renderer prints for this fragment."""
        return self.replacement if self.replacement is not None else self.grapheme


class Line:
    """A single document line as a sequence of grapheme fragments."""

    __slots__ = ("fragments",)

    def __init__(self, fragments: list[TextFragment] | None = None) -> None:
        self.fragments: list[TextFragment] = fragments if fragments is not None else []

    @classmethod
    def from_str(cls, text: str) -> Line:
        return cls([TextFragment.from_grapheme(g) for g in segment(text)])

    # -- derived quantities -------------------------------------------------

    def grapheme_count(self) -> int:
        return len(self.fragments)

    def width(self) -> int:
        """Rendered width in terminal cells."""
        return sum(int(f.rendered_width) for f in self.fragments)

    def is_empty(self) -> bool:
        return not self.fragments

    # -- rendering ----------------------------------------------------------

    def visible_graphemes(self, start: int, end: int) -> str:
        """Return the text that covers the cell window ``[start, end)``.

        A fragment cut by either edge of the window is drawn as a single
        ``⋯`` instead of partial glyph data.
        """
        if start >= end:
            return ""

        out: list[str] = []
        fragment_start = 0
        for fragment in self.fragments:
            fragment_end = fragment_start + int(fragment.rendered_width)
            if fragment_start >= end:
                break
            if fragment_end > start:
                if fragment_start < start or fragment_end > end:
                    out.append(CLIP_MARKER)
                else:
                    out.append(fragment.glyph)
            fragment_start = fragment_end
        return "".join(out)

    # -- edits --------------------------------------------------------------

    def insert_char(self, ch: str, at: int) -> None:
        """Splice *ch* before fragment *at* (append when past the end)."""
        parts = [f.grapheme for f in self.fragments]
        parts.insert(min(max(at, 0), len(parts)), ch)
        self.fragments = Line.from_str("".join(parts)).fragments

    def delete(self, at: int) -> None:
        """Remove fragment *at*; an out-of-range index leaves the text unchanged."""
        text = "".join(
            f.grapheme for index, f in enumerate(self.fragments) if index != at
        )
        self.fragments = Line.from_str(text).fragments

    def split(self, at: int) -> Line:
        """Cut the line at *at* and return the tail as a new line."""
        if at < 0 or at > len(self.fragments):
            return Line()
        tail = self.fragments[at:]
        del self.fragments[at:]
        return Line(tail)

    def append(self, other: Line) -> None:
        self.fragments = Line.from_str(str(self) + str(other)).fragments

    # -- dunder -------------------------------------------------------------

    def __str__(self) -> str:
        return "".join(f.grapheme for f in self.fragments)

    def __repr__(self) -> str:
        return f"Line({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self.fragments == other.fragments

    def __len__(self) -> int:
        return len(self.fragments)
