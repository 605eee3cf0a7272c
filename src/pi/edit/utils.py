"""Unicode text utilities: grapheme segmentation and display-width measurement.

All measurement works on grapheme clusters (user-perceived characters), never
on bytes or raw code points, so that combining marks, ZWJ emoji sequences and
regional-indicator flags are always treated as one unit.
"""

from __future__ import annotations

import unicodedata

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Segmentation
# ---------------------------------------------------------------------------


def segment(text: str) -> list[str]:
    """Split *text* into grapheme clusters, preserving order."""
    return list(grapheme.graphemes(text))


# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def grapheme_width(g: str) -> int:
    """Return the measured terminal width of a single grapheme cluster.

    Rules:
    1. Control characters and other zero-width code points -> 0
    2. Emoji presentation (VS16, ZWJ sequences, skin tones, flags) -> 2
    3. Otherwise ``wcwidth`` of the first meaningful code point.

    The result is never negative.
    """
    if not g:
        return 0

    # Single codepoint fast path
    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        if 0x20 <= cp <= 0x7E:
            return 1
        return max(_wcwidth.wcwidth(g), 0)

    cached = _width_cache.get(g)
    if cached is not None:
        return cached

    for ch in g:
        cp = ord(ch)
        if cp == 0xFE0F:  # VS16
            return _cache_width(g, 2)
        if cp == 0x200D:  # ZWJ
            return _cache_width(g, 2)
        if 0x1F3FB <= cp <= 0x1F3FF:  # Skin tone modifiers
            return _cache_width(g, 2)
        if 0x1F1E6 <= cp <= 0x1F1FF:  # Regional indicators
            return _cache_width(g, 2)

    first_cp = ord(g[0])
    if first_cp >= 0x1F000:
        return _cache_width(g, 2)

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return _cache_width(g, 0)

    return _cache_width(g, max(_wcwidth.wcwidth(g[0]), 0))


def text_width(text: str) -> int:
    """Sum of :func:`grapheme_width` over every cluster in *text*."""
    if text.isascii() and text.isprintable():
        return len(text)
    return sum(grapheme_width(g) for g in grapheme.graphemes(text))


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def is_blank(g: str) -> bool:
    """True when *g* is non-empty and made only of whitespace."""
    return bool(g) and g.strip() == ""


def is_control_char(g: str) -> bool:
    """True when *g* is exactly one code point of category ``Cc``."""
    return len(g) == 1 and unicodedata.category(g) == "Cc"


def is_printable_grapheme(text: str) -> bool:
    """True when *text* is a single grapheme cluster with no control code."""
    if not text or grapheme.length(text) != 1:
        return False
    return all(unicodedata.category(ch) != "Cc" for ch in text)


# ---------------------------------------------------------------------------
# truncate_to_width
# ---------------------------------------------------------------------------


def truncate_to_width(text: str, max_width: int) -> str:
    """Cut *text* so that it occupies at most *max_width* cells.

    A wide cluster that would straddle the limit is dropped entirely.
    """
    if max_width <= 0:
        return ""
    if text_width(text) <= max_width:
        return text

    out: list[str] = []
    used = 0
    for g in grapheme.graphemes(text):
        w = grapheme_width(g)
        if used + w > max_width:
            break
        out.append(g)
        used += w
    return "".join(out)
