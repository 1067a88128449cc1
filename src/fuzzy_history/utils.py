"""Terminal text utilities: ANSI stripping and display width measurement.

Widths are measured per grapheme cluster so wide (CJK) characters and emoji
count as two columns, which matters when working out how many terminal rows
a long history entry wraps onto.
"""

from __future__ import annotations

import math
import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# CSI sequences: ESC[ <params> <final byte>, plus OSC 8 hyperlinks
_STRIP_RE = re.compile(
    r"\x1b\[[0-9;]*[mGKHJ]"         # CSI
    r"|\x1b\]8;;[^\x07]*\x07"       # OSC 8
)

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


def strip_ansi(text: str) -> str:
    return _STRIP_RE.sub("", text)


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster."""
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    ANSI escape sequences are ignored and tabs count as 3 columns.
    """
    if not text:
        return 0

    stripped = strip_ansi(text)
    if not stripped:
        return 0
    stripped = stripped.replace("\t", "   ")

    if all(0x20 <= ord(ch) <= 0x7E for ch in stripped):
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)


def wrapped_rows(width: int, prefix_width: int, columns: int) -> int:
    """Number of terminal rows an item of display *width* occupies.

    A line that fits the terminal takes one row. A wider one wraps and
    takes ``ceil((width + prefix_width) / columns)`` rows.
    """
    total = width + prefix_width
    if columns <= 0 or total <= columns:
        return 1
    return math.ceil(total / columns)
