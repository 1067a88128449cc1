"""Keyboard input decoding for the search prompt.

Turns one complete raw terminal sequence into a :class:`KeyEvent`. Legacy
xterm/VT sequences and the kitty keyboard protocol's CSI-u forms are both
understood; anything the selector has no use for decodes to ``OTHER``.
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Literal

# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------

KeyKind = Literal[
    "char",
    "backspace",
    "up",
    "down",
    "left",
    "right",
    "tab",
    "backtab",
    "enter",
    "escape",
    "other",
]


@dataclass(frozen=True)
class KeyEvent:
    kind: KeyKind
    char: str = ""

    @classmethod
    def of_char(cls, ch: str) -> KeyEvent:
        return cls("char", ch)


BACKSPACE = KeyEvent("backspace")
ARROW_UP = KeyEvent("up")
ARROW_DOWN = KeyEvent("down")
ARROW_LEFT = KeyEvent("left")
ARROW_RIGHT = KeyEvent("right")
TAB = KeyEvent("tab")
BACKTAB = KeyEvent("backtab")
ENTER = KeyEvent("enter")
ESCAPE = KeyEvent("escape")
OTHER = KeyEvent("other")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Legacy escape sequences -> events
LEGACY_KEY_SEQUENCES: dict[str, KeyEvent] = {
    "\x1b[A": ARROW_UP,
    "\x1b[B": ARROW_DOWN,
    "\x1b[C": ARROW_RIGHT,
    "\x1b[D": ARROW_LEFT,
    "\x1bOA": ARROW_UP,
    "\x1bOB": ARROW_DOWN,
    "\x1bOC": ARROW_RIGHT,
    "\x1bOD": ARROW_LEFT,
    "\x1b[Z": BACKTAB,
}

SINGLE_BYTE_KEYS: dict[str, KeyEvent] = {
    "\x1b": ESCAPE,
    "\r": ENTER,
    "\n": ENTER,
    "\t": TAB,
    "\x7f": BACKSPACE,
    "\x08": BACKSPACE,
}

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

LOCK_MASK = 64 + 128

CODEPOINTS: dict[int, KeyEvent] = {
    27: ESCAPE,
    9: TAB,
    13: ENTER,
    57414: ENTER,  # keypad enter
    127: BACKSPACE,
}

_ARROW_LETTERS: dict[str, KeyEvent] = {
    "A": ARROW_UP,
    "B": ARROW_DOWN,
    "C": ARROW_RIGHT,
    "D": ARROW_LEFT,
}

# ---------------------------------------------------------------------------
# Regex patterns for kitty protocol parsing
# ---------------------------------------------------------------------------

# CSI u format: \x1b[<codepoint>(:<shifted_key>(:<base_layout_key>))?(;<modifier>(:<event_type>))?u
_KITTY_CSI_U_RE = re.compile(
    r"\x1b\[(\d+)(?::(\d+)(?::(\d+))?)?(?:;(\d+)(?::(\d+))?)?u"
)

# Arrow keys with modifier: \x1b[1;<modifier>(:<event_type>)?[ABCD]
_KITTY_ARROW_RE = re.compile(
    r"\x1b\[1;(\d+)(?::(\d+))?([ABCD])"
)

_KITTY_RELEASE = 3


def is_printable(ch: str) -> bool:
    """True for a single character that may be inserted into the query."""
    return len(ch) == 1 and ch.isprintable()


def _modifier_bits(raw: str | None) -> int:
    if not raw:
        return 0
    return (int(raw) - 1) & ~LOCK_MASK


def _decode_kitty(data: str) -> KeyEvent | None:
    """Decode a kitty CSI-u or modified-arrow sequence, or return ``None``."""
    m = _KITTY_CSI_U_RE.fullmatch(data)
    if m:
        if m.group(5) and int(m.group(5)) == _KITTY_RELEASE:
            return OTHER
        codepoint = int(m.group(1))
        mod = _modifier_bits(m.group(4))
        event = CODEPOINTS.get(codepoint)
        if event is not None:
            if event is TAB and mod & MODIFIERS["shift"]:
                return BACKTAB
            return event
        if mod & (MODIFIERS["ctrl"] | MODIFIERS["alt"]):
            return OTHER
        if codepoint > sys.maxunicode:
            return OTHER
        if mod & MODIFIERS["shift"]:
            # Prefer the shifted key the terminal reports, e.g. "A" for shift+a
            shifted = int(m.group(2)) if m.group(2) else None
            if shifted is not None and shifted > sys.maxunicode:
                return OTHER
            ch = chr(shifted) if shifted is not None else chr(codepoint).upper()
        else:
            ch = chr(codepoint)
        return KeyEvent.of_char(ch) if is_printable(ch) else OTHER

    m = _KITTY_ARROW_RE.fullmatch(data)
    if m:
        if m.group(2) and int(m.group(2)) == _KITTY_RELEASE:
            return OTHER
        return _ARROW_LETTERS[m.group(3)]

    return None


def decode_key(data: str) -> KeyEvent:
    """Decode one complete input sequence into a :class:`KeyEvent`."""
    if not data:
        return OTHER

    event = LEGACY_KEY_SEQUENCES.get(data)
    if event is not None:
        return event

    event = SINGLE_BYTE_KEYS.get(data)
    if event is not None:
        return event

    if data.startswith("\x1b["):
        kitty = _decode_kitty(data)
        if kitty is not None:
            return kitty
        return OTHER

    if is_printable(data):
        return KeyEvent.of_char(data)

    return OTHER
