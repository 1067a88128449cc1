"""Rendering styles for the search prompt and result rows.

There is a fixed set of themes, picked by name when the session is built:
``colorful`` (the default) and ``simple`` (plain text, no escape codes).
"""

from __future__ import annotations

from typing import Protocol

from fuzzy_history.config import ThemeName
from fuzzy_history.matching import match_positions, tokenize

# ── ANSI helpers ─────────────────────────────────────────────────────

_BOLD = "\033[1m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_CYAN = "\033[36m"
_DIM = "\033[2m"
_INVERSE = "\033[7m"
_RESET = "\033[0m"

# Width of the marker drawn before every result row ("❯ " or "  ").
ITEM_PREFIX_WIDTH = 2


class Theme(Protocol):
    """Formats the two kinds of line the selector draws."""

    def format_prompt(self, prompt: str, search_term: str, cursor_pos: int) -> str: ...

    def format_item(
        self, text: str, active: bool, highlight: bool, search_term: str
    ) -> str: ...


class SimpleTheme:
    """Plain-text theme: ``|`` marks the cursor and ``>`` the selection."""

    def format_prompt(self, prompt: str, search_term: str, cursor_pos: int) -> str:
        head = f"{prompt}: " if prompt else ""
        return f"{head}{search_term[:cursor_pos]}|{search_term[cursor_pos:]}"

    def format_item(
        self, text: str, active: bool, highlight: bool, search_term: str
    ) -> str:
        return f"{'> ' if active else '  '}{text}"


class ColorfulTheme:
    """Colored theme with an inverse-video cursor and highlighted matches."""

    prompt_prefix = f"{_YELLOW}?{_RESET}"
    prompt_suffix = f"{_DIM}›{_RESET}"
    active_item_prefix = f"{_GREEN}❯{_RESET} "
    inactive_item_prefix = "  "

    def format_prompt(self, prompt: str, search_term: str, cursor_pos: int) -> str:
        parts = [self.prompt_prefix, " "]
        if prompt:
            parts.append(f"{_BOLD}{prompt}{_RESET} ")
        parts.append(self.prompt_suffix)
        parts.append(" ")

        parts.append(search_term[:cursor_pos])
        if cursor_pos < len(search_term):
            parts.append(f"{_INVERSE}{search_term[cursor_pos]}{_RESET}")
            parts.append(search_term[cursor_pos + 1 :])
        else:
            parts.append(f"{_INVERSE} {_RESET}")
        return "".join(parts)

    def format_item(
        self, text: str, active: bool, highlight: bool, search_term: str
    ) -> str:
        prefix = self.active_item_prefix if active else self.inactive_item_prefix
        style = _CYAN if active else ""

        positions = match_positions(text, tokenize(search_term)) if highlight else None
        if not positions:
            body = f"{style}{text}{_RESET}" if style else text
            return prefix + body

        marked = set(positions)
        parts: list[str] = []
        for i, ch in enumerate(text):
            if i in marked:
                parts.append(f"{_YELLOW}{_BOLD}{ch}{_RESET}{style}")
            else:
                parts.append(ch)
        return f"{prefix}{style}{''.join(parts)}{_RESET}"


_THEMES: dict[ThemeName, type[ColorfulTheme] | type[SimpleTheme]] = {
    "colorful": ColorfulTheme,
    "simple": SimpleTheme,
}


def get_theme(name: ThemeName) -> Theme:
    try:
        return _THEMES[name]()
    except KeyError:
        raise ValueError(f"Unknown theme: {name!r}") from None
