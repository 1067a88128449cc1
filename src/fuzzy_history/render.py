"""Frame renderer for the search selector.

Draws the prompt line and the visible window of candidates, and keeps
track of exactly how many terminal rows the last frame used so the next
frame can erase precisely that much -- no leftover rows from a previous
frame, and no clearing into whatever the shell printed above us.
"""

from __future__ import annotations

import re

from fuzzy_history.terminal import Terminal
from fuzzy_history.theme import ITEM_PREFIX_WIDTH, Theme
from fuzzy_history.utils import visible_width, wrapped_rows


# C0 controls (tab and newline included), DEL and C1 controls
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def _single_line(text: str) -> str:
    # One space per control character: the row is measured as it is drawn,
    # and match positions stay valid.
    return _CONTROL_RE.sub(" ", text)


class Renderer:
    """Writes theme-formatted lines to a terminal and tracks frame height.

    ``height`` counts lines written since the prompt (the body of the
    frame) and ``prompt_height`` the rows of the prompt itself, which is
    reset with every frame. Items wider than the terminal wrap; the extra
    rows they took are added when the body is cleared.
    """

    def __init__(self, terminal: Terminal, theme: Theme) -> None:
        self._terminal = terminal
        self._theme = theme
        self.height = 0
        self.prompt_height = 0
        self._drawn_items: list[str] = []

    def _write_line(self, line: str) -> None:
        self.height += 1
        self._terminal.write_line(line)

    def draw_prompt(self, prompt: str, search_term: str, cursor_pos: int) -> None:
        line = self._theme.format_prompt(prompt, _single_line(search_term), cursor_pos)
        self._write_line(line)
        self.prompt_height = self.height + wrapped_rows(
            visible_width(line), 0, self._terminal.columns
        ) - 1
        self.height = 0

    def draw_item(
        self, text: str, active: bool, highlight: bool, search_term: str
    ) -> None:
        text = _single_line(text)
        self._write_line(self._theme.format_item(text, active, highlight, search_term))
        self._drawn_items.append(text)

    def draw_frame(
        self,
        prompt: str,
        search_term: str,
        cursor_pos: int,
        visible: list[tuple[int, str]],
        selected: int | None,
        highlight: bool,
    ) -> None:
        """Draw one full frame: the prompt, then each ``(index, text)`` row."""
        self.draw_prompt(prompt, search_term, cursor_pos)
        for index, text in visible:
            self.draw_item(text, index == selected, highlight, search_term)
        self._terminal.flush()

    def body_rows(self) -> int:
        """Terminal rows the body of the last frame occupies."""
        columns = self._terminal.columns
        rows = self.height
        for text in self._drawn_items:
            rows += wrapped_rows(visible_width(text), ITEM_PREFIX_WIDTH, columns) - 1
        return rows

    def clear(self) -> None:
        """Erase the whole last frame, prompt included."""
        self._terminal.clear_last_lines(self.body_rows() + self.prompt_height)
        self.height = 0
        self.prompt_height = 0
        self._drawn_items = []

    def clear_preserve_prompt(self) -> None:
        """Erase the body of the last frame and leave the prompt rows alone."""
        self._terminal.clear_last_lines(self.body_rows())
        self.height = 0
        self._drawn_items = []
