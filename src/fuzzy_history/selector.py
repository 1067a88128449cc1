"""Selector state machine for the incremental history search.

Holds the query being edited, the ranked candidates for that query, the
selected row and the scroll position of the visible window, and applies one
key event at a time.

Invariants kept by every transition:

* ``selected_index`` is ``None`` exactly when ``candidates`` is empty,
  otherwise ``0 <= selected_index < len(candidates)``;
* the selected row is inside the viewport:
  ``viewport_start <= selected_index < viewport_start + viewport_height``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol, Union

from fuzzy_history.keys import KeyEvent, is_printable

logger = logging.getLogger(__name__)

# Default for whether deleting a character resets the selection and scroll
# position the way inserting one does. Otherwise the selection is kept,
# clamped to the refreshed list.
RESET_SELECTION_ON_EDIT = True


class SearchBackend(Protocol):
    """Ranked candidate source queried after every edit."""

    def query(self, text: str) -> list[str]: ...


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Confirmed:
    text: str


@dataclass(frozen=True)
class Cancelled:
    pass


Outcome = Union[Confirmed, Cancelled]


@dataclass
class Transition:
    """What applying one key did."""

    outcome: Outcome | None = None
    requeried: bool = False


# ---------------------------------------------------------------------------
# Edit buffer
# ---------------------------------------------------------------------------


@dataclass
class EditBuffer:
    """Single-line query text with a cursor measured in characters."""

    search_term: str = ""
    cursor_position: int = 0

    def __post_init__(self) -> None:
        self.cursor_position = max(0, min(self.cursor_position, len(self.search_term)))

    def insert(self, ch: str) -> None:
        pos = self.cursor_position
        self.search_term = self.search_term[:pos] + ch + self.search_term[pos:]
        self.cursor_position += len(ch)

    def delete_backward(self) -> bool:
        if self.cursor_position <= 0:
            return False
        pos = self.cursor_position
        self.search_term = self.search_term[: pos - 1] + self.search_term[pos:]
        self.cursor_position -= 1
        return True

    def move_left(self) -> bool:
        if self.cursor_position <= 0:
            return False
        self.cursor_position -= 1
        return True

    def move_right(self) -> bool:
        if self.cursor_position >= len(self.search_term):
            return False
        self.cursor_position += 1
        return True


def viewport_height_for(rows: int, max_visible: int | None = None) -> int:
    """Rows available for candidates: the terminal minus room for the prompt."""
    height = max(rows, 3) - 2
    if max_visible is not None:
        height = min(height, max_visible)
    return max(height, 1)


# ---------------------------------------------------------------------------
# Selector state
# ---------------------------------------------------------------------------


@dataclass
class SelectorState:
    backend: SearchBackend
    viewport_height: int
    edit_buffer: EditBuffer = field(default_factory=EditBuffer)
    allow_quit: bool = True
    reset_selection_on_delete: bool = RESET_SELECTION_ON_EDIT
    candidates: list[str] = field(default_factory=list)
    selected_index: int | None = None
    viewport_start: int = 0

    @classmethod
    def create(
        cls,
        backend: SearchBackend,
        viewport_height: int,
        initial_text: str = "",
        default_index: int | None = 0,
        allow_quit: bool = True,
        reset_selection_on_delete: bool = RESET_SELECTION_ON_EDIT,
    ) -> SelectorState:
        """Build the initial state: seed the query, run it, apply the default."""
        state = cls(
            backend=backend,
            viewport_height=max(viewport_height, 1),
            edit_buffer=EditBuffer(initial_text, len(initial_text)),
            allow_quit=allow_quit,
            reset_selection_on_delete=reset_selection_on_delete,
        )
        state.requery()
        if default_index is not None and state.candidates:
            state.select(min(max(default_index, 0), len(state.candidates) - 1))
        return state

    # -- queries -------------------------------------------------------------

    @property
    def search_term(self) -> str:
        return self.edit_buffer.search_term

    @property
    def cursor_position(self) -> int:
        return self.edit_buffer.cursor_position

    def visible(self) -> list[tuple[int, str]]:
        """The ``(index, candidate)`` pairs inside the viewport."""
        end = self.viewport_start + self.viewport_height
        return list(enumerate(self.candidates))[self.viewport_start : end]

    # -- mutations -----------------------------------------------------------

    def requery(self) -> None:
        self.candidates = list(self.backend.query(self.search_term))
        logger.debug(
            "Requery %r returned %d candidates", self.search_term, len(self.candidates)
        )

    def reset_selection(self) -> None:
        self.selected_index = 0 if self.candidates else None
        self.viewport_start = 0

    def select(self, index: int) -> None:
        """Select *index* and scroll just enough to keep it visible."""
        self.selected_index = index
        if index < self.viewport_start:
            self.viewport_start = index
        elif index >= self.viewport_start + self.viewport_height:
            self.viewport_start = index - self.viewport_height + 1

    def select_previous(self) -> None:
        count = len(self.candidates)
        sel = self.selected_index
        if sel is None or sel == 0:
            # Wrap to the last row and show the tail of the list.
            self.viewport_start = max(count, self.viewport_height) - self.viewport_height
            self.selected_index = count - 1
            return
        if sel == self.viewport_start:
            self.viewport_start -= 1
        self.selected_index = sel - 1

    def select_next(self) -> None:
        count = len(self.candidates)
        sel = self.selected_index
        self.selected_index = 0 if sel is None else (sel + 1) % count
        if self.selected_index == 0:
            self.viewport_start = 0
        elif self.selected_index == self.viewport_start + self.viewport_height:
            self.viewport_start += 1

    def apply(self, event: KeyEvent) -> Transition:
        """Apply one key event; see the module docstring for the invariants."""
        kind = event.kind

        if kind == "escape" and self.allow_quit:
            return Transition(outcome=Cancelled())

        if kind in ("up", "backtab") and self.candidates:
            self.select_previous()
            return Transition()

        if kind in ("down", "tab") and self.candidates:
            self.select_next()
            return Transition()

        if kind == "left":
            self.edit_buffer.move_left()
            return Transition()

        if kind == "right":
            self.edit_buffer.move_right()
            return Transition()

        if kind == "backspace":
            if not self.edit_buffer.delete_backward():
                return Transition()
            self.requery()
            if self.reset_selection_on_delete:
                self.reset_selection()
            else:
                self._clamp_selection()
            return Transition(requeried=True)

        if kind == "char" and is_printable(event.char):
            self.edit_buffer.insert(event.char)
            self.requery()
            self.reset_selection()
            return Transition(requeried=True)

        if kind == "enter" and self.selected_index is not None and self.candidates:
            return Transition(outcome=Confirmed(self.candidates[self.selected_index]))

        return Transition()

    def _clamp_selection(self) -> None:
        if not self.candidates:
            self.reset_selection()
        elif self.selected_index is None:
            self.select(0)
        else:
            self.select(min(self.selected_index, len(self.candidates) - 1))
