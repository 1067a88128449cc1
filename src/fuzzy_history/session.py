"""The interactive search loop.

One ``SearchSession`` owns the terminal for the duration of a search:
draw a frame, block for a key, apply it, requery if the query changed,
erase the frame and go round again until the user confirms or cancels.
"""

from __future__ import annotations

import logging

from fuzzy_history.config import SearchConfig
from fuzzy_history.render import Renderer
from fuzzy_history.selector import (
    Cancelled,
    Confirmed,
    SearchBackend,
    SelectorState,
    viewport_height_for,
)
from fuzzy_history.terminal import Terminal
from fuzzy_history.theme import get_theme

logger = logging.getLogger(__name__)


class SearchSession:
    """Runs a single incremental search against *backend* on *terminal*."""

    def __init__(
        self,
        config: SearchConfig,
        terminal: Terminal,
        backend: SearchBackend,
    ) -> None:
        self._config = config
        self._terminal = terminal
        self._backend = backend
        self._renderer = Renderer(terminal, get_theme(config.theme))
        self.state: SelectorState | None = None

    def run(self) -> str | None:
        """Run until a terminal outcome.

        Returns the confirmed command, or ``None`` if the search was
        cancelled. Terminal and storage errors propagate; the cursor is
        made visible again on every way out.
        """
        config = self._config
        self._terminal.hide_cursor()
        try:
            state = SelectorState.create(
                self._backend,
                viewport_height_for(self._terminal.rows, config.max_visible),
                initial_text=config.initial_text,
                default_index=config.default_index,
                allow_quit=config.allow_quit,
            )
            self.state = state
            return self._loop(state)
        finally:
            self._terminal.show_cursor()

    def _loop(self, state: SelectorState) -> str | None:
        config = self._config
        renderer = self._renderer

        while True:
            renderer.clear()
            renderer.draw_frame(
                config.prompt,
                state.search_term,
                state.cursor_position,
                state.visible(),
                state.selected_index,
                config.highlight_matches,
            )

            transition = state.apply(self._terminal.read_event())
            outcome = transition.outcome

            if outcome is not None:
                if config.clear_on_exit:
                    renderer.clear()
                    self._terminal.flush()
                if isinstance(outcome, Confirmed):
                    logger.info("Search confirmed %r", outcome.text)
                    return outcome.text
                if isinstance(outcome, Cancelled):
                    logger.info("Search cancelled")
                    return None

            renderer.clear_preserve_prompt()
