"""Synchronous search backend over the async history store.

The selector queries after every keystroke and waits for the answer, so
the backend runs store coroutines to completion on a private event loop
it owns for the length of one search.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from fuzzy_history.config import DEFAULT_RESULT_LIMIT
from fuzzy_history.history.database import Database
from fuzzy_history.history.records import now_ms
from fuzzy_history.history.store import HistoryStore

logger = logging.getLogger(__name__)


class IndexBackend:
    """Ranked history lookups for one working directory."""

    def __init__(
        self,
        db_path: Path,
        cwd: str,
        limit: int = DEFAULT_RESULT_LIMIT,
        directory_boost: float = 1.0,
    ) -> None:
        self._db = Database(str(db_path))
        self._store = HistoryStore(self._db)
        self._cwd = cwd
        self._limit = limit
        self._directory_boost = directory_boost
        self._loop: asyncio.AbstractEventLoop | None = None

    def open(self) -> None:
        self._loop = asyncio.new_event_loop()
        try:
            self._loop.run_until_complete(self._db.connect())
        except BaseException:
            self._loop.close()
            self._loop = None
            raise

    def close(self) -> None:
        if self._loop is None:
            return
        try:
            self._loop.run_until_complete(self._db.close())
        finally:
            self._loop.close()
            self._loop = None

    def __enter__(self) -> IndexBackend:
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def query(self, text: str) -> list[str]:
        """At most ``limit`` commands matching *text*, best first."""
        if self._loop is None:
            raise RuntimeError("Backend not open. Call open() first.")
        results = self._loop.run_until_complete(
            self._store.search(
                text,
                self._cwd,
                now=now_ms(),
                limit=self._limit,
                directory_boost=self._directory_boost,
            )
        )
        logger.debug("Query %r in %s: %d results", text, self._cwd, len(results))
        return results
