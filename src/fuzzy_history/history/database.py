"""SQLite connection manager using aiosqlite."""

from __future__ import annotations

import sqlite3
from functools import lru_cache

import aiosqlite

from fuzzy_history.errors import StorageUnavailableError
from fuzzy_history.history.schema import SCHEMA_SQL
from fuzzy_history.matching import matches, tokenize


@lru_cache(maxsize=32)
def _query_tokens(query: str) -> tuple[str, ...]:
    return tuple(tokenize(query))


def _matches_query(query: str, value: str | None) -> bool:
    """SQL ``matches_query(query, value)``: tokens of *query* occur in order."""
    if value is None:
        return False
    return matches(value, list(_query_tokens(query)))


class Database:
    """Async SQLite connection manager."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._conn: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open database connection and ensure schema exists."""
        try:
            self._conn = await aiosqlite.connect(self._db_path)
            self._conn.row_factory = aiosqlite.Row
            await self._conn.create_function(
                "matches_query", 2, _matches_query, deterministic=True
            )
            await self._conn.executescript(SCHEMA_SQL)
            await self._conn.commit()
        except (sqlite3.Error, OSError) as e:
            await self.close()
            raise StorageUnavailableError(
                f"cannot open history index {self._db_path}: {e}"
            ) from e

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    @property
    def conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._conn
