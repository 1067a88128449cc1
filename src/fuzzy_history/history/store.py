"""Command history store: recording and searching commands in SQLite."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from fuzzy_history.config import DEFAULT_RESULT_LIMIT
from fuzzy_history.errors import StorageUnavailableError
from fuzzy_history.history.database import Database
from fuzzy_history.history.ranking import rank
from fuzzy_history.history.records import CommandRecord, now_ms
from fuzzy_history.matching import tokenize

logger = logging.getLogger(__name__)


def _row_to_record(row) -> CommandRecord:
    return CommandRecord(
        id=row["id"],
        created_ms=row["created_ms"],
        times_selected=row["times_selected"],
        exit_code=row["exit_code"],
        directory=row["directory"],
        command=row["command"],
    )


class HistoryStore:
    """Reads and writes command records."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def add(self, record: CommandRecord) -> int:
        """Store *record* and return its row id."""
        try:
            cursor = await self._db.conn.execute(
                """INSERT INTO commands
                   (created_ms, times_selected, exit_code, directory, command)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    record.created_ms,
                    record.times_selected,
                    record.exit_code,
                    record.directory,
                    record.command,
                ),
            )
            await self._db.conn.commit()
        except sqlite3.Error as e:
            raise StorageUnavailableError(f"cannot write history index: {e}") from e
        record.id = cursor.lastrowid
        logger.debug("Indexed %r (exit %d) in %s", record.command, record.exit_code, record.directory)
        return record.id

    async def matching(self, text: str) -> list[CommandRecord]:
        """All records containing the query tokens in order."""
        try:
            if tokenize(text):
                cursor = await self._db.conn.execute(
                    "SELECT * FROM commands WHERE matches_query(?, command)",
                    (text,),
                )
            else:
                cursor = await self._db.conn.execute("SELECT * FROM commands")
            rows = await cursor.fetchall()
        except sqlite3.Error as e:
            raise StorageUnavailableError(f"cannot query history index: {e}") from e
        return [_row_to_record(row) for row in rows]

    async def search(
        self,
        text: str,
        cwd: str,
        *,
        now: int | None = None,
        limit: int = DEFAULT_RESULT_LIMIT,
        directory_boost: float = 1.0,
    ) -> list[str]:
        """Ranked command texts matching *text*, best first, at most *limit*."""
        records = await self.matching(text)
        ranked = rank(
            records,
            tokenize(text),
            cwd,
            now_ms() if now is None else now,
            limit,
            directory_boost,
        )
        return [item.record.command for item in ranked]

    async def count(self) -> int:
        try:
            cursor = await self._db.conn.execute("SELECT COUNT(*) FROM commands")
            row = await cursor.fetchone()
        except sqlite3.Error as e:
            raise StorageUnavailableError(f"cannot count history index: {e}") from e
        return row[0] if row else 0


def delete_index(db_path: Path) -> bool:
    """Remove the history database. Returns ``False`` if there was none."""
    removed = False
    for path in (db_path, db_path.with_name(db_path.name + "-journal")):
        if path.exists():
            path.unlink()
            removed = True
    return removed
