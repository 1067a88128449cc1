"""Persistent command history: storage, ranking and the search backend."""

from fuzzy_history.history.backend import IndexBackend
from fuzzy_history.history.database import Database
from fuzzy_history.history.records import CommandRecord, parse_add_payload
from fuzzy_history.history.store import HistoryStore, delete_index

__all__ = [
    "CommandRecord",
    "Database",
    "HistoryStore",
    "IndexBackend",
    "delete_index",
    "parse_add_payload",
]
