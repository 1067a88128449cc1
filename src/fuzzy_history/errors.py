"""Error types raised by fuzzy-history.

Cancelling a search is not an error and has no exception here; the session
reports it as a ``None`` result.
"""

from __future__ import annotations


class FuzzyHistoryError(Exception):
    """Base class for all fuzzy-history errors."""


class InvalidPayloadError(FuzzyHistoryError, ValueError):
    """An ``add`` payload did not match ``<exit code>:<command>``."""

    def __init__(self, payload: str) -> None:
        super().__init__(
            'the command doesn\'t match the pattern "<exit code>:<command>"'
        )
        self.payload = payload


class StorageUnavailableError(FuzzyHistoryError):
    """The history index could not be opened or queried."""
