"""History record type and parsing of ``add`` payloads."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass

from fuzzy_history.errors import InvalidPayloadError

# "<exit code>:<command>"; the command may itself contain ':' and newlines.
ADD_PAYLOAD_RE = re.compile(r"(?P<exit_code>\d+):(?P<command>.*)", re.DOTALL)


def now_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass
class CommandRecord:
    command: str
    directory: str
    exit_code: int = 0
    created_ms: int = 0
    times_selected: int = 0
    id: int | None = None


def parse_add_payload(
    payload: str,
    directory: str,
    created_ms: int | None = None,
    pattern: re.Pattern[str] = ADD_PAYLOAD_RE,
) -> CommandRecord:
    """Parse ``"<exit code>:<command>"`` into a record for *directory*.

    Raises :class:`InvalidPayloadError` when the payload does not match.
    """
    m = pattern.fullmatch(payload.strip())
    if m is None:
        raise InvalidPayloadError(payload)
    return CommandRecord(
        command=m.group("command"),
        directory=directory,
        exit_code=int(m.group("exit_code")),
        created_ms=now_ms() if created_ms is None else created_ms,
    )
