"""StdinBuffer buffers raw terminal input and emits complete sequences.

Reads from the tty can split an escape sequence across chunks (or deliver
several keys in one chunk). Without buffering, the tail of a partial
sequence would be misread as ordinary keypresses.
"""

from __future__ import annotations

import re
from typing import Literal

ESC = "\x1b"

SequenceStatus = Literal["complete", "incomplete", "not-escape"]

_SGR_MOUSE_RE = re.compile(r"^<\d+;\d+;\d+[Mm]$")


def is_complete_sequence(data: str) -> SequenceStatus:
    """Check if a string is a complete escape sequence or needs more data."""
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    after_esc = data[1:]

    # CSI sequences: ESC [
    if after_esc.startswith("["):
        if after_esc.startswith("[M"):
            return "complete" if len(data) >= 6 else "incomplete"
        return _is_complete_csi_sequence(data)

    # OSC, DCS and APC sequences end with ST (or BEL for OSC)
    if after_esc.startswith("]"):
        if data.endswith(f"{ESC}\\") or data.endswith("\x07"):
            return "complete"
        return "incomplete"
    if after_esc.startswith(("P", "_")):
        return "complete" if data.endswith(f"{ESC}\\") else "incomplete"

    # SS3 sequences: ESC O
    if after_esc.startswith("O"):
        return "complete" if len(after_esc) >= 2 else "incomplete"

    # Meta key sequences: ESC followed by a single character
    return "complete"


def _is_complete_csi_sequence(data: str) -> SequenceStatus:
    if len(data) < 3:
        return "incomplete"

    payload = data[2:]
    last_char = payload[-1]

    if 0x40 <= ord(last_char) <= 0x7E:
        if payload.startswith("<"):
            return "complete" if _SGR_MOUSE_RE.match(payload) else "incomplete"
        return "complete"

    return "incomplete"


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split accumulated input into complete sequences.

    Returns ``(sequences, remainder)`` where *remainder* is an escape
    sequence prefix still waiting for more input.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]

        if not remaining.startswith(ESC):
            sequences.append(remaining[0])
            pos += 1
            continue

        seq_end = 1
        while seq_end <= len(remaining):
            candidate = remaining[:seq_end]
            if is_complete_sequence(candidate) == "incomplete":
                seq_end += 1
                continue
            sequences.append(candidate)
            pos += seq_end
            break
        else:
            return sequences, remaining

    return sequences, ""


class StdinBuffer:
    """Accumulates raw input and hands out complete sequences one at a time."""

    def __init__(self) -> None:
        self._buffer: str = ""
        self._ready: list[str] = []

    def process(self, data: str) -> None:
        """Feed decoded input data into the buffer."""
        self._buffer += data
        sequences, self._buffer = split_sequences(self._buffer)
        self._ready.extend(sequences)

    def pop(self) -> str | None:
        """Return the next complete sequence, or ``None`` if none is ready."""
        if self._ready:
            return self._ready.pop(0)
        return None

    def flush(self) -> None:
        """Treat whatever partial sequence is buffered as complete.

        Called when no continuation arrived in time, so a lone ESC becomes
        the Escape key instead of waiting forever for a CSI body.
        """
        if self._buffer:
            self._ready.append(self._buffer)
            self._buffer = ""

    @property
    def pending(self) -> bool:
        """True while a partial escape sequence is buffered."""
        return bool(self._buffer)

    def clear(self) -> None:
        self._buffer = ""
        self._ready.clear()
