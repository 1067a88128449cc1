"""Terminal abstraction for the interactive search.

Provides a ``Terminal`` protocol and a concrete ``TtyTerminal`` that reads
keys from a tty device (the shell widget passes its own tty path) and draws
on stderr, leaving stdout free for the selected command.
"""

from __future__ import annotations

import codecs
import os
import select
import sys
import termios
import tty
from typing import Protocol, TextIO

from fuzzy_history.keys import KeyEvent, decode_key
from fuzzy_history.stdin_buffer import StdinBuffer

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_LINE = "\x1b[2K"
_CURSOR_UP_FMT = "\x1b[{}A"
_CURSOR_DOWN_FMT = "\x1b[{}B"

DEFAULT_TTY_PATH = "/dev/tty"

# Time to wait for the rest of an escape sequence before treating a lone
# ESC as the Escape key.
ESCAPE_TIMEOUT = 0.01

_CTRL_C = "\x03"


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for the terminal operations the search session needs."""

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def write(self, data: str) -> None: ...

    def write_line(self, data: str) -> None: ...

    def flush(self) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def clear_last_lines(self, count: int) -> None: ...

    def read_event(self) -> KeyEvent: ...


# ---------------------------------------------------------------------------
# TtyTerminal implementation
# ---------------------------------------------------------------------------


class TtyTerminal:
    """Terminal backed by a tty device for input and a text stream for output.

    ``start()`` opens the input device and switches it to raw mode;
    ``stop()`` restores the saved attributes. All output is buffered until
    ``flush()`` so a frame reaches the screen in one write.
    """

    def __init__(
        self,
        input_path: str = DEFAULT_TTY_PATH,
        output: TextIO | None = None,
    ) -> None:
        self._input_path = input_path or DEFAULT_TTY_PATH
        self._output = output if output is not None else sys.stderr
        self._fd: int | None = None
        self._original_termios: list | None = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._stdin_buffer = StdinBuffer()
        self._pending: list[str] = []

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        return self._size().columns

    @property
    def rows(self) -> int:
        return self._size().lines

    def _size(self) -> os.terminal_size:
        for fd in (self._output_fd(), self._fd):
            if fd is None:
                continue
            try:
                return os.get_terminal_size(fd)
            except (ValueError, OSError):
                continue
        return os.terminal_size((80, 24))

    def _output_fd(self) -> int | None:
        try:
            return self._output.fileno()
        except (AttributeError, ValueError, OSError):
            return None

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Open the input device and enable raw mode."""
        self._fd = os.open(self._input_path, os.O_RDONLY)
        try:
            self._original_termios = termios.tcgetattr(self._fd)
            tty.setraw(self._fd)
        except termios.error:
            # Not a tty (e.g. a pipe); read it as-is.
            self._original_termios = None

    def stop(self) -> None:
        """Restore terminal attributes and close the input device."""
        if self._fd is None:
            return
        try:
            if self._original_termios is not None:
                termios.tcsetattr(self._fd, termios.TCSADRAIN, self._original_termios)
        finally:
            self._original_termios = None
            os.close(self._fd)
            self._fd = None
            self._stdin_buffer.clear()

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        self._pending.append(data)

    def write_line(self, data: str) -> None:
        # Raw mode disables output post-processing, so emit CR explicitly.
        self._pending.append(data + "\r\n")

    def flush(self) -> None:
        if not self._pending:
            return
        data = "".join(self._pending)
        self._pending.clear()
        self._output.write(data)
        self._output.flush()

    def hide_cursor(self) -> None:
        self.write(_HIDE_CURSOR)
        self.flush()

    def show_cursor(self) -> None:
        self.write(_SHOW_CURSOR)
        self.flush()

    def clear_last_lines(self, count: int) -> None:
        """Erase the *count* lines above the cursor and move back up to them."""
        if count <= 0:
            return
        parts = [_CURSOR_UP_FMT.format(count), "\r"]
        for i in range(count):
            parts.append(_CLEAR_LINE)
            if i < count - 1:
                parts.append(_CURSOR_DOWN_FMT.format(1))
        if count > 1:
            parts.append(_CURSOR_UP_FMT.format(count - 1))
        self.write("".join(parts))

    # -- input --------------------------------------------------------------

    def read_event(self) -> KeyEvent:
        """Block until one key event is available and return it.

        Ctrl+C raises :class:`KeyboardInterrupt`, since raw mode stops the
        terminal from turning it into SIGINT.
        """
        if self._fd is None:
            raise RuntimeError("Terminal not started. Call start() first.")

        while True:
            sequence = self._stdin_buffer.pop()
            if sequence is not None:
                if sequence == _CTRL_C:
                    raise KeyboardInterrupt
                return decode_key(sequence)

            if self._stdin_buffer.pending and not self._wait_readable(ESCAPE_TIMEOUT):
                self._stdin_buffer.flush()
                continue

            raw = os.read(self._fd, 4096)
            if not raw:
                raise EOFError(f"terminal input {self._input_path} closed")
            self._stdin_buffer.process(self._decoder.decode(raw))

    def _wait_readable(self, timeout: float) -> bool:
        readable, _, _ = select.select([self._fd], [], [], timeout)
        return bool(readable)
