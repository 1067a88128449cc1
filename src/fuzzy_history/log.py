"""Logging setup.

stdout carries the selected command and stderr carries the interactive
display, so log records go to a file in the data directory instead.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fuzzy_history.config import get_log_path

LOG_LEVELS = ("debug", "info", "warning", "error")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "warning", path: Path | None = None) -> None:
    log_path = path or get_log_path()
    logging.basicConfig(
        filename=str(log_path),
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
    )
