"""Configuration for fuzzy-history.

Persistent data lives in ``~/.fuzzy_history`` (override with
``FUZZY_HISTORY_DIR``). Optional user settings are read from
``settings.json`` in that directory and folded into an immutable
:class:`SearchConfig` before a search session starts.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Literal

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "FUZZY_HISTORY_DIR"
DATA_DIR_NAME = ".fuzzy_history"
DB_FILE_NAME = "history.db"
SETTINGS_FILE_NAME = "settings.json"
LOG_FILE_NAME = "fuzzy_history.log"

ThemeName = Literal["colorful", "simple"]

DEFAULT_RESULT_LIMIT = 10


def get_data_dir(create: bool = True) -> Path:
    data_dir = Path(os.environ.get(DATA_DIR_ENV, Path.home() / DATA_DIR_NAME))
    if create:
        data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_db_path(create_dir: bool = True) -> Path:
    return get_data_dir(create_dir) / DB_FILE_NAME


def get_settings_path() -> Path:
    return get_data_dir(create=False) / SETTINGS_FILE_NAME


def get_log_path() -> Path:
    return get_data_dir() / LOG_FILE_NAME


@dataclass(frozen=True)
class SearchConfig:
    """Everything a search session needs, fixed before it starts."""

    prompt: str = ""
    initial_text: str = ""
    default_index: int | None = 0
    theme: ThemeName = "colorful"
    max_visible: int | None = None
    allow_quit: bool = True
    clear_on_exit: bool = True
    highlight_matches: bool = True
    result_limit: int = DEFAULT_RESULT_LIMIT
    directory_boost: float = 1.0

    def with_initial_text(self, text: str) -> SearchConfig:
        return replace(self, initial_text=text)


# camelCase keys in settings.json -> SearchConfig field names
_SETTINGS_KEYS: dict[str, str] = {
    "prompt": "prompt",
    "theme": "theme",
    "maxVisible": "max_visible",
    "highlightMatches": "highlight_matches",
    "clearOnExit": "clear_on_exit",
    "resultLimit": "result_limit",
    "directoryBoost": "directory_boost",
}

_THEMES = ("colorful", "simple")


def config_from_dict(data: dict[str, Any]) -> SearchConfig:
    """Build a :class:`SearchConfig` from a settings.json mapping.

    Unknown keys are ignored. Values of the wrong type are dropped with a
    warning so one bad entry does not discard the rest of the file.
    """
    values: dict[str, Any] = {}
    for key, field_name in _SETTINGS_KEYS.items():
        if key not in data or data[key] is None:
            continue
        value = data[key]
        if not _valid_setting(field_name, value):
            logger.warning("Ignoring invalid setting %s=%r", key, value)
            continue
        values[field_name] = value
    return SearchConfig(**values)


def _valid_setting(field_name: str, value: Any) -> bool:
    if field_name == "theme":
        return value in _THEMES
    if field_name == "prompt":
        return isinstance(value, str)
    if field_name in ("highlight_matches", "clear_on_exit"):
        return isinstance(value, bool)
    if field_name in ("max_visible", "result_limit"):
        return isinstance(value, int) and not isinstance(value, bool) and value > 0
    if field_name == "directory_boost":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return False


def load_config(path: Path | None = None) -> SearchConfig:
    settings_path = path or get_settings_path()
    if not settings_path.exists():
        return SearchConfig()
    try:
        data = json.loads(settings_path.read_text())
    except (OSError, ValueError) as e:
        logger.warning("Error reading settings %s: %s", settings_path, e)
        return SearchConfig()
    if not isinstance(data, dict):
        logger.warning("Settings file %s is not a JSON object", settings_path)
        return SearchConfig()
    return config_from_dict(data)

