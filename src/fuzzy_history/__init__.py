"""fuzzy-history: incremental fuzzy search over shell command history."""

from fuzzy_history.config import SearchConfig, load_config
from fuzzy_history.errors import (
    FuzzyHistoryError,
    InvalidPayloadError,
    StorageUnavailableError,
)
from fuzzy_history.keys import KeyEvent, decode_key
from fuzzy_history.render import Renderer
from fuzzy_history.selector import (
    Cancelled,
    Confirmed,
    SearchBackend,
    SelectorState,
    Transition,
)
from fuzzy_history.session import SearchSession
from fuzzy_history.terminal import Terminal, TtyTerminal
from fuzzy_history.theme import ColorfulTheme, SimpleTheme, Theme, get_theme

__all__ = [
    # Config
    "SearchConfig",
    "load_config",
    # Errors
    "FuzzyHistoryError",
    "InvalidPayloadError",
    "StorageUnavailableError",
    # Keys
    "KeyEvent",
    "decode_key",
    # Selector
    "SearchBackend",
    "SelectorState",
    "Transition",
    "Confirmed",
    "Cancelled",
    # Rendering
    "Renderer",
    "Theme",
    "ColorfulTheme",
    "SimpleTheme",
    "get_theme",
    # Session
    "SearchSession",
    # Terminal
    "Terminal",
    "TtyTerminal",
]
