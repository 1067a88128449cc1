"""Tests for fuzzy_history.theme -- prompt and item formatting."""

from __future__ import annotations

import pytest

from fuzzy_history.theme import ColorfulTheme, SimpleTheme, get_theme
from fuzzy_history.utils import strip_ansi, visible_width


class TestSimpleTheme:
    def test_prompt_marks_cursor(self):
        theme = SimpleTheme()
        assert theme.format_prompt("", "git", 1) == "g|it"

    def test_prompt_with_label(self):
        assert SimpleTheme().format_prompt("history", "ls", 2) == "history: ls|"

    def test_items(self):
        theme = SimpleTheme()
        assert theme.format_item("ls", True, True, "l") == "> ls"
        assert theme.format_item("ls", False, True, "l") == "  ls"


class TestColorfulTheme:
    def test_item_prefix_width(self):
        theme = ColorfulTheme()
        for active in (True, False):
            line = theme.format_item("ls -la", active, False, "")
            assert visible_width(line) == 2 + len("ls -la")

    def test_item_text_survives_highlighting(self):
        line = ColorfulTheme().format_item("git status", True, True, "gi st")
        assert strip_ansi(line).endswith("git status")
        assert "\x1b[33m\x1b[1mg" in line

    def test_no_highlight_when_disabled(self):
        line = ColorfulTheme().format_item("git status", False, False, "git")
        assert line == "  git status"

    def test_cursor_inside_query(self):
        line = ColorfulTheme().format_prompt("", "abc", 1)
        assert "a\x1b[7mb\x1b[0mc" in line

    def test_cursor_at_end(self):
        line = ColorfulTheme().format_prompt("", "abc", 3)
        assert line.endswith("abc\x1b[7m \x1b[0m")


class TestGetTheme:
    def test_known_names(self):
        assert isinstance(get_theme("colorful"), ColorfulTheme)
        assert isinstance(get_theme("simple"), SimpleTheme)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown theme"):
            get_theme("neon")
