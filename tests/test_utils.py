"""Tests for fuzzy_history.utils -- width measurement and row wrapping."""

from __future__ import annotations

from fuzzy_history.utils import strip_ansi, visible_width, wrapped_rows


class TestVisibleWidth:
    def test_ascii(self):
        assert visible_width("git status") == 10

    def test_empty(self):
        assert visible_width("") == 0

    def test_ansi_codes_are_ignored(self):
        assert visible_width("\x1b[36mls -la\x1b[0m") == 6

    def test_wide_characters(self):
        assert visible_width("日本") == 4

    def test_combining_mark(self):
        assert visible_width("é") == 1

    def test_tab_counts_three(self):
        assert visible_width("a\tb") == 5

    def test_strip_ansi(self):
        assert strip_ansi("\x1b[1mbold\x1b[0m") == "bold"


class TestWrappedRows:
    def test_fits_on_one_row(self):
        assert wrapped_rows(10, 2, 80) == 1

    def test_exactly_full_row(self):
        assert wrapped_rows(78, 2, 80) == 1

    def test_one_column_over(self):
        assert wrapped_rows(79, 2, 80) == 2

    def test_long_item(self):
        # 200 + 2 columns over 80 -> ceil(202 / 80)
        assert wrapped_rows(200, 2, 80) == 3

    def test_unknown_width_terminal(self):
        assert wrapped_rows(500, 2, 0) == 1
