"""Tests for fuzzy_history.render -- drawing frames and clearing exactly them.

Uses the VirtualTerminal to record what was written and how many lines
each clear erased.
"""

from __future__ import annotations

from fuzzy_history.render import Renderer
from fuzzy_history.theme import SimpleTheme

from .virtual_terminal import VirtualTerminal


def _renderer(columns: int = 80) -> tuple[Renderer, VirtualTerminal]:
    terminal = VirtualTerminal(columns=columns)
    return Renderer(terminal, SimpleTheme()), terminal


def _frame(renderer: Renderer, items: list[str], selected: int | None = 0) -> None:
    renderer.draw_frame("", "q", 1, list(enumerate(items)), selected, False)


# ---------------------------------------------------------------------------
# Drawing
# ---------------------------------------------------------------------------


class TestDrawFrame:
    def test_prompt_then_items(self):
        renderer, terminal = _renderer()
        _frame(renderer, ["ls", "pwd"], selected=1)
        assert terminal.lines == ["q|", "  ls", "> pwd"]

    def test_heights(self):
        renderer, _ = _renderer()
        _frame(renderer, ["a", "b", "c"])
        assert renderer.prompt_height == 1
        assert renderer.height == 3

    def test_frame_is_flushed(self):
        renderer, terminal = _renderer()
        _frame(renderer, ["ls"])
        assert terminal.unflushed == ""
        assert "> ls" in terminal.output

    def test_multiline_command_drawn_on_one_line(self):
        renderer, terminal = _renderer()
        _frame(renderer, ["for x in y\ndo echo\ndone"])
        assert terminal.lines[1] == "> for x in y do echo done"

    def test_control_characters_drawn_as_spaces(self):
        renderer, terminal = _renderer()
        _frame(renderer, ["echo \x1b[31mred\x07\x9b"])
        assert terminal.lines[1] == "> echo  [31mred  "


# ---------------------------------------------------------------------------
# Clearing
# ---------------------------------------------------------------------------


class TestClear:
    def test_clear_erases_prompt_and_items(self):
        renderer, terminal = _renderer()
        _frame(renderer, ["a", "b"])
        renderer.clear()
        assert terminal.cleared == [3]
        assert renderer.height == 0
        assert renderer.prompt_height == 0

    def test_clear_preserve_prompt_erases_items_only(self):
        renderer, terminal = _renderer()
        _frame(renderer, ["a", "b"])
        renderer.clear_preserve_prompt()
        assert terminal.cleared == [2]
        assert renderer.prompt_height == 1

    def test_wrapped_item_counts_extra_rows(self):
        renderer, terminal = _renderer(columns=20)
        # 30 chars + 2 prefix over 20 columns takes 2 rows
        _frame(renderer, ["x" * 30, "short"])
        renderer.clear_preserve_prompt()
        assert terminal.cleared == [3]

    def test_tabbed_item_is_measured_as_drawn(self):
        renderer, terminal = _renderer(columns=80)
        _frame(renderer, ["\t" * 10 + "x"])
        assert terminal.lines[1] == "> " + " " * 10 + "x"
        renderer.clear_preserve_prompt()
        assert terminal.cleared == [1]

    def test_tabs_counted_toward_wrapping(self):
        renderer, terminal = _renderer(columns=20)
        # 19 columns once tabs and the newline become spaces, plus the prefix
        _frame(renderer, ["\tif true; then\n\t\tls"])
        renderer.clear_preserve_prompt()
        assert terminal.cleared == [2]

    def test_item_exactly_filling_row_does_not_wrap(self):
        renderer, terminal = _renderer(columns=20)
        _frame(renderer, ["x" * 18])
        renderer.clear_preserve_prompt()
        assert terminal.cleared == [1]

    def test_only_previous_frame_is_counted(self):
        renderer, terminal = _renderer(columns=20)
        _frame(renderer, ["x" * 50])
        renderer.clear()
        _frame(renderer, ["ls"])
        renderer.clear()
        assert terminal.cleared == [1 + 3, 1 + 1]

    def test_wrapped_prompt(self):
        renderer, terminal = _renderer(columns=10)
        renderer.draw_frame("", "y" * 25, 25, [], None, False)
        # 26 columns including the cursor marker take 3 rows
        assert renderer.prompt_height == 3
        renderer.clear()
        assert terminal.cleared == [3]

    def test_clear_with_nothing_drawn(self):
        renderer, terminal = _renderer()
        renderer.clear()
        assert terminal.cleared == [0]

    def test_empty_candidate_list(self):
        renderer, terminal = _renderer()
        _frame(renderer, [], selected=None)
        renderer.clear_preserve_prompt()
        renderer.clear()
        assert terminal.cleared == [0, 1]
