"""Tests for the fuzzy-history command line."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from fuzzy_history import cli
from fuzzy_history.keys import ARROW_DOWN, ENTER, ESCAPE

from .virtual_terminal import VirtualTerminal


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch, data_dir):
    path = tmp_path / "work"
    path.mkdir()
    monkeypatch.chdir(path)
    return path


class ScriptedTty(VirtualTerminal):
    """VirtualTerminal standing in for TtyTerminal in the search command."""

    def __init__(self, input_path: str, keys) -> None:
        super().__init__(keys)
        self.input_path = input_path
        self.started = False
        self.was_started = False

    def start(self) -> None:
        self.started = True
        self.was_started = True

    def stop(self) -> None:
        self.started = False


def _use_keys(monkeypatch, *keys) -> list[ScriptedTty]:
    terminals: list[ScriptedTty] = []

    def factory(input_path):
        terminal = ScriptedTty(input_path, keys)
        terminals.append(terminal)
        return terminal

    monkeypatch.setattr(cli, "TtyTerminal", factory)
    return terminals


# ---------------------------------------------------------------------------
# Usage
# ---------------------------------------------------------------------------


class TestUsage:
    def test_no_subcommand_prints_usage(self, runner, data_dir):
        result = runner.invoke(cli.main, [])
        assert result.exit_code == 0
        assert "Usage" in result.output
        assert "search" in result.output

    def test_unknown_subcommand_prints_usage(self, runner, data_dir):
        result = runner.invoke(cli.main, ["frobnicate"])
        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_import_is_a_no_op(self, runner, data_dir):
        result = runner.invoke(cli.main, ["import"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_log_level_from_environment(self, runner, data_dir):
        result = runner.invoke(cli.main, ["import"], env={cli.LOG_LEVEL_ENV: "debug"})
        assert result.exit_code == 0

    def test_bad_log_level(self, runner, data_dir):
        result = runner.invoke(cli.main, ["--log-level", "loud", "import"])
        assert result.exit_code != 0


# ---------------------------------------------------------------------------
# add / delete_index
# ---------------------------------------------------------------------------


class TestAdd:
    def test_add_then_search(self, runner, workdir, monkeypatch):
        assert runner.invoke(cli.main, ["add", "0:git status"]).exit_code == 0
        assert runner.invoke(cli.main, ["add", "1:ls -la"]).exit_code == 0

        _use_keys(monkeypatch, "g", ENTER)
        result = runner.invoke(cli.main, ["search", "/dev/pts/9"])
        assert result.exit_code == 0
        assert result.output == "git status\n"

    def test_invalid_payload(self, runner, workdir):
        result = runner.invoke(cli.main, ["add", "git status"])
        assert result.exit_code == 1
        assert (
            'Indexing failed, the command doesn\'t match the pattern "<exit code>:<command>"'
            in result.output
        )
        assert "Failed input: git status" in result.output

    def test_missing_payload(self, runner, workdir):
        result = runner.invoke(cli.main, ["add"])
        assert result.exit_code != 0


class TestDeleteIndex:
    def test_deletes_existing_index(self, runner, workdir, data_dir):
        runner.invoke(cli.main, ["add", "0:ls"])
        assert (data_dir / "history.db").exists()

        result = runner.invoke(cli.main, ["delete_index"])
        assert result.exit_code == 0
        assert "Deleted history index" in result.output
        assert not (data_dir / "history.db").exists()

    def test_nothing_to_delete(self, runner, workdir):
        result = runner.invoke(cli.main, ["delete_index"])
        assert result.exit_code == 0
        assert "No history index" in result.output


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------


class TestSearch:
    @pytest.fixture(autouse=True)
    def _history(self, runner, workdir):
        for payload in ("0:make build", "0:make test", "2:grep -r foo ."):
            runner.invoke(cli.main, ["add", payload])

    def test_confirmed_command_printed_once(self, runner, monkeypatch):
        terminals = _use_keys(monkeypatch, "m", "a", "k", "e", " ", "t", ENTER)
        result = runner.invoke(cli.main, ["search", "/dev/pts/3"])
        assert result.exit_code == 0
        assert result.output == "make test\n"
        assert terminals[0].input_path == "/dev/pts/3"
        assert terminals[0].was_started
        assert not terminals[0].started
        assert terminals[0].cursor_visible

    def test_initial_query_from_arguments(self, runner, monkeypatch):
        terminals = _use_keys(monkeypatch, ENTER)
        result = runner.invoke(cli.main, ["search", "/dev/tty", "grep", "foo"])
        assert result.output == "grep -r foo .\n"
        assert terminals[0].lines[0].endswith("grep foo\x1b[7m \x1b[0m")

    def test_navigation(self, runner, monkeypatch):
        _use_keys(monkeypatch, "m", "a", "k", "e", ARROW_DOWN, ENTER)
        result = runner.invoke(cli.main, ["search", "/dev/tty"])
        assert result.output in ("make build\n", "make test\n")

    def test_cancel_prints_nothing(self, runner, monkeypatch):
        _use_keys(monkeypatch, "m", ESCAPE)
        result = runner.invoke(cli.main, ["search", "/dev/tty"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_interrupt_exits_130(self, runner, monkeypatch):
        class Interrupting(ScriptedTty):
            def read_event(self):
                raise KeyboardInterrupt

        monkeypatch.setattr(cli, "TtyTerminal", lambda path: Interrupting(path, ()))
        result = runner.invoke(cli.main, ["search", "/dev/tty"])
        assert result.exit_code == 130
        assert result.output == ""

    def test_storage_failure(self, runner, monkeypatch, data_dir):
        _use_keys(monkeypatch, ENTER)
        (data_dir / "history.db").unlink()
        (data_dir / "history.db").mkdir()
        result = runner.invoke(cli.main, ["search", "/dev/tty"])
        assert result.exit_code == 1
        assert "Error:" in result.output
