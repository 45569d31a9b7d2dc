from pathlib import Path

import pytest
from fastmcp.exceptions import ToolError

from w2vgrep_mcp.commands import CommandFailed, CommandRunner, escape_for_shell, quote


class TestEscapeForShell:
    """Double-quoted shell argument escaping."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ('say "hi"', 'say \\"hi\\"'),
            ("a\\b", "a\\\\b"),
            ("$HOME", "\\$HOME"),
            ("`id`", "\\`id\\`"),
            ("plain", "plain"),
            ("", ""),
        ],
    )
    def test_single_substitutions(self, raw, expected):
        assert escape_for_shell(raw) == expected

    def test_all_four_compose(self):
        assert escape_for_shell('\\"$`') == '\\\\\\"\\$\\`'

    def test_backslash_escaped_first(self):
        """An existing backslash before a quote is doubled, then the quote is escaped."""
        assert escape_for_shell('\\"') == '\\\\\\"'

    def test_quote_wraps_in_double_quotes(self):
        assert quote('a "b"') == '"a \\"b\\""'


def test_command_runner_success(tmp_path: Path) -> None:
    runner = CommandRunner(timeout_seconds=5)

    assert runner.run("printf hello", cwd=tmp_path) == "hello"


def test_command_runner_pipeline(tmp_path: Path) -> None:
    runner = CommandRunner(timeout_seconds=5)

    assert runner.run("printf 'a\\nb\\n' | wc -l", cwd=tmp_path).strip() == "2"


def test_command_runner_no_match_code_returns_none(tmp_path: Path) -> None:
    runner = CommandRunner(timeout_seconds=5)

    assert runner.run("exit 1", cwd=tmp_path, no_match_codes={1}) is None


def test_command_runner_unexpected_exit_code(tmp_path: Path) -> None:
    runner = CommandRunner(timeout_seconds=5)

    with pytest.raises(CommandFailed, match="exit code 3") as exc_info:
        runner.run("echo boom >&2; exit 3", cwd=tmp_path, no_match_codes={1})

    assert exc_info.value.exit_code == 3
    assert exc_info.value.stderr == "boom"


def test_command_runner_times_out(tmp_path: Path) -> None:
    runner = CommandRunner(timeout_seconds=1)

    with pytest.raises(ToolError, match="timed out"):
        runner.run("exec sleep 5", cwd=tmp_path)


def test_command_runner_rejects_empty_command(tmp_path: Path) -> None:
    runner = CommandRunner(timeout_seconds=5)

    with pytest.raises(CommandFailed, match="empty"):
        runner.run("   ", cwd=tmp_path)
