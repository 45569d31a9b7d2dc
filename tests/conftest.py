"""Pytest fixtures and test utilities for the w2vgrep MCP test suite."""

from typing import Optional

import pytest

from w2vgrep_mcp.commands import CommandFailed
from w2vgrep_mcp.config import ToolSettings


# ============================================================================
# CANNED TOOL OUTPUT
# ============================================================================

W2VGREP_OUTPUT = (
    "Similarity: 0.5242\n"
    "24: ```bash\n"
    "25: # Russian (default)\n"
    "26: ~/bin/w2vgrep -t 0.5 \"тревога\" file.txt\n"
    "27:\n"
    "28: # English (explicit model path)\n"
    "--\n"
    "Similarity: 1.0000\n"
    "59: ```bash\n"
    "60: # Russian text\n"
    "61: ~/bin/w2vgrep -t 0.5 -n \"страх\" notes.md\n"
)

RG_OUTPUT = (
    "/notes/a.md-9-before\n"
    "/notes/a.md:10:# Russian text\n"
    "/notes/a.md-11-after\n"
    "--\n"
    "/notes/sub/b.md:3:# Russian text\n"
)


@pytest.fixture
def w2vgrep_output() -> str:
    return W2VGREP_OUTPUT


@pytest.fixture
def rg_output() -> str:
    return RG_OUTPUT


# ============================================================================
# SETTINGS AND FAKE RUNNER
# ============================================================================


@pytest.fixture
def tool_settings() -> ToolSettings:
    return ToolSettings(
        w2vgrep_path="w2vgrep",
        rg_path="rg",
        default_glob="*.md",
        default_context=2,
        command_timeout=5,
        lookup_workers=1,
    )


class FakeRunner:
    """
    Stand-in for CommandRunner that answers by command prefix.

    ``responses`` maps a command prefix to stdout text, ``None`` (no matches)
    or an exception instance to raise. Every command is recorded.
    """

    def __init__(self, responses: Optional[dict] = None) -> None:
        self.responses = responses or {}
        self.commands: list[str] = []

    def run(self, command, *, cwd=None, no_match_codes=()):
        self.commands.append(command)
        for prefix, response in self.responses.items():
            if command.startswith(prefix):
                if isinstance(response, Exception):
                    raise response
                return response
        raise CommandFailed("unexpected command", command=command, exit_code=2)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_runner():
    """Factory for FakeRunner instances with canned responses."""
    return FakeRunner
