"""Shell command execution for the external search tools."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Iterable

from fastmcp.exceptions import ToolError
from loguru import logger


class CommandFailed(ToolError):
    """A search command exited with an unexpected status or could not run."""

    def __init__(
        self,
        message: str,
        *,
        command: str,
        exit_code: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr


def escape_for_shell(text: str) -> str:
    """
    Escape ``text`` for embedding inside a double-quoted shell argument.

    Substitutions are applied in this order so later ones do not re-escape
    the backslashes inserted by earlier ones:
    ``\\`` -> ``\\\\``, ``"`` -> ``\\"``, ``$`` -> ``\\$``, backtick -> ``\\```.
    """
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("`", "\\`")
    )


def quote(text: str) -> str:
    """Wrap ``text`` in double quotes after escaping it."""
    return f'"{escape_for_shell(text)}"'


class CommandRunner:
    """Execute shell pipelines with timeout enforcement and exit code mapping."""

    def __init__(self, *, timeout_seconds: int) -> None:
        self._timeout_seconds = timeout_seconds

    def run(
        self,
        command: str,
        *,
        cwd: Path | None = None,
        no_match_codes: Iterable[int] = (),
    ) -> str | None:
        """
        Run ``command`` through the shell and return its stdout.

        Args:
            command: Shell command line (pipelines allowed)
            cwd: Working directory, defaults to the current one
            no_match_codes: Exit codes the tool uses to report "no matches"

        Returns:
            stdout on exit code 0, ``None`` for a "no matches" exit code

        Raises:
            CommandFailed: On any other exit code, on timeout, or when the
                command cannot be started
        """
        if not command or not command.strip():
            raise CommandFailed("Command cannot be empty", command=command)

        logger.debug("Running command | cwd={} command={}", cwd, command)

        try:
            result = subprocess.run(
                command,
                shell=True,
                cwd=str(cwd) if cwd is not None else None,
                capture_output=True,
                text=True,
                timeout=self._timeout_seconds,
                encoding="utf-8",
                errors="replace",
            )
        except subprocess.TimeoutExpired as exc:
            logger.warning(
                "Command timed out after {}s | command={}",
                self._timeout_seconds,
                command,
            )
            raise CommandFailed(
                f"Command timed out after {self._timeout_seconds} seconds: {command}",
                command=command,
            ) from exc
        except OSError as exc:
            raise CommandFailed(
                f"Failed to execute command: {exc}", command=command
            ) from exc

        if result.returncode == 0:
            return result.stdout or ""

        if result.returncode in set(no_match_codes):
            logger.debug("Command reported no matches | exit_code={}", result.returncode)
            return None

        stderr = (result.stderr or "").strip()
        raise CommandFailed(
            f"Command failed with exit code {result.returncode}: {stderr or command}",
            command=command,
            exit_code=result.returncode,
            stderr=stderr,
        )
