"""ANSI escape code removal."""

import re

# SGR sequences only: ESC [ <digits and semicolons> m
ANSI_SGR_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """
    Remove terminal color/format escape sequences from ``text``.

    Only SGR sequences (``ESC[...m``) are removed. Every other character,
    including non-Latin scripts, is left untouched.

    Examples:
        >>> strip_ansi("\\x1b[31mred\\x1b[0m")
        'red'
        >>> strip_ansi("plain")
        'plain'
    """
    return ANSI_SGR_PATTERN.sub("", text)
