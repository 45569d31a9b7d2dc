"""
Parser for ripgrep ``-n -C <n>`` output.

ripgrep marks matching lines and context lines with different separators
around the line number::

    /path/file.md-10-line before
    /path/file.md:11:matched line
    /path/file.md-12-line after
    --
    /path/other.md:3:matched again

The match pattern is tried before the context pattern on every line so that
the tie-break is fixed when both could apply.
"""

import re

from ..models import MatchLocation
from ..paths import relative_path

BLOCK_SEPARATOR = "\n--\n"
MATCH_LINE_PATTERN = re.compile(r"^(.+?):(\d+):(.*)$")
CONTEXT_LINE_PATTERN = re.compile(r"^(.+?)-(\d+)-(.*)$")


def parse_location_output(output: str, base_path: str) -> list[MatchLocation]:
    """
    Parse ripgrep output into MatchLocation records.

    Args:
        output: Raw stdout of ``rg -n -C <n>``
        base_path: Directory that reported file paths are made relative to

    Returns:
        One MatchLocation per block that contains a match line, in input order.
        Context-only blocks are dropped.
    """
    locations: list[MatchLocation] = []

    for block in output.strip().split(BLOCK_SEPARATOR):
        if not block.strip():
            continue
        location = _parse_block(block, base_path)
        if location is not None:
            locations.append(location)

    return locations


def _parse_block(block: str, base_path: str) -> MatchLocation | None:
    context_lines: list[tuple[int, str]] = []
    match_file = ""
    match_line = 0

    for line in block.split("\n"):
        if not line:
            continue

        match_result = MATCH_LINE_PATTERN.match(line)
        if match_result:
            match_file = relative_path(match_result.group(1), base_path)
            match_line = int(match_result.group(2))
            context_lines.append((match_line, match_result.group(3)))
            continue

        context_result = CONTEXT_LINE_PATTERN.match(line)
        if context_result:
            context_lines.append((int(context_result.group(2)), context_result.group(3)))

    if not match_file or match_line <= 0:
        return None

    context_lines.sort(key=lambda entry: entry[0])
    return MatchLocation(
        file=match_file,
        line=match_line,
        context="\n".join(text for _, text in context_lines),
    )
