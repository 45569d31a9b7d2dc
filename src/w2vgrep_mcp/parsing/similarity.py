"""
Parser for w2vgrep output.

w2vgrep prints one block per match, blocks separated by a ``--`` line::

    Similarity: 0.5242
    24: line content here
    25: another line
    --
    Similarity: 1.0000
    59: next match line

Match words are highlighted with ANSI codes, so the output is normalized with
:func:`strip_ansi` before parsing. Once the highlighting is gone the only
signal left for "which line matched" is its position: w2vgrep centers the
match in a symmetric context window, so the entry at ``len(context) // 2`` is
taken as the match. For even counts this picks the later of the two central
entries by index, i.e. ``[10, 11, 12, 13]`` selects line 12.
"""

import re

from ..models import SimilarityMatch
from .ansi import strip_ansi

BLOCK_DELIMITER = re.compile(r"^--\r?$", re.MULTILINE)
HEADER_PATTERN = re.compile(r"^Similarity:\s*(\d+(?:\.\d*)?|\.\d+)\s*$")
NUMBERED_LINE_PATTERN = re.compile(r"^(\d+):\s*(.*)$")


def parse_similarity_output(output: str) -> list[SimilarityMatch]:
    """
    Parse raw w2vgrep output into SimilarityMatch records.

    Blocks without a ``Similarity:`` header are dropped, as are lines inside a
    block that do not look like ``<number>: <content>``. Nothing here raises on
    malformed input.

    Args:
        output: Raw stdout of w2vgrep, with or without ANSI codes

    Returns:
        One SimilarityMatch per valid block, in input order, with
        ``locations`` unset
    """
    matches: list[SimilarityMatch] = []
    cleaned = strip_ansi(output)

    for block in BLOCK_DELIMITER.split(cleaned):
        match = _parse_block(block)
        if match is not None:
            matches.append(match)

    return matches


def _parse_block(block: str) -> SimilarityMatch | None:
    lines = [line.rstrip("\r") for line in block.strip().split("\n")]
    if not lines:
        return None

    header = HEADER_PATTERN.match(lines[0].strip())
    if not header:
        return None

    similarity = float(header.group(1))
    numbered: list[tuple[int, str]] = []

    for line in lines[1:]:
        line_match = NUMBERED_LINE_PATTERN.match(line)
        if line_match:
            numbered.append((int(line_match.group(1)), line_match.group(2)))

    # Header with no numbered lines: degenerate record rather than an error
    match_line, match_text = 0, ""
    if numbered:
        match_line, match_text = numbered[len(numbered) // 2]

    return SimilarityMatch(
        similarity=similarity,
        line=match_line,
        match_text=match_text,
        context=[f"{number}: {content}" for number, content in numbered],
    )
