"""
Attach file locations to similarity matches and order the result set.

Each similarity match is looked up independently, so lookups may run on a
thread pool. The final sort runs once, after every lookup has finished.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Optional

from loguru import logger

from .models import MatchLocation, SimilarityMatch

LocationLookup = Callable[[str, str, Optional[str], int], list[MatchLocation]]


def sort_by_similarity(matches: Iterable[SimilarityMatch]) -> list[SimilarityMatch]:
    """Return matches ordered by descending similarity. Ties keep input order."""
    return sorted(matches, key=lambda match: match.similarity, reverse=True)


def _safe_lookup(
    lookup: LocationLookup,
    match: SimilarityMatch,
    base_path: str,
    glob: Optional[str],
    context_size: int,
) -> list[MatchLocation]:
    try:
        return list(lookup(match.match_text, base_path, glob, context_size))
    except Exception as e:
        logger.warning(
            "Location lookup failed, reporting match without locations | line={} error={}",
            match.line,
            e,
        )
        return []


def reconcile_matches(
    matches: Iterable[SimilarityMatch],
    lookup: LocationLookup,
    base_path: str,
    glob: Optional[str] = None,
    context_size: int = 2,
    max_workers: int = 1,
) -> list[SimilarityMatch]:
    """
    Look up exact locations for every match and sort the aggregate.

    Args:
        matches: Parsed similarity matches with ``locations`` unset
        lookup: Callable ``(text, base_path, glob, context_size)`` returning
            MatchLocation records. Exceptions are logged and turned into an
            empty location list.
        base_path: Directory the lookup searches and relativizes against
        glob: Optional file pattern forwarded to the lookup
        context_size: Lines of context forwarded to the lookup
        max_workers: Number of concurrent lookups (1 runs them inline)

    Returns:
        The same match objects, each with ``locations`` set, sorted by
        descending similarity (stable for ties)
    """
    match_list = list(matches)

    if max_workers > 1 and len(match_list) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            found = list(
                executor.map(
                    lambda match: _safe_lookup(lookup, match, base_path, glob, context_size),
                    match_list,
                )
            )
    else:
        found = [
            _safe_lookup(lookup, match, base_path, glob, context_size)
            for match in match_list
        ]

    for match, locations in zip(match_list, found):
        match.locations = locations

    logger.debug(
        "Reconciled {} match(es), {} location(s)",
        len(match_list),
        sum(len(locations) for locations in found),
    )
    return sort_by_similarity(match_list)
