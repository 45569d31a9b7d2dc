"""
Search result data models.

Defines SimilarityMatch, MatchLocation and SearchResponse.

## Lifecycle

- ``SimilarityMatch`` is built by the similarity parser with ``locations``
  left as ``None``. The reconciler assigns ``locations`` exactly once.
- ``MatchLocation`` is built by the location parser and never changes.
- ``SearchResponse`` is the record handed back to the agent.

``locations=None`` and ``locations=[]`` are different states: ``None`` means
the match was never enriched (single-file search), ``[]`` means enrichment ran
and found nothing. Only the enriched state is serialized.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class MatchLocation:
    """One concrete occurrence of matched text in a file."""

    file: str  # Relative to the search base directory
    line: int  # 1-based
    context: str  # Newline-joined content lines, prefixes stripped

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "line": self.line, "context": self.context}


@dataclass
class SimilarityMatch:
    """
    One scored result from the embedding search.

    Invariants:
    - ``line`` is the line number of ``context[len(context) // 2]``
    - ``similarity`` is stored as parsed, never clamped
    - ``context`` entries have the form ``"<lineNumber>: <content>"``
    """

    similarity: float
    line: int
    match_text: str
    context: list[str] = field(default_factory=list)
    locations: list[MatchLocation] | None = None

    @property
    def is_enriched(self) -> bool:
        return self.locations is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "similarity": self.similarity,
            "line": self.line,
            "match": self.match_text,
            "context": list(self.context),
        }
        if self.is_enriched:
            data["locations"] = [location.to_dict() for location in self.locations]
        return data


@dataclass
class SearchResponse:
    """Aggregate result returned by the ``semantic_search`` tool."""

    query: str
    matches: list[SimilarityMatch] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.matches)

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "total": self.total,
            "matches": [match.to_dict() for match in self.matches],
        }
