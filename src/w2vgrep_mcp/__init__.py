"""w2vgrep MCP Server - semantic text search over w2vgrep and ripgrep."""

__version__ = "0.1.0"

from .models import MatchLocation, SearchResponse, SimilarityMatch
from .parsing import parse_location_output, parse_similarity_output, strip_ansi
from .reconcile import reconcile_matches, sort_by_similarity

__all__ = [
    "MatchLocation",
    "SearchResponse",
    "SimilarityMatch",
    "parse_location_output",
    "parse_similarity_output",
    "reconcile_matches",
    "sort_by_similarity",
    "strip_ansi",
    "__version__",
]
