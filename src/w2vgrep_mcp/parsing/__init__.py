"""Parsers for w2vgrep and ripgrep text output."""
from .ansi import strip_ansi
from .locations import parse_location_output
from .similarity import parse_similarity_output

__all__ = [
    "parse_location_output",
    "parse_similarity_output",
    "strip_ansi",
]
