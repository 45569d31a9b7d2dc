"""
Semantic search service.

Runs w2vgrep (single file, or every file matching a glob under a directory),
parses its output, and for recursive searches enriches each match with exact
file locations found by ripgrep.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastmcp.exceptions import ToolError
from loguru import logger

from .commands import CommandFailed, CommandRunner, quote
from .config import ToolSettings
from .models import MatchLocation, SearchResponse, SimilarityMatch
from .parsing import parse_location_output, parse_similarity_output
from .paths import expand_tilde
from .reconcile import reconcile_matches, sort_by_similarity

# w2vgrep exits 1 when nothing matched; xargs turns that into 123
W2VGREP_NO_MATCH_CODES = frozenset({1})
PIPELINE_NO_MATCH_CODES = frozenset({1, 123})
RG_NO_MATCH_CODES = frozenset({1})


@dataclass
class SearchParams:
    """Arguments of the ``semantic_search`` tool."""

    query: str
    path: str
    model_path: str
    threshold: Optional[float] = None
    recursive: bool = False
    glob: Optional[str] = None
    context: Optional[int] = None
    ignore_case: bool = False

    def validate(self) -> None:
        if not self.query or not self.query.strip():
            raise ToolError("query cannot be empty")
        if not self.path or not self.path.strip():
            raise ToolError("path cannot be empty")
        if not self.model_path or not self.model_path.strip():
            raise ToolError("model_path cannot be empty")
        if self.context is not None and self.context < 0:
            raise ToolError(f"context must be >= 0, got {self.context}")


def build_w2vgrep_args(params: SearchParams, model_path: str, context_lines: int) -> list[str]:
    """Build the w2vgrep argument list (already shell-quoted where needed)."""
    args = ["-m", quote(model_path)]

    if params.threshold is not None:
        args.extend(["-t", str(params.threshold)])

    args.append("-n")
    args.extend(["-C", str(context_lines)])

    if params.ignore_case:
        args.append("-i")

    args.append(quote(params.query))
    return args


class SemanticSearchService:
    """Orchestrates w2vgrep and ripgrep for the ``semantic_search`` tool."""

    def __init__(self, settings: ToolSettings, runner: CommandRunner | None = None) -> None:
        self._settings = settings
        self._runner = runner or CommandRunner(timeout_seconds=settings.command_timeout)

    @property
    def settings(self) -> ToolSettings:
        return self._settings

    def search(self, params: SearchParams) -> SearchResponse:
        """
        Execute a semantic search.

        Single-file searches return parsed matches without locations.
        Recursive searches concatenate every file matching the glob, feed the
        result to w2vgrep, then look up each matched line with ripgrep.

        Raises:
            ToolError: On invalid parameters or when w2vgrep fails
        """
        params.validate()

        model_path = expand_tilde(params.model_path)
        search_path = expand_tilde(params.path)
        context_lines = (
            params.context if params.context is not None else self._settings.default_context
        )
        args = build_w2vgrep_args(params, model_path, context_lines)

        logger.info(
            "Semantic search | query={!r} path={} recursive={}",
            params.query,
            search_path,
            params.recursive,
        )

        matches: list[SimilarityMatch] = []
        if params.recursive:
            pattern = params.glob or self._settings.default_glob
            output = self.run_w2vgrep_recursive(args, search_path, pattern)
            if output:
                matches = reconcile_matches(
                    parse_similarity_output(output),
                    self.find_match_locations,
                    search_path,
                    pattern,
                    context_lines,
                    max_workers=self._settings.lookup_workers,
                )
        else:
            output = self.run_w2vgrep(args, search_path)
            if output:
                matches = sort_by_similarity(parse_similarity_output(output))

        logger.info("Semantic search finished | query={!r} total={}", params.query, len(matches))
        return SearchResponse(query=params.query, matches=matches)

    def run_w2vgrep(self, args: list[str], file_path: str) -> str | None:
        command = f"{self._settings.w2vgrep_path} {' '.join(args)} {quote(file_path)}"
        return self._runner.run(command, no_match_codes=W2VGREP_NO_MATCH_CODES)

    def run_w2vgrep_recursive(self, args: list[str], dir_path: str, pattern: str) -> str | None:
        # w2vgrep reads a single file, so the matching files are piped in on stdin
        command = (
            f"find {quote(dir_path)} -name {quote(pattern)} -type f -print0"
            f" | xargs -0 cat | {self._settings.w2vgrep_path} {' '.join(args)}"
        )
        return self._runner.run(command, no_match_codes=PIPELINE_NO_MATCH_CODES)

    def find_match_locations(
        self,
        match_text: str,
        search_path: str,
        glob: Optional[str] = None,
        context_lines: int = 2,
    ) -> list[MatchLocation]:
        """Find literal occurrences of ``match_text`` under ``search_path``."""
        if not match_text:
            return []
        glob_arg = f" --glob {quote(glob)}" if glob else ""
        command = (
            f"{self._settings.rg_path} -F -n -C {context_lines}{glob_arg}"
            f" {quote(match_text)} {quote(search_path)}"
        )
        try:
            output = self._runner.run(command, no_match_codes=RG_NO_MATCH_CODES)
        except CommandFailed as e:
            logger.warning("ripgrep lookup failed | exit_code={} error={}", e.exit_code, e)
            return []
        if not output:
            return []
        return parse_location_output(output, search_path)
