"""FastMCP server exposing the ``semantic_search`` tool."""

import asyncio
import json
import sys
from typing import Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from loguru import logger

from .config import Config
from .search import SearchParams, SemanticSearchService

SEMANTIC_SEARCH_DESCRIPTION = """Semantic search in text files using Word2Vec embeddings.
Unlike grep, finds semantically similar words (e.g., searching "fear" also finds "anxiety", "terror", "dread").

Use cases:
- Find all mentions of a concept across files
- Search for synonyms and related terms
- Explore themes in documents

Response format:
{
  "query": "search term",
  "total": 5,
  "matches": [{
    "similarity": 0.85,
    "match": "matched text",
    "locations": [{
      "file": "path/to/file.md",
      "line": 42,
      "context": "text before\\nmatched text\\ntext after"
    }]
  }]
}

Matches sorted by similarity (1.0 = exact match).
For recursive search, locations contains file paths and context snippets.

Arguments:
- query: Search query (word or phrase)
- path: Path to file or directory
- model_path: Path to Word2Vec model, e.g. ~/.config/semantic-grep/english.bin
- threshold: Similarity: 0.7=strict (default), 0.5-0.6=balanced, 0.4=broad, 0.3=very broad
- recursive: Search directories recursively
- glob: File pattern for recursive search (default: *.md)
- context: Lines of context before and after (default: 2)
- ignore_case: Ignore case"""

mcp = FastMCP(Config.SERVER_NAME)

_search_service: Optional[SemanticSearchService] = None


def get_search_service() -> SemanticSearchService:
    """Return the process-wide search service, creating it on first use."""
    global _search_service
    if _search_service is None:
        _search_service = SemanticSearchService(Config.tool_settings())
    return _search_service


def set_search_service(service: Optional[SemanticSearchService]) -> None:
    """Replace the process-wide search service (``None`` resets it)."""
    global _search_service
    _search_service = service


async def run_semantic_search(
    params: SearchParams, service: Optional[SemanticSearchService] = None
) -> str:
    """
    Run a search off the event loop and render the response as JSON.

    Raises:
        ToolError: With an ``Error:`` prefixed message on any failure
    """
    service = service or get_search_service()
    try:
        response = await asyncio.to_thread(service.search, params)
    except Exception as e:
        logger.error("semantic_search failed | query={!r} error={}", params.query, e)
        raise ToolError(f"Error: {e}") from e
    return json.dumps(response.to_dict(), indent=2, ensure_ascii=False)


@mcp.tool(name="semantic_search", description=SEMANTIC_SEARCH_DESCRIPTION)
async def semantic_search(
    query: str,
    path: str,
    model_path: str,
    threshold: Optional[float] = None,
    recursive: bool = False,
    glob: Optional[str] = None,
    context: Optional[int] = None,
    ignore_case: bool = False,
) -> str:
    params = SearchParams(
        query=query,
        path=path,
        model_path=model_path,
        threshold=threshold,
        recursive=recursive,
        glob=glob,
        context=context,
        ignore_case=ignore_case,
    )
    return await run_semantic_search(params)


def configure_logging(level: str = Config.LOG_LEVEL) -> None:
    """Send loguru output to stderr; stdout belongs to the stdio transport."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> | <level>{message}</level>",
        level=level,
    )


def main():
    """
    Main entry point for the server.

    Configures loguru, validates configuration and runs the FastMCP server
    on the configured transport (stdio by default).
    """
    configure_logging()

    try:
        Config.validate()
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"Starting {Config.SERVER_NAME} MCP server ({Config.TRANSPORT})...")

    try:
        if Config.TRANSPORT == "stdio":
            mcp.run(transport="stdio")
        else:
            mcp.run(transport=Config.TRANSPORT, host=Config.HOST, port=Config.PORT)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
