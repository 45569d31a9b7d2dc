"""
Entry point for running w2vgrep_mcp as a module.

Allows running the server via:
    python -m w2vgrep_mcp
    uv run python -m w2vgrep_mcp
"""

from w2vgrep_mcp.server import main

if __name__ == "__main__":
    main()
