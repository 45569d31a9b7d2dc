"""Centralized configuration for the w2vgrep MCP server."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ToolSettings:
    """
    Snapshot of the settings the search service needs.

    Passed explicitly into the service so the parsing core never reads
    process-wide state.
    """

    w2vgrep_path: str
    rg_path: str
    default_glob: str
    default_context: int
    command_timeout: int
    lookup_workers: int


class Config:
    """
    Server configuration with environment variable overrides.

    All configuration values are centralized here with sensible defaults.
    Values can be overridden via environment variables.
    """

    @staticmethod
    def _parse_port(port_str: str) -> int:
        """Parse and validate port number from string."""
        try:
            port = int(port_str)
            if not (1 <= port <= 65535):
                raise ValueError(f"Port must be 1-65535, got {port}")
            return port
        except ValueError as e:
            raise ValueError(f"Invalid PORT environment variable: {e}")

    @staticmethod
    def _parse_positive_int(name: str, default: str, minimum: int = 1) -> int:
        """Parse an integer environment variable that must be >= minimum."""
        raw = os.getenv(name, default)
        try:
            value = int(raw)
        except ValueError as e:
            raise ValueError(f"Invalid {name} environment variable: {e}")
        if value < minimum:
            raise ValueError(
                f"Invalid {name} environment variable: must be >= {minimum}, got {value}"
            )
        return value

    # ========================================================================
    # External Tools
    # ========================================================================
    W2VGREP_PATH: str = os.getenv("W2VGREP_PATH", "w2vgrep")
    RG_PATH: str = os.getenv("RG_PATH", "rg")
    COMMAND_TIMEOUT: int = _parse_positive_int.__func__("W2VGREP_COMMAND_TIMEOUT", "120")

    # ========================================================================
    # Search Defaults
    # ========================================================================
    DEFAULT_GLOB: str = os.getenv("W2VGREP_DEFAULT_GLOB", "*.md")
    DEFAULT_CONTEXT: int = _parse_positive_int.__func__("W2VGREP_DEFAULT_CONTEXT", "2", 0)
    LOOKUP_WORKERS: int = _parse_positive_int.__func__("W2VGREP_LOOKUP_WORKERS", "4")

    # ========================================================================
    # Server
    # ========================================================================
    SERVER_NAME: str = "w2vgrep"
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = _parse_port.__func__(os.getenv("PORT", "8001"))
    LOG_LEVEL: str = os.getenv("W2VGREP_MCP_LOG_LEVEL", "INFO").upper()
    TRANSPORT: str = os.getenv("W2VGREP_MCP_TRANSPORT", "stdio")

    @classmethod
    def tool_settings(cls) -> ToolSettings:
        """Snapshot the current class-level values into a ToolSettings."""
        return ToolSettings(
            w2vgrep_path=cls.W2VGREP_PATH,
            rg_path=cls.RG_PATH,
            default_glob=cls.DEFAULT_GLOB,
            default_context=cls.DEFAULT_CONTEXT,
            command_timeout=cls.COMMAND_TIMEOUT,
            lookup_workers=cls.LOOKUP_WORKERS,
        )

    @classmethod
    def validate(cls) -> bool:
        """
        Validate configuration consistency.

        Checks:
        - Tool paths are not empty
        - Numeric settings are > 0
        - Log level and transport are known values

        Returns:
            True if validation passes

        Raises:
            ValueError: If validation fails
        """
        errors = []

        if not cls.W2VGREP_PATH.strip():
            errors.append("W2VGREP_PATH must not be empty")
        if not cls.RG_PATH.strip():
            errors.append("RG_PATH must not be empty")
        if not cls.DEFAULT_GLOB.strip():
            errors.append("DEFAULT_GLOB must not be empty")

        if cls.COMMAND_TIMEOUT <= 0:
            errors.append(f"COMMAND_TIMEOUT must be > 0, got {cls.COMMAND_TIMEOUT}")
        if cls.DEFAULT_CONTEXT < 0:
            errors.append(f"DEFAULT_CONTEXT must be >= 0, got {cls.DEFAULT_CONTEXT}")
        if cls.LOOKUP_WORKERS <= 0:
            errors.append(f"LOOKUP_WORKERS must be > 0, got {cls.LOOKUP_WORKERS}")

        if cls.LOG_LEVEL not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            errors.append(f"LOG_LEVEL is not a known level: {cls.LOG_LEVEL}")
        if cls.TRANSPORT not in {"stdio", "sse", "http"}:
            errors.append(f"TRANSPORT must be one of stdio, sse, http, got {cls.TRANSPORT}")

        if errors:
            raise ValueError(f"Config validation failed: {'; '.join(errors)}")

        return True
