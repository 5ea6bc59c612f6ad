"""Configuration module for opencontext.

Loads configuration from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from opencontext.search.models import (
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MIN_SCORE,
    DEFAULT_WORKERS,
)
from opencontext.search.tables import DEFAULT_TABLES, SearchTables, load_tables

TRANSPORTS = ("stdio", "sse")


def _int_env(name: str, default: int, minimum: int, maximum: int | None = None) -> int:
    """Read an integer env var, raising ValueError naming the variable."""
    raw = os.getenv(name, str(default))
    try:
        value = int(raw)
        if value < minimum or (maximum is not None and value > maximum):
            if maximum is None:
                raise ValueError(f"Value must be >= {minimum}, got {value}")
            raise ValueError(f"Value must be between {minimum} and {maximum}, got {value}")
    except ValueError as e:
        raise ValueError(f"Invalid {name} value '{raw}': {e}") from e
    return value


@dataclass
class Config:
    """Application configuration."""

    root: Path
    port: int
    transport: str
    max_files: int
    min_score: int
    max_file_size: int
    workers: int
    auth_token: str | None
    tables_path: Path | None = None
    tables: SearchTables = field(default=DEFAULT_TABLES)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        root = Path(os.getenv("OPENCONTEXT_ROOT", os.getcwd())).expanduser().resolve()

        port = _int_env("OPENCONTEXT_PORT", 8080, 1, 65535)

        transport = os.getenv("OPENCONTEXT_TRANSPORT", "stdio").lower()
        if transport not in TRANSPORTS:
            raise ValueError(
                f"Invalid OPENCONTEXT_TRANSPORT value '{transport}': "
                f"expected one of {', '.join(TRANSPORTS)}"
            )

        max_files = _int_env("OPENCONTEXT_MAX_FILES", 5, 1)
        min_score = _int_env("OPENCONTEXT_MIN_SCORE", DEFAULT_MIN_SCORE, 0, 100)
        max_file_size = _int_env("OPENCONTEXT_MAX_FILE_SIZE", DEFAULT_MAX_FILE_SIZE, 1)
        workers = _int_env("OPENCONTEXT_WORKERS", DEFAULT_WORKERS, 1)

        # Auth token - must be at least 32 bytes if set
        auth_token = os.getenv("OPENCONTEXT_AUTH_TOKEN")
        if auth_token is not None and len(auth_token) < 32:
            raise ValueError(
                "OPENCONTEXT_AUTH_TOKEN must be at least 32 characters for security"
            )

        tables_path: Path | None = None
        tables = DEFAULT_TABLES
        tables_env = os.getenv("OPENCONTEXT_TABLES")
        if tables_env:
            tables_path = Path(tables_env).expanduser()
            try:
                tables = load_tables(tables_path)
            except ValueError as e:
                raise ValueError(f"Invalid OPENCONTEXT_TABLES value '{tables_env}': {e}") from e

        return cls(
            root=root,
            port=port,
            transport=transport,
            max_files=max_files,
            min_score=min_score,
            max_file_size=max_file_size,
            workers=workers,
            auth_token=auth_token,
            tables_path=tables_path,
            tables=tables,
        )


# Global config instance (lazy loaded)
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
