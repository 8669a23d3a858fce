"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (GITSIFT__SECTION__KEY)
3. Repo YAML (.gitsift/config.yaml)
4. Global YAML (~/.config/gitsift/config.yaml)
5. Built-in defaults (this file)

Examples:
    GITSIFT__LOGGING__LEVEL=DEBUG
    GITSIFT__INDEX__REPOSITORY_ID=acme/widgets
    GITSIFT__SEARCH__DEFAULT_PER_PAGE=50
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        GITSIFT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every skipped blob.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class IndexConfig(BaseModel):
    """Index configuration.

    Env vars:
        GITSIFT__INDEX__INDEX_PATH: Where the tantivy index lives
        GITSIFT__INDEX__REPOSITORY_ID: Identity of the repository in a shared index
        GITSIFT__INDEX__BATCH_SIZE: Mutations buffered before each store commit
    """

    index_path: str | None = Field(
        default=None,
        description="Override index storage location. Default: .gitsift/tantivy in repo.",
    )
    repository_id: str | None = Field(
        default=None,
        description="Repository identity (rid). Defaults to the repository path. "
        "RISK: changing it orphans every previously indexed document.",
    )
    batch_size: int = Field(
        default=500,
        description="Mutations buffered before the store is committed.",
    )
    writer_heap_mb: int = Field(
        default=64,
        description="Memory budget for the index writer (MB).",
    )

    @field_validator("batch_size", "writer_heap_mb")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Must be a positive integer, got {v}")
        return v


class SearchConfig(BaseModel):
    """Search pagination defaults.

    Env vars:
        GITSIFT__SEARCH__DEFAULT_PER_PAGE: Results per page when not given
        GITSIFT__SEARCH__MAX_PER_PAGE: Hard cap on results per page
    """

    default_per_page: int = Field(default=20, description="Results per page.")
    max_per_page: int = Field(default=100, description="Largest accepted page size.")


class GitSiftConfig(BaseModel):
    """Root configuration for gitsift."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
