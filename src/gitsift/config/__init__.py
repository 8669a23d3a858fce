"""Config module exports."""

from gitsift.config.loader import get_index_path, load_config
from gitsift.config.models import (
    GitSiftConfig,
    IndexConfig,
    LoggingConfig,
    LogOutputConfig,
    SearchConfig,
)

__all__ = [
    "load_config",
    "get_index_path",
    "GitSiftConfig",
    "IndexConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "SearchConfig",
]
