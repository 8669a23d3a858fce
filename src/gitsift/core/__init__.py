"""Core module exports."""

from gitsift.core.errors import (
    ConfigError,
    DocumentNotFoundError,
    ErrorCode,
    GitSiftError,
    InternalError,
    StoreError,
)
from gitsift.core.logging import (
    clear_request_id,
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "DocumentNotFoundError",
    "ErrorCode",
    "GitSiftError",
    "InternalError",
    "StoreError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
]
