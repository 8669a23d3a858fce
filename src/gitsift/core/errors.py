"""gitsift error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Index / document store
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Store (3xxx)
    STORE_DOCUMENT_NOT_FOUND = 3001
    STORE_WRITE_FAILED = 3002
    STORE_QUERY_INVALID = 3003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(eq=False)
class GitSiftError(Exception):
    """Base error with structured context.

    Not frozen or slotted: contextlib assigns ``__traceback__`` when it
    re-raises.
    """

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(GitSiftError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class StoreError(GitSiftError):
    """Document store errors. Propagated to callers as-is."""

    @classmethod
    def write_failed(cls, reason: str, **details: Any) -> "StoreError":
        return cls(
            code=ErrorCode.STORE_WRITE_FAILED,
            message=f"Index write failed: {reason}",
            retryable=True,
            details=details,
        )

    @classmethod
    def invalid_query(cls, query: str, reason: str) -> "StoreError":
        return cls(
            code=ErrorCode.STORE_QUERY_INVALID,
            message=f"Could not parse query {query!r}: {reason}",
            details={"query": query, "reason": reason},
        )


class DocumentNotFoundError(StoreError):
    """Target document does not exist in the store."""

    @classmethod
    def for_id(cls, doc_id: str) -> "DocumentNotFoundError":
        return cls(
            code=ErrorCode.STORE_DOCUMENT_NOT_FOUND,
            message=f"Document not found: {doc_id}",
            details={"id": doc_id},
        )


class InternalError(GitSiftError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
