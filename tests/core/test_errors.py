"""Tests for error types and codes."""

from collections.abc import Iterator
from contextlib import contextmanager

import pytest

from gitsift.core.errors import (
    ConfigError,
    DocumentNotFoundError,
    ErrorCode,
    GitSiftError,
    InternalError,
    StoreError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.STORE_DOCUMENT_NOT_FOUND, 3000),
            (ErrorCode.STORE_WRITE_FAILED, 3000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestGitSiftError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = GitSiftError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        error = GitSiftError(code=ErrorCode.INTERNAL_ERROR, message="Something broke")

        assert str(error) == "[9001] INTERNAL_ERROR: Something broke"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        """Errors are real exceptions."""
        with pytest.raises(GitSiftError):
            raise InternalError.unexpected("boom")

    @pytest.mark.parametrize(
        "error",
        [
            StoreError.write_failed("transport down"),
            GitSiftError(code=ErrorCode.INTERNAL_ERROR, message="base"),
        ],
    )
    def test_given_error_when_reraised_through_context_manager_then_unchanged(
        self, error: GitSiftError
    ) -> None:
        """contextlib re-raises the same error object, traceback attached."""

        @contextmanager
        def guarded() -> Iterator[None]:
            try:
                yield
            except GitSiftError:
                raise

        with pytest.raises(type(error)) as exc_info:
            with guarded():
                raise error

        assert exc_info.value is error
        assert exc_info.value.__traceback__ is not None


class TestConfigError:
    """ConfigError factory tests."""

    def test_parse_error_carries_path_and_reason(self) -> None:
        error = ConfigError.parse_error("/etc/gitsift.yaml", "bad indent")

        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert error.details == {"path": "/etc/gitsift.yaml", "reason": "bad indent"}
        assert "/etc/gitsift.yaml" in error.message

    def test_invalid_value_stringifies_value(self) -> None:
        error = ConfigError.invalid_value("index.batch_size", 0, "must be positive")

        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert error.details["value"] == "0"
        assert error.details["field"] == "index.batch_size"

    def test_file_not_found(self) -> None:
        error = ConfigError.file_not_found("/missing.yaml")

        assert error.code == ErrorCode.CONFIG_FILE_NOT_FOUND
        assert error.retryable is False


class TestStoreErrors:
    """Store error factory tests."""

    def test_write_failed_is_retryable(self) -> None:
        """Write failures may succeed on retry."""
        error = StoreError.write_failed("disk full", operations=3)

        assert error.code == ErrorCode.STORE_WRITE_FAILED
        assert error.retryable is True
        assert error.details == {"operations": 3}

    def test_invalid_query_keeps_query_text(self) -> None:
        error = StoreError.invalid_query("foo AND", "trailing operator")

        assert error.code == ErrorCode.STORE_QUERY_INVALID
        assert error.details["query"] == "foo AND"

    def test_document_not_found_is_store_error(self) -> None:
        """Callers catching StoreError also see missing documents."""
        error = DocumentNotFoundError.for_id("rid_a.txt")

        assert isinstance(error, StoreError)
        assert error.code == ErrorCode.STORE_DOCUMENT_NOT_FOUND
        assert error.details == {"id": "rid_a.txt"}
