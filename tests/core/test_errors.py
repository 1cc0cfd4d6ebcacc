"""Tests for error types and codes."""

import pytest

from docugen.core.errors import (
    CommentError,
    ConfigError,
    DocuGenError,
    ErrorCode,
    GenerationError,
    InternalError,
    ParseError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_FILE_NOT_FOUND, 2000),
            (ErrorCode.PARSE_SYNTAX_ERROR, 3000),
            (ErrorCode.GENERATION_REQUEST_FAILED, 4000),
            (ErrorCode.GITHUB_REQUEST_FAILED, 5000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000

    def test_codes_are_unique(self) -> None:
        values = [c.value for c in ErrorCode]
        assert len(values) == len(set(values))


class TestDocuGenError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = DocuGenError(
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

    def test_given_error_when_str_then_includes_code_and_name(self) -> None:
        error = DocuGenError(code=ErrorCode.INTERNAL_ERROR, message="boom")
        assert str(error) == "[9001] INTERNAL_ERROR: boom"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        with pytest.raises(DocuGenError):
            raise ParseError.syntax_error(1, 1)


class TestConfigError:
    """ConfigError factory tests."""

    def test_parse_error(self) -> None:
        error = ConfigError.parse_error("/x.yaml", "bad indent")
        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert "/x.yaml" in error.message
        assert error.details == {"path": "/x.yaml", "reason": "bad indent"}

    def test_invalid_value(self) -> None:
        error = ConfigError.invalid_value("server.port", 70000, "too large")
        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert error.message == "Invalid value for 'server.port': too large"
        assert error.details["value"] == "70000"

    def test_file_not_found(self) -> None:
        error = ConfigError.file_not_found("/missing.yaml")
        assert error.code == ErrorCode.CONFIG_FILE_NOT_FOUND
        assert error.message == "Config file not found: /missing.yaml"


class TestParseError:
    """ParseError factory tests."""

    def test_syntax_error(self) -> None:
        error = ParseError.syntax_error(3, 7, "function (")
        assert error.message == "Syntax error at line 3, column 7"
        assert error.details == {"line": 3, "column": 7, "snippet": "function ("}
        assert error.retryable is False

    def test_invalid_encoding(self) -> None:
        error = ParseError.invalid_encoding(2, 5, "surrogates not allowed")
        assert error.code == ErrorCode.PARSE_INVALID_ENCODING
        assert error.message == "Invalid character at line 2, column 5: surrogates not allowed"
        assert error.details == {"line": 2, "column": 5, "reason": "surrogates not allowed"}


class TestGenerationError:
    """GenerationError retryability."""

    @pytest.mark.parametrize(
        ("status", "retryable"),
        [(None, True), (429, True), (500, True), (503, True), (400, False), (401, False)],
    )
    def test_request_failed_retryable(self, status: int | None, retryable: bool) -> None:
        error = GenerationError.request_failed("nope", status=status)
        assert error.retryable is retryable
        assert error.details["status"] == status

    def test_bad_response_not_retryable(self) -> None:
        error = GenerationError.bad_response("no choices")
        assert error.code == ErrorCode.GENERATION_BAD_RESPONSE
        assert not error.retryable


class TestCommentError:
    """CommentError factory tests."""

    def test_request_failed_message(self) -> None:
        error = CommentError.request_failed(42, "Bad credentials", status=401)
        assert error.message == "Failed to post comment on PR #42: Bad credentials"
        assert error.details == {"pr_number": 42, "status": 401, "reason": "Bad credentials"}
        assert not error.retryable


class TestInternalError:
    """InternalError factory tests."""

    def test_unexpected_keeps_details(self) -> None:
        error = InternalError.unexpected("oops", where="route")
        assert error.message == "Internal error: oops"
        assert error.details == {"where": "route"}
