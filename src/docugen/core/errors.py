"""DocuGen error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Parse
- 4xxx: Generation
- 5xxx: GitHub
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
    CONFIG_FILE_NOT_FOUND = 2003

    # Parse (3xxx)
    PARSE_SYNTAX_ERROR = 3001
    PARSE_INVALID_ENCODING = 3002

    # Generation (4xxx)
    GENERATION_REQUEST_FAILED = 4001
    GENERATION_BAD_RESPONSE = 4002

    # GitHub (5xxx)
    GITHUB_REQUEST_FAILED = 5001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class DocuGenError(Exception):
    """Base error with structured context for HTTP and CLI responses."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(DocuGenError):
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


class ParseError(DocuGenError):
    """Source code could not be parsed into function records."""

    @classmethod
    def syntax_error(cls, line: int, column: int, snippet: str = "") -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_SYNTAX_ERROR,
            message=f"Syntax error at line {line}, column {column}",
            details={"line": line, "column": column, "snippet": snippet},
        )

    @classmethod
    def invalid_encoding(cls, line: int, column: int, reason: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_INVALID_ENCODING,
            message=f"Invalid character at line {line}, column {column}: {reason}",
            details={"line": line, "column": column, "reason": reason},
        )


class GenerationError(DocuGenError):
    """Text-generation service errors."""

    @classmethod
    def request_failed(cls, reason: str, status: int | None = None) -> "GenerationError":
        return cls(
            code=ErrorCode.GENERATION_REQUEST_FAILED,
            message=f"Generation request failed: {reason}",
            retryable=status is None or status == 429 or status >= 500,
            details={"status": status, "reason": reason},
        )

    @classmethod
    def bad_response(cls, reason: str) -> "GenerationError":
        return cls(
            code=ErrorCode.GENERATION_BAD_RESPONSE,
            message=f"Unexpected generation response: {reason}",
            details={"reason": reason},
        )


class CommentError(DocuGenError):
    """Pull request comment posting errors."""

    @classmethod
    def request_failed(
        cls, pr_number: int, reason: str, status: int | None = None
    ) -> "CommentError":
        return cls(
            code=ErrorCode.GITHUB_REQUEST_FAILED,
            message=f"Failed to post comment on PR #{pr_number}: {reason}",
            retryable=status is None or status >= 500,
            details={"pr_number": pr_number, "status": status, "reason": reason},
        )


class InternalError(DocuGenError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
