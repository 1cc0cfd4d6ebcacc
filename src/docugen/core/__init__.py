"""Core module exports."""

from docugen.core.errors import (
    CommentError,
    ConfigError,
    DocuGenError,
    ErrorCode,
    GenerationError,
    InternalError,
    ParseError,
)
from docugen.core.logging import (
    clear_request_id,
    configure_logging,
    get_request_id,
    set_request_id,
)

__all__ = [
    # Errors
    "CommentError",
    "ConfigError",
    "DocuGenError",
    "ErrorCode",
    "GenerationError",
    "InternalError",
    "ParseError",
    # Logging
    "clear_request_id",
    "configure_logging",
    "get_request_id",
    "set_request_id",
]
