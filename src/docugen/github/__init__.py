"""GitHub pull request integration."""

from docugen.github.comment import (
    COMMENT_HEADER,
    CommentPoster,
    CommentResult,
    build_comment_body,
)

__all__ = ["COMMENT_HEADER", "CommentPoster", "CommentResult", "build_comment_body"]
