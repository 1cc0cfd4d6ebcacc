"""Pull request comments via the GitHub REST API."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx
import structlog

from docugen.config.constants import GITHUB_USER_AGENT
from docugen.config.models import GitHubConfig
from docugen.core.errors import CommentError

log = structlog.get_logger(__name__)

COMMENT_HEADER = "## 🤖 DocuGen AI: Documentation Update"


@dataclass(frozen=True, slots=True)
class CommentResult:
    """Outcome of a post attempt. ``posted`` is False when settings are missing."""

    posted: bool
    url: str | None = None
    missing: list[str] = field(default_factory=list)


def build_comment_body(summary: str, docs: str) -> str:
    """Markdown comment with the detected changes and the generated docs."""
    return (
        f"{COMMENT_HEADER}\n"
        "\n"
        "### 🔍 Detected Changes\n"
        "\n"
        "```\n"
        f"{summary}\n"
        "```\n"
        "\n"
        f"{docs}\n"
        "\n"
        "---\n"
        "*Generated automatically by DocuGen AI*"
    )


class CommentPoster:
    """Posts comments on the pull request named in GitHubConfig."""

    def __init__(
        self,
        config: GitHubConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport

    @property
    def comments_url(self) -> str:
        base = self.config.api_url.rstrip("/")
        return f"{base}/repos/{self.config.repo}/issues/{self.config.pr_number}/comments"

    async def post(self, body: str) -> CommentResult:
        """Post ``body`` as a PR comment.

        Returns:
            CommentResult; ``posted=False`` with ``missing`` populated when
            token, repo, or PR number is not configured.

        Raises:
            CommentError: If the API request fails.
        """
        missing = self.config.missing_fields()
        if missing:
            log.warning("comment_skipped", missing=missing)
            return CommentResult(posted=False, missing=missing)

        pr_number = self.config.pr_number
        assert pr_number is not None

        headers = {
            "Authorization": f"Bearer {self.config.token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": GITHUB_USER_AGENT,
        }
        async with httpx.AsyncClient(
            timeout=self.config.timeout_sec,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(
                    self.comments_url, json={"body": body}, headers=headers
                )
            except httpx.RequestError as e:
                raise CommentError.request_failed(pr_number, f"{type(e).__name__}: {e}") from e

        if response.is_error:
            raise CommentError.request_failed(
                pr_number, _api_message(response), status=response.status_code
            )

        url = _html_url(response)
        log.info("comment_posted", pr_number=pr_number, url=url)
        return CommentResult(posted=True, url=url)


def _api_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return "Unknown error"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return "Unknown error"


def _html_url(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    return body.get("html_url") if isinstance(body, dict) else None
