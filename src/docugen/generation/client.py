"""Documentation generation via an OpenAI-compatible chat completions API.

``DocsGenerator.generate`` never fails: without a usable API key, or once
retries are exhausted, it returns the deterministic fallback document.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import structlog

from docugen.config.models import GenerationConfig
from docugen.core.errors import GenerationError
from docugen.generation.prompts import build_prompt, fallback_docs

log = structlog.get_logger(__name__)


class DocsGenerator:
    """Turns a change summary into a changelog entry and README section."""

    def __init__(
        self,
        config: GenerationConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport

    async def generate(self, summary: str) -> str:
        """Generate documentation for ``summary``, falling back when unavailable."""
        if not self.config.has_usable_key:
            log.warning("generation_fallback", reason="no usable api key")
            return fallback_docs(summary)

        try:
            return await self._complete(build_prompt(summary))
        except GenerationError as e:
            log.error("generation_fallback", reason=e.message, error=e.error_name)
            return fallback_docs(summary)

    async def _complete(self, prompt: str) -> str:
        """POST the prompt, retrying transient failures."""
        payload = {
            "model": self.config.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(
            timeout=self.config.timeout_sec,
            transport=self._transport,
        ) as client:
            attempt = 0
            while True:
                try:
                    response = await self._post(client, payload, headers)
                    return _extract_content(_json_body(response))
                except GenerationError as e:
                    if not e.retryable or attempt >= self.config.max_retries:
                        raise
                    delay = self.config.retry_base_delay_sec * (2**attempt)
                    attempt += 1
                    log.info(
                        "generation_retry", attempt=attempt, delay_sec=delay, reason=e.message
                    )
                    await asyncio.sleep(delay)

    async def _post(
        self,
        client: httpx.AsyncClient,
        payload: dict[str, Any],
        headers: dict[str, str],
    ) -> httpx.Response:
        try:
            response = await client.post(self.config.api_url, json=payload, headers=headers)
        except httpx.RequestError as e:
            raise GenerationError.request_failed(f"{type(e).__name__}: {e}") from e

        if response.is_error:
            raise GenerationError.request_failed(
                _api_error_message(response), status=response.status_code
            )
        return response


def _api_error_message(response: httpx.Response) -> str:
    """Best-effort ``error.message`` from an OpenAI-style error body."""
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return f"HTTP {response.status_code}"


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise GenerationError.bad_response("body is not JSON") from e


def _extract_content(body: Any) -> str:
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise GenerationError.bad_response(f"missing choices[0].message.content ({e!r})") from e
    if not isinstance(content, str):
        raise GenerationError.bad_response("content is not a string")
    return content.strip()
