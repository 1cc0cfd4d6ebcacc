"""HTTP middleware for request correlation and access logging."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from docugen.config.constants import REQUEST_ID_HEADER
from docugen.core.logging import clear_request_id, set_request_id

log = structlog.get_logger(__name__)

# Type alias for the call_next function
CallNext = Callable[[Request], Awaitable[Response]]


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a correlation ID to each request and log its outcome.

    An incoming X-Request-Id header is reused; otherwise one is generated.
    The ID is echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        rid = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        start = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 1),
            )
            return response
        finally:
            clear_request_id()
