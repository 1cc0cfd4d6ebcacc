"""HTTP routes for the DocuGen server.

Provides the analysis API, a health endpoint, and the static landing page.
"""

from __future__ import annotations

import importlib.metadata
import json
import time
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import BaseRoute, Mount, Route
from starlette.staticfiles import StaticFiles

from docugen.analysis import analyze
from docugen.core.errors import InternalError, ParseError

if TYPE_CHECKING:
    from docugen.config.models import ServerConfig
    from docugen.generation import DocsGenerator

log = structlog.get_logger(__name__)

BUNDLED_WEBSITE_DIR = Path(__file__).resolve().parent.parent / "website"

MISSING_CODE_MESSAGE = "Both oldCode and newCode are required."


def _get_version() -> str:
    """Get package version from installed metadata."""
    try:
        return importlib.metadata.version("docugen")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


async def _read_limited(request: Request, limit: int) -> bytes | None:
    """Read the request body, or return None once it exceeds ``limit`` bytes.

    A declared Content-Length over the limit is rejected before reading.
    """
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        return None

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            return None
    return bytes(body)


def create_routes(server_config: ServerConfig, generator: DocsGenerator) -> list[BaseRoute]:
    """Create HTTP routes bound to the generator."""
    start_time = time.time()
    version = _get_version()

    async def health(request: Request) -> JSONResponse:
        """Liveness check."""
        _ = request  # unused
        return JSONResponse(
            {
                "status": "healthy",
                "version": version,
                "uptime_seconds": round(time.time() - start_time, 1),
            }
        )

    async def analyze_code(request: Request) -> JSONResponse:
        """Compare ``oldCode`` with ``newCode`` and document the changes."""
        body = await _read_limited(request, server_config.max_body_bytes)
        if body is None:
            return JSONResponse(
                {"error": f"Request body exceeds {server_config.max_body_bytes} bytes."},
                status_code=413,
            )

        try:
            payload = json.loads(body or b"{}")
        except ValueError:
            return JSONResponse({"error": MISSING_CODE_MESSAGE}, status_code=400)

        old_code = payload.get("oldCode") if isinstance(payload, dict) else None
        new_code = payload.get("newCode") if isinstance(payload, dict) else None
        if not isinstance(old_code, str) or not isinstance(new_code, str):
            return JSONResponse({"error": MISSING_CODE_MESSAGE}, status_code=400)
        if not old_code or not new_code:
            return JSONResponse({"error": MISSING_CODE_MESSAGE}, status_code=400)

        log.info("analyze_request", old_bytes=len(old_code), new_bytes=len(new_code))
        try:
            result = await analyze(old_code, new_code, generator)
        except ParseError as e:
            log.info("analyze_parse_failed", reason=e.message)
            return JSONResponse(
                {
                    "error": f"Failed to parse code: {e.message}",
                    "code": e.code.value,
                    "details": e.details,
                },
                status_code=422,
            )
        except Exception as e:
            error = InternalError.unexpected(str(e), exception=type(e).__name__)
            log.exception("analyze_failed", error=error.error_name, **error.details)
            return JSONResponse(
                {"error": f"Failed to analyze code: {e}", "code": error.code.value},
                status_code=500,
            )

        return JSONResponse(result.to_dict())

    static_dir = BUNDLED_WEBSITE_DIR
    if server_config.static_dir:
        static_dir = Path(server_config.static_dir)

    routes: list[BaseRoute] = [
        Route("/health", health, methods=["GET"]),
        Route("/api/analyze", analyze_code, methods=["POST"]),
    ]
    if static_dir.is_dir():
        website = StaticFiles(directory=static_dir, html=True)
        routes.append(Mount("/", app=website, name="website"))
    else:
        log.warning("static_dir_missing", path=str(static_dir))
    return routes
