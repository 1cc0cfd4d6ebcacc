"""Starlette application factory."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from starlette.applications import Starlette

from docugen.config.models import DocuGenConfig
from docugen.generation import DocsGenerator
from docugen.server.middleware import RequestContextMiddleware
from docugen.server.routes import create_routes

log = structlog.get_logger(__name__)


def create_app(config: DocuGenConfig, generator: DocsGenerator | None = None) -> Starlette:
    """Create the Starlette application.

    Args:
        config: Resolved configuration.
        generator: Docs generator; built from ``config.generation`` if omitted.
    """
    generator = generator or DocsGenerator(config.generation)

    @asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncIterator[None]:
        log.info(
            "app_ready",
            model=config.generation.model,
            ai_docs=config.generation.has_usable_key,
        )
        yield
        log.info("app_shutdown")

    app = Starlette(
        routes=create_routes(config.server, generator),
        lifespan=lifespan,
    )
    app.add_middleware(RequestContextMiddleware)
    return app
