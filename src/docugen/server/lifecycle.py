"""Server lifecycle management."""

from __future__ import annotations

import structlog
import uvicorn

from docugen.config.models import DocuGenConfig

logger = structlog.get_logger()


async def run_server(config: DocuGenConfig) -> None:
    """Run the HTTP server until a shutdown signal arrives."""
    from docugen.server.app import create_app

    app = create_app(config)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level="warning",  # Use structlog instead
        ws="none",
    )
    server = uvicorn.Server(uvicorn_config)

    base_url = f"http://{config.server.host}:{config.server.port}"
    logger.info("server starting")
    logger.info("endpoint", name="website", url=f"{base_url}/")
    logger.info("endpoint", name="analyze", url=f"{base_url}/api/analyze")
    logger.info("endpoint", name="health", url=f"{base_url}/health")

    try:
        await server.serve()
    finally:
        logger.info("server stopped")
