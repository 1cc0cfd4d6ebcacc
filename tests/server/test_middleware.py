"""Tests for server/middleware.py."""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient
from structlog.testing import capture_logs

from docugen.core.logging import get_request_id
from docugen.server.middleware import RequestContextMiddleware


def _app() -> Starlette:
    async def echo(request: Request) -> JSONResponse:
        return JSONResponse({"request_id": get_request_id()})

    app = Starlette(routes=[Route("/echo", echo)])
    app.add_middleware(RequestContextMiddleware)
    return app


class TestRequestContextMiddleware:
    """Request correlation and access logging."""

    def test_generates_request_id(self) -> None:
        response = TestClient(_app()).get("/echo")

        rid = response.headers["X-Request-Id"]
        assert len(rid) == 12
        assert response.json() == {"request_id": rid}

    def test_reuses_incoming_request_id(self) -> None:
        response = TestClient(_app()).get("/echo", headers={"X-Request-Id": "upstream-1"})

        assert response.headers["X-Request-Id"] == "upstream-1"
        assert response.json() == {"request_id": "upstream-1"}

    def test_logs_request(self) -> None:
        with capture_logs() as logs:
            TestClient(_app()).get("/echo")

        entry = next(e for e in logs if e["event"] == "http_request")
        assert entry["method"] == "GET"
        assert entry["path"] == "/echo"
        assert entry["status"] == 200
        assert entry["duration_ms"] >= 0

    def test_logs_not_found(self) -> None:
        with capture_logs() as logs:
            response = TestClient(_app()).get("/missing")

        assert response.status_code == 404
        entry = next(e for e in logs if e["event"] == "http_request")
        assert entry["status"] == 404
