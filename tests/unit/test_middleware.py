"""Tests for middleware components."""

import pytest
from httpx import AsyncClient

from api.middleware import REQUEST_ID_HEADER


class TestRequestIDMiddleware:
    """Tests for request id propagation."""

    @pytest.mark.asyncio
    async def test_generates_request_id(self, client: AsyncClient) -> None:
        response = await client.get("/api/health")

        request_id = response.headers[REQUEST_ID_HEADER]
        assert len(request_id) == 32
        int(request_id, 16)

    @pytest.mark.asyncio
    async def test_echoes_supplied_request_id(self, client: AsyncClient) -> None:
        response = await client.get("/api/health", headers={REQUEST_ID_HEADER: "trace-123"})

        assert response.headers[REQUEST_ID_HEADER] == "trace-123"

    @pytest.mark.asyncio
    async def test_ids_differ_between_requests(self, client: AsyncClient) -> None:
        first = await client.get("/api/health")
        second = await client.get("/api/health")

        assert first.headers[REQUEST_ID_HEADER] != second.headers[REQUEST_ID_HEADER]

    @pytest.mark.asyncio
    async def test_present_on_error_responses(self, client: AsyncClient) -> None:
        response = await client.get("/v1/missing")

        assert response.status_code == 404
        assert REQUEST_ID_HEADER in response.headers


class TestCORS:
    @pytest.mark.asyncio
    async def test_allowed_origin(self, client: AsyncClient) -> None:
        response = await client.get("/api/health", headers={"Origin": "http://localhost:3000"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


class TestSecurityHeadersMiddleware:
    """Tests for security headers middleware."""

    @pytest.mark.asyncio
    async def test_headers_on_api_responses(self, client: AsyncClient) -> None:
        response = await client.get("/api/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
        assert "frame-ancestors 'none'" in response.headers["Content-Security-Policy"]

    @pytest.mark.asyncio
    async def test_no_hsts_outside_production(self, client: AsyncClient) -> None:
        response = await client.get("/v1/")

        assert "Strict-Transport-Security" not in response.headers

    @pytest.mark.asyncio
    async def test_hsts_when_enabled(self) -> None:
        from fastapi import FastAPI
        from httpx import ASGITransport

        from api.middleware import SecurityHeadersMiddleware

        app = FastAPI()
        app.add_middleware(SecurityHeadersMiddleware, hsts=True)

        @app.get("/ping")
        async def ping() -> dict[str, str]:
            return {"status": "ok"}

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.get("/ping")

        assert response.headers["Strict-Transport-Security"].startswith("max-age=31536000")
