"""
Devotionals API - Health and Middleware Tests
=============================================

What:  Tests for /health, /hello_world, request ids and the rate limiter.
"""

import pytest
from httpx import AsyncClient, ASGITransport

from devotional_api.main import create_app


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_ok(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_hello_world(self, test_client):
        response = await test_client.get("/hello_world")

        assert response.status_code == 200
        assert response.text == "Hello, World!"


class TestRequestIdMiddleware:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/hello_world")

        assert response.headers.get("X-Request-ID")


class TestRateLimit:

    @pytest.mark.asyncio
    async def test_limit_returns_429_with_retry_after(self, test_settings):
        app = create_app(test_settings.model_copy(update={"rate_limit_requests": 10}))
        await app.state.database.create_schema()
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                for _ in range(10):
                    assert (await client.get("/api/devotionals")).status_code == 200

                response = await client.get("/api/devotionals")

                assert response.status_code == 429
                assert response.json()["error"] == "rate_limit_exceeded"
                assert int(response.headers["Retry-After"]) >= 1

                # Probes are never limited
                assert (await client.get("/health")).status_code == 200
        finally:
            await app.state.database.dispose()
