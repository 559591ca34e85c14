"""Health, index and page endpoint tests."""

import pytest
from httpx import AsyncClient


@pytest.mark.api
@pytest.mark.asyncio
class TestServiceEndpoints:

    async def test_health(self, client: AsyncClient):
        resp = await client.get("/health")

        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    async def test_readiness_with_cache_disabled(self, client: AsyncClient):
        resp = await client.get("/health/ready")

        assert resp.status_code == 200
        assert resp.json()["checks"] == {
            "service": "ok",
            "database": "ok",
            "redis": "disabled",
        }

    async def test_api_index(self, client: AsyncClient):
        resp = await client.get("/api")

        assert resp.status_code == 200
        assert resp.json()["endpoints"]["sensor_data"] == "/api/sensor-data"

    @pytest.mark.parametrize("path", ["/", "/dashboard", "/log-reading"])
    async def test_pages_served(self, client: AsyncClient, path):
        resp = await client.get(path)

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")

    async def test_static_asset(self, client: AsyncClient):
        resp = await client.get("/static/js/dashboard.js")
        assert resp.status_code == 200

    async def test_unknown_route_uses_error_envelope(self, client: AsyncClient):
        resp = await client.get("/api/nothing-here")

        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "HTTP_404"
