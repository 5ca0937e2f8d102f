"""Tests for API endpoints."""

from unittest.mock import AsyncMock

import pytest

from shortener.database.memory import InMemoryURLStore
from shortener.errors import UnavailableError
from shortener.service import URLShortenerService
from web_app import create_app
from httpx import ASGITransport, AsyncClient


class TestAPIEndpoints:
    """Test API endpoints."""

    async def test_shorten_url(self, client, sample_urls):
        response = await client.post("/api/v1/shorten", json={"long_url": sample_urls[0]})

        assert response.status_code == 201
        data = response.json()
        assert len(data["short_code"]) == 8
        assert data["long_url"] == sample_urls[0]
        assert data["short_url"] == f"http://testserver/{data['short_code']}"
        assert "created_at" in data

    async def test_shorten_behind_proxy(self, client, sample_urls):
        response = await client.post(
            "/api/v1/shorten",
            json={"long_url": sample_urls[0]},
            headers={"X-Forwarded-Proto": "https", "X-Forwarded-Host": "sho.rt"},
        )

        data = response.json()
        assert data["short_url"] == f"https://sho.rt/{data['short_code']}"

    @pytest.mark.parametrize("body", [{"long_url": "not-a-url"}, {"long_url": ""}, {}, {"url": "https://example.com"}])
    async def test_shorten_bad_request(self, client, body):
        response = await client.post("/api/v1/shorten", json=body)

        assert response.status_code == 400
        assert "error" in response.json()

    async def test_shorten_malformed_json(self, client):
        response = await client.post(
            "/api/v1/shorten",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400

    async def test_list_urls(self, client, sample_urls):
        for url in sample_urls[:2]:
            await client.post("/api/v1/shorten", json={"long_url": url})

        response = await client.get("/api/v1/shorten")

        assert response.status_code == 200
        assert [item["long_url"] for item in response.json()] == sample_urls[:2]

    async def test_list_urls_empty(self, client):
        response = await client.get("/api/v1/shorten")

        assert response.status_code == 200
        assert response.json() == []

    async def test_get_url_details(self, client, sample_urls):
        created = (await client.post("/api/v1/shorten", json={"long_url": sample_urls[1]})).json()

        response = await client.get(f"/api/v1/{created['short_code']}")

        assert response.status_code == 200
        assert response.json() == created

    async def test_get_url_details_not_found(self, client):
        response = await client.get("/api/v1/nothere1")

        assert response.status_code == 404

    async def test_get_url_details_malformed(self, client):
        response = await client.get("/api/v1/way-too-long-code")

        assert response.status_code == 400

    async def test_redirect(self, client, sample_urls):
        created = (await client.post("/api/v1/shorten", json={"long_url": sample_urls[2]})).json()

        response = await client.get(f"/{created['short_code']}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == sample_urls[2]

    async def test_redirect_unknown_code(self, client):
        response = await client.get("/nothere1", follow_redirects=False)

        assert response.status_code == 404
        assert response.json()["error"] == "Not found"

    async def test_redirect_malformed_code(self, client):
        response = await client.get("/bad_code", follow_redirects=False)

        assert response.status_code == 400

    async def test_delete(self, client, sample_urls):
        created = (await client.post("/api/v1/shorten", json={"long_url": sample_urls[0]})).json()
        code = created["short_code"]

        # Warm the cache through a redirect first
        assert (await client.get(f"/{code}", follow_redirects=False)).status_code == 302

        response = await client.delete(f"/api/v1/{code}")
        assert response.status_code == 200
        assert response.json() == {"message": "short url deleted successfully"}

        assert (await client.get(f"/{code}", follow_redirects=False)).status_code == 404
        assert (await client.delete(f"/api/v1/{code}")).status_code == 404

    async def test_health_check(self, client):
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == "1.0.0"
        assert data["database"] == "healthy"


class TestAPIErrors:
    """Service failures mapped to status codes."""

    async def _client(self, service, config):
        app = create_app(service_instance=service, config=config)
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")

    async def test_exhausted_retries_is_server_error(self, store, config, fixed_generator):
        await store.insert("https://taken.example.com", "AAAAAAAA")
        service = URLShortenerService(store=store, short_code_generator=fixed_generator("AAAAAAAA"))

        async with await self._client(service, config) as client:
            response = await client.post("/api/v1/shorten", json={"long_url": "https://example.com"})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to create short URL"

    async def test_unavailable_store(self, config):
        store = AsyncMock(spec=InMemoryURLStore)
        store.find_by_code.side_effect = UnavailableError("Store unavailable: timeout")
        store.health_check.return_value = False
        service = URLShortenerService(store=store)

        async with await self._client(service, config) as client:
            redirect = await client.get("/abcd1234", follow_redirects=False)
            health = await client.get("/api/v1/health")

        assert redirect.status_code == 503
        assert health.status_code == 200
        assert health.json()["status"] == "degraded"
        assert health.json()["database"] == "unhealthy"
