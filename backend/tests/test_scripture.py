import httpx
import pytest

from conftest import auth_headers
from fellowship.services.scripture_service import (
    DAILY_EMPTY_FALLBACK,
    DAILY_ERROR_FALLBACK,
    RANDOM_ERROR_FALLBACK,
    scripture_service,
)


@pytest.fixture
def verse_api(monkeypatch):
    """Route the verse client through a handler the test supplies."""
    def _install(handler):
        monkeypatch.setattr(
            scripture_service,
            "client_factory",
            lambda: httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
    return _install


async def test_daily_verse_passes_upstream_payload_through(client, make_user, verse_api):
    requested = []

    def handler(request):
        requested.append(request.url.path)
        return httpx.Response(200, json={"reference": "John 3:16", "text": "For God so loved", "translation_name": "WEB"})

    verse_api(handler)
    response = await client.get("/api/scripture/daily", headers=auth_headers(await make_user()))

    assert response.status_code == 200
    assert response.json()["translation_name"] == "WEB"
    assert len(requested) == 1
    assert requested[0].startswith("/john")


async def test_daily_verse_without_text_serves_fallback(client, make_user, verse_api):
    verse_api(lambda request: httpx.Response(200, json={"reference": "John 3:16", "text": ""}))

    response = await client.get("/api/scripture/daily", headers=auth_headers(await make_user()))

    assert response.status_code == 200
    assert response.json() == DAILY_EMPTY_FALLBACK


async def test_unreachable_upstream_serves_error_fallbacks(client, make_user, verse_api):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    verse_api(handler)
    headers = auth_headers(await make_user())
    daily = await client.get("/api/scripture/daily", headers=headers)
    random_verse = await client.get("/api/scripture/random", headers=headers)

    assert daily.status_code == 200
    assert daily.json() == DAILY_ERROR_FALLBACK
    assert random_verse.json() == RANDOM_ERROR_FALLBACK


async def test_upstream_error_status_serves_fallback(client, make_user, verse_api):
    verse_api(lambda request: httpx.Response(503, text="busy"))

    response = await client.get("/api/scripture/random", headers=auth_headers(await make_user()))

    assert response.json() == RANDOM_ERROR_FALLBACK


async def test_scripture_requires_login(client):
    response = await client.get("/api/scripture/daily")

    assert response.status_code == 401
