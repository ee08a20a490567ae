from fellowship.core.config import settings


async def test_health_reports_database(client):
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "Server is running"
    assert response.json()["database"] == "connected"


async def test_api_responses_carry_version_and_no_store(client):
    response = await client.get("/api/health")

    assert response.headers["X-Fellowship-Version"] == settings.APP_VERSION
    assert response.headers["Cache-Control"] == "no-store"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Process-Time"].endswith("ms")


async def test_root_is_cacheable(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert "Cache-Control" not in response.headers
    assert response.headers["X-Fellowship-Version"] == settings.APP_VERSION
