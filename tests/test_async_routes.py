import pytest
from httpx import ASGITransport, AsyncClient

from mdblog_server.main import create_app
from tests.test_routes import make_settings


@pytest.fixture
async def async_client(sample_posts):
    app = create_app(make_settings(sample_posts))
    # ASGITransport does not run the lifespan, so load the index here
    app.state.content_index.reload()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.mark.asyncio
async def test_health(async_client):
    resp = await async_client.get("/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["posts"] == 3


@pytest.mark.asyncio
async def test_rss_feed(async_client):
    resp = await async_client.get("/rss")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/rss+xml")
    assert "<title>Hello World</title>" in resp.text
    assert "http://test/post/python-tips" in resp.text


@pytest.mark.asyncio
async def test_unknown_post_is_404(async_client):
    resp = await async_client.get("/post/missing")

    assert resp.status_code == 404
