import pytest
from fastapi.testclient import TestClient

from mdblog_server.config import Settings
from mdblog_server.content import DirectoryLoadError
from mdblog_server.main import create_app
from tests.conftest import write_post


def make_settings(posts_dir, **overrides):
    values = {
        "posts_dir": str(posts_dir),
        "per_page": 2,
        "site_title": "Test Blog",
        "static_dir": str(posts_dir / "no-static"),
        "watch_enabled": False,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def client(sample_posts):
    app = create_app(make_settings(sample_posts))
    with TestClient(app) as c:
        yield c


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["posts"] == 3
    assert data["generation"] == 1


def test_index_lists_newest_first(client):
    resp = client.get("/")
    assert resp.status_code == 200
    body = resp.text
    assert "<title>Test Blog</title>" in body
    assert body.index("/post/notitle") < body.index("/post/python-tips")
    assert "/post/hello-world" not in body
    assert 'href="/page/2"' in body


def test_second_page(client):
    resp = client.get("/page/2")
    assert resp.status_code == 200
    assert "/post/hello-world" in resp.text


@pytest.mark.parametrize("path", ["/page/3", "/page/0", "/page/abc", "/page/-1"])
def test_bad_pages_are_404(client, path):
    resp = client.get(path)
    assert resp.status_code == 404
    assert "Page not found" in resp.text


def test_post_renders_markdown(client):
    resp = client.get("/post/python-tips")
    assert resp.status_code == 200
    assert "<h1>Tips</h1>" in resp.text
    assert "<strong>pathlib</strong>" in resp.text
    assert "Test Blog · Python Tips" in resp.text


def test_missing_post_is_404(client):
    assert client.get("/post/nope").status_code == 404


def test_deleted_post_file_is_500(client, sample_posts):
    (sample_posts / "20240101-hello-world.md").unlink()
    resp = client.get("/post/hello-world")
    assert resp.status_code == 500
    assert resp.text == "cannot read post"


def test_tag_page(client):
    resp = client.get("/tag/web")
    assert resp.status_code == 200
    assert resp.text.index("/post/python-tips") < resp.text.index("/post/hello-world")


def test_unknown_tag_is_404(client):
    assert client.get("/tag/rust").status_code == 404


def test_search(client):
    resp = client.get("/search", params={"q": "Python"})
    assert resp.status_code == 200
    assert "/post/python-tips" in resp.text
    assert "/post/hello-world" not in resp.text


def test_search_without_results(client):
    resp = client.get("/search", params={"q": "zzz"})
    assert resp.status_code == 200
    assert "No posts found." in resp.text


@pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "   "}])
def test_empty_search_redirects_home(client, params):
    resp = client.get("/search", params=params, follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/"


def test_unknown_route_renders_404(client):
    resp = client.get("/does/not/exist")
    assert resp.status_code == 404
    assert "Page not found" in resp.text


def test_rss(client):
    resp = client.get("/rss")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/rss+xml")
    xml = resp.text
    assert "<title>Test Blog</title>" in xml
    assert "<link>http://testserver/post/hello-world</link>" in xml
    assert "<category>python</category>" in xml
    assert "<description>Use pathlib.</description>" in xml


def test_reload_is_visible_to_requests(client, sample_posts):
    write_post(sample_posts, "20250101-fresh.md", "title: Fresh\n\nNew.\n")
    client.app.state.content_index.reload()

    assert client.get("/post/fresh").status_code == 200


def test_empty_directory_home_page(posts_dir):
    app = create_app(make_settings(posts_dir))
    with TestClient(app) as c:
        resp = c.get("/")
        assert resp.status_code == 200
        assert "No posts found." in resp.text
        assert c.get("/page/2").status_code == 404


def test_startup_fails_without_posts_directory(tmp_path):
    app = create_app(make_settings(tmp_path / "missing"))
    with pytest.raises(DirectoryLoadError):
        with TestClient(app):
            pass


def test_static_files_are_served(sample_posts, tmp_path):
    static = tmp_path / "static"
    static.mkdir()
    (static / "style.css").write_text("body {}", encoding="utf-8")

    app = create_app(make_settings(sample_posts, static_dir=str(static)))
    with TestClient(app) as c:
        resp = c.get("/static/style.css")
        assert resp.status_code == 200
        assert resp.text == "body {}"


def test_watcher_started_when_enabled(sample_posts):
    app = create_app(make_settings(sample_posts, watch_enabled=True))
    with TestClient(app) as c:
        assert c.app.state.watcher.is_running
    assert not app.state.watcher.is_running
