from pathlib import Path

import pytest


def write_post(directory: Path, name: str, content: str = "") -> Path:
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def posts_dir(tmp_path):
    directory = tmp_path / "posts"
    directory.mkdir()
    return directory


@pytest.fixture
def sample_posts(posts_dir):
    """Three posts across two tags plus one file that is not a post."""
    write_post(
        posts_dir,
        "20240101-hello-world.md",
        "title: Hello World\ntag: go, web\n\nBody text\n",
    )
    write_post(
        posts_dir,
        "20240215093000-python-tips.md",
        "title: Python Tips\ntag: python, web\n\n# Tips\n\nUse **pathlib**.\n",
    )
    write_post(posts_dir, "20240301-notitle.md", "\nJust a body.\n")
    write_post(posts_dir, "badname.md", "title: Ignored\n\nnope\n")
    return posts_dir
