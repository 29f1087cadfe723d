import pytest

from mdblog_server.content import (
    ContentIndex,
    DirectoryLoadError,
    IndexNotReadyError,
    PageNotFoundError,
    PostNotFoundError,
    PostSourceError,
    TagNotFoundError,
)
from tests.conftest import write_post


@pytest.fixture
def index(sample_posts):
    content_index = ContentIndex(sample_posts, per_page=2)
    content_index.reload()
    return content_index


def test_queries_before_reload_fail(posts_dir):
    with pytest.raises(IndexNotReadyError):
        ContentIndex(posts_dir).page(1)


def test_per_page_must_be_positive(posts_dir):
    with pytest.raises(ValueError):
        ContentIndex(posts_dir, per_page=0)


class TestPage:

    def test_first_page(self, index):
        page = index.page(1)
        assert [p.slug for p in page.posts] == ["notitle", "python-tips"]
        assert page.total == 3
        assert not page.has_prev
        assert page.has_next

    def test_last_page(self, index):
        page = index.page(2)
        assert [p.slug for p in page.posts] == ["hello-world"]
        assert page.has_prev
        assert not page.has_next
        assert page.prev_url == "/"

    def test_out_of_range(self, index):
        with pytest.raises(PageNotFoundError):
            index.page(3)

    @pytest.mark.parametrize("number", [0, -1])
    def test_below_one(self, index, number):
        with pytest.raises(PageNotFoundError):
            index.page(number)

    def test_empty_index_first_page(self, posts_dir):
        content_index = ContentIndex(posts_dir)
        content_index.reload()

        page = content_index.page(1)

        assert page.posts == []
        assert not page.has_prev
        assert not page.has_next

    def test_page_two_of_three_posts(self, sample_posts):
        content_index = ContentIndex(sample_posts, per_page=5)
        content_index.reload()
        with pytest.raises(PageNotFoundError):
            content_index.page(2)


class TestLookups:

    def test_by_slug(self, index):
        assert index.by_slug("hello-world").title == "Hello World"

    def test_by_slug_missing(self, index):
        with pytest.raises(PostNotFoundError):
            index.by_slug("nope")

    def test_by_tag(self, index):
        assert [p.slug for p in index.by_tag("web")] == ["python-tips", "hello-world"]

    def test_by_tag_is_case_insensitive(self, index):
        assert [p.slug for p in index.by_tag("GO")] == ["hello-world"]

    def test_by_tag_missing(self, index):
        with pytest.raises(TagNotFoundError):
            index.by_tag("rust")


class TestSearch:

    def test_matches_title(self, index):
        assert [p.slug for p in index.search("HELLO")] == ["hello-world"]

    def test_matches_tag_substring(self, index):
        assert [p.slug for p in index.search("we")] == ["python-tips", "hello-world"]

    def test_no_match(self, index):
        assert index.search("zzz") == []

    def test_blank_query(self, index):
        assert index.search("   ") == []


class TestReload:

    def test_picks_up_new_files(self, index, sample_posts):
        write_post(sample_posts, "20250101-fresh.md", "title: Fresh\n\n")
        index.reload()
        assert index.page(1).posts[0].slug == "fresh"

    def test_failed_reload_keeps_previous_snapshot(self, index, sample_posts, tmp_path):
        before = index.snapshot()
        index.posts_dir = tmp_path / "missing"

        with pytest.raises(DirectoryLoadError):
            index.reload()

        assert index.snapshot() is before
        assert index.by_slug("hello-world")

    def test_generation_advances(self, index):
        first = index.snapshot().generation
        index.reload()
        assert index.snapshot().generation == first + 1


class TestReadBody:

    def test_returns_body_without_front_matter(self, index):
        body = index.read_body(index.by_slug("hello-world"))
        assert body == "Body text\n"

    def test_deleted_file(self, index, sample_posts):
        record = index.by_slug("hello-world")
        (sample_posts / record.source_file).unlink()
        with pytest.raises(PostSourceError):
            index.read_body(record)


def test_recent(index):
    assert [p.slug for p in index.recent(2)] == ["notitle", "python-tips"]
    assert index.recent(0) == []
