"""
Content Index

``ContentIndex`` is the handle shared by the HTTP layer and the change
watcher. It owns the posts directory, the page size and an ``IndexStore``.

Write side: ``reload()`` runs load -> build -> publish.
Read side: ``page``, ``by_slug``, ``by_tag``, ``search``, ``recent`` and
``read_body``. Each query grabs one snapshot reference up front and works
only on it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from .errors import PageNotFoundError, PostNotFoundError, TagNotFoundError
from .loader import load_posts, read_post_source
from .models import PostPage, PostRecord
from .parser import parse_front_matter
from .snapshot import Snapshot, build_snapshot
from .store import IndexStore

logger = logging.getLogger("mdblog.index")


class ContentIndex:
    """
    Query facade over the current snapshot of a posts directory.
    """

    def __init__(
        self,
        posts_dir: Union[str, Path],
        per_page: int = 5,
        store: Optional[IndexStore] = None,
    ) -> None:
        if per_page < 1:
            raise ValueError("per_page must be at least 1")

        self.posts_dir = Path(posts_dir)
        self.per_page = per_page
        self.store = store or IndexStore()

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def reload(self) -> Snapshot:
        """
        Rescan the posts directory and publish a new snapshot.

        Raises
        ------
        DirectoryLoadError
            If the directory cannot be listed. The previous snapshot, if any,
            stays live.
        """
        generation = self.store.next_generation()
        records = load_posts(self.posts_dir)
        snapshot = build_snapshot(records, generation=generation)

        if self.store.publish(snapshot):
            logger.info(
                "Posts reloaded: %d posts (generation %d)",
                len(snapshot),
                generation,
            )
        return snapshot

    def snapshot(self) -> Snapshot:
        return self.store.current()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def page(self, number: int) -> PostPage:
        """
        Return page ``number`` (1-based) of the newest-first listing.

        Page 1 always exists, even when there are no posts.

        Raises
        ------
        PageNotFoundError
            If ``number`` is below 1 or past the last page.
        """
        posts = self.store.current().posts
        total = len(posts)

        if number < 1:
            raise PageNotFoundError(f"Invalid page number: {number}")

        start = (number - 1) * self.per_page
        if start >= total and number != 1:
            raise PageNotFoundError(f"Page out of range: {number}")

        end = min(start + self.per_page, total)
        return PostPage(
            posts=list(posts[start:end]),
            number=number,
            total=total,
            has_prev=number > 1,
            has_next=end < total,
        )

    def by_slug(self, slug: str) -> PostRecord:
        record = self.store.current().get(slug)
        if record is None:
            raise PostNotFoundError(f"Post not found: {slug}")
        return record

    def by_tag(self, tag: str) -> List[PostRecord]:
        """
        Return the posts carrying ``tag``, newest first.

        Raises
        ------
        TagNotFoundError
            If no post has the tag.
        """
        posts = self.store.current().tagged(tag.strip().lower())
        if not posts:
            raise TagNotFoundError(f"Tag not found: {tag}")
        return posts

    def search(self, query: str) -> List[PostRecord]:
        """
        Case-insensitive substring match on titles and tags, newest first.

        A blank query matches nothing.
        """
        needle = query.strip().lower()
        if not needle:
            return []

        return [
            post
            for post in self.store.current().posts
            if needle in post.title.lower()
            or any(needle in tag for tag in post.tags)
        ]

    def recent(self, limit: int) -> List[PostRecord]:
        return list(self.store.current().posts[: max(limit, 0)])

    # ------------------------------------------------------------------
    # Raw content
    # ------------------------------------------------------------------

    def read_body(self, record: PostRecord) -> str:
        """
        Re-read ``record``'s file and return the Markdown body.

        Raises
        ------
        PostSourceError
            If the file vanished or cannot be read.
        """
        text = read_post_source(self.posts_dir, record.source_file)
        _, _, body = parse_front_matter(text)
        return body
