"""
Index Snapshot

A ``Snapshot`` is an immutable, fully built view of the posts directory at one
point in time: posts in newest-first order plus slug and tag lookups that
point into that order.

Snapshots are never mutated after ``build_snapshot`` returns. A reload builds
a new one off to the side and the store swaps the reference.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .models import PostRecord

logger = logging.getLogger("mdblog.index")


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Snapshot:
    posts: Tuple[PostRecord, ...] = ()
    by_slug: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    by_tag: Mapping[str, Tuple[int, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    generation: int = 0
    loaded_at: datetime = field(default_factory=_now)

    def __len__(self) -> int:
        return len(self.posts)

    def get(self, slug: str) -> Optional[PostRecord]:
        """Return the post for ``slug`` or ``None``."""
        pos = self.by_slug.get(slug)
        return None if pos is None else self.posts[pos]

    def tagged(self, tag: str) -> List[PostRecord]:
        return [self.posts[i] for i in self.by_tag.get(tag, ())]

    def tags(self) -> List[str]:
        return sorted(self.by_tag)

    def same_content(self, other: "Snapshot") -> bool:
        """Structural equality of the indexes, ignoring generation and build time."""
        return (
            self.posts == other.posts
            and dict(self.by_slug) == dict(other.by_slug)
            and dict(self.by_tag) == dict(other.by_tag)
        )


def _dedupe_slugs(records: Iterable[PostRecord]) -> List[PostRecord]:
    """Keep the last record for each slug, in first-seen slug order."""
    chosen: Dict[str, PostRecord] = {}
    for record in records:
        previous = chosen.get(record.slug)
        if previous is not None:
            logger.warning(
                "Duplicate slug %r: %s replaces %s",
                record.slug,
                record.source_file,
                previous.source_file,
            )
        chosen[record.slug] = record
    return list(chosen.values())


def build_snapshot(records: Iterable[PostRecord], generation: int = 0) -> Snapshot:
    """
    Build a snapshot from a batch of records.

    Parameters
    ----------
    records : Iterable[PostRecord]
        Loader output. On duplicate slugs the later record wins.

    generation : int
        Reload sequence number assigned by the store.

    Returns
    -------
    Snapshot
        Posts sorted newest first. Equal timestamps keep batch order.
    """
    unique = _dedupe_slugs(records)
    posts = tuple(sorted(unique, key=lambda r: r.published_at, reverse=True))

    by_slug: Dict[str, int] = {}
    by_tag: Dict[str, List[int]] = {}
    for pos, post in enumerate(posts):
        by_slug[post.slug] = pos
        for tag in post.tags:
            by_tag.setdefault(tag, []).append(pos)

    return Snapshot(
        posts=posts,
        by_slug=MappingProxyType(by_slug),
        by_tag=MappingProxyType({t: tuple(p) for t, p in by_tag.items()}),
        generation=generation,
    )
