"""
Content Data Models

This module defines the canonical record for a single post in the content
index. Records carry metadata only; the Markdown body is re-read from disk
whenever a page needs it.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class PostRecord(BaseModel):
    """
    Metadata for one post file.

    Instances are immutable so they can be shared between snapshots and
    request handlers without copying.
    """

    title: str = Field(
        ...,
        description="Display title from front matter, or derived from the slug.",
    )

    slug: str = Field(
        ...,
        min_length=1,
        description="URL identifier taken from the filename; unique per snapshot.",
    )

    published_at: datetime = Field(
        ...,
        description="Local-time timestamp parsed from the filename prefix.",
    )

    tags: Tuple[str, ...] = Field(
        default=(),
        description="Lowercase tags in the order the author wrote them.",
    )

    source_file: str = Field(
        ...,
        min_length=1,
        description="Filename relative to the posts directory.",
    )

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


class PostPage(BaseModel):
    """
    One page of the chronological post listing.
    """

    posts: List[PostRecord]
    number: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    has_prev: bool
    has_next: bool

    model_config = ConfigDict(frozen=True)

    @property
    def prev_url(self) -> str:
        return "/" if self.number <= 2 else f"/page/{self.number - 1}"

    @property
    def next_url(self) -> str:
        return f"/page/{self.number + 1}"
