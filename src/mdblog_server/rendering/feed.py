"""
RSS Feed

Assembles an RSS 2.0 document for the newest posts and flattens Markdown
bodies into short plain-text excerpts for item descriptions.
"""

from __future__ import annotations

from datetime import datetime
from email.utils import format_datetime
from html import escape
from typing import Iterable, List, Mapping, Optional

from ..content.models import PostRecord

EXCERPT_COLLECT_LIMIT = 300


def plain_text_excerpt(body: str, limit: int = 200) -> str:
    """
    Flatten a Markdown body to a single line of plain text.

    Headings, code fences and blank lines are dropped and ``**``, ``*`` and
    backticks are stripped. Text longer than ``limit`` is cut and gets a
    trailing ``...``.
    """
    pieces: List[str] = []
    for raw_line in body.split("\n"):
        line = raw_line.strip()
        if not line or line.startswith("#") or line.startswith("```"):
            continue

        line = line.replace("**", "").replace("*", "").replace("`", "")
        if line:
            pieces.append(line)

        if len(" ".join(pieces)) > EXCERPT_COLLECT_LIMIT:
            break

    text = " ".join(pieces)
    if limit > 0 and len(text) > limit:
        return text[:limit] + "..."
    return text


def _item(post: PostRecord, base_url: str, description: str) -> str:
    link = f"{base_url}/post/{escape(post.slug)}"
    categories = "".join(
        f"\n      <category>{escape(tag)}</category>" for tag in post.tags
    )
    return (
        "\n    <item>"
        f"\n      <title>{escape(post.title)}</title>"
        f"\n      <description>{escape(description)}</description>"
        f"\n      <link>{link}</link>"
        f"\n      <guid>{link}</guid>"
        f"\n      <pubDate>{format_datetime(post.published_at)}</pubDate>"
        f"{categories}"
        "\n    </item>"
    )


def build_rss(
    posts: Iterable[PostRecord],
    site_title: str,
    base_url: str,
    descriptions: Optional[Mapping[str, str]] = None,
    built_at: Optional[datetime] = None,
) -> str:
    """
    Render an RSS 2.0 document.

    Parameters
    ----------
    posts : Iterable[PostRecord]
        Items in the order they should appear.

    site_title : str
        Channel title.

    base_url : str
        Scheme and host without a trailing slash, e.g. ``http://localhost:8080``.

    descriptions : Optional[Mapping[str, str]]
        Excerpts keyed by slug. Posts without one use their title.
    """
    descriptions = descriptions or {}
    built_at = built_at or datetime.now().astimezone()
    base_url = base_url.rstrip("/")
    title = escape(site_title)

    items = "".join(
        _item(post, base_url, descriptions.get(post.slug) or post.title)
        for post in posts
    )

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">\n'
        "  <channel>\n"
        f"    <title>{title}</title>\n"
        f"    <description>Latest posts from {title}</description>\n"
        f"    <link>{escape(base_url)}</link>\n"
        f'    <atom:link href="{escape(base_url)}/rss" rel="self" type="application/rss+xml"/>\n'
        f"    <lastBuildDate>{format_datetime(built_at)}</lastBuildDate>\n"
        "    <language>en-us</language>"
        f"{items}\n"
        "  </channel>\n"
        "</rss>"
    )
