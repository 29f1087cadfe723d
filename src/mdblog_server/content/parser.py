"""
Post File Parser

Pure functions that turn a post filename and its raw bytes into a validated
``ParsedPost``, or raise ``PostRejected`` with the reason the file was refused.

File layout
-----------
Filenames follow ``<YYYYMMDD>-<slug>.md`` or ``<YYYYMMDDhhmmss>-<slug>.md``.
The file starts with optional front matter lines::

    title: Hello World
    tag: python, web

followed by a blank line and the Markdown body. Only the leading contiguous
lines count as front matter.

Nothing in this module touches the filesystem.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from .errors import PostRejected


# ---------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------

FILENAME_PATTERN = re.compile(r"^(\d{8}|\d{14})-(.+?)\.md$")

DATE_FORMAT = "%Y%m%d"
DATETIME_FORMAT = "%Y%m%d%H%M%S"

TITLE_PREFIX = "title:"
TAG_PREFIX = "tag:"


@dataclass(frozen=True)
class ParsedPost:
    """Successful parser output for a single file."""

    title: str
    slug: str
    tags: Tuple[str, ...]
    body: str
    published_at: datetime


# ---------------------------------------------------------------------
# Filename & timestamp
# ---------------------------------------------------------------------

def parse_filename(filename: str) -> Tuple[str, str]:
    """
    Split a post filename into its timestamp digits and slug.

    Raises
    ------
    PostRejected
        If the name does not match the post filename pattern.
    """
    match = FILENAME_PATTERN.match(filename)
    if match is None:
        raise PostRejected(filename, "invalid filename pattern")
    return match.group(1), match.group(2)


def parse_timestamp(digits: str, filename: str = "") -> datetime:
    """
    Parse an 8-digit date or 14-digit date-time in the local timezone.

    Dates resolve to local midnight. The returned datetime is timezone-aware.
    """
    if len(digits) == 8:
        fmt = DATE_FORMAT
    elif len(digits) == 14:
        fmt = DATETIME_FORMAT
    else:
        raise PostRejected(filename or digits, "invalid timestamp length")

    try:
        naive = datetime.strptime(digits, fmt)
    except ValueError as exc:
        raise PostRejected(filename or digits, "invalid timestamp") from exc

    return naive.astimezone()


# ---------------------------------------------------------------------
# Front matter
# ---------------------------------------------------------------------

def split_tags(value: str) -> List[str]:
    """Split a ``tag:`` value into lowercase, non-empty, unique tags."""
    tags: List[str] = []
    for piece in value.split(","):
        tag = piece.strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def parse_front_matter(text: str) -> Tuple[Optional[str], Tuple[str, ...], str]:
    """
    Extract ``(title, tags, body)`` from the text of a post.

    Front matter ends at the first blank line. Everything after it is the
    body, returned verbatim. A file without a blank line is all body.
    """
    lines = text.split("\n")
    title: Optional[str] = None
    tags: List[str] = []
    body_start = 0

    for i, raw_line in enumerate(lines):
        line = raw_line.strip()
        if not line:
            body_start = i + 1
            break

        if line.startswith(TITLE_PREFIX):
            title = line[len(TITLE_PREFIX):].strip()
        elif line.startswith(TAG_PREFIX):
            for tag in split_tags(line[len(TAG_PREFIX):]):
                if tag not in tags:
                    tags.append(tag)

    body = "\n".join(lines[body_start:])
    return title, tuple(tags), body


def derive_title_from_slug(slug: str) -> str:
    """``hello-world`` -> ``Hello World``."""
    parts = slug.split("-")
    return " ".join(part[:1].upper() + part[1:] for part in parts)


# ---------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------

def parse_post(filename: str, data: bytes) -> ParsedPost:
    """
    Parse a post file.

    Parameters
    ----------
    filename : str
        Bare filename (no directory component).

    data : bytes
        Raw file content. Undecodable UTF-8 sequences are replaced.

    Returns
    -------
    ParsedPost

    Raises
    ------
    PostRejected
        If the filename or its timestamp is invalid.
    """
    digits, slug = parse_filename(filename)
    published_at = parse_timestamp(digits, filename)

    text = data.decode("utf-8", errors="replace")
    title, tags, body = parse_front_matter(text)
    if not title:
        title = derive_title_from_slug(slug)

    return ParsedPost(
        title=title,
        slug=slug,
        tags=tags,
        body=body,
        published_at=published_at,
    )
