"""
Directory Loader

Walks the posts directory and turns every valid post file into a
``PostRecord``. Bad files are logged and skipped; only a failure to list the
directory itself aborts the load.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

from .errors import DirectoryLoadError, PostRejected, PostSourceError
from .models import PostRecord
from .parser import FILENAME_PATTERN, parse_post

logger = logging.getLogger("mdblog.loader")

PathLike = Union[str, Path]


def _list_entries(directory: Path) -> List[Path]:
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        raise DirectoryLoadError(
            f"Cannot read posts directory {directory}: {exc}"
        ) from exc

    # Lexicographic order makes duplicate-slug resolution reproducible.
    return sorted(entries, key=lambda p: p.name)


def load_posts(directory: PathLike) -> List[PostRecord]:
    """
    Load every valid post in ``directory``.

    Returns
    -------
    List[PostRecord]
        Records in lexicographic filename order (not yet sorted by date).

    Raises
    ------
    DirectoryLoadError
        If the directory does not exist or cannot be listed.
    """
    root = Path(directory)
    records: List[PostRecord] = []

    for path in _list_entries(root):
        name = path.name

        if path.is_dir():
            continue

        if FILENAME_PATTERN.match(name) is None:
            logger.info("Skipping invalid filename: %s", name)
            continue

        try:
            data = path.read_bytes()
        except OSError as exc:
            logger.warning("Read error, skipping %s: %s", name, exc)
            continue

        try:
            parsed = parse_post(name, data)
        except PostRejected as exc:
            logger.warning("Skipping %s: %s", name, exc.reason)
            continue

        records.append(
            PostRecord(
                title=parsed.title,
                slug=parsed.slug,
                published_at=parsed.published_at,
                tags=parsed.tags,
                source_file=name,
            )
        )
        logger.debug("Loaded %s (%s)", parsed.title, name)

    logger.info("Loaded %d posts from %s", len(records), root)
    return records


def read_post_source(directory: PathLike, source_file: str) -> str:
    """
    Re-read the raw text of a post file.

    Raises
    ------
    PostSourceError
        If the name escapes the posts directory or the file cannot be read.
    """
    if not source_file or Path(source_file).name != source_file or source_file in (".", ".."):
        raise PostSourceError(f"Invalid post source name: {source_file!r}")

    path = Path(directory) / source_file
    try:
        data = path.read_bytes()
    except OSError as exc:
        logger.warning("Read error for %s: %s", source_file, exc)
        raise PostSourceError(f"Cannot read post {source_file}") from exc

    return data.decode("utf-8", errors="replace")
