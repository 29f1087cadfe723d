"""
Content Errors

Exception taxonomy for the content index.

Categories
----------
- Per-item: ``PostRejected`` (bad filename or timestamp). The loader logs and
  skips the file; the rest of the load continues.
- Reload-fatal: ``DirectoryLoadError``. The reload attempt fails and the
  previously published snapshot stays live.
- Request-local: ``PostSourceError`` and the ``ContentNotFoundError`` family.
  They affect a single request only.
- Configuration: ``IndexNotReadyError`` (read before the first publish).
"""

from __future__ import annotations


class ContentError(RuntimeError):
    """Base error for content index failures."""


class PostRejected(ContentError):
    """Raised by the parser when a file cannot become a post."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"{filename}: {reason}")
        self.filename = filename
        self.reason = reason


class DirectoryLoadError(ContentError):
    """Raised when the posts directory itself cannot be listed."""


class PostSourceError(ContentError):
    """Raised when a post's source file cannot be re-read."""


class IndexNotReadyError(ContentError):
    """Raised when the index is queried before the first successful load."""


# ---------------------------------------------------------------------
# Lookup misses
# ---------------------------------------------------------------------

class ContentNotFoundError(LookupError):
    """Base class for query misses (translated to 404 by the HTTP layer)."""


class PageNotFoundError(ContentNotFoundError):
    pass


class PostNotFoundError(ContentNotFoundError):
    pass


class TagNotFoundError(ContentNotFoundError):
    pass
