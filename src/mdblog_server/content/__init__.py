"""
Content Index Package

Parses the posts directory into immutable snapshots, publishes them through
an ``IndexStore`` and keeps them fresh with a filesystem watcher.
"""

from .errors import (
    ContentError,
    ContentNotFoundError,
    DirectoryLoadError,
    IndexNotReadyError,
    PageNotFoundError,
    PostNotFoundError,
    PostRejected,
    PostSourceError,
    TagNotFoundError,
)
from .models import PostPage, PostRecord
from .service import ContentIndex
from .snapshot import Snapshot, build_snapshot
from .store import IndexStore
from .watcher import ContentWatcher

__all__ = [
    "ContentError",
    "ContentNotFoundError",
    "DirectoryLoadError",
    "IndexNotReadyError",
    "PageNotFoundError",
    "PostNotFoundError",
    "PostRejected",
    "PostSourceError",
    "TagNotFoundError",
    "PostPage",
    "PostRecord",
    "ContentIndex",
    "Snapshot",
    "build_snapshot",
    "IndexStore",
    "ContentWatcher",
]
