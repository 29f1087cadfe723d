"""
Index Store

Single point of truth for "the current snapshot".

Design choices
--------------
- Readers take the live reference with a plain attribute read. They never
  wait on a reload's build phase.
- Writers serialise on a lock that only covers the generation check and the
  reference swap.
- Snapshots carry a generation number reserved before the build starts. A
  snapshot older than the live one is refused, so readers never observe the
  index going backwards when two reloads overlap.
"""

from __future__ import annotations

import itertools
import logging
from threading import Lock
from typing import Optional

from .errors import IndexNotReadyError
from .snapshot import Snapshot

logger = logging.getLogger("mdblog.store")


class IndexStore:
    """
    Holds exactly one live ``Snapshot``.

    One instance exists per ``ContentIndex``; tests can create as many as they
    need.
    """

    def __init__(self) -> None:
        self._snapshot: Optional[Snapshot] = None
        self._write_lock = Lock()
        self._generations = itertools.count(1)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def next_generation(self) -> int:
        """Reserve the sequence number for a reload that is about to start."""
        with self._write_lock:
            return next(self._generations)

    def publish(self, snapshot: Snapshot) -> bool:
        """
        Make ``snapshot`` the live snapshot.

        Returns
        -------
        bool
            False if a newer snapshot is already live and ``snapshot`` was
            discarded.
        """
        with self._write_lock:
            live = self._snapshot
            if live is not None and snapshot.generation < live.generation:
                logger.info(
                    "Discarding stale snapshot generation %d (live is %d)",
                    snapshot.generation,
                    live.generation,
                )
                return False

            self._snapshot = snapshot

        logger.debug(
            "Published snapshot generation %d with %d posts",
            snapshot.generation,
            len(snapshot),
        )
        return True

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def current(self) -> Snapshot:
        """
        Return the live snapshot.

        Raises
        ------
        IndexNotReadyError
            If nothing has been published yet.
        """
        snapshot = self._snapshot
        if snapshot is None:
            raise IndexNotReadyError("Content index has not been loaded")
        return snapshot

    @property
    def is_ready(self) -> bool:
        return self._snapshot is not None
