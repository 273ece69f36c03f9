"""Thread-safe holder of the published snapshot and sync status.

The SnapshotCache is the only mutable state shared between the sync thread
and request handlers. It is passed around as an explicit handle; there is no
module-level instance.
"""

import logging
import threading
from datetime import datetime
from typing import Optional, Tuple

from src.github_client.errors import SyncError
from src.models.post import Post
from src.models.snapshot import Snapshot
from src.models.sync_result import SyncStatus

logger = logging.getLogger(__name__)


class SnapshotCache:
    """Holds the current Snapshot and SyncStatus behind a private lock.

    Snapshots and statuses are immutable, so the lock only guards swapping
    references; readers copy two references and never wait on rendering,
    network or disk work. A reader therefore always observes one complete
    Snapshot, either the previous generation or the new one.

    Example:
        >>> cache = SnapshotCache()
        >>> cache.publish(Snapshot.build(posts, now))
        >>> posts, status = cache.read()
    """

    def __init__(self, initial: Optional[Snapshot] = None):
        self._lock = threading.Lock()
        self._snapshot = initial if initial is not None else Snapshot.empty()
        self._status = SyncStatus()

    def read(self) -> Tuple[Tuple[Post, ...], SyncStatus]:
        """Return the published posts and the current status."""
        with self._lock:
            return self._snapshot.posts, self._status

    def snapshot(self) -> Snapshot:
        """Return the published Snapshot."""
        with self._lock:
            return self._snapshot

    def status(self) -> SyncStatus:
        with self._lock:
            return self._status

    def get(self, slug: str) -> Optional[Post]:
        """Look up a post by slug in the published Snapshot."""
        return self.snapshot().index.get(slug)

    def publish(self, snapshot: Snapshot) -> None:
        """Replace the published Snapshot as a unit.

        Args:
            snapshot: The new generation
        """
        with self._lock:
            previous = self._snapshot
            self._snapshot = snapshot
        logger.info(
            f"Published snapshot with {len(snapshot)} post(s) "
            f"(previously {len(previous)})"
        )

    def record_attempt(self, at: datetime, error: Optional[SyncError]) -> None:
        """Record the outcome of a sync attempt.

        Called on every attempt, whether or not a Snapshot was published. A
        successful attempt (error=None) clears the previous error.

        Args:
            at: When the attempt finished
            error: Pass-level error, or None on success
        """
        with self._lock:
            self._status = SyncStatus(last_sync_at=at, last_error=error)
