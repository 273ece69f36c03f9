"""Sync pass wrapper that applies the publish policy.

This module provides the SyncService, which ties one sync pass to the shared
SnapshotCache and the DiskMirror. It is the callable the scheduler runs.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Optional

from src.cache.disk_mirror import DiskMirror
from src.cache.errors import DiskLoadError, DiskWriteError, MirrorCorruptError, MirrorNotFoundError
from src.cache.snapshot_cache import SnapshotCache
from src.content_converter.post_transformer import PostTransformer
from src.github_client.api_wrapper import GitHubClient
from src.models.mirror_config import MirrorConfig
from src.models.snapshot import Snapshot
from src.models.sync_result import SyncResult

from .errors import UnexpectedSyncError
from .orchestrator import sync_once
from .publish_policy import should_publish

logger = logging.getLogger(__name__)


class SyncService:
    """Runs sync passes and publishes their results.

    Every attempt updates the cache's status. Only a pass that passes
    should_publish replaces the Snapshot, and only a published Snapshot is
    written to the mirror.

    Example:
        >>> service = SyncService(config, client, transformer, cache, mirror)
        >>> service.bootstrap_from_disk()
        >>> result = service.run_sync()
    """

    def __init__(
        self,
        config: MirrorConfig,
        client: GitHubClient,
        transformer: PostTransformer,
        cache: SnapshotCache,
        mirror: DiskMirror,
        stop_event: Optional[threading.Event] = None,
    ):
        self.config = config
        self.client = client
        self.transformer = transformer
        self.cache = cache
        self.mirror = mirror
        self.stop_event = stop_event

    def run_sync(self) -> SyncResult:
        """Run one pass and apply its result.

        A mirror write failure is logged; the in-memory publish stands. An
        unexpected exception from the pass is logged and recorded as an
        UnexpectedSyncError, so the attempt always updates the status.

        Returns:
            The SyncResult of the pass
        """
        try:
            result = sync_once(self.config, self.client, self.transformer, self.stop_event)
        except Exception as e:
            logger.exception("Unexpected error during sync pass")
            error = UnexpectedSyncError(f"{type(e).__name__}: {e}")
            error.__cause__ = e
            result = SyncResult(error=error)
        now = datetime.now(timezone.utc)
        self.cache.record_attempt(now, result.error)

        if not should_publish(result):
            logger.warning(
                f"Keeping previous snapshot ({len(self.cache.snapshot())} post(s)): "
                f"{result.error}"
            )
            return result

        snapshot = Snapshot.build(result.posts, now)
        self.cache.publish(snapshot)

        try:
            self.mirror.save(snapshot, result.raw_bodies, self.config.repository_label)
        except DiskWriteError as e:
            logger.error(f"Failed to write disk mirror: {e}")

        return result

    def bootstrap_from_disk(self) -> bool:
        """Publish the mirrored snapshot, if any, before the first remote sync.

        Returns:
            True if a non-empty snapshot was loaded and published
        """
        try:
            snapshot = self.mirror.load(self.transformer)
        except MirrorNotFoundError:
            logger.info(f"No disk mirror at {self.mirror.mirror_dir}; starting empty")
            return False
        except MirrorCorruptError as e:
            logger.warning(f"Ignoring corrupt disk mirror: {e}")
            return False
        except DiskLoadError as e:
            logger.warning(f"Could not load disk mirror: {e}")
            return False

        if snapshot.is_empty():
            logger.info("Disk mirror holds no posts; starting empty")
            return False

        self.cache.publish(snapshot)
        return True
