"""Sync pass orchestration and scheduling.

This package runs sync passes against the remote repository, decides whether
their result may replace the published snapshot, and repeats them on a timer.
"""

from .errors import (
    SyncPassError,
    NoMarkdownFoundError,
    NothingRenderedError,
    SyncCancelledError,
    UnexpectedSyncError,
)
from .orchestrator import sync_once
from .publish_policy import should_publish
from .scheduler import SyncScheduler
from .sync_service import SyncService

__all__ = [
    "SyncPassError",
    "NoMarkdownFoundError",
    "NothingRenderedError",
    "SyncCancelledError",
    "UnexpectedSyncError",
    "sync_once",
    "should_publish",
    "SyncScheduler",
    "SyncService",
]
