"""Data models for posts, snapshots, sync results and configuration."""

from src.models.post import Post
from src.models.snapshot import Snapshot
from src.models.sync_result import SyncResult, SyncStatus
from src.models.mirror_config import MirrorConfig

__all__ = ['Post', 'Snapshot', 'SyncResult', 'SyncStatus', 'MirrorConfig']
