"""In-memory snapshot cache and durable disk mirror.

This package holds the published post snapshot shared with request handlers
and the on-disk copy used for cold start.
"""

from .disk_mirror import DiskMirror
from .errors import (
    MirrorError,
    DiskWriteError,
    DiskLoadError,
    MirrorNotFoundError,
    MirrorCorruptError,
)
from .snapshot_cache import SnapshotCache

__all__ = [
    'DiskMirror',
    'SnapshotCache',
    'MirrorError',
    'DiskWriteError',
    'DiskLoadError',
    'MirrorNotFoundError',
    'MirrorCorruptError',
]
