"""Decision rule for replacing the published snapshot."""

from src.models.sync_result import SyncResult


def should_publish(result: SyncResult) -> bool:
    """Return True only for a pass that has no error and at least one post.

    A failed or empty pass keeps the existing snapshot (stale but available).
    """
    return result.error is None and len(result.posts) > 0
