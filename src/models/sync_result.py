"""Sync pass result and status data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from src.github_client.errors import SyncError
from src.models.post import Post


@dataclass(frozen=True)
class SyncStatus:
    """Outcome of the most recent sync attempt.

    Updated on every attempt, whether or not the snapshot was replaced.

    Attributes:
        last_sync_at: When the most recent attempt finished (None before the first)
        last_error: Error of the most recent attempt; None once an attempt succeeds
    """
    last_sync_at: Optional[datetime] = None
    last_error: Optional[SyncError] = None

    @property
    def last_error_summary(self) -> Optional[str]:
        if self.last_error is None:
            return None
        return f"{type(self.last_error).__name__}: {self.last_error}"


@dataclass
class SyncResult:
    """Result of one synchronization pass.

    Attributes:
        posts: Posts produced, sorted by source_path descending
        raw_bodies: Raw markdown keyed by slug (later post wins on collision)
        error: Pass-level error, or None when the pass succeeded
        skipped: (path, reason) pairs for files that failed to fetch or render
        candidate_count: Number of markdown files the listing returned

    Example:
        >>> result = SyncResult(error=NoMarkdownFoundError("data"))
        >>> result.succeeded
        False
    """
    posts: List[Post] = field(default_factory=list)
    raw_bodies: Dict[str, str] = field(default_factory=dict)
    error: Optional[SyncError] = None
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    candidate_count: int = 0

    @property
    def succeeded(self) -> bool:
        return self.error is None
