"""Typed exceptions for sync pass failures.

A pass-level error means the pass produced nothing worth publishing; the
previously published snapshot is kept. Listing failures are reported with
ListFailedError from the GitHub client package.
"""

from src.github_client.errors import SyncError


class SyncPassError(SyncError):
    """Base exception for errors that abort a whole sync pass."""
    pass


class NoMarkdownFoundError(SyncPassError):
    """Raised when the listing succeeded but matched no markdown files.

    Treated as an error so that an emptied remote directory does not wipe a
    good cache.
    """

    def __init__(self, subdirectory: str):
        super().__init__(f"No markdown files found under '{subdirectory}'")
        self.subdirectory = subdirectory


class NothingRenderedError(SyncPassError):
    """Raised when every candidate file failed to fetch or render."""

    def __init__(self, candidate_count: int):
        super().__init__(
            f"None of the {candidate_count} markdown file(s) could be fetched and rendered"
        )
        self.candidate_count = candidate_count


class SyncCancelledError(SyncPassError):
    """Raised when a pass is interrupted by shutdown before completing."""

    def __init__(self, processed: int, total: int):
        super().__init__(f"Sync cancelled after {processed} of {total} file(s)")
        self.processed = processed
        self.total = total


class UnexpectedSyncError(SyncPassError):
    """Raised in place of an unanticipated exception escaping a pass.

    Recorded as the attempt's error so the status reflects the failure; the
    original exception is kept as ``__cause__``.
    """

    def __init__(self, reason: str):
        super().__init__(f"Sync pass failed unexpectedly: {reason}")
        self.reason = reason
