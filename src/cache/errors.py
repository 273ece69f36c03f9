"""Typed exception hierarchy for disk mirror errors.

All exceptions inherit from MirrorError so callers can treat any mirror
problem uniformly. None of them is fatal to the process: write failures are
logged after an in-memory publish, and load failures mean "no prior state".
"""

from typing import Optional

from src.github_client.errors import SyncError


class MirrorError(SyncError):
    """Base exception for all disk mirror errors."""
    pass


class DiskWriteError(MirrorError):
    """Raised when writing the mirror (bodies or manifest) fails."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Mirror operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class DiskLoadError(MirrorError):
    """Base exception for failures loading the mirror at startup."""

    def __init__(self, manifest_path: str, message: str):
        super().__init__(f"Cannot load mirror manifest {manifest_path}: {message}")
        self.manifest_path = manifest_path


class MirrorNotFoundError(DiskLoadError):
    """Raised when no manifest exists yet (first run)."""

    def __init__(self, manifest_path: str):
        super().__init__(manifest_path, "manifest not found")


class MirrorCorruptError(DiskLoadError):
    """Raised when the manifest cannot be parsed or has the wrong shape."""
    pass
