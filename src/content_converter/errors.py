"""Typed exceptions for markdown conversion errors."""

from src.github_client.errors import SyncError


class ConversionError(SyncError):
    """Base exception for content conversion failures."""
    pass


class RenderError(ConversionError):
    """Raised when a markdown document cannot be rendered to HTML.

    Per-file: the sync pass skips the document and carries on.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"Rendering {path} failed: {reason}")
        self.path = path
        self.reason = reason
