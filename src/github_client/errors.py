"""Typed exception hierarchy for GitHub-related errors.

This module defines all custom exceptions used by the GitHub content client.
All exceptions inherit from GitHubError, which itself inherits from the
application-wide SyncError, so callers can catch at whichever level they
need. HTTP errors carry the status code and (sanitized) response body for
diagnostics.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all markdown-mirror errors.

    Use this to catch any application-level error from the mirror.
    """
    pass


class GitHubError(SyncError):
    """Base exception for all GitHub-related errors."""
    pass


class GitHubAPIError(GitHubError):
    """Raised when the GitHub API answers with a non-2xx status."""

    def __init__(self, status_code: int, endpoint: str, body: str = ""):
        message = f"GitHub API returned {status_code} for {endpoint}"
        if body:
            message += f": {body}"
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint
        self.body = body


class InvalidCredentialsError(GitHubAPIError):
    """Raised when the configured token is rejected (401)."""

    def __init__(self, endpoint: str, body: str = ""):
        super().__init__(401, endpoint, body)


class ResourceNotFoundError(GitHubAPIError):
    """Raised when a repository, branch or file does not exist (404)."""

    def __init__(self, endpoint: str, body: str = ""):
        super().__init__(404, endpoint, body)


class RateLimitedError(GitHubAPIError):
    """Raised when GitHub refuses a request because of rate limiting."""

    def __init__(
        self,
        status_code: int,
        endpoint: str,
        body: str = "",
        retry_after: Optional[int] = None,
    ):
        super().__init__(status_code, endpoint, body)
        self.retry_after = retry_after


class APIUnreachableError(GitHubError):
    """Raised when the GitHub API cannot be reached (timeout, DNS, refused)."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        message = f"API is not available at {endpoint}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason


class APIAccessError(GitHubError):
    """Raised when API access fails after retries."""

    def __init__(self, message: str = "GitHub API failure (after 3 retries)"):
        super().__init__(message)


class RequestCancelledError(GitHubError):
    """Raised when a request is attempted after cancellation was signalled."""

    def __init__(self, endpoint: str):
        super().__init__(f"Request to {endpoint} cancelled")
        self.endpoint = endpoint


class ListFailedError(GitHubError):
    """Raised when the repository tree listing cannot be retrieved.

    Fatal to the sync pass that triggered it.
    """

    def __init__(self, owner: str, repo: str, branch: str, reason: str):
        super().__init__(
            f"Listing {owner}/{repo}@{branch} failed: {reason}"
        )
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.reason = reason


class FetchFailedError(GitHubError):
    """Raised when a single file's content cannot be retrieved.

    Per-file: the sync pass logs it and carries on with the other files.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"Fetching {path} failed: {reason}")
        self.path = path
        self.reason = reason
