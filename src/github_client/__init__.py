"""GitHub client library for the markdown mirror.

This package provides a small read-only Python abstraction over the GitHub
REST API: recursive tree listing and file contents, with typed errors.
"""

from .errors import (
    SyncError,
    GitHubError,
    GitHubAPIError,
    InvalidCredentialsError,
    ResourceNotFoundError,
    RateLimitedError,
    APIUnreachableError,
    APIAccessError,
    RequestCancelledError,
    ListFailedError,
    FetchFailedError,
)

__all__ = [
    "SyncError",
    "GitHubError",
    "GitHubAPIError",
    "InvalidCredentialsError",
    "ResourceNotFoundError",
    "RateLimitedError",
    "APIUnreachableError",
    "APIAccessError",
    "RequestCancelledError",
    "ListFailedError",
    "FetchFailedError",
]
