"""Data models for CLI operations."""

from enum import IntEnum

from src.github_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    SyncError,
)


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, validation failures)
    - SYNC_FAILED (2): The sync pass produced nothing publishable
    - AUTH_ERROR (3): Authentication or authorization failure
    - NETWORK_ERROR (4): Network connectivity or API availability issues

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    SYNC_FAILED = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4

    @classmethod
    def for_error(cls, error: SyncError) -> "ExitCode":
        """Map a sync pass error to the exit code reported by ``--once``.

        Listing and fetch errors are inspected through their ``__cause__``
        chain so that a wrapped 401 still reports AUTH_ERROR.
        """
        current = error
        while current is not None:
            if isinstance(current, InvalidCredentialsError):
                return cls.AUTH_ERROR
            if isinstance(current, (APIUnreachableError, APIAccessError)):
                return cls.NETWORK_ERROR
            current = current.__cause__
        return cls.SYNC_FAILED
