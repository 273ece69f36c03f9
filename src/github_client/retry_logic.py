"""Retry logic with exponential backoff for GitHub API rate limits.

This module provides retry functionality specifically for handling rate limit
responses from the GitHub API. It implements exponential backoff (1s, 2s, 4s)
and fails fast for non-rate-limit errors.
"""

import threading
import time
import logging
from typing import Callable, Optional, TypeVar

from .errors import APIAccessError, RateLimitedError, RequestCancelledError

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRIES = 3


def retry_on_rate_limit(
    func: Callable[..., T],
    *args,
    stop_event: Optional[threading.Event] = None,
    **kwargs,
) -> T:
    """Retry function on rate limiting with exponential backoff.

    Executes the given function with the provided arguments, retrying up to 3 times
    with exponential backoff (1s, 2s, 4s) when a rate limit error is encountered.
    Fails fast for all other errors.

    Args:
        func: The function to execute with retry logic
        *args: Positional arguments to pass to the function
        stop_event: Optional shutdown signal; the backoff waits on it and
            gives up as soon as it is set
        **kwargs: Keyword arguments to pass to the function

    Returns:
        The return value of the function

    Raises:
        APIAccessError: If rate limit persists after 3 retries
        RequestCancelledError: If the stop event is set during a backoff
        Other exceptions: Passed through immediately without retry

    Example:
        >>> tree = retry_on_rate_limit(client._get_json, endpoint, {'recursive': '1'})
    """
    for retry_num in range(MAX_RETRIES + 1):  # 0, 1, 2, 3 = 4 attempts total
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not _is_rate_limit_error(e):
                raise

            if retry_num >= MAX_RETRIES:
                logger.error(
                    f"Rate limit persisted after {MAX_RETRIES} retries, giving up"
                )
                raise APIAccessError("GitHub API failure (after 3 retries)") from e

            wait_time = 2 ** retry_num
            logger.info(
                f"Rate limit hit, retrying in {wait_time}s "
                f"(retry {retry_num + 1}/{MAX_RETRIES})"
            )
            if stop_event is None:
                time.sleep(wait_time)
            elif stop_event.wait(wait_time):
                raise RequestCancelledError(getattr(e, 'endpoint', 'rate limit backoff')) from e

    # Unreachable; keeps type checkers happy
    raise APIAccessError("GitHub API failure (after 3 retries)")


def _is_rate_limit_error(exception: Exception) -> bool:
    """Check if an exception represents a rate limit error.

    Our own RateLimitedError is the normal case. A bare status_code of 429 is
    also accepted so that wrapped third-party errors are retried too.

    Args:
        exception: The exception to check

    Returns:
        True if this appears to be a rate limit error, False otherwise
    """
    if isinstance(exception, RateLimitedError):
        return True

    if getattr(exception, 'status_code', None) == 429:
        return True

    response = getattr(exception, 'response', None)
    if response is not None and getattr(response, 'status_code', None) == 429:
        return True

    return False
