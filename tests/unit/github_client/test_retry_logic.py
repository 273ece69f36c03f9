"""Unit tests for github_client.retry_logic module."""

import threading
from unittest.mock import MagicMock, patch

import pytest

from src.github_client.errors import (
    APIAccessError,
    GitHubAPIError,
    RateLimitedError,
    RequestCancelledError,
)
from src.github_client.retry_logic import _is_rate_limit_error, retry_on_rate_limit


class TestIsRateLimitError:
    """Test cases for _is_rate_limit_error function."""

    def test_detects_rate_limited_error(self):
        assert _is_rate_limit_error(RateLimitedError(403, "/x")) is True

    def test_detects_status_code_attribute(self):
        """_is_rate_limit_error should detect status_code=429 attribute."""
        error = Exception("API error")
        error.status_code = 429
        assert _is_rate_limit_error(error) is True

    def test_detects_response_status_code_attribute(self):
        error = Exception("API error")
        error.response = MagicMock()
        error.response.status_code = 429
        assert _is_rate_limit_error(error) is True

    def test_returns_false_for_other_api_errors(self):
        assert _is_rate_limit_error(GitHubAPIError(500, "/x")) is False

    def test_message_text_alone_is_not_enough(self):
        """Only structured status information counts, not message text."""
        assert _is_rate_limit_error(Exception("429 Too Many Requests")) is False


class TestRetryOnRateLimit:
    """Test cases for retry_on_rate_limit function."""

    def test_success_on_first_attempt(self):
        mock_func = MagicMock(return_value="success")
        result = retry_on_rate_limit(mock_func, "arg1", kwarg1="value1")

        assert result == "success"
        mock_func.assert_called_once_with("arg1", kwarg1="value1")

    @patch('time.sleep')
    def test_exponential_backoff_timing(self, mock_sleep):
        """retry_on_rate_limit should use exponential backoff: 1s, 2s, 4s."""
        error = RateLimitedError(429, "/x")
        mock_func = MagicMock(side_effect=[error, error, error, "success"])

        result = retry_on_rate_limit(mock_func)

        assert result == "success"
        assert mock_func.call_count == 4
        assert [c[0][0] for c in mock_sleep.call_args_list] == [1, 2, 4]

    @patch('time.sleep')
    def test_raises_api_access_error_after_max_retries(self, mock_sleep):
        error = RateLimitedError(429, "/x")
        mock_func = MagicMock(side_effect=error)

        with pytest.raises(APIAccessError) as exc_info:
            retry_on_rate_limit(mock_func)

        assert str(exc_info.value) == "GitHub API failure (after 3 retries)"
        assert exc_info.value.__cause__ is error
        assert mock_func.call_count == 4
        assert mock_sleep.call_count == 3

    @patch('time.sleep')
    def test_fails_fast_on_non_rate_limit_error(self, mock_sleep):
        mock_func = MagicMock(side_effect=GitHubAPIError(500, "/x"))

        with pytest.raises(GitHubAPIError):
            retry_on_rate_limit(mock_func)

        assert mock_func.call_count == 1
        mock_sleep.assert_not_called()

    @patch('time.sleep')
    def test_backoff_waits_on_stop_event(self, mock_sleep):
        """With a stop event, the backoff waits on the event instead of sleeping."""
        error = RateLimitedError(429, "/x")
        mock_func = MagicMock(side_effect=[error, "success"])
        stop_event = MagicMock(spec=threading.Event)
        stop_event.wait.return_value = False

        assert retry_on_rate_limit(mock_func, stop_event=stop_event) == "success"

        stop_event.wait.assert_called_once_with(1)
        mock_sleep.assert_not_called()

    @patch('time.sleep')
    def test_stop_event_cancels_backoff(self, mock_sleep):
        """A set stop event ends the backoff at once, without another attempt."""
        error = RateLimitedError(429, "/repos/octo/blog/contents/data/a.md")
        mock_func = MagicMock(side_effect=error)
        stop_event = threading.Event()
        stop_event.set()

        with pytest.raises(RequestCancelledError) as exc_info:
            retry_on_rate_limit(mock_func, stop_event=stop_event)

        assert exc_info.value.__cause__ is error
        assert mock_func.call_count == 1
        mock_sleep.assert_not_called()
