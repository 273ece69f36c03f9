"""Read-only client for the GitHub REST API (v3).

This module wraps a requests Session and provides error translation from
HTTP failures to our typed exception hierarchy. It integrates with the retry
logic for handling rate limits and only implements the two endpoints the
mirror needs: the recursive tree listing and the per-file contents endpoint.
"""

import base64
import logging
import re
import threading
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

from requests import Response, Session
from requests.exceptions import ConnectionError, RequestException, Timeout

from .auth import Authenticator
from .errors import (
    APIUnreachableError,
    FetchFailedError,
    GitHubAPIError,
    GitHubError,
    InvalidCredentialsError,
    ListFailedError,
    RateLimitedError,
    RequestCancelledError,
    ResourceNotFoundError,
)
from .retry_logic import retry_on_rate_limit

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30
USER_AGENT = "markdown-mirror"
MARKDOWN_EXTENSIONS: Tuple[str, ...] = (".md", ".markdown")

# Response bodies are kept for diagnostics, but never unbounded
MAX_ERROR_BODY_CHARS = 500


class GitHubClient:
    """Thin wrapper around the GitHub REST API with error translation.

    This class provides a small read-only client that:
    1. Attaches the optional bearer token from the Authenticator
    2. Translates HTTP and transport errors to typed exceptions
    3. Integrates retry logic for rate limits
    4. Refuses to start new requests once the stop event is set

    Example:
        >>> client = GitHubClient(Authenticator())
        >>> paths = client.list_candidate_files("octo", "blog", "main", "data")
        >>> body = client.fetch_file("octo", "blog", "main", paths[0])
    """

    def __init__(
        self,
        authenticator: Authenticator,
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        stop_event: Optional[threading.Event] = None,
    ):
        """Initialize the client.

        Args:
            authenticator: Authenticator used to load the optional token
            api_base_url: Base URL of the API (override for GitHub Enterprise)
            timeout: Per-request timeout in seconds
            stop_event: Optional event; once set, no new request is started
        """
        self._authenticator = authenticator
        self.api_base_url = api_base_url.rstrip('/')
        self.timeout = timeout
        self.stop_event = stop_event
        self._session: Optional[Session] = None
        self._token: Optional[str] = None

    def _get_session(self) -> Session:
        """Get or create the HTTP session.

        The session is created lazily so that constructing a client never
        touches the environment or the network.

        Returns:
            Session: requests Session with identifying and auth headers set
        """
        if self._session is None:
            creds = self._authenticator.get_credentials()
            self._token = creds.token
            session = Session()
            session.headers.update({
                'User-Agent': USER_AGENT,
                'Accept': 'application/vnd.github+json',
                'X-GitHub-Api-Version': '2022-11-28',
            })
            if creds.token:
                session.headers['Authorization'] = f"Bearer {creds.token}"
            else:
                logger.info("No GITHUB_TOKEN configured; using anonymous rate limits")
            self._session = session
        return self._session

    def close(self) -> None:
        """Close the underlying session, aborting any pooled connections."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def _sanitize_credentials(self, text: str) -> str:
        """Sanitize error text to prevent token leakage.

        Args:
            text: The error message or response body to sanitize

        Returns:
            str: Sanitized text with credentials masked
        """
        if not text:
            return text

        sanitized = text
        if self._token:
            sanitized = sanitized.replace(self._token, '***REDACTED***')

        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )

        # GitHub token formats: ghp_, gho_, ghu_, ghs_, ghr_, github_pat_
        sanitized = re.sub(
            r'\b(gh[pousr]_[A-Za-z0-9]{16,}|github_pat_[A-Za-z0-9_]{16,})\b',
            '***REDACTED***',
            sanitized
        )
        return sanitized

    def _error_body(self, response: Response) -> str:
        body = self._sanitize_credentials(response.text or "")
        if len(body) > MAX_ERROR_BODY_CHARS:
            body = body[:MAX_ERROR_BODY_CHARS] + "..."
        return body

    def _translate_status(self, response: Response, endpoint: str) -> GitHubAPIError:
        """Translate a non-2xx response to a typed exception.

        Args:
            response: The failed HTTP response
            endpoint: API path that was requested (for messages)

        Returns:
            GitHubAPIError: The most specific matching exception
        """
        status_code = response.status_code
        body = self._error_body(response)

        if status_code == 401:
            return InvalidCredentialsError(endpoint, body)

        if status_code == 404:
            return ResourceNotFoundError(endpoint, body)

        remaining = response.headers.get('X-RateLimit-Remaining')
        if status_code == 429 or (status_code == 403 and remaining == '0'):
            retry_after = response.headers.get('Retry-After')
            return RateLimitedError(
                status_code,
                endpoint,
                body,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )

        return GitHubAPIError(status_code, endpoint, body)

    def _get_json(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> Any:
        """Issue one GET request and decode the JSON payload.

        Args:
            endpoint: API path starting with '/'
            params: Optional query string parameters

        Returns:
            Decoded JSON payload

        Raises:
            RequestCancelledError: If the stop event is already set
            APIUnreachableError: On timeouts and connection failures
            GitHubAPIError: On any non-2xx response (or a subclass of it)
        """
        if self.stop_event is not None and self.stop_event.is_set():
            raise RequestCancelledError(endpoint)

        url = f"{self.api_base_url}{endpoint}"
        session = self._get_session()
        logger.debug(f"GET {url} params={params}")

        try:
            response = session.get(url, params=params, timeout=self.timeout)
        except (Timeout, ConnectionError) as e:
            raise APIUnreachableError(
                self.api_base_url, self._sanitize_credentials(str(e))
            ) from e
        except RequestException as e:
            raise APIUnreachableError(
                self.api_base_url, self._sanitize_credentials(str(e))
            ) from e

        if not response.ok:
            raise self._translate_status(response, endpoint)

        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(
                response.status_code, endpoint, "Response body is not valid JSON"
            ) from e

    def list_candidate_files(
        self,
        owner: str,
        repo: str,
        branch: str,
        subdirectory: str,
    ) -> List[str]:
        """List markdown files below a subdirectory of a branch.

        Requests the full recursive tree of the branch and keeps blob entries
        under ``subdirectory/`` whose name ends in a markdown extension.

        Args:
            owner: Repository owner (user or organisation)
            repo: Repository name
            branch: Branch (or any tree-ish ref)
            subdirectory: Repository-relative directory holding the documents

        Returns:
            Sorted list of unique repository-relative paths (may be empty)

        Raises:
            ListFailedError: If the listing request fails for any reason
        """
        endpoint = (
            f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"
            f"/git/trees/{quote(branch, safe='')}"
        )

        try:
            payload = retry_on_rate_limit(
                self._get_json, endpoint, {'recursive': '1'}, stop_event=self.stop_event
            )
        except GitHubError as e:
            logger.error(f"Tree listing failed for {owner}/{repo}@{branch}: {e}")
            raise ListFailedError(owner, repo, branch, str(e)) from e

        if not isinstance(payload, dict) or not isinstance(payload.get('tree'), list):
            raise ListFailedError(owner, repo, branch, "Unexpected tree payload shape")

        if payload.get('truncated'):
            logger.warning(
                f"Tree listing for {owner}/{repo}@{branch} was truncated by GitHub; "
                "some documents may be missing"
            )

        prefix = subdirectory.strip('/')
        prefix = f"{prefix}/" if prefix else ""

        paths = set()
        for entry in payload['tree']:
            if not isinstance(entry, dict) or entry.get('type') != 'blob':
                continue
            path = entry.get('path')
            if not isinstance(path, str) or not path.startswith(prefix):
                continue
            if not path.lower().endswith(MARKDOWN_EXTENSIONS):
                continue
            paths.add(path)

        logger.info(f"Found {len(paths)} markdown file(s) under '{prefix or '/'}'")
        return sorted(paths)

    def fetch_file(self, owner: str, repo: str, branch: str, path: str) -> str:
        """Fetch one file's text content.

        Args:
            owner: Repository owner
            repo: Repository name
            branch: Branch (or any ref) to read from
            path: Repository-relative file path

        Returns:
            The file content; base64 payloads are decoded as UTF-8

        Raises:
            FetchFailedError: If the request or the decoding fails
        """
        endpoint = (
            f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"
            f"/contents/{quote(path)}"
        )

        try:
            payload = retry_on_rate_limit(
                self._get_json, endpoint, {'ref': branch}, stop_event=self.stop_event
            )
        except GitHubError as e:
            raise FetchFailedError(path, str(e)) from e

        if not isinstance(payload, dict) or 'content' not in payload:
            raise FetchFailedError(path, "Response has no 'content' field")

        content = payload.get('content') or ""
        if not isinstance(content, str):
            raise FetchFailedError(
                path, f"Expected string content, got {type(content).__name__}"
            )
        if payload.get('encoding') != 'base64':
            return content

        try:
            return base64.b64decode(content).decode('utf-8')
        except (ValueError, UnicodeDecodeError) as e:
            raise FetchFailedError(path, f"Invalid base64 content: {e}") from e
