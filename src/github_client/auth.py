"""Authentication module for loading GitHub credentials.

This module handles loading the optional GitHub token from environment
variables using python-dotenv. Unlike most APIs, a missing token is not an
error here: unauthenticated requests work, they are just subject to a lower
rate limit.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv


TOKEN_ENV_VAR = 'GITHUB_TOKEN'


class Credentials(NamedTuple):
    """GitHub API credentials."""
    token: Optional[str]

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


class Authenticator:
    """Loads GitHub credentials from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged to prevent security risks.

    Optional environment variables:
        GITHUB_TOKEN: Personal access token or fine-grained token with
            read access to repository contents

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> if not creds.is_authenticated:
        ...     print("Running with anonymous rate limits")
    """

    def __init__(self, env_file: Optional[str] = None):
        """Initialize the authenticator by loading environment variables from .env file.

        Args:
            env_file: Optional explicit path to a .env file. When omitted,
                python-dotenv searches for one from the working directory.
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get GitHub credentials from environment variables.

        Returns:
            Credentials: A named tuple whose token is None when unset or blank
        """
        token = os.getenv(TOKEN_ENV_VAR)
        if token is not None:
            token = token.strip() or None
        return Credentials(token=token)
