"""Command-line interface for the markdown mirror.

This package provides the `markdown-mirror` CLI tool: configuration setup,
single sync passes, and the long-running sync-and-serve mode.
"""

from .config import ConfigLoader
from .models import ExitCode
from .errors import (
    CLIError,
    ConfigError,
    ConfigFilesystemError,
    ConfigNotFoundError,
)

__all__ = [
    'ConfigLoader',
    'ExitCode',
    'CLIError',
    'ConfigError',
    'ConfigFilesystemError',
    'ConfigNotFoundError',
]
