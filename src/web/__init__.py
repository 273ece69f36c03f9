"""Read-only HTTP API for the mirrored posts."""

from .app import create_app

__all__ = ['create_app']
