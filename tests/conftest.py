"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

import pytest

from src.models.post import Post


# Keep uvicorn and httpx quiet when the web app is exercised in-process.
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn").setLevel(logging.WARNING)


@pytest.fixture
def make_post():
    """Factory for Post objects with sensible defaults."""
    def _make_post(source_path: str, slug: str = None, title: str = "Title",
                   excerpt: str = "Excerpt", html: str = "<p>Body</p>") -> Post:
        if slug is None:
            slug = source_path.rsplit('/', 1)[-1].rsplit('.', 1)[0].lower()
        return Post(
            slug=slug,
            title=title,
            excerpt=excerpt,
            html=html,
            source_path=source_path,
        )
    return _make_post
