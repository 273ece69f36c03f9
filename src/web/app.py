"""Read-only HTTP boundary over the snapshot cache.

Handlers only read the SnapshotCache stored on ``app.state``; they never
trigger a sync, so a failing remote never turns into a 5xx here.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from src.cache.snapshot_cache import SnapshotCache
from src.models.post import Post

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"


class PostSummary(BaseModel):
    slug: str
    title: str
    excerpt: str
    source_path: str


class PostDetail(PostSummary):
    html: str


class StatusResponse(BaseModel):
    last_sync_at: Optional[datetime] = None
    last_error: Optional[str] = None
    post_count: int
    generated_at: Optional[datetime] = None


def _summary(post: Post) -> PostSummary:
    return PostSummary(
        slug=post.slug,
        title=post.title,
        excerpt=post.excerpt,
        source_path=post.source_path,
    )


def _cache(request: Request) -> SnapshotCache:
    return request.app.state.cache


def create_app(cache: SnapshotCache) -> FastAPI:
    """Build the FastAPI application serving ``cache``.

    Args:
        cache: The shared cache; the app keeps a reference, never a copy

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(title="markdown-mirror", version=APP_VERSION)
    app.state.cache = cache

    @app.get("/healthz")
    def healthz() -> dict:
        return {"ok": True}

    @app.get("/api/posts", response_model=List[PostSummary])
    def list_posts(request: Request) -> List[PostSummary]:
        """List published posts in snapshot order."""
        posts, _ = _cache(request).read()
        return [_summary(post) for post in posts]

    @app.get("/api/posts/{slug}", response_model=PostDetail)
    def get_post(slug: str, request: Request) -> PostDetail:
        post = _cache(request).get(slug)
        if post is None:
            raise HTTPException(status_code=404, detail=f"Post not found: {slug}")
        return PostDetail(
            slug=post.slug,
            title=post.title,
            excerpt=post.excerpt,
            source_path=post.source_path,
            html=post.html,
        )

    @app.get("/api/status", response_model=StatusResponse)
    def status(request: Request) -> StatusResponse:
        """Report the last sync attempt and the published snapshot size."""
        cache = _cache(request)
        snapshot = cache.snapshot()
        sync_status = cache.status()
        return StatusResponse(
            last_sync_at=sync_status.last_sync_at,
            last_error=sync_status.last_error_summary,
            post_count=len(snapshot),
            generated_at=snapshot.generated_at,
        )

    return app
