"""One full synchronization pass from the remote repository.

This module provides sync_once, which lists the markdown files under the
configured directory, fetches and transforms each one, and decides whether
the pass as a whole succeeded. It performs no publishing: the caller applies
should_publish to the returned SyncResult.

The pass is all-or-nothing with respect to publishing:
    - listing failure            → ListFailedError, no posts
    - empty listing              → NoMarkdownFoundError, no posts
    - per-file fetch/render fail → logged, recorded in ``skipped``, pass continues
    - every file failed          → NothingRenderedError, no posts
    - shutdown requested         → SyncCancelledError, no posts
"""

import logging
import threading
from typing import Dict, List, Optional

from src.content_converter.errors import RenderError
from src.content_converter.post_transformer import PostTransformer
from src.github_client.api_wrapper import GitHubClient
from src.github_client.errors import FetchFailedError, ListFailedError
from src.models.mirror_config import MirrorConfig
from src.models.post import Post
from src.models.sync_result import SyncResult

from .errors import NoMarkdownFoundError, NothingRenderedError, SyncCancelledError

logger = logging.getLogger(__name__)


def _cancelled(stop_event: Optional[threading.Event]) -> bool:
    return stop_event is not None and stop_event.is_set()


def sync_once(
    config: MirrorConfig,
    client: GitHubClient,
    transformer: PostTransformer,
    stop_event: Optional[threading.Event] = None,
) -> SyncResult:
    """Run one synchronization pass.

    Args:
        config: Repository coordinates and content directory
        client: Client used to list and fetch files
        transformer: Converts each document to a Post
        stop_event: Optional shutdown signal checked between files

    Returns:
        SyncResult with posts sorted by source_path descending and raw bodies
        keyed by slug, or with ``error`` set and no posts
    """
    logger.info(
        f"Starting sync of {config.repository_label} (directory '{config.content_dir}')"
    )

    try:
        paths = client.list_candidate_files(
            config.owner, config.repo, config.branch, config.content_dir
        )
    except ListFailedError as e:
        logger.error(f"Sync aborted: {e}")
        return SyncResult(error=e)

    if not paths:
        error = NoMarkdownFoundError(config.content_dir)
        logger.error(f"Sync aborted: {error}")
        return SyncResult(error=error)

    posts: List[Post] = []
    raw_by_path: Dict[str, str] = {}
    skipped = []

    ordered_paths = sorted(paths)
    for position, path in enumerate(ordered_paths):
        if _cancelled(stop_event):
            error = SyncCancelledError(position, len(ordered_paths))
            logger.warning(str(error))
            return SyncResult(error=error, skipped=skipped, candidate_count=len(paths))

        try:
            raw = client.fetch_file(config.owner, config.repo, config.branch, path)
        except FetchFailedError as e:
            logger.warning(f"Skipping {path}: {e.reason}")
            skipped.append((path, str(e)))
            continue

        try:
            post = transformer.transform(path, raw)
        except RenderError as e:
            logger.warning(f"Skipping {path}: {e.reason}")
            skipped.append((path, str(e)))
            continue

        logger.debug(f"Transformed {path} → '{post.slug}'")
        posts.append(post)
        raw_by_path[path] = raw

    # A cancelled final fetch shows up as a skipped file, so check once more
    if _cancelled(stop_event):
        error = SyncCancelledError(len(ordered_paths), len(ordered_paths))
        logger.warning(str(error))
        return SyncResult(error=error, skipped=skipped, candidate_count=len(paths))

    if not posts:
        error = NothingRenderedError(len(paths))
        logger.error(f"Sync aborted: {error}")
        return SyncResult(error=error, skipped=skipped, candidate_count=len(paths))

    posts.sort(key=lambda post: post.source_path, reverse=True)
    # Same walk order as the snapshot index, so bodies agree with it on collisions
    raw_bodies: Dict[str, str] = {}
    for post in posts:
        raw_bodies[post.slug] = raw_by_path[post.source_path]

    logger.info(
        f"Sync produced {len(posts)} post(s); skipped {len(skipped)} of {len(paths)}"
    )
    return SyncResult(
        posts=posts,
        raw_bodies=raw_bodies,
        skipped=skipped,
        candidate_count=len(paths),
    )
