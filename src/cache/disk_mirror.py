"""Durable on-disk copy of the last published snapshot.

This module provides the DiskMirror class, which persists the raw markdown
bodies of the published posts plus a JSON manifest. The mirror is loaded once
at startup so the cache can serve content before any remote call succeeds.

File structure:
    .markdown-mirror/mirror/
      manifest.json        # {"version": 1, "generated_at": ..., "posts": [...]}
      hello-world.md       # raw markdown body, one file per slug
      guides-setup.md

Every file is written to a temporary file in the same directory and moved
into place with os.replace, so a reader or a crash never sees a half-written
file. The manifest is replaced last.
"""

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping

from src.content_converter.errors import RenderError
from src.content_converter.post_transformer import PostTransformer
from src.content_converter.slug_converter import SlugConverter
from src.models.post import Post
from src.models.snapshot import Snapshot

from .errors import DiskWriteError, MirrorCorruptError, MirrorNotFoundError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "manifest.json"
MANIFEST_VERSION = 1
BODY_SUFFIX = ".md"

_MANIFEST_POST_FIELDS = ('slug', 'title', 'excerpt', 'source_path')


class DiskMirror:
    """Persists and restores snapshots in a local directory.

    Only the sync path writes the mirror, and only after a publish, so there
    is a single writer at any time.

    Example:
        >>> mirror = DiskMirror(".markdown-mirror/mirror")
        >>> mirror.save(snapshot, raw_bodies, repository="octo/blog@main")
        >>> restored = mirror.load(PostTransformer(content_dir="data"))
    """

    def __init__(self, mirror_dir: str):
        """Initialize the mirror.

        Args:
            mirror_dir: Directory holding the manifest and body files;
                created on first save
        """
        self.mirror_dir = Path(mirror_dir)

    @property
    def manifest_path(self) -> Path:
        return self.mirror_dir / MANIFEST_NAME

    def body_path(self, slug: str) -> Path:
        return self.mirror_dir / f"{slug}{BODY_SUFFIX}"

    def _atomic_write(self, target: Path, content: str) -> None:
        """Write text to ``target`` via a temporary file and os.replace.

        Raises:
            DiskWriteError: If any filesystem step fails
        """
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                'w',
                encoding='utf-8',
                dir=self.mirror_dir,
                prefix=f".{target.name}.",
                suffix='.tmp',
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, target)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                try:
                    os.remove(tmp_name)
                except OSError:
                    logger.warning(f"Failed to remove temporary file {tmp_name}")
            raise DiskWriteError(str(target), 'write', str(e)) from e

    def save(
        self,
        snapshot: Snapshot,
        raw_bodies: Mapping[str, str],
        repository: str,
    ) -> None:
        """Write the snapshot's bodies and manifest.

        The manifest lists, in snapshot order, every post that owns its slug
        in the index; body files are named by slug, so a post that lost a
        slug collision has no file of its own.

        Args:
            snapshot: The snapshot that was just published
            raw_bodies: Raw markdown keyed by slug
            repository: Repository label recorded in the manifest

        Raises:
            DiskWriteError: If any file cannot be written
        """
        try:
            self.mirror_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DiskWriteError(str(self.mirror_dir), 'create_directory', str(e)) from e

        entries: List[Dict[str, str]] = []
        for post in snapshot.posts:
            if not snapshot.owns_slug(post):
                continue
            body = raw_bodies.get(post.slug)
            if body is None:
                logger.warning(f"No raw body for slug '{post.slug}'; not mirrored")
                continue
            self._atomic_write(self.body_path(post.slug), body)
            entries.append({field: getattr(post, field) for field in _MANIFEST_POST_FIELDS})

        generated_at = snapshot.generated_at or datetime.now().astimezone()
        manifest = {
            'version': MANIFEST_VERSION,
            'generated_at': generated_at.isoformat(),
            'repository': repository,
            'posts': entries,
        }
        self._atomic_write(
            self.manifest_path,
            json.dumps(manifest, indent=2, ensure_ascii=False),
        )

        self._remove_stale_bodies({entry['slug'] for entry in entries})
        logger.info(f"Mirrored {len(entries)} post(s) to {self.mirror_dir}")

    def _remove_stale_bodies(self, keep_slugs: set) -> None:
        """Delete body files from earlier generations that are no longer listed."""
        for file_path in self.mirror_dir.glob(f"*{BODY_SUFFIX}"):
            if file_path.stem in keep_slugs:
                continue
            try:
                file_path.unlink()
                logger.debug(f"Removed stale mirror file {file_path}")
            except OSError as e:
                logger.warning(f"Failed to remove stale mirror file {file_path}: {e}")

    def _read_manifest(self) -> Dict[str, Any]:
        """Read and validate the manifest.

        Raises:
            MirrorNotFoundError: If the manifest does not exist
            MirrorCorruptError: If it is unreadable or malformed
        """
        path = str(self.manifest_path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                manifest = json.load(f)
        except FileNotFoundError:
            raise MirrorNotFoundError(path) from None
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MirrorCorruptError(path, str(e)) from e

        if not isinstance(manifest, dict):
            raise MirrorCorruptError(
                path, f"expected an object, got {type(manifest).__name__}"
            )
        if not isinstance(manifest.get('posts'), list):
            raise MirrorCorruptError(path, "'posts' must be a list")

        for position, entry in enumerate(manifest['posts']):
            if not isinstance(entry, dict):
                raise MirrorCorruptError(path, f"posts[{position}] must be an object")
            for field in _MANIFEST_POST_FIELDS:
                if not isinstance(entry.get(field), str):
                    raise MirrorCorruptError(
                        path, f"posts[{position}].{field} must be a string"
                    )
            if SlugConverter.slugify(entry['slug']) != entry['slug']:
                raise MirrorCorruptError(
                    path, f"posts[{position}].slug is not a valid slug"
                )
        return manifest

    def load(self, transformer: PostTransformer) -> Snapshot:
        """Restore the last mirrored snapshot.

        Bodies are re-rendered with ``transformer``; slug, title, excerpt and
        source path come from the manifest. Posts whose body file is missing
        or fails to render are skipped.

        Args:
            transformer: Used to re-render bodies to HTML

        Returns:
            The restored Snapshot (possibly empty)

        Raises:
            MirrorNotFoundError: If no manifest exists
            MirrorCorruptError: If the manifest is malformed
        """
        manifest = self._read_manifest()

        generated_at = None
        raw_generated_at = manifest.get('generated_at')
        if isinstance(raw_generated_at, str):
            try:
                generated_at = datetime.fromisoformat(raw_generated_at)
            except ValueError:
                logger.warning(f"Ignoring invalid generated_at '{raw_generated_at}'")

        posts: List[Post] = []
        for entry in manifest['posts']:
            slug = entry['slug']
            try:
                with open(self.body_path(slug), 'r', encoding='utf-8') as f:
                    body = f.read()
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Skipping mirrored post '{slug}': body unreadable ({e})")
                continue

            try:
                html = transformer.render(body, entry['source_path'])
            except RenderError as e:
                logger.warning(f"Skipping mirrored post '{slug}': {e}")
                continue

            posts.append(Post(
                slug=slug,
                title=entry['title'],
                excerpt=entry['excerpt'],
                html=html,
                source_path=entry['source_path'],
            ))

        logger.info(
            f"Loaded {len(posts)} post(s) from mirror "
            f"({manifest.get('repository', 'unknown repository')})"
        )
        return Snapshot.build(posts, generated_at)
