"""Immutable cache generation data model."""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from src.models.post import Post


@dataclass(frozen=True)
class Snapshot:
    """A fully built, never mutated generation of the post cache.

    Posts are ordered by source_path, descending. The slug index is built by
    walking that order, so when two paths normalise to the same slug the one
    later in the order owns the slug while both stay in ``posts``.

    Attributes:
        posts: Ordered posts
        index: Read-only mapping from slug to Post
        generated_at: When the snapshot was built (None for the empty one)

    Example:
        >>> snapshot = Snapshot.build(posts, datetime.now(UTC))
        >>> snapshot.index["hello-world"].title
        'Hello World'
    """
    posts: Tuple[Post, ...] = ()
    index: Mapping[str, Post] = field(default_factory=lambda: MappingProxyType({}))
    generated_at: Optional[datetime] = None

    @classmethod
    def build(cls, posts: Iterable[Post], generated_at: Optional[datetime] = None) -> "Snapshot":
        """Sort posts and build the slug index.

        Args:
            posts: Posts in any order
            generated_at: Build timestamp to record

        Returns:
            A new Snapshot
        """
        ordered = tuple(sorted(posts, key=lambda post: post.source_path, reverse=True))
        index = {}
        for post in ordered:
            index[post.slug] = post
        return cls(posts=ordered, index=MappingProxyType(index), generated_at=generated_at)

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls()

    def __len__(self) -> int:
        return len(self.posts)

    def is_empty(self) -> bool:
        return not self.posts

    def owns_slug(self, post: Post) -> bool:
        """Return True if ``post`` is the one the index resolves its slug to."""
        return self.index.get(post.slug) is post
