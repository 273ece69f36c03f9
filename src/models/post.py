"""Rendered post data model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Post:
    """One markdown document rendered for display.

    Attributes:
        slug: URL-safe key, unique within a snapshot, derived from source_path
        title: First heading text, or the file name without extension
        excerpt: Bounded plain-text preview (code points, "..." when cut)
        html: Pre-rendered markup, trusted for insertion without escaping
        source_path: Repository-relative path; the sort and tie-break key
    """
    slug: str
    title: str
    excerpt: str
    html: str
    source_path: str
