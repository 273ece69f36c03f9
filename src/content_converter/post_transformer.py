"""Markdown document to Post transformation.

This module provides the PostTransformer, a pure (no I/O) conversion from a
raw markdown document and its repository path to a rendered Post: title
extraction, slug derivation, plain-text excerpt and HTML rendering.

Rendering uses Python-Markdown with GitHub-flavoured extensions (tables,
fenced code, strikethrough, autolinks). Raw inline HTML in the source is
passed through unescaped.
"""

import logging
import posixpath
import re

import markdown

from src.models.post import Post

from .errors import RenderError
from .slug_converter import SlugConverter

logger = logging.getLogger(__name__)

DEFAULT_EXCERPT_LENGTH = 140
ELLIPSIS = '...'

MARKDOWN_EXTENSIONS = [
    'tables',
    'fenced_code',
    'toc',
    'nl2br',
    'pymdownx.tilde',
    'pymdownx.magiclink',
]

_TITLE_PATTERN = re.compile(r'^#+[ \t]+(\S.*)$', re.MULTILINE)
_FENCED_CODE_PATTERN = re.compile(r'```.*?```', re.DOTALL)
_HEADING_LINE_PATTERN = re.compile(r'^[ \t]*#+(?:[ \t]+.*)?$', re.MULTILINE)
_WHITESPACE_PATTERN = re.compile(r'\s+')


class PostTransformer:
    """Transforms raw markdown documents into Posts.

    Attributes:
        content_dir: Repository directory the documents live under; stripped
            from paths before slug derivation
        excerpt_length: Maximum excerpt length in code points

    Example:
        >>> transformer = PostTransformer(content_dir="data")
        >>> post = transformer.transform("data/b.md", "# Hello\\nWorld")
        >>> (post.slug, post.title, post.excerpt)
        ('b', 'Hello', 'World')
    """

    def __init__(self, content_dir: str = "", excerpt_length: int = DEFAULT_EXCERPT_LENGTH):
        if excerpt_length < 1:
            raise ValueError(f"excerpt_length must be positive, got {excerpt_length}")
        self.content_dir = content_dir.strip('/')
        self.excerpt_length = excerpt_length

    def transform(self, path: str, raw: str) -> Post:
        """Convert one document to a Post.

        Args:
            path: Repository-relative path of the document
            raw: Raw markdown text

        Returns:
            The rendered Post

        Raises:
            RenderError: If the markdown cannot be rendered
        """
        return Post(
            slug=self.make_slug(path),
            title=self.extract_title(raw, path),
            excerpt=self.make_excerpt(raw),
            html=self.render(raw, path),
            source_path=path,
        )

    @staticmethod
    def extract_title(raw: str, path: str) -> str:
        """Return the first heading's text, else the file name without extension."""
        match = _TITLE_PATTERN.search(raw)
        if match:
            title = match.group(1).strip()
            if title:
                return title
        base = posixpath.basename(path)
        stem, _ = posixpath.splitext(base)
        return stem or base

    def make_excerpt(self, raw: str) -> str:
        """Build the plain-text preview.

        Fenced code blocks and heading lines are dropped, whitespace runs are
        collapsed, and text longer than ``excerpt_length`` code points is cut
        and suffixed with an ellipsis.
        """
        text = _FENCED_CODE_PATTERN.sub(' ', raw)
        text = _HEADING_LINE_PATTERN.sub(' ', text)
        text = _WHITESPACE_PATTERN.sub(' ', text).strip()
        if len(text) > self.excerpt_length:
            return text[:self.excerpt_length] + ELLIPSIS
        return text

    def make_slug(self, path: str) -> str:
        """Derive the slug for a repository path.

        The content directory prefix and the markdown extension are removed
        before normalisation.
        """
        relative = path.strip('/')
        prefix = f"{self.content_dir}/" if self.content_dir else ""
        if prefix and relative.startswith(prefix):
            relative = relative[len(prefix):]
        stem, extension = posixpath.splitext(relative)
        if extension.lower() in ('.md', '.markdown'):
            relative = stem
        return SlugConverter.slugify(relative)

    @staticmethod
    def render(raw: str, path: str = "<memory>") -> str:
        """Render markdown to HTML.

        A fresh converter is used per call; Python-Markdown instances keep
        per-document state and are not safe to share between threads.

        Raises:
            RenderError: If rendering fails for any reason
        """
        try:
            return markdown.markdown(
                raw,
                extensions=MARKDOWN_EXTENSIONS,
                output_format='html5',
            )
        except Exception as e:
            logger.debug(f"Markdown rendering raised for {path}", exc_info=True)
            raise RenderError(path, str(e) or type(e).__name__) from e
