"""Content conversion module for markdown → Post transformation.

This module provides the PostTransformer, which renders markdown documents
to HTML and derives their titles, excerpts and slugs.
"""

from .errors import ConversionError, RenderError
from .post_transformer import PostTransformer
from .slug_converter import SlugConverter

__all__ = ['ConversionError', 'RenderError', 'PostTransformer', 'SlugConverter']
