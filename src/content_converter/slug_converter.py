"""URL-safe slug derivation from repository paths.

This module converts repository-relative document paths into slugs used as
cache keys and URL segments. The conversion is deterministic and idempotent.
"""

import re


class SlugConverter:
    """Converts repository paths (already stripped of prefix and extension) to slugs.

    Conversion rules:
    - Lower-cased
    - Path separators (/, \\), whitespace and underscores → hyphen (-)
    - Any character that is not a Unicode letter, digit or hyphen → removed
    - Runs of hyphens → collapsed to one
    - Leading/trailing hyphens → trimmed
    - Empty result → FALLBACK_SLUG

    Unicode letters are kept so that titles in non-Latin scripts still yield
    meaningful slugs.

    Examples:
        - "Guides/Getting Started" → "guides-getting-started"
        - "foo/bar" and "foo-bar" → "foo-bar"
        - "Q&A_session" → "qa-session"
        - "???" → "post"
    """

    SEPARATOR = '-'
    FALLBACK_SLUG = 'post'

    _SEPARATOR_CHARS = re.compile(r'[/\\\s_]+')
    _DISALLOWED_CHARS = re.compile(r'[^\w-]')
    _REPEATED_SEPARATORS = re.compile(r'-{2,}')

    @classmethod
    def slugify(cls, value: str) -> str:
        """Normalise a string to a slug.

        Args:
            value: Path-like string without the markdown extension

        Returns:
            The slug; never empty

        Examples:
            >>> SlugConverter.slugify("2024/My First Post")
            '2024-my-first-post'
            >>> SlugConverter.slugify(SlugConverter.slugify("A  B"))
            'a-b'
        """
        slug = value.lower()
        slug = cls._SEPARATOR_CHARS.sub(cls.SEPARATOR, slug)
        slug = cls._DISALLOWED_CHARS.sub('', slug)
        # \w matches "_", which was already mapped to a separator above
        slug = slug.replace('_', cls.SEPARATOR)
        slug = cls._REPEATED_SEPARATORS.sub(cls.SEPARATOR, slug)
        slug = slug.strip(cls.SEPARATOR)
        return slug or cls.FALLBACK_SLUG
