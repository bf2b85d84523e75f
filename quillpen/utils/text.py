"""Text helpers shared by the ingestion pipeline.

- **Word counting** -- whitespace-delimited token count used for the
  ``word_count`` frontmatter field.
- **Slugs** -- ASCII filename slugs derived from titles.
"""

import re

# Slugs are capped so generated filenames stay readable in directory listings.
SLUG_MAX_LENGTH = 50

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens in *text*.

    Args:
        text: Body text of a document.

    Returns:
        Number of words; ``0`` for empty or whitespace-only text.
    """
    return len(text.split())


def slugify(text: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Turn a title into a lowercase, hyphen-separated filename slug.

    Any run of characters outside ``[a-z0-9]`` (after lowercasing) collapses
    to a single hyphen, leading and trailing hyphens are trimmed, and the
    result is truncated to *max_length* characters.  A title with no ASCII
    letters or digits yields an empty string.

    Args:
        text: Title to slugify.
        max_length: Maximum slug length.

    Returns:
        The slug, possibly empty.
    """
    slug = _NON_ALNUM_RUN.sub("-", text.lower()).strip("-")
    return slug[:max_length]
