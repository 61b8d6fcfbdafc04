"""Character-safe string splitting.

Notion limits ``rich_text[].text.content`` to 2 000 characters, so long
Markdown text runs are cut into several spans.  Python ``str`` indexing
works on code-points, so plain slicing never bisects a character and no
byte-level handling is needed.
"""

from __future__ import annotations


def split_string(text: str, limit: int = 2000) -> list[str]:
    """Split *text* into consecutive chunks of at most *limit* characters.

    Parameters
    ----------
    text:
        The input string to partition.
    limit:
        Maximum number of characters per chunk.

    Returns
    -------
    list[str]
        Non-empty chunks whose concatenation equals *text*.  An empty
        *text* yields an empty list, so it produces no span at all.

    Raises
    ------
    ValueError
        If *limit* is less than 1.

    Examples
    --------
    >>> split_string("hello world", 5)
    ['hello', ' worl', 'd']

    >>> split_string("", 100)
    []
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    if not text:
        return []

    return [text[start : start + limit] for start in range(0, len(text), limit)]
