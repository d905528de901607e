"""Length-limited text helpers.

Slack measures its field limits in characters.  Python ``str`` indexing is
code-point based, so plain slicing never cuts a multi-byte character in
half and is all :func:`truncate` needs.
"""

from __future__ import annotations


def truncate(text: str, limit: int) -> str:
    """Return the first *limit* characters of *text*.

    The cut is silent and left-anchored: text at or under the limit is
    returned unchanged, longer text loses its tail.

    Raises
    ------
    ValueError
        If *limit* is negative.

    Examples
    --------
    >>> truncate("hello world", 5)
    'hello'

    >>> truncate("ab\\U0001f600cd", 3)
    'ab\\U0001f600'
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    return text[:limit]
