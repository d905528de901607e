"""Batch a list of Slack blocks into groups of at most *size* items.

``chat.postMessage`` accepts at most 50 blocks per message.  This helper
splits an arbitrarily long list into compliant batches.
"""

from __future__ import annotations

from typing import Any


def chunk_blocks(blocks: list[dict[str, Any]], size: int = 50) -> list[list[dict[str, Any]]]:
    """Split a list of block dicts into batches of at most ``size``.

    Parameters
    ----------
    blocks:
        The full list of block dictionaries to partition.
    size:
        Maximum number of blocks per batch.  Defaults to **50** (the Slack
        limit for a single message).

    Returns
    -------
    list[list[dict]]
        A list of sublists, each containing at most *size* items.
        An empty input returns an empty list (not ``[[]]``).

    Raises
    ------
    ValueError
        If *size* is less than 1.
    """
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")

    if not blocks:
        return []

    return [blocks[i : i + size] for i in range(0, len(blocks), size)]
