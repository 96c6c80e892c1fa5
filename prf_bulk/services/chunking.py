from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

"""Bounded-size chunking of an ordered row sequence."""

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "chunk",
]

DEFAULT_CHUNK_SIZE = 300

T = TypeVar("T")


def chunk(rows: Sequence[T], size: int = DEFAULT_CHUNK_SIZE) -> list[list[T]]:
    """Split rows into consecutive groups of at most ``size`` items.

    Order is preserved, only the last group may be shorter, and an empty
    input yields no groups.

    Raises:
        ValueError: if size is not a positive integer
    """
    if size < 1:
        raise ValueError(f"chunk size must be >= 1, got {size}")
    return [list(rows[i:i + size]) for i in range(0, len(rows), size)]
