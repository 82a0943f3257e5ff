"""
Helpers for splitting entries into batches.
"""

from typing import List, Sequence, TypeVar

T = TypeVar("T")


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    """
    Split items into consecutive groups of ``size``.

    Every group has exactly ``size`` items except possibly the last one.
    Order is preserved and an empty input yields no groups.

    Args:
        items: Items to split
        size: Maximum group length, must be positive

    Returns:
        List of groups
    """
    if size <= 0:
        raise ValueError(f"chunk size must be positive, got {size}")

    return [list(items[index:index + size]) for index in range(0, len(items), size)]


def remove_duplicates(entries: Sequence[T]) -> List[T]:
    """Keep the first entry for every ``id``, preserving order."""
    seen = set()
    unique = []
    for entry in entries:
        if entry.id in seen:
            continue
        seen.add(entry.id)
        unique.append(entry)
    return unique
