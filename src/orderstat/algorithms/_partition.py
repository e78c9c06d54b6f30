"""
Building blocks shared by quicksort and quickselect.

All helpers work on absolute positions of `array`. When `indices` is given,
every value move is mirrored on it, so the indexed and value-only variants
run the very same code.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from orderstat.ordering import Comparator

__all__ = ["exchange", "insertion_sort", "partition"]


def exchange(array: Any, indices: Optional[List[int]], a: int, b: int) -> None:
    array[a], array[b] = array[b], array[a]
    if indices is not None:
        indices[a], indices[b] = indices[b], indices[a]


def insertion_sort(
    array: Any, indices: Optional[List[int]], left: int, right: int, cmp: Comparator
) -> None:
    """Straight insertion over the closed interval [left, right]."""
    for j in range(left + 1, right + 1):
        value = array[j]
        pos = indices[j] if indices is not None else None
        i = j - 1
        while i >= left:
            if cmp(array[i], value) <= 0:
                break
            array[i + 1] = array[i]
            if indices is not None:
                indices[i + 1] = indices[i]
            i -= 1
        array[i + 1] = value
        if indices is not None:
            indices[i + 1] = pos


def partition(
    array: Any, indices: Optional[List[int]], left: int, right: int, cmp: Comparator
) -> Tuple[int, int]:
    """
    Partition the closed interval [left, right] (at least 3 elements) around a
    median-of-three pivot.

    On return the pivot sits at position j, every element in [left, j) is <= it
    and every element in (j, right] is >= it. Returns (i, j) where i is the
    first position of the upper partition.
    """
    # Median of left, center and right goes to left + 1, leaving
    # array[left] <= array[left + 1] <= array[right] as scan sentinels.
    mid = (left + right) >> 1
    exchange(array, indices, mid, left + 1)
    if cmp(array[left], array[right]) > 0:
        exchange(array, indices, left, right)
    if cmp(array[left + 1], array[right]) > 0:
        exchange(array, indices, left + 1, right)
    if cmp(array[left], array[left + 1]) > 0:
        exchange(array, indices, left, left + 1)

    i = left + 1
    j = right
    pivot = array[left + 1]
    pivot_pos = indices[left + 1] if indices is not None else None
    while True:
        i += 1
        while cmp(array[i], pivot) < 0:
            i += 1
        j -= 1
        while cmp(array[j], pivot) > 0:
            j -= 1
        if j < i:
            break
        exchange(array, indices, i, j)

    array[left + 1] = array[j]
    array[j] = pivot
    if indices is not None:
        indices[left + 1] = indices[j]
        indices[j] = pivot_pos
    return i, j
