"""
Order statistics: quickselect and the median built on it.

`select(k, ...)` moves the k-th smallest element of the range to position
from_index + k, with everything before it <= and everything after it >=
(both sides unordered). Only the side of each partition holding k is
revisited, giving expected linear work.

`median(...)` selects the element at length // 2. For even lengths the lower
middle element is the maximum of the left side left behind by `select`, and
the two are averaged with the comparator's averager.

Public API (stable):
    select(k, array, from_index=0, to_index=None, *, comparator=None) -> element
    median(array, from_index=0, to_index=None, *, comparator=None) -> element
"""

from __future__ import annotations

from typing import Any, Optional

from orderstat.algorithms._partition import exchange, partition
from orderstat.algorithms._ranges import check_selection, resolve_range
from orderstat.ordering import (
    Comparator,
    ComparatorAndAverager,
    as_comparator_and_averager,
    natural_compare,
)

__all__ = ["select", "median"]


def select(
    k: int,
    array: Any,
    from_index: int = 0,
    to_index: Optional[int] = None,
    *,
    comparator: Optional[Comparator] = None,
) -> Any:
    """
    Return the k-th smallest element (0-based, relative to from_index) of
    array[from_index:to_index], rearranging the range in place.

    Raises
    ------
    InvalidRangeError
        If from_index > to_index.
    RangeOutOfBoundsError
        If from_index < 0 or to_index > len(array).
    InvalidSelectionError
        If k < 0 or k >= to_index - from_index.
    """
    lo, hi = resolve_range(array, from_index, to_index)
    k = check_selection(k, hi - lo)
    return _quickselect(array, lo + k, lo, hi - 1, comparator or natural_compare)


def median(
    array: Any,
    from_index: int = 0,
    to_index: Optional[int] = None,
    *,
    comparator: Optional[Comparator] = None,
) -> Any:
    """
    Return the median of array[from_index:to_index], rearranging the range.

    `comparator` may be a ComparatorAndAverager, a plain comparator (averaging
    then uses `natural_average`) or None for natural order and averaging.
    An empty range raises InvalidSelectionError.
    """
    lo, hi = resolve_range(array, from_index, to_index)
    ops: ComparatorAndAverager = as_comparator_and_averager(comparator)

    length = hi - lo
    half = length // 2
    value1 = select(half, array, lo, hi, comparator=ops.compare)
    if length % 2 != 0:
        return value1

    # select left the half elements below value1 in [lo, lo + half)
    value2 = array[lo]
    for i in range(lo + 1, lo + half):
        value3 = array[i]
        if ops.compare(value3, value2) > 0:
            value2 = value3
    return ops.average(value1, value2)


def _quickselect(array: Any, target: int, left: int, right: int, cmp: Comparator) -> Any:
    while True:
        if right <= left + 1:
            if right == left + 1 and cmp(array[right], array[left]) < 0:
                exchange(array, None, left, right)
            return array[target]

        i, j = partition(array, None, left, right, cmp)
        if j >= target:
            right = j - 1
        if j <= target:
            left = i
