"""
In-place quicksort over a sub-range of a mutable sequence.

Median-of-three pivot, two converging scan pointers, straight insertion for
sub-ranges shorter than INSERTION_THRESHOLD, and an explicit pivot stack in
place of recursion. The larger partition is always deferred on the stack and
the smaller one processed right away, so pending work stays logarithmic.

Based on: Numerical Recipes, 3rd ed., ch. 8; Sedgewick (1978),
"Implementing Quicksort Programs", CACM 21, 847-857.

Public API (stable):
    sort(array, from_index=0, to_index=None, *, comparator=None, stack_size=NSTACK) -> None
    sort_with_indices(array, from_index=0, to_index=None, *, comparator=None,
                      stack_size=NSTACK) -> list[int]

Conventions:
- `array` is anything with len/getitem/setitem: lists, NumPy 1-D arrays, ...
- Only [from_index, to_index) is touched; the order is not stable.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from orderstat.algorithms._partition import insertion_sort, partition
from orderstat.algorithms._ranges import resolve_range
from orderstat.algorithms.indices import initial_indices
from orderstat.errors import SortingError
from orderstat.ordering import Comparator, natural_compare

logger = logging.getLogger(__name__)

# Sub-ranges with fewer than this many elements beyond the first are insertion sorted.
INSERTION_THRESHOLD = 7

# Pivot stack capacity, in slots; every pending (left, right) pair takes two.
NSTACK = 64

__all__ = ["INSERTION_THRESHOLD", "NSTACK", "sort", "sort_with_indices"]


def sort(
    array: Any,
    from_index: int = 0,
    to_index: Optional[int] = None,
    *,
    comparator: Optional[Comparator] = None,
    stack_size: int = NSTACK,
) -> None:
    """
    Sort array[from_index:to_index] ascending, in place.

    Parameters
    ----------
    array : mutable sequence
        Sequence to sort. Elements outside the range are left untouched.
    from_index : int
        First position of the range (inclusive).
    to_index : int | None
        End of the range (exclusive). None means len(array).
    comparator : callable | None
        Three-way comparator; None uses the elements' natural order.
    stack_size : int
        Pivot stack capacity in slots.

    Raises
    ------
    InvalidRangeError
        If from_index > to_index.
    RangeOutOfBoundsError
        If from_index < 0 or to_index > len(array).
    SortingError
        If the pivot stack overflows.
    """
    lo, hi = resolve_range(array, from_index, to_index)
    if lo == hi:
        return
    _quicksort(array, None, lo, hi - 1, comparator or natural_compare, stack_size)


def sort_with_indices(
    array: Any,
    from_index: int = 0,
    to_index: Optional[int] = None,
    *,
    comparator: Optional[Comparator] = None,
    stack_size: int = NSTACK,
) -> List[int]:
    """
    Sort like `sort` and return the index trace for the whole sequence.

    The returned list has len(array) entries; entry p is the position the
    element now at p occupied before the call. Entries outside the range keep
    their identity value.
    """
    lo, hi = resolve_range(array, from_index, to_index)
    indices = initial_indices(len(array))
    if lo == hi:
        return indices
    _quicksort(array, indices, lo, hi - 1, comparator or natural_compare, stack_size)
    return indices


def _quicksort(
    array: Any,
    indices: Optional[List[int]],
    left: int,
    right: int,
    cmp: Comparator,
    stack_size: int,
) -> None:
    stack: List[tuple] = []
    while True:
        if right - left < INSERTION_THRESHOLD:
            insertion_sort(array, indices, left, right, cmp)
            if not stack:
                break
            left, right = stack.pop()
            continue

        i, j = partition(array, indices, left, right, cmp)

        if 2 * (len(stack) + 1) > stack_size:
            logger.debug(
                "Pivot stack exhausted with %d pending partitions (capacity %d slots)",
                len(stack), stack_size,
            )
            raise SortingError(
                f"pivot stack capacity ({stack_size}) exceeded; "
                "comparator may not define a total order"
            )

        # Defer the larger partition, keep working on the smaller one
        if right - i + 1 >= j - left:
            stack.append((i, right))
            right = j - 1
        else:
            stack.append((left, j - 1))
            left = i
