"""
Property helpers for validating sort / select results.

Used by the tests and by the benchmark runner's once-per-size sanity check.

Public API (stable):
    is_nondecreasing(xs, from_index=0, to_index=None) -> bool
    first_nondecreasing_violation_index(xs, from_index=0, to_index=None) -> int | None
    is_permutation(a, b) -> bool
    indices_trace_matches(before, after, indices, from_index=0, to_index=None) -> bool
    outside_range_unchanged(before, after, from_index, to_index) -> bool
    select_partition_holds(xs, k, from_index=0, to_index=None) -> bool

Notes
-----
- Stability is not checked: quicksort does not promise it.
- Works for any elements supporting `<=`/`>=` and hashing (for is_permutation).
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Optional, Sequence

__all__ = [
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "indices_trace_matches",
    "outside_range_unchanged",
    "select_partition_holds",
]


def _hi(xs: Sequence[Any], to_index: Optional[int]) -> int:
    return len(xs) if to_index is None else to_index


def is_nondecreasing(xs: Sequence[Any], from_index: int = 0, to_index: Optional[int] = None) -> bool:
    """Return True iff xs[i] <= xs[i+1] for every pair inside the range."""
    return first_nondecreasing_violation_index(xs, from_index, to_index) is None


def first_nondecreasing_violation_index(
    xs: Sequence[Any], from_index: int = 0, to_index: Optional[int] = None
) -> Optional[int]:
    """
    Return the first index i in the range where xs[i] > xs[i+1], or None.

        i = first_nondecreasing_violation_index(out)
        assert i is None, f"not nondecreasing at i={i}: {out[i]} > {out[i+1]}"
    """
    for i in range(from_index, _hi(xs, to_index) - 1):
        if xs[i] > xs[i + 1]:
            return i
    return None


def is_permutation(a: Sequence[Any], b: Sequence[Any]) -> bool:
    """Return True iff `a` and `b` hold the same multiset of values."""
    if len(a) != len(b):
        return False
    return Counter(a) == Counter(b)


def indices_trace_matches(
    before: Sequence[Any],
    after: Sequence[Any],
    indices: Sequence[int],
    from_index: int = 0,
    to_index: Optional[int] = None,
) -> bool:
    """
    True iff after[p] == before[indices[p]] inside the range and indices[p] == p
    outside it.
    """
    if len(indices) != len(before) or len(after) != len(before):
        return False
    hi = _hi(before, to_index)
    for p in range(len(indices)):
        if from_index <= p < hi:
            if after[p] != before[indices[p]]:
                return False
        elif indices[p] != p:
            return False
    return True


def outside_range_unchanged(
    before: Sequence[Any], after: Sequence[Any], from_index: int, to_index: Optional[int]
) -> bool:
    """True iff every position outside [from_index, to_index) is identical."""
    if len(before) != len(after):
        return False
    hi = _hi(before, to_index)
    return list(before[:from_index]) == list(after[:from_index]) and list(
        before[hi:]
    ) == list(after[hi:])


def select_partition_holds(
    xs: Sequence[Any], k: int, from_index: int = 0, to_index: Optional[int] = None
) -> bool:
    """True iff xs[from+k] is >= everything before it and <= everything after it in range."""
    hi = _hi(xs, to_index)
    pos = from_index + k
    value = xs[pos]
    return all(xs[i] <= value for i in range(from_index, pos)) and all(
        xs[i] >= value for i in range(pos + 1, hi)
    )
