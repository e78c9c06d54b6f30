"""
Ground truth for sort / select / median over a range.

Python's built-in `sorted()` is the oracle: it is a correct total order for
numbers and deterministic. Every helper works on a copy, never on the input.

Public API (stable):
    oracle_sort(a, from_index=0, to_index=None) -> list
    oracle_select(k, a, from_index=0, to_index=None) -> element
    oracle_median(a, from_index=0, to_index=None, average=natural_average) -> element
    equals_oracle(a, out, from_index=0, to_index=None) -> bool
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

from orderstat.ordering import natural_average

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "oracle_select", "oracle_median", "equals_oracle"]


def oracle_sort(a: Sequence[Any], from_index: int = 0, to_index: Optional[int] = None) -> List[Any]:
    """
    Return a new list equal to `a` with [from_index, to_index) sorted ascending.
    """
    out = list(a)
    hi = len(out) if to_index is None else to_index
    out[from_index:hi] = sorted(out[from_index:hi])
    return out


def oracle_select(
    k: int, a: Sequence[Any], from_index: int = 0, to_index: Optional[int] = None
) -> Any:
    """Return the k-th smallest element (relative to from_index) of the range."""
    hi = len(a) if to_index is None else to_index
    return sorted(list(a)[from_index:hi])[k]


def oracle_median(
    a: Sequence[Any],
    from_index: int = 0,
    to_index: Optional[int] = None,
    average: Callable[[Any, Any], Any] = natural_average,
) -> Any:
    """
    Middle element for odd ranges; `average(upper, lower)` of the two middle
    elements for even ranges (same argument order the median routine uses).
    """
    hi = len(a) if to_index is None else to_index
    s = sorted(list(a)[from_index:hi])
    if not s:
        raise ValueError("median of an empty range is undefined")
    half = len(s) // 2
    if len(s) % 2:
        return s[half]
    return average(s[half], s[half - 1])


def equals_oracle(
    a: Sequence[Any], out: Sequence[Any], from_index: int = 0, to_index: Optional[int] = None
) -> bool:
    """True iff `out` equals `oracle_sort(a, from_index, to_index)` element-wise."""
    return list(out) == oracle_sort(a, from_index, to_index)
