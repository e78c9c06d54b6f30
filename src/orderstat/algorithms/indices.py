"""
Index traces: the identity vector handed out by `sort_with_indices` and the
helper that applies a trace to companion data.

    values = [5.0, 3.0, 8.0]
    names = ["e", "c", "h"]
    idx = sort_with_indices(values)      # values -> [3.0, 5.0, 8.0]
    reorder(names, idx)                  # -> ["c", "e", "h"]
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from orderstat.algorithms._ranges import resolve_range

__all__ = ["initial_indices", "reorder"]


def initial_indices(length: int) -> List[int]:
    """Return [0, 1, ..., length - 1]."""
    return list(range(length))


def reorder(
    companion: Sequence[Any],
    indices: Sequence[int],
    from_index: int = 0,
    to_index: Optional[int] = None,
) -> List[Any]:
    """
    Return a new list where position p holds companion[indices[p]] for p in
    [from_index, to_index) and companion[p] elsewhere. `companion` is not mutated.
    """
    if len(indices) != len(companion):
        raise ValueError(
            f"indices length ({len(indices)}) differs from companion length ({len(companion)})"
        )
    lo, hi = resolve_range(companion, from_index, to_index)
    out = list(companion)
    for p in range(lo, hi):
        out[p] = companion[indices[p]]
    return out
