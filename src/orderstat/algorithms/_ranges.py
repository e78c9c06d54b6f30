"""
Range validation shared by every sort/select/median entry point.

Checks run in a fixed order and always before the sequence is touched:
    1. from_index > to_index               -> InvalidRangeError
    2. from_index < 0 or to_index > len    -> RangeOutOfBoundsError
"""

from __future__ import annotations

import operator
from typing import Any, Optional, Tuple

from orderstat.errors import InvalidRangeError, InvalidSelectionError, RangeOutOfBoundsError

__all__ = ["resolve_range", "check_selection"]


def resolve_range(array: Any, from_index: int, to_index: Optional[int]) -> Tuple[int, int]:
    """
    Return (from_index, to_index) as plain ints, `to_index=None` meaning len(array).
    """
    n = len(array)
    lo = operator.index(from_index)
    hi = n if to_index is None else operator.index(to_index)

    if lo > hi:
        raise InvalidRangeError(f"from_index ({lo}) must not exceed to_index ({hi})")
    if lo < 0 or hi > n:
        raise RangeOutOfBoundsError(
            f"range [{lo}, {hi}) falls outside sequence of length {n}"
        )
    return lo, hi


def check_selection(k: int, length: int) -> int:
    """Validate that k addresses a real position of a range of `length` elements."""
    k = operator.index(k)
    if k < 0 or k >= length:
        raise InvalidSelectionError(
            f"k ({k}) must lie in [0, {length}) for a range of {length} elements"
        )
    return k
