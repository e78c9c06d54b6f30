"""
Typed failures raised by the sorting and selection routines.

Every error derives from `OrderStatError` and from the builtin exception a
Python caller would naturally expect, so both of these work:

    try:
        sort(a, 5, 2)
    except InvalidRangeError: ...
    except ValueError: ...

Range and selection errors are always raised before the sequence is touched.
`SortingError` is the only one raised mid-sort; the range then still holds a
permutation of its original contents.
"""

from __future__ import annotations

__all__ = [
    "OrderStatError",
    "InvalidRangeError",
    "RangeOutOfBoundsError",
    "InvalidSelectionError",
    "SortingError",
]


class OrderStatError(Exception):
    """Base class for all orderstat failures."""


class InvalidRangeError(OrderStatError, ValueError):
    """Raised when from_index > to_index."""


class RangeOutOfBoundsError(OrderStatError, IndexError):
    """Raised when from_index < 0 or to_index > len(array)."""


class InvalidSelectionError(OrderStatError, ValueError):
    """Raised when k does not address a position inside the range."""


class SortingError(OrderStatError, RuntimeError):
    """
    Raised when quicksort needs more pending partitions than its pivot stack
    can hold. Only expected with comparators that are not a total order, or
    with an artificially small stack.
    """
