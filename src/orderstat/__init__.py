"""
orderstat: in-place quicksort, quickselect and median over mutable sequences.

    from orderstat import sort, sort_with_indices, select, median

    a = [5, 3, 8, 1, 9, 2]
    idx = sort_with_indices(a)   # a == [1, 2, 3, 5, 8, 9]; idx == [3, 5, 1, 0, 2, 4]
"""

from .algorithms import (
    INSERTION_THRESHOLD,
    NSTACK,
    initial_indices,
    median,
    reorder,
    select,
    sort,
    sort_with_indices,
)
from .errors import (
    InvalidRangeError,
    InvalidSelectionError,
    OrderStatError,
    RangeOutOfBoundsError,
    SortingError,
)
from .ordering import (
    ComparableAndAveragable,
    ComparatorAndAverager,
    NaturalComparatorAndAverager,
    average_float,
    average_int,
    comparator_from_key,
    natural_average,
    natural_compare,
    reverse_compare,
)

__version__ = "0.1.0"

__all__ = [
    "INSERTION_THRESHOLD",
    "NSTACK",
    "sort",
    "sort_with_indices",
    "select",
    "median",
    "initial_indices",
    "reorder",
    "OrderStatError",
    "InvalidRangeError",
    "RangeOutOfBoundsError",
    "InvalidSelectionError",
    "SortingError",
    "ComparableAndAveragable",
    "ComparatorAndAverager",
    "NaturalComparatorAndAverager",
    "average_float",
    "average_int",
    "comparator_from_key",
    "natural_average",
    "natural_compare",
    "reverse_compare",
    "__version__",
]
