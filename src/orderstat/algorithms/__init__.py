"""
Algorithms package public API.

Re-export the sorter and the order-statistic engine so callers can write:
    from orderstat.algorithms import sort, sort_with_indices, select, median
"""

from .indices import initial_indices, reorder
from .quicksort import INSERTION_THRESHOLD, NSTACK, sort, sort_with_indices
from .select import median, select

__all__ = [
    "INSERTION_THRESHOLD",
    "NSTACK",
    "sort",
    "sort_with_indices",
    "select",
    "median",
    "initial_indices",
    "reorder",
]
