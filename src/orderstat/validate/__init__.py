"""
Validation utilities public API.

Re-exports:
    - Oracle:
        ORACLE_NAME
        oracle_sort
        oracle_select
        oracle_median
        equals_oracle

    - Property checks:
        is_nondecreasing
        first_nondecreasing_violation_index
        is_permutation
        indices_trace_matches
        outside_range_unchanged
        select_partition_holds
"""

from .oracle import ORACLE_NAME, equals_oracle, oracle_median, oracle_select, oracle_sort
from .properties import (
    first_nondecreasing_violation_index,
    indices_trace_matches,
    is_nondecreasing,
    is_permutation,
    outside_range_unchanged,
    select_partition_holds,
)

__all__ = [
    "ORACLE_NAME",
    "oracle_sort",
    "oracle_select",
    "oracle_median",
    "equals_oracle",
    "is_nondecreasing",
    "first_nondecreasing_violation_index",
    "is_permutation",
    "indices_trace_matches",
    "outside_range_unchanged",
    "select_partition_holds",
]
