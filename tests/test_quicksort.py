"""
Correctness tests for the quicksort sorter against the oracle (Python's sorted).

What we check:
- Output exactly matches the oracle inside the range
- Elements outside [from_index, to_index) are untouched
- The index trace maps every sorted position back to its original one
- Re-sorting a sorted range is a no-op
- Pivot stack exhaustion is reported as SortingError
"""

from __future__ import annotations

from typing import List

import numpy as np
import pytest
from hypothesis import given, settings, strategies as st

from orderstat import (
    NSTACK,
    SortingError,
    comparator_from_key,
    reorder,
    reverse_compare,
    sort,
    sort_with_indices,
)
from orderstat.datasets import make_dataset
from orderstat.validate import (
    indices_trace_matches,
    is_nondecreasing,
    is_permutation,
    oracle_sort,
    outside_range_unchanged,
)


# ------------------------- helpers ------------------------- #

def _check_sort(a: List[int], from_index: int = 0, to_index: int | None = None) -> None:
    before = list(a)
    sort(a, from_index, to_index)
    assert a == oracle_sort(before, from_index, to_index)
    assert outside_range_unchanged(before, a, from_index, to_index)


def _check_sort_with_indices(a: List[int], from_index: int = 0, to_index: int | None = None) -> None:
    before = list(a)
    idx = sort_with_indices(a, from_index, to_index)
    assert len(idx) == len(before)
    assert a == oracle_sort(before, from_index, to_index)
    assert indices_trace_matches(before, a, idx, from_index, to_index)


# ------------------------- unit tests (deterministic) ------------------------- #

def test_concrete_scenario() -> None:
    a = [5, 3, 8, 1, 9, 2]
    sort(a, 0, 6)
    assert a == [1, 2, 3, 5, 8, 9]

    b = [5, 3, 8, 1, 9, 2]
    idx = sort_with_indices(b, 0, 6)
    assert b == [1, 2, 3, 5, 8, 9]
    assert idx == [3, 5, 1, 0, 2, 4]


@pytest.mark.parametrize(
    "a",
    [
        [],
        [5],
        [2, 1],
        [1, 2, 3, 4],
        [4, 3, 2, 1],
        [7, 7, 7, 7, 7, 7, 7, 7, 7, 7],
        [1, 3, 2, 3, 1, 2, 3, 1, 2, 2, 1],
        list(range(50)),
        list(range(50))[::-1],
        [0, -1, 5, -10, 3, 3, 2, 8, -4, 11, 0, 0],
        [3, 1, 2, 0, 4, 5, 9, 7],
    ],
)
def test_unit_cases(a: List[int]) -> None:
    _check_sort(list(a))
    _check_sort_with_indices(list(a))


@pytest.mark.parametrize("dist", ["sorted", "reversed", "organ_pipe", "all_equal"])
def test_structured_inputs(dist: str) -> None:
    a = make_dataset(2000, {"dist": dist}, np.random.default_rng(0))
    _check_sort(list(a))
    _check_sort_with_indices(list(a))


def test_sub_range_leaves_outside_untouched() -> None:
    a = list(range(40, 0, -1))
    _check_sort(a, 5, 31)
    assert a[:5] == [40, 39, 38, 37, 36]
    assert a[31:] == [9, 8, 7, 6, 5, 4, 3, 2, 1]


def test_sub_range_trace_is_identity_outside() -> None:
    a = [9, 8, 7, 6, 5, 4, 3, 2, 1, 0]
    idx = sort_with_indices(a, 2, 7)
    assert a == [9, 8, 3, 4, 5, 6, 7, 2, 1, 0]
    assert idx == [0, 1, 6, 5, 4, 3, 2, 7, 8, 9]


def test_empty_range_is_noop() -> None:
    a = [3, 1, 2]
    sort(a, 1, 1)
    assert a == [3, 1, 2]
    assert sort_with_indices(a, 2, 2) == [0, 1, 2]
    assert a == [3, 1, 2]


def test_resort_is_idempotent() -> None:
    a = make_dataset(500, {"dist": "few_uniques", "params": {"k": 5}}, np.random.default_rng(3))
    sort(a)
    once = list(a)
    idx = sort_with_indices(a)
    assert a == once
    assert is_nondecreasing(a)
    # equal elements may still be exchanged, so only check the trace is consistent
    assert indices_trace_matches(once, a, idx)


@pytest.mark.parametrize("dtype", [np.int32, np.int64, np.float32, np.float64])
def test_numpy_arrays(dtype) -> None:
    rng = np.random.default_rng(11)
    arr = (rng.random(300) * 1000 - 500).astype(dtype)
    expected = np.sort(arr[10:290])
    before = arr.copy()
    sort(arr, 10, 290)
    np.testing.assert_array_equal(arr[10:290], expected)
    np.testing.assert_array_equal(arr[:10], before[:10])
    np.testing.assert_array_equal(arr[290:], before[290:])

    arr2 = before.copy()
    idx = sort_with_indices(arr2)
    np.testing.assert_array_equal(arr2, np.sort(before))
    np.testing.assert_array_equal(before[idx], arr2)


def test_comparator_descending() -> None:
    a = [4, 9, 1, 7, 3, 3, 8, 0, 2, 6, 5]
    sort(a, comparator=reverse_compare())
    assert a == sorted(a, reverse=True)


def test_comparator_on_records() -> None:
    people = [("eve", 31), ("bob", 25), ("amy", 40), ("dan", 19), ("cid", 33),
              ("fay", 28), ("gus", 52), ("hal", 22), ("ida", 37)]
    ages = list(people)
    idx = sort_with_indices(ages, comparator=comparator_from_key(lambda p: p[1]))
    assert [p[1] for p in ages] == [19, 22, 25, 28, 31, 33, 37, 40, 52]
    assert [people[i] for i in idx] == ages


def test_reorder_companion() -> None:
    values = [5, 3, 8, 1, 9, 2]
    names = ["five", "three", "eight", "one", "nine", "two"]
    idx = sort_with_indices(values)
    assert reorder(names, idx) == ["one", "two", "three", "five", "eight", "nine"]
    assert names[0] == "five"


def test_reorder_length_mismatch() -> None:
    with pytest.raises(ValueError):
        reorder([1, 2, 3], [0, 1])


def test_stack_exhaustion_raises() -> None:
    # sorted input splits evenly, so a second nested partition is always pushed
    with pytest.raises(SortingError):
        sort(list(range(1000)), stack_size=2)
    with pytest.raises(SortingError):
        sort_with_indices(list(range(1000)), stack_size=2)


def test_exhaustion_keeps_a_permutation() -> None:
    a = list(range(1000))
    with pytest.raises(RuntimeError):
        sort(a, stack_size=2)
    assert is_permutation(a, list(range(1000)))


def test_default_stack_handles_large_inputs() -> None:
    assert NSTACK == 64
    a = make_dataset(20000, {"dist": "random", "params": {"range": [0, 10**6]}}, np.random.default_rng(5))
    _check_sort(a)


# ------------------------- property-based tests (randomized) ------------------------- #

small_ints = st.integers(min_value=-10_000, max_value=10_000)


@st.composite
def list_and_range(draw, elements=small_ints, max_size=300):
    a = draw(st.lists(elements, min_size=0, max_size=max_size))
    lo = draw(st.integers(min_value=0, max_value=len(a)))
    hi = draw(st.integers(min_value=lo, max_value=len(a)))
    return a, lo, hi


@settings(deadline=None, max_examples=150)
@given(list_and_range())
def test_property_sort_range(case) -> None:
    a, lo, hi = case
    _check_sort(a, lo, hi)


@settings(deadline=None, max_examples=150)
@given(list_and_range())
def test_property_sort_with_indices_range(case) -> None:
    a, lo, hi = case
    _check_sort_with_indices(a, lo, hi)


@settings(deadline=None, max_examples=60)
@given(st.lists(st.integers(min_value=0, max_value=7), min_size=0, max_size=500))
def test_property_many_duplicates(a: List[int]) -> None:
    _check_sort_with_indices(a)


@settings(deadline=None, max_examples=60)
@given(list_and_range(elements=st.floats(allow_nan=False, allow_infinity=False)))
def test_property_floats(case) -> None:
    a, lo, hi = case
    _check_sort(a, lo, hi)
