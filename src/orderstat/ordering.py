"""
Ordering and averaging capabilities shared by the sorter and the selector.

A comparator is any callable `cmp(a, b) -> int` returning a negative number,
zero or a positive number when `a` is lower than, equal to or greater than
`b` (the same convention as `functools.cmp_to_key`).

Median additionally needs to average the two middle elements of an even-length
range. That capability travels with the comparator in a
`ComparatorAndAverager`. When no capability is given, the natural one is
synthesized:

- elements exposing `average_with(other)` average themselves;
- NumPy fixed-width integers are summed in their own width (wrapping on
  overflow, never widened) and the sum is halved truncating toward zero;
- Python ints (and other Integral types) are summed and halved truncating
  toward zero;
- floats (Python, NumPy and other Real types) average as `0.5 * (a + b)`;
- anything else returns the first argument unchanged.

The last rule is a deliberate degenerate path for types with no averaging
semantics: the result is the upper median instead of a mean.
"""

from __future__ import annotations

import abc
import logging
import numbers
from typing import Any, Callable, Optional, Protocol, runtime_checkable

import numpy as np

logger = logging.getLogger(__name__)

Comparator = Callable[[Any, Any], int]

__all__ = [
    "Comparator",
    "ComparableAndAveragable",
    "ComparatorAndAverager",
    "NaturalComparatorAndAverager",
    "natural_compare",
    "reverse_compare",
    "comparator_from_key",
    "average_float",
    "average_int",
    "natural_average",
    "as_comparator_and_averager",
]


@runtime_checkable
class ComparableAndAveragable(Protocol):
    """Element type that knows how to average itself with a peer."""

    def average_with(self, other: Any) -> Any:
        ...


class ComparatorAndAverager(abc.ABC):
    """
    Three-way comparison plus binary averaging, bundled for `median`.

    Instances are callable and behave as plain comparators, so the same object
    can be handed to `sort`, `select` and `median`.
    """

    @abc.abstractmethod
    def compare(self, a: Any, b: Any) -> int:
        """Return <0, 0 or >0 when a is lower than, equal to or greater than b."""

    @abc.abstractmethod
    def average(self, a: Any, b: Any) -> Any:
        """Return an element representing the mean of a and b."""

    def __call__(self, a: Any, b: Any) -> int:
        return self.compare(a, b)


def natural_compare(a: Any, b: Any) -> int:
    """Three-way comparison using the elements' own `<` and `>`."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def reverse_compare(comparator: Optional[Comparator] = None) -> Comparator:
    """Return a comparator ordering elements descending with respect to `comparator`."""
    cmp = comparator if comparator is not None else natural_compare

    def _reversed(a: Any, b: Any) -> int:
        return cmp(b, a)

    return _reversed


def comparator_from_key(key: Callable[[Any], Any]) -> Comparator:
    """Build a comparator ordering elements by `key(element)`."""

    def _by_key(a: Any, b: Any) -> int:
        return natural_compare(key(a), key(b))

    return _by_key


def average_float(a: Any, b: Any) -> Any:
    return 0.5 * (a + b)


def average_int(a: Any, b: Any) -> Any:
    """
    Sum-then-halve integer average, truncating toward zero.

    NumPy integers narrower than 32 bits are promoted to int32 before summing
    (as Java does for byte, short and char), so their sum cannot overflow; the
    halved result is cast back to the operands' dtype. NumPy 32- and 64-bit
    integers keep their width: the intermediate sum wraps around on overflow
    exactly like a Java `int`/`long` would, and the wrapped sum is what gets
    halved. Mixed NumPy/Python pairs follow the NumPy operand's width.
    """
    if isinstance(a, np.integer) or isinstance(b, np.integer):
        return _average_fixed_width(a, b)
    return _halve_toward_zero(a + b)


def _average_fixed_width(a: Any, b: Any) -> Any:
    dtype = np.result_type(a, b)
    if dtype.itemsize < 4:
        total = np.int32(a) + np.int32(b)
        return dtype.type(_halve_toward_zero(total))

    with np.errstate(over="ignore"):
        total = np.add(a, b)
    if int(total) != int(a) + int(b):
        logger.warning(
            "Integer average overflowed %s: %d + %d wrapped to %d",
            total.dtype, int(a), int(b), int(total),
        )
    return _halve_toward_zero(total)


def _halve_toward_zero(total: Any) -> Any:
    half = total // 2
    # floor division rounds toward -inf; move odd negative sums back toward zero
    if total < 0 and total % 2 != 0:
        half = half + 1
    return half


def natural_average(a: Any, b: Any) -> Any:
    if isinstance(a, ComparableAndAveragable) and not isinstance(a, numbers.Number):
        return a.average_with(b)
    if isinstance(a, (bool, np.bool_)) or isinstance(b, (bool, np.bool_)):
        return a
    if isinstance(a, numbers.Integral) and isinstance(b, numbers.Integral):
        return average_int(a, b)
    if isinstance(a, numbers.Real) and isinstance(b, numbers.Real):
        return average_float(a, b)
    logger.debug("No averaging semantics for %s; returning first element", type(a).__name__)
    return a


class NaturalComparatorAndAverager(ComparatorAndAverager):
    """Natural ordering plus `natural_average`."""

    def compare(self, a: Any, b: Any) -> int:
        return natural_compare(a, b)

    def average(self, a: Any, b: Any) -> Any:
        return natural_average(a, b)


class _CallableComparatorAndAverager(ComparatorAndAverager):
    """Wraps a plain comparator; averaging falls back to `natural_average`."""

    def __init__(self, comparator: Comparator) -> None:
        self._comparator = comparator

    def compare(self, a: Any, b: Any) -> int:
        return self._comparator(a, b)

    def average(self, a: Any, b: Any) -> Any:
        return natural_average(a, b)


def as_comparator_and_averager(comparator: Optional[Comparator]) -> ComparatorAndAverager:
    """Coerce None, a plain comparator or a ComparatorAndAverager to the latter."""
    if comparator is None:
        return NaturalComparatorAndAverager()
    if isinstance(comparator, ComparatorAndAverager):
        return comparator
    if not callable(comparator):
        raise TypeError(f"comparator must be callable; got {comparator!r}")
    return _CallableComparatorAndAverager(comparator)
