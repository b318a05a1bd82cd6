"""Public API functions for json-equivalence.

This module provides the two entry points over the comparison engine,
assert_equivalent and compute_equivalence, plus the fluent actual_value()
wrapper.  Each call creates a fresh StructuralComparator to guarantee zero
global state mutation between calls.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from json_equivalence.engine import StructuralComparator
from json_equivalence.options import CompareOptions, Predicate
from json_equivalence.result import CompareResult, EquivalenceError

__all__ = ["Expectation", "actual_value", "assert_equivalent", "compute_equivalence"]

T = TypeVar("T")


def compute_equivalence(
    actual: Any,
    expected: Any,
    options: CompareOptions | None = None,
    *comparators: tuple[str, Predicate],
) -> CompareResult:
    """Compare two values and return every mismatch found.

    Never raises for structural mismatches.

    Args:
        actual:      Value produced by the code under test.
        expected:    Reference value.  Keys present only on ``actual`` are
                     ignored.
        options:     Comparison policy.  Defaults to ``CompareOptions()``.
        comparators: ``(path, predicate)`` overrides matched on the exact path.

    Returns:
        A ``CompareResult`` with ``equal`` and the ordered ``diffs``.
    """
    return StructuralComparator(options, comparators).compare(actual, expected)


def assert_equivalent(
    actual: Any,
    expected: Any,
    options: CompareOptions | None = None,
    *comparators: tuple[str, Predicate],
) -> None:
    """Assert that two values are structurally equivalent.

    The whole structure is traversed before failing, so the error lists
    every mismatch rather than the first one.

    Raises:
        EquivalenceError: When at least one mismatch was found.
    """
    result = compute_equivalence(actual, expected, options, *comparators)
    if not result.equal:
        raise EquivalenceError(result.diffs)


class Expectation(Generic[T]):
    """Fluent wrapper: ``actual_value(resp).to_be_equivalent_to(fixture)``."""

    def __init__(self, actual: T) -> None:
        self.actual = actual

    def to_be_equivalent_to(
        self,
        expected: T,
        options: CompareOptions | None = None,
        *comparators: tuple[str, Predicate],
    ) -> None:
        assert_equivalent(self.actual, expected, options, *comparators)

    def to_be_equivalent_to_result(
        self,
        expected: T,
        options: CompareOptions | None = None,
        *comparators: tuple[str, Predicate],
    ) -> CompareResult:
        return compute_equivalence(self.actual, expected, options, *comparators)


def actual_value(actual: T) -> Expectation[T]:
    return Expectation(actual)
