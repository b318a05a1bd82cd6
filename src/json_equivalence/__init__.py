"""JSON equivalence - structural deep comparison with diff reports for tests."""

from __future__ import annotations

from json_equivalence.api import (
    Expectation,
    actual_value,
    assert_equivalent,
    compute_equivalence,
)
from json_equivalence.comparators import (
    array_key_comparator,
    datetime_string_comparator,
)
from json_equivalence.engine import StructuralComparator
from json_equivalence.options import CompareOptions, FieldComparator
from json_equivalence.result import CompareResult, EquivalenceError

__version__: str = "0.1.0"
__all__: list[str] = [
    "CompareOptions",
    "CompareResult",
    "EquivalenceError",
    "Expectation",
    "FieldComparator",
    "StructuralComparator",
    "actual_value",
    "array_key_comparator",
    "assert_equivalent",
    "compute_equivalence",
    "datetime_string_comparator",
]
