"""StructuralComparator: recursive deep-equality engine with a diff report.

Compares two JSON-like values (scalars, lists/tuples, mappings) under a
``CompareOptions`` policy and a set of per-path ``FieldComparator``
overrides, returning a ``CompareResult`` with one entry per mismatch.

Architecture:
- compare() is a pure recursion over (actual, expected, path).  Each call
  returns its own CompareResult; parents concatenate child diffs in
  traversal order.  No traversal state is kept on the instance.
- Exclusion rules are matched against the index-erased path, so one rule
  covers every element of an array field.  Custom comparators are matched
  against the exact path.
- Mapping comparison walks the keys of ``expected`` only.  Keys present on
  ``actual`` alone are never reported, which lets a minimal fixture be
  compared against a larger API payload.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from json_equivalence.options import CompareOptions, Predicate, comparator_name
from json_equivalence.paths import (
    MISSING,
    canonical_dumps,
    display,
    erase_indices,
    index_path,
    key_path,
)
from json_equivalence.result import CompareResult

__all__ = ["StructuralComparator", "value_kind"]

_CONTAINER_KINDS = frozenset({"array", "object"})


def value_kind(value: Any) -> str:
    """Classify a value for the type-mismatch check.

    ``None`` shares the ``"object"`` kind with mappings, so null against a
    mapping is reported as a value mismatch rather than a type mismatch.
    bool MUST be checked before int because bool subclasses int.
    """
    if value is MISSING:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if value is None or isinstance(value, Mapping):
        return "object"
    return type(value).__name__


class StructuralComparator:
    """Structural equivalence engine bound to one comparison policy.

    Example::

        from json_equivalence.engine import StructuralComparator
        from json_equivalence.options import CompareOptions

        cmp = StructuralComparator(CompareOptions(exclude_keys={"id"}))
        result = cmp.compare({"id": 1, "name": "a"}, {"id": 2, "name": "b"})
        print(result.diffs)   # ["Value mismatch at name: a !== b"]
    """

    def __init__(
        self,
        options: CompareOptions | None = None,
        comparators: Iterable[tuple[str, Predicate]] = (),
    ) -> None:
        self._options: CompareOptions = (
            options if options is not None else CompareOptions()
        )
        # First comparator registered for a path wins.
        self._comparators: dict[str, Predicate] = {}
        for path, predicate in comparators:
            self._comparators.setdefault(path, predicate)

    @property
    def options(self) -> CompareOptions:
        return self._options

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare(self, actual: Any, expected: Any, path: str = "") -> CompareResult:
        """Compare ``actual`` against ``expected`` starting at ``path``.

        Args:
            actual:   Value produced by the code under test.
            expected: Reference value.  Only its mapping keys are visited.
            path:     Address of this node.  Defaults to "" (root).

        Returns:
            A ``CompareResult`` whose diffs are in traversal pre-order.
        """
        if self._identical(actual, expected):
            return CompareResult.ok()

        if erase_indices(path) in self._options.exclude_keys:
            return CompareResult.ok()

        predicate = self._comparators.get(path)
        if predicate is not None:
            if predicate(actual, expected):
                return CompareResult.ok()
            return CompareResult.from_diffs(
                [
                    f"Value mismatch at {path}: {display(actual)} !== "
                    f"{display(expected)} [{comparator_name(predicate)}]"
                ]
            )

        actual_kind = value_kind(actual)
        expected_kind = value_kind(expected)

        if actual_kind == "array" and expected_kind == "array":
            return self._compare_arrays(actual, expected, path)

        if actual_kind != expected_kind:
            return CompareResult.from_diffs([f"Type mismatch at {path}"])

        # Equal scalars were caught by _identical, so anything left here differs.
        if not isinstance(actual, Mapping) or not isinstance(expected, Mapping):
            return CompareResult.from_diffs(
                [f"Value mismatch at {path}: {display(actual)} !== {display(expected)}"]
            )

        return self._compare_mappings(actual, expected, path)

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    def _compare_arrays(
        self,
        actual: list[Any] | tuple[Any, ...],
        expected: list[Any] | tuple[Any, ...],
        path: str,
    ) -> CompareResult:
        if len(actual) != len(expected):
            return CompareResult.from_diffs(
                [f"Array length mismatch at {path}: {len(actual)} !== {len(expected)}"]
            )

        if self._options.ignore_array_order:
            actual = sorted(actual, key=canonical_dumps)
            expected = sorted(expected, key=canonical_dumps)

        diffs: list[str] = []
        for i, (a, e) in enumerate(zip(actual, expected, strict=True)):
            diffs.extend(self.compare(a, e, index_path(path, i)).diffs)
        return CompareResult.from_diffs(diffs)

    def _compare_mappings(
        self, actual: Mapping[Any, Any], expected: Mapping[Any, Any], path: str
    ) -> CompareResult:
        diffs: list[str] = []
        for key, expected_value in expected.items():
            child = self.compare(
                actual.get(key, MISSING), expected_value, key_path(path, key)
            )
            diffs.extend(child.diffs)
        return CompareResult.from_diffs(diffs)

    @staticmethod
    def _identical(actual: Any, expected: Any) -> bool:
        """Strict equality: same object, or equal scalars of the same kind."""
        if actual is expected:
            return True
        kind = value_kind(actual)
        if kind in _CONTAINER_KINDS or kind != value_kind(expected):
            return False
        return bool(actual == expected)
