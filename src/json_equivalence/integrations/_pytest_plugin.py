"""pytest plugin for json-equivalence.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_equivalence import CompareOptions, assert_equivalent as _assert_equivalent
from json_equivalence.options import Predicate


@pytest.fixture(scope="session")
def assert_equivalent() -> Any:
    """Fixture that returns a callable structural equivalence asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to assert_equivalent() which creates a fresh
    StructuralComparator per call).

    Usage in tests::

        def test_order_payload(assert_equivalent):
            assert_equivalent(response.json(), {"status": "paid"})

        def test_unordered_tags(assert_equivalent):
            assert_equivalent(
                {"tags": ["b", "a"]},
                {"tags": ["a", "b"]},
                CompareOptions(ignore_array_order=True),
            )

    Returns:
        A callable ``_assert(actual, expected, options=None, *comparators) -> None``
        that raises ``EquivalenceError`` (an ``AssertionError``) listing every
        mismatch.
    """

    def _assert(
        actual: Any,
        expected: Any,
        options: CompareOptions | None = None,
        *comparators: tuple[str, Predicate],
    ) -> None:
        _assert_equivalent(actual, expected, options, *comparators)

    return _assert
