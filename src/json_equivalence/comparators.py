"""Ready-made predicates for use as per-path custom comparators.

Both functions take ``(actual, expected)`` first so they can be installed
directly, or bound with ``functools.partial`` when extra arguments are
needed::

    from functools import partial
    from operator import itemgetter

    assert_equivalent(
        response,
        fixture,
        None,
        ("createdAt", datetime_string_comparator),
        ("items", partial(array_key_comparator, key=itemgetter("sku"))),
    )

Diffs produced by a failing predicate are tagged with its function name,
e.g. ``[datetime_string_comparator]``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any

from json_equivalence.api import assert_equivalent
from json_equivalence.options import CompareOptions

__all__ = [
    "DEFAULT_DATETIME_PATTERN",
    "array_key_comparator",
    "datetime_string_comparator",
]

DEFAULT_DATETIME_PATTERN = "%Y-%m-%dT%H:%M:%S.%fZ"


def array_key_comparator(
    actual: Sequence[Any],
    expected: Sequence[Any],
    key: Callable[[Any], Any],
    options: CompareOptions | None = None,
) -> bool:
    """Compare two sequences of records identified by ``key``, ignoring order.

    Both sides are sorted by ``str(key(item))`` and each pair is asserted
    equivalent.  A mismatching pair raises with that pair's full diff
    instead of collapsing into a single tagged diff.

    Returns:
        False when the lengths differ, True when every pair is equivalent.

    Raises:
        EquivalenceError: When a sorted pair is not equivalent.
    """
    if len(actual) != len(expected):
        return False

    def sort_key(item: Any) -> str:
        return str(key(item))

    for a, e in zip(sorted(actual, key=sort_key), sorted(expected, key=sort_key), strict=True):
        assert_equivalent(a, e, options)
    return True


def _parse_datetime(value: Any, pattern: str) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.strptime(value, pattern)
        except ValueError:
            try:
                parsed = datetime.fromisoformat(value)
            except ValueError:
                return None
    else:
        return None
    # Naive timestamps are read as UTC so they can be subtracted from aware ones.
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def datetime_string_comparator(
    actual: Any,
    expected: Any,
    pattern: str = DEFAULT_DATETIME_PATTERN,
    seconds_difference: float = 60,
) -> bool:
    """Return True when two timestamps are at most ``seconds_difference`` apart.

    Strings are parsed with ``pattern`` (strptime syntax), falling back to
    ``datetime.fromisoformat``.  ``datetime`` instances are used as-is.
    Anything unparseable compares unequal.

    ``seconds_difference=0`` requires identical instants; it is not replaced
    by the 60 second default.
    """
    a = _parse_datetime(actual, pattern)
    b = _parse_datetime(expected, pattern)
    if a is None or b is None:
        return False
    return abs((a - b).total_seconds()) <= seconds_difference
