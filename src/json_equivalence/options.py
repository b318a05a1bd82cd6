"""CompareOptions and FieldComparator for structural comparison.

CompareOptions is a frozen (immutable) dataclass holding the comparison
policy.  FieldComparator pairs an exact path with a predicate that replaces
the default structural comparison at that path.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, NamedTuple

__all__ = ["CompareOptions", "FieldComparator", "comparator_name"]

Predicate = Callable[[Any, Any], bool]


@dataclass(frozen=True, slots=True)
class CompareOptions:
    """Immutable comparison policy.

    Attributes:
        exclude_keys: Index-erased paths (``"items[].price"``) that are treated
            as equal without descending into them.  Any iterable of strings is
            accepted and stored as a frozenset.
        ignore_array_order: When True, arrays are sorted by their canonical
            serialisation before pairwise comparison.  Default False.
    """

    exclude_keys: frozenset[str] = field(default_factory=frozenset)
    ignore_array_order: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.exclude_keys, str):
            msg = f"exclude_keys must be an iterable of paths, got {self.exclude_keys!r}"
            raise TypeError(msg)
        if not isinstance(self.exclude_keys, frozenset):
            keys: Iterable[str] = self.exclude_keys
            object.__setattr__(self, "exclude_keys", frozenset(keys))


class FieldComparator(NamedTuple):
    """A predicate overriding comparison at one exact path.

    The path is matched literally, array indices included, so
    ``FieldComparator("items[0].price", ...)`` never fires for ``items[1]``.
    """

    path: str
    predicate: Predicate


def comparator_name(predicate: Predicate) -> str:
    """Return the name used to tag a custom comparator's diff entry."""
    while isinstance(predicate, functools.partial):
        predicate = predicate.func
    name = getattr(predicate, "__name__", None)
    if name is None:
        return type(predicate).__name__
    return str(name)
