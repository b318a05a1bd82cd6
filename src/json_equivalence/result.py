"""CompareResult dataclass and EquivalenceError.

CompareResult is returned by every comparison; EquivalenceError is only
raised by the assertion-style entry points.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

__all__ = ["ASSERTION_HEADER", "CompareResult", "EquivalenceError"]

ASSERTION_HEADER = "Expected objects to be equivalent:"


@dataclass(frozen=True, slots=True)
class CompareResult:
    """Outcome of a structural comparison.

    Attributes:
        equal: True when no mismatch was found.  Always equal to
            ``len(diffs) == 0``.
        diffs: Human-readable mismatch descriptions in traversal pre-order,
            e.g. ``"Value mismatch at items[0].price: 10 !== 12"``.
    """

    equal: bool
    diffs: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls) -> CompareResult:
        return cls(equal=True, diffs=[])

    @classmethod
    def from_diffs(cls, diffs: Iterable[str]) -> CompareResult:
        collected = list(diffs)
        return cls(equal=not collected, diffs=collected)


class EquivalenceError(AssertionError):
    """Raised when two values are not structurally equivalent.

    Subclasses ``AssertionError`` so test runners report it as an ordinary
    assertion failure.  The message holds every diff found in one traversal.

    Attributes:
        diffs: The mismatch descriptions the message was built from.
    """

    def __init__(self, diffs: Iterable[str]) -> None:
        self.diffs: list[str] = list(diffs)
        super().__init__("\n".join([ASSERTION_HEADER, *self.diffs]))
