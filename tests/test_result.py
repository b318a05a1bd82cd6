"""Tests for CompareResult and EquivalenceError."""

from __future__ import annotations

import dataclasses

import pytest

from json_equivalence.result import ASSERTION_HEADER, CompareResult, EquivalenceError


class TestCompareResult:
    def test_ok_is_equal_without_diffs(self) -> None:
        result = CompareResult.ok()
        assert result.equal is True
        assert result.diffs == []

    def test_from_empty_diffs_is_equal(self) -> None:
        assert CompareResult.from_diffs([]).equal is True

    def test_from_diffs_not_equal(self) -> None:
        result = CompareResult.from_diffs(["Type mismatch at a"])
        assert result.equal is False
        assert result.diffs == ["Type mismatch at a"]

    def test_from_diffs_accepts_generator(self) -> None:
        result = CompareResult.from_diffs(f"d{i}" for i in range(3))
        assert result.diffs == ["d0", "d1", "d2"]

    def test_from_diffs_preserves_order(self) -> None:
        diffs = ["z", "a", "m"]
        assert CompareResult.from_diffs(diffs).diffs == diffs

    def test_frozen(self) -> None:
        result = CompareResult.ok()
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.equal = False  # type: ignore[misc]

    def test_ok_instances_do_not_share_diffs(self) -> None:
        assert CompareResult.ok().diffs is not CompareResult.ok().diffs


class TestEquivalenceError:
    def test_is_assertion_error(self) -> None:
        assert issubclass(EquivalenceError, AssertionError)

    def test_message_has_header_and_all_diffs(self) -> None:
        err = EquivalenceError(["Value mismatch at id: 1 !== 2", "Type mismatch at name"])
        assert str(err) == (
            f"{ASSERTION_HEADER}\n"
            "Value mismatch at id: 1 !== 2\n"
            "Type mismatch at name"
        )

    def test_header_text(self) -> None:
        assert ASSERTION_HEADER == "Expected objects to be equivalent:"

    def test_carries_diffs(self) -> None:
        err = EquivalenceError(iter(["a", "b"]))
        assert err.diffs == ["a", "b"]

    def test_caught_as_assertion_error(self) -> None:
        with pytest.raises(AssertionError, match="Type mismatch at x"):
            raise EquivalenceError(["Type mismatch at x"])
