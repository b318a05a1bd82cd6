"""Shared fixtures: a small record and variants of it."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def record() -> dict[str, Any]:
    return {
        "id": 1,
        "name": "Test Object",
        "someArray": [
            {"value": "a", "key": "1"},
            {"value": "b", "key": "2"},
        ],
    }


@pytest.fixture
def reversed_record() -> dict[str, Any]:
    """Same as ``record`` with ``someArray`` in reverse order."""
    return {
        "id": 1,
        "name": "Test Object",
        "someArray": [
            {"value": "b", "key": "2"},
            {"value": "a", "key": "1"},
        ],
    }
