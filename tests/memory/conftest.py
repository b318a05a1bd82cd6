"""Fixtures for the failure memory tests: a deterministic in-process backend."""

from __future__ import annotations

import numpy as np
import pytest

# Known phrases map to fixed 3-d vectors; anything else maps to the z axis.
VECTORS: dict[str, list[float]] = {
    "timeout": [1.0, 0.0, 0.0],
    "timeout waiting for basket": [0.9, 0.1, 0.0],
    "value mismatch": [0.0, 1.0, 0.0],
    "type mismatch": [0.1, 0.9, 0.0],
}


class FakeBackend:
    """Embeds from ``VECTORS`` and records every call."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    def embed(self, strings: list[str]) -> np.ndarray:
        self.calls.append(list(strings))
        if not strings:
            return np.empty((0, 3))
        return np.array([VECTORS.get(s, [0.0, 0.0, 1.0]) for s in strings], dtype=np.float64)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()
