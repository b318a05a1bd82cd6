"""EmbeddingBackend Protocol for the failure memory.

Defines the structural interface every embedding backend must satisfy.
Any class with a conformant ``embed`` method passes ``isinstance`` checks,
no inheritance required.

Example::

    import numpy as np
    from json_equivalence.memory.protocols import EmbeddingBackend

    class MyBackend:
        def embed(self, strings: list[str]) -> np.ndarray:
            return np.zeros((len(strings), 768))

    assert isinstance(MyBackend(), EmbeddingBackend)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    import numpy as np


@runtime_checkable
class EmbeddingBackend(Protocol):
    """Structural protocol for embedding backends.

    ``embed`` must return a 2-D array of shape ``(len(strings), D)`` for some
    embedding dimension ``D >= 1``.
    """

    def embed(self, strings: list[str]) -> np.ndarray: ...
