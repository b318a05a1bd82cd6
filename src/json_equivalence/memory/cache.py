"""EmbeddingCache: LRU-backed caching proxy for any EmbeddingBackend.

Repeated failure messages (the same diff report on every rerun of a flaky
test) are embedded once.  LRU eviction occurs silently when ``max_size`` is
exceeded.  Each instance owns its ``LRUCache``; nothing is shared between
instances.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np
from cachetools import LRUCache

if TYPE_CHECKING:
    from json_equivalence.memory.protocols import EmbeddingBackend


class EmbeddingCache:
    """LRU-backed caching proxy satisfying ``EmbeddingBackend`` structurally.

    Args:
        backend: Any object with an ``embed(strings) -> np.ndarray`` method.
        max_size: Maximum number of cached strings.  Defaults to 256.
    """

    def __init__(self, backend: EmbeddingBackend, max_size: int = 256) -> None:
        self._backend: Any = backend
        self._cache: LRUCache[str, np.ndarray] = LRUCache(maxsize=max_size)

    @property
    def max_size(self) -> int:
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        return int(self._cache.currsize)

    def embed(self, strings: list[str]) -> np.ndarray:
        """Return embeddings for ``strings``; only uncached strings hit the backend.

        Row ``i`` of the result corresponds to ``strings[i]``.
        """
        if not strings:
            return self._backend.embed([])  # type: ignore[no-any-return]

        results: dict[str, np.ndarray] = {}
        uncached = list(dict.fromkeys(s for s in strings if s not in self._cache))

        if uncached:
            embeddings: np.ndarray = self._backend.embed(uncached)
            for s, vec in zip(uncached, embeddings, strict=True):
                self._cache[s] = vec
                results[s] = vec

        for s in strings:
            if s not in results:
                results[s] = self._cache[s]

        return np.stack([results[s] for s in strings])
