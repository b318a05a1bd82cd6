"""Failure memory: remember analysed test failures and find similar ones.

Requires an embedding backend.  The bundled ``OpenAIBackend`` needs the
``openai`` extra; any object with an ``embed(strings) -> np.ndarray`` method
works as well.
"""

from __future__ import annotations

from json_equivalence.memory.backends import OpenAIBackend
from json_equivalence.memory.cache import EmbeddingCache
from json_equivalence.memory.protocols import EmbeddingBackend
from json_equivalence.memory.store import (
    FailureMemory,
    SimilarFailure,
    StoredFailure,
    cosine_similarity,
)

__all__ = [
    "EmbeddingBackend",
    "EmbeddingCache",
    "FailureMemory",
    "OpenAIBackend",
    "SimilarFailure",
    "StoredFailure",
    "cosine_similarity",
]
