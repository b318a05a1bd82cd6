"""FailureMemory: persistent store of past test failures with similarity lookup.

Each stored failure keeps the (truncated) error text, the analysis written
for it, and the error's embedding.  ``find_similar`` embeds a new error and
ranks stored failures by cosine similarity, so a recurring equivalence diff
can be matched to the analysis recorded the first time it was seen.

The store is a single JSON file, rewritten through a temporary sibling and
``os.replace`` so a crash mid-write never truncates it.  It holds at most
``max_entries`` failures; the oldest are dropped first.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np

from json_equivalence.memory.cache import EmbeddingCache

if TYPE_CHECKING:
    from json_equivalence.memory.protocols import EmbeddingBackend

__all__ = [
    "DEFAULT_STORE_FILENAME",
    "STORE_PATH_ENV",
    "FailureMemory",
    "SimilarFailure",
    "StoredFailure",
    "cosine_similarity",
]

logger = logging.getLogger(__name__)

STORE_PATH_ENV = "JSON_EQUIVALENCE_FAILURE_DB"
DEFAULT_STORE_FILENAME = "ai-failures-db.json"


@dataclass(slots=True)
class StoredFailure:
    """One remembered failure.

    Attributes:
        id:        Random hex identifier.
        error:     Error text, truncated to the memory's ``max_error_chars``.
        analysis:  Free-form analysis recorded for this failure.
        embedding: Embedding of ``error`` as a list of floats.
        timestamp: ISO-8601 UTC time the failure was recorded.
    """

    id: str
    error: str
    analysis: str
    embedding: list[float] = field(default_factory=list)
    timestamp: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StoredFailure:
        return cls(
            id=str(data["id"]),
            error=str(data["error"]),
            analysis=str(data["analysis"]),
            embedding=[float(x) for x in data.get("embedding", [])],
            timestamp=str(data.get("timestamp", "")),
        )


@dataclass(frozen=True, slots=True)
class SimilarFailure:
    """A stored failure paired with its similarity to a query."""

    failure: StoredFailure
    similarity: float


def cosine_similarity(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Cosine similarity of ``query`` (shape ``(D,)``) against each row of ``matrix``."""
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    return (matrix @ query) / (norms + 1e-9)


class FailureMemory:
    """Persistent, embedding-indexed memory of test failures.

    Example::

        from json_equivalence.memory import FailureMemory, OpenAIBackend

        memory = FailureMemory(OpenAIBackend())
        try:
            assert_equivalent(actual, expected)
        except EquivalenceError as exc:
            for match in memory.find_similar(str(exc)):
                print(match.similarity, match.failure.analysis)

    Args:
        backend: Any ``EmbeddingBackend``.  Wrapped in an ``EmbeddingCache``.
        path: JSON file backing the memory.  Defaults to the
            ``JSON_EQUIVALENCE_FAILURE_DB`` environment variable, then
            ``./ai-failures-db.json``.
        max_entries: Capacity; the oldest failures are evicted beyond it.
        max_error_chars: Error texts are truncated to this length before
            embedding and storage.
    """

    def __init__(
        self,
        backend: EmbeddingBackend,
        path: str | os.PathLike[str] | None = None,
        max_entries: int = 1000,
        max_error_chars: int = 500,
    ) -> None:
        if max_entries < 1:
            msg = f"max_entries must be >= 1, got {max_entries}"
            raise ValueError(msg)
        if max_error_chars < 1:
            msg = f"max_error_chars must be >= 1, got {max_error_chars}"
            raise ValueError(msg)
        if path is None:
            path = os.environ.get(STORE_PATH_ENV) or Path.cwd() / DEFAULT_STORE_FILENAME
        self._path = Path(path)
        self._backend = EmbeddingCache(backend)
        self._max_entries = max_entries
        self._max_error_chars = max_error_chars
        self._failures: list[StoredFailure] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def failures(self) -> list[StoredFailure]:
        return list(self._failures)

    def __len__(self) -> int:
        return len(self._failures)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def add(self, error: str, analysis: str) -> StoredFailure:
        """Record a failure and persist the memory.

        The in-memory state only changes once the file has been written, so a
        failed save leaves both untouched.

        Returns:
            The stored entry, with its embedding and timestamp filled in.
        """
        text = error[: self._max_error_chars]
        embedding = self._backend.embed([text])[0]
        failure = StoredFailure(
            id=uuid.uuid4().hex[:12],
            error=text,
            analysis=analysis,
            embedding=[float(x) for x in embedding],
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        failures = [*self._failures, failure]
        overflow = len(failures) - self._max_entries
        if overflow > 0:
            del failures[:overflow]
        self._save(failures)
        self._failures = failures
        if overflow > 0:
            logger.debug("Evicted %d oldest failure(s) from %s", overflow, self._path)
        return failure

    def find_similar(
        self,
        error: str,
        threshold: float = 0.8,
        limit: int = 3,
    ) -> list[SimilarFailure]:
        """Return stored failures whose error resembles ``error``.

        Args:
            error:     Error text to look up.  Truncated like stored errors.
            threshold: Minimum cosine similarity for a match.
            limit:     Maximum number of matches returned.

        Returns:
            Matches sorted by descending similarity.  Empty when the memory
            is empty (the backend is not called).  Entries whose embedding
            width differs from the query's, e.g. written with another model,
            never match.
        """
        if not self._failures:
            return []

        query = np.asarray(
            self._backend.embed([error[: self._max_error_chars]])[0], dtype=np.float64
        )
        candidates = [f for f in self._failures if len(f.embedding) == query.shape[0]]
        skipped = len(self._failures) - len(candidates)
        if skipped:
            logger.debug(
                "Skipped %d failure(s) with embedding width != %d", skipped, query.shape[0]
            )
        if not candidates:
            return []
        matrix = np.array([f.embedding for f in candidates], dtype=np.float64)
        scores = cosine_similarity(query, matrix)

        ranked = sorted(
            (
                SimilarFailure(failure=f, similarity=float(s))
                for f, s in zip(candidates, scores, strict=True)
                if s >= threshold
            ),
            key=lambda m: m.similarity,
            reverse=True,
        )
        return ranked[:limit]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> list[StoredFailure]:
        if not self._path.exists():
            return []
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            failures = [StoredFailure.from_dict(item) for item in raw]
        except (OSError, ValueError, TypeError, KeyError):
            logger.warning(
                "Failed to load failure memory from %s, starting empty",
                self._path,
                exc_info=True,
            )
            return []
        logger.debug("Loaded %d failure(s) from %s", len(failures), self._path)
        return failures[-self._max_entries :]

    def _save(self, failures: list[StoredFailure]) -> None:
        """Write ``failures`` to a sibling temp file, then swap it into place."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([f.to_dict() for f in failures], indent=2)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp.write(payload)
        try:
            os.replace(tmp.name, self._path)
        except OSError:
            os.unlink(tmp.name)
            raise
