"""OpenAIBackend: embedding backend via the OpenAI embeddings API.

Wraps ``openai.OpenAI`` with a lazy import so that the base install
(no openai/tenacity installed) never triggers an ``ImportError`` at module
level.  The ``openai`` and ``tenacity`` packages are only required when
``OpenAIBackend`` is *instantiated*.

The API key is read exclusively from the ``OPENAI_API_KEY`` environment
variable and never appears in ``repr()`` or log output.

Rate-limited requests (HTTP 429) are retried with jittered exponential
backoff via ``tenacity``.  The ``openai.OpenAI`` client is created with
``max_retries=0`` so tenacity is the only retry layer.

Install the optional dependency with::

    pip install json-equivalence[openai]
"""

from __future__ import annotations

from typing import Any

import numpy as np

EMBEDDING_MODEL = "text-embedding-3-small"

# Output width of the OpenAI embedding models; unknown models report 0.
MODEL_DIMENSIONS: dict[str, int] = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


class OpenAIBackend:
    """OpenAI embedding backend, ``text-embedding-3-small`` by default.

    Newlines in the input are replaced by spaces before embedding; multi-line
    diff reports otherwise embed noticeably worse.

    Args:
        model_name: OpenAI embedding model identifier.
        max_attempts: Total attempts per request when rate-limited.

    Raises:
        ImportError: If ``openai`` or ``tenacity`` is not installed.  The
            message includes the install command.
    """

    def __init__(
        self,
        model_name: str = EMBEDDING_MODEL,
        max_attempts: int = 6,
    ) -> None:
        try:
            from openai import OpenAI, RateLimitError
            from tenacity import (
                retry,
                retry_if_exception_type,
                stop_after_attempt,
                wait_random_exponential,
            )
        except ImportError as exc:
            raise ImportError(
                "openai and tenacity are required for OpenAIBackend. "
                "Install with: pip install json-equivalence[openai]"
            ) from exc

        self._model_name = model_name
        self._client: Any = OpenAI(max_retries=0)

        # RateLimitError only exists once openai is imported, so the retry
        # decorator is built here rather than at class definition time.
        _retry = retry(
            retry=retry_if_exception_type(RateLimitError),
            wait=wait_random_exponential(min=1, max=60),
            stop=stop_after_attempt(max_attempts),
            reraise=True,
        )
        self._call_api = _retry(self._raw_call)

    def __repr__(self) -> str:
        return f"OpenAIBackend(model={self._model_name!r})"

    @property
    def dimension(self) -> int:
        """Embedding width for the configured model, 0 when it is not known."""
        return MODEL_DIMENSIONS.get(self._model_name, 0)

    def embed(self, strings: list[str]) -> np.ndarray:
        """Return embeddings for ``strings`` as a float32 ``(N, D)`` ndarray.

        An empty input returns an empty ``(0, dimension)`` array without calling
        the API.
        """
        if not strings:
            return np.empty((0, self.dimension), dtype=np.float32)
        return self._call_api([s.replace("\n", " ") for s in strings])  # type: ignore[no-any-return]

    def _raw_call(self, strings: list[str]) -> np.ndarray:
        response = self._client.embeddings.create(
            model=self._model_name,
            input=strings,
        )
        sorted_data = sorted(response.data, key=lambda x: x.index)
        return np.array(
            [item.embedding for item in sorted_data],
            dtype=np.float32,
        )
