"""Embedding backends for the failure memory.

The OpenAI backend needs the ``openai`` extra:

    pip install json-equivalence[openai]

The module itself imports without the extra; instantiating ``OpenAIBackend``
raises ``ImportError`` with the install hint when it is missing.
"""

from json_equivalence.memory.backends.openai import OpenAIBackend

__all__ = ["OpenAIBackend"]
