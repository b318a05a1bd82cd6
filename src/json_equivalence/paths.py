"""Path addressing and value rendering helpers.

Paths use dotted keys and bracketed indices, e.g. ``order.items[2].sku``.
The root is the empty string and first-level keys carry no leading dot.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any, Final

__all__ = [
    "MISSING",
    "canonical_dumps",
    "display",
    "erase_indices",
    "index_path",
    "key_path",
]

_INDEX = re.compile(r"\[\d+\]")


class _Missing:
    """Sentinel for a key present on ``expected`` but absent from ``actual``."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"


MISSING: Final = _Missing()


def key_path(parent: str, key: Any) -> str:
    return f"{parent}.{key}" if parent else str(key)


def index_path(parent: str, index: int) -> str:
    return f"{parent}[{index}]"


def erase_indices(path: str) -> str:
    """Replace every literal index with ``[]``: ``a[0].b[12]`` -> ``a[].b[]``."""
    return _INDEX.sub("[]", path)


def _string_keys(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _string_keys(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_string_keys(v) for v in value]
    return value


def canonical_dumps(value: Any) -> str:
    """Serialise ``value`` deterministically (sorted keys, compact separators).

    Mapping keys are stringified first so mixed ``int``/``str`` keys still
    sort.  Values json cannot encode natively fall back to ``str()``.
    """
    return json.dumps(
        _string_keys(value),
        sort_keys=True,
        separators=(",", ":"),
        default=str,
        ensure_ascii=False,
    )


def display(value: Any) -> str:
    """Render a value inside a diff message.

    Strings appear verbatim so ``a !== b`` reads naturally; everything else
    uses ``repr()``.
    """
    if isinstance(value, str):
        return value
    return repr(value)
