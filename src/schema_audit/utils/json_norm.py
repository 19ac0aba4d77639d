"""Canonical JSON serialization: single dump path for CLI and API output.

Guarantees:
  - Stable key ordering (``sort_keys=True``)
  - Trailing newline at EOF
  - ``Path`` objects → POSIX strings
  - Objects exposing ``to_dict()`` (findings, results) → dicts
  - Tuples (document paths) → lists
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Mapping


def _to_builtin(obj: Any) -> Any:
    """Convert common non-JSON types into JSON-safe builtins."""
    if obj is None or isinstance(obj, (bool, int, float)):
        return obj
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, str):
        return obj
    if isinstance(obj, Path):
        return obj.as_posix()
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return _to_builtin(to_dict())
    if isinstance(obj, Mapping):
        return {str(k): _to_builtin(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [_to_builtin(v) for v in obj]
    return str(obj)


def to_builtin(obj: Any) -> Any:
    return _to_builtin(obj)


def stable_json_dumps(obj: Any, *, indent: int | None = 2) -> str:
    """Serialize *obj* deterministically with a trailing newline."""
    s = json.dumps(
        _to_builtin(obj),
        indent=indent,
        sort_keys=True,
        ensure_ascii=False,
    )
    return s + "\n"

