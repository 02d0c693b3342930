"""
JSON boundary of the engine.

``decode`` turns snapshot text into a value tree of ``None``, booleans,
numbers, strings, lists and dicts; ``encode`` performs the reverse structural
dump, writing model instances as their mappings.
"""

from __future__ import annotations

import enum
import json
from collections.abc import Mapping
from typing import Any

from .exceptions import MalformedSnapshotError


def decode(text: str) -> Any:
    """
    Decode snapshot text into a value tree.

    Raises:
        MalformedSnapshotError: If the text is not valid JSON
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedSnapshotError(
            f"malformed snapshot at line {e.lineno} column {e.colno}: {e.msg}"
        ) from e


def encode(tree: Any, indent: Any = None) -> str:
    """Encode a value tree (model instances included) as compact JSON."""
    separators = (",", ":") if indent is None else (",", ": ")
    return json.dumps(tree, default=_default, separators=separators, indent=indent)


def _default(value: Any) -> Any:
    to_snapshot = getattr(value, "to_snapshot", None)
    if to_snapshot is not None:
        return to_snapshot()
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, enum.Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
