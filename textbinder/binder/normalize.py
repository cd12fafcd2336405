"""Value normalization shared by the binder and its built-in functions.

The binder works on text: after every function in a placeholder chain the
result is turned back into a string so the next function always receives
the same kind of input. The truthiness rules follow the loose semantics
template authors expect, where ``"0"`` reads as false.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping, Set
from typing import Any

from pydantic import BaseModel

_JSON_KEY_TYPES = (str, int, float, bool)


def _json_key(key: Any) -> Any:
    if key is None or isinstance(key, _JSON_KEY_TYPES):
        return key
    return str(key)


def _to_jsonable(value: Any) -> Any:
    """Turn a structured value into plain JSON types, recursively."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _to_jsonable(dataclasses.asdict(value))
    if isinstance(value, Mapping):
        return {_json_key(key): _to_jsonable(item) for key, item in value.items()}
    if isinstance(value, Set):
        return [_to_jsonable(item) for item in sorted(value, key=repr)]
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


def is_structured(value: Any) -> bool:
    """Return True for values serialized as JSON rather than ``str()``."""
    if isinstance(value, (str, bytes)):
        return False
    if isinstance(value, (Mapping, list, tuple, Set, BaseModel)):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def to_json(value: Any) -> str:
    """Serialize a structured value to compact JSON.

    Non-ASCII characters are kept as is. Pydantic models, dataclasses and
    sets are converted at any depth, mapping keys JSON cannot hold are
    stringified, and other unknown objects fall back to ``str()``.
    """
    return json.dumps(
        _to_jsonable(value),
        ensure_ascii=False,
        separators=(",", ":"),
        default=str,
    )


def normalize_output(value: Any) -> str:
    """Convert a function result into its textual form.

    - ``True`` -> ``"1"`` and ``False`` -> ``"0"``
    - ``None`` -> ``""``
    - mappings, sequences, sets, dataclasses, pydantic models -> JSON
    - ``bytes`` are decoded as UTF-8 (invalid bytes replaced)
    - anything else -> ``str(value)``
    """
    if isinstance(value, bool):
        return "1" if value else "0"
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if is_structured(value):
        return to_json(value)
    return str(value)


def is_empty(value: Any) -> bool:
    """Loose comparison against the empty string.

    ``None``, ``False`` and ``""`` count as empty. Zero and empty containers
    do not.
    """
    return value is None or value is False or value == ""


def is_truthy(value: Any) -> bool:
    """Truthiness where the string ``"0"`` is false."""
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)
