from __future__ import annotations

import re
from typing import Any, Dict, Hashable, List, Mapping

_INT_KEY = re.compile(r"^(0|-?[1-9][0-9]*)$")

_SCALARS = (str, bytes, bytearray, int, float, complex, bool)


def normalize_key(key: Hashable) -> Hashable:
    """Map canonical integer strings to int so "3" and 3 address one slot.

    "01", "+1" and " 1" stay strings. bool keys are kept as-is.
    """

    if isinstance(key, str) and _INT_KEY.match(key):
        return int(key)
    return key


def is_int_key(key: Any) -> bool:
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return True
    return isinstance(key, str) and _INT_KEY.match(key) is not None


def next_index(items: Mapping[Any, Any]) -> int:
    """Next append index: one past the largest integer key, never below 0.

    False, 0.0, True and 1.0 hash like 0 and 1, so the candidate is bumped
    past any key it would collide with.
    """

    ints = [k for k in items if isinstance(k, int) and not isinstance(k, bool)]
    index = max(max(ints) + 1, 0) if ints else 0
    while index in items:
        index += 1
    return index


def to_record(raw: Any) -> Dict[Hashable, Any]:
    """Coerce any value into the record mapping shape.

    - None -> {}
    - objects exposing ``items_copy()`` (XMLCollection) -> that copy
    - Mapping -> shallow copy with normalized keys
    - list / tuple -> {0: v0, 1: v1, ...}
    - scalars -> {0: value}
    - other objects with a __dict__ -> copy of vars(obj)
    - anything else -> {0: value}
    """

    if raw is None:
        return {}

    items_copy = getattr(raw, "items_copy", None)
    if callable(items_copy):
        return dict(items_copy())

    if isinstance(raw, Mapping):
        return {normalize_key(k): v for k, v in raw.items()}

    if isinstance(raw, (list, tuple)):
        return dict(enumerate(raw))

    if isinstance(raw, _SCALARS):
        return {0: raw}

    if hasattr(raw, "__dict__"):
        return {normalize_key(k): v for k, v in vars(raw).items()}

    return {0: raw}


def as_list(value: Any) -> List[Any]:
    """Coerce a stored value into a list before a cast.

    A mapping whose keys are all integer-like is a sequence in disguise and
    yields its values by key order. Any other mapping is one element.
    """

    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    if isinstance(value, tuple):
        return list(value)

    items_copy = getattr(value, "items_copy", None)
    mapping = items_copy() if callable(items_copy) else value

    if isinstance(mapping, Mapping):
        if mapping and all(is_int_key(k) for k in mapping):
            return [mapping[k] for k in sorted(mapping, key=int)]
        if not mapping:
            return []
        return [mapping]

    return [value]
