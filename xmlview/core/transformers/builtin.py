from __future__ import annotations

import re
from typing import Any, Callable, List, Mapping

from xmlview.core.casts.builtin import parse_bool, parse_int
from xmlview.core.errors import CoercionFailure

_WORD_BOUNDARY = re.compile(r"[-_\s.]+")
_CAMEL_HUMP = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def camel_case(key: str) -> str:
    """Convert first-name, first_name or FirstName to firstName."""

    parts = [p for p in _WORD_BOUNDARY.split(key) if p]
    if not parts:
        return key
    words: List[str] = []
    for p in parts:
        words.extend(w for w in _CAMEL_HUMP.split(p) if w)
    head, *tail = words
    return head.lower() + "".join(w[:1].upper() + w[1:] for w in tail)


def snake_case(key: str) -> str:
    """Convert firstName, first-name or FirstName to first_name."""

    parts = [p for p in _WORD_BOUNDARY.split(key) if p]
    words: List[str] = []
    for p in parts:
        words.extend(w for w in _CAMEL_HUMP.split(p) if w)
    return "_".join(w.lower() for w in words) if words else key


def _rename_keys(value: Any, rename: Callable[[str], str]) -> Any:
    if isinstance(value, Mapping):
        out = {}
        for k, v in value.items():
            # "@attributes" / "#text" markers keep their spelling.
            nk = rename(k) if isinstance(k, str) and k[:1] not in ("@", "#") else k
            out[nk] = _rename_keys(v, rename)
        return out
    if isinstance(value, list):
        return [_rename_keys(v, rename) for v in value]
    return value


def _string_op(name: str, value: Any, op: Callable[[str], str]) -> Any:
    if value is None:
        return None
    if not isinstance(value, str):
        raise CoercionFailure(f"{name} transformer expects a string, got {type(value).__name__}")
    return op(value)


def _scalar(name: str, value: Any, convert: Callable[[Any], Any]) -> Any:
    if isinstance(value, str):
        value = value.strip()
    try:
        return convert(value)
    except (TypeError, ValueError) as e:
        raise CoercionFailure(f"{name} transformer failed for {value!r}: {e}") from e


class UpperTransformer:
    @staticmethod
    def apply(value: Any) -> Any:
        return _string_op("upper", value, str.upper)


class LowerTransformer:
    @staticmethod
    def apply(value: Any) -> Any:
        return _string_op("lower", value, str.lower)


class StripTransformer:
    @staticmethod
    def apply(value: Any) -> Any:
        return _string_op("strip", value, str.strip)


class IntTransformer:
    @staticmethod
    def apply(value: Any) -> int:
        return _scalar("int", value, parse_int)


class FloatTransformer:
    @staticmethod
    def apply(value: Any) -> float:
        return _scalar("float", value, float)


class BoolTransformer:
    @staticmethod
    def apply(value: Any) -> bool:
        return _scalar("bool", value, parse_bool)


class ArrayTransformer:
    """Wrap a single element into a list. None becomes []."""

    @staticmethod
    def apply(value: Any) -> List[Any]:
        if value is None:
            return []
        if isinstance(value, list):
            return value
        return [value]


class CamelCaseKeysTransformer:
    """Recursively rename mapping keys to camelCase.

    Works on a single field or, through optimize("camelcase"), on the whole
    record.
    """

    @staticmethod
    def apply(value: Any) -> Any:
        return _rename_keys(value, camel_case)


class SnakeCaseKeysTransformer:
    @staticmethod
    def apply(value: Any) -> Any:
        return _rename_keys(value, snake_case)
