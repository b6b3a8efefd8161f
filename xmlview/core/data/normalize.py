"""Capability-ordered normalization of stored values.

A stored value may be plain data or an object that knows how to describe
itself. Exactly one capability is consulted per value, in this order:

1) SelfDescribingJSON      -> json_serialize() result, used as-is
2) JSONStringSerializable  -> to_json() string, decoded back to plain data
3) PlainArrayConvertible   -> to_array() result
4) anything else           -> unchanged
"""

from __future__ import annotations

import inspect
import json
from typing import Any, Dict, Mapping, Protocol, runtime_checkable


@runtime_checkable
class SelfDescribingJSON(Protocol):
    def json_serialize(self) -> Any: ...


@runtime_checkable
class JSONStringSerializable(Protocol):
    def to_json(self) -> str: ...


@runtime_checkable
class PlainArrayConvertible(Protocol):
    def to_array(self) -> Any: ...


def normalize_value(value: Any) -> Any:
    """Reduce a single value to plain data.

    The output of a capability is trusted and not re-normalized.

    Time:  O(1) plus whatever the capability costs
    Space: O(1) plus the capability output
    """

    # Classes expose these methods unbound; only instances qualify.
    if inspect.isclass(value):
        return value
    if isinstance(value, SelfDescribingJSON):
        return value.json_serialize()
    if isinstance(value, JSONStringSerializable):
        return json.loads(value.to_json())
    if isinstance(value, PlainArrayConvertible):
        return value.to_array()
    return value


def array_value(value: Any) -> Any:
    """Expand only the PlainArrayConvertible capability."""

    if not inspect.isclass(value) and isinstance(value, PlainArrayConvertible):
        return value.to_array()
    return value


def normalize_mapping(items: Mapping[Any, Any]) -> Dict[Any, Any]:
    """Apply normalize_value to every top-level value."""

    return {k: normalize_value(v) for k, v in items.items()}
