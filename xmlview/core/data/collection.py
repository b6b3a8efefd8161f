from __future__ import annotations

import json
import logging
from threading import RLock
from types import SimpleNamespace
from typing import Any, Dict, Hashable, Iterator, List, Mapping, Optional, Tuple

from xmlview.core.casts.cast import Cast
from xmlview.core.errors import KeyNotFound
from xmlview.core.policy.registry import resolve_policy
from xmlview.core.transformers.transform import TRANSFORMERS
from xmlview.core.transformers.transformable import Transformable
from xmlview.utils.json_safe import to_jsonable

from .coerce import as_list, next_index, normalize_key, to_record
from .normalize import array_value, normalize_mapping
from .pending import PendingCast, PendingTransform

log = logging.getLogger("xmlview.core")


def _json_key(key: Hashable) -> Hashable:
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, (bool, int, float)):
        return json.dumps(key)
    return key


def _to_namespace(value: Any) -> Any:
    if isinstance(value, Mapping):
        ns = SimpleNamespace()
        for k, v in value.items():
            setattr(ns, str(k), _to_namespace(v))
        return ns
    if isinstance(value, list):
        return [_to_namespace(v) for v in value]
    return value


class XMLCollection(Transformable):
    """
    Typed overlay over a record parsed from an XML document.

    Responsibilities
    - Own the record (key -> value) and expose indexed read/write/delete
    - Start single-use casts and transforms bound to one key
    - Normalize the record into plain and JSON forms

    Invariants
    - The record is only mutated by write/delete/append and by the commit
      callbacks handed to PendingCast / PendingTransform
    - Integer-like string keys ("3") address the same slot as the integer (3)
    - Mutation is serialized by a re-entrant lock; reads work on snapshots

    Complexity
    - read / write / delete / exists: O(1) average
    - get / to_array / json_serialize / iterate: O(n) for n top-level keys
    """

    def __init__(self, items: Any = None) -> None:
        self._items: Dict[Hashable, Any] = to_record(items)
        self._transformers = []
        self._lock = RLock()

    # --- Read paths ---

    def items_copy(self) -> Dict[Hashable, Any]:
        """Shallow copy of the raw record (no transformers applied)."""
        with self._lock:
            return dict(self._items)

    def get(self, as_object: bool = False) -> Any:
        """Return the record with queued transformers applied.

        as_object=True returns a SimpleNamespace, nested mappings included,
        so fields read as attributes (``c.get(True).note.to``).
        """

        data = self.apply_transformers(self.items_copy())
        return _to_namespace(data) if as_object else data

    def collect(self) -> Dict[str, Any]:
        """Plain data via a JSON round trip of json_serialize()."""
        return json.loads(json.dumps(self.json_serialize(), default=to_jsonable))

    def to_array(self) -> Dict[Hashable, Any]:
        return {k: array_value(v) for k, v in to_record(self.get()).items()}

    def json_serialize(self) -> Dict[Hashable, Any]:
        return normalize_mapping(to_record(self.get()))

    def to_json(self, **options: Any) -> str:
        """Serialize json_serialize(); options go to json.dumps unchanged.

        Top-level keys are written as the strings JSON would produce, so
        sort_keys works on records that mix int and str keys.
        """

        options.setdefault("default", to_jsonable)
        data = {_json_key(k): v for k, v in self.json_serialize().items()}
        return json.dumps(data, **options)

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    # --- Indexed access ---

    def exists(self, key: Hashable) -> bool:
        with self._lock:
            return normalize_key(key) in self._items

    def read(self, key: Hashable) -> Any:
        k = normalize_key(key)
        with self._lock:
            try:
                return self._items[k]
            except KeyError:
                raise KeyNotFound(key) from None

    def write(self, key: Optional[Hashable], value: Any) -> None:
        """Upsert ``value`` at ``key``; key=None appends at the next integer index."""

        with self._lock:
            if key is None:
                self._items[next_index(self._items)] = value
            else:
                self._items[normalize_key(key)] = value

    def append(self, value: Any) -> int:
        """Append at the next integer index and return that index."""

        with self._lock:
            index = next_index(self._items)
            self._items[index] = value
            return index

    def delete(self, key: Hashable) -> None:
        with self._lock:
            self._items.pop(normalize_key(key), None)

    def iterate(self) -> List[Tuple[Hashable, Any]]:
        """Snapshot of (key, value) pairs taken from get() at call time."""
        return list(to_record(self.get()).items())

    items = iterate

    def keys(self) -> List[Hashable]:
        return [k for k, _v in self.iterate()]

    def values(self) -> List[Any]:
        return [v for _k, v in self.iterate()]

    # --- Deferred operations ---

    def cast(self, key: Hashable) -> PendingCast:
        """Start a cast for ``key``.

        The commit coerces the current value to a list, applies the cast
        policy, stores the result and returns this collection.
        Raises KeyNotFound at commit time if the key is absent.
        """

        k = normalize_key(key)

        def commit(policy: Any) -> "XMLCollection":
            with self._lock:
                if k not in self._items:
                    raise KeyNotFound(key)
                self._items[k] = Cast.to(as_list(self._items[k]), policy)
            log.debug("cast committed key=%r policy=%r", k, policy)
            return self

        return PendingCast(self, k, commit)

    def transform(self, key: Hashable) -> PendingTransform:
        """Start a transform for ``key``; the policy sees the raw value."""

        k = normalize_key(key)

        def commit(policy: Any) -> "XMLCollection":
            with self._lock:
                if k not in self._items:
                    raise KeyNotFound(key)
                fn = resolve_policy(policy, registry=TRANSFORMERS, kind="transformer")
                self._items[k] = fn(self._items[k])
            log.debug("transform committed key=%r policy=%r", k, policy)
            return self

        return PendingTransform(self, k, commit)

    def expect(self, key: Hashable) -> PendingTransform:
        """Alias for transform()."""
        return self.transform(key)

    # --- Python protocols ---

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: object) -> bool:
        try:
            return self.exists(key)  # type: ignore[arg-type]
        except TypeError:
            return False

    def __getitem__(self, key: Hashable) -> Any:
        return self.read(key)

    def __setitem__(self, key: Optional[Hashable], value: Any) -> None:
        self.write(key, value)

    def __delitem__(self, key: Hashable) -> None:
        self.delete(key)

    def __iter__(self) -> Iterator[Tuple[Hashable, Any]]:
        return iter(self.iterate())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, XMLCollection):
            return self.items_copy() == other.items_copy()
        if isinstance(other, Mapping):
            return self.items_copy() == to_record(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        return f"<XMLCollection keys={self.count()}>"
