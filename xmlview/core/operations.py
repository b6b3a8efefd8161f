from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from xmlview.core.data.collection import XMLCollection

_KINDS = ("cast", "transform")


@dataclass(frozen=True, slots=True)
class FieldOperation:
    """A named cast/transform parsed from a "KEY=POLICY" spec (CLI and API)."""

    kind: str
    key: str
    policy: str

    def apply(self, collection: XMLCollection) -> XMLCollection:
        if self.kind == "cast":
            return collection.cast(self.key).to(self.policy)
        return collection.transform(self.key).to(self.policy)

    def describe(self) -> str:
        return f"{self.kind}:{self.key}={self.policy}"


def parse_field_operation(kind: str, spec: str) -> FieldOperation:
    """Parse "KEY=POLICY". Raises ValueError on malformed specs."""

    if kind not in _KINDS:
        raise ValueError(f"kind must be one of {_KINDS}, got {kind!r}")
    key, sep, policy = (spec or "").partition("=")
    key, policy = key.strip(), policy.strip()
    if not sep or not key or not policy:
        raise ValueError(f"expected KEY=POLICY, got {spec!r}")
    return FieldOperation(kind=kind, key=key, policy=policy)


def split_specs(raw: Optional[str]) -> List[str]:
    """Split a comma-separated form field into specs."""
    return [s.strip() for s in (raw or "").split(",") if s.strip()]


def parse_field_operations(kind: str, specs: Iterable[str]) -> List[FieldOperation]:
    return [parse_field_operation(kind, s) for s in specs]


def apply_field_operations(
    collection: XMLCollection,
    operations: Iterable[FieldOperation],
) -> XMLCollection:
    """Apply operations in order; the first failure propagates."""

    for op in operations:
        collection = op.apply(collection)
    return collection
