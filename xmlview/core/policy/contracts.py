from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Invocable(Protocol):
    """A policy that is called directly with the value."""

    def __call__(self, value: Any) -> Any: ...


@runtime_checkable
class StaticApply(Protocol):
    """A policy (usually a class) exposing ``apply(value) -> value``.

    Casts and transformers in the built-in catalogue are written this way,
    with ``apply`` as a staticmethod, so the class itself is the policy.
    """

    def apply(self, value: Any) -> Any: ...
