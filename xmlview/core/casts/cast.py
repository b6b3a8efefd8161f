from __future__ import annotations

import logging
from typing import Any, List

from xmlview.core.policy.registry import PolicyRegistry, resolve_policy

from .builtin import BoolCast, DateCast, FirstCast, FloatCast, IntCast, JoinCast, ListCast, StrCast

log = logging.getLogger("xmlview.core")

CASTS = PolicyRegistry(kind="cast")

for _name, _policy in (
    ("list", ListCast),
    ("first", FirstCast),
    ("int", IntCast),
    ("float", FloatCast),
    ("bool", BoolCast),
    ("str", StrCast),
    ("date", DateCast),
    ("join", JoinCast()),
):
    CASTS.register(_name, _policy)


def register_cast(name: str, policy: Any, *, replace: bool = False) -> None:
    """Make a cast available by name (CLI, API and cast(key).to("name"))."""
    CASTS.register(name, policy, replace=replace)


class Cast:
    """Entry point used by XMLCollection.cast() commits."""

    @staticmethod
    def to(values: List[Any], policy: Any) -> Any:
        fn = resolve_policy(policy, registry=CASTS, kind="cast")
        log.debug("cast apply policy=%r elements=%d", policy, len(values))
        return fn(values)
