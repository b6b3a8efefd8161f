from __future__ import annotations

import logging
from typing import Any, Callable, List, Tuple

from xmlview.core.policy.registry import resolve_policy

from .transform import OPTIMIZE_MODES, TRANSFORMERS

log = logging.getLogger("xmlview.core")


class Transformable:
    """Queue of whole-structure transformers applied on read.

    Queued transformers never touch the stored record. They run, in the order
    they were added, over a copy produced by the host's read path
    (XMLCollection.get()).
    """

    _transformers: List[Tuple[Any, Callable[[Any], Any]]]

    def add_transformer(self, policy: Any):
        """Queue a transformer (callable, apply-class or registered name)."""

        fn = resolve_policy(policy, registry=TRANSFORMERS, kind="transformer")
        self._transformers.append((policy, fn))
        log.debug("transformer queued policy=%r", policy)
        return self

    def optimize(self, mode: str = "camelcase"):
        """Queue a key-style transformer ("camelcase" or "snakecase")."""

        normalized = (mode or "").strip().lower()
        if normalized not in OPTIMIZE_MODES:
            raise ValueError(f"optimize mode must be one of {OPTIMIZE_MODES}, got {mode!r}")
        return self.add_transformer(normalized)

    def clear_transformers(self):
        self._transformers.clear()
        return self

    @property
    def transformers(self) -> List[Any]:
        return [policy for policy, _fn in self._transformers]

    def apply_transformers(self, data: Any) -> Any:
        for _policy, fn in self._transformers:
            data = fn(data)
        return data
