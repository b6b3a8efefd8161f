from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional

from xmlview.core.errors import InvalidPolicy, RegistryError

from .contracts import StaticApply


@dataclass
class PolicyRegistry:
    """In-memory registry of named cast or transformer policies.

    Names are normalized (stripped, lower-cased) so "Int" and " int " resolve
    to the same entry.

    - register: O(1) average
    - get / try_get: O(1) average
    - names: O(n log n)
    """

    kind: str = "policy"
    _policies: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)

    @staticmethod
    def _normalize(name: str) -> str:
        if not isinstance(name, str):
            raise TypeError("policy name must be a string")
        normalized = name.strip().lower()
        if not normalized:
            raise ValueError("policy name must be non-empty")
        return normalized

    def register(self, name: str, policy: Any, *, replace: bool = False) -> None:
        """Register a policy under a name."""
        key = self._normalize(name)
        if key in self._policies and not replace:
            raise RegistryError(f"Duplicate {self.kind} name: {key}")
        # Validate eagerly so a bad registration fails here, not at commit time.
        resolve_policy(policy, kind=self.kind)
        self._policies[key] = policy

    def get(self, name: str) -> Any:
        key = self._normalize(name)
        try:
            return self._policies[key]
        except KeyError:
            raise InvalidPolicy(f"Unknown {self.kind}: {name!r}") from None

    def try_get(self, name: str) -> Optional[Any]:
        return self._policies.get(self._normalize(name))

    def names(self) -> List[str]:
        return sorted(self._policies)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._policies

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


def resolve_policy(
    policy: Any,
    *,
    registry: Optional[PolicyRegistry] = None,
    kind: str = "policy",
) -> Callable[[Any], Any]:
    """Resolve a cast/transform policy into a unary callable.

    Resolution order:
    1) str -> looked up in ``registry`` (then resolved again)
    2) a class exposing a callable ``apply`` -> ``cls.apply``
    3) any other callable (functions, int, str, list, ...) -> itself
    4) an instance exposing a callable ``apply`` -> ``obj.apply``

    Classes with ``apply`` are checked before plain callables: calling such a
    class would construct an instance instead of applying the policy.

    Raises InvalidPolicy when nothing matches.
    """

    if isinstance(policy, str):
        if registry is None:
            raise InvalidPolicy(f"Named {kind} {policy!r} given but no registry is available")
        return resolve_policy(registry.get(policy), kind=kind)

    if inspect.isclass(policy):
        apply = getattr(policy, "apply", None)
        if callable(apply):
            return apply
        return policy

    if callable(policy):
        return policy

    if isinstance(policy, StaticApply) and callable(policy.apply):
        return policy.apply

    raise InvalidPolicy(
        f"{kind} must be callable or expose apply(value), got {type(policy).__name__}"
    )
