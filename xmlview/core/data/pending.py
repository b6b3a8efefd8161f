from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, Hashable, TypeVar

from xmlview.core.errors import PendingOperationError

if TYPE_CHECKING:
    from .collection import XMLCollection

OwnerT = TypeVar("OwnerT")


class PendingOperation(Generic[OwnerT]):
    """
    Single-use deferred operation bound to one key of an owner container.

    Lifecycle
    - created by the owner (cast/transform) in the "awaiting policy" state
    - to(policy) runs the owner's commit callback exactly once
    - committed is terminal; a second to() raises PendingOperationError

    The pending object never touches the record itself. The commit callback
    supplied by the owner is the only mutation path.
    """

    operation: str = "operation"

    def __init__(
        self,
        owner: OwnerT,
        key: Hashable,
        commit: Callable[[Any], OwnerT],
    ) -> None:
        self._owner = owner
        self._key = key
        self._commit = commit
        self._committed = False

    @property
    def key(self) -> Hashable:
        return self._key

    @property
    def committed(self) -> bool:
        return self._committed

    def to(self, policy: Any) -> OwnerT:
        """Commit with the given policy and return the owner for chaining."""

        if self._committed:
            raise PendingOperationError(
                f"{self.operation} for key {self._key!r} was already committed"
            )
        # A failing policy still consumes the operation.
        self._committed = True
        return self._commit(policy)

    def __repr__(self) -> str:
        state = "committed" if self._committed else "awaiting policy"
        return f"<{type(self).__name__} key={self._key!r} {state}>"


class PendingCast(PendingOperation["XMLCollection"]):
    """Pending cast: the current value is coerced to a list before the policy runs."""

    operation = "cast"


class PendingTransform(PendingOperation["XMLCollection"]):
    """Pending transform: the policy receives the raw current value."""

    operation = "transform"

    def using(self, policy: Any) -> "XMLCollection":
        """Alias of to(), reads better after expect(key)."""
        return self.to(policy)
