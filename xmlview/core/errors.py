from __future__ import annotations

from typing import Any


class XMLViewError(Exception):
    """
    Base exception for all xmlview failures.
    """

    pass


class KeyNotFound(XMLViewError, KeyError):
    """
    Raised when a key is read, cast or transformed but absent from the record.
    """

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"key not found: {self.key!r}"


class InvalidPolicy(XMLViewError, TypeError):
    """
    Raised when a cast/transform policy is neither callable nor exposes apply().
    """

    pass


class CoercionFailure(XMLViewError, ValueError):
    """
    Raised by a cast or transformer that cannot coerce the value it was given.
    """

    pass


class PendingOperationError(XMLViewError, RuntimeError):
    """
    Raised when a pending cast/transform is committed more than once.
    """

    pass


class XMLParseError(XMLViewError, ValueError):
    """
    Raised for malformed, forbidden or oversized XML input.
    """

    pass


class RegistryError(XMLViewError, RuntimeError):
    """
    Raised when policies are misregistered (e.g. duplicate names).
    """

    pass
