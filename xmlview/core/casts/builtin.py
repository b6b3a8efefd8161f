from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, List, Optional, Sequence

from xmlview.core.errors import CoercionFailure

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off", ""})


def _each(name: str, values: Sequence[Any], convert: Callable[[Any], Any]) -> List[Any]:
    out: List[Any] = []
    for i, v in enumerate(values):
        try:
            out.append(convert(v))
        except (TypeError, ValueError) as e:
            raise CoercionFailure(f"{name} cast failed at element {i} ({v!r}): {e}") from e
    return out


def _require_sequence(name: str, values: Any) -> Sequence[Any]:
    if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple)):
        raise CoercionFailure(f"{name} cast expects a list, got {type(values).__name__}")
    return values


def parse_bool(value: Any) -> bool:
    """Parse the usual XML truthy/falsy spellings."""

    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if value is None:
        return False
    if isinstance(value, str):
        s = value.strip().lower()
        if s in _TRUE:
            return True
        if s in _FALSE:
            return False
    raise ValueError(f"not a boolean: {value!r}")


def parse_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    if isinstance(value, float) and not value.is_integer():
        raise ValueError("non-integral float")
    return int(value)


def parse_date(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        raise TypeError(f"expected an ISO 8601 string, got {type(value).__name__}")
    return datetime.fromisoformat(value.strip())


class ListCast:
    """Keep the coerced list as the value."""

    @staticmethod
    def apply(values: Sequence[Any]) -> List[Any]:
        return list(_require_sequence("list", values))


class FirstCast:
    @staticmethod
    def apply(values: Sequence[Any]) -> Optional[Any]:
        values = _require_sequence("first", values)
        return values[0] if values else None


class IntCast:
    @staticmethod
    def apply(values: Sequence[Any]) -> List[int]:
        return _each("int", _require_sequence("int", values), parse_int)


class FloatCast:
    @staticmethod
    def apply(values: Sequence[Any]) -> List[float]:
        return _each("float", _require_sequence("float", values), float)


class BoolCast:
    @staticmethod
    def apply(values: Sequence[Any]) -> List[bool]:
        return _each("bool", _require_sequence("bool", values), parse_bool)


class StrCast:
    @staticmethod
    def apply(values: Sequence[Any]) -> List[str]:
        return _each("str", _require_sequence("str", values), lambda v: "" if v is None else str(v))


class DateCast:
    """ISO 8601 strings to datetime objects (serialized back as ISO by to_json)."""

    @staticmethod
    def apply(values: Sequence[Any]) -> List[datetime]:
        return _each("date", _require_sequence("date", values), parse_date)


@dataclass(frozen=True)
class JoinCast:
    """Join elements into one string. Instances are policies (apply is bound)."""

    separator: str = ","

    def apply(self, values: Sequence[Any]) -> str:
        parts = _each("join", _require_sequence("join", values), lambda v: "" if v is None else str(v))
        return self.separator.join(parts)
