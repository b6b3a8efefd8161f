from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path
from types import SimpleNamespace

from xmlview.utils.json_safe import to_jsonable


@dataclass
class _Point:
    x: int
    y: int


def test_to_jsonable_common_types():
    assert to_jsonable(datetime(2026, 1, 1, tzinfo=timezone.utc)) == "2026-01-01T00:00:00+00:00"
    assert to_jsonable(date(2026, 1, 2)) == "2026-01-02"
    assert to_jsonable(Decimal("1.10")) == "1.10"
    assert to_jsonable(Path("a/b")) == str(Path("a/b"))
    assert to_jsonable(b"hi") == {"__bytes_b64__": "aGk="}
    assert to_jsonable(_Point(1, 2)) == {"x": 1, "y": 2}
    assert to_jsonable(SimpleNamespace(a=(1, 2))) == {"a": [1, 2]}
    assert to_jsonable({1: {"s"}}) == {"1": ["s"]}
