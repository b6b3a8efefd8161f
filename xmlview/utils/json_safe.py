from __future__ import annotations

import base64
from dataclasses import asdict, is_dataclass
from datetime import date, datetime, time
from decimal import Decimal
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Mapping


def to_jsonable(obj: Any) -> Any:
    """
    Convert common Python objects to JSON-serializable equivalents.

    Used as the ``default`` hook of json.dumps in XMLCollection.to_json and
    collect(), so values produced by casts (datetime, Decimal, ...) still
    serialize.

    - bytes are base64-encoded to avoid encoding issues.
    - does NOT execute or import anything dynamically.
    """
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj

    # datetime/date/time -> ISO 8601
    if isinstance(obj, (datetime, date, time)):
        return obj.isoformat()

    if isinstance(obj, Decimal):
        return str(obj)

    if isinstance(obj, Path):
        return str(obj)

    # bytes -> base64 string
    if isinstance(obj, (bytes, bytearray)):
        return {"__bytes_b64__": base64.b64encode(bytes(obj)).decode("ascii")}

    # dataclasses (instances only)
    if is_dataclass(obj) and not isinstance(obj, type):
        return to_jsonable(asdict(obj))

    if isinstance(obj, SimpleNamespace):
        return to_jsonable(vars(obj))

    # mappings
    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}

    # iterables (including set/frozenset/tuple/list)
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_jsonable(x) for x in obj]

    # fallback: string representation
    return str(obj)
