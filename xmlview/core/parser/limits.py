from __future__ import annotations

import os
from dataclasses import dataclass


def env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back to default."""

    raw = os.environ.get(name, "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except ValueError:
        return int(default)


@dataclass(frozen=True, slots=True)
class ParserLimits:
    """Bounds enforced before and during XML parsing.

    - max_bytes: documents larger than this are rejected unread
    - max_depth: element nesting deeper than this is rejected
    """

    max_bytes: int = 10 * 1024 * 1024
    max_depth: int = 256

    @classmethod
    def from_env(cls) -> "ParserLimits":
        return cls(
            max_bytes=env_int("XMLVIEW_MAX_XML_BYTES", 10 * 1024 * 1024),
            max_depth=env_int("XMLVIEW_MAX_XML_DEPTH", 256),
        )
