from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Any, Dict, List


class HealthOut(BaseModel):
    ok: bool = True
    version: str
    max_upload_bytes: int


class PoliciesOut(BaseModel):
    """Registered policy names."""

    casts: List[str] = Field(default_factory=list)
    transformers: List[str] = Field(default_factory=list)


class ConvertOut(BaseModel):
    """Normalized conversion result."""

    filename: str
    size_bytes: int
    count: int
    root_keys: List[str] = Field(default_factory=list)
    applied: List[str] = Field(default_factory=list)
    data: Dict[str, Any] = Field(default_factory=dict)
