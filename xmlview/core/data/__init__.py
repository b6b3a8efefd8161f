"""Record overlay: the XMLCollection container and its pending builders.

Reads go through queued transformers (get) and, for JSON output, through the
capability-ordered normalization in ``normalize``.
"""

from .coerce import as_list, next_index, normalize_key, to_record
from .collection import XMLCollection
from .normalize import (
    JSONStringSerializable,
    PlainArrayConvertible,
    SelfDescribingJSON,
    normalize_value,
)
from .pending import PendingCast, PendingOperation, PendingTransform

__all__ = [
    "XMLCollection",
    "PendingOperation",
    "PendingCast",
    "PendingTransform",
    "SelfDescribingJSON",
    "JSONStringSerializable",
    "PlainArrayConvertible",
    "normalize_value",
    "as_list",
    "next_index",
    "normalize_key",
    "to_record",
]
