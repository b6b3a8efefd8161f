"""xmlview: typed overlay over records parsed from XML documents.

    from xmlview import import_xml

    notes = (
        import_xml("notes.xml")
        .cast("note").to("list")
        .transform("title").to("upper")
    )
    notes.to_json(indent=2)
"""

from xmlview.core.casts import Cast, register_cast
from xmlview.core.data import PendingCast, PendingTransform, XMLCollection
from xmlview.core.errors import (
    CoercionFailure,
    InvalidPolicy,
    KeyNotFound,
    PendingOperationError,
    RegistryError,
    XMLParseError,
    XMLViewError,
)
from xmlview.core.parser import ParserLimits, from_string, import_xml
from xmlview.core.transformers import register_transformer

__version__ = "0.1.0"

__all__ = [
    "XMLCollection",
    "PendingCast",
    "PendingTransform",
    "Cast",
    "register_cast",
    "register_transformer",
    "import_xml",
    "from_string",
    "ParserLimits",
    "XMLViewError",
    "KeyNotFound",
    "InvalidPolicy",
    "CoercionFailure",
    "PendingOperationError",
    "XMLParseError",
    "RegistryError",
]
