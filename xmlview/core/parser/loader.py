from __future__ import annotations

import logging
import os
from typing import Optional, Union

from xmlview.core.data.collection import XMLCollection
from xmlview.core.errors import XMLParseError

from .limits import ParserLimits
from .xml_parser import parse_xml_string

log = logging.getLogger("xmlview.parser")


def from_string(
    data: Union[str, bytes],
    *,
    limits: Optional[ParserLimits] = None,
) -> XMLCollection:
    """Parse an XML string/bytes into an XMLCollection."""

    return XMLCollection(parse_xml_string(data, limits=limits))


def import_xml(
    path: Union[str, "os.PathLike[str]"],
    *,
    limits: Optional[ParserLimits] = None,
) -> XMLCollection:
    """Parse an XML file into an XMLCollection.

    The file size is checked against limits.max_bytes before reading.
    """

    limits = limits or ParserLimits.from_env()
    abs_path = os.path.abspath(os.fspath(path))
    size_bytes = int(os.stat(abs_path).st_size)
    if size_bytes > limits.max_bytes:
        raise XMLParseError(f"XML file too large: {size_bytes} > {limits.max_bytes} bytes")

    with open(abs_path, "rb") as f:
        raw = f.read()

    log.debug("importing xml path=%s size_bytes=%d", abs_path, size_bytes)
    return from_string(raw, limits=limits)
