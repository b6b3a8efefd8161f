from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union
from xml.etree.ElementTree import Element, ParseError

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as DefusedET

from xmlview.core.errors import XMLParseError

from .limits import ParserLimits

log = logging.getLogger("xmlview.parser")

ATTRIBUTES_KEY = "@attributes"
TEXT_KEY = "#text"


def _strip_ns(tag: str) -> str:
    return tag.split("}", 1)[1] if "}" in tag else tag


def element_to_value(el: Element, *, max_depth: int = 256, _depth: int = 0) -> Any:
    """Map one element to plain data.

    - leaf without attributes: stripped text, or None when empty
    - otherwise a dict: "@attributes", child tags in document order
      (repeated tags become lists), and "#text" for non-blank text
    """

    if _depth > max_depth:
        raise XMLParseError(f"XML nesting deeper than {max_depth} levels")

    attrs = {_strip_ns(k): v for k, v in el.attrib.items()}
    text = (el.text or "").strip()
    children = [c for c in el if isinstance(c.tag, str)]

    if not children and not attrs:
        return text or None

    out: Dict[str, Any] = {}
    if attrs:
        out[ATTRIBUTES_KEY] = attrs

    grouped: Dict[str, List[Any]] = {}
    for child in children:
        value = element_to_value(child, max_depth=max_depth, _depth=_depth + 1)
        grouped.setdefault(_strip_ns(child.tag), []).append(value)
    for tag, values in grouped.items():
        out[tag] = values[0] if len(values) == 1 else values

    tails = [t for t in ((c.tail or "").strip() for c in children) if t]
    full_text = " ".join([text, *tails]) if text else " ".join(tails)
    if full_text:
        out[TEXT_KEY] = full_text

    return out


def parse_xml_string(
    data: Union[str, bytes],
    *,
    limits: Optional[ParserLimits] = None,
) -> Dict[str, Any]:
    """Parse an XML document into the record mapping of its root element.

    Security notes:
    - defusedxml rejects entity expansion and external references.
    - Input size and nesting depth are bounded by ParserLimits.

    Raises XMLParseError for malformed, forbidden or oversized input.
    """

    limits = limits or ParserLimits.from_env()
    # str input stays text; its encoding declaration does not apply.
    source = data if isinstance(data, str) else bytes(data)
    size = len(source.encode("utf-8")) if isinstance(source, str) else len(source)
    if size > limits.max_bytes:
        raise XMLParseError(f"XML document too large: {size} > {limits.max_bytes} bytes")

    try:
        root = DefusedET.fromstring(source)
    except DefusedXmlException as e:
        raise XMLParseError(f"forbidden XML construct: {e}") from e
    except ParseError as e:
        raise XMLParseError(f"malformed XML: {e}") from e

    log.debug("parsed xml root=%s bytes=%d", _strip_ns(root.tag), size)

    value = element_to_value(root, max_depth=limits.max_depth)
    if isinstance(value, dict):
        return value
    # Text-only root element.
    return {} if value is None else {TEXT_KEY: value}
