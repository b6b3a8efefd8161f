from .limits import ParserLimits
from .loader import from_string, import_xml
from .xml_parser import ATTRIBUTES_KEY, TEXT_KEY, element_to_value, parse_xml_string

__all__ = [
    "ParserLimits",
    "from_string",
    "import_xml",
    "parse_xml_string",
    "element_to_value",
    "ATTRIBUTES_KEY",
    "TEXT_KEY",
]
