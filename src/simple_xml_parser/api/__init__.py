"""Public API for simple XML parsing.

Level 1: module functions ``parse``, ``parse_to_dom`` and ``parse_file``.
Level 2: ``XMLParser`` bound to an ``XMLConfig``.
Interop: ``LxmlAdapter`` converts DOM trees to and from lxml.
"""

from .adapters import (
    AdapterMetadata,
    ConversionResult,
    IntegrationAdapter,
    LxmlAdapter,
    get_adapter,
    list_adapters,
)
from .parser import XMLParser, parse, parse_file, parse_to_dom

__all__ = [
    "AdapterMetadata",
    "ConversionResult",
    "IntegrationAdapter",
    "LxmlAdapter",
    "XMLParser",
    "get_adapter",
    "list_adapters",
    "parse",
    "parse_file",
    "parse_to_dom",
]
