"""Simple XML Parser.

A callback-driven parser for a simplified XML dialect, plus a DOM layer built
on its events with navigation, append-only mutation and serialization.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_to_dom(), parse_file()
- Level 2: Configured parser - XMLParser class
- Level 3: Custom event consumers - EventHandler protocol, XMLEventParser
"""

__version__ = "0.1.0"
__author__ = "Simple XML Parser Team"

from .api import XMLParser, parse, parse_file, parse_to_dom
from .dom import DomBuilder, DomEntity, EntityType, XMLSerializer, serialize
from .parsing import (
    CallbackHandler,
    EventHandler,
    EventPrinter,
    EventRecorder,
    EventType,
    ParseEvent,
    XMLEventParser,
)
from .shared import (
    DomError,
    OutOfRangeError,
    ParseResult,
    SerializationError,
    XMLConfig,
    XMLError,
    XMLSyntaxError,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_to_dom",
    "parse_file",

    # Level 2: Configured parser
    "XMLParser",
    "XMLConfig",

    # Level 3: Event parsing
    "XMLEventParser",
    "EventHandler",
    "CallbackHandler",
    "EventRecorder",
    "EventPrinter",
    "EventType",
    "ParseEvent",

    # DOM
    "DomEntity",
    "EntityType",
    "DomBuilder",
    "XMLSerializer",
    "serialize",

    # Results and errors
    "ParseResult",
    "XMLError",
    "XMLSyntaxError",
    "OutOfRangeError",
    "DomError",
    "SerializationError",
]
