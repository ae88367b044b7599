"""Event parsing engine for the simplified XML dialect.

Key Components:
    Cursor: Position, line and column tracking over an immutable buffer
    XMLEventParser: Recursive-descent scanner emitting parse events
    EventHandler: Protocol implemented by every event consumer
    CallbackHandler: Adapter from plain functions plus user context to events
    EventRecorder: Consumer that keeps events for later inspection
    EventPrinter: Consumer that prints an indented event listing
"""

from .cursor import (
    Cursor,
    is_alpha,
    is_digit,
    is_name_char,
    is_space,
)
from .events import (
    CallbackHandler,
    EventHandler,
    EventPrinter,
    EventRecorder,
    EventType,
    ParseEvent,
)
from .parser import XMLEventParser

__all__ = [
    "CallbackHandler",
    "Cursor",
    "EventHandler",
    "EventPrinter",
    "EventRecorder",
    "EventType",
    "ParseEvent",
    "XMLEventParser",
    "is_alpha",
    "is_digit",
    "is_name_char",
    "is_space",
]
