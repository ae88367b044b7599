"""Event interface between the parser and its consumers.

The parser reports what it scans through five synchronous notifications. Any
object with the five ``EventHandler`` methods can consume them; the DOM builder
is one such consumer, ``EventRecorder`` and ``EventPrinter`` are others.
"""

import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, List, Optional, Protocol, TextIO


class EventType(Enum):
    """Kinds of events emitted by the parser."""

    BEGIN_TAG = auto()
    END_TAG = auto()
    TEXT = auto()
    COMMENT = auto()
    ATTRIBUTE = auto()


@dataclass(frozen=True)
class ParseEvent:
    """Recorded form of a single parser notification."""

    type: EventType
    name: Optional[str] = None
    value: Optional[str] = None

    @classmethod
    def begin_tag(cls, name: str) -> "ParseEvent":
        return cls(EventType.BEGIN_TAG, name=name)

    @classmethod
    def end_tag(cls, name: str) -> "ParseEvent":
        return cls(EventType.END_TAG, name=name)

    @classmethod
    def text(cls, text: str) -> "ParseEvent":
        return cls(EventType.TEXT, value=text)

    @classmethod
    def comment(cls, text: str) -> "ParseEvent":
        return cls(EventType.COMMENT, value=text)

    @classmethod
    def attribute(cls, name: str, value: str) -> "ParseEvent":
        return cls(EventType.ATTRIBUTE, name=name, value=value)


class EventHandler(Protocol):
    """Consumer of parser events."""

    def begin_tag(self, name: str) -> None: ...

    def end_tag(self, name: str) -> None: ...

    def text(self, text: str) -> None: ...

    def comment(self, text: str) -> None: ...

    def attribute(self, name: str, value: str) -> None: ...


class CallbackHandler:
    """Route events to plain functions sharing an opaque user context.

    Every callback receives ``user_data`` as its first argument. Callbacks that
    are not supplied simply ignore their event.

    Example:
        >>> names = []
        >>> handler = CallbackHandler(names, begin_tag=lambda ctx, n: ctx.append(n))
    """

    def __init__(
        self,
        user_data: Any = None,
        begin_tag: Optional[Callable[[Any, str], None]] = None,
        end_tag: Optional[Callable[[Any, str], None]] = None,
        text: Optional[Callable[[Any, str], None]] = None,
        comment: Optional[Callable[[Any, str], None]] = None,
        attribute: Optional[Callable[[Any, str, str], None]] = None,
    ) -> None:
        self.user_data = user_data
        self._begin_tag = begin_tag
        self._end_tag = end_tag
        self._text = text
        self._comment = comment
        self._attribute = attribute

    def begin_tag(self, name: str) -> None:
        if self._begin_tag is not None:
            self._begin_tag(self.user_data, name)

    def end_tag(self, name: str) -> None:
        if self._end_tag is not None:
            self._end_tag(self.user_data, name)

    def text(self, text: str) -> None:
        if self._text is not None:
            self._text(self.user_data, text)

    def comment(self, text: str) -> None:
        if self._comment is not None:
            self._comment(self.user_data, text)

    def attribute(self, name: str, value: str) -> None:
        if self._attribute is not None:
            self._attribute(self.user_data, name, value)


class EventRecorder:
    """Handler that keeps every event it receives, in order."""

    def __init__(self) -> None:
        self.events: List[ParseEvent] = []

    def __len__(self) -> int:
        return len(self.events)

    def begin_tag(self, name: str) -> None:
        self.events.append(ParseEvent.begin_tag(name))

    def end_tag(self, name: str) -> None:
        self.events.append(ParseEvent.end_tag(name))

    def text(self, text: str) -> None:
        self.events.append(ParseEvent.text(text))

    def comment(self, text: str) -> None:
        self.events.append(ParseEvent.comment(text))

    def attribute(self, name: str, value: str) -> None:
        self.events.append(ParseEvent.attribute(name, value))


class EventPrinter:
    """Handler that writes an indented, human readable event listing."""

    def __init__(self, stream: Optional[TextIO] = None, indent: str = "  ") -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.indent = indent
        self.scope = 0

    def _write(self, line: str) -> None:
        self.stream.write(f"{self.indent * self.scope}{line}\n")

    def begin_tag(self, name: str) -> None:
        self._write(f"BEGIN TAG: {name}")
        self.scope += 1

    def end_tag(self, name: str) -> None:
        self.scope -= 1
        self._write(f"END TAG: {name}")

    def text(self, text: str) -> None:
        self._write(f"TEXT: {text}")

    def comment(self, text: str) -> None:
        self._write(f"COMMENT: {text}")

    def attribute(self, name: str, value: str) -> None:
        self._write(f"ATTRIBUTE: {name}={value}")
