"""Recursive-descent parser for the simplified XML dialect.

``XMLEventParser`` walks one in-memory buffer and reports its structure to an
``EventHandler``. One instance holds the complete state of a single parse
(cursor, handler, counters) and is discarded afterwards.
"""

from typing import Dict, Optional

from simple_xml_parser.shared.config import ParserConfig
from simple_xml_parser.shared.logging import get_logger

from .cursor import Cursor, is_alpha
from .events import EventHandler
from .lexer import (
    read_closing_tag,
    read_comment,
    read_header,
    read_name,
    read_quoted_string,
    read_text,
)


class XMLEventParser:
    """Scan a buffer and emit begin/end tag, attribute, text and comment events.

    Tag states: open name, attributes, then either ``/>`` (done) or ``>``
    followed by children until the matching ``</name>``.
    """

    def __init__(
        self,
        buffer: str,
        handler: EventHandler,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize the parser for a single buffer.

        Args:
            buffer: Complete document text
            handler: Receiver of the parse events
            config: Parser configuration
            correlation_id: Optional correlation ID for request tracking
        """
        self.cursor = Cursor(buffer)
        self.handler = handler
        self.config = config or ParserConfig()
        self.logger = get_logger(__name__, correlation_id, "xml_event_parser")

        self.declaration: Dict[str, str] = {}
        self.events_emitted = 0
        self.max_depth = 0
        self._finished = False

    def parse(self) -> None:
        """Parse the whole document.

        Accepts an optional leading ``<?xml ... ?>`` declaration followed by any
        number of top-level tags and comments.

        Raises:
            XMLSyntaxError: On the first deviation from the dialect
            RuntimeError: If called twice on the same instance
        """
        if self._finished:
            raise RuntimeError("XMLEventParser instances parse a single buffer only")
        self._finished = True

        cursor = self.cursor
        cursor.eat_space()
        first = True
        while not cursor.at_end():
            char = cursor.peek()
            if char != "<":
                raise cursor.error(
                    f"expected '<', got {char!r}", expected="<", actual=char
                )
            if cursor.looking_at("<?"):
                if not first:
                    raise cursor.error(
                        "encountered an xml declaration after the start of the document"
                    )
                self.declaration = read_header(cursor)
                self.logger.debug(
                    "Read xml declaration",
                    extra={"declaration": self.declaration},
                )
            elif cursor.looking_at("<!"):
                self._emit(
                    "comment", read_comment(cursor, self.config.strip_comment_whitespace)
                )
            elif is_alpha(cursor.peek(1)):
                self.read_tag()
            else:
                unexpected = cursor.peek(1)
                raise cursor.error(
                    f"expected a tag name after '<', got {unexpected!r}",
                    expected="name",
                    actual=unexpected,
                )
            first = False
            cursor.eat_space()

    def read_tag(self, depth: int = 1) -> None:
        """Parse one tag with all of its attributes and descendants."""
        cursor = self.cursor
        if depth > self.config.max_depth:
            raise cursor.error(
                f"maximum nesting depth of {self.config.max_depth} exceeded"
            )
        self.max_depth = max(self.max_depth, depth)

        cursor.eat_space()
        cursor.match("<")
        tag_name = read_name(cursor)
        self._emit("begin_tag", tag_name)

        while True:
            cursor.eat_space()
            char = cursor.peek()
            if is_alpha(char):
                attr_name = read_name(cursor)
                cursor.eat_space()
                cursor.match("=")
                self._emit("attribute", attr_name, read_quoted_string(cursor))
                continue
            if char == ">":
                cursor.advance()
                break
            if cursor.looking_at("/>"):
                cursor.advance()
                cursor.advance()
                self._emit("end_tag", tag_name)
                return
            raise cursor.error(
                f"unexpected {char!r} in tag <{tag_name}>", expected=">", actual=char
            )

        while True:
            cursor.eat_space()
            if cursor.at_end():
                raise cursor.error(
                    f"unexpected end of input, tag <{tag_name}> is not closed",
                    expected=f"</{tag_name}>",
                )
            if cursor.looking_at("</"):
                close_name = read_closing_tag(cursor)
                if close_name != tag_name:
                    raise cursor.error(
                        f"expected closing name ({close_name}) to match "
                        f"tag name ({tag_name})",
                        expected=tag_name,
                        actual=close_name,
                    )
                self._emit("end_tag", tag_name)
                return
            if cursor.looking_at("<!"):
                self._emit(
                    "comment", read_comment(cursor, self.config.strip_comment_whitespace)
                )
                continue
            if cursor.looking_at("<"):
                self.read_tag(depth + 1)
                continue
            self._emit("text", read_text(cursor))

    def _emit(self, event: str, *args: str) -> None:
        self.events_emitted += 1
        getattr(self.handler, event)(*args)
