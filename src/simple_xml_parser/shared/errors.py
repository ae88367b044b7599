"""Exception types for simple XML parsing and DOM manipulation.

Parsing failures are always fatal: primitives raise ``XMLSyntaxError`` and the
public entry points convert it into a failed ``ParseResult`` exactly once.
"""

from typing import Optional


class XMLError(Exception):
    """Base exception for all simple_xml_parser errors."""


class XMLSyntaxError(XMLError):
    """Raised when the input does not follow the accepted XML dialect.

    Attributes:
        message: Human readable description without location suffix
        line: Input line (1-based) where the error was detected
        column: Column (0-based) where the error was detected
        expected: Expected token, if known
        actual: Token that was found instead, if known
    """

    def __init__(
        self,
        message: str,
        line: int,
        column: Optional[int] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ) -> None:
        super().__init__(f"{message} at input line {line}")
        self.message = message
        self.line = line
        self.column = column
        self.expected = expected
        self.actual = actual


class OutOfRangeError(XMLSyntaxError):
    """Raised when the cursor is asked for a character outside the buffer."""


class DomError(XMLError):
    """Raised on illegal DOM usage (bad parent type, foreign child, cycles)."""


class SerializationError(DomError):
    """Raised when an entity cannot be rendered as text in the dialect."""
