"""Cursor over an immutable character buffer.

The cursor is the leaf of the parser: it owns the read position and the
line/column bookkeeping used in every diagnostic, and offers the primitive
peek/advance/match operations the lexical productions are built from.
"""

from typing import Optional

from simple_xml_parser.shared.errors import OutOfRangeError, XMLSyntaxError

# ASCII whitespace
WHITESPACE = frozenset(" \t\n\r\f\v")


def is_space(char: str) -> bool:
    """Return True if ``char`` is a whitespace character."""
    return char in WHITESPACE


def is_digit(char: str) -> bool:
    """Return True if ``char`` is an ASCII digit."""
    return "0" <= char <= "9"


def is_alpha(char: str) -> bool:
    """Return True if ``char`` is an ASCII letter."""
    return "a" <= char <= "z" or "A" <= char <= "Z"


def is_name_char(char: str) -> bool:
    """Return True if ``char`` may appear in a tag or attribute name."""
    return is_alpha(char) or is_digit(char) or char == "_"


class Cursor:
    """Read position over a buffer that stays fixed for one parse."""

    def __init__(self, buffer: str) -> None:
        if not isinstance(buffer, str):
            raise TypeError("Cursor buffer must be a str")
        self.buffer = buffer
        self.position = 0
        self.line = 1
        self.column = 0

    def __len__(self) -> int:
        return len(self.buffer)

    def at_end(self) -> bool:
        """Return True once every character has been consumed."""
        return self.position >= len(self.buffer)

    def error(
        self,
        message: str,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ) -> XMLSyntaxError:
        """Build a syntax error located at the current position."""
        return XMLSyntaxError(
            message, self.line, self.column, expected=expected, actual=actual
        )

    def peek(self, offset: int = 0) -> str:
        """Return the character ``offset`` places ahead without consuming it.

        Raises:
            OutOfRangeError: If the requested index is outside the buffer
        """
        index = self.position + offset
        if 0 <= index < len(self.buffer):
            return self.buffer[index]
        raise OutOfRangeError(
            f"tried to access buffer index {index}, valid range [0,{len(self.buffer)})",
            self.line,
            self.column,
        )

    def looking_at(self, text: str) -> bool:
        """Return True if the unconsumed input starts with ``text``."""
        return self.buffer.startswith(text, self.position)

    def advance(self) -> None:
        """Consume one character, tracking line and column."""
        if self.at_end():
            raise OutOfRangeError("cannot advance past end of input", self.line, self.column)
        if self.buffer[self.position] == "\n":
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        self.position += 1

    def match(self, expected: str) -> None:
        """Consume ``expected`` or raise a syntax error naming what was found."""
        actual = self.peek()
        if actual != expected:
            raise self.error(
                f"expected {expected!r}, got {actual!r}",
                expected=expected,
                actual=actual,
            )
        self.advance()

    def match_text(self, expected: str) -> None:
        """Consume every character of ``expected`` in order."""
        for char in expected:
            self.match(char)

    def eat_space(self) -> None:
        """Skip whitespace up to the next significant character."""
        while not self.at_end() and is_space(self.buffer[self.position]):
            self.advance()
