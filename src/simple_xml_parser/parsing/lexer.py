"""Lexical productions of the simplified XML dialect.

Each reader consumes exactly one construct from a ``Cursor`` and returns its
payload. Readers never recover: malformed input raises ``XMLSyntaxError``.
"""

from typing import Dict

from .cursor import Cursor, is_alpha, is_name_char

COMMENT_OPEN = "<!--"
HEADER_OPEN = "<?xml"
HEADER_CLOSE = "?>"


def read_quoted_string(cursor: Cursor) -> str:
    """Read a double-quoted string. No escape sequences are recognised."""
    cursor.eat_space()
    cursor.match('"')
    start_line = cursor.line
    chars = []
    while not cursor.at_end() and cursor.peek() != '"':
        chars.append(cursor.peek())
        cursor.advance()
    if cursor.at_end():
        raise cursor.error(
            f"unterminated quoted string starting on line {start_line}",
            expected='"',
        )
    cursor.match('"')
    return "".join(chars)


def read_name(cursor: Cursor) -> str:
    """Read a tag or attribute name; the first character must be a letter."""
    cursor.eat_space()
    first = cursor.peek()
    if not is_alpha(first):
        raise cursor.error(
            f"expected an xml name, got {first!r}", expected="name", actual=first
        )
    chars = []
    while not cursor.at_end() and is_name_char(cursor.peek()):
        chars.append(cursor.peek())
        cursor.advance()
    return "".join(chars)


def read_text(cursor: Cursor) -> str:
    """Read raw character data up to the next ``<`` or the end of input."""
    start = cursor.position
    while not cursor.at_end() and cursor.peek() != "<":
        cursor.advance()
    return cursor.buffer[start:cursor.position]


def read_closing_tag(cursor: Cursor) -> str:
    """Read ``</name>`` and return the name."""
    cursor.match("<")
    cursor.match("/")
    name = read_name(cursor)
    cursor.eat_space()
    cursor.match(">")
    return name


def read_comment(cursor: Cursor, strip: bool = True) -> str:
    """Read ``<!-- ... -->`` and return the comment text.

    A single ``-`` is held back until the next character shows whether it
    starts the ``-->`` terminator; otherwise it is ordinary content.

    Args:
        cursor: Cursor positioned at ``<!--``
        strip: Remove leading and trailing whitespace from the text
    """
    cursor.match_text(COMMENT_OPEN)
    start_line = cursor.line
    chars = []
    pending_hyphen = False
    while not cursor.at_end():
        char = cursor.peek()
        if char == "-":
            if pending_hyphen and cursor.looking_at("->"):
                cursor.advance()
                cursor.advance()
                text = "".join(chars)
                return text.strip() if strip else text
            if pending_hyphen:
                chars.append("-")
            pending_hyphen = True
            cursor.advance()
            continue
        if pending_hyphen:
            chars.append("-")
            pending_hyphen = False
        chars.append(char)
        cursor.advance()
    raise cursor.error(
        f"unterminated comment starting on line {start_line}", expected="-->"
    )


def read_header(cursor: Cursor) -> Dict[str, str]:
    """Read the ``<?xml ... ?>`` declaration and return its pseudo-attributes."""
    cursor.match_text(HEADER_OPEN)
    attributes: Dict[str, str] = {}
    while True:
        cursor.eat_space()
        char = cursor.peek()
        if is_alpha(char):
            name = read_name(cursor)
            cursor.eat_space()
            cursor.match("=")
            attributes[name] = read_quoted_string(cursor)
            continue
        if cursor.looking_at(HEADER_CLOSE):
            cursor.match_text(HEADER_CLOSE)
            return attributes
        raise cursor.error(
            f"unexpected {char!r} in xml declaration",
            expected=HEADER_CLOSE,
            actual=char,
        )
