"""Tests for the buffer cursor and character classes."""

import pytest

from simple_xml_parser.parsing.cursor import (
    Cursor,
    is_alpha,
    is_digit,
    is_name_char,
    is_space,
)
from simple_xml_parser.shared.errors import OutOfRangeError, XMLSyntaxError


class TestCharacterClasses:
    """Test the ASCII character predicates."""

    def test_is_space(self):
        for char in " \t\n\r\f\v":
            assert is_space(char)
        assert not is_space("a")

    def test_is_alpha_and_digit(self):
        assert is_alpha("a") and is_alpha("Z")
        assert not is_alpha("1")
        assert not is_alpha("é")
        assert is_digit("7")
        assert not is_digit("x")

    def test_is_name_char(self):
        assert is_name_char("_")
        assert is_name_char("9")
        assert not is_name_char("-")
        assert not is_name_char(":")


class TestCursor:
    """Test cursor navigation."""

    def test_rejects_non_string_buffer(self):
        with pytest.raises(TypeError, match="must be a str"):
            Cursor(b"<a/>")

    def test_initial_state(self):
        cursor = Cursor("<a/>")
        assert len(cursor) == 4
        assert cursor.position == 0
        assert cursor.line == 1
        assert cursor.column == 0
        assert not cursor.at_end()

    def test_advance_tracks_lines_and_columns(self):
        cursor = Cursor("ab\ncd")
        cursor.advance()
        cursor.advance()
        assert (cursor.line, cursor.column) == (1, 2)

        cursor.advance()
        assert (cursor.line, cursor.column) == (2, 0)
        assert cursor.position == 3

    def test_advance_past_end(self):
        cursor = Cursor("")
        assert cursor.at_end()
        with pytest.raises(OutOfRangeError, match="past end of input"):
            cursor.advance()

    def test_peek_out_of_range(self):
        cursor = Cursor("ab")
        assert cursor.peek(1) == "b"
        with pytest.raises(OutOfRangeError, match=r"valid range \[0,2\)"):
            cursor.peek(2)

    def test_looking_at(self):
        cursor = Cursor("<!-- x -->")
        assert cursor.looking_at("<!--")
        assert not cursor.looking_at("<?")

    def test_match_success_and_failure(self):
        cursor = Cursor("ab")
        cursor.match("a")

        with pytest.raises(XMLSyntaxError, match="expected 'c', got 'b'") as exc_info:
            cursor.match("c")
        assert exc_info.value.expected == "c"
        assert exc_info.value.actual == "b"
        assert exc_info.value.column == 1

    def test_match_text(self):
        cursor = Cursor("<?xml")
        cursor.match_text("<?xml")
        assert cursor.at_end()

    def test_eat_space(self):
        cursor = Cursor("  \n\t x")
        cursor.eat_space()
        assert cursor.peek() == "x"
        assert cursor.line == 2

    def test_eat_space_at_end(self):
        cursor = Cursor("   ")
        cursor.eat_space()
        assert cursor.at_end()
