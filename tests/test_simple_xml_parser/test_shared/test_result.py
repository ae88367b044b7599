"""Tests for result objects and the error hierarchy."""

import pytest

from simple_xml_parser.shared import (
    DiagnosticSeverity,
    DomError,
    OutOfRangeError,
    ParseResult,
    PerformanceMetrics,
    SerializationError,
    XMLError,
    XMLSyntaxError,
)


class TestErrors:
    """Test the exception hierarchy."""

    def test_syntax_error_fields(self):
        """Test that syntax errors carry their location and tokens."""
        error = XMLSyntaxError("expected '>'", 3, column=7, expected=">", actual="x")

        assert str(error) == "expected '>' at input line 3"
        assert error.message == "expected '>'"
        assert error.line == 3
        assert error.column == 7
        assert error.expected == ">"
        assert error.actual == "x"

    def test_hierarchy(self):
        """Test exception subclass relationships."""
        assert issubclass(OutOfRangeError, XMLSyntaxError)
        assert issubclass(XMLSyntaxError, XMLError)
        assert issubclass(SerializationError, DomError)
        assert issubclass(DomError, XMLError)


class TestParseResult:
    """Test ParseResult behaviour."""

    def test_successful_result_cannot_carry_error(self):
        """Test result consistency validation."""
        with pytest.raises(ValueError, match="cannot carry an error"):
            ParseResult(success=True, error=XMLSyntaxError("x", 1))

    def test_failed_result_requires_error(self):
        """Test that failures must describe their error."""
        with pytest.raises(ValueError, match="must carry an error"):
            ParseResult(success=False)

    def test_unwrap_raises_stored_error(self):
        """Test that unwrap re-raises the syntax error."""
        error = XMLSyntaxError("boom", 2)
        result = ParseResult(success=False, error=error)

        with pytest.raises(XMLSyntaxError) as exc_info:
            result.unwrap()
        assert exc_info.value is error

    def test_unwrap_without_document(self):
        """Test unwrap on an event-only result."""
        with pytest.raises(ValueError, match="holds no document"):
            ParseResult().unwrap()

    def test_diagnostics(self):
        """Test adding and filtering diagnostics."""
        result = ParseResult(correlation_id="abc")
        result.add_diagnostic(DiagnosticSeverity.ERROR, "bad", "parser")
        result.add_diagnostic(DiagnosticSeverity.INFO, "note", "parser")

        errors = result.get_diagnostics_by_severity(DiagnosticSeverity.ERROR)
        assert len(errors) == 1
        assert errors[0].correlation_id == "abc"

    def test_empty_diagnostic_message_rejected(self):
        """Test DiagnosticEntry validation."""
        with pytest.raises(ValueError, match="message cannot be empty"):
            ParseResult().add_diagnostic(DiagnosticSeverity.INFO, "", "parser")

    def test_summary_includes_error(self):
        """Test the JSON-friendly summary of a failure."""
        result = ParseResult(
            success=False,
            error=XMLSyntaxError("mismatch", 4, column=2, expected="a", actual="b"),
        )

        summary = result.summary()

        assert summary["success"] is False
        assert summary["error"]["line"] == 4
        assert summary["error"]["expected"] == "a"

    def test_performance_rates(self):
        """Test derived throughput figures."""
        metrics = PerformanceMetrics(
            processing_time_ms=500.0, characters_processed=1000, events_emitted=50
        )

        assert metrics.characters_per_second == 2000.0
        assert metrics.events_per_second == 100.0
        assert PerformanceMetrics().characters_per_second == 0.0
