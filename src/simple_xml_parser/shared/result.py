"""Result objects and diagnostic types for simple XML parsing.

Parsing primitives raise ``XMLSyntaxError``; the public entry points surface the
outcome once as a ``ParseResult`` so callers can branch on ``success`` instead of
wrapping every call in ``try``/``except``.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .errors import XMLSyntaxError

if TYPE_CHECKING:
    from simple_xml_parser.dom.entity import DomEntity


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class PerformanceMetrics:
    """Performance metrics for one parse operation."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    events_emitted: int = 0
    entities_created: int = 0
    max_depth: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def events_per_second(self) -> float:
        """Calculate events emitted per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.events_emitted * 1000.0) / self.processing_time_ms


@dataclass
class ParseResult:
    """Outcome of a single parse call.

    ``document`` is only set for successful DOM parses; a failed parse never
    exposes the partially built tree.
    """

    success: bool = True
    document: Optional["DomEntity"] = None
    error: Optional[XMLSyntaxError] = None
    declaration: Dict[str, str] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate result consistency."""
        if self.success and self.error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not self.success and self.error is None:
            raise ValueError("A failed result must carry an error")

    @property
    def processing_time_ms(self) -> float:
        """Get processing time in milliseconds."""
        return self.performance.processing_time_ms

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            position=position,
            details=details,
            correlation_id=self.correlation_id,
        ))

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def raise_for_error(self) -> None:
        """Re-raise the stored syntax error, if any."""
        if self.error is not None:
            raise self.error

    def unwrap(self) -> "DomEntity":
        """Return the parsed document or raise the stored error.

        Raises:
            XMLSyntaxError: If the parse failed
            ValueError: If the parse succeeded but produced no document
        """
        self.raise_for_error()
        if self.document is None:
            raise ValueError("Parse result holds no document")
        return self.document

    def summary(self) -> Dict[str, Any]:
        """Get a JSON-friendly summary of the parse outcome."""
        summary: Dict[str, Any] = {
            "success": self.success,
            "processing_time_ms": round(self.performance.processing_time_ms, 3),
            "characters_processed": self.performance.characters_processed,
            "events_emitted": self.performance.events_emitted,
            "entities_created": self.performance.entities_created,
            "max_depth": self.performance.max_depth,
        }
        if self.declaration:
            summary["declaration"] = dict(self.declaration)
        if self.error is not None:
            summary["error"] = {
                "message": self.error.message,
                "line": self.error.line,
                "column": self.error.column,
                "expected": self.error.expected,
                "actual": self.error.actual,
            }
        return summary
