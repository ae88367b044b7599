"""Shared utilities for simple XML parsing.

This module provides the error hierarchy, configuration objects, result types
and logging helpers used across the parsing and DOM layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    DomConfig,
    ParserConfig,
    SerializerConfig,
    TextMode,
    XMLConfig,
)
from .errors import (
    DomError,
    OutOfRangeError,
    SerializationError,
    XMLError,
    XMLSyntaxError,
)
from .logging import CorrelationLogger, get_logger
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseResult,
    PerformanceMetrics,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "CorrelationLogger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "DomConfig",
    "DomError",
    "OutOfRangeError",
    "ParseResult",
    "ParserConfig",
    "PerformanceMetrics",
    "SerializationError",
    "SerializerConfig",
    "TextMode",
    "XMLConfig",
    "XMLError",
    "XMLSyntaxError",
    "get_logger",
]
