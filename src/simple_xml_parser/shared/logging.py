"""Structured logging for simple XML parsing.

Records carry ``component`` and ``correlation_id`` extras so every message
emitted while parsing one buffer can be traced back to the same request.
Syntax errors are logged with their location as separate fields.
"""

import logging
from typing import Any, Dict, Optional

from .errors import XMLSyntaxError


class CorrelationLogger:
    """Logger that automatically includes correlation ID and component information."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name, defaults to the last part of ``name``
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def _log(self, level: int, message: str, extra: Optional[Dict[str, Any]]) -> None:
        fields: Dict[str, Any] = {
            "component": self.component,
            "correlation_id": self.correlation_id,
        }
        if extra:
            fields.update(extra)
        self.logger.log(level, message, extra=fields)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.ERROR, message, extra)

    def syntax_error(
        self,
        message: str,
        error: XMLSyntaxError,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log ``error`` at warning level with its location and tokens as fields."""
        fields: Dict[str, Any] = {
            "syntax_error": error.message,
            "line": error.line,
            "column": error.column,
            "expected": error.expected,
            "actual": error.actual,
        }
        if extra:
            fields.update(extra)
        self._log(logging.WARNING, f"{message}: {error}", fields)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance."""
    return CorrelationLogger(name, correlation_id, component)
