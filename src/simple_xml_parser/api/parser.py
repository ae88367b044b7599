"""Public parsing API.

Module-level functions cover the common cases; ``XMLParser`` binds an
``XMLConfig`` for repeated use. Every entry point catches ``XMLSyntaxError``
once and reports it through a failed ``ParseResult`` instead of raising.
"""

import time
from pathlib import Path
from typing import Optional, Union

from simple_xml_parser.dom.builder import DomBuilder
from simple_xml_parser.parsing.events import EventHandler
from simple_xml_parser.parsing.parser import XMLEventParser
from simple_xml_parser.shared import (
    DiagnosticSeverity,
    ParseResult,
    PerformanceMetrics,
    XMLConfig,
    XMLSyntaxError,
    get_logger,
)

PathType = Union[str, Path]

MS_PER_SECOND = 1000
PREVIEW_LENGTH = 60


class XMLParser:
    """Configured parser producing event streams or DOM trees.

    Examples:
        >>> parser = XMLParser()
        >>> result = parser.parse_to_dom('<root><item id="1">value</item></root>')
        >>> result.document.first_child_tag("root").first_child_tag("item").value
        'value'
    """

    def __init__(
        self,
        config: Optional[XMLConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize parser.

        Args:
            config: Complete configuration; defaults to ``XMLConfig()``
            correlation_id: Overrides the correlation ID held by ``config``
        """
        self.config = config or XMLConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "xml_parser")

    def parse(self, buffer: str, handler: EventHandler) -> ParseResult:
        """Stream the events of ``buffer`` to ``handler``.

        Args:
            buffer: Complete document text
            handler: Event consumer

        Returns:
            ParseResult with ``success`` and, on failure, the syntax ``error``
        """
        return self._run(buffer, handler)

    def parse_to_dom(self, buffer: str) -> ParseResult:
        """Parse ``buffer`` into a DOM tree.

        Returns:
            ParseResult whose ``document`` is the Document root on success
        """
        builder = DomBuilder(self.config.dom, self.correlation_id)
        result = self._run(buffer, builder)
        if result.success:
            result.document = builder.finish()
            result.performance.entities_created = builder.entities_created
        return result

    def parse_file(self, path: PathType, encoding: str = "utf-8") -> ParseResult:
        """Load ``path`` as text and parse it into a DOM tree.

        Raises:
            OSError: If the file cannot be read
        """
        file_path = Path(path)
        self.logger.debug("Loading file", extra={"path": str(file_path)})
        return self.parse_to_dom(file_path.read_text(encoding=encoding))

    def _run(self, buffer: str, handler: EventHandler) -> ParseResult:
        if not isinstance(buffer, str):
            raise TypeError(f"buffer must be str, got {type(buffer).__name__}")

        start_time = time.perf_counter()
        self.logger.debug(
            "Starting parse",
            extra={
                "characters": len(buffer),
                "preview": buffer[:PREVIEW_LENGTH],
                "handler": type(handler).__name__,
            },
        )

        event_parser = XMLEventParser(
            buffer, handler, self.config.parser, self.correlation_id
        )
        error: Optional[XMLSyntaxError] = None
        try:
            event_parser.parse()
        except XMLSyntaxError as e:
            error = e

        performance = PerformanceMetrics(
            processing_time_ms=(time.perf_counter() - start_time) * MS_PER_SECOND,
            characters_processed=event_parser.cursor.position,
            events_emitted=event_parser.events_emitted,
            max_depth=event_parser.max_depth,
        )
        result = ParseResult(
            success=error is None,
            error=error,
            declaration=event_parser.declaration,
            performance=performance,
            correlation_id=self.correlation_id,
        )

        if error is not None:
            result.add_diagnostic(
                DiagnosticSeverity.ERROR,
                error.message,
                "xml_event_parser",
                position={"line": error.line, "column": error.column or 0},
                details={"expected": error.expected, "actual": error.actual},
            )
            self.logger.syntax_error(
                "Parse failed",
                error,
                extra={"characters_processed": performance.characters_processed},
            )
        else:
            self.logger.info(
                "Parse completed",
                extra={
                    "events_emitted": performance.events_emitted,
                    "processing_time_ms": performance.processing_time_ms,
                },
            )
        return result


def parse(
    buffer: str,
    handler: EventHandler,
    config: Optional[XMLConfig] = None,
    correlation_id: Optional[str] = None,
) -> ParseResult:
    """Stream the events of ``buffer`` to ``handler``.

    Examples:
        >>> from simple_xml_parser.parsing import EventRecorder
        >>> recorder = EventRecorder()
        >>> parse('<a/>', recorder).success
        True
        >>> [event.type.name for event in recorder.events]
        ['BEGIN_TAG', 'END_TAG']
    """
    return XMLParser(config, correlation_id).parse(buffer, handler)


def parse_to_dom(
    buffer: str,
    config: Optional[XMLConfig] = None,
    correlation_id: Optional[str] = None,
) -> ParseResult:
    """Parse ``buffer`` and return the built Document in ``result.document``.

    Examples:
        >>> result = parse_to_dom('<a></b>')
        >>> result.success
        False
        >>> result.error.line
        1
    """
    return XMLParser(config, correlation_id).parse_to_dom(buffer)


def parse_file(
    path: PathType,
    config: Optional[XMLConfig] = None,
    correlation_id: Optional[str] = None,
    encoding: str = "utf-8",
) -> ParseResult:
    """Read a text file and parse it into a DOM tree."""
    return XMLParser(config, correlation_id).parse_file(path, encoding)
