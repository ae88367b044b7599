"""Performance profiling for the event parser and DOM builder.

Runs a document through ``parse_to_dom`` several times and reports timing
statistics together with the process' resident memory before and after.
"""

import statistics
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import psutil

from simple_xml_parser.api.parser import XMLParser
from simple_xml_parser.shared.config import XMLConfig
from simple_xml_parser.shared.logging import get_logger

MS_PER_SECOND = 1000


@dataclass
class ProfileReport:
    """Timing and memory figures for repeated parses of one buffer."""

    iterations: int
    input_size: int
    timings_ms: List[float] = field(default_factory=list)
    memory_start_bytes: int = 0
    memory_end_bytes: int = 0
    events_emitted: int = 0
    entities_created: int = 0
    success: bool = True
    error: Optional[str] = None

    @property
    def mean_ms(self) -> float:
        return statistics.fmean(self.timings_ms) if self.timings_ms else 0.0

    @property
    def min_ms(self) -> float:
        return min(self.timings_ms, default=0.0)

    @property
    def max_ms(self) -> float:
        return max(self.timings_ms, default=0.0)

    @property
    def memory_delta_bytes(self) -> int:
        return self.memory_end_bytes - self.memory_start_bytes

    @property
    def characters_per_second(self) -> float:
        if self.mean_ms <= 0:
            return 0.0
        return self.input_size * MS_PER_SECOND / self.mean_ms

    def to_dict(self) -> Dict[str, Any]:
        """Convert the report to a JSON-friendly dictionary."""
        return {
            "iterations": self.iterations,
            "input_size": self.input_size,
            "success": self.success,
            "error": self.error,
            "mean_ms": round(self.mean_ms, 3),
            "min_ms": round(self.min_ms, 3),
            "max_ms": round(self.max_ms, 3),
            "characters_per_second": round(self.characters_per_second, 1),
            "events_emitted": self.events_emitted,
            "entities_created": self.entities_created,
            "memory_delta_bytes": self.memory_delta_bytes,
        }


class ParseProfiler:
    """Profile parse_to_dom over a buffer."""

    def __init__(self, config: Optional[XMLConfig] = None) -> None:
        self.parser = XMLParser(config)
        self.logger = get_logger(__name__, self.parser.correlation_id, "parse_profiler")
        self._process = psutil.Process()

    def profile(self, buffer: str, iterations: int = 10) -> ProfileReport:
        """Parse ``buffer`` ``iterations`` times, stopping at the first failure."""
        if iterations <= 0:
            raise ValueError("iterations must be > 0")

        report = ProfileReport(iterations=iterations, input_size=len(buffer))
        report.memory_start_bytes = self._process.memory_info().rss
        for _ in range(iterations):
            start = time.perf_counter()
            result = self.parser.parse_to_dom(buffer)
            report.timings_ms.append((time.perf_counter() - start) * MS_PER_SECOND)
            if not result.success:
                report.success = False
                report.error = str(result.error)
                break
            report.events_emitted = result.performance.events_emitted
            report.entities_created = result.performance.entities_created
        report.memory_end_bytes = self._process.memory_info().rss

        self.logger.info("Profiling finished", extra=report.to_dict())
        return report
