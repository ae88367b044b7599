"""Developer tools for simple XML parsing."""

from .profiling import ParseProfiler, ProfileReport

__all__ = ["ParseProfiler", "ProfileReport"]
