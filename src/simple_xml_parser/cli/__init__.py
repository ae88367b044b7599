"""Command-line interface for simple XML parsing."""

from .main import main

__all__ = ["main"]
