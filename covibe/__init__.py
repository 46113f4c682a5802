"""Spans, source maps, string interning, parse errors and diagnostics for the CoVibe compiler."""

__version__ = "0.1.0"
__all__ = ["diagnostic", "errors", "interner", "source", "span"]