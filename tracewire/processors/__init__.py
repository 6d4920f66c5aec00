"""Span processors."""

from tracewire.processors.logging_processor import LoggingSpanProcessor

__all__ = [
    "LoggingSpanProcessor",
]
