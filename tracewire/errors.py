"""tracewire error hierarchy and exceptions."""

from __future__ import annotations


class TracewireError(Exception):
    """Base exception for all tracewire errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigError(TracewireError):
    """Raised when configuration is invalid or conflicting."""
    pass


class ValidationError(TracewireError):
    """Raised when a value object is constructed from out-of-range fields."""
    pass


class DecodeError(TracewireError):
    """Raised when a pickled span ID is malformed."""
    pass


class ContextLookupError(TracewireError):
    """Base class for failures to read the current span from a context."""
    pass


class SpanNotFoundError(ContextLookupError):
    """Raised when no span was bound anywhere in the context's ancestry."""

    def __init__(self, message: str = "No current span in context", details: dict = None):
        super().__init__(message, details)


class WrongSpanTypeError(ContextLookupError):
    """Raised when the current-span key holds something that is not a Span."""

    def __init__(self, message: str = "Value bound as current span is not a Span", details: dict = None):
        super().__init__(message, details)
