"""Context utilities for tracewire."""

from tracewire.context.context import (
    CURRENT_SPAN_KEY,
    get_current_span,
    pop_span,
    push_span,
    span_from,
    with_span,
)
from tracewire.context.propagators import (
    TRACE_HEADER,
    extract_header,
    header_from_span,
    span_from_header,
)

__all__ = [
    "CURRENT_SPAN_KEY",
    "with_span",
    "span_from",
    "get_current_span",
    "push_span",
    "pop_span",
    "TRACE_HEADER",
    "span_from_header",
    "header_from_span",
    "extract_header",
]
