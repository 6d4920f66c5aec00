"""HTTP client helpers for context propagation."""

from __future__ import annotations

from typing import Dict, Optional

from tracewire.context.context import get_current_span
from tracewire.context.propagators import TRACE_HEADER, header_from_span
from tracewire.tracer.span import Span
from tracewire.tracer.tracer import Tracer


def inject_headers(
    headers: Dict[str, str],
    tracer: Tracer,
    span: Optional[Span] = None,
    header_name: str = TRACE_HEADER,
) -> Dict[str, str]:
    """
    Write the span's pickled ID into the headers dict.

    Uses the current span when none is given; leaves the headers untouched
    when there is no span. Returns the same headers mapping for convenience.
    """
    span = span or get_current_span()
    if span is not None:
        headers[header_name] = header_from_span(span, tracer)
    return headers
