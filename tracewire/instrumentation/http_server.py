"""HTTP server helpers for creating server spans from inbound headers."""

from __future__ import annotations

from typing import Mapping, Optional

from tracewire.context.propagators import TRACE_HEADER, extract_header, span_from_header
from tracewire.tracer.endpoint import Endpoint
from tracewire.tracer.options import BeginOptions
from tracewire.tracer.span import Span
from tracewire.tracer.tracer import Tracer


def start_server_span(
    tracer: Tracer,
    name: str,
    headers: Mapping[str, str],
    endpoint: Endpoint,
    header_name: str = TRACE_HEADER,
    options: Optional[BeginOptions] = None,
) -> Span:
    """
    Start the server span for a request, joining the caller's trace if its
    header carries a span ID.

    The span is also a context manager (use 'with' or 'async with').

    Raises:
        DecodeError: If the header value is malformed
    """
    return span_from_header(extract_header(headers, header_name), tracer, name, endpoint, options)
