"""Propagation of span IDs across process boundaries as a single header value."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from tracewire.tracer.endpoint import Endpoint
from tracewire.tracer.options import BeginOptions
from tracewire.tracer.span import Span
from tracewire.tracer.tracer import Tracer

logger = logging.getLogger(__name__)

# Header carrying the pickled span ID in string protocols such as HTTP.
TRACE_HEADER = "uber-trace-id"


def span_from_header(
    header: str,
    tracer: Tracer,
    span_name: str,
    endpoint: Endpoint,
    options: Optional[BeginOptions] = None,
) -> Span:
    """
    Create the top-level server-side span for an inbound request.

    An empty header starts a new trace. A header that the tracer's pickler
    decodes to a span ID joins that trace; one that decodes to None (an ID the
    tracer does not recognize) starts a new trace.

    Raises:
        DecodeError: If the header cannot be parsed. No span is created, so
            instrumentation and transport bugs surface instead of silently
            producing disconnected traces.
    """
    if not header:
        return tracer.begin_trace(span_name, endpoint, options)

    span_id = tracer.get_string_pickler().from_string(header)
    if span_id is None:
        logger.debug("Unrecognized span ID in header, starting a new trace for %r", span_name)
        return tracer.begin_trace(span_name, endpoint, options)
    return tracer.join_trace(span_name, endpoint, span_id, options)


def header_from_span(span: Span, tracer: Tracer) -> str:
    """Encode the span's ID with the tracer's pickler, for passing downstream."""
    return tracer.get_string_pickler().to_string(span.span_id())


def extract_header(headers: Mapping[str, str], name: str = TRACE_HEADER) -> str:
    """
    Look up a header value (case-insensitive).

    Returns the empty string when the header is absent.
    """
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value or ""
    return ""
