"""Tracer that does not perform any tracing.

Serves as the reference backend for the contract and as the fallback returned
by tracewire.get_tracer() before tracing is initialized.
"""

from __future__ import annotations

from typing import Any, Optional

from tracewire.errors import DecodeError
from tracewire.tracer.endpoint import Endpoint
from tracewire.tracer.options import BeginOptions, EndOptions, EventOptions
from tracewire.tracer.span import Span
from tracewire.tracer.span_id import SpanID, ZipkinSpanID
from tracewire.tracer.tracer import StringPickler, Tracer, ZipkinCompatibleTracer

NOOP_ENCODING = "x"
NOOP_ERROR_ENCODING = "error"


class NoopSpanID(ZipkinSpanID):
    def __str__(self) -> str:
        return "tracing-disabled"

    def __repr__(self) -> str:
        return "NoopSpanID()"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoopSpanID)

    def __hash__(self) -> int:
        return hash(NoopSpanID)

    @property
    def trace_id(self) -> int:
        return 0

    @property
    def id(self) -> int:
        return 0

    @property
    def parent_id(self) -> int:
        return 0

    @property
    def flags(self) -> int:
        return 0


DEFAULT_SPAN_ID = NoopSpanID()


class NoopSpan(Span):
    """Span that records nothing. Every span shares the same identifier."""

    def span_id(self) -> SpanID:
        return DEFAULT_SPAN_ID

    def begin_child_span(self, name: str, options: Optional[BeginOptions] = None) -> Span:
        return NoopSpan()

    def end(self, options: Optional[EndOptions] = None) -> None:
        pass

    def add_attribute(self, name: str, value: Any) -> None:
        pass

    def add_event(self, name: str, options: Optional[EventOptions] = None) -> None:
        pass


class NoopStringPickler(StringPickler):
    """
    Encodes every ID as "x".

    Decoding "x" yields the no-op ID, "error" simulates a malformed header,
    anything else is an unrecognized upstream ID and yields None.
    """

    def to_string(self, span_id: SpanID) -> str:
        return NOOP_ENCODING

    def from_string(self, value: str) -> Optional[SpanID]:
        if value == NOOP_ENCODING:
            return DEFAULT_SPAN_ID
        if value == NOOP_ERROR_ENCODING:
            raise DecodeError("Invalid trace ID", {"value": value})
        return None


DEFAULT_STRING_PICKLER = NoopStringPickler()


class NoopTracer(Tracer, ZipkinCompatibleTracer):
    def begin_trace(
        self,
        span_name: str,
        service: Endpoint,
        options: Optional[BeginOptions] = None,
    ) -> Span:
        return NoopSpan()

    def join_trace(
        self,
        span_name: str,
        service: Endpoint,
        span_id: SpanID,
        options: Optional[BeginOptions] = None,
    ) -> Span:
        return NoopSpan()

    def get_string_pickler(self) -> StringPickler:
        return DEFAULT_STRING_PICKLER

    def close(self) -> None:
        pass

    def create_span_id(self, trace_id: int, span_id: int, parent_id: int, flags: int) -> ZipkinSpanID:
        return DEFAULT_SPAN_ID
