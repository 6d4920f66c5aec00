"""Zipkin-style span identifiers for the OpenTelemetry backend."""

from __future__ import annotations

import random
from typing import Optional

from opentelemetry import trace as otel_trace_api
from opentelemetry.sdk.trace.id_generator import RandomIdGenerator
from opentelemetry.trace import SpanContext as OTelSpanContext, TraceFlags

from tracewire.errors import DecodeError, ValidationError
from tracewire.tracer.span_id import SAMPLED_FLAG, SpanID, ZipkinSpanID
from tracewire.tracer.tracer import StringPickler
from tracewire.utils.helpers import format_id, parse_id, to_unsigned64


class ZipkinID(ZipkinSpanID):
    """Immutable Zipkin 4-tuple. Ids are stored unsigned."""

    __slots__ = ("_trace_id", "_id", "_parent_id", "_flags")

    def __init__(self, trace_id: int, span_id: int, parent_id: int = 0, flags: int = SAMPLED_FLAG) -> None:
        self._trace_id = trace_id
        self._id = span_id
        self._parent_id = parent_id
        self._flags = flags

    @property
    def trace_id(self) -> int:
        return self._trace_id

    @property
    def id(self) -> int:
        return self._id

    @property
    def parent_id(self) -> int:
        return self._parent_id

    @property
    def flags(self) -> int:
        return self._flags

    def as_tuple(self):
        return (self._trace_id, self._id, self._parent_id, self._flags)

    def to_otel_context(self, is_remote: bool = True) -> OTelSpanContext:
        """Build the OTel SpanContext a child or server span is parented on."""
        return OTelSpanContext(
            trace_id=self._trace_id,
            span_id=self._id,
            is_remote=is_remote,
            trace_flags=TraceFlags(TraceFlags.SAMPLED if self.is_sampled() else TraceFlags.DEFAULT),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZipkinID):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __str__(self) -> str:
        return ":".join(format_id(v) for v in self.as_tuple())

    def __repr__(self) -> str:
        return (
            f"ZipkinID(trace_id={self._trace_id:#x}, span_id={self._id:#x}, "
            f"parent_id={self._parent_id:#x}, flags={self._flags:#x})"
        )


def make_zipkin_id(trace_id: int, span_id: int, parent_id: int, flags: int) -> ZipkinID:
    """
    Validate and normalize the four values read from an incoming request.

    Ids may be given in signed int64 form (as Thrift carries them).

    Raises:
        ValidationError: If a value is out of range
    """
    for name, value in (("trace_id", trace_id), ("span_id", span_id), ("parent_id", parent_id)):
        if not -(1 << 63) <= value < (1 << 64):
            raise ValidationError("id out of 64-bit range", {name: value})
    if not 0 <= flags <= 0xFF:
        raise ValidationError("flags out of byte range", {"flags": flags})
    return ZipkinID(to_unsigned64(trace_id), to_unsigned64(span_id), to_unsigned64(parent_id), flags)


class ZipkinIdGenerator(RandomIdGenerator):
    """OTel id generator restricted to 64-bit trace ids so traces fit the Zipkin 4-tuple."""

    def generate_trace_id(self) -> int:
        trace_id = random.getrandbits(64)
        while trace_id == otel_trace_api.INVALID_TRACE_ID:
            trace_id = random.getrandbits(64)
        return trace_id


class ZipkinStringPickler(StringPickler):
    """
    Encodes a ZipkinID as "{trace_id}:{span_id}:{parent_id}:{flags}" in hex.

    The same layout as the uber-trace-id header, so the encoding doubles as a
    header value.
    """

    def to_string(self, span_id: SpanID) -> str:
        # Spans handed out after close() carry a placeholder id; "" means no span.
        if not isinstance(span_id, ZipkinSpanID) or span_id.trace_id == 0 or span_id.id == 0:
            return ""
        return ":".join(
            format_id(v) for v in (span_id.trace_id, span_id.id, span_id.parent_id, span_id.flags)
        )

    def from_string(self, value: str) -> Optional[SpanID]:
        if not value:
            return None

        parts = value.split(":")
        if len(parts) != 4:
            raise DecodeError("Span ID must have 4 fields", {"value": value})
        try:
            trace_id, span_id, parent_id, flags = (parse_id(p) for p in parts)
        except ValueError as exc:
            raise DecodeError("Span ID fields must be hex", {"value": value}) from exc

        if trace_id == 0 or span_id == 0:
            raise DecodeError("Trace ID and span ID must be non-zero", {"value": value})
        if max(trace_id, span_id, parent_id) >= (1 << 64):
            raise DecodeError("Span ID field exceeds 64 bits", {"value": value})
        if flags > 0xFF:
            raise DecodeError("Flags exceed one byte", {"value": value})
        return ZipkinID(trace_id, span_id, parent_id, flags)
