"""Tracer components for tracewire."""

from tracewire.tracer.endpoint import Endpoint
from tracewire.tracer.noop import NoopSpan, NoopSpanID, NoopStringPickler, NoopTracer
from tracewire.tracer.options import BeginOptions, EndOptions, EventOptions
from tracewire.tracer.otel_span import OTelSpan
from tracewire.tracer.otel_tracer import OTelTracer
from tracewire.tracer.provider import SpanProcessor, TracerProvider
from tracewire.tracer.span import Span
from tracewire.tracer.span_id import DEBUG_FLAG, SAMPLED_FLAG, SpanID, ZipkinSpanID
from tracewire.tracer.tracer import StringPickler, Tracer, ZipkinCompatibleTracer
from tracewire.tracer.zipkin import ZipkinID, ZipkinIdGenerator, ZipkinStringPickler

__all__ = [
    "Endpoint",
    "BeginOptions",
    "EndOptions",
    "EventOptions",
    "Span",
    "SpanID",
    "ZipkinSpanID",
    "SAMPLED_FLAG",
    "DEBUG_FLAG",
    "StringPickler",
    "Tracer",
    "ZipkinCompatibleTracer",
    "NoopTracer",
    "NoopSpan",
    "NoopSpanID",
    "NoopStringPickler",
    "OTelTracer",
    "OTelSpan",
    "ZipkinID",
    "ZipkinIdGenerator",
    "ZipkinStringPickler",
    "TracerProvider",
    "SpanProcessor",
]
