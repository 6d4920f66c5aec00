"""tracewire: vendor-neutral tracing instrumentation with cross-process span propagation."""

from tracewire.auto import (
    get_tracer,
    get_tracer_provider,
    init,
    set_tracer,
    start_tracing,
    stop_tracing,
)
from tracewire.context import (
    TRACE_HEADER,
    get_current_span,
    header_from_span,
    span_from,
    span_from_header,
    with_span,
)
from tracewire.errors import (
    ConfigError,
    ContextLookupError,
    DecodeError,
    SpanNotFoundError,
    TracewireError,
    ValidationError,
    WrongSpanTypeError,
)
from tracewire.instrumentation.decorator import observe
from tracewire.tracer import (
    BeginOptions,
    Endpoint,
    EndOptions,
    EventOptions,
    NoopTracer,
    OTelTracer,
    Span,
    SpanID,
    StringPickler,
    Tracer,
    TracerProvider,
    ZipkinCompatibleTracer,
    ZipkinSpanID,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "init",
    "start_tracing",
    "stop_tracing",
    "get_tracer",
    "get_tracer_provider",
    "set_tracer",
    "observe",
    "TRACE_HEADER",
    "span_from_header",
    "header_from_span",
    "with_span",
    "span_from",
    "get_current_span",
    "Tracer",
    "ZipkinCompatibleTracer",
    "TracerProvider",
    "NoopTracer",
    "OTelTracer",
    "Span",
    "SpanID",
    "ZipkinSpanID",
    "StringPickler",
    "Endpoint",
    "BeginOptions",
    "EndOptions",
    "EventOptions",
    "TracewireError",
    "ConfigError",
    "ValidationError",
    "DecodeError",
    "ContextLookupError",
    "SpanNotFoundError",
    "WrongSpanTypeError",
]
