"""Tracer backed by the OpenTelemetry SDK, Zipkin-compatible."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Dict, Optional, TYPE_CHECKING

from opentelemetry import context as context_api
from opentelemetry.trace import NonRecordingSpan, SpanKind, set_span_in_context

from tracewire import runtime_config
from tracewire.errors import ValidationError
from tracewire.tracer.endpoint import Endpoint
from tracewire.tracer.noop import NoopSpan
from tracewire.tracer.options import BeginOptions
from tracewire.tracer.otel_span import OTelSpan, endpoint_attributes
from tracewire.tracer.span import Span
from tracewire.tracer.span_id import DEBUG_FLAG, SAMPLED_FLAG, SpanID, ZipkinSpanID
from tracewire.tracer.tracer import StringPickler, Tracer, ZipkinCompatibleTracer
from tracewire.tracer.zipkin import ZipkinID, ZipkinStringPickler, make_zipkin_id
from tracewire.utils.helpers import time_ns_from_datetime

if TYPE_CHECKING:
    from tracewire.tracer.provider import TracerProvider

logger = logging.getLogger(__name__)


class OTelTracer(Tracer, ZipkinCompatibleTracer):
    """
    Tracer that records spans through an OpenTelemetry Tracer.

    Root spans get a fresh 64-bit trace id. Joined spans become server-side
    children of the inbound id and inherit its sampled bit. Once closed, the
    tracer hands out no-op spans.
    """

    def __init__(self, provider: "TracerProvider", instrumentation_scope: str = "tracewire"):
        """
        Initialize tracer with OpenTelemetry Tracer.

        Args:
            provider: tracewire TracerProvider instance
            instrumentation_scope: Instrumentation scope name
        """
        self._provider = provider
        self.instrumentation_scope = instrumentation_scope
        self._otel_tracer = provider._otel_provider.get_tracer(instrumentation_scope)
        self._pickler = ZipkinStringPickler()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed or self._provider.is_shutdown

    def begin_trace(
        self,
        span_name: str,
        service: Endpoint,
        options: Optional[BeginOptions] = None,
    ) -> Span:
        if self.closed:
            logger.warning("begin_trace(%r) called on a closed tracer", span_name)
            return NoopSpan()
        if service is None:
            logger.debug("begin_trace(%r) called without a service endpoint", span_name)

        flags = DEBUG_FLAG if runtime_config.get_debug() else 0
        # An empty context keeps ambient OTel spans from becoming the parent.
        return self._start_span(
            span_name,
            options,
            parent_context=context_api.Context(),
            parent_id=0,
            inherited_flags=flags,
            kind=SpanKind.SERVER,
            service=service,
        )

    def join_trace(
        self,
        span_name: str,
        service: Endpoint,
        span_id: SpanID,
        options: Optional[BeginOptions] = None,
    ) -> Span:
        if self.closed:
            logger.warning("join_trace(%r) called on a closed tracer", span_name)
            return NoopSpan()

        upstream = self._as_zipkin_id(span_id)
        if upstream is None:
            logger.warning(
                "join_trace(%r) got an incompatible span ID %r, starting a new trace",
                span_name,
                span_id,
            )
            return self.begin_trace(span_name, service, options)

        parent_context = set_span_in_context(
            NonRecordingSpan(upstream.to_otel_context(is_remote=True)),
            context_api.Context(),
        )
        return self._start_span(
            span_name,
            options,
            parent_context=parent_context,
            parent_id=upstream.id,
            inherited_flags=upstream.flags,
            kind=SpanKind.SERVER,
            service=service,
        )

    def get_string_pickler(self) -> StringPickler:
        return self._pickler

    def create_span_id(self, trace_id: int, span_id: int, parent_id: int, flags: int) -> ZipkinID:
        return make_zipkin_id(trace_id, span_id, parent_id, flags)

    def close(self) -> None:
        """Flush buffered spans and shut down the provider. Later calls are ignored."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._provider.shutdown()

    def _as_zipkin_id(self, span_id: Any) -> Optional[ZipkinID]:
        if isinstance(span_id, ZipkinID):
            upstream = span_id
        elif isinstance(span_id, ZipkinSpanID):
            try:
                upstream = make_zipkin_id(span_id.trace_id, span_id.id, span_id.parent_id, span_id.flags)
            except ValidationError:
                return None
        else:
            return None
        if upstream.trace_id == 0 or upstream.id == 0:
            return None
        return upstream

    def _begin_child_span(
        self,
        parent: OTelSpan,
        name: str,
        options: Optional[BeginOptions],
    ) -> Span:
        if self.closed:
            logger.warning("begin_child_span(%r) called on a closed tracer", name)
            return NoopSpan()

        kind = SpanKind.INTERNAL if options is not None and options.local_component else SpanKind.CLIENT
        return self._start_span(
            name,
            options,
            parent_context=set_span_in_context(parent._otel_span, context_api.Context()),
            parent_id=parent.span_id().id,
            inherited_flags=parent.span_id().flags,
            kind=kind,
            service=parent.service,
            parent=parent,
        )

    def _start_span(
        self,
        name: str,
        options: Optional[BeginOptions],
        *,
        parent_context: context_api.Context,
        parent_id: int,
        inherited_flags: int,
        kind: SpanKind,
        service: Optional[Endpoint],
        parent: Optional[OTelSpan] = None,
    ) -> OTelSpan:
        options = options or BeginOptions()
        if options.timestamp is not None:
            start_time_ns = time_ns_from_datetime(options.timestamp)
        else:
            start_time_ns = time.time_ns()

        attributes: Dict[str, Any] = {}
        if isinstance(service, Endpoint):
            attributes.update(endpoint_attributes("local", service))
        if isinstance(options.peer, Endpoint):
            attributes.update(endpoint_attributes("peer", options.peer))
        if options.local_component:
            attributes["lc"] = options.local_component
        if options.async_:
            attributes["span.async"] = True

        otel_span = self._otel_tracer.start_span(
            name=name,
            context=parent_context,
            kind=kind,
            attributes=attributes,
            start_time=start_time_ns,
        )

        # Sampling was decided by the OTel sampler at the root and inherited since.
        otel_context = otel_span.get_span_context()
        sampled = SAMPLED_FLAG if otel_context.trace_flags.sampled else 0
        flags = (inherited_flags & ~SAMPLED_FLAG & 0xFF) | sampled
        span_id = ZipkinID(otel_context.trace_id, otel_context.span_id, parent_id, flags)

        span = OTelSpan(
            otel_span,
            self,
            span_id,
            name=name,
            start_time_ns=start_time_ns,
            parent=parent,
            service=service,
        )
        if parent is not None:
            parent._attach_child(span)
        return span

    def _run_span_processors(self, span: OTelSpan) -> None:
        """
        Run tracewire processors before the span's OTel counterpart ends.

        Unsampled spans are skipped unless they ended with an error.
        """
        if not span.span_id().is_sampled() and span.error is None:
            return
        for processor in self._provider._span_processors:
            try:
                processor.on_end(span)
            except Exception:
                # Processors must not break tracing
                logger.exception("Span processor %r failed", processor)
