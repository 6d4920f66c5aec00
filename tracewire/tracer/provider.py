"""TracerProvider using OpenTelemetry SDK."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional

from opentelemetry.sdk.resources import Resource as OTelResource
from opentelemetry.sdk.trace import SpanProcessor as OTelSpanProcessor
from opentelemetry.sdk.trace import TracerProvider as OTelTracerProvider
from opentelemetry.sdk.trace.sampling import ALWAYS_ON, ParentBased, Sampler, TraceIdRatioBased

from tracewire import runtime_config
from tracewire.tracer.zipkin import ZipkinIdGenerator

logger = logging.getLogger(__name__)


class SpanProcessor:
    """
    Base span processor interface for tracewire processors.

    Processors run while span.end() executes, BEFORE the OTel span ends, so the
    span is still mutable. Only spans that are sampled or ended with an error
    are handed to processors. Export processors use OTel's SpanProcessor
    interface and run AFTER the OTel span ends.
    """

    def on_end(self, span) -> None:
        """
        Called when a span ends.

        Args:
            span: tracewire OTelSpan instance (mutable)
        """
        pass

    def shutdown(self) -> None:
        """Shutdown the processor."""
        pass

    def force_flush(self, timeout: Optional[float] = None) -> None:
        """Force flush any pending spans."""
        pass


def build_sampler(sample_rate: float) -> Sampler:
    """
    Head sampler: decided once at the root and inherited by every descendant.

    Joined spans follow the sampled bit of the remote parent.
    """
    if not 0.0 <= sample_rate <= 1.0:
        raise ValueError("sample_rate must be between 0.0 and 1.0")
    if runtime_config.get_debug():
        return ParentBased(ALWAYS_ON)
    return ParentBased(TraceIdRatioBased(sample_rate))


class TracerProvider:
    """
    TracerProvider using OpenTelemetry SDK.

    Owns the OTel provider (64-bit trace ids, parent-based sampling) and
    separates tracewire processors from OTel export processors.
    """

    def __init__(
        self,
        service_name: Optional[str] = None,
        sample_rate: float = 1.0,
        resource: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Initialize TracerProvider with OpenTelemetry.

        Args:
            service_name: Default service name recorded on the OTel resource
            sample_rate: Probability that a new trace is sampled
            resource: Extra resource attributes
        """
        self.resource = dict(resource or {})
        if service_name:
            self.resource.setdefault("service.name", service_name)
        self.sample_rate = sample_rate

        self._otel_provider = OTelTracerProvider(
            sampler=build_sampler(sample_rate),
            resource=OTelResource.create(self.resource),
            id_generator=ZipkinIdGenerator(),
        )

        self._span_processors: List[SpanProcessor] = []
        self._export_processors: List[OTelSpanProcessor] = []

        self._tracers: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._shutdown = False

    def get_tracer(self, name: str = "tracewire") -> "OTelTracer":
        """
        Get a tracer by instrumentation scope name.

        Returns:
            OTelTracer instance, cached per name
        """
        with self._lock:
            tracer = self._tracers.get(name)
            if tracer is None:
                from tracewire.tracer.otel_tracer import OTelTracer
                tracer = OTelTracer(self, name)
                self._tracers[name] = tracer
            return tracer

    def add_span_processor(self, processor: Any) -> None:
        """
        Add a span processor.

        OTel-compatible processors go to the OTel provider; anything else is a
        tracewire processor.
        """
        if isinstance(processor, OTelSpanProcessor):
            self._otel_provider.add_span_processor(processor)
            self._export_processors.append(processor)
        else:
            self._span_processors.append(processor)

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown

    def force_flush(self, timeout: Optional[float] = None) -> None:
        """Force flush all processors."""
        self._otel_provider.force_flush(timeout_millis=int(timeout * 1000) if timeout else 30000)

        for processor in self._span_processors:
            try:
                processor.force_flush(timeout=timeout)
            except Exception:
                logger.exception("Span processor %r failed to flush", processor)

    def shutdown(self) -> None:
        """Flush and shut down the provider and all processors. Later calls are ignored."""
        with self._lock:
            if self._shutdown:
                return
            self._shutdown = True

        self.force_flush()
        self._otel_provider.shutdown()

        for processor in self._span_processors:
            try:
                processor.shutdown()
            except Exception:
                logger.exception("Span processor %r failed to shut down", processor)
