"""Span implementation - wrapper around an OpenTelemetry span."""

from __future__ import annotations

import logging
import time
import weakref
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

from opentelemetry import trace as otel_trace_api
from opentelemetry.trace import Status, StatusCode

from tracewire.tracer.endpoint import Endpoint
from tracewire.tracer.options import BeginOptions, EndOptions, EventOptions
from tracewire.tracer.span import Span
from tracewire.tracer.zipkin import ZipkinID
from tracewire.utils.helpers import convert_to_otel_type, ns_from_timedelta, time_ns_from_datetime

if TYPE_CHECKING:
    from tracewire.tracer.otel_tracer import OTelTracer

logger = logging.getLogger(__name__)


def endpoint_attributes(prefix: str, endpoint: Endpoint) -> Dict[str, Any]:
    """Flatten an Endpoint into OTel attributes under ``prefix``."""
    return {
        f"{prefix}.service_name": endpoint.service_name,
        f"{prefix}.ipv4": endpoint.ipv4_address,
        f"{prefix}.port": endpoint.port,
    }


class OTelSpan(Span):
    """
    Span recorded through an OpenTelemetry span.

    Keeps its own view of the span (multimap attributes, events, children,
    parent link, timing) alongside the OTel span, which receives the same data
    for export. The parent is held through a weak reference; the parent owns
    its children.
    """

    def __init__(
        self,
        otel_span: otel_trace_api.Span,
        tracer: "OTelTracer",
        span_id: ZipkinID,
        name: str,
        start_time_ns: int,
        parent: Optional["OTelSpan"] = None,
        service: Optional[Endpoint] = None,
    ) -> None:
        """
        Initialize span wrapper.

        Args:
            otel_span: OpenTelemetry Span instance
            tracer: OTelTracer that created this span
            span_id: Zipkin identifier of this span
            name: Span name
            start_time_ns: Start time in epoch nanoseconds
            parent: Local parent span, None for root and joined spans
            service: Endpoint of the service recording the span
        """
        self._otel_span = otel_span
        self.tracer = tracer
        self._span_id = span_id
        self.name = name
        self.service = service
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self._children: List["OTelSpan"] = []
        self._attributes: List[Tuple[str, Any]] = []
        self._events: List[Tuple[str, int]] = []

        self.start_time_ns = start_time_ns
        self.end_time_ns: Optional[int] = None
        self.error: Optional[BaseException] = None
        self._ended = False

    def span_id(self) -> ZipkinID:
        return self._span_id

    @property
    def parent(self) -> Optional["OTelSpan"]:
        """Local parent span, if it is still alive."""
        return self._parent_ref() if self._parent_ref is not None else None

    @property
    def children(self) -> Tuple["OTelSpan", ...]:
        return tuple(self._children)

    @property
    def attributes(self) -> List[Tuple[str, Any]]:
        """Attributes in insertion order; a name may appear more than once."""
        return list(self._attributes)

    def get_attribute_values(self, name: str) -> List[Any]:
        return [v for k, v in self._attributes if k == name]

    @property
    def events(self) -> List[Tuple[str, int]]:
        """Events as (name, timestamp_ns) in insertion order."""
        return list(self._events)

    @property
    def ended(self) -> bool:
        return self._ended

    @property
    def duration_ns(self) -> Optional[int]:
        if self.end_time_ns is None:
            return None
        return self.end_time_ns - self.start_time_ns

    @property
    def is_recording(self) -> bool:
        return self._otel_span.is_recording()

    def begin_child_span(self, name: str, options: Optional[BeginOptions] = None) -> Span:
        return self.tracer._begin_child_span(self, name, options)

    def _attach_child(self, child: "OTelSpan") -> None:
        self._children.append(child)

    def add_attribute(self, name: str, value: Any) -> None:
        """Add an attribute; repeated names accumulate."""
        if self._ended:
            return

        self._attributes.append((name, value))

        try:
            if isinstance(value, Endpoint):
                self._otel_span.set_attributes(endpoint_attributes(name, value))
            else:
                self._otel_span.set_attribute(name, self._otel_value(name))
        except Exception:
            logger.debug("Dropped attribute %r on span %r", name, self.name, exc_info=True)

    def _otel_value(self, name: str) -> Any:
        """OTel attributes are a map: repeated names become a homogeneous sequence."""
        values = [convert_to_otel_type(v) for v in self.get_attribute_values(name)]
        if len(values) == 1:
            return values[0]
        if all(type(v) is type(values[0]) for v in values) and not isinstance(values[0], (list, bytes)):
            return values
        return [str(v) for v in values]

    def add_event(self, name: str, options: Optional[EventOptions] = None) -> None:
        """Add a timestamped event; the timestamp defaults to now."""
        if self._ended:
            return

        if options is not None and options.timestamp is not None:
            timestamp_ns = time_ns_from_datetime(options.timestamp)
        else:
            timestamp_ns = time.time_ns()
        self._events.append((name, timestamp_ns))

        try:
            self._otel_span.add_event(name=name, timestamp=timestamp_ns)
        except Exception:
            logger.debug("Dropped event %r on span %r", name, self.name, exc_info=True)

    def end(self, options: Optional[EndOptions] = None) -> None:
        """
        End the span.

        Processors run BEFORE the OTel span ends (span is still mutable).
        Export processors run AFTER (OTel handles this automatically).
        """
        if self._ended:
            return

        options = options or EndOptions()
        if options.duration is not None:
            self.end_time_ns = self.start_time_ns + ns_from_timedelta(options.duration)
        else:
            self.end_time_ns = time.time_ns()

        try:
            if options.error is not None:
                self.error = options.error
                if isinstance(options.error, BaseException):
                    self._otel_span.record_exception(options.error)
                self._otel_span.set_status(Status(StatusCode.ERROR, str(options.error)))
            else:
                self._otel_span.set_status(Status(StatusCode.OK))
        except Exception:
            logger.debug("Failed to record status on span %r", self.name, exc_info=True)

        # 1. Run tracewire processors (span is still mutable)
        self.tracer._run_span_processors(self)

        # 2. End the OTel span (makes it immutable)
        try:
            self._otel_span.end(end_time=self.end_time_ns)
        except Exception:
            logger.debug("Failed to end OTel span %r", self.name, exc_info=True)

        self._ended = True

    def __repr__(self) -> str:
        return f"OTelSpan(name={self.name!r}, span_id={self._span_id})"
