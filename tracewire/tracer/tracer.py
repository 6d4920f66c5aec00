"""Tracer and serializer contracts: the entry point between instrumentation and a tracing backend."""

from __future__ import annotations

import abc
from typing import Optional, TYPE_CHECKING

from tracewire.tracer.options import BeginOptions

if TYPE_CHECKING:
    from tracewire.tracer.endpoint import Endpoint
    from tracewire.tracer.span import Span
    from tracewire.tracer.span_id import SpanID, ZipkinSpanID


class StringPickler(abc.ABC):
    """Marshals a SpanID to and from a string, e.g. for an HTTP header."""

    @abc.abstractmethod
    def to_string(self, span_id: "SpanID") -> str:
        """Serialize a span ID to a string."""

    @abc.abstractmethod
    def from_string(self, value: str) -> Optional["SpanID"]:
        """
        Deserialize a span ID.

        Returns None for an empty value (no upstream span).

        Raises:
            DecodeError: If the value is malformed
        """


class Tracer(abc.ABC):
    """
    Entry point API between instrumentation code and the tracing implementation.

    Span names should reflect the endpoint that received the request and be
    drawn from a limited vocabulary: never put UUIDs, entity IDs or timestamps
    in a name, names are used for aggregation.
    """

    @abc.abstractmethod
    def begin_trace(
        self,
        span_name: str,
        service: "Endpoint",
        options: Optional[BeginOptions] = None,
    ) -> "Span":
        """
        Start a new trace and create its root span.

        Used by a service that did not receive a span ID from upstream. The
        service endpoint is mandatory.
        """

    @abc.abstractmethod
    def join_trace(
        self,
        span_name: str,
        service: "Endpoint",
        span_id: "SpanID",
        options: Optional[BeginOptions] = None,
    ) -> "Span":
        """Join a trace started elsewhere, continuing from the upstream span ID."""

    @abc.abstractmethod
    def get_string_pickler(self) -> StringPickler:
        """Return a pickler for transmitting span IDs in string protocols."""

    @abc.abstractmethod
    def close(self) -> None:
        """Shut down cleanly, flushing any traces buffered in memory."""


class ZipkinCompatibleTracer(abc.ABC):
    """A tracer that represents span IDs as a Zipkin 4-tuple."""

    @abc.abstractmethod
    def create_span_id(self, trace_id: int, span_id: int, parent_id: int, flags: int) -> "ZipkinSpanID":
        """
        Build a ZipkinSpanID from the four values read off an incoming request.

        Not meant for minting new IDs: protocols such as TChannel record these
        values explicitly in their frames, so a string pickler cannot be used.
        """
