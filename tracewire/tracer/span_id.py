"""Span identifier contracts."""

from __future__ import annotations

import abc

SAMPLED_FLAG = 0x01
DEBUG_FLAG = 0x02


class SpanID(abc.ABC):
    """
    Identifies a span.

    Carries whatever must travel between services, e.g. in an HTTP header or
    protocol-specific frame fields. Instances are immutable and compare by value.
    """

    @abc.abstractmethod
    def __str__(self) -> str:
        """Canonical rendering of the identifier."""


class ZipkinSpanID(SpanID):
    """SpanID exposing the Zipkin 4-tuple."""

    @property
    @abc.abstractmethod
    def trace_id(self) -> int:
        """Globally unique id of the trace, shared by all of its spans."""

    @property
    @abc.abstractmethod
    def id(self) -> int:
        """Span id, unique within the trace."""

    @property
    @abc.abstractmethod
    def parent_id(self) -> int:
        """Id of the parent span; 0 for the root span."""

    @property
    @abc.abstractmethod
    def flags(self) -> int:
        """Flag byte as carried on the wire."""

    def is_sampled(self) -> bool:
        """Whether the trace was chosen for storage at its root."""
        return bool(self.flags & SAMPLED_FLAG)
