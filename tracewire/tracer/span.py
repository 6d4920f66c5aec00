"""Span contract."""

from __future__ import annotations

import abc
from typing import Any, Optional, TYPE_CHECKING

from tracewire.tracer.options import BeginOptions, EndOptions, EventOptions

if TYPE_CHECKING:
    from tracewire.tracer.span_id import SpanID


class Span(abc.ABC):
    """
    A unit of work executed on behalf of a trace.

    Examples include a remote procedure call or an in-process call to a
    sub-component. A trace has a single top level "root" span and zero or more
    children, which can have their own children, forming a tree.

    Spans are also context managers: entering binds the span as current in the
    ambient context, exiting ends it (recording the exception, if any) and
    restores the previous context.
    """

    _activation_tokens: Optional[list] = None

    @abc.abstractmethod
    def span_id(self) -> "SpanID":
        """Return the identifier of the span."""

    @abc.abstractmethod
    def begin_child_span(self, name: str, options: Optional[BeginOptions] = None) -> "Span":
        """Begin a subordinate unit of work with the given name."""

    @abc.abstractmethod
    def end(self, options: Optional[EndOptions] = None) -> None:
        """
        Mark the work represented by this span as completed or terminated.

        Attributes and events must be added before calling end(); afterwards
        they may be ignored. Calls after the first are ignored.
        """

    @abc.abstractmethod
    def add_attribute(self, name: str, value: Any) -> None:
        """
        Attach a key/value pair to the span. The same key may repeat.

        At minimum str, int (32 and 64-bit), float, bool, bytes and Endpoint
        values are supported. Other types may be coerced.
        """

    @abc.abstractmethod
    def add_event(self, name: str, options: Optional[EventOptions] = None) -> None:
        """Attach a named, timestamped marker to the span."""

    # Context manager support. Tokens are stacked so nested re-entry of the
    # same span restores each outer context in order.
    def __enter__(self) -> "Span":
        from tracewire.context.context import push_span

        if self._activation_tokens is None:
            self._activation_tokens = []
        self._activation_tokens.append(push_span(self))
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        from tracewire.context.context import pop_span

        try:
            self.end(EndOptions(error=exc) if exc else None)
        finally:
            if self._activation_tokens:
                pop_span(self._activation_tokens.pop())
        return False

    async def __aenter__(self) -> "Span":
        return self.__enter__()

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return self.__exit__(exc_type, exc, tb)
