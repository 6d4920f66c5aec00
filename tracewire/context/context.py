"""Current-span binding on OpenTelemetry contexts.

Contexts are immutable: with_span() derives a new context and never changes
the one it was given, so concurrent derivations from one parent are safe. The
ambient (implicit) context is a contextvar managed by opentelemetry.context,
isolated per thread and per asyncio task.
"""

from contextvars import Token
from typing import Optional

from opentelemetry import context as context_api
from opentelemetry.context import Context

from tracewire.errors import SpanNotFoundError, WrongSpanTypeError
from tracewire.tracer.span import Span

CURRENT_SPAN_KEY = context_api.create_key("tracewire-current-span")


def with_span(ctx: Optional[Context], span: Span) -> Context:
    """
    Return a context derived from ``ctx`` with ``span`` bound as current.

    When ``ctx`` is None the current ambient context is used as the parent.
    """
    return context_api.set_value(CURRENT_SPAN_KEY, span, context=ctx)


def span_from(ctx: Optional[Context] = None) -> Span:
    """
    Return the span bound in ``ctx`` (default: the ambient context).

    Raises:
        SpanNotFoundError: If no span was bound in the context's ancestry
        WrongSpanTypeError: If the value bound under CURRENT_SPAN_KEY is not a Span
    """
    value = context_api.get_value(CURRENT_SPAN_KEY, context=ctx)
    if value is None:
        raise SpanNotFoundError()
    if not isinstance(value, Span):
        raise WrongSpanTypeError(details={"type": type(value).__name__})
    return value


def get_current_span(ctx: Optional[Context] = None) -> Optional[Span]:
    """Return the currently active span, if any."""
    value = context_api.get_value(CURRENT_SPAN_KEY, context=ctx)
    return value if isinstance(value, Span) else None


def push_span(span: Span) -> Token:
    """
    Make ``span`` current in the ambient context.

    Returns:
        Token needed to restore the previous state
    """
    return context_api.attach(with_span(None, span))


def pop_span(token: Token) -> None:
    """
    Restore the previous span context using the provided token.

    Args:
        token: Token returned by push_span()
    """
    context_api.detach(token)
