"""@observe decorator for instrumenting functions."""

from __future__ import annotations

import functools
import inspect
import traceback
from typing import Any, Callable, Dict, Iterable, Optional

from tracewire.context.context import get_current_span
from tracewire.tracer.endpoint import Endpoint
from tracewire.tracer.options import BeginOptions
from tracewire.tracer.span import Span
from tracewire.utils.helpers import convert_to_otel_type


def _capture_args(bound_args: inspect.BoundArguments, skip: Iterable[str]) -> Dict[str, Any]:
    """Capture function arguments, converting complex types to attribute-compatible types."""
    captured = {}
    for name, value in bound_args.arguments.items():
        if name in skip or name in ("self", "cls"):
            continue
        captured[name] = convert_to_otel_type(value)
    return captured


def _default_endpoint() -> Endpoint:
    import tracewire

    provider = tracewire.get_tracer_provider()
    service_name = provider.resource.get("service.name") if provider is not None else None
    return Endpoint(service_name=service_name or "unknown-service")


def _start_span(span_name: str, options: BeginOptions) -> Span:
    """Child of the current span, or the root of a new trace when none is current."""
    parent = get_current_span()
    if parent is not None:
        return parent.begin_child_span(span_name, options)
    return _get_tracer().begin_trace(span_name, _default_endpoint(), options)


def _record_error(span: Span, exc: BaseException) -> None:
    span.add_attribute("error.type", type(exc).__name__)
    span.add_attribute("error.message", str(exc))
    span.add_attribute("error.stack_trace", traceback.format_exc()[:2000])


def observe(
    name: Optional[str] = None,
    *,
    attributes: Optional[Dict[str, Any]] = None,
    skip_args: Optional[Iterable[str]] = None,
    skip_result: bool = False,
    local_component: Optional[str] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorate a function to create a span around its execution.

    - Supports sync and async functions.
    - The span is a child of the current span, or a new trace when there is none,
      and is current while the function runs.
    - Exceptions end the span with the error and are re-raised.
    - Optionally captures arguments/results (skip controls).
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        span_name = name or func.__name__
        component = local_component or func.__module__ or "default"
        skip_args_set = set(skip_args or [])
        signature = inspect.signature(func)

        def _begin(args, kwargs) -> Span:
            bound = signature.bind_partial(*args, **kwargs)
            bound.apply_defaults()

            span = _start_span(span_name, BeginOptions(local_component=component))
            for key, value in (attributes or {}).items():
                span.add_attribute(key, value)
            for key, value in _capture_args(bound, skip_args_set).items():
                span.add_attribute(key, value)
            return span

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            with _begin(args, kwargs) as span:
                try:
                    result = func(*args, **kwargs)
                except Exception as exc:
                    _record_error(span, exc)
                    raise
                if not skip_result:
                    span.add_attribute("result", convert_to_otel_type(result))
                return result

        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            async with _begin(args, kwargs) as span:
                try:
                    result = await func(*args, **kwargs)
                except Exception as exc:
                    _record_error(span, exc)
                    raise
                if not skip_result:
                    span.add_attribute("result", convert_to_otel_type(result))
                return result

        return async_wrapper if inspect.iscoroutinefunction(func) else sync_wrapper

    return decorator


def _get_tracer():
    import tracewire

    return tracewire.get_tracer()
