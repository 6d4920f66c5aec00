"""Tests for current-span binding on contexts."""

import asyncio
import threading

import pytest
from opentelemetry import context as context_api
from opentelemetry.context import Context

from tracewire.context import (
    CURRENT_SPAN_KEY,
    get_current_span,
    pop_span,
    push_span,
    span_from,
    with_span,
)
from tracewire.errors import ContextLookupError, SpanNotFoundError, WrongSpanTypeError
from tracewire.tracer import NoopTracer


@pytest.fixture
def noop_span(endpoint):
    return NoopTracer().begin_trace("test-span", endpoint)


def test_span_round_trips_through_context(noop_span):
    ctx = with_span(Context(), noop_span)
    assert span_from(ctx) is noop_span


def test_missing_span_is_not_found():
    with pytest.raises(SpanNotFoundError):
        span_from(Context())


def test_wrong_type_is_distinct_from_not_found():
    bad_ctx = context_api.set_value(CURRENT_SPAN_KEY, NoopTracer(), Context())
    with pytest.raises(WrongSpanTypeError) as excinfo:
        span_from(bad_ctx)
    assert not isinstance(excinfo.value, SpanNotFoundError)
    assert isinstance(excinfo.value, ContextLookupError)
    assert excinfo.value.details["type"] == "NoopTracer"


def test_derivation_does_not_mutate_parent(noop_span, endpoint):
    base = Context()
    derived = with_span(base, noop_span)

    other = NoopTracer().begin_trace("other", endpoint)
    shadowed = with_span(derived, other)

    with pytest.raises(SpanNotFoundError):
        span_from(base)
    assert span_from(derived) is noop_span
    assert span_from(shadowed) is other


def test_push_and_pop(noop_span):
    assert get_current_span() is None
    token = push_span(noop_span)
    try:
        assert get_current_span() is noop_span
        assert span_from() is noop_span
    finally:
        pop_span(token)
    assert get_current_span() is None


def test_span_context_manager_binds_current(tracer, endpoint):
    with tracer.begin_trace("outer", endpoint) as outer:
        assert get_current_span() is outer
        with outer.begin_child_span("inner") as inner:
            assert get_current_span() is inner
        assert inner.ended
        assert get_current_span() is outer
    assert outer.ended
    assert get_current_span() is None


def test_reentering_same_span_restores_each_level(tracer, endpoint):
    span = tracer.begin_trace("outer", endpoint)
    with span:
        with span:
            assert get_current_span() is span
        assert get_current_span() is span
    assert get_current_span() is None


def test_context_manager_ends_with_error(tracer, endpoint):
    with pytest.raises(RuntimeError):
        with tracer.begin_trace("failing", endpoint) as span:
            raise RuntimeError("boom")
    assert isinstance(span.error, RuntimeError)


def test_threads_do_not_share_current_span(noop_span):
    seen = []

    def worker():
        seen.append(get_current_span())

    token = push_span(noop_span)
    try:
        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()
    finally:
        pop_span(token)

    assert seen == [None]


@pytest.mark.asyncio
async def test_async_context_manager(tracer, endpoint):
    async def child_task(parent):
        async with parent.begin_child_span("task") as child:
            await asyncio.sleep(0)
            return get_current_span() is child

    async with tracer.begin_trace("root", endpoint) as root:
        results = await asyncio.gather(child_task(root), child_task(root))
        assert get_current_span() is root

    assert results == [True, True]
    assert len(root.children) == 2
