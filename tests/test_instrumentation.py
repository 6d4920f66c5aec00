"""Tests for the @observe decorator and HTTP propagation helpers."""

import pytest

from tracewire import get_current_span, observe, set_tracer
from tracewire.errors import DecodeError
from tracewire.instrumentation import inject_http_headers, start_server_span
from tracewire.tracer import NoopTracer


@pytest.fixture
def global_tracer(tracer):
    set_tracer(tracer)
    return tracer


class TestObserveDecorator:

    def test_sync_function_starts_trace(self, global_tracer, exporter):
        @observe(name="add_numbers")
        def add(a: int, b: int) -> int:
            return a + b

        assert add(5, 3) == 8

        exported = exporter.get_finished_spans()
        assert [s.name for s in exported] == ["add_numbers"]
        assert exported[0].parent is None
        assert exported[0].attributes["a"] == 5
        assert exported[0].attributes["result"] == 8

    def test_nested_calls_form_a_tree(self, global_tracer, endpoint):
        captured = {}

        @observe()
        def inner():
            captured["inner"] = get_current_span()

        @observe()
        def outer():
            captured["outer"] = get_current_span()
            inner()

        with global_tracer.begin_trace("request", endpoint) as root:
            outer()

        assert captured["outer"].parent is root
        assert captured["inner"].parent is captured["outer"]
        assert captured["inner"].span_id().trace_id == root.span_id().trace_id

    def test_skip_args_and_result(self, global_tracer, exporter):
        @observe(name="login", skip_args=["password"], skip_result=True)
        def login(username: str, password: str) -> bool:
            return password == "secret"

        assert login("admin", "secret") is True
        attrs = exporter.get_finished_spans()[0].attributes
        assert attrs["username"] == "admin"
        assert "password" not in attrs
        assert "result" not in attrs

    def test_error_is_recorded_and_raised(self, global_tracer, exporter):
        captured = {}

        @observe(name="failing_function")
        def fail():
            captured["span"] = get_current_span()
            raise ValueError("Test error message")

        with pytest.raises(ValueError, match="Test error message"):
            fail()

        span = captured["span"]
        assert isinstance(span.error, ValueError)
        assert span.get_attribute_values("error.type") == ["ValueError"]
        assert get_current_span() is None

    @pytest.mark.asyncio
    async def test_async_function(self, global_tracer, exporter):
        @observe(name="fetch", attributes={"component": "client"})
        async def fetch(key: str) -> str:
            return key.upper()

        assert await fetch("abc") == "ABC"
        attrs = exporter.get_finished_spans()[0].attributes
        assert attrs["component"] == "client"
        assert attrs["result"] == "ABC"

    def test_without_tracing_initialized(self):
        @observe()
        def plain():
            return 42

        assert plain() == 42


class TestHttpHelpers:

    def test_round_trip_through_headers(self, tracer, endpoint):
        client = tracer.begin_trace("client", endpoint)
        headers = inject_http_headers({}, tracer, client)

        with start_server_span(tracer, "handle", headers, endpoint) as server:
            assert get_current_span() is server
            assert server.span_id().trace_id == client.span_id().trace_id
            assert server.span_id().parent_id == client.span_id().id
        client.end()

    def test_inject_uses_current_span(self, tracer, endpoint):
        with tracer.begin_trace("client", endpoint) as span:
            headers = inject_http_headers({"accept": "*/*"}, tracer)
        assert headers["uber-trace-id"] == str(span.span_id())
        assert headers["accept"] == "*/*"

    def test_inject_without_span_is_noop(self, tracer):
        assert inject_http_headers({}, tracer) == {}

    def test_missing_header_starts_new_trace(self, tracer, endpoint):
        span = start_server_span(tracer, "handle", {}, endpoint)
        assert span.span_id().parent_id == 0
        span.end()

    def test_custom_header_name(self, endpoint):
        tracer = NoopTracer()
        span = start_server_span(tracer, "handle", {"X-Trace": "x"}, endpoint, header_name="x-trace")
        assert str(span.span_id()) == "tracing-disabled"

    def test_malformed_header_raises(self, tracer, endpoint):
        with pytest.raises(DecodeError):
            start_server_span(tracer, "handle", {"uber-trace-id": "not-an-id"}, endpoint)
