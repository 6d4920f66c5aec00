"""Tests for the root-vs-join decision in span_from_header()."""

import pytest

from tracewire.context import TRACE_HEADER, extract_header, header_from_span, span_from_header
from tracewire.errors import DecodeError
from tracewire.tracer import NoopTracer, Span
from tracewire.tracer.otel_span import OTelSpan


class TestNoopTracerHeaders:

    def test_empty_header_starts_new_trace(self, endpoint):
        span = span_from_header("", NoopTracer(), "test-span", endpoint)
        assert isinstance(span, Span)

    def test_recognized_header_joins(self, endpoint):
        tracer = NoopTracer()
        span = span_from_header("x", tracer, "test-span", endpoint)
        assert span is not None
        assert header_from_span(span, tracer) == "x"

    def test_unrecognized_header_starts_new_trace(self, endpoint):
        span = span_from_header("y", NoopTracer(), "test-span", endpoint)
        assert span is not None

    def test_parse_error_creates_no_span(self, endpoint):
        with pytest.raises(DecodeError):
            span_from_header("error", NoopTracer(), "test-span", endpoint)


class TestOTelTracerHeaders:

    def test_empty_header_starts_root(self, tracer, endpoint):
        span = span_from_header("", tracer, "test-span", endpoint)
        assert isinstance(span, OTelSpan)
        assert span.span_id().parent_id == 0
        span.end()

    def test_valid_header_joins_trace(self, tracer, endpoint):
        client = tracer.begin_trace("client", endpoint)
        header = header_from_span(client, tracer)

        server = span_from_header(header, tracer, "test-span", endpoint)
        server_id = server.span_id()
        assert server_id.trace_id == client.span_id().trace_id
        assert server_id.parent_id == client.span_id().id
        assert server_id.is_sampled() == client.span_id().is_sampled()

        pickler = tracer.get_string_pickler()
        encoded = pickler.to_string(server_id)
        assert pickler.to_string(pickler.from_string(encoded)) == encoded
        server.end()
        client.end()

    @pytest.mark.parametrize("header", ["garbage", "1:2:3", "zz:1:0:1", "0:1:0:1"])
    def test_malformed_header_raises(self, tracer, endpoint, exporter, header):
        with pytest.raises(DecodeError):
            span_from_header(header, tracer, "test-span", endpoint)
        assert exporter.get_finished_spans() == ()

    def test_header_from_span_uses_pickler(self, tracer, endpoint):
        span = tracer.begin_trace("client", endpoint)
        assert tracer.get_string_pickler().from_string(header_from_span(span, tracer)) == span.span_id()
        span.end()


class TestExtractHeader:

    def test_case_insensitive(self):
        assert extract_header({"Uber-Trace-Id": "a:b:0:1"}) == "a:b:0:1"

    def test_missing_header(self):
        assert extract_header({"content-type": "text/plain"}) == ""

    def test_default_name(self):
        assert TRACE_HEADER == "uber-trace-id"
