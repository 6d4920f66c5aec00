"""Contract tests for the no-op tracer."""

import unittest

from tracewire.errors import DecodeError
from tracewire.tracer import (
    BeginOptions,
    EndOptions,
    Endpoint,
    EventOptions,
    NoopSpanID,
    NoopTracer,
    Span,
    Tracer,
    ZipkinCompatibleTracer,
)


class TestNoopTracer(unittest.TestCase):

    def setUp(self):
        self.tracer = NoopTracer()
        self.endpoint = Endpoint(service_name="test-service")

    def test_implements_both_contracts(self):
        self.assertIsInstance(self.tracer, Tracer)
        self.assertIsInstance(self.tracer, ZipkinCompatibleTracer)

    def test_root_span(self):
        span = self.tracer.begin_trace("test", self.endpoint)
        self.assertIsInstance(span, Span)
        self.assertIsNotNone(span.span_id())

        span.add_attribute("key", "value")
        span.add_attribute("count", 3)
        span.add_attribute("peer", self.endpoint)
        span.add_event("event")
        span.add_event("event", EventOptions())
        span.end()

    def test_root_span_without_service(self):
        span = self.tracer.begin_trace("test", None)
        self.assertIsNotNone(span.span_id())
        span.end()

    def test_server_span(self):
        pickler = self.tracer.get_string_pickler()
        span_id = pickler.from_string("x")
        self.assertEqual("tracing-disabled", str(span_id))
        self.assertEqual("x", pickler.to_string(span_id))

        span = self.tracer.join_trace("test", self.endpoint, span_id)
        self.assertEqual(span_id, span.span_id())
        span.end()

    def test_client_span(self):
        span = self.tracer.begin_trace("test", self.endpoint)
        child = span.begin_child_span("child", BeginOptions(async_=True))
        self.assertEqual(span.span_id(), child.span_id())
        child.end(EndOptions(error=ValueError("boom")))
        span.end()

    def test_end_twice_is_ignored(self):
        span = self.tracer.begin_trace("test", self.endpoint)
        span.end()
        span.end()
        span.add_attribute("late", True)

    def test_pickler_outcomes(self):
        pickler = self.tracer.get_string_pickler()
        self.assertIsNone(pickler.from_string(""))
        self.assertIsNone(pickler.from_string("unknown"))
        with self.assertRaises(DecodeError):
            pickler.from_string("error")

    def test_pickler_is_stable(self):
        first = self.tracer.get_string_pickler()
        second = self.tracer.get_string_pickler()
        span_id = self.tracer.begin_trace("test", self.endpoint).span_id()
        self.assertEqual(first.to_string(span_id), second.to_string(span_id))

    def test_create_span_id(self):
        span_id = self.tracer.create_span_id(1, 2, 0, 1)
        self.assertIsInstance(span_id, NoopSpanID)
        self.assertEqual(0, span_id.trace_id)
        self.assertEqual(0, span_id.id)
        self.assertEqual(0, span_id.parent_id)
        self.assertFalse(span_id.is_sampled())

    def test_close(self):
        self.tracer.close()
        span = self.tracer.begin_trace("test", self.endpoint)
        self.assertIsNotNone(span.span_id())


if __name__ == "__main__":
    unittest.main()
