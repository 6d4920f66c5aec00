"""Shared fixtures for tracewire tests."""

import pytest
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from tracewire import runtime_config, stop_tracing
from tracewire.tracer import Endpoint, TracerProvider


@pytest.fixture
def endpoint():
    return Endpoint.from_address("test-service", "10.0.0.1", 8080)


@pytest.fixture
def exporter():
    return InMemorySpanExporter()


@pytest.fixture
def provider(exporter):
    provider = TracerProvider(service_name="test-service")
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    yield provider
    provider.shutdown()


@pytest.fixture
def tracer(provider):
    return provider.get_tracer("tests")


@pytest.fixture
def unsampled_tracer(exporter):
    provider = TracerProvider(service_name="test-service", sample_rate=0.0)
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    yield provider.get_tracer("tests")
    provider.shutdown()


@pytest.fixture(autouse=True)
def _reset_global_state():
    yield
    stop_tracing()
    runtime_config.reset()
