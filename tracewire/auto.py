"""Process-wide tracer bootstrap."""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from tracewire import runtime_config
from tracewire.config import load_config
from tracewire.processors.logging_processor import LoggingSpanProcessor
from tracewire.tracer.noop import NoopTracer
from tracewire.tracer.provider import TracerProvider
from tracewire.tracer.tracer import Tracer

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_provider: Optional[TracerProvider] = None
_tracer: Optional[Tracer] = None
_noop_tracer = NoopTracer()


def init(config_file: Optional[str] = None, **overrides: Any) -> TracerProvider:
    """
    Initialize process-wide tracing and return the provider.

    Settings are resolved by tracewire.config.load_config(). Calling init()
    again while tracing is active returns the existing provider; call
    stop_tracing() first to re-initialize.

    Raises:
        ConfigError: If the configuration is invalid
    """
    global _provider, _tracer

    with _lock:
        if _provider is not None:
            logger.debug("Tracing already initialized, returning the existing provider")
            return _provider

        config = load_config(config_file, overrides)

        runtime_config.set_debug(config.tracing.debug)
        runtime_config.set_attr_truncation_limit(config.logging.attr_truncation_limit)

        provider = TracerProvider(
            service_name=config.tracing.service_name,
            sample_rate=config.tracing.sample_rate,
        )
        if config.logging.enable_span_logging:
            provider.add_span_processor(LoggingSpanProcessor())

        _provider = provider
        _tracer = provider.get_tracer("tracewire")
        logger.debug(
            "Tracing initialized for service %r (sample_rate=%s)",
            config.tracing.service_name,
            config.tracing.sample_rate,
        )
        return provider


def start_tracing(config_file: Optional[str] = None, **overrides: Any) -> TracerProvider:
    """Alias of init()."""
    return init(config_file, **overrides)


def stop_tracing() -> None:
    """Close the process-wide tracer, flushing buffered spans."""
    global _provider, _tracer

    with _lock:
        tracer, _tracer = _tracer, None
        provider, _provider = _provider, None

    if tracer is not None:
        tracer.close()
    if provider is not None:
        provider.shutdown()
    runtime_config.reset()


def get_tracer_provider() -> Optional[TracerProvider]:
    return _provider


def get_tracer(name: Optional[str] = None) -> Tracer:
    """
    Return the process-wide tracer.

    With a name, returns the provider's tracer for that instrumentation
    scope. Before init() (or after stop_tracing()) a NoopTracer is returned.
    """
    with _lock:
        if _tracer is None:
            return _noop_tracer
        if name is not None and _provider is not None:
            return _provider.get_tracer(name)
        return _tracer


def set_tracer(tracer: Optional[Tracer]) -> None:
    """Install a tracer built elsewhere, e.g. an alternative backend."""
    global _tracer

    with _lock:
        _tracer = tracer
