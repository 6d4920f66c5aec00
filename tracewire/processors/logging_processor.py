"""Span processor that logs spans when they end."""

from __future__ import annotations

import logging
from typing import Optional

from tracewire.tracer.provider import SpanProcessor


class LoggingSpanProcessor(SpanProcessor):
    """Logs span summary on end using the standard logging module."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger("tracewire.traces")

    def on_end(self, span) -> None:
        span_id = span.span_id()
        msg = (
            f"[trace] name={span.name} trace_id={span_id.trace_id:x} "
            f"span_id={span_id.id:x} parent_id={span_id.parent_id:x} "
            f"sampled={span_id.is_sampled()} duration_ns={span.duration_ns} "
            f"attrs={span.attributes}"
        )
        if span.error is not None:
            self.logger.warning("%s error=%r", msg, span.error)
        else:
            self.logger.info(msg)

    def shutdown(self) -> None:
        return None

    def force_flush(self, timeout: Optional[float] = None) -> None:
        return None
