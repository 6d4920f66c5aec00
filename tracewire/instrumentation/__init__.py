"""Instrumentation helpers."""

from tracewire.instrumentation.decorator import observe
from tracewire.instrumentation.http_client import inject_headers as inject_http_headers
from tracewire.instrumentation.http_server import start_server_span

__all__ = [
    "observe",
    "inject_http_headers",
    "start_server_span",
]
