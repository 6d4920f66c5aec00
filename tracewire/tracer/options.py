"""Optional arguments accepted by span creation, event and end calls.

Timestamps and durations may be captured externally, e.g. when replaying
spans recorded by a component that could not report to the tracer directly
(a mobile client). Both are kept at microsecond precision.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from tracewire.tracer.endpoint import Endpoint


@dataclass
class BeginOptions:
    # Start time recorded externally; the tracer uses "now" when None.
    timestamp: Optional[datetime] = None
    # Non-empty marks an in-process unit of work (a library call); empty means RPC.
    local_component: str = ""
    # The parent keeps working while the child runs.
    async_: bool = False
    # Client making the request (server spans) or server being called (client spans).
    peer: Optional[Endpoint] = None


@dataclass
class EndOptions:
    # Overrides end - start.
    duration: Optional[timedelta] = None
    # Marks the span as anomalous.
    error: Optional[BaseException] = None


@dataclass
class EventOptions:
    timestamp: Optional[datetime] = None
