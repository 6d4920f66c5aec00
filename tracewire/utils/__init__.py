"""Utility functions for tracewire."""

from tracewire.utils.helpers import (
    convert_to_otel_type,
    format_id,
    ns_from_timedelta,
    parse_id,
    time_ns_from_datetime,
    to_unsigned64,
)

__all__ = [
    "convert_to_otel_type",
    "format_id",
    "ns_from_timedelta",
    "parse_id",
    "time_ns_from_datetime",
    "to_unsigned64",
]
