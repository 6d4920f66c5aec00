"""Helper functions for id formatting, time conversion and OpenTelemetry attribute values."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from tracewire import runtime_config

UINT64_MASK = 0xFFFFFFFFFFFFFFFF


def to_unsigned64(value: int) -> int:
    """
    Normalize a signed int64 (as carried by Zipkin/Thrift frames) to unsigned.

    Args:
        value: Integer in the signed or unsigned 64-bit range

    Returns:
        The same 64 bits read as an unsigned integer
    """
    return value & UINT64_MASK


def format_id(value: int) -> str:
    """
    Format a 64-bit id as lower-case hex without padding.

    Args:
        value: Unsigned 64-bit id

    Returns:
        Hex string, e.g. "1f3a"
    """
    return format(value, "x")


def parse_id(hex_string: str) -> int:
    """
    Parse a hex id string.

    Args:
        hex_string: Hex digits without prefix

    Returns:
        Parsed integer

    Raises:
        ValueError: If the string is empty or not hex
    """
    if not hex_string or not all(c in "0123456789abcdefABCDEF" for c in hex_string):
        raise ValueError(f"not a hex id: {hex_string!r}")
    return int(hex_string, 16)


def time_ns_from_datetime(timestamp: datetime) -> int:
    """
    Convert an externally captured timestamp to epoch nanoseconds.

    Naive datetimes are taken as UTC. Precision is truncated to microseconds.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    delta = timestamp - datetime(1970, 1, 1, tzinfo=timezone.utc)
    micros = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
    return micros * 1000


def ns_from_timedelta(duration: timedelta) -> int:
    """Convert a duration to nanoseconds, truncated to microseconds."""
    micros = (duration.days * 86400 + duration.seconds) * 1_000_000 + duration.microseconds
    return micros * 1000


def convert_to_otel_type(value: Any, limit: Optional[int] = None) -> Any:
    """
    Convert a value to an OpenTelemetry-compatible attribute type.

    OTel attributes must be: bool, str, bytes, int, float, or sequences of those.
    Strings are truncated to the runtime attribute truncation limit.
    """
    if limit is None:
        limit = runtime_config.get_attr_truncation_limit()

    if isinstance(value, str):
        return value[:limit]
    if isinstance(value, (bool, bytes, int, float)):
        return value

    # For sequences, convert each element
    if isinstance(value, (list, tuple)):
        converted = []
        for item in value:
            if isinstance(item, (bool, str, bytes, int, float)):
                converted.append(item)
            else:
                converted.append(str(item)[:limit])
        return converted[:100]  # Limit sequence length

    if isinstance(value, dict):
        try:
            return json.dumps(value, default=str)[:limit]
        except (TypeError, ValueError):
            return str(value)[:limit]

    return str(value)[:limit]
