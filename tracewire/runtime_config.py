"""Runtime configuration state management."""

# Global runtime configuration state
_config = {
    "debug": False,
    "attr_truncation_limit": 1000,
}


def set_debug(value: bool) -> None:
    _config["debug"] = value


def get_debug() -> bool:
    return _config["debug"]


def set_attr_truncation_limit(value: int) -> None:
    _config["attr_truncation_limit"] = value


def get_attr_truncation_limit() -> int:
    return _config["attr_truncation_limit"]


def reset() -> None:
    """Restore defaults (used by stop_tracing())."""
    _config["debug"] = False
    _config["attr_truncation_limit"] = 1000
