"""Configuration loading for tracewire.

Settings come from, in increasing priority:

1. Defaults
2. A TOML file: ./tracewire.toml or ~/.tracewire/config.toml
3. Environment variables (TRACEWIRE_*)
4. Explicit overrides passed to init()
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from tracewire.errors import ConfigError


class TracingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    service_name: str = "unknown-service"
    sample_rate: float = Field(default=1.0, ge=0.0, le=1.0)
    debug: bool = False


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enable_span_logging: bool = False
    attr_truncation_limit: int = Field(default=1000, gt=0)


class TracewireConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tracing: TracingConfig = Field(default_factory=TracingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# env var -> (section, key)
ENV_VARS: Dict[str, Tuple[str, str]] = {
    "TRACEWIRE_SERVICE_NAME": ("tracing", "service_name"),
    "TRACEWIRE_SAMPLE_RATE": ("tracing", "sample_rate"),
    "TRACEWIRE_DEBUG": ("tracing", "debug"),
    "TRACEWIRE_ENABLE_SPAN_LOGGING": ("logging", "enable_span_logging"),
    "TRACEWIRE_ATTR_TRUNCATION_LIMIT": ("logging", "attr_truncation_limit"),
}

# flat init() keyword -> section
OVERRIDE_SECTIONS: Dict[str, str] = {
    "service_name": "tracing",
    "sample_rate": "tracing",
    "debug": "tracing",
    "enable_span_logging": "logging",
    "attr_truncation_limit": "logging",
}


def find_config_file() -> Optional[Path]:
    """
    Find a configuration file in the standard locations.

    Checks ./tracewire.toml, then ~/.tracewire/config.toml.

    Returns:
        Path to config file or None if not found
    """
    project_toml = Path.cwd() / "tracewire.toml"
    if project_toml.exists():
        return project_toml

    user_toml = Path.home() / ".tracewire" / "config.toml"
    if user_toml.exists():
        return user_toml

    return None


def load_toml_config(path) -> Dict[str, Any]:
    """
    Load a TOML configuration file.

    Returns:
        Nested configuration dictionary, empty if the file does not exist

    Raises:
        ConfigError: If the file is not valid TOML
    """
    path = Path(path)
    if not path.exists():
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError("Invalid TOML config file", {"path": str(path), "error": str(exc)}) from exc


def load_env_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect TRACEWIRE_* environment variables into a nested dict."""
    environ = os.environ if environ is None else environ
    result: Dict[str, Any] = {}
    for var, (section, key) in ENV_VARS.items():
        value = environ.get(var)
        if value is not None and value != "":
            result.setdefault(section, {})[key] = value
    return result


def _merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _merge(dict(merged[key]), value)
        else:
            merged[key] = value
    return merged


def validate_config(data: Mapping[str, Any]) -> TracewireConfig:
    """
    Validate a nested configuration dict.

    Raises:
        ConfigError: If any value is missing, of the wrong type or out of range
    """
    try:
        return TracewireConfig.model_validate(dict(data))
    except PydanticValidationError as exc:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigError("Invalid configuration", {"errors": errors}) from exc


def load_config(
    config_file: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> TracewireConfig:
    """
    Build the effective configuration.

    Priority: overrides > environment variables > config file > defaults.
    Overrides may be flat init() keywords (e.g. ``sample_rate``) or nested
    sections.
    """
    path = Path(config_file) if config_file else find_config_file()
    data: Dict[str, Any] = load_toml_config(path) if path else {}
    data = _merge(data, load_env_config())

    nested: Dict[str, Any] = {}
    for key, value in (overrides or {}).items():
        if value is None:
            continue
        section = OVERRIDE_SECTIONS.get(key)
        if section is not None:
            nested.setdefault(section, {})[key] = value
        else:
            nested[key] = value
    data = _merge(data, nested)

    return validate_config(data)
