# src/pretraffic_gate/core/config.py
# Configuration management for the pre-traffic gate.
"""
Configuration models and loading utilities.

Settings are resolved in three layers, later layers winning:
1. Model defaults (match the values the Lambda functions have always used)
2. An optional YAML file (.ptgate.yaml)
3. Environment variables set on the Lambda function
"""

import os
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from pretraffic_gate.errors import ConfigError
from pretraffic_gate.models import PROBE_ISBN

DEFAULT_FUNCTION_NAME = "books-create"
DEFAULT_TABLE_NAME = "books"
LOCAL_DYNAMODB_ENDPOINT = "http://dynamodb:8000"

_TRUTHY = {"1", "true", "yes", "on"}
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConsistencySettings(BaseModel):
    """How long to wait, and how often to re-read, before giving up on the probe."""

    initial_delay: float = Field(default=1.5, ge=0, description="Seconds before first read")
    backoff_factor: float = Field(default=2.0, ge=1, description="Delay multiplier per miss")
    max_attempts: int = Field(default=3, ge=1, description="Reads before giving up")
    max_delay: float = Field(default=10.0, ge=0, description="Cap on a single delay")


class GateConfig(BaseModel):
    """Pre-traffic gate configuration model."""

    function_name: str = Field(
        default=DEFAULT_FUNCTION_NAME,
        min_length=1,
        description="Function version or alias under test",
    )
    table_name: str = Field(default=DEFAULT_TABLE_NAME, min_length=1)
    probe_isbn: str = Field(default=PROBE_ISBN, min_length=1)
    consistency: ConsistencySettings = Field(default_factory=ConsistencySettings)
    strict_cleanup: bool = Field(
        default=True,
        description="Fail the verdict when the probe record cannot be deleted",
    )
    sam_local: bool = Field(default=False, description="Running under SAM local")
    local_endpoint: str = Field(default=LOCAL_DYNAMODB_ENDPOINT)
    region: Optional[str] = Field(default=None)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level

    @property
    def store_endpoint(self) -> Optional[str]:
        return self.local_endpoint if self.sam_local else None


def _flag(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def _seconds(value: str) -> float:
    return float(value) / 1000.0


def env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Translate Lambda environment variables into config fields."""
    data: dict[str, Any] = {}
    consistency: dict[str, Any] = {}

    simple = {
        "FN_NEW_VERSION": "function_name",
        "TABLE": "table_name",
        "PROBE_ISBN": "probe_isbn",
        "LOG_LEVEL": "log_level",
    }
    for var, key in simple.items():
        if environ.get(var):
            data[key] = environ[var]

    if environ.get("STRICT_CLEANUP"):
        data["strict_cleanup"] = _flag(environ["STRICT_CLEANUP"])
    # SAM sets AWS_SAM_LOCAL=true when running functions locally
    if environ.get("AWS_SAM_LOCAL"):
        data["sam_local"] = _flag(environ["AWS_SAM_LOCAL"])

    region = environ.get("AWS_REGION") or environ.get("AWS_DEFAULT_REGION")
    if region:
        data["region"] = region

    try:
        if environ.get("WAIT_INITIAL_MS"):
            consistency["initial_delay"] = _seconds(environ["WAIT_INITIAL_MS"])
        if environ.get("WAIT_MAX_MS"):
            consistency["max_delay"] = _seconds(environ["WAIT_MAX_MS"])
        if environ.get("WAIT_BACKOFF_FACTOR"):
            consistency["backoff_factor"] = float(environ["WAIT_BACKOFF_FACTOR"])
        if environ.get("WAIT_MAX_ATTEMPTS"):
            consistency["max_attempts"] = int(environ["WAIT_MAX_ATTEMPTS"])
    except ValueError as e:
        raise ConfigError(f"Invalid wait setting in environment: {e}") from e

    if consistency:
        data["consistency"] = consistency
    return data


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# Global config cache
_cached_config: Optional[GateConfig] = None
_config_path: Optional[Path] = None


def _find_config_file(path: Optional[Path]) -> Optional[Path]:
    search_paths = []
    if path:
        search_paths.append(path)
    search_paths.extend([
        Path(".ptgate.yaml"),
        Path.home() / ".ptgate.yaml",
    ])
    for p in search_paths:
        if p.exists():
            return p
    return None


def load_config(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> GateConfig:
    """
    Load gate configuration.

    Searches for a YAML config in order:
    1. Specified path
    2. Current directory (.ptgate.yaml)
    3. Home directory (~/.ptgate.yaml)

    Environment variables are applied on top of whatever the file provides.
    Results are cached when read from the process environment.
    """
    global _cached_config, _config_path

    use_cache = environ is None
    if use_cache and _cached_config and (path is None or path == _config_path):
        return _cached_config

    if path is not None and not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    config_file = _find_config_file(path)
    data: dict[str, Any] = {}
    if config_file:
        try:
            with open(config_file) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_file} must contain a mapping")

    data = _merge(data, env_overrides(os.environ if environ is None else environ))

    try:
        config = GateConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid gate configuration: {e}") from e

    if use_cache:
        _cached_config = config
        _config_path = config_file

    return config


def clear_config_cache() -> None:
    """Clear the cached configuration."""
    global _cached_config, _config_path
    _cached_config = None
    _config_path = None
