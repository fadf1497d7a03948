# src/pretraffic_gate/core/__init__.py
# Core configuration for the pre-traffic gate.

from pretraffic_gate.core.config import (
    ConsistencySettings,
    GateConfig,
    clear_config_cache,
    load_config,
)

__all__ = [
    "ConsistencySettings",
    "GateConfig",
    "clear_config_cache",
    "load_config",
]
