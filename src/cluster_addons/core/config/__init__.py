"""Configuration management with Pydantic validation."""

from cluster_addons.core.config.models import (
    PluginsConfig,
    ProfileConfig,
    SystemConfig,
    load_config,
    load_raw_config,
)

__all__ = [
    "PluginsConfig",
    "ProfileConfig",
    "SystemConfig",
    "load_config",
    "load_raw_config",
]
