"""Configuration models and loaders.

The CLI reads a single YAML file from ``~/.config/addons/config.yaml``.
Top-level keys are validated by :class:`SystemConfig`; plugin sections
under ``plugins.<name>`` are passed raw to each plugin, which validates
them with its own models.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

# XDG-compliant config location
CONFIG_DIR = Path.home() / ".config" / "addons"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_ENVIRONMENTS = ("development", "staging", "production")

CONFIG_HEADER = """\
# Cluster Addons CLI Configuration
#
# Plugin settings live under plugins.<name>. Example for the addons plugin:
#
# plugins:
#   addons:
#     kubernetes:
#       active_cluster: staging
#       clusters:
#         staging:
#           context: staging-admin
#     flagger:
#       environments:
#         production: jx-production
#
"""


class ProfileConfig(BaseModel):
    """Per-profile runtime settings."""

    model_config = ConfigDict(extra="forbid")

    debug: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and validate the log level name."""
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level '{v}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        return level


class PluginsConfig(BaseModel):
    """Plugin selection plus free-form per-plugin sections."""

    model_config = ConfigDict(extra="allow")

    enabled: list[str] = Field(default_factory=lambda: ["addons"])

    def section(self, name: str) -> dict[str, Any]:
        """Return the raw configuration section for a plugin."""
        extra = self.model_extra or {}
        value = extra.get(name)
        return value if isinstance(value, dict) else {}


class SystemConfig(BaseModel):
    """Root configuration document."""

    model_config = ConfigDict(extra="forbid")

    version: str = "1.0"
    environment: str = "development"
    profiles: dict[str, ProfileConfig] = Field(
        default_factory=lambda: {"default": ProfileConfig()}
    )
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate the environment name."""
        if v not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {', '.join(VALID_ENVIRONMENTS)}"
            )
        return v

    def to_yaml(self) -> str:
        """Serialize to YAML with a commented header."""
        body = yaml.safe_dump(self.model_dump(mode="json"), sort_keys=False)
        return CONFIG_HEADER + body


def load_config(path: Path | None = None) -> SystemConfig | None:
    """Load and validate the configuration file.

    Args:
        path: Config file path. Defaults to CONFIG_FILE.

    Returns:
        The parsed config, or None when the file does not exist.

    Raises:
        ValueError: If the file is not valid YAML or fails validation.
    """
    config_path = path or CONFIG_FILE
    if not config_path.exists():
        return None

    try:
        data = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    return SystemConfig.model_validate(data)


def load_raw_config(path: Path | None = None) -> dict[str, Any]:
    """Load the configuration file without validation.

    Used at CLI start-up to hand plugin sections to plugins. Unreadable
    files yield an empty dict so a broken config never blocks ``--help``.
    """
    config_path = path or CONFIG_FILE
    if not config_path.exists():
        return {}

    try:
        data = yaml.safe_load(config_path.read_text())
    except (yaml.YAMLError, OSError):
        return {}

    return data if isinstance(data, dict) else {}
