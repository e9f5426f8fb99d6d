"""Plugin contract using pluggy hook specifications."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    import typer

PROJECT_NAME = "cluster_addons"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class _PluginSpec:
    """Hooks every plugin may implement."""

    @hookspec
    def initialize(self, config: dict[str, Any]) -> None:
        """Initialize the plugin with its configuration section.

        Args:
            config: Plugin-specific configuration dictionary.
        """

    @hookspec
    def register_commands(self, app: typer.Typer) -> None:
        """Register CLI commands with the root application.

        Args:
            app: The root Typer application.
        """

    @hookspec
    def cleanup(self) -> None:
        """Release plugin resources on shutdown."""


class Plugin:
    """Base class for plugins.

    Subclasses must set ``name`` and ``version`` and usually override
    :meth:`on_initialize` and :meth:`register_commands`.
    """

    name: str = "base"
    version: str = "0.0.0"
    description: str = ""

    def __init__(self) -> None:
        if self.name == "base":
            raise ValueError(f"{self.__class__.__name__} must define 'name' class attribute")
        if self.version == "0.0.0":
            raise ValueError(f"{self.__class__.__name__} must define 'version' class attribute")
        self._config: dict[str, Any] = {}
        self._initialized: bool = False

    @hookimpl
    def initialize(self, config: dict[str, Any]) -> None:
        """Store configuration and run subclass initialization."""
        self._config = config
        self._initialized = True
        self.on_initialize()

    def on_initialize(self) -> None:
        """Hook for subclasses to perform initialization logic."""

    @hookimpl
    def register_commands(self, app: typer.Typer) -> None:
        """Register CLI commands. Override in subclasses."""

    @hookimpl
    def cleanup(self) -> None:
        """Cleanup resources. Override in subclasses."""
        self._initialized = False

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        return self._config.get(key, default)

    @property
    def is_initialized(self) -> bool:
        """Check if the plugin is initialized."""
        return self._initialized
