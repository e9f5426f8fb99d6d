"""Plugin manager for discovering, loading and wiring plugins."""

from __future__ import annotations

import importlib.metadata
from typing import TYPE_CHECKING, Any

import pluggy
import structlog

from cluster_addons.core.plugins.base import PROJECT_NAME, Plugin, _PluginSpec

if TYPE_CHECKING:
    import typer

logger = structlog.get_logger()


class PluginManager:
    """Manages plugin discovery, loading, and lifecycle.

    Built-in plugins are registered directly with :meth:`register`;
    third-party plugins are loaded from the ``cluster_addons.plugins``
    entry point group.
    """

    NAMESPACE = "cluster_addons.plugins"

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(_PluginSpec)
        self._plugins: dict[str, Plugin] = {}
        self._initialized = False

    def register(self, plugin: Plugin) -> None:
        """Register an already constructed plugin instance."""
        if plugin.name in self._plugins:
            logger.debug("plugin_already_registered", name=plugin.name)
            return
        self._pm.register(plugin, name=plugin.name)
        self._plugins[plugin.name] = plugin
        logger.debug("plugin_registered", name=plugin.name, version=plugin.version)

    def load_plugin(self, name: str) -> bool:
        """Load a plugin by entry point name.

        Returns:
            True if the plugin is loaded (now or previously), False otherwise.
        """
        if name in self._plugins:
            return True

        try:
            for ep in importlib.metadata.entry_points(group=self.NAMESPACE):
                if ep.name == name:
                    plugin_class = ep.load()
                    plugin = plugin_class() if callable(plugin_class) else plugin_class
                    self.register(plugin)
                    logger.info("plugin_loaded", name=name, version=plugin.version)
                    return True

            logger.warning("plugin_not_found", name=name)
            return False
        except Exception as e:
            logger.error("plugin_load_failed", name=name, error=str(e))
            return False

    def initialize_all(self, config: dict[str, Any]) -> None:
        """Initialize every registered plugin with its config section.

        Args:
            config: Raw configuration document; sections are read from
                ``config["plugins"][<plugin name>]``.
        """
        plugins_section = config.get("plugins") or {}
        for name, plugin in self._plugins.items():
            plugin_config = plugins_section.get(name) or {}
            try:
                plugin.initialize(plugin_config)
                logger.debug("plugin_initialized", name=name)
            except Exception as e:
                logger.error("plugin_initialize_failed", name=name, error=str(e))

        self._initialized = True

    def register_commands(self, app: typer.Typer) -> None:
        """Let every registered plugin add its commands to ``app``."""
        self._pm.hook.register_commands(app=app)

    def cleanup_all(self) -> None:
        """Cleanup all registered plugins."""
        try:
            self._pm.hook.cleanup()
        except Exception as e:
            logger.error("plugin_cleanup_failed", error=str(e))
        self._initialized = False
