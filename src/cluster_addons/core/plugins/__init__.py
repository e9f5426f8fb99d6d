"""Plugin system built on pluggy."""

from cluster_addons.core.plugins.base import Plugin, hookimpl, hookspec
from cluster_addons.core.plugins.manager import PluginManager

__all__ = ["Plugin", "PluginManager", "hookimpl", "hookspec"]
