"""Cluster add-ons plugin: ``addons create`` and ``addons delete`` commands."""

from cluster_addons.plugins.addons.plugin import AddonsPlugin

__all__ = ["AddonsPlugin"]
