"""Add-on CLI commands."""

from cluster_addons.plugins.addons.commands.flagger import register_flagger_commands

__all__ = ["register_flagger_commands"]
