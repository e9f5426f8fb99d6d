"""CLI entry points for cluster_addons."""
