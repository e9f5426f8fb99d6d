"""Logging configuration for cluster_addons."""

from cluster_addons.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
