"""Addons plugin implementation.

Adds the ``create`` and ``delete`` command groups and wires the Flagger
installer to a Kubernetes client and the Helm CLI. Clients are built on
first command use, so ``--help`` works without a cluster.
"""

from __future__ import annotations

import structlog
import typer
from pydantic import ValidationError

from cluster_addons.core.plugins.base import Plugin, hookimpl
from cluster_addons.integrations.kubernetes.client import KubernetesClient
from cluster_addons.plugins.addons.commands import register_flagger_commands
from cluster_addons.plugins.addons.commands.base import report_progress
from cluster_addons.plugins.addons.config import AddonsPluginConfig
from cluster_addons.services.addons.flagger import FlaggerAddon
from cluster_addons.services.kubernetes import (
    EnvironmentManager,
    HelmManager,
    IstioManager,
    NamespaceManager,
)

logger = structlog.get_logger()


class AddonsPlugin(Plugin):
    """Cluster add-on installation plugin."""

    name = "addons"
    version = "0.1.0"
    description = "Install and remove cluster add-ons such as Flagger"

    def __init__(self) -> None:
        super().__init__()
        self._plugin_config: AddonsPluginConfig | None = None
        self._client: KubernetesClient | None = None
        self._addon: FlaggerAddon | None = None

    def on_initialize(self) -> None:
        """Parse the plugin configuration with environment overrides."""
        try:
            self._plugin_config = AddonsPluginConfig.from_env(self._config or {})
        except ValidationError as e:
            logger.error("addons_plugin_config_invalid", error=str(e))
            raise

        logger.debug(
            "addons_plugin_initialized",
            helm_binary=self._plugin_config.helm_binary or "PATH",
            context=self._plugin_config.kubernetes.get_active_context() or "current-context",
        )

    @property
    def plugin_config(self) -> AddonsPluginConfig:
        """Parsed configuration, falling back to defaults plus environment."""
        if self._plugin_config is None:
            self._plugin_config = AddonsPluginConfig.from_env()
        return self._plugin_config

    def get_flagger_addon(self) -> FlaggerAddon:
        """Build (once) the Flagger installer and the clients it needs.

        Raises:
            KubernetesConnectionError: If no Kubernetes configuration loads.
        """
        if self._addon is None:
            config = self.plugin_config
            self._client = KubernetesClient(config.kubernetes)
            self._addon = FlaggerAddon(
                helm=HelmManager(self._client, binary_path=config.helm_binary),
                namespaces=NamespaceManager(self._client),
                istio=IstioManager(self._client),
                environments=EnvironmentManager(
                    self._client, environments=config.flagger.environments
                ),
                progress_callback=report_progress,
            )
        return self._addon

    @hookimpl
    def register_commands(self, app: typer.Typer) -> None:
        """Register the ``create`` and ``delete`` command groups."""
        create_app = typer.Typer(
            name="create",
            help="Create cluster add-ons",
            no_args_is_help=True,
        )
        delete_app = typer.Typer(
            name="delete",
            help="Delete cluster add-ons",
            no_args_is_help=True,
        )

        register_flagger_commands(
            create_app,
            delete_app,
            self.get_flagger_addon,
            self.plugin_config.flagger,
        )

        app.add_typer(create_app, name="create")
        app.add_typer(delete_app, name="delete")
        logger.debug("addons_commands_registered")

    @hookimpl
    def cleanup(self) -> None:
        """Close the Kubernetes client."""
        if self._client is not None:
            self._client.close()
            self._client = None
        self._addon = None
        super().cleanup()
