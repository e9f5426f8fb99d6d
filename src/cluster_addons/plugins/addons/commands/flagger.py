"""CLI commands for the Flagger add-on.

Registers ``create flagger`` and ``delete flagger``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Annotated

import typer

from cluster_addons.integrations.kubernetes.exceptions import KubernetesError
from cluster_addons.plugins.addons.commands.base import (
    DevNamespaceOption,
    EnvironmentOption,
    NamespaceOption,
    OutputOption,
    ReleaseOption,
    console,
    handle_addon_error,
)
from cluster_addons.plugins.addons.formatters import OutputFormat, format_dict
from cluster_addons.services.addons.exceptions import AddonError
from cluster_addons.services.addons.models import FlaggerAddonOptions, FlaggerRemoveOptions

if TYPE_CHECKING:
    from cluster_addons.plugins.addons.config import FlaggerDefaults
    from cluster_addons.services.addons.flagger import FlaggerAddon

# ---------------------------------------------------------------------------
# Flagger-specific options
# ---------------------------------------------------------------------------

VersionOption = Annotated[
    str,
    typer.Option(
        "--version",
        "-v",
        help="Chart version to install (empty for the latest)",
    ),
]

ChartOption = Annotated[
    str,
    typer.Option(
        "--chart",
        "-c",
        help="The name of the chart to use",
    ),
]

GrafanaChartOption = Annotated[
    str,
    typer.Option(
        "--grafana-chart",
        help="The name of the Flagger Grafana chart to use",
    ),
]

SetValuesOption = Annotated[
    str,
    typer.Option(
        "--set",
        "-s",
        help="Comma-separated chart overrides (e.g. 'meshProvider=istio,metricsServer=http://prometheus:9090')",
    ),
]

ValuesFilesOption = Annotated[
    list[str] | None,
    typer.Option(
        "--values",
        "-f",
        help="Values YAML file or URL (can specify multiple)",
    ),
]

HelmUpdateOption = Annotated[
    bool,
    typer.Option(
        "--helm-update/--no-helm-update",
        help="Update chart repositories before installing",
    ),
]

IstioGatewayOption = Annotated[
    str,
    typer.Option(
        "--istio-gateway",
        help="Istio Gateway to create if it does not exist (empty to skip)",
    ),
]

PurgeOption = Annotated[
    bool,
    typer.Option(
        "--purge/--keep-history",
        help="Remove release history instead of keeping it",
    ),
]


# ---------------------------------------------------------------------------
# Command registration
# ---------------------------------------------------------------------------


def register_flagger_commands(
    create_app: typer.Typer,
    delete_app: typer.Typer,
    get_addon: Callable[[], FlaggerAddon],
    defaults: FlaggerDefaults,
) -> None:
    """Register Flagger commands under the ``create`` and ``delete`` groups.

    Option defaults come from ``defaults`` so the config file can change them.
    """

    @create_app.command("flagger")
    def create_flagger(
        namespace: NamespaceOption = defaults.namespace,
        release: ReleaseOption = defaults.release_name,
        version: VersionOption = defaults.version,
        chart: ChartOption = defaults.chart,
        grafana_chart: GrafanaChartOption = defaults.grafana_chart,
        set_values: SetValuesOption = "",
        values_files: ValuesFilesOption = None,
        helm_update: HelmUpdateOption = defaults.helm_update,
        environment: EnvironmentOption = defaults.production_environment,
        istio_gateway: IstioGatewayOption = defaults.istio_gateway,
        dev_namespace: DevNamespaceOption = defaults.dev_namespace,
        output: OutputOption = OutputFormat.TABLE,
    ) -> None:
        """Create the Flagger addon for Canary deployments.

        Installs the Flagger and Flagger Grafana charts, enables Istio
        sidecar injection in the production environment's namespace and
        creates the Istio ingress gateway if it is missing.

        Examples:
            addons create flagger
            addons create flagger --version 0.12.0 -n istio-system
            addons create flagger --set meshProvider=istio,slack.channel=canary
            addons create flagger --environment "" --istio-gateway ""
        """
        options = FlaggerAddonOptions(
            namespace=namespace,
            release_name=release,
            version=version,
            chart=chart,
            grafana_chart=grafana_chart,
            set_values=set_values,
            values_files=values_files or [],
            helm_update=helm_update,
            production_environment=environment,
            istio_gateway=istio_gateway,
            dev_namespace=dev_namespace,
            repo_url=defaults.repo_url,
            repo_name=defaults.repo_name,
        )
        try:
            options.validate_required()
            addon = get_addon()
            result = addon.install(options)
        except (AddonError, KubernetesError) as e:
            handle_addon_error(e)

        data = {
            "namespace": result.namespace,
            "repository": result.repo_name,
            "releases": result.releases,
            "istio_injection_namespace": result.istio_namespace,
            "istio_gateway": result.gateway,
            "gateway_created": result.gateway_created,
        }
        format_dict(data, output, console, title="Flagger Installed")

    @delete_app.command("flagger")
    def delete_flagger(
        namespace: NamespaceOption = defaults.namespace,
        release: ReleaseOption = defaults.release_name,
        environment: EnvironmentOption = defaults.production_environment,
        dev_namespace: DevNamespaceOption = defaults.dev_namespace,
        purge: PurgeOption = False,
    ) -> None:
        """Delete the Flagger addon.

        Uninstalls the Flagger and Flagger Grafana releases and removes the
        Istio injection label from the production environment's namespace.
        The Istio gateway is kept.

        Examples:
            addons delete flagger
            addons delete flagger --purge
        """
        options = FlaggerRemoveOptions(
            namespace=namespace,
            release_name=release,
            production_environment=environment,
            dev_namespace=dev_namespace,
            purge=purge,
        )
        try:
            options.validate_required()
            addon = get_addon()
            result = addon.remove(options)
        except (AddonError, KubernetesError) as e:
            handle_addon_error(e)

        console.print(
            f"[green]Deleted releases {', '.join(result.releases)} "
            f"from namespace '{result.namespace}'[/green]"
        )
        if result.istio_namespace:
            console.print(f"Istio injection disabled in namespace '{result.istio_namespace}'")
