"""Status command: CLI, Helm and cluster readiness."""

from __future__ import annotations

import platform

import structlog
import typer
from rich.console import Console
from rich.markup import escape

from cluster_addons import __version__
from cluster_addons.cli.output import Table
from cluster_addons.core.config import load_config, load_raw_config
from cluster_addons.core.config.models import CONFIG_FILE
from cluster_addons.integrations.kubernetes.client import KubernetesClient
from cluster_addons.integrations.kubernetes.exceptions import KubernetesError
from cluster_addons.integrations.kubernetes.helm_client import HelmClient
from cluster_addons.plugins.addons.config import AddonsPluginConfig

console = Console()
logger = structlog.get_logger()


def _helm_row(config: AddonsPluginConfig) -> tuple[str, str]:
    try:
        version = HelmClient(config.helm_binary).get_version()
    except KubernetesError as e:
        return "[red]unavailable[/red]", escape(e.message)
    return version, config.helm_binary or "PATH"


def _cluster_rows(config: AddonsPluginConfig) -> list[tuple[str, str, str]]:
    try:
        client = KubernetesClient(config.kubernetes)
    except KubernetesError as e:
        return [("Kubernetes", "[red]unavailable[/red]", escape(e.message))]

    with client:
        connected = client.check_connection()
        rows = [
            ("Context", client.get_current_context(), f"namespace {client.default_namespace}"),
            (
                "Kubernetes",
                "[green]connected[/green]" if connected else "[red]unreachable[/red]",
                "",
            ),
        ]
        if connected:
            try:
                rows.append(("Cluster Version", client.get_cluster_version(), ""))
            except KubernetesError as e:
                rows.append(("Cluster Version", "unknown", escape(e.message)))
    return rows


def status(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed status information.",
    ),
) -> None:
    """Show whether helm and the Kubernetes cluster are usable."""
    logger.info("checking_status", verbose=verbose)

    raw = load_raw_config()
    section = (raw.get("plugins") or {}).get("addons") or {}
    config = AddonsPluginConfig.from_env(section)

    table = Table(title="Cluster Addons Status")
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Status", style="green")
    table.add_column("Details", style="dim")

    table.add_row("CLI Version", __version__, "addons")
    helm_status, helm_details = _helm_row(config)
    table.add_row("Helm", helm_status, helm_details)
    for row in _cluster_rows(config):
        table.add_row(*row)

    if verbose:
        table.add_row("Python", platform.python_version(), platform.python_implementation())
        table.add_row("Platform", platform.system(), platform.release())

    console.print(table)

    _print_config_status(verbose)

    logger.info("status_check_complete")


def _print_config_status(verbose: bool) -> None:
    try:
        system_config = load_config(CONFIG_FILE)
    except ValueError as e:
        console.print(f"\n[red]Configuration invalid:[/red] {CONFIG_FILE}")
        console.print(escape(str(e)), soft_wrap=True)
        return

    if system_config is not None:
        console.print(f"\n[green]Configuration valid:[/green] {CONFIG_FILE}")
        if verbose:
            console.print(f"  Environment: {system_config.environment}")
            enabled = ", ".join(system_config.plugins.enabled) or "none"
            console.print(f"  Plugins: {escape(enabled)}")
    else:
        console.print(
            "\n[yellow]No configuration found.[/yellow] Run [bold]addons init[/bold] to create one."
        )
