"""Main CLI entry point using Typer."""

from __future__ import annotations

import typer
from rich.console import Console

from cluster_addons import __version__
from cluster_addons.cli.commands import init, status
from cluster_addons.core.config import load_raw_config
from cluster_addons.core.plugins import PluginManager
from cluster_addons.logging.config import configure_logging
from cluster_addons.plugins.addons import AddonsPlugin

app = typer.Typer(
    name="addons",
    help="Install and remove Kubernetes cluster add-ons.",
    add_completion=True,
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"addons version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Render console log lines as JSON.",
    ),
) -> None:
    """Cluster add-ons CLI - install Flagger and friends with one command."""
    configure_logging(verbose=verbose, debug=debug, json_output=json_logs)
    ctx.call_on_close(plugin_manager.cleanup_all)


def load_plugins(root: typer.Typer) -> PluginManager:
    """Register built-in and entry point plugins and their commands.

    Runs at import time, before the root callback, so logging gets its
    default setup here; the callback reapplies it with the chosen verbosity.
    """
    configure_logging()
    manager = PluginManager()
    manager.register(AddonsPlugin())

    config = load_raw_config()
    enabled = (config.get("plugins") or {}).get("enabled") or []
    for name in enabled:
        manager.load_plugin(name)

    manager.initialize_all(config)
    manager.register_commands(root)
    return manager


# Register subcommands
app.add_typer(init.app, name="init")
app.command()(status.status)
plugin_manager = load_plugins(app)


if __name__ == "__main__":
    app()
