"""Init command for writing a starter configuration file."""

from __future__ import annotations

import structlog
import typer
from rich.console import Console
from rich.panel import Panel

from cluster_addons.core.config.models import (
    CONFIG_DIR,
    CONFIG_FILE,
    SystemConfig,
)

app = typer.Typer(help="Initialize the addons configuration.")
console = Console()
logger = structlog.get_logger()


@app.callback(invoke_without_command=True)
def init(
    ctx: typer.Context,
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite existing configuration.",
    ),
) -> None:
    """Write a default configuration to ~/.config/addons/config.yaml."""
    if ctx.invoked_subcommand is not None:
        return

    logger.info("initializing_config", path=str(CONFIG_FILE))

    CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    if CONFIG_FILE.exists() and not force:
        console.print(f"[yellow]Configuration already exists at {CONFIG_FILE}[/yellow]")
        console.print("Use --force to overwrite.")
        raise typer.Exit(code=1)

    config = SystemConfig()
    CONFIG_FILE.write_text(config.to_yaml())

    console.print(
        Panel(
            f"[green]Configuration initialized successfully![/green]\n\n"
            f"Configuration created at: {CONFIG_FILE}\n\n"
            f"Next steps:\n"
            f"  1. Set plugins.addons.kubernetes if you don't use the current kube context\n"
            f"  2. Run [bold]addons status[/bold] to check helm and cluster access\n"
            f"  3. Run [bold]addons create flagger[/bold]",
            title="addons init",
            border_style="green",
        )
    )

    logger.info("config_initialized", config_file=str(CONFIG_FILE))
