"""Output formatters for add-on command results.

Results render as a two-column rich table, or as JSON / YAML documents
for scripting.
"""

from __future__ import annotations

import json
from enum import StrEnum
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape

from cluster_addons.cli.output import Table


class OutputFormat(StrEnum):
    """Supported output formats for CLI commands."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


def _format_value(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) if value else "-"
    if isinstance(value, bool):
        return "[green]yes[/green]" if value else "no"
    if value is None:
        return "[dim]-[/dim]"
    return escape(str(value))


def format_dict(
    data: dict[str, Any],
    output: OutputFormat,
    console: Console,
    title: str = "",
) -> None:
    """Print ``data`` in the requested format."""
    if output == OutputFormat.JSON:
        console.print_json(json.dumps(data, default=str))
        return
    if output == OutputFormat.YAML:
        console.print(
            escape(yaml.safe_dump(data, default_flow_style=False, sort_keys=False)),
            end="",
            soft_wrap=True,
        )
        return

    table = Table(title=title, show_header=True)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    for key, value in data.items():
        table.add_row(key.replace("_", " ").title(), _format_value(value))
    console.print(table)
