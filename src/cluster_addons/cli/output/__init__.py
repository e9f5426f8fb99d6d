"""Shared CLI output helpers.

Usage:
    from cluster_addons.cli.output import Table

    table = Table(title="Flagger")
    table.add_column("Step", style="cyan")
    table.add_column("Result")
    console.print(table)
"""

from cluster_addons.cli.output.table import Table

__all__ = ["Table"]
