"""Shared options and error handling for add-on commands."""

from __future__ import annotations

from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from cluster_addons.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConnectionError,
)
from cluster_addons.integrations.kubernetes.helm_client import HelmBinaryNotFoundError
from cluster_addons.plugins.addons.formatters import OutputFormat

# Shared console instances; step progress is printed to stderr
console = Console()
err_console = Console(stderr=True)


# =============================================================================
# Common Typer Option Annotations
# =============================================================================

OutputOption = Annotated[
    OutputFormat,
    typer.Option(
        "--output",
        "-o",
        help="Output format: table, json, or yaml",
        case_sensitive=False,
    ),
]

NamespaceOption = Annotated[
    str,
    typer.Option(
        "--namespace",
        "-n",
        help="Namespace to install the add-on into",
    ),
]

ReleaseOption = Annotated[
    str,
    typer.Option(
        "--release",
        "-r",
        help="Helm release name",
    ),
]

EnvironmentOption = Annotated[
    str,
    typer.Option(
        "--environment",
        "-e",
        help="Environment whose namespace gets Istio sidecar injection (empty to skip)",
    ),
]

DevNamespaceOption = Annotated[
    str,
    typer.Option(
        "--dev-namespace",
        help="Namespace holding the Jenkins X Environment resources",
    ),
]


# =============================================================================
# Error Handling
# =============================================================================

_HINTS: list[tuple[type[Exception], str]] = [
    (
        HelmBinaryNotFoundError,
        "Install helm or point ADDONS_HELM_BINARY at it.",
    ),
    (
        KubernetesConnectionError,
        "Check that your kubeconfig is valid and the cluster is reachable.",
    ),
    (
        KubernetesAuthError,
        "Check your credentials or RBAC permissions.",
    ),
]


def _cause_chain(error: BaseException) -> list[BaseException]:
    chain = [error]
    while chain[-1].__cause__ is not None:
        chain.append(chain[-1].__cause__)
    return chain


def report_progress(message: str) -> None:
    """Print one step of an add-on run."""
    err_console.print(escape(message), soft_wrap=True)


def handle_addon_error(error: Exception) -> NoReturn:
    """Print an add-on failure and exit.

    The whole cause chain is on one line, e.g.
    ``Error: Flagger deployment failed: Helm command failed: ...``.

    Raises:
        typer.Exit: Always exits with code 1.
    """
    console.print(f"[red]Error:[/red] {escape(str(error))}", soft_wrap=True)

    chain = _cause_chain(error)
    for error_type, hint in _HINTS:
        if any(isinstance(e, error_type) for e in chain):
            console.print(f"\n[dim]Hint: {hint}[/dim]")
            break

    raise typer.Exit(1)
