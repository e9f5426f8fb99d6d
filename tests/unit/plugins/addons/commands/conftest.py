"""Shared fixtures for add-on command tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import typer
from typer.testing import CliRunner

from cluster_addons.plugins.addons.commands import register_flagger_commands
from cluster_addons.plugins.addons.config import FlaggerDefaults
from cluster_addons.services.addons.models import FlaggerInstallResult, FlaggerRemoveResult


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def mock_flagger_addon() -> MagicMock:
    """Create a mock FlaggerAddon returning a complete run."""
    addon = MagicMock()
    addon.install.return_value = FlaggerInstallResult(
        namespace="istio-system",
        repo_name="flagger",
        releases=["flagger", "flagger-grafana"],
        istio_namespace="jx-production",
        gateway="jx-gateway",
        gateway_created=True,
    )
    addon.remove.return_value = FlaggerRemoveResult(
        namespace="istio-system",
        releases=["flagger", "flagger-grafana"],
        istio_namespace="jx-production",
    )
    return addon


@pytest.fixture
def flagger_defaults() -> FlaggerDefaults:
    """Default option values."""
    return FlaggerDefaults()


@pytest.fixture
def app(mock_flagger_addon: MagicMock, flagger_defaults: FlaggerDefaults) -> typer.Typer:
    """Create a test app with create/delete groups holding the Flagger commands."""
    app = typer.Typer()
    create_app = typer.Typer()
    delete_app = typer.Typer()
    register_flagger_commands(
        create_app, delete_app, lambda: mock_flagger_addon, flagger_defaults
    )
    app.add_typer(create_app, name="create")
    app.add_typer(delete_app, name="delete")
    return app
