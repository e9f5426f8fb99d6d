"""Unit tests for the Flagger commands."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
import typer
from typer.testing import CliRunner

from cluster_addons.integrations.kubernetes.exceptions import KubernetesConnectionError
from cluster_addons.integrations.kubernetes.helm_client import (
    HelmBinaryNotFoundError,
    HelmCommandError,
)
from cluster_addons.plugins.addons.commands import register_flagger_commands
from cluster_addons.plugins.addons.commands.base import report_progress
from cluster_addons.plugins.addons.config import FlaggerDefaults
from cluster_addons.services.addons.exceptions import AddonError
from cluster_addons.services.addons.flagger import FlaggerAddon
from cluster_addons.services.addons.models import FlaggerAddonOptions, FlaggerRemoveOptions


@pytest.mark.unit
class TestCreateFlagger:
    """Tests for ``create flagger``."""

    def test_defaults(
        self,
        cli_runner: CliRunner,
        app: typer.Typer,
        mock_flagger_addon: MagicMock,
    ) -> None:
        result = cli_runner.invoke(app, ["create", "flagger"])

        assert result.exit_code == 0
        assert "Flagger Installed" in result.output
        mock_flagger_addon.install.assert_called_once_with(FlaggerAddonOptions())

    def test_all_options(
        self,
        cli_runner: CliRunner,
        app: typer.Typer,
        mock_flagger_addon: MagicMock,
    ) -> None:
        result = cli_runner.invoke(
            app,
            [
                "create",
                "flagger",
                "-n",
                "flagger-system",
                "-r",
                "canary",
                "-v",
                "0.12.0",
                "-c",
                "myrepo/flagger",
                "--grafana-chart",
                "myrepo/grafana",
                "-s",
                "meshProvider=istio,slack.channel=canary",
                "-f",
                "base.yaml",
                "-f",
                "prod.yaml",
                "--no-helm-update",
                "-e",
                "staging",
                "--istio-gateway",
                "canary-gateway",
                "--dev-namespace",
                "cd",
            ],
        )

        assert result.exit_code == 0
        options = mock_flagger_addon.install.call_args.args[0]
        assert options.namespace == "flagger-system"
        assert options.release_name == "canary"
        assert options.version == "0.12.0"
        assert options.chart == "myrepo/flagger"
        assert options.grafana_chart == "myrepo/grafana"
        assert options.set_values == "meshProvider=istio,slack.channel=canary"
        assert options.values_files == ["base.yaml", "prod.yaml"]
        assert options.helm_update is False
        assert options.production_environment == "staging"
        assert options.istio_gateway == "canary-gateway"
        assert options.dev_namespace == "cd"

    def test_empty_strings_skip_steps(
        self,
        cli_runner: CliRunner,
        app: typer.Typer,
        mock_flagger_addon: MagicMock,
    ) -> None:
        result = cli_runner.invoke(
            app, ["create", "flagger", "--environment", "", "--istio-gateway", ""]
        )

        assert result.exit_code == 0
        options = mock_flagger_addon.install.call_args.args[0]
        assert options.production_environment == ""
        assert options.istio_gateway == ""

    def test_json_output(self, cli_runner: CliRunner, app: typer.Typer) -> None:
        result = cli_runner.invoke(app, ["create", "flagger", "-o", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["releases"] == ["flagger", "flagger-grafana"]
        assert data["istio_injection_namespace"] == "jx-production"
        assert data["gateway_created"] is True

    def test_config_defaults(self, cli_runner: CliRunner, mock_flagger_addon: MagicMock) -> None:
        app = typer.Typer()
        create_app = typer.Typer()
        delete_app = typer.Typer()
        defaults = FlaggerDefaults(
            version="0.12.0",
            repo_url="https://charts.example.com/flagger",
            repo_name="mirror",
        )
        register_flagger_commands(create_app, delete_app, lambda: mock_flagger_addon, defaults)
        app.add_typer(create_app, name="create")
        app.add_typer(delete_app, name="delete")

        result = cli_runner.invoke(app, ["create", "flagger"])

        assert result.exit_code == 0
        options = mock_flagger_addon.install.call_args.args[0]
        assert options.version == "0.12.0"
        assert options.repo_url == "https://charts.example.com/flagger"
        assert options.repo_name == "mirror"

    def test_step_failure(
        self,
        cli_runner: CliRunner,
        app: typer.Typer,
        mock_flagger_addon: MagicMock,
    ) -> None:
        cause = HelmCommandError("Helm command failed: chart not found")
        mock_flagger_addon.install.side_effect = AddonError(
            "Flagger Grafana deployment failed", cause
        )

        result = cli_runner.invoke(app, ["create", "flagger"])

        assert result.exit_code == 1
        assert (
            "Error: Flagger Grafana deployment failed: Helm command failed: chart not found"
            in result.output
        )

    def test_missing_chart_with_real_addon(self, cli_runner: CliRunner) -> None:
        helm = MagicMock()
        addon = FlaggerAddon(helm, MagicMock(), MagicMock(), MagicMock())
        app = typer.Typer()
        create_app = typer.Typer()
        register_flagger_commands(create_app, typer.Typer(), lambda: addon, FlaggerDefaults())
        app.add_typer(create_app, name="create")

        result = cli_runner.invoke(app, ["create", "flagger", "--chart", ""])

        assert result.exit_code == 1
        assert "missing option: --chart" in result.output
        helm.ensure_helm.assert_not_called()

    def test_connection_failure(
        self, cli_runner: CliRunner, flagger_defaults: FlaggerDefaults
    ) -> None:
        def _no_cluster() -> MagicMock:
            raise KubernetesConnectionError("Failed to load Kubernetes configuration")

        app = typer.Typer()
        create_app = typer.Typer()
        register_flagger_commands(create_app, typer.Typer(), _no_cluster, flagger_defaults)
        app.add_typer(create_app, name="create")

        result = cli_runner.invoke(app, ["create", "flagger"])

        assert result.exit_code == 1
        assert "Failed to load Kubernetes configuration" in result.output
        assert "kubeconfig" in result.output

    def test_missing_chart_reported_before_connecting(
        self, cli_runner: CliRunner, flagger_defaults: FlaggerDefaults
    ) -> None:
        get_addon = MagicMock(side_effect=KubernetesConnectionError("no kubeconfig"))
        app = typer.Typer()
        create_app = typer.Typer()
        register_flagger_commands(create_app, typer.Typer(), get_addon, flagger_defaults)
        app.add_typer(create_app, name="create")

        result = cli_runner.invoke(app, ["create", "flagger", "--chart", ""])

        assert result.exit_code == 1
        assert "missing option: --chart" in result.output
        assert "no kubeconfig" not in result.output
        get_addon.assert_not_called()

    def test_progress_kept_out_of_json_stdout(self, cli_runner: CliRunner) -> None:
        helm = MagicMock()
        helm.add_repo_if_missing.return_value = "flagger"
        environments = MagicMock()
        environments.find_environment_namespace.return_value = "jx-production"
        addon = FlaggerAddon(
            helm, MagicMock(), MagicMock(), environments, progress_callback=report_progress
        )
        app = typer.Typer()
        create_app = typer.Typer()
        register_flagger_commands(create_app, typer.Typer(), lambda: addon, FlaggerDefaults())
        app.add_typer(create_app, name="create")

        result = cli_runner.invoke(app, ["create", "flagger", "-o", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["releases"] == ["flagger", "flagger-grafana"]
        assert "Enabling Istio in namespace jx-production" in result.stderr
        assert "Istio gateway already exists: jx-gateway" in result.stderr


@pytest.mark.unit
class TestDeleteFlagger:
    """Tests for ``delete flagger``."""

    def test_defaults(
        self,
        cli_runner: CliRunner,
        app: typer.Typer,
        mock_flagger_addon: MagicMock,
    ) -> None:
        result = cli_runner.invoke(app, ["delete", "flagger"])

        assert result.exit_code == 0
        assert "Deleted releases flagger, flagger-grafana" in result.output
        assert "Istio injection disabled in namespace 'jx-production'" in result.output
        mock_flagger_addon.remove.assert_called_once_with(FlaggerRemoveOptions())

    def test_purge(
        self,
        cli_runner: CliRunner,
        app: typer.Typer,
        mock_flagger_addon: MagicMock,
    ) -> None:
        result = cli_runner.invoke(
            app, ["delete", "flagger", "--purge", "-r", "canary", "-e", ""]
        )

        assert result.exit_code == 0
        options = mock_flagger_addon.remove.call_args.args[0]
        assert options.purge is True
        assert options.release_name == "canary"
        assert options.production_environment == ""

    def test_failure_hint(
        self,
        cli_runner: CliRunner,
        app: typer.Typer,
        mock_flagger_addon: MagicMock,
    ) -> None:
        cause = HelmBinaryNotFoundError()
        error = AddonError("failed to ensure that Helm is present", cause)
        error.__cause__ = cause
        mock_flagger_addon.remove.side_effect = error

        result = cli_runner.invoke(app, ["delete", "flagger"])

        assert result.exit_code == 1
        assert "failed to ensure that Helm is present" in result.output
        assert "ADDONS_HELM_BINARY" in result.output

    def test_missing_release_reported_before_connecting(
        self, cli_runner: CliRunner, flagger_defaults: FlaggerDefaults
    ) -> None:
        get_addon = MagicMock(side_effect=KubernetesConnectionError("no kubeconfig"))
        app = typer.Typer()
        delete_app = typer.Typer()
        register_flagger_commands(typer.Typer(), delete_app, get_addon, flagger_defaults)
        app.add_typer(delete_app, name="delete")

        result = cli_runner.invoke(app, ["delete", "flagger", "-r", ""])

        assert result.exit_code == 1
        assert "missing option: --release" in result.output
        get_addon.assert_not_called()
