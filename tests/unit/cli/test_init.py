"""Tests for the init command."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from cluster_addons.cli.main import app


@pytest.mark.unit
class TestInitCommand:
    """Test init command."""

    def test_init_creates_config(self, cli_runner: CliRunner, temp_dir: Path) -> None:
        config_dir = temp_dir / "addons"
        config_file = config_dir / "config.yaml"
        with (
            patch("cluster_addons.cli.commands.init.CONFIG_DIR", config_dir),
            patch("cluster_addons.cli.commands.init.CONFIG_FILE", config_file),
        ):
            result = cli_runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert "Configuration initialized successfully" in result.stdout
        data = yaml.safe_load(config_file.read_text())
        assert data["plugins"]["enabled"] == ["addons"]

    def test_init_refuses_to_overwrite(self, cli_runner: CliRunner, temp_config_file: Path) -> None:
        original = temp_config_file.read_text()
        with (
            patch("cluster_addons.cli.commands.init.CONFIG_DIR", temp_config_file.parent),
            patch("cluster_addons.cli.commands.init.CONFIG_FILE", temp_config_file),
        ):
            result = cli_runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "Configuration already exists" in result.stdout
        assert temp_config_file.read_text() == original

    def test_init_force(self, cli_runner: CliRunner, temp_config_file: Path) -> None:
        with (
            patch("cluster_addons.cli.commands.init.CONFIG_DIR", temp_config_file.parent),
            patch("cluster_addons.cli.commands.init.CONFIG_FILE", temp_config_file),
        ):
            result = cli_runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0
        data = yaml.safe_load(temp_config_file.read_text())
        assert data["environment"] == "development"
        assert "addons" not in data["plugins"]
