"""Unit tests for add-on options and helpers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cluster_addons.services.addons.exceptions import MissingOptionError
from cluster_addons.services.addons.models import (
    FlaggerAddonOptions,
    FlaggerRemoveOptions,
    grafana_release_name,
    parse_set_values,
)


@pytest.mark.unit
class TestParseSetValues:
    """Tests for parse_set_values."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", []),
            ("meshProvider=istio", ["meshProvider=istio"]),
            ("a=1,b=2", ["a=1", "b=2"]),
            (" a=1 , b=2 ", ["a=1", "b=2"]),
            ("a=1,,b=2,", ["a=1", "b=2"]),
        ],
    )
    def test_parse(self, raw: str, expected: list[str]) -> None:
        assert parse_set_values(raw) == expected


@pytest.mark.unit
class TestFlaggerOptions:
    """Tests for the Flagger option models."""

    def test_install_defaults(self) -> None:
        options = FlaggerAddonOptions()

        assert options.namespace == "istio-system"
        assert options.release_name == "flagger"
        assert options.version == ""
        assert options.chart == "flagger/flagger"
        assert options.grafana_chart == "flagger/grafana"
        assert options.set_values == ""
        assert options.helm_update is True
        assert options.production_environment == "production"
        assert options.istio_gateway == "jx-gateway"
        assert options.repo_url == "https://flagger.app"

    def test_remove_defaults(self) -> None:
        options = FlaggerRemoveOptions()

        assert options.release_name == "flagger"
        assert options.purge is False

    def test_options_are_frozen(self) -> None:
        options = FlaggerAddonOptions()

        with pytest.raises(ValidationError):
            options.chart = "other/chart"

    def test_grafana_release_name(self) -> None:
        assert grafana_release_name("canary") == "canary-grafana"

    @pytest.mark.parametrize(
        ("overrides", "option"),
        [
            ({"release_name": ""}, "release"),
            ({"chart": ""}, "chart"),
            ({"grafana_chart": ""}, "grafana-chart"),
        ],
    )
    def test_install_validate_required(self, overrides: dict[str, str], option: str) -> None:
        options = FlaggerAddonOptions(**overrides)

        with pytest.raises(MissingOptionError, match=f"missing option: --{option}$"):
            options.validate_required()

    def test_install_validate_allows_empty_optional_steps(self) -> None:
        options = FlaggerAddonOptions(version="", production_environment="", istio_gateway="")

        options.validate_required()

    def test_remove_validate_required(self) -> None:
        with pytest.raises(MissingOptionError, match="missing option: --release"):
            FlaggerRemoveOptions(release_name="").validate_required()
