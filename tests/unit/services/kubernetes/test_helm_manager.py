"""Unit tests for HelmManager."""

from __future__ import annotations

from unittest.mock import MagicMock, call, patch

import pytest

from cluster_addons.integrations.kubernetes.helm_client import (
    HelmBinaryNotFoundError,
    HelmCommandError,
)
from cluster_addons.integrations.kubernetes.models.helm import (
    ChartRelease,
    HelmCommandResult,
    HelmRepo,
)
from cluster_addons.services.kubernetes.helm_manager import HelmManager


@pytest.fixture
def mock_helm_client() -> MagicMock:
    """Create a mock HelmClient."""
    client = MagicMock()
    client.upgrade.return_value = HelmCommandResult(success=True, stdout="deployed")
    client.uninstall.return_value = HelmCommandResult(success=True, stdout="uninstalled")
    client.repo_list.return_value = []
    return client


@pytest.fixture
def helm_manager(mock_k8s_client: MagicMock, mock_helm_client: MagicMock) -> HelmManager:
    """Create a HelmManager with mocked clients."""
    return HelmManager(mock_k8s_client, mock_helm_client)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestEnsureHelm:
    """Tests for HelmManager.ensure_helm."""

    def test_returns_version(self, helm_manager: HelmManager, mock_helm_client: MagicMock) -> None:
        mock_helm_client.get_version.return_value = "v3.17.0"

        assert helm_manager.ensure_helm() == "v3.17.0"

    def test_locates_binary_lazily(self, mock_k8s_client: MagicMock) -> None:
        manager = HelmManager(mock_k8s_client, binary_path="/opt/helm")

        with patch("cluster_addons.services.kubernetes.helm_manager.HelmClient") as helm_cls:
            helm_cls.return_value.get_version.return_value = "v3.17.0"
            manager.ensure_helm()
            manager.ensure_helm()

        helm_cls.assert_called_once_with("/opt/helm")

    def test_missing_binary_propagates(self, mock_k8s_client: MagicMock) -> None:
        manager = HelmManager(mock_k8s_client)

        with (
            patch("shutil.which", return_value=None),
            pytest.raises(HelmBinaryNotFoundError),
        ):
            manager.ensure_helm()


@pytest.mark.unit
@pytest.mark.kubernetes
class TestAddRepoIfMissing:
    """Tests for HelmManager.add_repo_if_missing."""

    def test_adds_missing_repo(
        self, helm_manager: HelmManager, mock_helm_client: MagicMock
    ) -> None:
        name = helm_manager.add_repo_if_missing("https://flagger.app", "flagger")

        assert name == "flagger"
        mock_helm_client.repo_add.assert_called_once_with(
            "flagger", "https://flagger.app", username=None, password=None
        )

    @pytest.mark.parametrize("existing_url", ["https://flagger.app", "https://flagger.app/"])
    def test_existing_url_is_reused(
        self,
        helm_manager: HelmManager,
        mock_helm_client: MagicMock,
        existing_url: str,
    ) -> None:
        mock_helm_client.repo_list.return_value = [
            HelmRepo(name="stable", url="https://charts.helm.sh/stable"),
            HelmRepo(name="weaveworks-flagger", url=existing_url),
        ]

        name = helm_manager.add_repo_if_missing("https://flagger.app", "flagger")

        assert name == "weaveworks-flagger"
        mock_helm_client.repo_add.assert_not_called()

    def test_passes_credentials(
        self, helm_manager: HelmManager, mock_helm_client: MagicMock
    ) -> None:
        helm_manager.add_repo_if_missing(
            "https://charts.example.com", "private", username="bot", password="s3cret"
        )

        mock_helm_client.repo_add.assert_called_once_with(
            "private", "https://charts.example.com", username="bot", password="s3cret"
        )

    def test_errors_propagate(self, helm_manager: HelmManager, mock_helm_client: MagicMock) -> None:
        mock_helm_client.repo_add.side_effect = HelmCommandError("Helm command failed: 403")

        with pytest.raises(HelmCommandError):
            helm_manager.add_repo_if_missing("https://flagger.app", "flagger")


@pytest.mark.unit
@pytest.mark.kubernetes
class TestInstallChart:
    """Tests for HelmManager.install_chart."""

    def test_updates_repos_then_upgrades(
        self, helm_manager: HelmManager, mock_helm_client: MagicMock
    ) -> None:
        release = ChartRelease(
            release_name="flagger",
            chart="flagger/flagger",
            namespace="istio-system",
            version="0.12.0",
            set_values=["meshProvider=istio"],
            values_files=["values.yaml"],
        )

        result = helm_manager.install_chart(release, helm_update=True)

        assert result.success is True
        assert mock_helm_client.method_calls[:2] == [
            call.repo_update(),
            call.upgrade(
                "flagger",
                "flagger/flagger",
                namespace="istio-system",
                values_files=["values.yaml"],
                set_values=["meshProvider=istio"],
                version="0.12.0",
                install=True,
            ),
        ]

    def test_skips_repo_update(
        self, helm_manager: HelmManager, mock_helm_client: MagicMock
    ) -> None:
        release = ChartRelease(release_name="flagger", chart="flagger/flagger", namespace="")

        helm_manager.install_chart(release, helm_update=False)

        mock_helm_client.repo_update.assert_not_called()
        kwargs = mock_helm_client.upgrade.call_args.kwargs
        assert kwargs["namespace"] == "default"
        assert kwargs["version"] is None


@pytest.mark.unit
@pytest.mark.kubernetes
class TestUninstallRelease:
    """Tests for HelmManager.uninstall_release."""

    def test_uninstall(self, helm_manager: HelmManager, mock_helm_client: MagicMock) -> None:
        helm_manager.uninstall_release("flagger", namespace="istio-system", keep_history=True)

        mock_helm_client.uninstall.assert_called_once_with(
            "flagger", namespace="istio-system", keep_history=True
        )
