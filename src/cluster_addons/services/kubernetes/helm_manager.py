"""Helm manager for chart installation and repository registration.

Orchestrates Helm CLI operations with namespace resolution and
structured logging. The helm binary is located lazily by
:meth:`HelmManager.ensure_helm`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cluster_addons.integrations.kubernetes.helm_client import HelmClient
from cluster_addons.integrations.kubernetes.models.helm import ChartRelease, HelmCommandResult
from cluster_addons.services.kubernetes.base import K8sBaseManager

if TYPE_CHECKING:
    from cluster_addons.integrations.kubernetes.client import KubernetesClient


class HelmManager(K8sBaseManager):
    """Manager for Helm chart and repository operations."""

    _entity_name: str = "helm"

    def __init__(
        self,
        client: KubernetesClient,
        helm_client: HelmClient | None = None,
        *,
        binary_path: str | None = None,
    ) -> None:
        """Initialize Helm manager.

        Args:
            client: Kubernetes API client.
            helm_client: Optional HelmClient (located on first use if None).
            binary_path: Explicit helm binary path used when locating helm.
        """
        super().__init__(client)
        self._helm = helm_client
        self._binary_path = binary_path

    @property
    def helm(self) -> HelmClient:
        """The Helm CLI client, located on first access."""
        if self._helm is None:
            self._helm = HelmClient(self._binary_path)
        return self._helm

    def ensure_helm(self) -> str:
        """Check that a working helm binary is available.

        Returns:
            The helm client version.

        Raises:
            HelmBinaryNotFoundError: If helm is not installed.
            HelmError: If ``helm version`` fails.
        """
        version = self.helm.get_version()
        self._log.debug("helm_present", version=version)
        return version

    # -----------------------------------------------------------------------
    # Repositories
    # -----------------------------------------------------------------------

    def add_repo_if_missing(
        self,
        url: str,
        name: str,
        username: str | None = None,
        password: str | None = None,
    ) -> str:
        """Register a chart repository unless its URL is already configured.

        Args:
            url: Repository URL.
            name: Name to register the repository under.
            username: Optional repository username.
            password: Optional repository password.

        Returns:
            Name of the repository serving ``url``; an existing repository
            keeps its own name.
        """
        for repo in self.helm.repo_list():
            if repo.matches_url(url):
                self._log.debug("helm_repo_exists", name=repo.name, url=url)
                return repo.name

        self.helm.repo_add(name, url, username=username, password=password)
        self._log.info("helm_repo_added", name=name, url=url)
        return name

    # -----------------------------------------------------------------------
    # Releases
    # -----------------------------------------------------------------------

    def install_chart(
        self,
        release: ChartRelease,
        *,
        helm_update: bool = True,
    ) -> HelmCommandResult:
        """Install or upgrade a chart release.

        Args:
            release: Release name, chart and values to install.
            helm_update: Refresh repository indexes before installing.

        Returns:
            Command result.
        """
        ns = self._resolve_namespace(release.namespace)
        if helm_update:
            self.helm.repo_update()

        self._log.info(
            "installing_helm_chart",
            release=release.release_name,
            chart=release.chart,
            version=release.version or "latest",
            namespace=ns,
        )
        return self.helm.upgrade(
            release.release_name,
            release.chart,
            namespace=ns,
            values_files=release.values_files,
            set_values=release.set_values,
            version=release.version or None,
            install=True,
        )

    def uninstall_release(
        self,
        release_name: str,
        *,
        namespace: str | None = None,
        keep_history: bool = False,
    ) -> HelmCommandResult:
        """Uninstall a release."""
        ns = self._resolve_namespace(namespace)
        self._log.info(
            "uninstalling_helm_release",
            release=release_name,
            namespace=ns,
            keep_history=keep_history,
        )
        return self.helm.uninstall(release_name, namespace=ns, keep_history=keep_history)
