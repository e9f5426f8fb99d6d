"""Flagger add-on installer.

Installs Flagger and its Grafana dashboards with Helm, enables Istio
sidecar injection in the production environment's namespace, and makes
sure an Istio ingress Gateway exists. Each step stops the run on failure
with an :class:`AddonError` naming the step; completed steps are not
rolled back.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from cluster_addons.integrations.kubernetes.exceptions import (
    KubernetesConflictError,
    KubernetesError,
    KubernetesNotFoundError,
)
from cluster_addons.integrations.kubernetes.models.helm import ChartRelease
from cluster_addons.integrations.kubernetes.models.istio import DEFAULT_ISTIO_NAMESPACE, Gateway
from cluster_addons.services.addons.exceptions import AddonError
from cluster_addons.services.addons.models import (
    FlaggerAddonOptions,
    FlaggerInstallResult,
    FlaggerRemoveOptions,
    FlaggerRemoveResult,
    grafana_release_name,
    parse_set_values,
)
from cluster_addons.services.kubernetes.environment_manager import EnvironmentManager
from cluster_addons.services.kubernetes.helm_manager import HelmManager
from cluster_addons.services.kubernetes.istio_manager import IstioManager
from cluster_addons.services.kubernetes.namespace_manager import NamespaceManager

logger = structlog.get_logger()


class FlaggerAddon:
    """Installs and removes the Flagger canary controller.

    Example:
        ```python
        addon = FlaggerAddon(helm, namespaces, istio, environments)
        result = addon.install(FlaggerAddonOptions(version="0.12.0"))
        ```
    """

    def __init__(
        self,
        helm: HelmManager,
        namespaces: NamespaceManager,
        istio: IstioManager,
        environments: EnvironmentManager,
        progress_callback: Callable[[str], None] | None = None,
    ) -> None:
        """Initialize the installer.

        Args:
            helm: Helm chart and repository manager.
            namespaces: Namespace manager used for the injection label.
            istio: Istio Gateway manager.
            environments: Environment name resolver.
            progress_callback: Called with a human readable line per step.
        """
        self._helm = helm
        self._namespaces = namespaces
        self._istio = istio
        self._environments = environments
        self._progress = progress_callback or (lambda msg: None)
        self._log = logger.bind(entity="flagger")

    # =========================================================================
    # Install
    # =========================================================================

    def install(self, options: FlaggerAddonOptions) -> FlaggerInstallResult:
        """Install Flagger.

        Raises:
            MissingOptionError: If release, chart or grafana chart is empty.
            AddonError: If any step fails; the underlying error is the cause.
        """
        options.validate_required()

        self._ensure_helm()

        set_values = parse_set_values(options.set_values)

        try:
            repo_name = self._helm.add_repo_if_missing(options.repo_url, options.repo_name)
        except KubernetesError as e:
            raise AddonError("Flagger deployment failed", e) from e

        result = FlaggerInstallResult(namespace=options.namespace, repo_name=repo_name)

        primary = ChartRelease(
            release_name=options.release_name,
            chart=options.chart,
            namespace=options.namespace,
            version=options.version or None,
            set_values=set_values,
            values_files=list(options.values_files),
        )
        self._progress(f"Installing {primary.chart} as release {primary.release_name}")
        try:
            self._helm.install_chart(primary, helm_update=options.helm_update)
        except KubernetesError as e:
            raise AddonError("Flagger deployment failed", e) from e
        result.releases.append(primary.release_name)

        grafana = ChartRelease(
            release_name=grafana_release_name(options.release_name),
            chart=options.grafana_chart,
            namespace=options.namespace,
            version=options.version or None,
            set_values=set_values,
            values_files=list(options.values_files),
        )
        self._progress(f"Installing {grafana.chart} as release {grafana.release_name}")
        try:
            self._helm.install_chart(grafana, helm_update=options.helm_update)
        except KubernetesError as e:
            raise AddonError("Flagger Grafana deployment failed", e) from e
        result.releases.append(grafana.release_name)

        if options.production_environment:
            result.istio_namespace = self._enable_istio(
                options.production_environment, options.dev_namespace
            )

        if options.istio_gateway:
            result.gateway = options.istio_gateway
            result.gateway_created = self._ensure_gateway(options.istio_gateway)

        self._log.info("flagger_installed", releases=result.releases, namespace=options.namespace)
        return result

    def _ensure_helm(self) -> None:
        try:
            self._helm.ensure_helm()
        except KubernetesError as e:
            raise AddonError("failed to ensure that Helm is present", e) from e

    def _resolve_environment(
        self, env_name: str, dev_namespace: str, action: str = "enabling"
    ) -> str:
        try:
            return self._environments.find_environment_namespace(env_name, dev_namespace)
        except (AddonError, KubernetesError) as e:
            raise AddonError(f"error {action} Istio for environment {env_name}", e) from e

    def _enable_istio(self, env_name: str, dev_namespace: str) -> str:
        ns = self._resolve_environment(env_name, dev_namespace)
        self._log.info("enabling_istio_injection", namespace=ns, environment=env_name)
        self._progress(f"Enabling Istio in namespace {ns}")
        try:
            self._namespaces.enable_istio_injection(ns)
        except KubernetesError as e:
            raise AddonError(f"error enabling Istio in namespace {ns}", e) from e
        return ns

    def _ensure_gateway(self, name: str) -> bool:
        """Create the default ingress gateway unless it exists.

        Returns:
            True if the gateway was created by this call.
        """
        try:
            self._istio.get_gateway(name, DEFAULT_ISTIO_NAMESPACE)
        except KubernetesNotFoundError:
            pass
        except KubernetesError as e:
            raise AddonError(f"error fetching Istio gateway {name}", e) from e
        else:
            self._log.info("istio_gateway_exists", gateway=name)
            self._progress(f"Istio gateway already exists: {name}")
            return False

        self._log.info("creating_istio_gateway", gateway=name, namespace=DEFAULT_ISTIO_NAMESPACE)
        self._progress(f"Creating Istio gateway: {name}")
        try:
            self._istio.create_gateway(Gateway.default_http(name, DEFAULT_ISTIO_NAMESPACE))
        except KubernetesConflictError:
            # created concurrently between the get and the create
            self._log.info("istio_gateway_exists", gateway=name)
            self._progress(f"Istio gateway already exists: {name}")
            return False
        except KubernetesError as e:
            raise AddonError("error creating Istio gateway", e) from e
        return True

    # =========================================================================
    # Remove
    # =========================================================================

    def remove(self, options: FlaggerRemoveOptions) -> FlaggerRemoveResult:
        """Uninstall Flagger and its Grafana release.

        The Istio gateway is left in place.

        Raises:
            MissingOptionError: If the release name is empty.
            AddonError: If any step fails.
        """
        options.validate_required()

        self._ensure_helm()

        result = FlaggerRemoveResult(namespace=options.namespace)
        keep_history = not options.purge

        self._progress(f"Deleting release {options.release_name}")
        try:
            self._helm.uninstall_release(
                options.release_name,
                namespace=options.namespace,
                keep_history=keep_history,
            )
        except KubernetesError as e:
            raise AddonError("failed to delete Flagger release", e) from e
        result.releases.append(options.release_name)

        grafana = grafana_release_name(options.release_name)
        self._progress(f"Deleting release {grafana}")
        try:
            self._helm.uninstall_release(
                grafana,
                namespace=options.namespace,
                keep_history=keep_history,
            )
        except KubernetesError as e:
            raise AddonError("failed to delete Flagger Grafana release", e) from e
        result.releases.append(grafana)

        if options.production_environment:
            ns = self._resolve_environment(
                options.production_environment, options.dev_namespace, action="disabling"
            )
            self._log.info("disabling_istio_injection", namespace=ns)
            self._progress(f"Disabling Istio in namespace {ns}")
            try:
                self._namespaces.disable_istio_injection(ns)
            except KubernetesError as e:
                raise AddonError(f"error disabling Istio in namespace {ns}", e) from e
            result.istio_namespace = ns

        self._log.info("flagger_removed", releases=result.releases, namespace=options.namespace)
        return result
