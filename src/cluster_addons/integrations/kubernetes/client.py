"""Kubernetes API client wrapper.

Wraps the official kubernetes Python client with kubeconfig/context
loading, lazy API group initialization, retry of transient connection
failures, and translation of ``ApiException`` into the exceptions in
:mod:`cluster_addons.integrations.kubernetes.exceptions`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from cluster_addons.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesValidationError,
)

if TYPE_CHECKING:
    from kubernetes.client import CoreV1Api, CustomObjectsApi, VersionApi

    from cluster_addons.integrations.kubernetes.config import KubernetesPluginConfig

logger = structlog.get_logger()

T = TypeVar("T")


class KubernetesClient:
    """Kubernetes API client bound to one kubeconfig context.

    Example:
        ```python
        config = KubernetesPluginConfig.from_env()
        with KubernetesClient(config) as client:
            ns = client.request(client.core_v1.read_namespace, "istio-system")
        ```
    """

    def __init__(self, plugin_config: KubernetesPluginConfig) -> None:
        """Load kubeconfig (or in-cluster config) for the active context.

        Args:
            plugin_config: Kubernetes connection configuration.

        Raises:
            KubernetesConnectionError: If no configuration can be loaded.
        """
        self._config = plugin_config
        self._retries = plugin_config.defaults.retry_attempts
        self._current_context: str | None = None

        self._core_v1: CoreV1Api | None = None
        self._custom_objects: CustomObjectsApi | None = None
        self._version_api: VersionApi | None = None

        self._load_config()

        logger.debug(
            "kubernetes_client_initialized",
            context=self._current_context,
            default_namespace=plugin_config.get_active_namespace(),
        )

    def _load_config(self) -> None:
        """Load Kubernetes configuration from kubeconfig or in-cluster."""
        from kubernetes import config
        from kubernetes.config import ConfigException

        context = self._config.get_active_context()
        kubeconfig = self._config.get_active_kubeconfig()

        try:
            config.load_kube_config(config_file=kubeconfig, context=context)
            self._current_context = context or "current-context"
            logger.debug("loaded_kubeconfig", context=context, kubeconfig=kubeconfig)
        except ConfigException:
            try:
                config.load_incluster_config()
                self._current_context = "in-cluster"
                logger.debug("loaded_incluster_config")
            except ConfigException as e:
                raise KubernetesConnectionError(
                    message="Cannot load Kubernetes configuration. "
                    "Ensure kubeconfig exists or running inside a cluster.",
                    original_error=e,
                ) from e

        self._invalidate_api_cache()

    def _invalidate_api_cache(self) -> None:
        self._core_v1 = None
        self._custom_objects = None
        self._version_api = None

    # =========================================================================
    # Lazy API Group Accessors
    # =========================================================================

    @property
    def core_v1(self) -> CoreV1Api:
        """CoreV1Api (namespaces)."""
        if self._core_v1 is None:
            from kubernetes.client import CoreV1Api

            self._core_v1 = CoreV1Api()
        return self._core_v1

    @property
    def custom_objects(self) -> CustomObjectsApi:
        """CustomObjectsApi (Istio gateways, Jenkins X environments)."""
        if self._custom_objects is None:
            from kubernetes.client import CustomObjectsApi

            self._custom_objects = CustomObjectsApi()
        return self._custom_objects

    @property
    def version_api(self) -> VersionApi:
        """VersionApi for cluster version info."""
        if self._version_api is None:
            from kubernetes.client import VersionApi

            self._version_api = VersionApi()
        return self._version_api

    # =========================================================================
    # Requests
    # =========================================================================

    def make_retry_decorator(self) -> Any:
        """Create a retry decorator for transient connection errors."""
        return retry(
            retry=retry_if_exception_type(KubernetesConnectionError),
            stop=stop_after_attempt(self._retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        )

    def request(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Call a kubernetes API method, retrying on connection failures.

        ``ApiException`` is re-raised unchanged so the caller can translate
        it with resource context via :meth:`translate_api_exception`.

        Raises:
            KubernetesConnectionError: If the API server stays unreachable.
        """
        retry_decorator = self.make_retry_decorator()
        result: T = retry_decorator(self._invoke)(func, *args, **kwargs)
        return result

    @staticmethod
    def _invoke(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        from urllib3.exceptions import HTTPError

        try:
            return func(*args, **kwargs)
        except HTTPError as e:
            raise KubernetesConnectionError(
                message=f"Kubernetes API unreachable: {e}",
                original_error=e,
            ) from e

    # =========================================================================
    # Error Translation
    # =========================================================================

    @staticmethod
    def translate_api_exception(
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> KubernetesError:
        """Translate a kubernetes ApiException to a KubernetesError subclass.

        Already-translated errors are returned as-is.
        """
        from kubernetes.client import ApiException

        if isinstance(e, KubernetesError):
            return e

        if not isinstance(e, ApiException):
            return KubernetesError(
                message=str(e),
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        status = e.status

        if status in (401, 403):
            return KubernetesAuthError(
                message=e.reason or "Authentication/authorization failed",
                status_code=status,
                reason=e.reason,
            )

        if status == 404:
            return KubernetesNotFoundError(
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        if status == 409:
            return KubernetesConflictError(
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        if status in (400, 422):
            return KubernetesValidationError(
                message=e.reason or "Validation failed",
                status_code=status,
            )

        return KubernetesError(
            message=e.reason or f"Kubernetes API error: {status}",
            status_code=status,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )

    # =========================================================================
    # Connection Check
    # =========================================================================

    def check_connection(self) -> bool:
        """Return True if the API server answers a version request."""
        try:
            self.version_api.get_code()
            return True
        except Exception:
            return False

    def get_cluster_version(self) -> str:
        """Get the Kubernetes cluster version (e.g. ``v1.28``).

        Raises:
            KubernetesConnectionError: If the cluster is unreachable.
        """
        try:
            version_info = self.version_api.get_code()
            return f"v{version_info.major}.{version_info.minor}"
        except Exception as e:
            raise KubernetesConnectionError(
                message="Failed to get cluster version",
                original_error=e,
            ) from e

    # =========================================================================
    # Properties
    # =========================================================================

    def get_current_context(self) -> str:
        """Current context name, or 'in-cluster' when running inside a pod."""
        return self._current_context or "unknown"

    @property
    def default_namespace(self) -> str:
        """Default namespace from config."""
        return self._config.get_active_namespace()

    @property
    def timeout(self) -> int:
        """Configured request timeout in seconds."""
        return self._config.get_active_timeout()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Release cached API instances."""
        self._invalidate_api_cache()
        logger.debug("kubernetes_client_closed")

    def __enter__(self) -> KubernetesClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
