"""Jenkins X environment manager.

Resolves a logical environment name (``production``, ``staging``) to
the namespace that environment deploys into.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cluster_addons.integrations.kubernetes.exceptions import KubernetesNotFoundError
from cluster_addons.integrations.kubernetes.models.environment import (
    ENVIRONMENT_GROUP,
    ENVIRONMENT_PLURAL,
    ENVIRONMENT_VERSION,
    EnvironmentSummary,
)
from cluster_addons.services.addons.exceptions import AddonError
from cluster_addons.services.addons.models import DEFAULT_DEV_NAMESPACE
from cluster_addons.services.kubernetes.base import K8sBaseManager

if TYPE_CHECKING:
    from cluster_addons.integrations.kubernetes.client import KubernetesClient


class EnvironmentManager(K8sBaseManager):
    """Manager for ``jenkins.io/v1`` Environment resources.

    Names listed in ``environments`` resolve straight to their configured
    namespace without touching the cluster.
    """

    _entity_name = "environment"

    def __init__(
        self,
        client: KubernetesClient,
        environments: dict[str, str] | None = None,
    ) -> None:
        super().__init__(client)
        self._environments = dict(environments or {})

    def get_environment(self, name: str, namespace: str | None = None) -> EnvironmentSummary:
        """Get an Environment by name.

        Raises:
            KubernetesNotFoundError: If the environment does not exist.
        """
        ns = namespace or DEFAULT_DEV_NAMESPACE
        self._log.debug("getting_environment", name=name, namespace=ns)
        try:
            result = self._client.request(
                self._client.custom_objects.get_namespaced_custom_object,
                ENVIRONMENT_GROUP,
                ENVIRONMENT_VERSION,
                ns,
                ENVIRONMENT_PLURAL,
                name,
            )
            return EnvironmentSummary.from_k8s_object(result)
        except Exception as e:
            self._handle_api_error(e, "Environment", name, ns)

    def find_environment_namespace(self, env_name: str, dev_namespace: str | None = None) -> str:
        """Resolve an environment name to its target namespace.

        Args:
            env_name: Environment name, e.g. ``production``.
            dev_namespace: Namespace holding Environment resources.

        Returns:
            The namespace the environment deploys into.

        Raises:
            AddonError: If the environment is unknown or has no namespace.
        """
        if configured := self._environments.get(env_name):
            self._log.debug("environment_from_config", name=env_name, namespace=configured)
            return configured

        try:
            env = self.get_environment(env_name, dev_namespace)
        except KubernetesNotFoundError as e:
            raise AddonError(f"no environment found called {env_name}, try: jx get env") from e

        if not env.target_namespace:
            raise AddonError(
                f"environment {env_name} does not have a namespace associated with it"
            )
        return env.target_namespace
