"""Kubernetes integration - API client, Helm CLI wrapper and configuration."""

from cluster_addons.integrations.kubernetes.client import KubernetesClient
from cluster_addons.integrations.kubernetes.config import (
    ClusterConfig,
    KubernetesDefaultsConfig,
    KubernetesPluginConfig,
)
from cluster_addons.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConflictError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesValidationError,
)
from cluster_addons.integrations.kubernetes.helm_client import (
    HelmBinaryNotFoundError,
    HelmClient,
    HelmCommandError,
    HelmError,
)

__all__ = [
    "ClusterConfig",
    "HelmBinaryNotFoundError",
    "HelmClient",
    "HelmCommandError",
    "HelmError",
    "KubernetesAuthError",
    "KubernetesClient",
    "KubernetesConflictError",
    "KubernetesConnectionError",
    "KubernetesDefaultsConfig",
    "KubernetesError",
    "KubernetesNotFoundError",
    "KubernetesPluginConfig",
    "KubernetesValidationError",
]
