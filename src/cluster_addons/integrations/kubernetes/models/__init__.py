"""Typed models for Kubernetes and Helm resources."""

from cluster_addons.integrations.kubernetes.models.environment import EnvironmentSummary
from cluster_addons.integrations.kubernetes.models.helm import (
    ChartRelease,
    HelmCommandResult,
    HelmRepo,
)
from cluster_addons.integrations.kubernetes.models.istio import (
    Gateway,
    GatewayPort,
    GatewayServer,
)
from cluster_addons.integrations.kubernetes.models.namespace import NamespaceSummary

__all__ = [
    "ChartRelease",
    "EnvironmentSummary",
    "Gateway",
    "GatewayPort",
    "GatewayServer",
    "HelmCommandResult",
    "HelmRepo",
    "NamespaceSummary",
]
