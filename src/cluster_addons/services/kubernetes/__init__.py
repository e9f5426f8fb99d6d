"""Kubernetes service managers.

Each manager wraps the API client (or the Helm CLI) for one kind of
resource, adding namespace resolution, logging and error translation.
"""

from cluster_addons.services.kubernetes.base import K8sBaseManager
from cluster_addons.services.kubernetes.environment_manager import EnvironmentManager
from cluster_addons.services.kubernetes.helm_manager import HelmManager
from cluster_addons.services.kubernetes.istio_manager import IstioManager
from cluster_addons.services.kubernetes.namespace_manager import NamespaceManager

__all__ = [
    "EnvironmentManager",
    "HelmManager",
    "IstioManager",
    "K8sBaseManager",
    "NamespaceManager",
]
