"""Istio networking manager.

Reads and creates ``networking.istio.io`` Gateways through the
CustomObjectsApi.
"""

from __future__ import annotations

from cluster_addons.integrations.kubernetes.models.istio import (
    DEFAULT_ISTIO_NAMESPACE,
    GATEWAY_PLURAL,
    ISTIO_NETWORKING_GROUP,
    ISTIO_NETWORKING_VERSION,
    Gateway,
)
from cluster_addons.services.kubernetes.base import K8sBaseManager


class IstioManager(K8sBaseManager):
    """Manager for Istio Gateway resources.

    Gateways default to the ``istio-system`` namespace rather than the
    client's default namespace.
    """

    _entity_name = "istio"

    def get_gateway(self, name: str, namespace: str | None = None) -> Gateway:
        """Get a Gateway by name.

        Raises:
            KubernetesNotFoundError: If the gateway does not exist.
        """
        ns = namespace or DEFAULT_ISTIO_NAMESPACE
        self._log.debug("getting_gateway", name=name, namespace=ns)
        try:
            result = self._client.request(
                self._client.custom_objects.get_namespaced_custom_object,
                ISTIO_NETWORKING_GROUP,
                ISTIO_NETWORKING_VERSION,
                ns,
                GATEWAY_PLURAL,
                name,
            )
            return Gateway.from_k8s_object(result)
        except Exception as e:
            self._handle_api_error(e, "Gateway", name, ns)

    def create_gateway(self, gateway: Gateway) -> Gateway:
        """Create a Gateway.

        Raises:
            KubernetesConflictError: If a gateway with that name already exists.
        """
        self._log.info("creating_gateway", name=gateway.name, namespace=gateway.namespace)
        try:
            result = self._client.request(
                self._client.custom_objects.create_namespaced_custom_object,
                ISTIO_NETWORKING_GROUP,
                ISTIO_NETWORKING_VERSION,
                gateway.namespace,
                GATEWAY_PLURAL,
                gateway.to_k8s_body(),
            )
            self._log.info("created_gateway", name=gateway.name, namespace=gateway.namespace)
            return Gateway.from_k8s_object(result)
        except Exception as e:
            self._handle_api_error(e, "Gateway", gateway.name, gateway.namespace)
