"""Unit tests for IstioManager."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from kubernetes.client import ApiException

from cluster_addons.integrations.kubernetes.exceptions import (
    KubernetesConflictError,
    KubernetesNotFoundError,
)
from cluster_addons.integrations.kubernetes.models.istio import Gateway
from cluster_addons.services.kubernetes.istio_manager import IstioManager


@pytest.fixture
def istio_manager(mock_k8s_client: MagicMock) -> IstioManager:
    """Create an IstioManager with a mocked client."""
    return IstioManager(mock_k8s_client)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestGetGateway:
    """Tests for IstioManager.get_gateway."""

    def test_defaults_to_istio_system(
        self, istio_manager: IstioManager, mock_k8s_client: MagicMock
    ) -> None:
        mock_k8s_client.custom_objects.get_namespaced_custom_object.return_value = (
            Gateway.default_http("jx-gateway", "istio-system").to_k8s_body()
        )

        result = istio_manager.get_gateway("jx-gateway")

        assert result.name == "jx-gateway"
        mock_k8s_client.custom_objects.get_namespaced_custom_object.assert_called_once_with(
            "networking.istio.io", "v1alpha3", "istio-system", "gateways", "jx-gateway"
        )

    def test_not_found(self, istio_manager: IstioManager, mock_k8s_client: MagicMock) -> None:
        mock_k8s_client.custom_objects.get_namespaced_custom_object.side_effect = ApiException(
            status=404
        )

        with pytest.raises(KubernetesNotFoundError, match="Gateway 'jx-gateway' not found"):
            istio_manager.get_gateway("jx-gateway")


@pytest.mark.unit
@pytest.mark.kubernetes
class TestCreateGateway:
    """Tests for IstioManager.create_gateway."""

    def test_posts_gateway_body(
        self, istio_manager: IstioManager, mock_k8s_client: MagicMock
    ) -> None:
        gateway = Gateway.default_http("jx-gateway", "istio-system")
        mock_k8s_client.custom_objects.create_namespaced_custom_object.return_value = (
            gateway.to_k8s_body()
        )

        istio_manager.create_gateway(gateway)

        mock_k8s_client.custom_objects.create_namespaced_custom_object.assert_called_once_with(
            "networking.istio.io",
            "v1alpha3",
            "istio-system",
            "gateways",
            gateway.to_k8s_body(),
        )

    def test_conflict(self, istio_manager: IstioManager, mock_k8s_client: MagicMock) -> None:
        mock_k8s_client.custom_objects.create_namespaced_custom_object.side_effect = ApiException(
            status=409
        )

        with pytest.raises(KubernetesConflictError):
            istio_manager.create_gateway(Gateway.default_http("jx-gateway", "istio-system"))
