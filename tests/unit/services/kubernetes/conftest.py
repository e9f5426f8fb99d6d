"""Shared fixtures for Kubernetes service tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from cluster_addons.integrations.kubernetes.client import KubernetesClient


@pytest.fixture
def mock_k8s_client() -> MagicMock:
    """Mock Kubernetes client.

    ``request`` calls straight through to the API method, and
    ``translate_api_exception`` uses the real translation.
    """
    mock_client = MagicMock()
    mock_client.default_namespace = "default"

    def _request(func: Any, *args: Any, **kwargs: Any) -> Any:
        return func(*args, **kwargs)

    mock_client.request.side_effect = _request
    mock_client.translate_api_exception.side_effect = KubernetesClient.translate_api_exception
    return mock_client
