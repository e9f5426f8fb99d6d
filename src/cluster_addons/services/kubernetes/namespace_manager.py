"""Kubernetes namespace manager.

Toggles the Istio sidecar injection label on them.
"""

from __future__ import annotations

from typing import Any

from cluster_addons.integrations.kubernetes.models.namespace import (
    ISTIO_INJECTION_LABEL,
    NamespaceSummary,
)
from cluster_addons.services.kubernetes.base import K8sBaseManager

MERGE_PATCH_CONTENT_TYPE = "application/merge-patch+json"


class NamespaceManager(K8sBaseManager):
    """Manager for Kubernetes namespaces."""

    _entity_name = "namespace"

    def patch_labels(self, name: str, labels: dict[str, str | None]) -> NamespaceSummary:
        """Merge-patch labels onto a namespace.

        A ``None`` value removes the label.

        Args:
            name: Namespace name.
            labels: Labels to set or remove.

        Returns:
            Updated namespace summary.
        """
        body: dict[str, Any] = {"metadata": {"labels": labels}}
        self._log.debug("patching_namespace_labels", name=name, labels=labels)
        try:
            result = self._client.request(
                self._client.core_v1.patch_namespace,
                name=name,
                body=body,
                _content_type=MERGE_PATCH_CONTENT_TYPE,
            )
            self._log.info("patched_namespace_labels", name=name)
            return NamespaceSummary.from_k8s_object(result)
        except Exception as e:
            self._handle_api_error(e, "Namespace", name, None)

    def enable_istio_injection(self, name: str) -> NamespaceSummary:
        """Label a namespace with ``istio-injection=enabled``."""
        return self.patch_labels(name, {ISTIO_INJECTION_LABEL: "enabled"})

    def disable_istio_injection(self, name: str) -> NamespaceSummary:
        """Remove the ``istio-injection`` label from a namespace."""
        return self.patch_labels(name, {ISTIO_INJECTION_LABEL: None})
