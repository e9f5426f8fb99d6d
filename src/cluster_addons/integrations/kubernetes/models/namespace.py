"""Namespace model."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from cluster_addons.integrations.kubernetes.models.base import K8sEntityBase, _safe_get

ISTIO_INJECTION_LABEL = "istio-injection"


class NamespaceSummary(K8sEntityBase):
    """Namespace display model."""

    _entity_name: ClassVar[str] = "namespace"

    status: str = Field(default="Active", description="Namespace phase")

    @classmethod
    def from_k8s_object(cls, obj: Any) -> NamespaceSummary:
        """Create from a kubernetes V1Namespace object."""
        timestamp = _safe_get(obj, "metadata", "creation_timestamp")
        return cls(
            name=_safe_get(obj, "metadata", "name", default=""),
            uid=_safe_get(obj, "metadata", "uid"),
            creation_timestamp=timestamp.isoformat() if timestamp else None,
            labels=_safe_get(obj, "metadata", "labels") or None,
            status=_safe_get(obj, "status", "phase", default="Active"),
        )

    @property
    def istio_injection_enabled(self) -> bool:
        """Whether sidecar injection is switched on for this namespace."""
        return (self.labels or {}).get(ISTIO_INJECTION_LABEL) == "enabled"
