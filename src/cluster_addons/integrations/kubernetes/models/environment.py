"""Jenkins X ``Environment`` custom resource model.

An Environment maps a logical name such as ``production`` to the
Kubernetes namespace that environment deploys into (``spec.namespace``).
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from cluster_addons.integrations.kubernetes.models.base import K8sEntityBase, _metadata_fields

ENVIRONMENT_GROUP = "jenkins.io"
ENVIRONMENT_VERSION = "v1"
ENVIRONMENT_PLURAL = "environments"


class EnvironmentSummary(K8sEntityBase):
    """Environment display model."""

    _entity_name: ClassVar[str] = "environment"

    target_namespace: str = Field(default="", description="Namespace the environment deploys to")
    label: str = Field(default="", description="Human readable label")
    kind: str = Field(default="", description="Environment kind (Permanent, Preview, ...)")
    promotion_strategy: str = Field(default="", description="Manual, Auto or Never")

    @classmethod
    def from_k8s_object(cls, obj: dict[str, Any]) -> EnvironmentSummary:
        """Create from an Environment custom object dict."""
        spec: dict[str, Any] = obj.get("spec") or {}
        return cls(
            **_metadata_fields(obj),
            target_namespace=spec.get("namespace") or "",
            label=spec.get("label") or "",
            kind=spec.get("kind") or "",
            promotion_strategy=spec.get("promotionStrategy") or "",
        )
