"""Kubernetes integration configuration models."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class ClusterConfig(BaseModel):
    """Configuration for a single named cluster."""

    model_config = ConfigDict(extra="forbid")

    context: str = ""
    kubeconfig: str | None = None
    namespace: str = "default"
    timeout: int = 300

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("kubeconfig")
    @classmethod
    def validate_kubeconfig(cls, v: str | None) -> str | None:
        """Expand ~ in kubeconfig path."""
        return str(Path(v).expanduser()) if v else v


class KubernetesDefaultsConfig(BaseModel):
    """Default settings for Kubernetes API calls."""

    model_config = ConfigDict(extra="forbid")

    timeout: int = 300
    retry_attempts: int = 3

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("retry_attempts")
    @classmethod
    def validate_retry_attempts(cls, v: int) -> int:
        """Validate retry_attempts is at least one."""
        if v < 1:
            raise ValueError("retry_attempts must be at least 1")
        return v


class KubernetesPluginConfig(BaseModel):
    """Kubernetes connection configuration.

    With no clusters configured the client falls back to the current
    kubeconfig context, then to in-cluster configuration.
    """

    model_config = ConfigDict(extra="forbid")

    clusters: dict[str, ClusterConfig] = {}
    active_cluster: str | None = None
    kubeconfig: str | None = None
    defaults: KubernetesDefaultsConfig = KubernetesDefaultsConfig()
    namespace_override: str | None = None

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> KubernetesPluginConfig:
        """Create configuration with environment variable overrides.

        Supported environment variables:
            ADDONS_K8S_CONTEXT: Active cluster name or raw kubeconfig context
            ADDONS_K8S_NAMESPACE: Default namespace for every cluster
            ADDONS_K8S_KUBECONFIG: Kubeconfig path
            ADDONS_K8S_TIMEOUT: Default timeout in seconds
        """
        config_dict: dict[str, Any] = dict(base_config or {})
        config_dict["defaults"] = dict(config_dict.get("defaults") or {})

        if context := os.environ.get("ADDONS_K8S_CONTEXT"):
            config_dict["active_cluster"] = context
        if kubeconfig := os.environ.get("ADDONS_K8S_KUBECONFIG"):
            config_dict["kubeconfig"] = str(Path(kubeconfig).expanduser())
        if timeout := os.environ.get("ADDONS_K8S_TIMEOUT"):
            config_dict["defaults"]["timeout"] = int(timeout)

        instance = cls.model_validate(config_dict)

        if namespace := os.environ.get("ADDONS_K8S_NAMESPACE"):
            instance.namespace_override = namespace

        return instance

    def get_active_cluster(self) -> ClusterConfig | None:
        """Return the configured cluster matching ``active_cluster``, if any."""
        if self.active_cluster:
            return self.clusters.get(self.active_cluster)
        if self.clusters:
            return next(iter(self.clusters.values()))
        return None

    def get_active_context(self) -> str | None:
        """Get the kubeconfig context to load.

        A name that matches a configured cluster resolves to that cluster's
        context; any other ``active_cluster`` value is used as a raw context.
        """
        if cluster := self.get_active_cluster():
            return cluster.context or None
        return self.active_cluster

    def get_active_kubeconfig(self) -> str | None:
        """Get the kubeconfig path for the active cluster."""
        cluster = self.get_active_cluster()
        if cluster and cluster.kubeconfig:
            return cluster.kubeconfig
        return self.kubeconfig

    def get_active_namespace(self) -> str:
        """Get the default namespace for the active cluster."""
        if self.namespace_override:
            return self.namespace_override
        if cluster := self.get_active_cluster():
            return cluster.namespace
        return "default"

    def get_active_timeout(self) -> int:
        """Get the request timeout for the active cluster."""
        if cluster := self.get_active_cluster():
            return cluster.timeout
        return self.defaults.timeout
