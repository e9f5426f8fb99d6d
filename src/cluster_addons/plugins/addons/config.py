"""Configuration for the addons plugin.

Parsed from the ``plugins.addons`` section of the config file::

    plugins:
      addons:
        helm_binary: /usr/local/bin/helm
        kubernetes:
          active_cluster: staging
        flagger:
          version: 0.12.0
          environments:
            production: jx-production
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cluster_addons.integrations.kubernetes.config import KubernetesPluginConfig
from cluster_addons.services.addons import models as addon_models


class FlaggerDefaults(BaseModel):
    """Defaults for ``create flagger`` / ``delete flagger`` options."""

    model_config = ConfigDict(extra="forbid")

    namespace: str = addon_models.DEFAULT_FLAGGER_NAMESPACE
    release_name: str = addon_models.DEFAULT_FLAGGER_RELEASE
    version: str = ""
    chart: str = addon_models.DEFAULT_FLAGGER_CHART
    grafana_chart: str = addon_models.DEFAULT_FLAGGER_GRAFANA_CHART
    production_environment: str = addon_models.DEFAULT_PRODUCTION_ENVIRONMENT
    istio_gateway: str = addon_models.DEFAULT_ISTIO_GATEWAY
    dev_namespace: str = addon_models.DEFAULT_DEV_NAMESPACE
    repo_url: str = addon_models.DEFAULT_FLAGGER_REPO_URL
    repo_name: str = addon_models.DEFAULT_FLAGGER_REPO_NAME
    helm_update: bool = True
    environments: dict[str, str] = Field(default_factory=dict)


class AddonsPluginConfig(BaseModel):
    """Complete addons plugin configuration."""

    model_config = ConfigDict(extra="forbid")

    kubernetes: KubernetesPluginConfig = Field(default_factory=KubernetesPluginConfig)
    helm_binary: str | None = None
    flagger: FlaggerDefaults = Field(default_factory=FlaggerDefaults)

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> AddonsPluginConfig:
        """Create configuration with environment variable overrides.

        Supported environment variables:
            ADDONS_HELM_BINARY: Explicit helm binary path
            ADDONS_K8S_*: See :meth:`KubernetesPluginConfig.from_env`
        """
        config_dict: dict[str, Any] = dict(base_config or {})
        kubernetes = KubernetesPluginConfig.from_env(config_dict.pop("kubernetes", None))

        if helm_binary := os.environ.get("ADDONS_HELM_BINARY"):
            config_dict["helm_binary"] = helm_binary

        instance = cls.model_validate(config_dict)
        instance.kubernetes = kubernetes
        return instance
