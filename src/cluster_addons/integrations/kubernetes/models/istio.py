"""Istio ``Gateway`` models.

Gateways are read and written through ``CustomObjectsApi`` as plain
dicts; :meth:`Gateway.to_k8s_body` and :meth:`Gateway.from_k8s_object`
convert between those dicts and these models.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ISTIO_NETWORKING_GROUP = "networking.istio.io"
ISTIO_NETWORKING_VERSION = "v1alpha3"
GATEWAY_PLURAL = "gateways"
GATEWAY_KIND = "Gateway"

DEFAULT_ISTIO_NAMESPACE = "istio-system"
INGRESS_GATEWAY_SELECTOR = {"istio": "ingressgateway"}


class GatewayPort(BaseModel):
    """Port a gateway server listens on."""

    model_config = ConfigDict(extra="ignore")

    number: int
    name: str
    protocol: str


class GatewayServer(BaseModel):
    """A listener: one port plus the host patterns it accepts."""

    model_config = ConfigDict(extra="ignore")

    port: GatewayPort
    hosts: list[str] = Field(default_factory=list)


class Gateway(BaseModel):
    """Istio networking Gateway."""

    model_config = ConfigDict(extra="ignore")

    name: str
    namespace: str = DEFAULT_ISTIO_NAMESPACE
    selector: dict[str, str] = Field(default_factory=dict)
    servers: list[GatewayServer] = Field(default_factory=list)

    @classmethod
    def default_http(cls, name: str, namespace: str = DEFAULT_ISTIO_NAMESPACE) -> Gateway:
        """Gateway on the ingress controller accepting HTTP on port 80 for any host."""
        # TODO: add an HTTPS server on 443 once TLS secrets can be passed in
        return cls(
            name=name,
            namespace=namespace,
            selector=dict(INGRESS_GATEWAY_SELECTOR),
            servers=[
                GatewayServer(
                    port=GatewayPort(number=80, name="http", protocol="HTTP"),
                    hosts=["*"],
                )
            ],
        )

    @classmethod
    def from_k8s_object(cls, obj: dict[str, Any]) -> Gateway:
        """Create from a Gateway custom object dict."""
        metadata: dict[str, Any] = obj.get("metadata") or {}
        spec: dict[str, Any] = obj.get("spec") or {}
        return cls(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace") or DEFAULT_ISTIO_NAMESPACE,
            selector=spec.get("selector") or {},
            servers=[GatewayServer.model_validate(s) for s in spec.get("servers") or []],
        )

    def to_k8s_body(self) -> dict[str, Any]:
        """Render the custom object body for ``create_namespaced_custom_object``."""
        return {
            "apiVersion": f"{ISTIO_NETWORKING_GROUP}/{ISTIO_NETWORKING_VERSION}",
            "kind": GATEWAY_KIND,
            "metadata": {"name": self.name, "namespace": self.namespace},
            "spec": {
                "selector": dict(self.selector),
                "servers": [server.model_dump() for server in self.servers],
            },
        }
