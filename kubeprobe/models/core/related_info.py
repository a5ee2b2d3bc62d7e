"""Models describing a pod's neighborhood."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OwnerInfo(BaseModel):
    """Direct pod owner and, for ReplicaSets, the workload above it."""

    model_config = ConfigDict(frozen=True)

    kind: str
    name: str
    workload_kind: str = ""
    workload_name: str = ""
    replicas: int | None = None
    ready_replicas: int | None = None


class ServiceInfo(BaseModel):
    """Service selecting the pod."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = "ClusterIP"
    cluster_ip: str = ""
    ports: str = ""
    endpoints: int = 0
    selector: dict[str, str] = Field(default_factory=dict)


class IngressPathInfo(BaseModel):
    """One HTTP path of an ingress rule."""

    model_config = ConfigDict(frozen=True)

    path: str = ""
    path_type: str = "Prefix"
    service_name: str = ""
    service_port: str = ""


class IngressRuleInfo(BaseModel):
    """Ingress rule for a host."""

    model_config = ConfigDict(frozen=True)

    host: str = ""
    paths: list[IngressPathInfo] = Field(default_factory=list)


class IngressInfo(BaseModel):
    """Ingress routing to one of the pod's services."""

    model_config = ConfigDict(frozen=True)

    name: str
    class_name: str = ""
    hosts: list[str] = Field(default_factory=list)
    tls: bool = False
    tls_secrets: list[str] = Field(default_factory=list)
    rules: list[IngressRuleInfo] = Field(default_factory=list)
    annotations: dict[str, str] = Field(default_factory=dict)


class VirtualServiceRoute(BaseModel):
    """Summarised HTTP route destination."""

    model_config = ConfigDict(frozen=True)

    match: str = "/*"
    destination: str = ""
    port: int = 0
    weight: int = 0
    subset: str = ""


class VirtualServiceInfo(BaseModel):
    """Istio VirtualService routing to one of the pod's services."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str = ""
    hosts: list[str] = Field(default_factory=list)
    gateways: list[str] = Field(default_factory=list)
    routes: list[VirtualServiceRoute] = Field(default_factory=list)


class GatewayServer(BaseModel):
    """Gateway listener."""

    model_config = ConfigDict(frozen=True)

    port: int = 0
    protocol: str = ""
    hosts: list[str] = Field(default_factory=list)
    tls: str = ""


class GatewayInfo(BaseModel):
    """Istio Gateway referenced by an included VirtualService."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    servers: list[GatewayServer] = Field(default_factory=list)


class RelatedResources(BaseModel):
    """A pod's neighborhood."""

    model_config = ConfigDict(frozen=True)

    owner: OwnerInfo | None = None
    services: list[ServiceInfo] = Field(default_factory=list)
    ingresses: list[IngressInfo] = Field(default_factory=list)
    virtual_services: list[VirtualServiceInfo] = Field(default_factory=list)
    gateways: list[GatewayInfo] = Field(default_factory=list)
    config_maps: list[str] = Field(default_factory=list)
    secrets: list[str] = Field(default_factory=list)
