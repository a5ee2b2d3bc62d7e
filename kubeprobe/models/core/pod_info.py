"""Pod detail models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from kubeprobe.constants.defaults import TERMINATION_GRACE_PERIOD_DEFAULT


class ProbeInfo(BaseModel):
    """Decoded liveness/readiness/startup probe."""

    model_config = ConfigDict(frozen=True)

    type: str = ""
    path: str = ""
    port: int = 0
    scheme: str = ""
    command: list[str] = Field(default_factory=list)
    initial_delay: int = 0
    period: int = 0
    timeout: int = 0
    success_threshold: int = 0
    failure_threshold: int = 0


class ResourceRequirementsInfo(BaseModel):
    """Container requests and limits as quantity strings."""

    model_config = ConfigDict(frozen=True)

    cpu_request: str = ""
    cpu_limit: str = ""
    memory_request: str = ""
    memory_limit: str = ""


class ContainerPortInfo(BaseModel):
    """Exposed container port."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    container_port: int = 0
    protocol: str = "TCP"


class VolumeMountInfo(BaseModel):
    """Volume mount within a container."""

    model_config = ConfigDict(frozen=True)

    name: str
    mount_path: str = ""
    read_only: bool = False
    sub_path: str = ""


class SecurityContextInfo(BaseModel):
    """Container security settings."""

    model_config = ConfigDict(frozen=True)

    run_as_user: int | None = None
    run_as_group: int | None = None
    run_as_non_root: bool | None = None
    privileged: bool | None = None
    read_only_root_filesystem: bool | None = None
    allow_privilege_escalation: bool | None = None


class ContainerInfo(BaseModel):
    """Per-container view merged from spec and status."""

    model_config = ConfigDict(frozen=True)

    name: str
    image: str = ""
    image_pull_policy: str = ""
    ready: bool = False
    restart_count: int = 0
    state: str = ""
    reason: str = ""
    message: str = ""
    started_at: datetime | None = None
    finished_at: datetime | None = None
    exit_code: int | None = None
    resources: ResourceRequirementsInfo = Field(default_factory=ResourceRequirementsInfo)
    ports: list[ContainerPortInfo] = Field(default_factory=list)
    liveness_probe: ProbeInfo | None = None
    readiness_probe: ProbeInfo | None = None
    startup_probe: ProbeInfo | None = None
    security_context: SecurityContextInfo | None = None
    env_count: int = 0
    volume_mounts: list[VolumeMountInfo] = Field(default_factory=list)
    config_map_refs: list[str] = Field(default_factory=list)
    secret_refs: list[str] = Field(default_factory=list)


class VolumeInfo(BaseModel):
    """Pod volume with the ConfigMaps/Secrets it projects."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = "Other"
    source: str = ""
    config_map_refs: list[str] = Field(default_factory=list)
    secret_refs: list[str] = Field(default_factory=list)


class TolerationInfo(BaseModel):
    """Pod toleration for node taints."""

    model_config = ConfigDict(frozen=True)

    key: str = ""
    operator: str = ""
    value: str = ""
    effect: str = ""
    toleration_seconds: int | None = None


class PodConditionInfo(BaseModel):
    """Pod status condition."""

    model_config = ConfigDict(frozen=True)

    type: str
    status: str = "Unknown"
    reason: str = ""
    message: str = ""
    last_transition_time: datetime | None = None


class PodInfo(BaseModel):
    """Detail view of a pod."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    node: str = ""
    ip: str = ""
    host_ip: str = ""
    phase: str = "Unknown"
    status: str = "Unknown"
    ready: str = "0/0"
    restarts: int = 0
    age: str = "Unknown"
    created_at: datetime | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    containers: list[ContainerInfo] = Field(default_factory=list)
    init_containers: list[ContainerInfo] = Field(default_factory=list)
    conditions: list[PodConditionInfo] = Field(default_factory=list)
    owner_kind: str = ""
    owner_name: str = ""
    qos_class: str = ""
    service_account: str = ""
    volumes: list[VolumeInfo] = Field(default_factory=list)
    restart_policy: str = ""
    dns_policy: str = ""
    priority_class_name: str = ""
    priority: int | None = None
    node_selector: dict[str, str] = Field(default_factory=dict)
    tolerations: list[TolerationInfo] = Field(default_factory=list)
    termination_grace_period: int = TERMINATION_GRACE_PERIOD_DEFAULT
    start_time: datetime | None = None
    deletion_timestamp: datetime | None = None

    @property
    def container_names(self) -> list[str]:
        """Names of the regular containers in spec order."""
        return [container.name for container in self.containers]
