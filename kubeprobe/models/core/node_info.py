"""Node models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from kubeprobe.constants.enums import NodeStatus


class NodeInfo(BaseModel):
    """Node row."""

    model_config = ConfigDict(frozen=True)

    name: str
    status: NodeStatus = NodeStatus.UNKNOWN
    roles: str = "<none>"
    age: str = "Unknown"
    kubelet_version: str = ""
    internal_ip: str = ""
    pod_count: int = 0
    cpu: str = ""
    memory: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    unschedulable: bool = False
    created_at: datetime | None = None
