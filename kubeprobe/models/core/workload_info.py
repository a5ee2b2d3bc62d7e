"""Workload list-row models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from kubeprobe.constants.enums import ResourceType


class WorkloadInfo(BaseModel):
    """Summary row for a workload controller or a bare pod."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    type: ResourceType
    ready: str = "0/0"
    replicas: int = 0
    age: str = "Unknown"
    status: str = "Unknown"
    labels: dict[str, str] = Field(default_factory=dict)
    # spec.selector.matchLabels when the controller declares one
    selector: dict[str, str] = Field(default_factory=dict)
    restart_count: int = 0
    created_at: datetime | None = None

    @property
    def pod_selector(self) -> dict[str, str]:
        """Labels used to find the pods managed by this workload."""
        return self.selector or self.labels
