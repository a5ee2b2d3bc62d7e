"""HorizontalPodAutoscaler models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from kubeprobe.constants.defaults import HPA_MIN_REPLICAS_DEFAULT


class HPAMetric(BaseModel):
    """Rendered metric target: (type, name, target, current)."""

    model_config = ConfigDict(frozen=True)

    type: str
    name: str
    target: str
    current: str = "<unknown>"


class HPACondition(BaseModel):
    """Autoscaler status condition."""

    model_config = ConfigDict(frozen=True)

    type: str
    status: str = "Unknown"
    reason: str = ""
    message: str = ""
    last_transition_time: datetime | None = None


class HPAInfo(BaseModel):
    """Autoscaler row."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    reference: str = ""
    targets: str = "<none>"
    min_replicas: int = HPA_MIN_REPLICAS_DEFAULT
    max_replicas: int = 0
    current_replicas: int = 0
    age: str = "Unknown"


class HPAData(BaseModel):
    """Autoscaler detail."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    reference: str = ""
    min_replicas: int = HPA_MIN_REPLICAS_DEFAULT
    max_replicas: int = 0
    current_replicas: int = 0
    desired_replicas: int = 0
    metrics: list[HPAMetric] = Field(default_factory=list)
    conditions: list[HPACondition] = Field(default_factory=list)
    last_scale_time: datetime | None = None
    age: str = "Unknown"
