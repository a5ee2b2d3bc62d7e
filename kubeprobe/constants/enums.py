"""All enum definitions for kubeprobe.

This module consolidates the closed value sets used across the adapter,
diagnostics and use-case layers.
"""

from __future__ import annotations

from enum import Enum

from kubeprobe.errors import UnsupportedResourceError

# =============================================================================
# Workload Enums
# =============================================================================


class ResourceType(Enum):
    """Workload kinds that can be listed, scaled and restarted."""

    PODS = "pods"
    DEPLOYMENTS = "deployments"
    STATEFULSETS = "statefulsets"
    DAEMONSETS = "daemonsets"
    JOBS = "jobs"
    CRONJOBS = "cronjobs"
    ROLLOUTS = "rollouts"

    @classmethod
    def parse(cls, value: ResourceType | str) -> ResourceType:
        """Resolve a resource type from its plural name.

        Raises:
            UnsupportedResourceError: If the value is not a known workload kind.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedResourceError(f"unsupported resource type: {value!r}") from None

    @property
    def kind(self) -> str:
        """Singular API kind for this resource type."""
        return _RESOURCE_KINDS[self]


_RESOURCE_KINDS = {
    ResourceType.PODS: "Pod",
    ResourceType.DEPLOYMENTS: "Deployment",
    ResourceType.STATEFULSETS: "StatefulSet",
    ResourceType.DAEMONSETS: "DaemonSet",
    ResourceType.JOBS: "Job",
    ResourceType.CRONJOBS: "CronJob",
    ResourceType.ROLLOUTS: "Rollout",
}


class WorkloadStatus(Enum):
    """Summarised workload health shown in list rows."""

    RUNNING = "Running"
    PROGRESSING = "Progressing"
    COMPLETED = "Completed"
    FAILED = "Failed"
    ACTIVE = "Active"
    SUSPENDED = "Suspended"
    HEALTHY = "Healthy"
    UNKNOWN = "Unknown"


# =============================================================================
# Status Enums
# =============================================================================


class NodeStatus(Enum):
    """Node status values from Kubernetes API."""

    READY = "Ready"
    NOT_READY = "NotReady"
    UNKNOWN = "Unknown"


class ContainerState(Enum):
    """Container lifecycle state reported by the kubelet."""

    RUNNING = "Running"
    WAITING = "Waiting"
    TERMINATED = "Terminated"


class EventType(Enum):
    """Kubernetes event types."""

    NORMAL = "Normal"
    WARNING = "Warning"


class Severity(Enum):
    """Severity levels for pod diagnostic hints."""

    HIGH = "High"
    MEDIUM = "Medium"
    WARNING = "Warning"


# =============================================================================
# Spec Decoding Enums
# =============================================================================


class ProbeType(Enum):
    """Probe handler kinds."""

    HTTP = "HTTP"
    TCP = "TCP"
    EXEC = "Exec"
    GRPC = "gRPC"


class MetricSourceType(Enum):
    """HorizontalPodAutoscaler metric source types."""

    RESOURCE = "Resource"
    PODS = "Pods"
    OBJECT = "Object"
    EXTERNAL = "External"
    CONTAINER_RESOURCE = "ContainerResource"


__all__ = [
    "ContainerState",
    "EventType",
    "MetricSourceType",
    "NodeStatus",
    "ProbeType",
    "ResourceType",
    "Severity",
    "WorkloadStatus",
]
