"""Constants module for kubeprobe.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- defaults.py: Default values for settings and options
- limits.py: Limit values (max/min)
- timeouts.py: Timeout values (seconds)
- patterns.py: Regex patterns and marker tables
"""

from kubeprobe.constants.enums import (
    ContainerState,
    EventType,
    MetricSourceType,
    NodeStatus,
    ProbeType,
    ResourceType,
    Severity,
    WorkloadStatus,
)

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
