"""Heuristic pod issue analysis.

Each rule is independent and contributes zero or more hints; the result keeps
rule order: pod status first, then per-container limits, then events.
"""

from __future__ import annotations

from kubeprobe.constants.enums import EventType, Severity
from kubeprobe.models.core.pod_info import PodInfo
from kubeprobe.models.diagnostics.debug_helper import DebugHelper
from kubeprobe.models.events.event_info import EventInfo

FAILED_SCHEDULING_REASON = "FailedScheduling"

# status -> (issue, severity, suggestions)
_STATUS_RULES: dict[str, tuple[str, Severity, tuple[str, ...]]] = {
    "CrashLoopBackOff": (
        "CrashLoopBackOff",
        Severity.HIGH,
        (
            "Check container logs for crash reason",
            "Verify resource limits aren't too restrictive",
            "Check liveness probe configuration",
            "Look for application startup errors",
        ),
    ),
    "ImagePullBackOff": (
        "Image Pull Failed",
        Severity.HIGH,
        (
            "Verify image name and tag are correct",
            "Check image registry credentials",
            "Ensure node has network access to registry",
            "Verify image exists in the registry",
        ),
    ),
    "Pending": (
        "Pod Pending",
        Severity.MEDIUM,
        (
            "Check scheduler events for scheduling failures",
            "Verify node resources are available",
            "Check node selectors and tolerations",
            "Review resource requests against available capacity",
        ),
    ),
    "OOMKilled": (
        "Out of Memory",
        Severity.HIGH,
        (
            "Increase memory limits for the container",
            "Check for memory leaks in application",
            "Review memory usage patterns in metrics",
            "Consider horizontal scaling instead",
        ),
    ),
}
_STATUS_RULES["ErrImagePull"] = _STATUS_RULES["ImagePullBackOff"]


def _status_hint(status: str) -> DebugHelper | None:
    rule = _STATUS_RULES.get(status)
    if rule is None:
        return None
    issue, severity, suggestions = rule
    return DebugHelper(issue=issue, severity=severity, suggestions=list(suggestions))


def analyze_pod_issues(pod: PodInfo | None, events: list[EventInfo] | None = None) -> list[DebugHelper]:
    """Derive diagnostic hints from a pod and its recent events."""
    if pod is None:
        return []

    helpers: list[DebugHelper] = []

    status_hint = _status_hint(pod.status)
    if status_hint is not None:
        helpers.append(status_hint)

    for container in pod.containers:
        if container.resources.memory_limit in ("", "0"):
            helpers.append(
                DebugHelper(
                    issue=f"No memory limit on container {container.name}",
                    severity=Severity.WARNING,
                    suggestions=[
                        "Set memory limits to prevent OOM issues",
                        "Memory limits help with resource planning",
                    ],
                )
            )

    for event in events or []:
        if event.type == EventType.WARNING.value and event.reason == FAILED_SCHEDULING_REASON:
            helpers.append(
                DebugHelper(
                    issue="Scheduling Failed",
                    severity=Severity.HIGH,
                    suggestions=[event.message, "Check node resources and selectors"],
                )
            )

    return helpers
