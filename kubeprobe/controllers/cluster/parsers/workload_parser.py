"""Workload parser for cluster controller - parses controllers into WorkloadInfo rows."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from kubeprobe.constants.defaults import JOB_COMPLETIONS_DEFAULT, ROLLOUT_REPLICAS_DEFAULT
from kubeprobe.constants.enums import ResourceType, WorkloadStatus
from kubeprobe.controllers.cluster.parsers.pod_parser import (
    count_ready_containers,
    get_pod_status,
    sum_restarts,
)
from kubeprobe.models.core.workload_info import WorkloadInfo
from kubeprobe.utils.resource_parser import to_int
from kubeprobe.utils.timestamps import format_age, parse_iso_timestamp

_SCALE_RESOURCE_TYPES = {
    ResourceType.DEPLOYMENTS: "deployment",
    ResourceType.STATEFULSETS: "statefulset",
    # DaemonSets are not scalable; the plural literal is kept as-is.
    ResourceType.DAEMONSETS: "daemonsets",
    ResourceType.ROLLOUTS: "rollout",
}


def get_scale_resource_type(resource_type: ResourceType | str) -> str:
    """Return the kubectl resource name used when scaling a workload type."""
    parsed = ResourceType.parse(resource_type)
    return _SCALE_RESOURCE_TYPES.get(parsed, parsed.value)


def replica_status(ready: int, desired: int) -> str:
    """Running when every desired replica is ready (0/0 included), else Progressing."""
    if ready == desired:
        return WorkloadStatus.RUNNING.value
    return WorkloadStatus.PROGRESSING.value


def job_status(job: dict[str, Any]) -> str:
    """Derive Job status: Failed, then Completed, else Running."""
    spec = job.get("spec") or {}
    status = job.get("status") or {}
    if to_int(status.get("failed")) > 0:
        return WorkloadStatus.FAILED.value
    completions = to_int(spec.get("completions"), JOB_COMPLETIONS_DEFAULT)
    if to_int(status.get("succeeded")) >= completions:
        return WorkloadStatus.COMPLETED.value
    return WorkloadStatus.RUNNING.value


def cron_job_status(cron_job: dict[str, Any]) -> str:
    """Suspended when spec.suspend is true, else Active."""
    if (cron_job.get("spec") or {}).get("suspend") is True:
        return WorkloadStatus.SUSPENDED.value
    return WorkloadStatus.ACTIVE.value


def rollout_replicas(rollout: dict[str, Any]) -> tuple[int, int]:
    """Return (ready, desired) for a Rollout decoded from an untyped tree.

    Ready prefers status.readyReplicas and falls back to availableReplicas;
    desired defaults to 1 when spec.replicas is absent.
    """
    spec = rollout.get("spec") or {}
    status = rollout.get("status") or {}
    ready_raw = status.get("readyReplicas")
    if ready_raw is None:
        ready_raw = status.get("availableReplicas")
    desired = to_int(spec.get("replicas"), ROLLOUT_REPLICAS_DEFAULT)
    return to_int(ready_raw), desired


class WorkloadParser:
    """Parses workload controllers into list rows."""

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now

    def _base_fields(self, obj: dict[str, Any], resource_type: ResourceType) -> dict[str, Any]:
        metadata = obj.get("metadata") or {}
        spec = obj.get("spec") or {}
        created_at = parse_iso_timestamp(metadata.get("creationTimestamp"))
        return {
            "name": metadata.get("name") or "",
            "namespace": metadata.get("namespace") or "",
            "type": resource_type,
            "age": format_age(created_at, self._now),
            "created_at": created_at,
            "labels": metadata.get("labels") or {},
            "selector": (spec.get("selector") or {}).get("matchLabels") or {},
        }

    def parse_deployment(self, deployment: dict[str, Any]) -> WorkloadInfo:
        """Parse a Deployment row."""
        return self._parse_replicated(deployment, ResourceType.DEPLOYMENTS)

    def parse_stateful_set(self, stateful_set: dict[str, Any]) -> WorkloadInfo:
        """Parse a StatefulSet row."""
        return self._parse_replicated(stateful_set, ResourceType.STATEFULSETS)

    def _parse_replicated(self, obj: dict[str, Any], resource_type: ResourceType) -> WorkloadInfo:
        status = obj.get("status") or {}
        ready = to_int(status.get("readyReplicas"))
        desired = to_int(status.get("replicas"))
        return WorkloadInfo(
            **self._base_fields(obj, resource_type),
            ready=f"{ready}/{desired}",
            replicas=desired,
            status=replica_status(ready, desired),
        )

    def parse_daemon_set(self, daemon_set: dict[str, Any]) -> WorkloadInfo:
        """Parse a DaemonSet row."""
        status = daemon_set.get("status") or {}
        ready = to_int(status.get("numberReady"))
        desired = to_int(status.get("desiredNumberScheduled"))
        return WorkloadInfo(
            **self._base_fields(daemon_set, ResourceType.DAEMONSETS),
            ready=f"{ready}/{desired}",
            replicas=desired,
            status=replica_status(ready, desired),
        )

    def parse_job(self, job: dict[str, Any]) -> WorkloadInfo:
        """Parse a Job row; ready is "succeeded/completions"."""
        spec = job.get("spec") or {}
        status = job.get("status") or {}
        completions = to_int(spec.get("completions"), JOB_COMPLETIONS_DEFAULT)
        return WorkloadInfo(
            **self._base_fields(job, ResourceType.JOBS),
            ready=f"{to_int(status.get('succeeded'))}/{completions}",
            replicas=completions,
            status=job_status(job),
        )

    def parse_cron_job(self, cron_job: dict[str, Any]) -> WorkloadInfo:
        """Parse a CronJob row; ready is "<n> active"."""
        active = (cron_job.get("status") or {}).get("active") or []
        return WorkloadInfo(
            **self._base_fields(cron_job, ResourceType.CRONJOBS),
            ready=f"{len(active)} active",
            replicas=len(active),
            status=cron_job_status(cron_job),
        )

    def parse_pod_row(self, pod: dict[str, Any]) -> WorkloadInfo:
        """Parse a bare pod as a degenerate workload row."""
        fields = self._base_fields(pod, ResourceType.PODS)
        fields["selector"] = {}
        return WorkloadInfo(
            **fields,
            ready=count_ready_containers(pod),
            replicas=1,
            status=get_pod_status(pod),
            restart_count=sum_restarts(pod),
        )

    def parse_rollout(self, rollout: dict[str, Any]) -> WorkloadInfo:
        """Parse an Argo Rollout row; status is status.phase or Unknown."""
        ready, desired = rollout_replicas(rollout)
        phase = (rollout.get("status") or {}).get("phase")
        return WorkloadInfo(
            **self._base_fields(rollout, ResourceType.ROLLOUTS),
            ready=f"{ready}/{desired}",
            replicas=desired,
            status=phase if isinstance(phase, str) and phase else WorkloadStatus.UNKNOWN.value,
        )

    def parse(self, obj: dict[str, Any], resource_type: ResourceType) -> WorkloadInfo:
        """Dispatch to the parser for ``resource_type``."""
        parsers = {
            ResourceType.PODS: self.parse_pod_row,
            ResourceType.DEPLOYMENTS: self.parse_deployment,
            ResourceType.STATEFULSETS: self.parse_stateful_set,
            ResourceType.DAEMONSETS: self.parse_daemon_set,
            ResourceType.JOBS: self.parse_job,
            ResourceType.CRONJOBS: self.parse_cron_job,
            ResourceType.ROLLOUTS: self.parse_rollout,
        }
        return parsers[resource_type](obj)
