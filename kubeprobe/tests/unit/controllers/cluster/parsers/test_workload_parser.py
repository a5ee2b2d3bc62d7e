"""Tests for WorkloadParser."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest

from kubeprobe.constants.enums import ResourceType, WorkloadStatus
from kubeprobe.controllers.cluster.parsers.workload_parser import (
    WorkloadParser,
    get_scale_resource_type,
    rollout_replicas,
)
from kubeprobe.errors import UnsupportedResourceError


def _object(name: str, spec: dict[str, Any] | None = None, status: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "metadata": {
            "name": name,
            "namespace": "default",
            "labels": {"app": name},
            "creationTimestamp": "2024-01-13T12:00:00Z",
        },
        "spec": spec or {},
        "status": status or {},
    }


@pytest.fixture
def parser(now: datetime) -> WorkloadParser:
    return WorkloadParser(now)


class TestReplicatedWorkloads:
    """Tests for Deployments, StatefulSets and DaemonSets."""

    def test_deployment_fully_ready(self, parser: WorkloadParser) -> None:
        """3/3 ready replicas render as Running."""
        deployment = _object(
            "web",
            spec={"selector": {"matchLabels": {"app": "web", "tier": "fe"}}},
            status={"replicas": 3, "readyReplicas": 3},
        )
        info = parser.parse_deployment(deployment)

        assert info.type is ResourceType.DEPLOYMENTS
        assert info.ready == "3/3"
        assert info.replicas == 3
        assert info.status == WorkloadStatus.RUNNING.value
        assert info.age == "2d"
        assert info.pod_selector == {"app": "web", "tier": "fe"}

    def test_stateful_set_progressing(self, parser: WorkloadParser) -> None:
        """Fewer ready than desired is Progressing."""
        info = parser.parse_stateful_set(_object("db", status={"replicas": 3, "readyReplicas": 1}))
        assert info.ready == "1/3"
        assert info.status == WorkloadStatus.PROGRESSING.value

    def test_scaled_to_zero_is_running(self, parser: WorkloadParser) -> None:
        """0/0 counts as Running."""
        assert parser.parse_deployment(_object("idle")).status == WorkloadStatus.RUNNING.value

    def test_daemon_set(self, parser: WorkloadParser) -> None:
        """DaemonSets use numberReady over desiredNumberScheduled."""
        info = parser.parse_daemon_set(_object("agent", status={"numberReady": 2, "desiredNumberScheduled": 3}))
        assert info.ready == "2/3"
        assert info.status == WorkloadStatus.PROGRESSING.value

    def test_selector_falls_back_to_labels(self, parser: WorkloadParser) -> None:
        """Without matchLabels the workload labels select its pods."""
        assert parser.parse_deployment(_object("web")).pod_selector == {"app": "web"}


class TestJobs:
    """Tests for Jobs and CronJobs."""

    def test_completed_job(self, parser: WorkloadParser) -> None:
        """Succeeded reaching completions is Completed."""
        info = parser.parse_job(_object("migrate", spec={"completions": 2}, status={"succeeded": 2}))
        assert info.ready == "2/2"
        assert info.status == WorkloadStatus.COMPLETED.value

    def test_failed_job_wins(self, parser: WorkloadParser) -> None:
        """Any failure marks the job Failed."""
        info = parser.parse_job(_object("migrate", status={"succeeded": 1, "failed": 1}))
        assert info.status == WorkloadStatus.FAILED.value

    def test_running_job_defaults_completions(self, parser: WorkloadParser) -> None:
        """Completions default to one."""
        info = parser.parse_job(_object("migrate"))
        assert info.ready == "0/1"
        assert info.status == WorkloadStatus.RUNNING.value

    def test_cron_job(self, parser: WorkloadParser) -> None:
        """CronJobs report active jobs and suspension."""
        active = parser.parse_cron_job(_object("nightly", status={"active": [{"name": "a"}, {"name": "b"}]}))
        assert active.ready == "2 active"
        assert active.status == WorkloadStatus.ACTIVE.value

        suspended = parser.parse_cron_job(_object("nightly", spec={"suspend": True}))
        assert suspended.status == WorkloadStatus.SUSPENDED.value


class TestRollouts:
    """Tests for Argo Rollouts decoded from untyped trees."""

    def test_float_counts_are_decoded(self) -> None:
        """JSON numbers arriving as floats decode to ints."""
        rollout = _object("canary", spec={"replicas": 4.0}, status={"readyReplicas": 2.0})
        assert rollout_replicas(rollout) == (2, 4)

    def test_available_fallback_and_default_desired(self) -> None:
        """Ready falls back to availableReplicas; desired defaults to one."""
        assert rollout_replicas(_object("canary", status={"availableReplicas": 1})) == (1, 1)

    def test_phase_and_unknown(self, parser: WorkloadParser) -> None:
        """status.phase is shown verbatim, Unknown when absent."""
        healthy = parser.parse_rollout(_object("canary", spec={"replicas": 2}, status={"phase": "Healthy"}))
        assert healthy.status == "Healthy"
        assert healthy.ready == "0/2"
        assert parser.parse_rollout(_object("canary")).status == WorkloadStatus.UNKNOWN.value


class TestScaleResourceType:
    """Tests for get_scale_resource_type."""

    @pytest.mark.parametrize(
        ("resource_type", "expected"),
        [
            ("deployments", "deployment"),
            ("statefulsets", "statefulset"),
            ("daemonsets", "daemonsets"),
            ("rollouts", "rollout"),
            (ResourceType.JOBS, "jobs"),
        ],
    )
    def test_mapping(self, resource_type: Any, expected: str) -> None:
        """Scalable kinds map to their kubectl names."""
        assert get_scale_resource_type(resource_type) == expected

    def test_unknown_type(self) -> None:
        """Unknown kinds are rejected."""
        with pytest.raises(UnsupportedResourceError):
            get_scale_resource_type("replicasets")
