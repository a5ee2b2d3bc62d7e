"""Tests for ClusterController read paths."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import MagicMock

import pytest

from kubeprobe.constants.enums import ResourceType
from kubeprobe.controllers.cluster.controller import ClusterController, build_label_selector
from kubeprobe.errors import NotFoundError, TransportError
from kubeprobe.models.core.workload_info import WorkloadInfo
from kubeprobe.models.logs.log_line import LogLine
from kubeprobe.models.state.app_settings import AppSettings


def _ts(minute: int) -> datetime:
    return datetime(2024, 1, 15, 11, minute, tzinfo=timezone.utc)


def _named(name: str, **extra: Any) -> dict[str, Any]:
    return {"metadata": {"name": name, "namespace": "default"}, **extra}


@pytest.fixture
def controller(fake_client: MagicMock) -> ClusterController:
    return ClusterController(fake_client, AppSettings(kubeconfig_path="/nonexistent/kubeconfig"))


class TestHelpers:
    """Tests for module helpers."""

    def test_build_label_selector(self) -> None:
        """Keys are sorted."""
        assert build_label_selector({"tier": "fe", "app": "web"}) == "app=web,tier=fe"


class TestConnectionAndContext:
    """Tests for connectivity and kubeconfig context."""

    @pytest.mark.asyncio
    async def test_check_connection(self, controller: ClusterController, fake_client: MagicMock) -> None:
        """A failing namespace list reports a dead connection."""
        fake_client.core.list_namespace.return_value = {"items": []}
        assert await controller.check_connection() is True

        fake_client.core.list_namespace.side_effect = TransportError("connection refused")
        assert await controller.check_connection() is False

    def test_current_context_from_client(self, controller: ClusterController) -> None:
        """The client context wins over kubeconfig."""
        assert controller.get_current_context() == "test-context"
        assert controller.list_contexts() == ([], "test-context")


class TestNamespaces:
    """Tests for namespace listing."""

    @pytest.mark.asyncio
    async def test_sorted_and_active_filter(self, controller: ClusterController, fake_client: MagicMock) -> None:
        """Names are sorted; the active filter drops Terminating namespaces."""
        fake_client.core.list_namespace.return_value = {
            "items": [
                {"metadata": {"name": "prod"}, "status": {"phase": "Active"}},
                {"metadata": {"name": "default"}, "status": {"phase": "Active"}},
                {"metadata": {"name": "old"}, "status": {"phase": "Terminating"}},
            ]
        }
        assert await controller.list_namespaces() == ["default", "old", "prod"]
        assert await controller.list_active_namespace_names() == ["default", "prod"]


class TestWorkloads:
    """Tests for workload listing and pod resolution."""

    @pytest.mark.asyncio
    async def test_list_deployments_sorted(self, controller: ClusterController, fake_client: MagicMock) -> None:
        """Rows are parsed and sorted by name."""
        fake_client.apps.list_namespaced_deployment.return_value = {
            "items": [
                _named("web", status={"replicas": 2, "readyReplicas": 2}),
                _named("api", status={"replicas": 1, "readyReplicas": 0}),
            ]
        }
        rows = await controller.list_workloads("default", ResourceType.DEPLOYMENTS)
        assert [(row.name, row.ready) for row in rows] == [("api", "0/1"), ("web", "2/2")]

    @pytest.mark.asyncio
    async def test_list_workloads_accepts_plural_names(
        self, controller: ClusterController, fake_client: MagicMock
    ) -> None:
        """Plural strings resolve to resource types; rollouts go through the dynamic client."""
        fake_client.dynamic_list.return_value = [_named("canary", status={"phase": "Healthy"})]
        rows = await controller.list_workloads("default", "rollouts")
        assert [(row.name, row.status) for row in rows] == [("canary", "Healthy")]

    @pytest.mark.asyncio
    async def test_workload_pods_by_selector(
        self, controller: ClusterController, fake_client: MagicMock, pod_factory: Any
    ) -> None:
        """Pods are listed with the workload selector."""
        fake_client.core.list_namespaced_pod.return_value = {
            "items": [pod_factory("web-b"), pod_factory("web-a")]
        }
        workload = WorkloadInfo(
            name="web", namespace="default", type=ResourceType.DEPLOYMENTS, selector={"app": "web"}
        )

        pods = await controller.get_workload_pods(workload)

        assert [pod.name for pod in pods] == ["web-a", "web-b"]
        fake_client.core.list_namespaced_pod.assert_called_once_with("default", label_selector="app=web")

    @pytest.mark.asyncio
    async def test_workload_without_selector_has_no_pods(
        self, controller: ClusterController, fake_client: MagicMock
    ) -> None:
        """An empty selector never lists the whole namespace."""
        workload = WorkloadInfo(name="odd", namespace="default", type=ResourceType.JOBS)
        assert await controller.get_workload_pods(workload) == []
        fake_client.core.list_namespaced_pod.assert_not_called()

    @pytest.mark.asyncio
    async def test_workload_events(
        self, controller: ClusterController, fake_client: MagicMock, pod_factory: Any
    ) -> None:
        """Events of the workload and its pods are kept, others dropped."""
        fake_client.core.list_namespaced_pod.return_value = {"items": [pod_factory("web-a")]}
        fake_client.core.list_namespaced_event.return_value = {
            "items": [
                {"involvedObject": {"kind": "Deployment", "name": "web"}, "reason": "ScalingReplicaSet"},
                {"involvedObject": {"kind": "Pod", "name": "web-a"}, "reason": "Pulled"},
                {"involvedObject": {"kind": "Pod", "name": "other"}, "reason": "Pulled"},
            ]
        }
        workload = WorkloadInfo(
            name="web", namespace="default", type=ResourceType.DEPLOYMENTS, selector={"app": "web"}
        )

        events = await controller.get_workload_events(workload)

        assert sorted(event.object for event in events) == ["Deployment/web", "Pod/web-a"]


class TestLogs:
    """Tests for multi-container log merging."""

    @pytest.mark.asyncio
    async def test_all_container_logs_merge_and_skip(
        self, controller: ClusterController, fake_client: MagicMock, pod_factory: Any
    ) -> None:
        """Logs are merged by timestamp and failing containers are skipped."""
        fake_client.core.read_namespaced_pod.return_value = pod_factory(
            containers=[{"name": "app"}, {"name": "sidecar"}, {"name": "broken"}]
        )
        lines = {
            "app": [LogLine(timestamp=_ts(1), container="app", content="a1"), LogLine(timestamp=_ts(5), container="app", content="a5")],
            "sidecar": [LogLine(timestamp=_ts(3), container="sidecar", content="s3")],
        }

        def _stream(method: Any, consume: Any, name: str, namespace: str, **kwargs: Any) -> list[LogLine]:
            if kwargs["container"] == "broken":
                raise TransportError("container not running", status=400)
            assert kwargs["tail_lines"] == 10
            return lines[kwargs["container"]]

        fake_client.stream.side_effect = _stream

        merged = await controller.get_all_container_logs("default", "web-abc", 30)

        assert [line.content for line in merged] == ["a1", "s3", "a5"]

    @pytest.mark.asyncio
    async def test_zero_tail_uses_per_container_floor(
        self, controller: ClusterController, fake_client: MagicMock, pod_factory: Any
    ) -> None:
        """A tail of 0 still requests the 10-line floor from each container."""
        fake_client.core.read_namespaced_pod.return_value = pod_factory(
            containers=[{"name": "app"}, {"name": "sidecar"}]
        )
        fake_client.stream.return_value = []

        await controller.get_all_container_logs("default", "web-abc", 0)

        assert [call.kwargs["tail_lines"] for call in fake_client.stream.await_args_list] == [10, 10]

    @pytest.mark.asyncio
    async def test_large_tail_is_passed_through(
        self, controller: ClusterController, fake_client: MagicMock, pod_factory: Any
    ) -> None:
        """Tails beyond the settings bound are valid requests."""
        fake_client.core.read_namespaced_pod.return_value = pod_factory(containers=[{"name": "app"}])
        fake_client.stream.return_value = []

        assert await controller.get_all_container_logs("default", "web-abc", 200_000) == []
        assert fake_client.stream.await_args.kwargs["tail_lines"] == 200_000

        await controller.get_previous_logs("default", "web-abc", "app", 250_000)
        assert fake_client.stream.await_args.kwargs["tail_lines"] == 250_000

    @pytest.mark.asyncio
    async def test_previous_logs_request(self, controller: ClusterController, fake_client: MagicMock) -> None:
        """Previous logs request the terminated instance."""
        fake_client.stream.return_value = []
        await controller.get_previous_logs("default", "web-abc", "app", 20)
        kwargs = fake_client.stream.await_args.kwargs
        assert kwargs["previous"] is True
        assert kwargs["tail_lines"] == 20


class TestNodes:
    """Tests for node listing."""

    @pytest.mark.asyncio
    async def test_list_nodes_counts_pods(self, controller: ClusterController, fake_client: MagicMock) -> None:
        """Pod counts come from the all-namespaces pod list."""
        fake_client.core.list_node.return_value = {"items": [{"metadata": {"name": "node-b"}}, {"metadata": {"name": "node-a"}}]}
        fake_client.core.list_pod_for_all_namespaces.return_value = {
            "items": [{"spec": {"nodeName": "node-a"}}, {"spec": {"nodeName": "node-a"}}, {"spec": {}}]
        }

        nodes = await controller.list_nodes()

        assert [(node.name, node.pod_count) for node in nodes] == [("node-a", 2), ("node-b", 0)]

    @pytest.mark.asyncio
    async def test_list_nodes_without_pod_access(
        self, controller: ClusterController, fake_client: MagicMock
    ) -> None:
        """Pod counts are best-effort."""
        fake_client.core.list_node.return_value = {"items": [{"metadata": {"name": "node-a"}}]}
        fake_client.core.list_pod_for_all_namespaces.side_effect = TransportError("forbidden", status=403)

        nodes = await controller.list_nodes()

        assert nodes[0].pod_count == 0


class TestEvents:
    """Tests for namespace events."""

    @pytest.mark.asyncio
    async def test_namespace_events_limit(self, controller: ClusterController, fake_client: MagicMock) -> None:
        """Events are newest first and truncated to the limit."""
        fake_client.core.list_namespaced_event.return_value = {
            "items": [
                {"reason": f"r{minute}", "lastTimestamp": f"2024-01-15T11:{minute:02d}:00Z"}
                for minute in (10, 30, 20)
            ]
        }
        events = await controller.get_namespace_events("default", 2)
        assert [event.reason for event in events] == ["r30", "r20"]
        assert len(await controller.get_namespace_events("default", 0)) == 3

    @pytest.mark.asyncio
    async def test_recent_warnings(self, controller: ClusterController, fake_client: MagicMock) -> None:
        """Only warnings inside the window are returned."""
        recent = datetime.now(timezone.utc) - timedelta(minutes=5)
        old = datetime.now(timezone.utc) - timedelta(hours=3)
        fake_client.core.list_namespaced_event.return_value = {
            "items": [
                {"type": "Warning", "reason": "recent", "lastTimestamp": recent.isoformat()},
                {"type": "Warning", "reason": "old", "lastTimestamp": old.isoformat()},
            ]
        }

        warnings = await controller.get_recent_warnings("default", timedelta(hours=1))

        assert [event.reason for event in warnings] == ["recent"]
        assert fake_client.core.list_namespaced_event.call_args.kwargs["field_selector"] == "type=Warning"


class TestConfig:
    """Tests for ConfigMap and Secret reads."""

    @pytest.mark.asyncio
    async def test_missing_secret(self, controller: ClusterController, fake_client: MagicMock) -> None:
        """Not found surfaces unchanged."""
        fake_client.core.read_namespaced_secret.side_effect = NotFoundError("secret not found")
        with pytest.raises(NotFoundError):
            await controller.get_secret("default", "missing")

    @pytest.mark.asyncio
    async def test_config_maps_sorted(self, controller: ClusterController, fake_client: MagicMock) -> None:
        """ConfigMap rows are sorted by name."""
        fake_client.core.list_namespaced_config_map.return_value = {"items": [_named("b"), _named("a", data={"k": "v"})]}
        rows = await controller.list_config_maps("default")
        assert [(row.name, row.keys) for row in rows] == [("a", 1), ("b", 0)]


class TestAutoscalers:
    """Tests for autoscaler listing with rendered targets."""

    @staticmethod
    def _hpa(name: str) -> dict[str, Any]:
        return {
            "metadata": {"name": name, "namespace": "default"},
            "spec": {
                "scaleTargetRef": {"kind": "Deployment", "name": name},
                "maxReplicas": 5,
                "metrics": [
                    {"type": "Resource", "resource": {"name": "cpu", "target": {"averageUtilization": 80}}},
                ],
            },
            "status": {
                "currentMetrics": [
                    {"type": "Resource", "resource": {"name": "cpu", "current": {"averageUtilization": 75}}},
                ],
            },
        }

    @pytest.mark.asyncio
    async def test_list_hpas_renders_targets(self, controller: ClusterController, fake_client: MagicMock) -> None:
        """Rows are sorted and carry the joined metric targets."""
        fake_client.autoscaling.list_namespaced_horizontal_pod_autoscaler.return_value = {
            "items": [self._hpa("worker"), self._hpa("api")]
        }

        rows = await controller.list_hpas("default")

        assert [(row.name, row.targets) for row in rows] == [("api", "cpu: 75%/80%"), ("worker", "cpu: 75%/80%")]

    @pytest.mark.asyncio
    async def test_get_hpa_renders_metrics(self, controller: ClusterController, fake_client: MagicMock) -> None:
        """Details carry one rendered metric per spec entry."""
        fake_client.autoscaling.read_namespaced_horizontal_pod_autoscaler.return_value = self._hpa("api")

        detail = await controller.get_hpa("default", "api")

        assert [(metric.name, metric.current, metric.target) for metric in detail.metrics] == [("cpu", "75%", "80%")]
