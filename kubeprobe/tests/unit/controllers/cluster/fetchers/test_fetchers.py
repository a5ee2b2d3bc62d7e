"""Tests for the cluster fetchers."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from kubeprobe.controllers.cluster.fetchers.discovery_fetcher import APIResourceRef, DiscoveryFetcher
from kubeprobe.controllers.cluster.fetchers.event_fetcher import EventFetcher
from kubeprobe.controllers.cluster.fetchers.metrics_fetcher import MetricsFetcher
from kubeprobe.controllers.cluster.fetchers.network_fetcher import NetworkFetcher
from kubeprobe.controllers.cluster.fetchers.pod_fetcher import PodFetcher
from kubeprobe.controllers.cluster.fetchers.workload_fetcher import WorkloadFetcher
from kubeprobe.errors import TransportError, UnavailableError
from kubeprobe.models.logs.log_line import LogOptions


class TestEventFetcher:
    """Tests for EventFetcher."""

    def test_build_field_selector(self) -> None:
        """Selectors are joined in name, kind, type order."""
        assert (
            EventFetcher.build_field_selector(kind="Pod", name="web", event_type="Warning")
            == "involvedObject.name=web,involvedObject.kind=Pod,type=Warning"
        )
        assert EventFetcher.build_field_selector() == ""

    @pytest.mark.asyncio
    async def test_timeout_is_retried_once(self, fake_client: MagicMock) -> None:
        """A timeout-like failure is retried with the longer timeout."""
        fake_client.call = AsyncMock(
            side_effect=[TransportError("read timed out"), {"items": [{"reason": "BackOff"}]}]
        )

        events = await EventFetcher(fake_client).fetch_object_events_raw("default", "Pod", "web")

        assert events == [{"reason": "BackOff"}]
        assert fake_client.call.await_count == 2
        second = fake_client.call.await_args_list[1]
        assert second.kwargs["_request_timeout"] == 45.0
        assert second.kwargs["field_selector"] == "involvedObject.name=web,involvedObject.kind=Pod"

    @pytest.mark.asyncio
    async def test_configured_timeout_drives_both_attempts(self, fake_client: MagicMock) -> None:
        """The configured request timeout is used first and scaled for the retry."""
        fake_client.call = AsyncMock(side_effect=[TransportError("deadline exceeded"), {"items": []}])

        await EventFetcher(fake_client, request_timeout=10.0).fetch_events_raw("default")

        timeouts = [call.kwargs["_request_timeout"] for call in fake_client.call.await_args_list]
        assert timeouts == [10.0, 15.0]

    @pytest.mark.asyncio
    async def test_non_timeout_error_propagates(self, fake_client: MagicMock) -> None:
        """Other transport errors are not retried."""
        fake_client.call = AsyncMock(side_effect=TransportError("403: forbidden", status=403))

        with pytest.raises(TransportError):
            await EventFetcher(fake_client).fetch_warning_events_raw("default")
        assert fake_client.call.await_count == 1


class TestPodFetcher:
    """Tests for PodFetcher."""

    def test_build_log_args(self) -> None:
        """Only meaningful options are sent."""
        args = PodFetcher._build_log_args(
            LogOptions(container="app", tail_lines=50, since=timedelta(minutes=5), previous=True)
        )
        assert args == {
            "timestamps": True,
            "container": "app",
            "tail_lines": 50,
            "since_seconds": 300,
            "previous": True,
        }

    def test_unlimited_log_args(self) -> None:
        """Zero tail and since are omitted."""
        assert PodFetcher._build_log_args(LogOptions(tail_lines=0, timestamps=False)) == {"timestamps": False}

    @pytest.mark.asyncio
    async def test_fetch_pods_with_selector(self, fake_client: MagicMock) -> None:
        """Label selectors are forwarded to the list call."""
        fake_client.core.list_namespaced_pod.return_value = {"items": [{"metadata": {"name": "a"}}]}

        pods = await PodFetcher(fake_client).fetch_pods("default", label_selector="app=web")

        assert pods == [{"metadata": {"name": "a"}}]
        fake_client.core.list_namespaced_pod.assert_called_once_with("default", label_selector="app=web")

    @pytest.mark.asyncio
    async def test_fetch_logs_streams(self, fake_client: MagicMock) -> None:
        """Logs are read through the streaming helper."""
        fake_client.stream.return_value = ["line"]

        result = await PodFetcher(fake_client).fetch_logs("default", "web", LogOptions(container="app"))

        assert result == ["line"]
        args = fake_client.stream.await_args
        assert args.args[0] is fake_client.core.read_namespaced_pod_log
        assert args.args[2:] == ("web", "default")
        assert args.kwargs["container"] == "app"


class TestWorkloadFetcher:
    """Tests for WorkloadFetcher."""

    @pytest.mark.asyncio
    async def test_rollouts_without_dynamic_client(self, fake_client: MagicMock) -> None:
        """No dynamic client means no rollouts."""
        fake_client.has_dynamic = False
        assert await WorkloadFetcher(fake_client).fetch_rollouts("default") == []
        fake_client.dynamic_list.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rollouts_missing_crd(self, fake_client: MagicMock) -> None:
        """A missing Rollout CRD yields an empty list."""
        fake_client.dynamic_list.side_effect = UnavailableError("no rollouts")
        assert await WorkloadFetcher(fake_client).fetch_rollouts("default") == []

    @pytest.mark.asyncio
    async def test_rollouts_use_configured_api_version(self, fake_client: MagicMock) -> None:
        """The configured Argo API version is used."""
        fake_client.dynamic_list.return_value = [{"metadata": {"name": "r"}}]
        fetcher = WorkloadFetcher(fake_client, rollout_api_version="argoproj.io/v1beta1")

        assert await fetcher.fetch_rollouts("default") == [{"metadata": {"name": "r"}}]
        fake_client.dynamic_list.assert_awaited_once_with("argoproj.io/v1beta1", "rollouts", "default")


class TestNetworkFetcher:
    """Tests for NetworkFetcher."""

    @pytest.mark.asyncio
    async def test_endpoint_slices_by_service_label(self, fake_client: MagicMock) -> None:
        """EndpointSlices are selected by the service-name label."""
        fake_client.discovery.list_namespaced_endpoint_slice.return_value = {"items": []}

        await NetworkFetcher(fake_client).fetch_endpoint_slices("default", "web")

        fake_client.discovery.list_namespaced_endpoint_slice.assert_called_once_with(
            "default", label_selector="kubernetes.io/service-name=web"
        )


class TestMetricsFetcher:
    """Tests for MetricsFetcher."""

    @pytest.mark.asyncio
    async def test_metrics_unavailable(self, fake_client: MagicMock) -> None:
        """Without metrics-server the fetch raises UnavailableError."""
        fake_client.metrics_available = False
        with pytest.raises(UnavailableError):
            await MetricsFetcher(fake_client).fetch_pod_metrics("default", "web")

    @pytest.mark.asyncio
    async def test_namespace_metrics(self, fake_client: MagicMock) -> None:
        """Namespace metrics list pods.metrics.k8s.io."""
        fake_client.custom.list_namespaced_custom_object.return_value = {"items": [{"metadata": {"name": "a"}}]}

        items = await MetricsFetcher(fake_client).fetch_namespace_metrics("default")

        assert items == [{"metadata": {"name": "a"}}]
        fake_client.custom.list_namespaced_custom_object.assert_called_once_with(
            "metrics.k8s.io", "v1beta1", "default", "pods"
        )


class TestDiscoveryFetcher:
    """Tests for DiscoveryFetcher."""

    @pytest.mark.parametrize(
        ("resource", "expected"),
        [
            ({"name": "pods", "namespaced": True, "verbs": ["get", "delete"]}, True),
            ({"name": "pods/log", "namespaced": True, "verbs": ["get", "delete"]}, False),
            ({"name": "nodes", "namespaced": False, "verbs": ["delete"]}, False),
            ({"name": "bindings", "namespaced": True, "verbs": ["create"]}, False),
        ],
    )
    def test_is_sweepable(self, resource: dict, expected: bool) -> None:
        """Only namespaced, deletable top-level resources are swept."""
        assert DiscoveryFetcher.is_sweepable(resource) is expected

    @pytest.mark.asyncio
    async def test_fetch_deletable_resources(self, fake_client: MagicMock) -> None:
        """Discovery lists are flattened into references."""
        fake_client.discover_api_resources.return_value = [
            {"groupVersion": "v1", "resources": [{"name": "configmaps", "kind": "ConfigMap", "namespaced": True, "verbs": ["delete"]}]},
            {"groupVersion": "apps/v1", "resources": [{"name": "deployments/scale", "namespaced": True, "verbs": ["delete"]}]},
        ]

        refs = await DiscoveryFetcher(fake_client).fetch_namespaced_deletable_resources()

        assert refs == [APIResourceRef(group_version="v1", name="configmaps", kind="ConfigMap")]
