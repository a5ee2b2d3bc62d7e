"""Cluster controller - implements the repository port against a live cluster.

This module is the orchestrator for cluster reads: it delegates raw access to
the fetchers, turns objects into view models with the parsers, and applies the
ordering guarantees (names ascending, events newest first, merged logs oldest
first). Write paths are delegated to ``ResourceActions``.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any

from kubeprobe.constants.enums import ResourceType
from kubeprobe.constants.limits import MIN_TAIL_LINES_PER_CONTAINER
from kubeprobe.controllers.base import KubernetesRepository
from kubeprobe.controllers.cluster.actions import ResourceActions
from kubeprobe.controllers.cluster.client import ClusterClient
from kubeprobe.controllers.cluster.fetchers import (
    ConfigFetcher,
    DiscoveryFetcher,
    EventFetcher,
    HPAFetcher,
    MetricsFetcher,
    NamespaceFetcher,
    NetworkFetcher,
    NodeFetcher,
    PodFetcher,
    WorkloadFetcher,
)
from kubeprobe.controllers.cluster.kubeconfig import load_kubeconfig_contexts
from kubeprobe.controllers.cluster.parsers import (
    ConfigParser,
    EventParser,
    HPAParser,
    MetricsParser,
    NamespaceParser,
    NodeParser,
    PodParser,
    WorkloadParser,
)
from kubeprobe.diagnostics.hpa_targets import format_hpa_targets, render_hpa_metrics
from kubeprobe.diagnostics.log_filters import sort_logs_by_time
from kubeprobe.diagnostics.related import RelatedResourcesResolver
from kubeprobe.errors import ClusterError
from kubeprobe.models.core.config_info import ConfigMapData, ConfigMapInfo, SecretData, SecretInfo
from kubeprobe.models.core.hpa_info import HPAData, HPAInfo
from kubeprobe.models.core.namespace_info import ForceDeleteResult, NamespaceInfo
from kubeprobe.models.core.node_info import NodeInfo
from kubeprobe.models.core.pod_info import PodInfo
from kubeprobe.models.core.related_info import RelatedResources
from kubeprobe.models.core.workload_info import WorkloadInfo
from kubeprobe.models.events.event_info import EventInfo
from kubeprobe.models.logs.log_line import LogLine, LogOptions
from kubeprobe.models.metrics.pod_metrics import PodMetrics
from kubeprobe.models.state.app_settings import AppSettings

logger = logging.getLogger(__name__)


def build_label_selector(labels: dict[str, str]) -> str:
    """Render labels as a "k=v,k2=v2" selector with keys sorted."""
    return ",".join(f"{key}={value}" for key, value in sorted(labels.items()))


class ClusterController(KubernetesRepository):
    """Kubernetes repository backed by a ``ClusterClient``."""

    _ACTIVE_PHASE = "Active"

    def __init__(self, client: ClusterClient, settings: AppSettings | None = None) -> None:
        self._client = client
        self._settings = settings or AppSettings()

        self._namespace_fetcher = NamespaceFetcher(client)
        self._workload_fetcher = WorkloadFetcher(client, self._settings.rollout_api_version)
        self._pod_fetcher = PodFetcher(client)
        self._event_fetcher = EventFetcher(client, self._settings.request_timeout)
        self._metrics_fetcher = MetricsFetcher(client)
        self._config_fetcher = ConfigFetcher(client)
        self._hpa_fetcher = HPAFetcher(client)
        self._node_fetcher = NodeFetcher(client)
        self._network_fetcher = NetworkFetcher(client, self._settings.istio_api_version)
        self._discovery_fetcher = DiscoveryFetcher(client)

        self._namespace_parser = NamespaceParser()
        self._workload_parser = WorkloadParser()
        self._pod_parser = PodParser()
        self._event_parser = EventParser()
        self._metrics_parser = MetricsParser()
        self._config_parser = ConfigParser()
        self._hpa_parser = HPAParser()
        self._node_parser = NodeParser()

        self._related = RelatedResourcesResolver(self._workload_fetcher, self._network_fetcher)
        self._actions = ResourceActions(
            client,
            self._workload_fetcher,
            self._namespace_fetcher,
            self._config_fetcher,
            self._discovery_fetcher,
        )

    @property
    def settings(self) -> AppSettings:
        return self._settings

    async def check_connection(self) -> bool:
        try:
            await self._client.call(self._client.core.list_namespace, limit=1)
        except ClusterError as exc:
            logger.debug("Cluster connection check failed: %s", exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Namespaces
    # ------------------------------------------------------------------

    async def list_namespace_infos(self) -> list[NamespaceInfo]:
        namespaces = await self._namespace_fetcher.fetch_namespaces()
        infos = [self._namespace_parser.parse_namespace(ns) for ns in namespaces]
        return sorted(infos, key=lambda info: info.name)

    async def list_namespaces(self) -> list[str]:
        return [info.name for info in await self.list_namespace_infos()]

    async def list_active_namespace_names(self) -> list[str]:
        return [
            info.name
            for info in await self.list_namespace_infos()
            if info.status == self._ACTIVE_PHASE
        ]

    # ------------------------------------------------------------------
    # Workloads
    # ------------------------------------------------------------------

    async def list_workloads(self, namespace: str, resource_type: ResourceType) -> list[WorkloadInfo]:
        resource_type = ResourceType.parse(resource_type)
        if resource_type is ResourceType.ROLLOUTS:
            return await self.list_rollouts(namespace)

        list_methods = {
            ResourceType.PODS: self._pod_fetcher.fetch_pods,
            ResourceType.DEPLOYMENTS: self._workload_fetcher.fetch_deployments,
            ResourceType.STATEFULSETS: self._workload_fetcher.fetch_stateful_sets,
            ResourceType.DAEMONSETS: self._workload_fetcher.fetch_daemon_sets,
            ResourceType.JOBS: self._workload_fetcher.fetch_jobs,
            ResourceType.CRONJOBS: self._workload_fetcher.fetch_cron_jobs,
        }
        items = await list_methods[resource_type](namespace)
        workloads = [self._workload_parser.parse(item, resource_type) for item in items]
        return sorted(workloads, key=lambda workload: workload.name)

    async def list_rollouts(self, namespace: str) -> list[WorkloadInfo]:
        items = await self._workload_fetcher.fetch_rollouts(namespace)
        rollouts = [self._workload_parser.parse_rollout(item) for item in items]
        return sorted(rollouts, key=lambda rollout: rollout.name)

    async def get_workload_pods(self, workload: WorkloadInfo) -> list[PodInfo]:
        """Pods managed by a workload; a pod row resolves to itself."""
        if workload.type is ResourceType.PODS:
            return [await self.get_pod(workload.namespace, workload.name)]
        selector = workload.pod_selector
        if not selector:
            return []
        pods = await self._pod_fetcher.fetch_pods(
            workload.namespace, label_selector=build_label_selector(selector)
        )
        return sorted((self._pod_parser.parse_pod(pod) for pod in pods), key=lambda pod: pod.name)

    async def get_workload_events(self, workload: WorkloadInfo) -> list[EventInfo]:
        """Events of the workload object and of the pods it manages."""
        try:
            pod_names = {pod.name for pod in await self.get_workload_pods(workload)}
        except ClusterError as exc:
            logger.debug("Pods of %s/%s unavailable for events: %s", workload.namespace, workload.name, exc)
            pod_names = set()

        kind = workload.type.kind
        raw_events = await self._event_fetcher.fetch_events_raw(workload.namespace)
        events = self._event_parser.parse_events(raw_events)
        return [
            event
            for event in events
            if (event.involved_kind == kind and event.involved_name == workload.name)
            or (event.involved_kind == "Pod" and event.involved_name in pod_names)
        ]

    async def get_deployment(self, namespace: str, name: str) -> dict[str, Any]:
        return await self._workload_fetcher.fetch_deployment(namespace, name)

    async def get_stateful_set(self, namespace: str, name: str) -> dict[str, Any]:
        return await self._workload_fetcher.fetch_stateful_set(namespace, name)

    async def get_daemon_set(self, namespace: str, name: str) -> dict[str, Any]:
        return await self._workload_fetcher.fetch_daemon_set(namespace, name)

    async def get_job(self, namespace: str, name: str) -> dict[str, Any]:
        return await self._workload_fetcher.fetch_job(namespace, name)

    async def get_rollout(self, namespace: str, name: str) -> dict[str, Any]:
        return await self._workload_fetcher.fetch_rollout(namespace, name)

    # ------------------------------------------------------------------
    # Pods
    # ------------------------------------------------------------------

    async def get_pod(self, namespace: str, name: str) -> PodInfo:
        return self._pod_parser.parse_pod(await self._pod_fetcher.fetch_pod(namespace, name))

    async def list_all_pods(self, namespace: str) -> list[PodInfo]:
        pods = await self._pod_fetcher.fetch_pods(namespace)
        return sorted((self._pod_parser.parse_pod(pod) for pod in pods), key=lambda pod: pod.name)

    async def list_pods_by_node(self, node_name: str) -> list[PodInfo]:
        pods = await self._pod_fetcher.fetch_all_namespaces_pods(field_selector=f"spec.nodeName={node_name}")
        return sorted(
            (self._pod_parser.parse_pod(pod) for pod in pods),
            key=lambda pod: (pod.namespace, pod.name),
        )

    async def delete_pod(self, namespace: str, name: str) -> None:
        logger.info("kubectl delete pod %s -n %s", name, namespace)
        await self._pod_fetcher.delete_pod(namespace, name)

    async def get_pod_logs(self, namespace: str, pod_name: str, options: LogOptions) -> list[LogLine]:
        return await self._pod_fetcher.fetch_logs(namespace, pod_name, options)

    async def _container_logs_or_empty(
        self, namespace: str, pod_name: str, options: LogOptions
    ) -> list[LogLine]:
        try:
            return await self._pod_fetcher.fetch_logs(namespace, pod_name, options)
        except ClusterError as exc:
            logger.debug("Logs of %s/%s[%s] skipped: %s", namespace, pod_name, options.container, exc)
            return []

    async def get_all_container_logs(self, namespace: str, pod_name: str, tail_lines: int) -> list[LogLine]:
        """Fetch every container concurrently and merge in timestamp order.

        Each container gets ``tail_lines // n`` lines, never fewer than
        ``MIN_TAIL_LINES_PER_CONTAINER`` (so a tail of 0 still yields the floor);
        failing containers are skipped.
        """
        pod = await self.get_pod(namespace, pod_name)
        containers = pod.container_names
        if not containers:
            return []
        per_container = max(MIN_TAIL_LINES_PER_CONTAINER, tail_lines // len(containers))

        results = await asyncio.gather(
            *(
                self._container_logs_or_empty(
                    namespace,
                    pod_name,
                    LogOptions(container=container, tail_lines=per_container),
                )
                for container in containers
            )
        )
        merged = [line for lines in results for line in lines]
        return sort_logs_by_time(merged)

    async def get_previous_logs(
        self, namespace: str, pod_name: str, container: str, tail_lines: int
    ) -> list[LogLine]:
        options = LogOptions(container=container, tail_lines=tail_lines, previous=True)
        return await self._pod_fetcher.fetch_logs(namespace, pod_name, options)

    async def get_pod_events(self, namespace: str, pod_name: str) -> list[EventInfo]:
        raw_events = await self._event_fetcher.fetch_object_events_raw(namespace, "Pod", pod_name)
        return self._event_parser.parse_events(raw_events)

    async def get_pod_metrics(self, namespace: str, pod_name: str) -> PodMetrics:
        raw = await self._metrics_fetcher.fetch_pod_metrics(namespace, pod_name)
        return self._metrics_parser.parse_pod_metrics(raw)

    async def get_namespace_metrics(self, namespace: str) -> list[PodMetrics]:
        items = await self._metrics_fetcher.fetch_namespace_metrics(namespace)
        metrics = [self._metrics_parser.parse_pod_metrics(item) for item in items]
        return sorted(metrics, key=lambda item: item.name)

    async def get_related_resources(self, pod: PodInfo) -> RelatedResources:
        return await self._related.resolve(pod)

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    async def _pod_counts_by_node(self) -> Counter[str]:
        try:
            pods = await self._pod_fetcher.fetch_all_namespaces_pods()
        except ClusterError as exc:
            logger.debug("Pod counts per node unavailable: %s", exc)
            return Counter()
        return Counter(
            node for node in ((pod.get("spec") or {}).get("nodeName") for pod in pods) if node
        )

    async def list_nodes(self) -> list[NodeInfo]:
        nodes = await self._node_fetcher.fetch_nodes()
        counts = await self._pod_counts_by_node()
        infos = [
            self._node_parser.parse_node_info(
                node, counts.get((node.get("metadata") or {}).get("name") or "", 0)
            )
            for node in nodes
        ]
        return sorted(infos, key=lambda info: info.name)

    async def get_node(self, name: str) -> NodeInfo:
        node = await self._node_fetcher.fetch_node(name)
        try:
            pods = await self._pod_fetcher.fetch_all_namespaces_pods(field_selector=f"spec.nodeName={name}")
            pod_count = len(pods)
        except ClusterError as exc:
            logger.debug("Pod count for node %s unavailable: %s", name, exc)
            pod_count = 0
        return self._node_parser.parse_node_info(node, pod_count)

    # ------------------------------------------------------------------
    # Config
    # ------------------------------------------------------------------

    async def list_config_maps(self, namespace: str) -> list[ConfigMapInfo]:
        items = await self._config_fetcher.fetch_config_maps(namespace)
        rows = [self._config_parser.parse_config_map_row(item) for item in items]
        return sorted(rows, key=lambda row: row.name)

    async def get_config_map(self, namespace: str, name: str) -> ConfigMapData:
        return self._config_parser.parse_config_map(await self._config_fetcher.fetch_config_map(namespace, name))

    async def list_secrets(self, namespace: str) -> list[SecretInfo]:
        items = await self._config_fetcher.fetch_secrets(namespace)
        rows = [self._config_parser.parse_secret_row(item) for item in items]
        return sorted(rows, key=lambda row: row.name)

    async def get_secret(self, namespace: str, name: str) -> SecretData:
        return self._config_parser.parse_secret(await self._config_fetcher.fetch_secret(namespace, name))

    async def copy_config_map_to_namespace(
        self, source_namespace: str, name: str, target_namespace: str
    ) -> None:
        await self._actions.copy_config_map_to_namespace(source_namespace, name, target_namespace)

    async def copy_secret_to_namespace(
        self, source_namespace: str, name: str, target_namespace: str
    ) -> None:
        await self._actions.copy_secret_to_namespace(source_namespace, name, target_namespace)

    # ------------------------------------------------------------------
    # Autoscaling
    # ------------------------------------------------------------------

    async def list_hpas(self, namespace: str) -> list[HPAInfo]:
        items = await self._hpa_fetcher.fetch_hpas(namespace)
        rows = [
            self._hpa_parser.parse_hpa_row(item, format_hpa_targets(render_hpa_metrics(item)))
            for item in items
        ]
        return sorted(rows, key=lambda row: row.name)

    async def get_hpa(self, namespace: str, name: str) -> HPAData:
        raw = await self._hpa_fetcher.fetch_hpa(namespace, name)
        return self._hpa_parser.parse_hpa(raw, render_hpa_metrics(raw))

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def get_namespace_events(self, namespace: str, limit: int) -> list[EventInfo]:
        """Newest events first; a non-positive limit returns everything."""
        events = self._event_parser.parse_events(await self._event_fetcher.fetch_events_raw(namespace))
        return events[:limit] if limit > 0 else events

    async def get_recent_warnings(self, namespace: str, since: timedelta) -> list[EventInfo]:
        """Warning events last seen within ``since``."""
        cutoff = datetime.now(timezone.utc) - since
        raw_events = await self._event_fetcher.fetch_warning_events_raw(namespace)
        return [
            event
            for event in self._event_parser.parse_events(raw_events)
            if event.last_seen is not None and event.last_seen >= cutoff
        ]

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def scale_deployment(self, namespace: str, name: str, replicas: int) -> None:
        await self._actions.scale_deployment(namespace, name, replicas)

    async def scale_stateful_set(self, namespace: str, name: str, replicas: int) -> None:
        await self._actions.scale_stateful_set(namespace, name, replicas)

    async def scale_rollout(self, namespace: str, name: str, replicas: int) -> None:
        await self._actions.scale_rollout(namespace, name, replicas)

    async def restart_deployment(self, namespace: str, name: str) -> None:
        await self._actions.restart_deployment(namespace, name)

    async def restart_stateful_set(self, namespace: str, name: str) -> None:
        await self._actions.restart_stateful_set(namespace, name)

    async def restart_daemon_set(self, namespace: str, name: str) -> None:
        await self._actions.restart_daemon_set(namespace, name)

    async def restart_rollout(self, namespace: str, name: str) -> None:
        await self._actions.restart_rollout(namespace, name)

    async def force_delete_namespace(self, name: str) -> ForceDeleteResult:
        return await self._actions.force_delete_namespace(name)

    # ------------------------------------------------------------------
    # Context
    # ------------------------------------------------------------------

    def get_current_context(self) -> str:
        if self._client.context:
            return self._client.context
        _, current = load_kubeconfig_contexts(self._settings.kubeconfig_path)
        return current

    def list_contexts(self) -> tuple[list[str], str]:
        names, current = load_kubeconfig_contexts(self._settings.kubeconfig_path)
        return names, self._client.context or current
