"""Pod use cases - the pod detail aggregate and log helpers."""

from __future__ import annotations

import logging
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from kubeprobe.controllers.base import KubernetesRepository
from kubeprobe.controllers.cluster.parsers.metrics_parser import MetricsParser
from kubeprobe.diagnostics.log_filters import filter_logs, get_logs_around_time
from kubeprobe.diagnostics.pod_issues import analyze_pod_issues
from kubeprobe.errors import ClusterError
from kubeprobe.models.core.node_info import NodeInfo
from kubeprobe.models.core.pod_info import PodInfo
from kubeprobe.models.core.related_info import RelatedResources
from kubeprobe.models.diagnostics.debug_helper import DebugHelper
from kubeprobe.models.events.event_info import EventInfo
from kubeprobe.models.logs.log_line import LogLine, LogOptions
from kubeprobe.models.metrics.pod_metrics import PodMetrics
from kubeprobe.models.state.app_settings import AppSettings

logger = logging.getLogger(__name__)


class PodDetails(BaseModel):
    """Everything shown on the pod detail view.

    Only ``pod`` is guaranteed; the other sections are empty when their
    fetch failed.
    """

    model_config = ConfigDict(frozen=True)

    pod: PodInfo
    logs: list[LogLine] = Field(default_factory=list)
    events: list[EventInfo] = Field(default_factory=list)
    metrics: PodMetrics | None = None
    related: RelatedResources | None = None
    node: NodeInfo | None = None
    helpers: list[DebugHelper] = Field(default_factory=list)


class PodUseCase:
    """Pod-level operations composed over the repository."""

    def __init__(
        self,
        repository: KubernetesRepository,
        settings: AppSettings | None = None,
    ) -> None:
        self._repository = repository
        self._settings = settings or AppSettings()
        self._metrics_parser = MetricsParser()

    async def _fetch_logs(self, pod: PodInfo, options: LogOptions, merged_tail: int) -> list[LogLine]:
        if not options.container and len(pod.containers) > 1:
            return await self._repository.get_all_container_logs(pod.namespace, pod.name, merged_tail)
        return await self._repository.get_pod_logs(pod.namespace, pod.name, options)

    async def get_pod_details(
        self,
        namespace: str,
        name: str,
        log_options: LogOptions | None = None,
    ) -> PodDetails:
        """Aggregate a pod with its logs, events, metrics, neighborhood and node.

        Sections are fetched one after another; a ``ClusterError`` in any of
        them leaves that section empty. Diagnostics run last over whatever
        was obtained.

        Raises:
            NotFoundError: If the pod does not exist.
            TransportError: If the pod itself cannot be read.
        """
        pod = await self._repository.get_pod(namespace, name)
        options = log_options or LogOptions(tail_lines=self._settings.default_tail_lines)
        merged_tail = options.tail_lines if log_options else self._settings.all_container_tail_lines

        logs: list[LogLine] = []
        try:
            logs = await self._fetch_logs(pod, options, merged_tail)
        except ClusterError as exc:
            logger.debug("Logs for %s/%s unavailable: %s", namespace, name, exc)

        events: list[EventInfo] = []
        try:
            events = await self._repository.get_pod_events(namespace, name)
        except ClusterError as exc:
            logger.debug("Events for %s/%s unavailable: %s", namespace, name, exc)

        metrics: PodMetrics | None = None
        try:
            metrics = self._metrics_parser.apply_limits(
                await self._repository.get_pod_metrics(namespace, name), pod.containers
            )
        except ClusterError as exc:
            logger.debug("Metrics for %s/%s unavailable: %s", namespace, name, exc)

        related: RelatedResources | None = None
        try:
            related = await self._repository.get_related_resources(pod)
        except ClusterError as exc:
            logger.debug("Related resources for %s/%s unavailable: %s", namespace, name, exc)

        node: NodeInfo | None = None
        if pod.node:
            try:
                node = await self._repository.get_node(pod.node)
            except ClusterError as exc:
                logger.debug("Node %s unavailable: %s", pod.node, exc)

        return PodDetails(
            pod=pod,
            logs=logs,
            events=events,
            metrics=metrics,
            related=related,
            node=node,
            helpers=analyze_pod_issues(pod, events),
        )

    async def delete_pod(self, namespace: str, name: str) -> None:
        await self._repository.delete_pod(namespace, name)

    @staticmethod
    def filter_logs(
        logs: list[LogLine],
        *,
        query: str = "",
        container: str = "",
        since: datetime | None = None,
        errors_only: bool = False,
    ) -> list[LogLine]:
        return filter_logs(
            logs, query=query, container=container, since=since, errors_only=errors_only
        )

    def logs_around(self, logs: list[LogLine], target: datetime) -> list[LogLine]:
        """Lines within the configured window around ``target``."""
        return get_logs_around_time(logs, target, self._settings.log_window_minutes)
