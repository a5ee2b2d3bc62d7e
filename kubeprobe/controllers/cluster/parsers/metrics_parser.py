"""Metrics parser for cluster controller - parses metrics.k8s.io PodMetrics."""

from __future__ import annotations

from typing import Any

from kubeprobe.models.core.pod_info import ContainerInfo
from kubeprobe.models.metrics.pod_metrics import ContainerMetrics, PodMetrics
from kubeprobe.utils.resource_parser import (
    cpu_millicores,
    format_cpu,
    format_memory,
    memory_bytes,
)


class MetricsParser:
    """Parses pod usage snapshots."""

    @staticmethod
    def parse_container_metrics(container: dict[str, Any]) -> ContainerMetrics:
        """Parse the usage of one container."""
        usage = container.get("usage") or {}
        cpu = cpu_millicores(usage.get("cpu"))
        memory = memory_bytes(usage.get("memory"))
        return ContainerMetrics(
            name=container.get("name") or "",
            cpu_usage=format_cpu(cpu),
            memory_usage=format_memory(memory),
            cpu_millicores=cpu,
            memory_bytes=memory,
        )

    def parse_pod_metrics(self, item: dict[str, Any]) -> PodMetrics:
        """Parse a PodMetrics object."""
        metadata = item.get("metadata") or {}
        return PodMetrics(
            name=metadata.get("name") or "",
            namespace=metadata.get("namespace") or "",
            containers=[self.parse_container_metrics(c) for c in item.get("containers") or []],
        )

    @staticmethod
    def _percent(used: float, limit: float) -> float | None:
        if limit <= 0:
            return None
        return round(used / limit * 100, 1)

    def apply_limits(self, metrics: PodMetrics, containers: list[ContainerInfo]) -> PodMetrics:
        """Fill per-container usage percentages of the declared limits."""
        limits = {container.name: container.resources for container in containers}
        enriched: list[ContainerMetrics] = []
        for container in metrics.containers:
            resources = limits.get(container.name)
            if resources is None:
                enriched.append(container)
                continue
            enriched.append(
                container.model_copy(
                    update={
                        "cpu_percent": self._percent(
                            container.cpu_millicores, cpu_millicores(resources.cpu_limit)
                        ),
                        "mem_percent": self._percent(
                            container.memory_bytes, memory_bytes(resources.memory_limit)
                        ),
                    }
                )
            )
        return metrics.model_copy(update={"containers": enriched})
