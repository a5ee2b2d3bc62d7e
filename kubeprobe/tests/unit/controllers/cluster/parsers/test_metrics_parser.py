"""Tests for MetricsParser."""

from __future__ import annotations

from kubeprobe.controllers.cluster.parsers.metrics_parser import MetricsParser
from kubeprobe.models.core.pod_info import ContainerInfo, ResourceRequirementsInfo


def _pod_metrics() -> dict:
    return {
        "metadata": {"name": "web-abc", "namespace": "default"},
        "containers": [
            {"name": "app", "usage": {"cpu": "250000000n", "memory": "131072Ki"}},
            {"name": "sidecar", "usage": {"cpu": "5m", "memory": "1Mi"}},
        ],
    }


class TestMetricsParser:
    """Tests for usage decoding and limit percentages."""

    def test_parse_pod_metrics(self) -> None:
        """Usage is converted to millicores and bytes."""
        metrics = MetricsParser().parse_pod_metrics(_pod_metrics())

        app = metrics.containers[0]
        assert app.cpu_millicores == 250
        assert app.cpu_usage == "250m"
        assert app.memory_bytes == 128 * 1024**2
        assert app.memory_usage == "128.0Mi"
        assert metrics.total_cpu_millicores == 255

    def test_apply_limits(self) -> None:
        """Percentages are computed against limits; missing limits give None."""
        parser = MetricsParser()
        metrics = parser.parse_pod_metrics(_pod_metrics())
        containers = [
            ContainerInfo(name="app", resources=ResourceRequirementsInfo(cpu_limit="500m", memory_limit="256Mi")),
            ContainerInfo(name="sidecar"),
        ]

        enriched = parser.apply_limits(metrics, containers)

        assert enriched.containers[0].cpu_percent == 50.0
        assert enriched.containers[0].mem_percent == 50.0
        assert enriched.containers[1].cpu_percent is None
        assert enriched.containers[1].mem_percent is None
        # the input snapshot is not mutated
        assert metrics.containers[0].cpu_percent is None
