"""Metrics fetcher for cluster controller - reads the metrics.k8s.io API."""

from __future__ import annotations

import logging
from typing import Any

from kubeprobe.constants.defaults import METRICS_GROUP, METRICS_VERSION
from kubeprobe.controllers.cluster.client import ClusterClient
from kubeprobe.errors import UnavailableError

logger = logging.getLogger(__name__)


class MetricsFetcher:
    """Fetches pod usage from metrics-server."""

    _PLURAL = "pods"

    def __init__(self, client: ClusterClient) -> None:
        self._client = client

    def _require_metrics(self) -> None:
        if not self._client.metrics_available:
            raise UnavailableError("metrics API is not available")

    async def fetch_pod_metrics(self, namespace: str, name: str) -> dict[str, Any]:
        """Fetch the usage snapshot of one pod."""
        self._require_metrics()
        return await self._client.call(
            self._client.custom.get_namespaced_custom_object,
            METRICS_GROUP,
            METRICS_VERSION,
            namespace,
            self._PLURAL,
            name,
        )

    async def fetch_namespace_metrics(self, namespace: str) -> list[dict[str, Any]]:
        """Fetch usage snapshots of every pod in a namespace."""
        self._require_metrics()
        result = await self._client.call(
            self._client.custom.list_namespaced_custom_object,
            METRICS_GROUP,
            METRICS_VERSION,
            namespace,
            self._PLURAL,
        )
        return result.get("items") or []
