"""HPA fetcher for cluster controller - fetches autoscaling/v2 objects."""

from __future__ import annotations

from typing import Any

from kubeprobe.controllers.cluster.client import ClusterClient


class HPAFetcher:
    """Fetches HorizontalPodAutoscalers."""

    def __init__(self, client: ClusterClient) -> None:
        self._client = client

    async def fetch_hpas(self, namespace: str) -> list[dict[str, Any]]:
        """Fetch autoscalers in a namespace."""
        result = await self._client.call(
            self._client.autoscaling.list_namespaced_horizontal_pod_autoscaler, namespace
        )
        return result.get("items") or []

    async def fetch_hpa(self, namespace: str, name: str) -> dict[str, Any]:
        """Fetch a single autoscaler."""
        return await self._client.call(
            self._client.autoscaling.read_namespaced_horizontal_pod_autoscaler, name, namespace
        )
