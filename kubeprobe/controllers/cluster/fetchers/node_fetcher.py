"""Node fetcher for cluster controller - fetches node objects."""

from __future__ import annotations

from typing import Any

from kubeprobe.controllers.cluster.client import ClusterClient


class NodeFetcher:
    """Fetches cluster nodes."""

    def __init__(self, client: ClusterClient) -> None:
        self._client = client

    async def fetch_nodes(self) -> list[dict[str, Any]]:
        """Fetch all nodes."""
        result = await self._client.call(self._client.core.list_node)
        return result.get("items") or []

    async def fetch_node(self, name: str) -> dict[str, Any]:
        """Fetch a single node."""
        return await self._client.call(self._client.core.read_node, name)
