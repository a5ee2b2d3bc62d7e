"""Config fetcher for cluster controller - fetches ConfigMaps and Secrets."""

from __future__ import annotations

import logging
from typing import Any

from kubeprobe.controllers.cluster.client import ClusterClient

logger = logging.getLogger(__name__)


class ConfigFetcher:
    """Reads and writes ConfigMaps and Secrets."""

    def __init__(self, client: ClusterClient) -> None:
        self._client = client

    async def fetch_config_maps(self, namespace: str) -> list[dict[str, Any]]:
        """Fetch ConfigMaps in a namespace."""
        result = await self._client.call(self._client.core.list_namespaced_config_map, namespace)
        return result.get("items") or []

    async def fetch_config_map(self, namespace: str, name: str) -> dict[str, Any]:
        """Fetch a single ConfigMap."""
        return await self._client.call(self._client.core.read_namespaced_config_map, name, namespace)

    async def create_config_map(self, namespace: str, body: dict[str, Any]) -> dict[str, Any]:
        """Create a ConfigMap."""
        return await self._client.call(self._client.core.create_namespaced_config_map, namespace, body)

    async def replace_config_map(
        self, namespace: str, name: str, body: dict[str, Any]
    ) -> dict[str, Any]:
        """Replace a ConfigMap."""
        return await self._client.call(
            self._client.core.replace_namespaced_config_map, name, namespace, body
        )

    async def fetch_secrets(self, namespace: str) -> list[dict[str, Any]]:
        """Fetch Secrets in a namespace."""
        result = await self._client.call(self._client.core.list_namespaced_secret, namespace)
        return result.get("items") or []

    async def fetch_secret(self, namespace: str, name: str) -> dict[str, Any]:
        """Fetch a single Secret."""
        return await self._client.call(self._client.core.read_namespaced_secret, name, namespace)

    async def create_secret(self, namespace: str, body: dict[str, Any]) -> dict[str, Any]:
        """Create a Secret."""
        return await self._client.call(self._client.core.create_namespaced_secret, namespace, body)

    async def replace_secret(self, namespace: str, name: str, body: dict[str, Any]) -> dict[str, Any]:
        """Replace a Secret."""
        return await self._client.call(
            self._client.core.replace_namespaced_secret, name, namespace, body
        )
