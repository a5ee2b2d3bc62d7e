"""Namespace fetcher for cluster controller - fetches namespace objects."""

from __future__ import annotations

import logging
from typing import Any

from kubeprobe.controllers.cluster.client import ClusterClient

logger = logging.getLogger(__name__)


class NamespaceFetcher:
    """Fetches and mutates namespace objects."""

    def __init__(self, client: ClusterClient) -> None:
        self._client = client

    async def fetch_namespaces(self) -> list[dict[str, Any]]:
        """Fetch all namespaces."""
        result = await self._client.call(self._client.core.list_namespace)
        return result.get("items") or []

    async def fetch_namespace(self, name: str) -> dict[str, Any]:
        """Fetch a single namespace."""
        return await self._client.call(self._client.core.read_namespace, name)

    async def finalize_namespace(self, name: str, body: dict[str, Any]) -> dict[str, Any]:
        """Write the namespace through the ``finalize`` subresource."""
        return await self._client.call(self._client.core.replace_namespace_finalize, name, body)

    async def delete_namespace(self, name: str) -> None:
        """Issue a delete on the namespace itself."""
        await self._client.call(self._client.core.delete_namespace, name)
