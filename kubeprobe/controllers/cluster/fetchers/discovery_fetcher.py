"""Discovery fetcher for cluster controller - enumerates deletable namespaced resources."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from kubeprobe.controllers.cluster.client import ClusterClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class APIResourceRef:
    """A (groupVersion, resource) pair found through discovery."""

    group_version: str
    name: str
    kind: str = ""


class DiscoveryFetcher:
    """Discovers API resources served by the cluster."""

    def __init__(self, client: ClusterClient) -> None:
        self._client = client

    @staticmethod
    def is_sweepable(resource: dict[str, Any]) -> bool:
        """True for namespaced, deletable, non-subresource entries."""
        name = resource.get("name") or ""
        return (
            bool(resource.get("namespaced"))
            and bool(name)
            and "/" not in name
            and "delete" in (resource.get("verbs") or [])
        )

    async def fetch_namespaced_deletable_resources(self) -> list[APIResourceRef]:
        """Return deletable namespaced resources in discovery order."""
        refs: list[APIResourceRef] = []
        for resource_list in await self._client.discover_api_resources():
            group_version = resource_list.get("groupVersion") or ""
            for resource in resource_list.get("resources") or []:
                if self.is_sweepable(resource):
                    refs.append(
                        APIResourceRef(
                            group_version=group_version,
                            name=resource["name"],
                            kind=resource.get("kind") or "",
                        )
                    )
        return refs
