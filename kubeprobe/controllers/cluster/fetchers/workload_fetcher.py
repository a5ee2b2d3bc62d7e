"""Workload fetcher for cluster controller - fetches controller objects."""

from __future__ import annotations

import logging
from typing import Any

from kubeprobe.constants.defaults import ROLLOUT_API_VERSION_DEFAULT
from kubeprobe.controllers.cluster.client import ClusterClient
from kubeprobe.errors import UnavailableError

logger = logging.getLogger(__name__)


class WorkloadFetcher:
    """Fetches Deployments, StatefulSets, DaemonSets, Jobs, CronJobs and Rollouts."""

    _ROLLOUT_PLURAL = "rollouts"

    def __init__(
        self,
        client: ClusterClient,
        rollout_api_version: str = ROLLOUT_API_VERSION_DEFAULT,
    ) -> None:
        self._client = client
        self.rollout_api_version = rollout_api_version

    async def _list(self, method: Any, namespace: str) -> list[dict[str, Any]]:
        result = await self._client.call(method, namespace)
        return result.get("items") or []

    async def fetch_deployments(self, namespace: str) -> list[dict[str, Any]]:
        """Fetch Deployments in a namespace."""
        return await self._list(self._client.apps.list_namespaced_deployment, namespace)

    async def fetch_stateful_sets(self, namespace: str) -> list[dict[str, Any]]:
        """Fetch StatefulSets in a namespace."""
        return await self._list(self._client.apps.list_namespaced_stateful_set, namespace)

    async def fetch_daemon_sets(self, namespace: str) -> list[dict[str, Any]]:
        """Fetch DaemonSets in a namespace."""
        return await self._list(self._client.apps.list_namespaced_daemon_set, namespace)

    async def fetch_jobs(self, namespace: str) -> list[dict[str, Any]]:
        """Fetch Jobs in a namespace."""
        return await self._list(self._client.batch.list_namespaced_job, namespace)

    async def fetch_cron_jobs(self, namespace: str) -> list[dict[str, Any]]:
        """Fetch CronJobs in a namespace."""
        return await self._list(self._client.batch.list_namespaced_cron_job, namespace)

    async def fetch_deployment(self, namespace: str, name: str) -> dict[str, Any]:
        """Fetch a single Deployment."""
        return await self._client.call(self._client.apps.read_namespaced_deployment, name, namespace)

    async def fetch_stateful_set(self, namespace: str, name: str) -> dict[str, Any]:
        """Fetch a single StatefulSet."""
        return await self._client.call(self._client.apps.read_namespaced_stateful_set, name, namespace)

    async def fetch_daemon_set(self, namespace: str, name: str) -> dict[str, Any]:
        """Fetch a single DaemonSet."""
        return await self._client.call(self._client.apps.read_namespaced_daemon_set, name, namespace)

    async def fetch_job(self, namespace: str, name: str) -> dict[str, Any]:
        """Fetch a single Job."""
        return await self._client.call(self._client.batch.read_namespaced_job, name, namespace)

    async def fetch_replica_set(self, namespace: str, name: str) -> dict[str, Any]:
        """Fetch a single ReplicaSet."""
        return await self._client.call(self._client.apps.read_namespaced_replica_set, name, namespace)

    async def fetch_rollouts(self, namespace: str) -> list[dict[str, Any]]:
        """Fetch Argo Rollouts; empty when the dynamic client or CRD is absent."""
        if not self._client.has_dynamic:
            return []
        try:
            return await self._client.dynamic_list(
                self.rollout_api_version, self._ROLLOUT_PLURAL, namespace
            )
        except UnavailableError as exc:
            logger.debug("Rollouts unavailable in %s: %s", namespace, exc)
            return []

    async def fetch_rollout(self, namespace: str, name: str) -> dict[str, Any]:
        """Fetch a single Rollout through the dynamic client."""
        return await self._client.dynamic_get(
            self.rollout_api_version, self._ROLLOUT_PLURAL, name, namespace
        )
