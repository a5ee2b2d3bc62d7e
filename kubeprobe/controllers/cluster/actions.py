"""Mutating cluster actions - scale, rolling restart, copy and force-delete.

Each action logs the equivalent kubectl command at info level.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from kubeprobe.constants.enums import ResourceType
from kubeprobe.constants.patterns import RESTARTED_AT_ANNOTATION
from kubeprobe.controllers.cluster.client import ClusterClient
from kubeprobe.controllers.cluster.fetchers.config_fetcher import ConfigFetcher
from kubeprobe.controllers.cluster.fetchers.discovery_fetcher import DiscoveryFetcher
from kubeprobe.controllers.cluster.fetchers.namespace_fetcher import NamespaceFetcher
from kubeprobe.controllers.cluster.fetchers.workload_fetcher import WorkloadFetcher
from kubeprobe.controllers.cluster.parsers.workload_parser import get_scale_resource_type
from kubeprobe.errors import ClusterError, ConflictError, NotFoundError, UnavailableError
from kubeprobe.models.core.namespace_info import ForceDeleteResult
from kubeprobe.utils.timestamps import format_rfc3339

logger = logging.getLogger(__name__)

# Metadata keys carried over when copying an object to another namespace.
_COPIED_METADATA_KEYS = ("labels", "annotations")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_copy_body(source: dict[str, Any], kind: str, target_namespace: str) -> dict[str, Any]:
    """Strip server-populated metadata from ``source`` for a create in another namespace."""
    metadata = source.get("metadata") or {}
    body: dict[str, Any] = {
        "apiVersion": "v1",
        "kind": kind,
        "metadata": {
            "name": metadata.get("name") or "",
            "namespace": target_namespace,
            **{key: metadata[key] for key in _COPIED_METADATA_KEYS if metadata.get(key)},
        },
    }
    for key in ("data", "binaryData", "stringData", "type", "immutable"):
        if source.get(key) is not None:
            body[key] = source[key]
    return body


def build_restart_patch(restarted_at: datetime) -> dict[str, Any]:
    """Pod-template annotation patch that triggers a rolling update."""
    return {
        "spec": {
            "template": {
                "metadata": {
                    "annotations": {RESTARTED_AT_ANNOTATION: format_rfc3339(restarted_at)}
                }
            }
        }
    }


class ResourceActions:
    """Write-path operations against the cluster."""

    def __init__(
        self,
        client: ClusterClient,
        workload_fetcher: WorkloadFetcher,
        namespace_fetcher: NamespaceFetcher,
        config_fetcher: ConfigFetcher,
        discovery_fetcher: DiscoveryFetcher,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._client = client
        self._workloads = workload_fetcher
        self._namespaces = namespace_fetcher
        self._configs = config_fetcher
        self._discovery = discovery_fetcher
        self._clock = clock

    # ------------------------------------------------------------------
    # Scale
    # ------------------------------------------------------------------

    async def _scale_subresource(
        self,
        read_method: Any,
        replace_method: Any,
        resource_type: ResourceType,
        namespace: str,
        name: str,
        replicas: int,
    ) -> None:
        logger.info(
            "kubectl scale %s %s --replicas=%d -n %s",
            get_scale_resource_type(resource_type),
            name,
            replicas,
            namespace,
        )
        scale = await self._client.call(read_method, name, namespace)
        scale.setdefault("spec", {})["replicas"] = replicas
        await self._client.call(replace_method, name, namespace, scale)

    async def scale_deployment(self, namespace: str, name: str, replicas: int) -> None:
        """Set replicas through the Deployment scale subresource."""
        await self._scale_subresource(
            self._client.apps.read_namespaced_deployment_scale,
            self._client.apps.replace_namespaced_deployment_scale,
            ResourceType.DEPLOYMENTS,
            namespace,
            name,
            replicas,
        )

    async def scale_stateful_set(self, namespace: str, name: str, replicas: int) -> None:
        """Set replicas through the StatefulSet scale subresource."""
        await self._scale_subresource(
            self._client.apps.read_namespaced_stateful_set_scale,
            self._client.apps.replace_namespaced_stateful_set_scale,
            ResourceType.STATEFULSETS,
            namespace,
            name,
            replicas,
        )

    async def scale_rollout(self, namespace: str, name: str, replicas: int) -> None:
        """Set spec.replicas on a Rollout through the dynamic client.

        Raises:
            UnavailableError: If no dynamic client is configured.
        """
        if not self._client.has_dynamic:
            raise UnavailableError("dynamic client is required to scale rollouts")
        logger.info(
            "kubectl scale %s %s --replicas=%d -n %s",
            get_scale_resource_type(ResourceType.ROLLOUTS),
            name,
            replicas,
            namespace,
        )
        rollout = await self._workloads.fetch_rollout(namespace, name)
        rollout.setdefault("spec", {})["replicas"] = int(replicas)
        await self._client.dynamic_replace(
            self._workloads.rollout_api_version, "rollouts", rollout, namespace
        )

    # ------------------------------------------------------------------
    # Restart
    # ------------------------------------------------------------------

    async def _restart(self, patch_method: Any, kind: str, namespace: str, name: str) -> None:
        logger.info("kubectl rollout restart %s/%s -n %s", kind, name, namespace)
        await self._client.call(patch_method, name, namespace, build_restart_patch(self._clock()))

    async def restart_deployment(self, namespace: str, name: str) -> None:
        await self._restart(self._client.apps.patch_namespaced_deployment, "deployment", namespace, name)

    async def restart_stateful_set(self, namespace: str, name: str) -> None:
        await self._restart(self._client.apps.patch_namespaced_stateful_set, "statefulset", namespace, name)

    async def restart_daemon_set(self, namespace: str, name: str) -> None:
        await self._restart(self._client.apps.patch_namespaced_daemon_set, "daemonset", namespace, name)

    async def restart_rollout(self, namespace: str, name: str) -> None:
        """Ask the Rollout controller to restart its pods via spec.restartAt."""
        if not self._client.has_dynamic:
            raise UnavailableError("dynamic client is required to restart rollouts")
        logger.info("kubectl argo rollouts restart %s -n %s", name, namespace)
        await self._client.dynamic_patch(
            self._workloads.rollout_api_version,
            "rollouts",
            name,
            {"spec": {"restartAt": format_rfc3339(self._clock())}},
            namespace,
        )

    # ------------------------------------------------------------------
    # Copy
    # ------------------------------------------------------------------

    async def copy_config_map_to_namespace(
        self, source_namespace: str, name: str, target_namespace: str
    ) -> None:
        """Create or overwrite a ConfigMap in ``target_namespace``."""
        source = await self._configs.fetch_config_map(source_namespace, name)
        body = build_copy_body(source, "ConfigMap", target_namespace)
        logger.info("Copying configmap %s from %s to %s", name, source_namespace, target_namespace)
        try:
            await self._configs.create_config_map(target_namespace, body)
        except ConflictError:
            existing = await self._configs.fetch_config_map(target_namespace, name)
            existing["data"] = source.get("data")
            existing["binaryData"] = source.get("binaryData")
            await self._configs.replace_config_map(target_namespace, name, existing)

    async def copy_secret_to_namespace(
        self, source_namespace: str, name: str, target_namespace: str
    ) -> None:
        """Create or overwrite a Secret in ``target_namespace``."""
        source = await self._configs.fetch_secret(source_namespace, name)
        body = build_copy_body(source, "Secret", target_namespace)
        logger.info("Copying secret %s from %s to %s", name, source_namespace, target_namespace)
        try:
            await self._configs.create_secret(target_namespace, body)
        except ConflictError:
            existing = await self._configs.fetch_secret(target_namespace, name)
            existing["data"] = source.get("data")
            existing["type"] = source.get("type")
            await self._configs.replace_secret(target_namespace, name, existing)

    # ------------------------------------------------------------------
    # Force delete
    # ------------------------------------------------------------------

    async def _sweep(self, namespace: str, result: dict[str, Any]) -> None:
        if not self._client.has_dynamic:
            result["failures"].append("resource sweep skipped: dynamic client unavailable")
            return
        try:
            refs = await self._discovery.fetch_namespaced_deletable_resources()
        except ClusterError as exc:
            logger.warning("Discovery failed while sweeping %s: %s", namespace, exc)
            result["failures"].append(f"discovery: {exc}")
            return

        for ref in refs:
            try:
                items = await self._client.dynamic_list(ref.group_version, ref.name, namespace)
            except ClusterError as exc:
                logger.warning("Listing %s (%s) in %s failed: %s", ref.name, ref.group_version, namespace, exc)
                result["failures"].append(f"list {ref.name}.{ref.group_version}: {exc}")
                continue
            for item in items:
                item_name = (item.get("metadata") or {}).get("name") or ""
                try:
                    await self._client.dynamic_delete(ref.group_version, ref.name, item_name, namespace)
                except NotFoundError:
                    continue
                except ClusterError as exc:
                    logger.warning("Deleting %s/%s in %s failed: %s", ref.name, item_name, namespace, exc)
                    result["failures"].append(f"delete {ref.name}/{item_name}: {exc}")
                    continue
                result["deleted"] += 1

    async def _remove_finalizers(self, namespace: str, result: dict[str, Any]) -> bool:
        """Clear spec.finalizers; False once the namespace is gone."""
        try:
            current = await self._namespaces.fetch_namespace(namespace)
        except NotFoundError:
            return False
        except ClusterError as exc:
            result["failures"].append(f"read namespace: {exc}")
            return True

        if not (current.get("spec") or {}).get("finalizers"):
            return True
        current.setdefault("spec", {})["finalizers"] = []
        try:
            await self._namespaces.finalize_namespace(namespace, current)
        except NotFoundError:
            return False
        except ClusterError as exc:
            logger.warning("Removing finalizers from %s failed: %s", namespace, exc)
            result["failures"].append(f"finalize: {exc}")
            return True
        result["finalizers_removed"] = True
        return True

    async def force_delete_namespace(self, namespace: str) -> ForceDeleteResult:
        """Sweep every deletable resource in a namespace, drop its finalizers and delete it.

        Only the initial namespace read can fail the operation; every later
        failure is collected in ``ForceDeleteResult.failures``.

        Raises:
            NotFoundError: If the namespace does not exist.
        """
        await self._namespaces.fetch_namespace(namespace)
        logger.info("Force deleting namespace %s", namespace)

        result: dict[str, Any] = {"deleted": 0, "finalizers_removed": False, "failures": []}
        await self._sweep(namespace, result)

        if await self._remove_finalizers(namespace, result):
            try:
                await self._namespaces.delete_namespace(namespace)
            except NotFoundError:
                pass
            except ClusterError as exc:
                logger.warning("Deleting namespace %s failed: %s", namespace, exc)
                result["failures"].append(f"delete namespace: {exc}")

        return ForceDeleteResult(namespace=namespace, **result)
