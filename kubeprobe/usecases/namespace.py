"""Namespace use cases - resource overview, config copy and force delete."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from datetime import timedelta
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field

from kubeprobe.controllers.base import KubernetesRepository
from kubeprobe.errors import ClusterError
from kubeprobe.models.core.config_info import ConfigMapData, ConfigMapInfo, SecretData, SecretInfo
from kubeprobe.models.core.namespace_info import ForceDeleteResult, NamespaceInfo
from kubeprobe.models.core.pod_info import PodInfo
from kubeprobe.models.events.event_info import EventInfo
from kubeprobe.models.state.app_settings import AppSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class NamespaceResources(BaseModel):
    """Pods, ConfigMaps and Secrets of a namespace."""

    model_config = ConfigDict(frozen=True)

    namespace: str
    pods: list[PodInfo] = Field(default_factory=list)
    config_maps: list[ConfigMapInfo] = Field(default_factory=list)
    secrets: list[SecretInfo] = Field(default_factory=list)


async def _or_empty(label: str, awaitable: Awaitable[list[T]]) -> list[T]:
    try:
        return await awaitable
    except ClusterError as exc:
        logger.debug("%s unavailable: %s", label, exc)
        return []


class NamespaceUseCase:
    """Namespace-level operations composed over the repository."""

    def __init__(
        self,
        repository: KubernetesRepository,
        settings: AppSettings | None = None,
    ) -> None:
        self._repository = repository
        self._settings = settings or AppSettings()

    async def list_namespaces(self) -> list[str]:
        return await self._repository.list_namespaces()

    async def list_namespace_infos(self) -> list[NamespaceInfo]:
        return await self._repository.list_namespace_infos()

    async def list_active_namespace_names(self) -> list[str]:
        return await self._repository.list_active_namespace_names()

    async def get_namespace_resources(self, namespace: str) -> NamespaceResources:
        """List pods (required) with ConfigMaps and Secrets (best effort)."""
        pods, config_maps, secrets = await asyncio.gather(
            self._repository.list_all_pods(namespace),
            _or_empty(f"ConfigMaps in {namespace}", self._repository.list_config_maps(namespace)),
            _or_empty(f"Secrets in {namespace}", self._repository.list_secrets(namespace)),
        )
        return NamespaceResources(
            namespace=namespace,
            pods=pods,
            config_maps=config_maps,
            secrets=secrets,
        )

    async def get_events(self, namespace: str, limit: int | None = None) -> list[EventInfo]:
        """Newest events first, capped at ``limit`` (the configured event limit by default)."""
        return await self._repository.get_namespace_events(
            namespace, self._settings.event_limit if limit is None else limit
        )

    async def get_recent_warnings(self, namespace: str) -> list[EventInfo]:
        """Warnings seen within the configured window."""
        return await self._repository.get_recent_warnings(
            namespace, timedelta(minutes=self._settings.recent_warnings_minutes)
        )

    async def get_config_map(self, namespace: str, name: str) -> ConfigMapData:
        return await self._repository.get_config_map(namespace, name)

    async def get_secret(self, namespace: str, name: str) -> SecretData:
        return await self._repository.get_secret(namespace, name)

    async def copy_config_map(self, source_namespace: str, name: str, target_namespace: str) -> None:
        await self._repository.copy_config_map_to_namespace(source_namespace, name, target_namespace)

    async def copy_secret(self, source_namespace: str, name: str, target_namespace: str) -> None:
        await self._repository.copy_secret_to_namespace(source_namespace, name, target_namespace)

    async def force_delete(self, namespace: str) -> ForceDeleteResult:
        result = await self._repository.force_delete_namespace(namespace)
        if result.failures:
            logger.warning(
                "Force delete of %s finished with %d failures", namespace, len(result.failures)
            )
        return result
