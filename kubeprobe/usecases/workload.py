"""Workload use cases - listing and scale/restart dispatch by resource type."""

from __future__ import annotations

import logging

from kubeprobe.constants.enums import ResourceType
from kubeprobe.controllers.base import KubernetesRepository
from kubeprobe.models.core.pod_info import PodInfo
from kubeprobe.models.core.workload_info import WorkloadInfo
from kubeprobe.models.events.event_info import EventInfo

logger = logging.getLogger(__name__)


class WorkloadUseCase:
    """Workload operations composed over the repository.

    Scale and restart return False, without raising, for kinds that do not
    support the action.
    """

    def __init__(self, repository: KubernetesRepository) -> None:
        self._repository = repository

    async def list_workloads(self, namespace: str, resource_type: ResourceType | str) -> list[WorkloadInfo]:
        return await self._repository.list_workloads(namespace, ResourceType.parse(resource_type))

    async def get_workload_pods(self, workload: WorkloadInfo) -> list[PodInfo]:
        return await self._repository.get_workload_pods(workload)

    async def get_workload_events(self, workload: WorkloadInfo) -> list[EventInfo]:
        return await self._repository.get_workload_events(workload)

    async def scale(
        self,
        resource_type: ResourceType | str,
        namespace: str,
        name: str,
        replicas: int,
    ) -> bool:
        """Scale a workload; True when a scale request was issued."""
        resource_type = ResourceType.parse(resource_type)
        if resource_type is ResourceType.DEPLOYMENTS:
            await self._repository.scale_deployment(namespace, name, replicas)
        elif resource_type is ResourceType.STATEFULSETS:
            await self._repository.scale_stateful_set(namespace, name, replicas)
        elif resource_type is ResourceType.ROLLOUTS:
            await self._repository.scale_rollout(namespace, name, replicas)
        else:
            logger.info("Scale is not supported for %s, skipping %s/%s", resource_type.value, namespace, name)
            return False
        return True

    async def restart(self, resource_type: ResourceType | str, namespace: str, name: str) -> bool:
        """Trigger a rolling restart; True when a restart was issued."""
        resource_type = ResourceType.parse(resource_type)
        if resource_type is ResourceType.DEPLOYMENTS:
            await self._repository.restart_deployment(namespace, name)
        elif resource_type is ResourceType.STATEFULSETS:
            await self._repository.restart_stateful_set(namespace, name)
        elif resource_type is ResourceType.DAEMONSETS:
            await self._repository.restart_daemon_set(namespace, name)
        elif resource_type is ResourceType.ROLLOUTS:
            await self._repository.restart_rollout(namespace, name)
        else:
            logger.info("Restart is not supported for %s, skipping %s/%s", resource_type.value, namespace, name)
            return False
        return True
