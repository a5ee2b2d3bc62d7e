"""Repository port - the capability set the UI layer consumes.

Every cluster-facing operation is a coroutine. Kubeconfig context queries are
local and stay synchronous.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any

from kubeprobe.constants.enums import ResourceType
from kubeprobe.models.core.config_info import ConfigMapData, ConfigMapInfo, SecretData, SecretInfo
from kubeprobe.models.core.hpa_info import HPAData, HPAInfo
from kubeprobe.models.core.namespace_info import ForceDeleteResult, NamespaceInfo
from kubeprobe.models.core.node_info import NodeInfo
from kubeprobe.models.core.pod_info import PodInfo
from kubeprobe.models.core.related_info import RelatedResources
from kubeprobe.models.core.workload_info import WorkloadInfo
from kubeprobe.models.events.event_info import EventInfo
from kubeprobe.models.logs.log_line import LogLine, LogOptions
from kubeprobe.models.metrics.pod_metrics import PodMetrics


class KubernetesRepository(ABC):
    """Abstract cluster repository."""

    @abstractmethod
    async def check_connection(self) -> bool:
        """Check if the API server answers.

        Returns:
            True if connection is available, False otherwise
        """
        ...

    # Namespaces

    @abstractmethod
    async def list_namespaces(self) -> list[str]:
        """Namespace names sorted ascending."""
        ...

    @abstractmethod
    async def list_namespace_infos(self) -> list[NamespaceInfo]:
        """Namespace rows sorted by name."""
        ...

    @abstractmethod
    async def list_active_namespace_names(self) -> list[str]:
        """Names of namespaces in phase Active, sorted."""
        ...

    # Workloads

    @abstractmethod
    async def list_workloads(self, namespace: str, resource_type: ResourceType) -> list[WorkloadInfo]:
        """Workload rows of one kind sorted by name."""
        ...

    @abstractmethod
    async def list_rollouts(self, namespace: str) -> list[WorkloadInfo]:
        """Rollout rows; empty when rollouts are not served."""
        ...

    @abstractmethod
    async def get_workload_pods(self, workload: WorkloadInfo) -> list[PodInfo]: ...

    @abstractmethod
    async def get_workload_events(self, workload: WorkloadInfo) -> list[EventInfo]: ...

    @abstractmethod
    async def get_deployment(self, namespace: str, name: str) -> dict[str, Any]: ...

    @abstractmethod
    async def get_stateful_set(self, namespace: str, name: str) -> dict[str, Any]: ...

    @abstractmethod
    async def get_daemon_set(self, namespace: str, name: str) -> dict[str, Any]: ...

    @abstractmethod
    async def get_job(self, namespace: str, name: str) -> dict[str, Any]: ...

    @abstractmethod
    async def get_rollout(self, namespace: str, name: str) -> dict[str, Any]: ...

    # Pods

    @abstractmethod
    async def get_pod(self, namespace: str, name: str) -> PodInfo: ...

    @abstractmethod
    async def list_all_pods(self, namespace: str) -> list[PodInfo]: ...

    @abstractmethod
    async def list_pods_by_node(self, node_name: str) -> list[PodInfo]:
        """Pods scheduled on a node, sorted by namespace then name."""
        ...

    @abstractmethod
    async def delete_pod(self, namespace: str, name: str) -> None: ...

    @abstractmethod
    async def get_pod_logs(self, namespace: str, pod_name: str, options: LogOptions) -> list[LogLine]: ...

    @abstractmethod
    async def get_all_container_logs(self, namespace: str, pod_name: str, tail_lines: int) -> list[LogLine]:
        """Logs of every container merged in timestamp order."""
        ...

    @abstractmethod
    async def get_previous_logs(
        self, namespace: str, pod_name: str, container: str, tail_lines: int
    ) -> list[LogLine]: ...

    @abstractmethod
    async def get_pod_events(self, namespace: str, pod_name: str) -> list[EventInfo]: ...

    @abstractmethod
    async def get_pod_metrics(self, namespace: str, pod_name: str) -> PodMetrics:
        """Usage snapshot; raises UnavailableError without a metrics API."""
        ...

    @abstractmethod
    async def get_namespace_metrics(self, namespace: str) -> list[PodMetrics]: ...

    @abstractmethod
    async def get_related_resources(self, pod: PodInfo) -> RelatedResources: ...

    # Nodes

    @abstractmethod
    async def list_nodes(self) -> list[NodeInfo]: ...

    @abstractmethod
    async def get_node(self, name: str) -> NodeInfo: ...

    # Config

    @abstractmethod
    async def list_config_maps(self, namespace: str) -> list[ConfigMapInfo]: ...

    @abstractmethod
    async def get_config_map(self, namespace: str, name: str) -> ConfigMapData: ...

    @abstractmethod
    async def list_secrets(self, namespace: str) -> list[SecretInfo]: ...

    @abstractmethod
    async def get_secret(self, namespace: str, name: str) -> SecretData: ...

    @abstractmethod
    async def copy_config_map_to_namespace(
        self, source_namespace: str, name: str, target_namespace: str
    ) -> None: ...

    @abstractmethod
    async def copy_secret_to_namespace(
        self, source_namespace: str, name: str, target_namespace: str
    ) -> None: ...

    # Autoscaling

    @abstractmethod
    async def list_hpas(self, namespace: str) -> list[HPAInfo]: ...

    @abstractmethod
    async def get_hpa(self, namespace: str, name: str) -> HPAData: ...

    # Events

    @abstractmethod
    async def get_namespace_events(self, namespace: str, limit: int) -> list[EventInfo]: ...

    @abstractmethod
    async def get_recent_warnings(self, namespace: str, since: timedelta) -> list[EventInfo]: ...

    # Actions

    @abstractmethod
    async def scale_deployment(self, namespace: str, name: str, replicas: int) -> None: ...

    @abstractmethod
    async def scale_stateful_set(self, namespace: str, name: str, replicas: int) -> None: ...

    @abstractmethod
    async def scale_rollout(self, namespace: str, name: str, replicas: int) -> None: ...

    @abstractmethod
    async def restart_deployment(self, namespace: str, name: str) -> None: ...

    @abstractmethod
    async def restart_stateful_set(self, namespace: str, name: str) -> None: ...

    @abstractmethod
    async def restart_daemon_set(self, namespace: str, name: str) -> None: ...

    @abstractmethod
    async def restart_rollout(self, namespace: str, name: str) -> None: ...

    @abstractmethod
    async def force_delete_namespace(self, name: str) -> ForceDeleteResult: ...

    # Context

    @abstractmethod
    def get_current_context(self) -> str: ...

    @abstractmethod
    def list_contexts(self) -> tuple[list[str], str]:
        """Return (context names, current context)."""
        ...
