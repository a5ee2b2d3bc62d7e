"""Pod neighborhood resolution.

Rebuilds the objects around a pod: the owning workload, the Services
selecting it, Ingresses and Istio VirtualServices routing to those Services,
the Gateways they bind to, and the ConfigMaps/Secrets it references.
Everything except the owner chain is best effort.
"""

from __future__ import annotations

import logging
from typing import Any

from kubeprobe.controllers.cluster.fetchers.network_fetcher import NetworkFetcher
from kubeprobe.controllers.cluster.fetchers.workload_fetcher import WorkloadFetcher
from kubeprobe.controllers.cluster.parsers.network_parser import (
    NetworkParser,
    count_ready_endpoints,
)
from kubeprobe.controllers.cluster.parsers.workload_parser import rollout_replicas
from kubeprobe.diagnostics.correlation import (
    MESH_GATEWAY,
    collect_config_refs,
    ingress_references_service,
    labels_match,
    parse_gateway_ref,
    virtual_service_matches,
)
from kubeprobe.errors import ClusterError, NotFoundError, TransportError, UnavailableError
from kubeprobe.models.core.pod_info import PodInfo
from kubeprobe.models.core.related_info import (
    GatewayInfo,
    IngressInfo,
    OwnerInfo,
    RelatedResources,
    ServiceInfo,
    VirtualServiceInfo,
)
from kubeprobe.utils.resource_parser import to_int

logger = logging.getLogger(__name__)

# Owner-chain failures with these statuses are surfaced to the caller.
_AUTHORIZATION_STATUSES = frozenset({401, 403})


def _replicas(obj: dict[str, Any], desired_key: str, ready_key: str) -> tuple[int, int]:
    spec = obj.get("spec") or {}
    status = obj.get("status") or {}
    source = spec if desired_key in spec else status
    return to_int(source.get(desired_key)), to_int(status.get(ready_key))


class RelatedResourcesResolver:
    """Resolves a pod's neighborhood through the workload and network fetchers."""

    def __init__(
        self,
        workload_fetcher: WorkloadFetcher,
        network_fetcher: NetworkFetcher,
        network_parser: NetworkParser | None = None,
    ) -> None:
        self._workloads = workload_fetcher
        self._network = network_fetcher
        self._parser = network_parser or NetworkParser()

    # ------------------------------------------------------------------
    # Owner chain
    # ------------------------------------------------------------------

    async def _workload_replicas(self, namespace: str, kind: str, name: str) -> tuple[int, int] | None:
        """Return (desired, ready) for a workload kind, or None for unknown kinds."""
        if kind == "Deployment":
            obj = await self._workloads.fetch_deployment(namespace, name)
            return _replicas(obj, "replicas", "readyReplicas")
        if kind == "StatefulSet":
            obj = await self._workloads.fetch_stateful_set(namespace, name)
            return _replicas(obj, "replicas", "readyReplicas")
        if kind == "DaemonSet":
            obj = await self._workloads.fetch_daemon_set(namespace, name)
            return _replicas(obj, "desiredNumberScheduled", "numberReady")
        if kind == "Job":
            obj = await self._workloads.fetch_job(namespace, name)
            return _replicas(obj, "completions", "succeeded")
        if kind == "Rollout":
            ready, desired = rollout_replicas(await self._workloads.fetch_rollout(namespace, name))
            return desired, ready
        if kind == "ReplicaSet":
            obj = await self._workloads.fetch_replica_set(namespace, name)
            return _replicas(obj, "replicas", "readyReplicas")
        return None

    async def resolve_owner(self, pod: PodInfo) -> OwnerInfo | None:
        """Walk at most two hops up from the pod to its workload.

        Raises:
            TransportError: When the owner chain cannot be read for
                authorisation reasons.
        """
        if not pod.owner_kind:
            return None

        workload_kind, workload_name = pod.owner_kind, pod.owner_name
        try:
            if pod.owner_kind == "ReplicaSet":
                replica_set = await self._workloads.fetch_replica_set(pod.namespace, pod.owner_name)
                owners = (replica_set.get("metadata") or {}).get("ownerReferences") or []
                if owners:
                    workload_kind = owners[0].get("kind") or ""
                    workload_name = owners[0].get("name") or ""
            replicas = await self._workload_replicas(pod.namespace, workload_kind, workload_name)
        except (NotFoundError, UnavailableError) as exc:
            logger.debug("Owner %s/%s of pod %s unresolved: %s", workload_kind, workload_name, pod.name, exc)
            replicas = None
        except TransportError as exc:
            if exc.status in _AUTHORIZATION_STATUSES:
                raise
            logger.debug("Owner lookup for pod %s failed: %s", pod.name, exc)
            replicas = None

        return OwnerInfo(
            kind=pod.owner_kind,
            name=pod.owner_name,
            workload_kind=workload_kind,
            workload_name=workload_name,
            replicas=replicas[0] if replicas else None,
            ready_replicas=replicas[1] if replicas else None,
        )

    # ------------------------------------------------------------------
    # Services and routing
    # ------------------------------------------------------------------

    async def _endpoint_count(self, namespace: str, service_name: str) -> int:
        try:
            slices = await self._network.fetch_endpoint_slices(namespace, service_name)
        except ClusterError as exc:
            logger.debug("EndpointSlices for service %s unavailable: %s", service_name, exc)
            return 0
        return count_ready_endpoints(slices)

    async def resolve_services(self, pod: PodInfo) -> list[ServiceInfo]:
        """Services whose non-empty selector matches the pod labels."""
        try:
            services = await self._network.fetch_services(pod.namespace)
        except ClusterError as exc:
            logger.debug("Service listing in %s failed: %s", pod.namespace, exc)
            return []

        matched: list[ServiceInfo] = []
        for service in services:
            selector = (service.get("spec") or {}).get("selector")
            if not selector or not labels_match(selector, pod.labels):
                continue
            name = (service.get("metadata") or {}).get("name") or ""
            endpoints = await self._endpoint_count(pod.namespace, name)
            matched.append(self._parser.parse_service(service, endpoints))
        return matched

    async def resolve_ingresses(self, namespace: str, service_names: list[str]) -> list[IngressInfo]:
        """Ingresses routing to any of the Services, each reported once."""
        if not service_names:
            return []
        try:
            ingresses = await self._network.fetch_ingresses(namespace)
        except ClusterError as exc:
            logger.debug("Ingress listing in %s failed: %s", namespace, exc)
            return []
        return [
            self._parser.parse_ingress(ingress)
            for ingress in ingresses
            if any(ingress_references_service(ingress, name) for name in service_names)
        ]

    async def resolve_mesh(
        self, namespace: str, service_names: list[str]
    ) -> tuple[list[VirtualServiceInfo], list[GatewayInfo]]:
        """VirtualServices routing to the Services and the Gateways they bind."""
        if not service_names or not self._network.has_dynamic:
            return [], []
        try:
            raw_virtual_services = await self._network.fetch_virtual_services(namespace)
        except ClusterError as exc:
            logger.debug("VirtualService listing in %s failed: %s", namespace, exc)
            return [], []

        virtual_services = [
            vs
            for vs in (self._parser.parse_virtual_service(raw) for raw in raw_virtual_services)
            if virtual_service_matches(vs, service_names)
        ]

        gateway_refs: list[tuple[str, str]] = []
        for vs in virtual_services:
            for ref in vs.gateways:
                if ref == MESH_GATEWAY:
                    continue
                gateway_ref = parse_gateway_ref(ref, vs.namespace or namespace)
                if gateway_ref not in gateway_refs:
                    gateway_refs.append(gateway_ref)

        gateways: list[GatewayInfo] = []
        for gateway_namespace, gateway_name in gateway_refs:
            try:
                raw_gateway = await self._network.fetch_gateway(gateway_namespace, gateway_name)
            except ClusterError as exc:
                logger.debug("Gateway %s/%s unavailable: %s", gateway_namespace, gateway_name, exc)
                continue
            gateways.append(self._parser.parse_gateway(raw_gateway, gateway_namespace))
        return virtual_services, gateways

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def resolve(self, pod: PodInfo) -> RelatedResources:
        """Build the pod's neighborhood.

        An owner-chain authorisation error is raised before any neighbour
        is fetched.
        """
        try:
            owner = await self.resolve_owner(pod)
        except TransportError as exc:
            logger.warning("Owner chain of pod %s/%s not readable: %s", pod.namespace, pod.name, exc)
            raise

        services = await self.resolve_services(pod)
        service_names = [service.name for service in services]
        ingresses = await self.resolve_ingresses(pod.namespace, service_names)
        virtual_services, gateways = await self.resolve_mesh(pod.namespace, service_names)
        config_maps, secrets = collect_config_refs(pod)

        return RelatedResources(
            owner=owner,
            services=services,
            ingresses=ingresses,
            virtual_services=virtual_services,
            gateways=gateways,
            config_maps=config_maps,
            secrets=secrets,
        )
