"""Network fetcher for cluster controller - Services, EndpointSlices, Ingresses and Istio routing."""

from __future__ import annotations

import logging
from typing import Any

from kubeprobe.constants.defaults import ISTIO_API_VERSION_DEFAULT
from kubeprobe.constants.patterns import SERVICE_NAME_LABEL
from kubeprobe.controllers.cluster.client import ClusterClient

logger = logging.getLogger(__name__)


class NetworkFetcher:
    """Fetches objects that route traffic to pods."""

    def __init__(
        self,
        client: ClusterClient,
        istio_api_version: str = ISTIO_API_VERSION_DEFAULT,
    ) -> None:
        self._client = client
        self.istio_api_version = istio_api_version

    @property
    def has_dynamic(self) -> bool:
        """True when Istio resources can be queried."""
        return self._client.has_dynamic

    async def fetch_services(self, namespace: str) -> list[dict[str, Any]]:
        """Fetch Services in a namespace."""
        result = await self._client.call(self._client.core.list_namespaced_service, namespace)
        return result.get("items") or []

    async def fetch_endpoint_slices(self, namespace: str, service_name: str) -> list[dict[str, Any]]:
        """Fetch the EndpointSlices backing a Service."""
        result = await self._client.call(
            self._client.discovery.list_namespaced_endpoint_slice,
            namespace,
            label_selector=f"{SERVICE_NAME_LABEL}={service_name}",
        )
        return result.get("items") or []

    async def fetch_ingresses(self, namespace: str) -> list[dict[str, Any]]:
        """Fetch Ingresses in a namespace."""
        result = await self._client.call(self._client.networking.list_namespaced_ingress, namespace)
        return result.get("items") or []

    async def fetch_virtual_services(self, namespace: str) -> list[dict[str, Any]]:
        """Fetch Istio VirtualServices in a namespace."""
        return await self._client.dynamic_list(self.istio_api_version, "virtualservices", namespace)

    async def fetch_gateway(self, namespace: str, name: str) -> dict[str, Any]:
        """Fetch one Istio Gateway."""
        return await self._client.dynamic_get(self.istio_api_version, "gateways", name, namespace)
