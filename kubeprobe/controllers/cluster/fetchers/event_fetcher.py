"""Event fetcher for cluster controller - fetches event data from Kubernetes cluster."""

from __future__ import annotations

import logging
from typing import Any

from kubeprobe.constants.timeouts import CLUSTER_REQUEST_TIMEOUT
from kubeprobe.controllers.cluster.client import ClusterClient
from kubeprobe.errors import TransportError

logger = logging.getLogger(__name__)


class EventFetcher:
    """Fetches event data from Kubernetes cluster."""

    _RETRY_TIMEOUT_FACTOR = 1.5
    _TIMEOUT_ERROR_TOKENS = (
        "timed out",
        "timeout",
        "deadline exceeded",
        "i/o timeout",
    )

    def __init__(self, client: ClusterClient, request_timeout: float = CLUSTER_REQUEST_TIMEOUT) -> None:
        """Initialize with the cluster client.

        Args:
            client: Shared cluster client
            request_timeout: Timeout of the first attempt, in seconds
        """
        self._client = client
        self._request_timeout = request_timeout

    @classmethod
    def _is_timeout_error(cls, error: Exception) -> bool:
        """Return True when error indicates timeout-like failure."""
        message = str(error).lower()
        return any(token in message for token in cls._TIMEOUT_ERROR_TOKENS)

    @staticmethod
    def build_field_selector(
        *,
        kind: str = "",
        name: str = "",
        event_type: str = "",
    ) -> str:
        """Build an event field selector for an involved object and/or type."""
        selectors: list[str] = []
        if name:
            selectors.append(f"involvedObject.name={name}")
        if kind:
            selectors.append(f"involvedObject.kind={kind}")
        if event_type:
            selectors.append(f"type={event_type}")
        return ",".join(selectors)

    async def fetch_events_raw(
        self,
        namespace: str,
        *,
        field_selector: str = "",
    ) -> list[dict[str, Any]]:
        """Fetch raw core/v1 events in a namespace.

        A timeout-like failure is retried once with a longer request timeout.
        """
        kwargs: dict[str, Any] = {}
        if field_selector:
            kwargs["field_selector"] = field_selector

        timeout_plan = (self._request_timeout, self._request_timeout * self._RETRY_TIMEOUT_FACTOR)
        for attempt, timeout in enumerate(timeout_plan, start=1):
            try:
                result = await self._client.call(
                    self._client.core.list_namespaced_event,
                    namespace,
                    _request_timeout=timeout,
                    **kwargs,
                )
                return result.get("items") or []
            except TransportError as exc:
                if self._is_timeout_error(exc) and attempt < len(timeout_plan):
                    logger.warning(
                        "Event fetch timed out (attempt %s/%s with %ss, namespace=%s), retrying",
                        attempt,
                        len(timeout_plan),
                        timeout,
                        namespace,
                    )
                    continue
                raise
        return []

    async def fetch_object_events_raw(
        self, namespace: str, kind: str, name: str
    ) -> list[dict[str, Any]]:
        """Fetch raw events for one involved object."""
        return await self.fetch_events_raw(
            namespace, field_selector=self.build_field_selector(kind=kind, name=name)
        )

    async def fetch_warning_events_raw(self, namespace: str) -> list[dict[str, Any]]:
        """Fetch raw Warning events in a namespace."""
        return await self.fetch_events_raw(
            namespace, field_selector=self.build_field_selector(event_type="Warning")
        )
