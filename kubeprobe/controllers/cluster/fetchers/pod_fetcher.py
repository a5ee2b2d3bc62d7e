"""Pod fetcher for cluster controller - fetches pod objects and log streams."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any

from kubeprobe.controllers.cluster.client import ClusterClient
from kubeprobe.controllers.cluster.parsers.log_parser import parse_log_stream
from kubeprobe.models.logs.log_line import LogLine, LogOptions

logger = logging.getLogger(__name__)


class PodFetcher:
    """Fetches pods and their logs."""

    def __init__(self, client: ClusterClient) -> None:
        self._client = client

    async def fetch_pods(
        self,
        namespace: str,
        *,
        label_selector: str = "",
        field_selector: str = "",
    ) -> list[dict[str, Any]]:
        """Fetch pods in a namespace, optionally filtered by selectors."""
        kwargs: dict[str, Any] = {}
        if label_selector:
            kwargs["label_selector"] = label_selector
        if field_selector:
            kwargs["field_selector"] = field_selector
        result = await self._client.call(self._client.core.list_namespaced_pod, namespace, **kwargs)
        return result.get("items") or []

    async def fetch_all_namespaces_pods(self, *, field_selector: str = "") -> list[dict[str, Any]]:
        """Fetch pods across every namespace."""
        kwargs: dict[str, Any] = {}
        if field_selector:
            kwargs["field_selector"] = field_selector
        result = await self._client.call(self._client.core.list_pod_for_all_namespaces, **kwargs)
        return result.get("items") or []

    async def fetch_pod(self, namespace: str, name: str) -> dict[str, Any]:
        """Fetch a single pod."""
        return await self._client.call(self._client.core.read_namespaced_pod, name, namespace)

    async def delete_pod(self, namespace: str, name: str) -> None:
        """Delete a pod with its default grace period."""
        await self._client.call(self._client.core.delete_namespaced_pod, name, namespace)

    @staticmethod
    def _build_log_args(options: LogOptions) -> dict[str, Any]:
        """Build read_namespaced_pod_log keyword arguments from LogOptions."""
        kwargs: dict[str, Any] = {"timestamps": options.timestamps}
        if options.container:
            kwargs["container"] = options.container
        if options.tail_lines > 0:
            kwargs["tail_lines"] = options.tail_lines
        since_seconds = int(options.since.total_seconds())
        if since_seconds > 0:
            kwargs["since_seconds"] = since_seconds
        if options.previous:
            kwargs["previous"] = True
        return kwargs

    async def fetch_logs(self, namespace: str, name: str, options: LogOptions) -> list[LogLine]:
        """Stream and parse the logs of one container."""
        consume = partial(
            parse_log_stream,
            container=options.container,
            has_timestamps=options.timestamps,
        )
        return await self._client.stream(
            self._client.core.read_namespaced_pod_log,
            consume,
            name,
            namespace,
            **self._build_log_args(options),
        )
