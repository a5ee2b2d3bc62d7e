"""Cluster client wrapper - typed, dynamic and discovery access to the API server.

This is the only module that talks to the ``kubernetes`` library. Blocking
calls run in worker threads via ``asyncio.to_thread`` and typed results are
serialized to the camelCase JSON dicts the API server returns, so fetchers and
parsers work on plain dictionaries.
"""

from __future__ import annotations

import asyncio
import io
import json
import logging
import os
from collections.abc import Callable
from contextlib import suppress
from typing import Any, TypeVar

import urllib3
from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from kubernetes.dynamic import DynamicClient
from kubernetes.dynamic.exceptions import ResourceNotFoundError

from kubeprobe.constants.defaults import METRICS_GROUP
from kubeprobe.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    DISCOVERY_REQUEST_TIMEOUT,
    LOG_REQUEST_TIMEOUT,
)
from kubeprobe.controllers.cluster.kubeconfig import load_kubeconfig_contexts
from kubeprobe.errors import (
    ConfigLoadError,
    ConflictError,
    NotFoundError,
    TransportError,
    UnavailableError,
)
from kubeprobe.models.state.app_settings import AppSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRANSPORT_ERRORS = (urllib3.exceptions.HTTPError, OSError)


def _error_message(exc: ApiException) -> str:
    """Prefer the Status message from the response body over the HTTP reason."""
    with suppress(TypeError, ValueError, AttributeError):
        body = json.loads(exc.body or "")
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return str(exc.reason or exc)


def translate_api_exception(exc: ApiException) -> Exception:
    """Map a library ApiException onto this package's error kinds."""
    message = _error_message(exc)
    if exc.status == 404:
        return NotFoundError(message)
    if exc.status == 409:
        return ConflictError(message, status=409)
    return TransportError(f"{exc.status}: {message}", status=exc.status)


class ClusterClient:
    """Typed, dynamic and discovery accessors sharing one ApiClient."""

    def __init__(
        self,
        api_client: client.ApiClient,
        *,
        dynamic: DynamicClient | None = None,
        metrics_available: bool = False,
        context: str = "",
        request_timeout: float | None = CLUSTER_REQUEST_TIMEOUT,
    ) -> None:
        self.api_client = api_client
        self.core = client.CoreV1Api(api_client)
        self.apps = client.AppsV1Api(api_client)
        self.batch = client.BatchV1Api(api_client)
        self.networking = client.NetworkingV1Api(api_client)
        self.discovery = client.DiscoveryV1Api(api_client)
        self.autoscaling = client.AutoscalingV2Api(api_client)
        self.custom = client.CustomObjectsApi(api_client)
        self.dynamic = dynamic
        self.metrics_available = metrics_available
        self.context = context
        self.request_timeout = request_timeout

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @staticmethod
    def _use_in_cluster(mode: str) -> bool:
        if mode == "true":
            return True
        if mode == "false":
            return False
        return os.environ.get("KUBERNETES_SERVICE_HOST") is not None

    @classmethod
    def from_settings(cls, settings: AppSettings) -> ClusterClient:
        """Build a client from in-cluster credentials or a kubeconfig file.

        In ``auto`` mode the in-cluster service account is used when running
        inside a pod, falling back to kubeconfig if that fails.

        Raises:
            ConfigLoadError: If no usable credentials were found.
        """
        api_client: client.ApiClient | None = None
        context = settings.context

        if cls._use_in_cluster(settings.in_cluster):
            try:
                configuration = client.Configuration()
                config.load_incluster_config(client_configuration=configuration)
                api_client = client.ApiClient(configuration)
                context = context or "in-cluster"
                logger.info("Cluster config loaded: in-cluster service account")
            except ConfigException as exc:
                if settings.in_cluster == "true":
                    raise ConfigLoadError(f"in-cluster config failed: {exc}") from exc
                logger.warning("In-cluster config failed: %s, falling back to kubeconfig", exc)

        if api_client is None:
            config_file = os.path.expanduser(settings.kubeconfig_path) if settings.kubeconfig_path else None
            try:
                api_client = config.new_client_from_config(
                    config_file=config_file,
                    context=settings.context or None,
                )
            except (ConfigException, OSError) as exc:
                raise ConfigLoadError(f"failed to load kubeconfig: {exc}") from exc
            if not context:
                _, context = load_kubeconfig_contexts(settings.kubeconfig_path)
            logger.info("Cluster config loaded: kubeconfig context %s", context or "<default>")

        return cls(
            api_client,
            dynamic=cls._build_dynamic_client(api_client),
            metrics_available=cls._probe_metrics(api_client),
            context=context,
            request_timeout=settings.request_timeout,
        )

    @staticmethod
    def _build_dynamic_client(api_client: client.ApiClient) -> DynamicClient | None:
        try:
            return DynamicClient(api_client)
        except (ApiException, *_TRANSPORT_ERRORS) as exc:
            logger.debug("Dynamic client unavailable: %s", exc)
            return None

    @staticmethod
    def _probe_metrics(api_client: client.ApiClient) -> bool:
        try:
            groups = client.ApisApi(api_client).get_api_versions().groups or []
        except (ApiException, *_TRANSPORT_ERRORS) as exc:
            logger.debug("API group discovery failed, metrics disabled: %s", exc)
            return False
        return any(group.name == METRICS_GROUP for group in groups)

    @property
    def has_dynamic(self) -> bool:
        """True when a dynamic client is configured."""
        return self.dynamic is not None

    # ------------------------------------------------------------------
    # Blocking call execution
    # ------------------------------------------------------------------

    async def _run(self, func: Callable[[], T]) -> T:
        try:
            return await asyncio.to_thread(func)
        except ResourceNotFoundError as exc:
            raise UnavailableError(str(exc)) from exc
        except ApiException as exc:
            raise translate_api_exception(exc) from exc
        except _TRANSPORT_ERRORS as exc:
            raise TransportError(str(exc)) from exc

    async def call(self, method: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Invoke a typed API method and return its JSON-serialized result."""
        if self.request_timeout is not None:
            kwargs.setdefault("_request_timeout", self.request_timeout)
        result = await self._run(lambda: method(*args, **kwargs))
        return self.api_client.sanitize_for_serialization(result)

    async def stream(
        self,
        method: Callable[..., Any],
        consume: Callable[[io.BufferedIOBase], T],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Open a streamed response and hand a binary reader to ``consume``.

        ``consume`` runs in the same worker thread and must read until EOF.
        """
        kwargs["_preload_content"] = False
        kwargs.setdefault("_request_timeout", LOG_REQUEST_TIMEOUT)

        def _consume() -> T:
            response = method(*args, **kwargs)
            try:
                return consume(io.BufferedReader(response))
            finally:
                response.release_conn()

        return await self._run(_consume)

    # ------------------------------------------------------------------
    # Dynamic client
    # ------------------------------------------------------------------

    @staticmethod
    def _to_plain(result: Any) -> Any:
        to_dict = getattr(result, "to_dict", None)
        return to_dict() if callable(to_dict) else result

    async def _dynamic(
        self,
        api_version: str,
        plural: str,
        operation: str,
        **kwargs: Any,
    ) -> Any:
        if self.dynamic is None:
            raise UnavailableError("dynamic client is not configured")
        dynamic = self.dynamic
        if self.request_timeout is not None:
            kwargs.setdefault("_request_timeout", self.request_timeout)

        def _call() -> Any:
            resource = dynamic.resources.get(api_version=api_version, name=plural)
            return getattr(dynamic, operation)(resource, **kwargs)

        return self._to_plain(await self._run(_call))

    async def dynamic_list(
        self, api_version: str, plural: str, namespace: str | None = None
    ) -> list[dict[str, Any]]:
        """List objects of an arbitrary resource."""
        result = await self._dynamic(api_version, plural, "get", namespace=namespace)
        return list((result or {}).get("items") or [])

    async def dynamic_get(
        self, api_version: str, plural: str, name: str, namespace: str | None = None
    ) -> dict[str, Any]:
        """Read one object of an arbitrary resource."""
        return await self._dynamic(api_version, plural, "get", name=name, namespace=namespace)

    async def dynamic_replace(
        self, api_version: str, plural: str, body: dict[str, Any], namespace: str | None = None
    ) -> dict[str, Any]:
        """Replace an object with ``body`` (optimistic concurrency on resourceVersion)."""
        return await self._dynamic(api_version, plural, "replace", body=body, namespace=namespace)

    async def dynamic_patch(
        self,
        api_version: str,
        plural: str,
        name: str,
        body: dict[str, Any],
        namespace: str | None = None,
    ) -> dict[str, Any]:
        """Apply a JSON merge patch to an object."""
        return await self._dynamic(
            api_version,
            plural,
            "patch",
            name=name,
            namespace=namespace,
            body=body,
            content_type="application/merge-patch+json",
        )

    async def dynamic_delete(
        self, api_version: str, plural: str, name: str, namespace: str | None = None
    ) -> None:
        """Delete one object of an arbitrary resource."""
        await self._dynamic(api_version, plural, "delete", name=name, namespace=namespace)

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    async def _get_json(self, path: str) -> dict[str, Any]:
        return await self.call(
            self.api_client.call_api,
            path,
            "GET",
            header_params={"Accept": "application/json"},
            response_type="object",
            auth_settings=["BearerToken"],
            _return_http_data_only=True,
            _request_timeout=DISCOVERY_REQUEST_TIMEOUT,
        )

    async def discover_api_resources(self) -> list[dict[str, Any]]:
        """Return ``[{groupVersion, resources: [{name, namespaced, verbs}]}]``.

        Covers the core ``v1`` group and the preferred version of every API
        group. Groups whose discovery fails (e.g. an unavailable aggregated
        API) are skipped.
        """
        resource_lists = [await self._get_json("/api/v1")]
        groups = (await self._get_json("/apis")).get("groups") or []
        for group in groups:
            group_version = (group.get("preferredVersion") or {}).get("groupVersion")
            if not group_version:
                continue
            try:
                resource_lists.append(await self._get_json(f"/apis/{group_version}"))
            except TransportError as exc:
                logger.debug("Discovery failed for %s: %s", group_version, exc)
        return resource_lists

    def close(self) -> None:
        """Release pooled connections."""
        self.api_client.close()
