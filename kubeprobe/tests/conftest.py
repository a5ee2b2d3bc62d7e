"""Shared fixtures: a fake ClusterClient whose typed API methods return plain dicts."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def _invoke(method: Any, *args: Any, **kwargs: Any) -> Any:
    return method(*args, **kwargs)


@pytest.fixture
def fake_client() -> MagicMock:
    """ClusterClient stand-in.

    ``call`` invokes the given API method directly, so tests configure
    ``client.core.<method>.return_value`` (or ``side_effect``) with dicts.
    Dynamic helpers and ``stream`` are AsyncMocks.
    """
    client = MagicMock()
    client.call = AsyncMock(side_effect=_invoke)
    client.stream = AsyncMock()
    client.dynamic_list = AsyncMock(return_value=[])
    client.dynamic_get = AsyncMock(return_value={})
    client.dynamic_replace = AsyncMock(return_value={})
    client.dynamic_patch = AsyncMock(return_value={})
    client.dynamic_delete = AsyncMock(return_value=None)
    client.discover_api_resources = AsyncMock(return_value=[])
    client.has_dynamic = True
    client.metrics_available = True
    client.context = "test-context"
    return client


@pytest.fixture
def now() -> datetime:
    return NOW


def make_pod(
    name: str = "web-abc",
    namespace: str = "default",
    *,
    labels: dict[str, str] | None = None,
    phase: str = "Running",
    containers: list[dict[str, Any]] | None = None,
    container_statuses: list[dict[str, Any]] | None = None,
    owner: tuple[str, str] | None = None,
    node: str = "node-1",
    volumes: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build a serialized pod object."""
    metadata: dict[str, Any] = {
        "name": name,
        "namespace": namespace,
        "labels": labels or {},
        "creationTimestamp": "2024-01-15T11:00:00Z",
    }
    if owner:
        metadata["ownerReferences"] = [{"kind": owner[0], "name": owner[1]}]
    return {
        "metadata": metadata,
        "spec": {
            "nodeName": node,
            "containers": containers if containers is not None else [{"name": "app", "image": "nginx:1.25"}],
            "volumes": volumes or [],
        },
        "status": {
            "phase": phase,
            "containerStatuses": container_statuses or [],
        },
    }


@pytest.fixture
def pod_factory() -> Any:
    """Expose make_pod to tests."""
    return make_pod
