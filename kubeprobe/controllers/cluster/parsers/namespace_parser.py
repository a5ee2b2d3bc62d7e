"""Namespace parser for cluster controller."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from kubeprobe.models.core.namespace_info import NamespaceInfo
from kubeprobe.utils.timestamps import format_age, parse_iso_timestamp


class NamespaceParser:
    """Parses namespace objects."""

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now

    def parse_namespace(self, namespace: dict[str, Any]) -> NamespaceInfo:
        """Parse a namespace row."""
        metadata = namespace.get("metadata") or {}
        created_at = parse_iso_timestamp(metadata.get("creationTimestamp"))
        return NamespaceInfo(
            name=metadata.get("name") or "",
            status=(namespace.get("status") or {}).get("phase") or "Active",
            age=format_age(created_at, self._now),
            created_at=created_at,
        )
