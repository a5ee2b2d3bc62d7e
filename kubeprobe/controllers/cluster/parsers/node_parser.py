"""Node parser for cluster controller - parses node data into structured formats."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from kubeprobe.constants.enums import NodeStatus
from kubeprobe.constants.patterns import NODE_ROLE_LABEL_PREFIX
from kubeprobe.models.core.node_info import NodeInfo
from kubeprobe.utils.resource_parser import format_quantity
from kubeprobe.utils.timestamps import format_age, parse_iso_timestamp


class NodeParser:
    """Parses node data into structured formats."""

    _NO_ROLES = "<none>"

    def __init__(self, now: datetime | None = None) -> None:
        """Initialize node parser."""
        self._now = now

    @staticmethod
    def get_node_status(node: dict[str, Any]) -> NodeStatus:
        """Ready/NotReady from the Ready condition, Unknown when absent."""
        for condition in (node.get("status") or {}).get("conditions") or []:
            if condition.get("type") == "Ready":
                if condition.get("status") == "True":
                    return NodeStatus.READY
                return NodeStatus.NOT_READY
        return NodeStatus.UNKNOWN

    @classmethod
    def get_node_roles(cls, labels: dict[str, str]) -> str:
        """Comma-separated roles from node-role labels, or "<none>"."""
        roles = sorted(
            label[len(NODE_ROLE_LABEL_PREFIX) :]
            for label in labels
            if label.startswith(NODE_ROLE_LABEL_PREFIX) and label[len(NODE_ROLE_LABEL_PREFIX) :]
        )
        return ",".join(roles) or cls._NO_ROLES

    @staticmethod
    def get_internal_ip(node: dict[str, Any]) -> str:
        """First InternalIP address of the node."""
        for address in (node.get("status") or {}).get("addresses") or []:
            if address.get("type") == "InternalIP":
                return address.get("address") or ""
        return ""

    def parse_node_info(self, node: dict[str, Any], pod_count: int = 0) -> NodeInfo:
        """Parse a single node into NodeInfo.

        Args:
            node: Raw node dictionary from API
            pod_count: Number of pods scheduled on this node

        Returns:
            NodeInfo object.
        """
        metadata = node.get("metadata") or {}
        status = node.get("status") or {}
        labels = metadata.get("labels") or {}
        capacity = status.get("capacity") or {}
        created_at = parse_iso_timestamp(metadata.get("creationTimestamp"))

        return NodeInfo(
            name=metadata.get("name") or "",
            status=self.get_node_status(node),
            roles=self.get_node_roles(labels),
            age=format_age(created_at, self._now),
            kubelet_version=(status.get("nodeInfo") or {}).get("kubeletVersion") or "",
            internal_ip=self.get_internal_ip(node),
            pod_count=pod_count,
            cpu=format_quantity(capacity.get("cpu")),
            memory=format_quantity(capacity.get("memory")),
            labels=labels,
            unschedulable=bool((node.get("spec") or {}).get("unschedulable")),
            created_at=created_at,
        )
