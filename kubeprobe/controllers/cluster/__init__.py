"""Init file for cluster module."""

from kubeprobe.controllers.cluster.client import ClusterClient
from kubeprobe.controllers.cluster.fetchers import (
    EventFetcher,
    NetworkFetcher,
    NodeFetcher,
    PodFetcher,
    WorkloadFetcher,
)
from kubeprobe.controllers.cluster.parsers import EventParser, NodeParser, PodParser

__all__ = [
    "ClusterClient",
    "EventFetcher",
    "EventParser",
    "NetworkFetcher",
    "NodeFetcher",
    "NodeParser",
    "PodFetcher",
    "PodParser",
    "WorkloadFetcher",
]
