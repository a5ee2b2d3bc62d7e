"""Fetchers for the cluster controller - raw JSON access per resource family."""

from kubeprobe.controllers.cluster.fetchers.config_fetcher import ConfigFetcher
from kubeprobe.controllers.cluster.fetchers.discovery_fetcher import (
    APIResourceRef,
    DiscoveryFetcher,
)
from kubeprobe.controllers.cluster.fetchers.event_fetcher import EventFetcher
from kubeprobe.controllers.cluster.fetchers.hpa_fetcher import HPAFetcher
from kubeprobe.controllers.cluster.fetchers.metrics_fetcher import MetricsFetcher
from kubeprobe.controllers.cluster.fetchers.namespace_fetcher import NamespaceFetcher
from kubeprobe.controllers.cluster.fetchers.network_fetcher import NetworkFetcher
from kubeprobe.controllers.cluster.fetchers.node_fetcher import NodeFetcher
from kubeprobe.controllers.cluster.fetchers.pod_fetcher import PodFetcher
from kubeprobe.controllers.cluster.fetchers.workload_fetcher import WorkloadFetcher

__all__ = [
    "APIResourceRef",
    "ConfigFetcher",
    "DiscoveryFetcher",
    "EventFetcher",
    "HPAFetcher",
    "MetricsFetcher",
    "NamespaceFetcher",
    "NetworkFetcher",
    "NodeFetcher",
    "PodFetcher",
    "WorkloadFetcher",
]
