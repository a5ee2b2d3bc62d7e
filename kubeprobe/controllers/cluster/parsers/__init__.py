"""Parsers for the cluster controller - raw JSON objects into view models."""

from kubeprobe.controllers.cluster.parsers.config_parser import ConfigParser
from kubeprobe.controllers.cluster.parsers.event_parser import EventParser
from kubeprobe.controllers.cluster.parsers.hpa_parser import HPAParser
from kubeprobe.controllers.cluster.parsers.log_parser import parse_log_line, parse_log_stream
from kubeprobe.controllers.cluster.parsers.metrics_parser import MetricsParser
from kubeprobe.controllers.cluster.parsers.namespace_parser import NamespaceParser
from kubeprobe.controllers.cluster.parsers.network_parser import (
    NetworkParser,
    count_ready_endpoints,
)
from kubeprobe.controllers.cluster.parsers.node_parser import NodeParser
from kubeprobe.controllers.cluster.parsers.pod_parser import PodParser, get_pod_status
from kubeprobe.controllers.cluster.parsers.workload_parser import (
    WorkloadParser,
    get_scale_resource_type,
)

__all__ = [
    "ConfigParser",
    "EventParser",
    "HPAParser",
    "MetricsParser",
    "NamespaceParser",
    "NetworkParser",
    "NodeParser",
    "PodParser",
    "WorkloadParser",
    "count_ready_endpoints",
    "get_pod_status",
    "get_scale_resource_type",
    "parse_log_line",
    "parse_log_stream",
]
