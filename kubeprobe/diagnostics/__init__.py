"""Correlation and diagnostics over parsed cluster views."""

from kubeprobe.diagnostics.correlation import (
    collect_config_refs,
    ingress_references_service,
    labels_match,
    parse_gateway_ref,
    virtual_service_matches,
)
from kubeprobe.diagnostics.hpa_targets import format_hpa_targets, render_hpa_metrics, render_metric
from kubeprobe.diagnostics.log_filters import (
    filter_error_logs,
    filter_logs,
    get_logs_around_time,
    search_logs,
    sort_logs_by_time,
)
from kubeprobe.diagnostics.pod_issues import analyze_pod_issues

__all__ = [
    "analyze_pod_issues",
    "collect_config_refs",
    "filter_error_logs",
    "filter_logs",
    "format_hpa_targets",
    "get_logs_around_time",
    "ingress_references_service",
    "labels_match",
    "parse_gateway_ref",
    "render_hpa_metrics",
    "render_metric",
    "search_logs",
    "sort_logs_by_time",
    "virtual_service_matches",
]
