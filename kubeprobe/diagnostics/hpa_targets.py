"""Autoscaler target rendering - (type, name, target, current) tuples per metric."""

from __future__ import annotations

from typing import Any

from kubeprobe.constants.enums import MetricSourceType
from kubeprobe.models.core.hpa_info import HPAMetric
from kubeprobe.utils.resource_parser import format_quantity

UNKNOWN_VALUE = "<unknown>"
NO_TARGETS = "<none>"

# spec/status key holding the metric source for each metric type
_SOURCE_KEYS = {
    MetricSourceType.RESOURCE.value: "resource",
    MetricSourceType.CONTAINER_RESOURCE.value: "containerResource",
    MetricSourceType.PODS.value: "pods",
    MetricSourceType.OBJECT.value: "object",
    MetricSourceType.EXTERNAL.value: "external",
}


def _metric_name(metric_type: str, source: dict[str, Any]) -> str:
    if metric_type in (MetricSourceType.RESOURCE.value, MetricSourceType.CONTAINER_RESOURCE.value):
        return source.get("name") or ""
    return (source.get("metric") or {}).get("name") or ""


def _render_value(value: dict[str, Any]) -> str | None:
    """Render a MetricTarget / MetricValueStatus; None when it carries nothing."""
    if value.get("averageUtilization") is not None:
        return f"{value['averageUtilization']}%"
    if value.get("averageValue") is not None:
        return format_quantity(value["averageValue"])
    if value.get("value") is not None:
        return format_quantity(value["value"])
    return None


def _render_object_value(value: dict[str, Any]) -> str | None:
    """Object and External metrics prefer value over averageValue."""
    if value.get("value") is not None:
        return format_quantity(value["value"])
    if value.get("averageValue") is not None:
        return format_quantity(value["averageValue"])
    return None


def _find_current(
    metric_type: str, name: str, current_metrics: list[dict[str, Any]]
) -> dict[str, Any] | None:
    source_key = _SOURCE_KEYS.get(metric_type)
    if source_key is None:
        return None
    for current in current_metrics:
        if current.get("type") != metric_type:
            continue
        source = current.get(source_key) or {}
        if _metric_name(metric_type, source) == name:
            return source.get("current") or {}
    return None


def render_metric(metric: dict[str, Any], current_metrics: list[dict[str, Any]] | None = None) -> HPAMetric:
    """Render one ``spec.metrics[]`` entry against ``status.currentMetrics``."""
    metric_type = metric.get("type") or ""
    source = metric.get(_SOURCE_KEYS.get(metric_type, ""), None) or {}
    name = _metric_name(metric_type, source)
    target_spec = source.get("target") or {}
    current = _find_current(metric_type, name, current_metrics or [])

    if metric_type in (MetricSourceType.OBJECT.value, MetricSourceType.EXTERNAL.value):
        target = _render_object_value(target_spec)
        current_value = _render_object_value(current) if current is not None else None
    else:
        target = _render_value(target_spec)
        current_value = _render_value(current) if current is not None else None

    return HPAMetric(
        type=metric_type,
        name=name,
        target=target if target is not None else UNKNOWN_VALUE,
        current=current_value if current_value is not None else UNKNOWN_VALUE,
    )


def render_hpa_metrics(hpa: dict[str, Any]) -> list[HPAMetric]:
    """Render every metric of an autoscaler in spec order."""
    spec_metrics = (hpa.get("spec") or {}).get("metrics") or []
    current_metrics = (hpa.get("status") or {}).get("currentMetrics") or []
    return [render_metric(metric, current_metrics) for metric in spec_metrics]


def format_hpa_targets(metrics: list[HPAMetric]) -> str:
    """Join metrics as "name: current/target", or "<none>" when empty."""
    if not metrics:
        return NO_TARGETS
    return ", ".join(f"{metric.name}: {metric.current}/{metric.target}" for metric in metrics)
