"""HPA parser for cluster controller - parses autoscalers into rows and detail views."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from kubeprobe.constants.defaults import HPA_MIN_REPLICAS_DEFAULT
from kubeprobe.models.core.hpa_info import HPACondition, HPAData, HPAInfo, HPAMetric
from kubeprobe.utils.resource_parser import to_int
from kubeprobe.utils.timestamps import format_age, parse_iso_timestamp


class HPAParser:
    """Parses autoscaling/v2 HorizontalPodAutoscalers.

    Metric targets are rendered by the caller and passed in.
    """

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now

    @staticmethod
    def get_reference(hpa: dict[str, Any]) -> str:
        """Scale target as "Kind/Name"."""
        ref = (hpa.get("spec") or {}).get("scaleTargetRef") or {}
        return f"{ref.get('kind') or ''}/{ref.get('name') or ''}"

    def _common(self, hpa: dict[str, Any]) -> dict[str, Any]:
        metadata = hpa.get("metadata") or {}
        spec = hpa.get("spec") or {}
        status = hpa.get("status") or {}
        created_at = parse_iso_timestamp(metadata.get("creationTimestamp"))
        return {
            "name": metadata.get("name") or "",
            "namespace": metadata.get("namespace") or "",
            "reference": self.get_reference(hpa),
            "min_replicas": to_int(spec.get("minReplicas"), HPA_MIN_REPLICAS_DEFAULT),
            "max_replicas": to_int(spec.get("maxReplicas")),
            "current_replicas": to_int(status.get("currentReplicas")),
            "age": format_age(created_at, self._now),
        }

    def parse_hpa_row(self, hpa: dict[str, Any], targets: str) -> HPAInfo:
        """Parse an autoscaler list row."""
        return HPAInfo(**self._common(hpa), targets=targets)

    def parse_hpa(self, hpa: dict[str, Any], metrics: list[HPAMetric]) -> HPAData:
        """Parse an autoscaler detail view."""
        status = hpa.get("status") or {}
        return HPAData(
            **self._common(hpa),
            desired_replicas=to_int(status.get("desiredReplicas")),
            metrics=metrics,
            conditions=[
                HPACondition(
                    type=condition.get("type") or "",
                    status=condition.get("status") or "Unknown",
                    reason=condition.get("reason") or "",
                    message=condition.get("message") or "",
                    last_transition_time=parse_iso_timestamp(condition.get("lastTransitionTime")),
                )
                for condition in status.get("conditions") or []
            ],
            last_scale_time=parse_iso_timestamp(status.get("lastScaleTime")),
        )
