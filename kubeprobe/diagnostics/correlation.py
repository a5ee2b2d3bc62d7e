"""Correlation predicates tying pods to the objects that select or route to them."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from kubeprobe.models.core.pod_info import PodInfo
from kubeprobe.models.core.related_info import VirtualServiceInfo

MESH_GATEWAY = "mesh"


def labels_match(selector: Mapping[str, str] | None, labels: Mapping[str, str] | None) -> bool:
    """True when every selector pair is present in ``labels``.

    An empty selector matches everything.
    """
    labels = labels or {}
    return all(labels.get(key) == value for key, value in (selector or {}).items())


def ingress_references_service(ingress: dict[str, Any], service_name: str) -> bool:
    """True when any HTTP path of ``ingress`` has ``service_name`` as backend."""
    for rule in (ingress.get("spec") or {}).get("rules") or []:
        http = rule.get("http")
        if not http:
            continue
        for path in http.get("paths") or []:
            service = (path.get("backend") or {}).get("service") or {}
            if service.get("name") == service_name:
                return True
    return False


def host_matches_service(host: str, service_names: Iterable[str]) -> bool:
    """Match a mesh destination host by full name or first DNS label."""
    names = set(service_names)
    return host in names or host.split(".", 1)[0] in names


def virtual_service_matches(virtual_service: VirtualServiceInfo, service_names: Iterable[str]) -> bool:
    """True when any route destination of ``virtual_service`` is a listed Service."""
    names = set(service_names)
    return any(host_matches_service(route.destination, names) for route in virtual_service.routes)


def parse_gateway_ref(ref: str, default_namespace: str) -> tuple[str, str]:
    """Split a gateway reference ("name" or "namespace/name") into (namespace, name)."""
    if "/" in ref:
        namespace, name = ref.split("/", 1)
        return namespace, name
    return default_namespace, ref


def collect_config_refs(pod: PodInfo) -> tuple[list[str], list[str]]:
    """Return sorted, de-duplicated ConfigMap and Secret names a pod references."""
    config_maps: set[str] = set()
    secrets: set[str] = set()
    for container in pod.containers:
        config_maps.update(container.config_map_refs)
        secrets.update(container.secret_refs)
    for volume in pod.volumes:
        config_maps.update(volume.config_map_refs)
        secrets.update(volume.secret_refs)
    config_maps.discard("")
    secrets.discard("")
    return sorted(config_maps), sorted(secrets)
