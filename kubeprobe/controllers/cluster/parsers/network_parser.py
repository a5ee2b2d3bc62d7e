"""Network parser for cluster controller - Services, Ingresses and Istio routing objects."""

from __future__ import annotations

from typing import Any

from kubeprobe.constants.defaults import INGRESS_PATH_TYPE_DEFAULT, VIRTUAL_SERVICE_MATCH_DEFAULT
from kubeprobe.constants.patterns import INGRESS_DEBUG_ANNOTATIONS, LEGACY_INGRESS_CLASS_ANNOTATION
from kubeprobe.models.core.related_info import (
    GatewayInfo,
    GatewayServer,
    IngressInfo,
    IngressPathInfo,
    IngressRuleInfo,
    ServiceInfo,
    VirtualServiceInfo,
    VirtualServiceRoute,
)
from kubeprobe.utils.resource_parser import to_int


def count_ready_endpoints(slices: list[dict[str, Any]] | None) -> int:
    """Count endpoints whose ready condition is explicitly true."""
    count = 0
    for endpoint_slice in slices or []:
        for endpoint in endpoint_slice.get("endpoints") or []:
            if (endpoint.get("conditions") or {}).get("ready") is True:
                count += 1
    return count


def format_service_ports(ports: list[dict[str, Any]] | None) -> str:
    """Render service ports as "TCP:80, UDP:53"."""
    return ", ".join(
        f"{port.get('protocol') or 'TCP'}:{to_int(port.get('port'))}" for port in ports or []
    )


class NetworkParser:
    """Parses objects that route traffic to pods."""

    @staticmethod
    def parse_service(service: dict[str, Any], endpoints: int = 0) -> ServiceInfo:
        """Parse a Service with its ready endpoint count."""
        metadata = service.get("metadata") or {}
        spec = service.get("spec") or {}
        return ServiceInfo(
            name=metadata.get("name") or "",
            type=spec.get("type") or "ClusterIP",
            cluster_ip=spec.get("clusterIP") or "",
            ports=format_service_ports(spec.get("ports")),
            endpoints=endpoints,
            selector=spec.get("selector") or {},
        )

    @staticmethod
    def _parse_path(path: dict[str, Any]) -> IngressPathInfo:
        service = (path.get("backend") or {}).get("service") or {}
        port = service.get("port") or {}
        if port.get("name"):
            service_port = port["name"]
        elif port.get("number") is not None:
            service_port = str(to_int(port["number"]))
        else:
            service_port = ""
        return IngressPathInfo(
            path=path.get("path") or "",
            path_type=path.get("pathType") or INGRESS_PATH_TYPE_DEFAULT,
            service_name=service.get("name") or "",
            service_port=service_port,
        )

    def parse_ingress(self, ingress: dict[str, Any]) -> IngressInfo:
        """Parse an Ingress with its hosts, rules, TLS and debug annotations."""
        metadata = ingress.get("metadata") or {}
        spec = ingress.get("spec") or {}
        annotations = metadata.get("annotations") or {}

        hosts: list[str] = []
        tls_secrets: list[str] = []
        tls_entries = spec.get("tls") or []
        for tls in tls_entries:
            if tls.get("secretName"):
                tls_secrets.append(tls["secretName"])
            for host in tls.get("hosts") or []:
                if host not in hosts:
                    hosts.append(host)

        rules: list[IngressRuleInfo] = []
        for rule in spec.get("rules") or []:
            host = rule.get("host") or ""
            if host and host not in hosts:
                hosts.append(host)
            paths = ((rule.get("http") or {}).get("paths")) or []
            rules.append(IngressRuleInfo(host=host, paths=[self._parse_path(p) for p in paths]))

        return IngressInfo(
            name=metadata.get("name") or "",
            class_name=spec.get("ingressClassName")
            or annotations.get(LEGACY_INGRESS_CLASS_ANNOTATION)
            or "",
            hosts=hosts,
            tls=bool(tls_entries),
            tls_secrets=tls_secrets,
            rules=rules,
            annotations={
                key: annotations[key] for key in INGRESS_DEBUG_ANNOTATIONS if key in annotations
            },
        )

    @staticmethod
    def _route_match(http_route: dict[str, Any]) -> str:
        matches = http_route.get("match") or []
        if matches:
            uri = (matches[0] or {}).get("uri") or {}
            for match_type, value in uri.items():
                return f"{match_type}: {value}"
        return VIRTUAL_SERVICE_MATCH_DEFAULT

    def parse_virtual_service(self, virtual_service: dict[str, Any]) -> VirtualServiceInfo:
        """Parse a VirtualService; one route entry per HTTP destination."""
        metadata = virtual_service.get("metadata") or {}
        spec = virtual_service.get("spec") or {}
        routes: list[VirtualServiceRoute] = []
        for http_route in spec.get("http") or []:
            match = self._route_match(http_route)
            for destination_entry in http_route.get("route") or []:
                destination = destination_entry.get("destination") or {}
                routes.append(
                    VirtualServiceRoute(
                        match=match,
                        destination=destination.get("host") or "",
                        port=to_int((destination.get("port") or {}).get("number")),
                        weight=to_int(destination_entry.get("weight")),
                        subset=destination.get("subset") or "",
                    )
                )
        return VirtualServiceInfo(
            name=metadata.get("name") or "",
            namespace=metadata.get("namespace") or "",
            hosts=[h for h in spec.get("hosts") or [] if isinstance(h, str)],
            gateways=[g for g in spec.get("gateways") or [] if isinstance(g, str)],
            routes=routes,
        )

    @staticmethod
    def parse_gateway(gateway: dict[str, Any], namespace: str) -> GatewayInfo:
        """Parse a Gateway's listeners."""
        spec = gateway.get("spec") or {}
        servers = []
        for server in spec.get("servers") or []:
            port = server.get("port") or {}
            servers.append(
                GatewayServer(
                    port=to_int(port.get("number")),
                    protocol=port.get("protocol") or "",
                    hosts=[h for h in server.get("hosts") or [] if isinstance(h, str)],
                    tls=(server.get("tls") or {}).get("mode") or "",
                )
            )
        return GatewayInfo(
            name=(gateway.get("metadata") or {}).get("name") or "",
            namespace=namespace,
            servers=servers,
        )
