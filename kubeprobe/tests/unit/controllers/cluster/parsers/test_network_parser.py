"""Tests for NetworkParser and endpoint counting."""

from __future__ import annotations

from kubeprobe.controllers.cluster.parsers.network_parser import (
    NetworkParser,
    count_ready_endpoints,
    format_service_ports,
)


class TestEndpoints:
    """Tests for ready endpoint counting."""

    def test_only_explicitly_ready_endpoints_count(self) -> None:
        """Unknown or false ready conditions are not counted."""
        slices = [
            {"endpoints": [{"conditions": {"ready": True}}, {"conditions": {"ready": False}}]},
            {"endpoints": [{"conditions": {}}, {"conditions": {"ready": True}}]},
            {"endpoints": None},
        ]
        assert count_ready_endpoints(slices) == 2
        assert count_ready_endpoints(None) == 0


class TestServices:
    """Tests for Service rows."""

    def test_ports(self) -> None:
        """Ports render protocol:port with TCP as the default protocol."""
        assert format_service_ports([{"port": 80}, {"port": 53, "protocol": "UDP"}]) == "TCP:80, UDP:53"

    def test_parse_service(self) -> None:
        """Service fields and endpoints are decoded."""
        info = NetworkParser.parse_service(
            {
                "metadata": {"name": "web"},
                "spec": {"type": "NodePort", "clusterIP": "10.96.0.10", "ports": [{"port": 80}], "selector": {"app": "web"}},
            },
            endpoints=3,
        )
        assert info.type == "NodePort"
        assert info.cluster_ip == "10.96.0.10"
        assert info.ports == "TCP:80"
        assert info.endpoints == 3
        assert info.selector == {"app": "web"}


class TestIngress:
    """Tests for Ingress decoding."""

    def test_parse_ingress(self) -> None:
        """Hosts, TLS, class, paths and debug annotations are decoded."""
        ingress = {
            "metadata": {
                "name": "web",
                "annotations": {
                    "kubernetes.io/ingress.class": "nginx",
                    "nginx.ingress.kubernetes.io/rewrite-target": "/",
                    "unrelated/annotation": "x",
                },
            },
            "spec": {
                "tls": [{"hosts": ["web.example.com"], "secretName": "web-tls"}],
                "rules": [
                    {
                        "host": "web.example.com",
                        "http": {
                            "paths": [
                                {"path": "/", "backend": {"service": {"name": "web", "port": {"number": 80}}}},
                                {
                                    "path": "/api",
                                    "pathType": "Exact",
                                    "backend": {"service": {"name": "api", "port": {"name": "http"}}},
                                },
                            ]
                        },
                    },
                    {"host": "alt.example.com"},
                ],
            },
        }
        info = NetworkParser().parse_ingress(ingress)

        assert info.class_name == "nginx"
        assert info.hosts == ["web.example.com", "alt.example.com"]
        assert info.tls is True
        assert info.tls_secrets == ["web-tls"]
        assert info.annotations == {"nginx.ingress.kubernetes.io/rewrite-target": "/"}
        paths = info.rules[0].paths
        assert (paths[0].path_type, paths[0].service_port) == ("Prefix", "80")
        assert (paths[1].path_type, paths[1].service_port) == ("Exact", "http")
        assert info.rules[1].paths == []

    def test_ingress_class_field_wins(self) -> None:
        """spec.ingressClassName takes precedence over the legacy annotation."""
        info = NetworkParser().parse_ingress(
            {
                "metadata": {"name": "web", "annotations": {"kubernetes.io/ingress.class": "nginx"}},
                "spec": {"ingressClassName": "traefik"},
            }
        )
        assert info.class_name == "traefik"
        assert info.tls is False


class TestIstio:
    """Tests for VirtualService and Gateway decoding."""

    def test_virtual_service_routes(self) -> None:
        """Every destination of every HTTP route becomes one entry."""
        info = NetworkParser().parse_virtual_service(
            {
                "metadata": {"name": "web", "namespace": "default"},
                "spec": {
                    "hosts": ["web.example.com"],
                    "gateways": ["istio-system/public"],
                    "http": [
                        {
                            "match": [{"uri": {"prefix": "/v2"}}],
                            "route": [
                                {"destination": {"host": "web", "subset": "v2", "port": {"number": 8080}}, "weight": 20},
                                {"destination": {"host": "web", "subset": "v1"}, "weight": 80},
                            ],
                        },
                        {"route": [{"destination": {"host": "web"}}]},
                    ],
                },
            }
        )
        assert [(r.match, r.subset, r.weight) for r in info.routes] == [
            ("prefix: /v2", "v2", 20),
            ("prefix: /v2", "v1", 80),
            ("/*", "", 0),
        ]
        assert info.routes[0].port == 8080
        assert info.gateways == ["istio-system/public"]

    def test_gateway(self) -> None:
        """Gateway listeners are decoded."""
        info = NetworkParser.parse_gateway(
            {
                "metadata": {"name": "public"},
                "spec": {
                    "servers": [
                        {"port": {"number": 443, "protocol": "HTTPS"}, "hosts": ["*.example.com"], "tls": {"mode": "SIMPLE"}}
                    ]
                },
            },
            "istio-system",
        )
        assert info.namespace == "istio-system"
        assert info.servers[0].port == 443
        assert info.servers[0].tls == "SIMPLE"
