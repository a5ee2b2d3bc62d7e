"""Regex patterns and marker tables for data parsing."""

import re

# RFC3339 with optional fractional seconds (up to nanoseconds), as emitted by
# the kubelet when logs are requested with timestamps.
RFC3339_PATTERN = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})T(?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d{1,9}))?(?P<tz>Z|[+-]\d{2}:\d{2})$"
)

ERROR_LOG_MARKERS = (
    "error",
    "err:",
    "fatal",
    "panic",
    "exception",
    "failed",
    "failure",
    "crash",
    "critical",
)

NODE_ROLE_LABEL_PREFIX = "node-role.kubernetes.io/"
SERVICE_NAME_LABEL = "kubernetes.io/service-name"
LEGACY_INGRESS_CLASS_ANNOTATION = "kubernetes.io/ingress.class"
RESTARTED_AT_ANNOTATION = "kubectl.kubernetes.io/restartedAt"

# Ingress annotations surfaced for debugging routing problems.
INGRESS_DEBUG_ANNOTATIONS = (
    "nginx.ingress.kubernetes.io/rewrite-target",
    "nginx.ingress.kubernetes.io/ssl-redirect",
    "nginx.ingress.kubernetes.io/proxy-body-size",
    "nginx.ingress.kubernetes.io/proxy-read-timeout",
    "nginx.ingress.kubernetes.io/proxy-send-timeout",
    "nginx.ingress.kubernetes.io/backend-protocol",
    "nginx.ingress.kubernetes.io/cors-allow-origin",
    "nginx.ingress.kubernetes.io/whitelist-source-range",
    "nginx.ingress.kubernetes.io/limit-rps",
    "traefik.ingress.kubernetes.io/router.entrypoints",
    "traefik.ingress.kubernetes.io/router.middlewares",
    "cert-manager.io/cluster-issuer",
    "cert-manager.io/issuer",
    "external-dns.alpha.kubernetes.io/hostname",
)

__all__ = [
    "ERROR_LOG_MARKERS",
    "INGRESS_DEBUG_ANNOTATIONS",
    "LEGACY_INGRESS_CLASS_ANNOTATION",
    "NODE_ROLE_LABEL_PREFIX",
    "RESTARTED_AT_ANNOTATION",
    "RFC3339_PATTERN",
    "SERVICE_NAME_LABEL",
]
