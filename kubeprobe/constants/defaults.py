"""Default values for settings and request options.

All default values used in AppSettings, LogOptions and parser fallbacks.
"""

from typing import Final

# ============================================================================
# Log defaults
# ============================================================================

LOG_TAIL_LINES_DEFAULT: Final = 100
ALL_CONTAINER_TAIL_LINES_DEFAULT: Final = 500
LOG_WINDOW_MINUTES_DEFAULT: Final = 5

# ============================================================================
# Event defaults
# ============================================================================

EVENT_LIMIT_DEFAULT: Final = 50
RECENT_WARNINGS_WINDOW_MINUTES_DEFAULT: Final = 60

# ============================================================================
# Spec fallbacks
# ============================================================================

TERMINATION_GRACE_PERIOD_DEFAULT: Final = 30
HPA_MIN_REPLICAS_DEFAULT: Final = 1
ROLLOUT_REPLICAS_DEFAULT: Final = 1
JOB_COMPLETIONS_DEFAULT: Final = 1
INGRESS_PATH_TYPE_DEFAULT: Final = "Prefix"
VIRTUAL_SERVICE_MATCH_DEFAULT: Final = "/*"

# ============================================================================
# API group versions
# ============================================================================

ROLLOUT_API_VERSION_DEFAULT: Final = "argoproj.io/v1alpha1"
ISTIO_API_VERSION_DEFAULT: Final = "networking.istio.io/v1beta1"
METRICS_GROUP: Final = "metrics.k8s.io"
METRICS_VERSION: Final = "v1beta1"

# ============================================================================
# Client defaults
# ============================================================================

IN_CLUSTER_MODE_DEFAULT: Final = "auto"
KUBECONFIG_PATH_DEFAULT: Final = "~/.kube/config"

__all__ = [
    "ALL_CONTAINER_TAIL_LINES_DEFAULT",
    "EVENT_LIMIT_DEFAULT",
    "HPA_MIN_REPLICAS_DEFAULT",
    "INGRESS_PATH_TYPE_DEFAULT",
    "IN_CLUSTER_MODE_DEFAULT",
    "ISTIO_API_VERSION_DEFAULT",
    "JOB_COMPLETIONS_DEFAULT",
    "KUBECONFIG_PATH_DEFAULT",
    "LOG_TAIL_LINES_DEFAULT",
    "LOG_WINDOW_MINUTES_DEFAULT",
    "METRICS_GROUP",
    "METRICS_VERSION",
    "RECENT_WARNINGS_WINDOW_MINUTES_DEFAULT",
    "ROLLOUT_API_VERSION_DEFAULT",
    "ROLLOUT_REPLICAS_DEFAULT",
    "TERMINATION_GRACE_PERIOD_DEFAULT",
    "VIRTUAL_SERVICE_MATCH_DEFAULT",
]
