"""kubeprobe - cluster access and diagnostics layer for a Kubernetes terminal client."""

__version__ = "0.1.0"
