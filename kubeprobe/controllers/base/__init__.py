"""Base classes for controllers."""

from kubeprobe.controllers.base.repository import KubernetesRepository

__all__ = ["KubernetesRepository"]
