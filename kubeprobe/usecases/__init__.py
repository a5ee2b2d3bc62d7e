"""Use-case facade composing the repository and diagnostics."""

from kubeprobe.usecases.namespace import NamespaceResources, NamespaceUseCase
from kubeprobe.usecases.pod import PodDetails, PodUseCase
from kubeprobe.usecases.workload import WorkloadUseCase

__all__ = [
    "NamespaceResources",
    "NamespaceUseCase",
    "PodDetails",
    "PodUseCase",
    "WorkloadUseCase",
]
