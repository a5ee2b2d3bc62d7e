"""Controllers for cluster access.

``kubeprobe.controllers.cluster.controller.ClusterController`` implements the
``KubernetesRepository`` port on top of the fetchers and parsers.
"""

from __future__ import annotations

from kubeprobe.controllers.base import KubernetesRepository

__all__ = ["KubernetesRepository"]
