"""Core resource view models."""

from kubeprobe.models.core.config_info import (
    ConfigMapData,
    ConfigMapInfo,
    SecretData,
    SecretInfo,
)
from kubeprobe.models.core.hpa_info import HPACondition, HPAData, HPAInfo, HPAMetric
from kubeprobe.models.core.namespace_info import ForceDeleteResult, NamespaceInfo
from kubeprobe.models.core.node_info import NodeInfo
from kubeprobe.models.core.pod_info import (
    ContainerInfo,
    ContainerPortInfo,
    PodConditionInfo,
    PodInfo,
    ProbeInfo,
    ResourceRequirementsInfo,
    SecurityContextInfo,
    TolerationInfo,
    VolumeInfo,
    VolumeMountInfo,
)
from kubeprobe.models.core.related_info import (
    GatewayInfo,
    GatewayServer,
    IngressInfo,
    IngressPathInfo,
    IngressRuleInfo,
    OwnerInfo,
    RelatedResources,
    ServiceInfo,
    VirtualServiceInfo,
    VirtualServiceRoute,
)
from kubeprobe.models.core.workload_info import WorkloadInfo

__all__ = [
    "ConfigMapData",
    "ConfigMapInfo",
    "ContainerInfo",
    "ContainerPortInfo",
    "ForceDeleteResult",
    "GatewayInfo",
    "GatewayServer",
    "HPACondition",
    "HPAData",
    "HPAInfo",
    "HPAMetric",
    "IngressInfo",
    "IngressPathInfo",
    "IngressRuleInfo",
    "NamespaceInfo",
    "NodeInfo",
    "OwnerInfo",
    "PodConditionInfo",
    "PodInfo",
    "ProbeInfo",
    "RelatedResources",
    "ResourceRequirementsInfo",
    "SecretData",
    "SecretInfo",
    "SecurityContextInfo",
    "ServiceInfo",
    "TolerationInfo",
    "VirtualServiceInfo",
    "VirtualServiceRoute",
    "VolumeInfo",
    "VolumeMountInfo",
    "WorkloadInfo",
]
