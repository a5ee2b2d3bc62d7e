"""Pod parser for cluster controller - parses pod objects into PodInfo views."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from kubeprobe.constants.defaults import TERMINATION_GRACE_PERIOD_DEFAULT
from kubeprobe.constants.enums import ContainerState, ProbeType
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
from kubeprobe.utils.resource_parser import format_quantity, to_int
from kubeprobe.utils.timestamps import format_age, parse_iso_timestamp

TERMINATING_STATUS = "Terminating"
UNKNOWN_STATUS = "Unknown"


def get_pod_status(pod: dict[str, Any]) -> str:
    """Derive the display status of a pod.

    Precedence, first match wins:
    1. deletionTimestamp set -> "Terminating"
    2. any container waiting with a reason -> that reason
    3. any container terminated with a reason -> that reason
    4. the pod phase ("Unknown" when absent)
    """
    if (pod.get("metadata") or {}).get("deletionTimestamp"):
        return TERMINATING_STATUS

    status = pod.get("status") or {}
    container_statuses = status.get("containerStatuses") or []
    for state_key in ("waiting", "terminated"):
        for container_status in container_statuses:
            state = (container_status.get("state") or {}).get(state_key) or {}
            if state.get("reason"):
                return state["reason"]

    return status.get("phase") or UNKNOWN_STATUS


def get_pod_owner(pod: dict[str, Any]) -> tuple[str, str]:
    """Return (kind, name) of the first owner reference, or empty strings."""
    owners = (pod.get("metadata") or {}).get("ownerReferences") or []
    if not owners:
        return "", ""
    return owners[0].get("kind") or "", owners[0].get("name") or ""


def count_ready_containers(pod: dict[str, Any]) -> str:
    """Render "ready/total" over the regular containers."""
    statuses = (pod.get("status") or {}).get("containerStatuses") or []
    containers = (pod.get("spec") or {}).get("containers") or []
    ready = sum(1 for status in statuses if status.get("ready"))
    return f"{ready}/{len(containers)}"


def sum_restarts(pod: dict[str, Any]) -> int:
    """Sum restartCount over the regular container statuses."""
    statuses = (pod.get("status") or {}).get("containerStatuses") or []
    return sum(to_int(status.get("restartCount")) for status in statuses)


class PodParser:
    """Parses pod objects into structured formats."""

    def __init__(self, now: datetime | None = None) -> None:
        """Initialize pod parser.

        Args:
            now: Reference time for ages (defaults to the current time)
        """
        self._now = now

    @staticmethod
    def parse_probe(probe: dict[str, Any] | None) -> ProbeInfo | None:
        """Decode a probe; None when the container declares no such probe."""
        if not probe:
            return None

        fields: dict[str, Any] = {
            "initial_delay": to_int(probe.get("initialDelaySeconds")),
            "period": to_int(probe.get("periodSeconds")),
            "timeout": to_int(probe.get("timeoutSeconds")),
            "success_threshold": to_int(probe.get("successThreshold")),
            "failure_threshold": to_int(probe.get("failureThreshold")),
        }
        if "httpGet" in probe:
            http_get = probe["httpGet"] or {}
            fields.update(
                type=ProbeType.HTTP.value,
                path=http_get.get("path") or "",
                port=to_int(http_get.get("port")),
                scheme=http_get.get("scheme") or "",
            )
        elif "tcpSocket" in probe:
            fields.update(type=ProbeType.TCP.value, port=to_int((probe["tcpSocket"] or {}).get("port")))
        elif "exec" in probe:
            fields.update(type=ProbeType.EXEC.value, command=list((probe["exec"] or {}).get("command") or []))
        elif "grpc" in probe:
            fields.update(type=ProbeType.GRPC.value, port=to_int((probe["grpc"] or {}).get("port")))
        return ProbeInfo(**fields)

    @staticmethod
    def _parse_resources(container: dict[str, Any]) -> ResourceRequirementsInfo:
        resources = container.get("resources") or {}
        requests = resources.get("requests") or {}
        limits = resources.get("limits") or {}
        return ResourceRequirementsInfo(
            cpu_request=format_quantity(requests.get("cpu")),
            cpu_limit=format_quantity(limits.get("cpu")),
            memory_request=format_quantity(requests.get("memory")),
            memory_limit=format_quantity(limits.get("memory")),
        )

    @staticmethod
    def _parse_security_context(container: dict[str, Any]) -> SecurityContextInfo | None:
        context = container.get("securityContext")
        if context is None:
            return None
        return SecurityContextInfo(
            run_as_user=context.get("runAsUser"),
            run_as_group=context.get("runAsGroup"),
            run_as_non_root=context.get("runAsNonRoot"),
            privileged=context.get("privileged"),
            read_only_root_filesystem=context.get("readOnlyRootFilesystem"),
            allow_privilege_escalation=context.get("allowPrivilegeEscalation"),
        )

    @staticmethod
    def _parse_state(container_status: dict[str, Any] | None) -> dict[str, Any]:
        """Flatten the container state; exit_code is only set for Terminated."""
        if not container_status:
            return {}
        state = container_status.get("state") or {}
        fields: dict[str, Any] = {
            "ready": bool(container_status.get("ready")),
            "restart_count": to_int(container_status.get("restartCount")),
        }
        if "running" in state:
            running = state["running"] or {}
            fields.update(
                state=ContainerState.RUNNING.value,
                started_at=parse_iso_timestamp(running.get("startedAt")),
            )
        elif "waiting" in state:
            waiting = state["waiting"] or {}
            fields.update(
                state=ContainerState.WAITING.value,
                reason=waiting.get("reason") or "",
                message=waiting.get("message") or "",
            )
        elif "terminated" in state:
            terminated = state["terminated"] or {}
            fields.update(
                state=ContainerState.TERMINATED.value,
                reason=terminated.get("reason") or "",
                message=terminated.get("message") or "",
                exit_code=to_int(terminated.get("exitCode")),
                started_at=parse_iso_timestamp(terminated.get("startedAt")),
                finished_at=parse_iso_timestamp(terminated.get("finishedAt")),
            )
        return fields

    def parse_container(
        self,
        container: dict[str, Any],
        container_status: dict[str, Any] | None = None,
    ) -> ContainerInfo:
        """Merge a container spec with its status."""
        env_from = container.get("envFrom") or []
        config_map_refs = [
            ref["configMapRef"]["name"]
            for ref in env_from
            if (ref.get("configMapRef") or {}).get("name")
        ]
        secret_refs = [
            ref["secretRef"]["name"]
            for ref in env_from
            if (ref.get("secretRef") or {}).get("name")
        ]
        return ContainerInfo(
            name=container.get("name") or "",
            image=container.get("image") or "",
            image_pull_policy=container.get("imagePullPolicy") or "",
            resources=self._parse_resources(container),
            ports=[
                ContainerPortInfo(
                    name=port.get("name") or "",
                    container_port=to_int(port.get("containerPort")),
                    protocol=port.get("protocol") or "TCP",
                )
                for port in container.get("ports") or []
            ],
            liveness_probe=self.parse_probe(container.get("livenessProbe")),
            readiness_probe=self.parse_probe(container.get("readinessProbe")),
            startup_probe=self.parse_probe(container.get("startupProbe")),
            security_context=self._parse_security_context(container),
            env_count=len(container.get("env") or []) + len(env_from),
            volume_mounts=[
                VolumeMountInfo(
                    name=mount.get("name") or "",
                    mount_path=mount.get("mountPath") or "",
                    read_only=bool(mount.get("readOnly")),
                    sub_path=mount.get("subPath") or "",
                )
                for mount in container.get("volumeMounts") or []
            ],
            config_map_refs=config_map_refs,
            secret_refs=secret_refs,
            **self._parse_state(container_status),
        )

    @staticmethod
    def parse_volume(volume: dict[str, Any]) -> VolumeInfo:
        """Classify a pod volume and record the ConfigMaps/Secrets it mounts."""
        name = volume.get("name") or ""
        if "configMap" in volume:
            source = (volume["configMap"] or {}).get("name") or ""
            return VolumeInfo(name=name, type="ConfigMap", source=source, config_map_refs=[source] if source else [])
        if "secret" in volume:
            source = (volume["secret"] or {}).get("secretName") or ""
            return VolumeInfo(name=name, type="Secret", source=source, secret_refs=[source] if source else [])
        if "persistentVolumeClaim" in volume:
            return VolumeInfo(
                name=name, type="PVC", source=(volume["persistentVolumeClaim"] or {}).get("claimName") or ""
            )
        if "emptyDir" in volume:
            return VolumeInfo(name=name, type="EmptyDir")
        if "hostPath" in volume:
            return VolumeInfo(name=name, type="HostPath", source=(volume["hostPath"] or {}).get("path") or "")
        if "projected" in volume:
            sources = (volume["projected"] or {}).get("sources") or []
            return VolumeInfo(
                name=name,
                type="Projected",
                config_map_refs=[
                    src["configMap"]["name"] for src in sources if (src.get("configMap") or {}).get("name")
                ],
                secret_refs=[src["secret"]["name"] for src in sources if (src.get("secret") or {}).get("name")],
            )
        if "downwardAPI" in volume:
            return VolumeInfo(name=name, type="DownwardAPI")
        return VolumeInfo(name=name, type="Other")

    def _parse_containers(
        self, specs: list[dict[str, Any]], statuses: list[dict[str, Any]]
    ) -> list[ContainerInfo]:
        status_by_name = {status.get("name"): status for status in statuses}
        return [self.parse_container(spec, status_by_name.get(spec.get("name"))) for spec in specs]

    def parse_pod(self, pod: dict[str, Any]) -> PodInfo:
        """Parse a single pod into PodInfo.

        Args:
            pod: Raw pod dictionary from API

        Returns:
            PodInfo object.
        """
        metadata = pod.get("metadata") or {}
        spec = pod.get("spec") or {}
        status = pod.get("status") or {}
        owner_kind, owner_name = get_pod_owner(pod)
        created_at = parse_iso_timestamp(metadata.get("creationTimestamp"))

        grace = spec.get("terminationGracePeriodSeconds")
        priority = spec.get("priority")

        return PodInfo(
            name=metadata.get("name") or "",
            namespace=metadata.get("namespace") or "",
            node=spec.get("nodeName") or "",
            ip=status.get("podIP") or "",
            host_ip=status.get("hostIP") or "",
            phase=status.get("phase") or UNKNOWN_STATUS,
            status=get_pod_status(pod),
            ready=count_ready_containers(pod),
            restarts=sum_restarts(pod),
            age=format_age(created_at, self._now),
            created_at=created_at,
            labels=metadata.get("labels") or {},
            annotations=metadata.get("annotations") or {},
            containers=self._parse_containers(
                spec.get("containers") or [], status.get("containerStatuses") or []
            ),
            init_containers=self._parse_containers(
                spec.get("initContainers") or [], status.get("initContainerStatuses") or []
            ),
            conditions=[
                PodConditionInfo(
                    type=condition.get("type") or "",
                    status=condition.get("status") or "Unknown",
                    reason=condition.get("reason") or "",
                    message=condition.get("message") or "",
                    last_transition_time=parse_iso_timestamp(condition.get("lastTransitionTime")),
                )
                for condition in status.get("conditions") or []
            ],
            owner_kind=owner_kind,
            owner_name=owner_name,
            qos_class=status.get("qosClass") or "",
            service_account=spec.get("serviceAccountName") or spec.get("serviceAccount") or "",
            volumes=[self.parse_volume(volume) for volume in spec.get("volumes") or []],
            restart_policy=spec.get("restartPolicy") or "",
            dns_policy=spec.get("dnsPolicy") or "",
            priority_class_name=spec.get("priorityClassName") or "",
            priority=to_int(priority) if priority is not None else None,
            node_selector=spec.get("nodeSelector") or {},
            tolerations=[
                TolerationInfo(
                    key=toleration.get("key") or "",
                    operator=toleration.get("operator") or "",
                    value=toleration.get("value") or "",
                    effect=toleration.get("effect") or "",
                    toleration_seconds=toleration.get("tolerationSeconds"),
                )
                for toleration in spec.get("tolerations") or []
            ],
            termination_grace_period=(
                to_int(grace) if grace is not None else TERMINATION_GRACE_PERIOD_DEFAULT
            ),
            start_time=parse_iso_timestamp(status.get("startTime")),
            deletion_timestamp=parse_iso_timestamp(metadata.get("deletionTimestamp")),
        )
