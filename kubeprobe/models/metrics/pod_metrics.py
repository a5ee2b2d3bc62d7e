"""Pod usage snapshot models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ContainerMetrics(BaseModel):
    """Per-container usage; percentages are of the container limit when known."""

    model_config = ConfigDict(frozen=True)

    name: str
    cpu_usage: str = "0m"
    memory_usage: str = "0B"
    cpu_millicores: int = 0
    memory_bytes: int = 0
    cpu_percent: float | None = None
    mem_percent: float | None = None


class PodMetrics(BaseModel):
    """Pod usage snapshot from the metrics API."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    containers: list[ContainerMetrics] = Field(default_factory=list)

    @property
    def total_cpu_millicores(self) -> int:
        """Summed CPU usage across containers."""
        return sum(container.cpu_millicores for container in self.containers)

    @property
    def total_memory_bytes(self) -> int:
        """Summed memory usage across containers."""
        return sum(container.memory_bytes for container in self.containers)
