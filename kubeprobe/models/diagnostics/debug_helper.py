"""Diagnostic hint model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from kubeprobe.constants.enums import Severity


class DebugHelper(BaseModel):
    """Issue detected on a pod with ordered suggestions."""

    model_config = ConfigDict(frozen=True)

    issue: str
    severity: Severity
    suggestions: list[str] = Field(default_factory=list)
