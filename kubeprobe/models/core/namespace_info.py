"""Namespace models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NamespaceInfo(BaseModel):
    """Namespace row."""

    model_config = ConfigDict(frozen=True)

    name: str
    status: str = "Active"
    age: str = "Unknown"
    created_at: datetime | None = None


class ForceDeleteResult(BaseModel):
    """Outcome of a force-delete sweep.

    ``failures`` lists per-resource errors collected while sweeping; they do
    not fail the operation.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str
    deleted: int = 0
    finalizers_removed: bool = False
    failures: list[str] = Field(default_factory=list)
