"""ConfigMap and Secret models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ConfigMapInfo(BaseModel):
    """ConfigMap row."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    keys: int = 0
    age: str = "Unknown"
    created_at: datetime | None = None


class ConfigMapData(BaseModel):
    """ConfigMap with its full data map."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    data: dict[str, str] = Field(default_factory=dict)
    binary_keys: list[str] = Field(default_factory=list)
    labels: dict[str, str] = Field(default_factory=dict)
    age: str = "Unknown"


class SecretInfo(BaseModel):
    """Secret row."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    type: str = "Opaque"
    keys: int = 0
    age: str = "Unknown"
    created_at: datetime | None = None


class SecretData(BaseModel):
    """Secret with base64-decoded data values."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    type: str = "Opaque"
    data: dict[str, str] = Field(default_factory=dict)
    labels: dict[str, str] = Field(default_factory=dict)
    age: str = "Unknown"
