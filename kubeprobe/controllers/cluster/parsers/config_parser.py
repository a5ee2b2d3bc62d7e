"""Config parser for cluster controller - parses ConfigMaps and Secrets."""

from __future__ import annotations

import base64
import binascii
import logging
from datetime import datetime
from typing import Any

from kubeprobe.models.core.config_info import (
    ConfigMapData,
    ConfigMapInfo,
    SecretData,
    SecretInfo,
)
from kubeprobe.utils.timestamps import format_age, parse_iso_timestamp

logger = logging.getLogger(__name__)


class ConfigParser:
    """Parses ConfigMaps and Secrets."""

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now

    def _identity(self, obj: dict[str, Any]) -> dict[str, Any]:
        metadata = obj.get("metadata") or {}
        created_at = parse_iso_timestamp(metadata.get("creationTimestamp"))
        return {
            "name": metadata.get("name") or "",
            "namespace": metadata.get("namespace") or "",
            "age": format_age(created_at, self._now),
        }

    @staticmethod
    def decode_secret_value(value: str) -> str:
        """Decode a base64 Secret value into text."""
        try:
            return base64.b64decode(value, validate=True).decode("utf-8", errors="replace")
        except (binascii.Error, ValueError):
            logger.debug("Secret value is not valid base64, keeping raw value")
            return value

    def parse_config_map_row(self, config_map: dict[str, Any]) -> ConfigMapInfo:
        """Parse a ConfigMap list row."""
        created_at = parse_iso_timestamp((config_map.get("metadata") or {}).get("creationTimestamp"))
        return ConfigMapInfo(
            **self._identity(config_map),
            keys=len(config_map.get("data") or {}),
            created_at=created_at,
        )

    def parse_config_map(self, config_map: dict[str, Any]) -> ConfigMapData:
        """Parse a ConfigMap with its data."""
        return ConfigMapData(
            **self._identity(config_map),
            data=dict(config_map.get("data") or {}),
            binary_keys=sorted((config_map.get("binaryData") or {}).keys()),
            labels=(config_map.get("metadata") or {}).get("labels") or {},
        )

    def parse_secret_row(self, secret: dict[str, Any]) -> SecretInfo:
        """Parse a Secret list row."""
        created_at = parse_iso_timestamp((secret.get("metadata") or {}).get("creationTimestamp"))
        return SecretInfo(
            **self._identity(secret),
            type=secret.get("type") or "Opaque",
            keys=len(secret.get("data") or {}),
            created_at=created_at,
        )

    def parse_secret(self, secret: dict[str, Any]) -> SecretData:
        """Parse a Secret with decoded data values."""
        return SecretData(
            **self._identity(secret),
            type=secret.get("type") or "Opaque",
            data={
                key: self.decode_secret_value(value)
                for key, value in (secret.get("data") or {}).items()
            },
            labels=(secret.get("metadata") or {}).get("labels") or {},
        )
