"""Application settings models."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kubeprobe.constants.defaults import (
    ALL_CONTAINER_TAIL_LINES_DEFAULT,
    EVENT_LIMIT_DEFAULT,
    IN_CLUSTER_MODE_DEFAULT,
    ISTIO_API_VERSION_DEFAULT,
    LOG_TAIL_LINES_DEFAULT,
    LOG_WINDOW_MINUTES_DEFAULT,
    RECENT_WARNINGS_WINDOW_MINUTES_DEFAULT,
    ROLLOUT_API_VERSION_DEFAULT,
)
from kubeprobe.constants.limits import (
    EVENT_LIMIT_MAX,
    EVENT_LIMIT_MIN,
    REQUEST_TIMEOUT_MAX,
    REQUEST_TIMEOUT_MIN,
    TAIL_LINES_MAX,
    TAIL_LINES_MIN,
)
from kubeprobe.constants.timeouts import CLUSTER_REQUEST_TIMEOUT

_IN_CLUSTER_MODES = ("auto", "true", "false")


class AppSettings(BaseSettings):
    """Application settings model with validation.

    Values come from ``KUBEPROBE_*`` environment variables or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="KUBEPROBE_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    # Cluster access
    kubeconfig_path: str = ""  # empty -> $KUBECONFIG or ~/.kube/config
    context: str = ""  # empty -> current-context
    in_cluster: str = IN_CLUSTER_MODE_DEFAULT  # auto|true|false
    request_timeout: float = CLUSTER_REQUEST_TIMEOUT

    # Logs
    default_tail_lines: int = LOG_TAIL_LINES_DEFAULT
    all_container_tail_lines: int = ALL_CONTAINER_TAIL_LINES_DEFAULT
    log_window_minutes: int = LOG_WINDOW_MINUTES_DEFAULT

    # Events
    event_limit: int = EVENT_LIMIT_DEFAULT
    recent_warnings_minutes: int = RECENT_WARNINGS_WINDOW_MINUTES_DEFAULT

    # Optional custom resources
    rollout_api_version: str = ROLLOUT_API_VERSION_DEFAULT
    istio_api_version: str = ISTIO_API_VERSION_DEFAULT

    @field_validator("in_cluster", mode="before")
    @classmethod
    def _validate_in_cluster(cls, value: object) -> str:
        normalized = str(value).strip().lower()
        if normalized in ("1", "yes"):
            normalized = "true"
        elif normalized in ("0", "no"):
            normalized = "false"
        if normalized not in _IN_CLUSTER_MODES:
            raise ValueError(f"in_cluster must be one of {', '.join(_IN_CLUSTER_MODES)}")
        return normalized

    @field_validator("request_timeout")
    @classmethod
    def _validate_request_timeout(cls, value: float) -> float:
        if not REQUEST_TIMEOUT_MIN <= value <= REQUEST_TIMEOUT_MAX:
            raise ValueError(
                f"request_timeout must be between {REQUEST_TIMEOUT_MIN} and {REQUEST_TIMEOUT_MAX}"
            )
        return value

    @field_validator("default_tail_lines", "all_container_tail_lines")
    @classmethod
    def _validate_tail_lines(cls, value: int) -> int:
        if not TAIL_LINES_MIN <= value <= TAIL_LINES_MAX:
            raise ValueError(f"tail lines must be between {TAIL_LINES_MIN} and {TAIL_LINES_MAX}")
        return value

    @field_validator("event_limit")
    @classmethod
    def _validate_event_limit(cls, value: int) -> int:
        if not EVENT_LIMIT_MIN <= value <= EVENT_LIMIT_MAX:
            raise ValueError(f"event_limit must be between {EVENT_LIMIT_MIN} and {EVENT_LIMIT_MAX}")
        return value

    @field_validator("rollout_api_version", "istio_api_version")
    @classmethod
    def _validate_api_version(cls, value: str) -> str:
        if value.count("/") != 1:
            raise ValueError("api version must look like '<group>/<version>'")
        return value
