"""Error kinds raised by the cluster access layer.

Cancellation is not modelled here: an in-flight call that is cancelled raises
``asyncio.CancelledError`` and is never caught by this package.
"""

from __future__ import annotations


class ClusterError(Exception):
    """Base exception for cluster access failures."""


class NotFoundError(ClusterError):
    """Raised when a named resource does not exist."""

    def __init__(
        self,
        message: str = "resource not found",
        *,
        kind: str = "",
        name: str = "",
        namespace: str = "",
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.name = name
        self.namespace = namespace


class TransportError(ClusterError):
    """Raised when an API call fails (network, auth, server error)."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ConflictError(TransportError):
    """Raised when a create collides with an existing object (HTTP 409)."""


class LogStreamError(TransportError):
    """Raised when a log stream cannot be consumed."""


class UnavailableError(ClusterError):
    """Raised when an optional subsystem (metrics, dynamic client, CRD) is absent."""


class UnsupportedResourceError(ClusterError, ValueError):
    """Raised for resource kinds outside the supported set."""


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings or cluster credentials fail to load."""


__all__ = [
    "ClusterError",
    "ConfigError",
    "ConfigLoadError",
    "ConflictError",
    "LogStreamError",
    "NotFoundError",
    "TransportError",
    "UnavailableError",
    "UnsupportedResourceError",
]
