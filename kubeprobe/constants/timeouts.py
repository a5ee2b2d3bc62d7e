"""Timeout constants.

All timeout values for cluster API requests (float, in seconds).
"""

from typing import Final

CLUSTER_REQUEST_TIMEOUT: Final = 30.0
DISCOVERY_REQUEST_TIMEOUT: Final = 15.0
LOG_REQUEST_TIMEOUT: Final = 60.0

__all__ = [
    "CLUSTER_REQUEST_TIMEOUT",
    "DISCOVERY_REQUEST_TIMEOUT",
    "LOG_REQUEST_TIMEOUT",
]
