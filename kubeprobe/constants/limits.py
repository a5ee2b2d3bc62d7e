"""Limit and threshold constants.

All size limits, floors and validation ranges.
"""

from typing import Final

# ============================================================================
# Log limits
# ============================================================================

MAX_LOG_LINE_BYTES: Final = 1024 * 1024
MIN_TAIL_LINES_PER_CONTAINER: Final = 10

# ============================================================================
# Validation limits
# ============================================================================

TAIL_LINES_MIN: Final = 0
TAIL_LINES_MAX: Final = 100_000
EVENT_LIMIT_MIN: Final = 1
EVENT_LIMIT_MAX: Final = 5000
REQUEST_TIMEOUT_MIN: Final = 1.0
REQUEST_TIMEOUT_MAX: Final = 600.0

__all__ = [
    "EVENT_LIMIT_MAX",
    "EVENT_LIMIT_MIN",
    "MAX_LOG_LINE_BYTES",
    "MIN_TAIL_LINES_PER_CONTAINER",
    "REQUEST_TIMEOUT_MAX",
    "REQUEST_TIMEOUT_MIN",
    "TAIL_LINES_MAX",
    "TAIL_LINES_MIN",
]
