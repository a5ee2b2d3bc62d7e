"""Log record and request option models."""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field

from kubeprobe.constants.defaults import LOG_TAIL_LINES_DEFAULT
from kubeprobe.constants.limits import TAIL_LINES_MIN


class LogLine(BaseModel):
    """One log record; ``timestamp`` is None when the prefix did not parse."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime | None = None
    container: str = ""
    content: str = ""
    is_error: bool = False


class LogOptions(BaseModel):
    """Options for a single-container log fetch.

    ``tail_lines`` of 0 means no limit; a zero ``since`` means unlimited.
    ``follow`` is accepted but unused in batch mode.
    """

    model_config = ConfigDict(frozen=True)

    container: str = ""
    tail_lines: int = Field(default=LOG_TAIL_LINES_DEFAULT, ge=TAIL_LINES_MIN)
    since: timedelta = timedelta(0)
    previous: bool = False
    follow: bool = False
    timestamps: bool = True
