"""Event row models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class EventInfo(BaseModel):
    """Event row; ``object`` is "Kind/Name" of the involved object."""

    model_config = ConfigDict(frozen=True)

    type: str = "Normal"
    reason: str = ""
    message: str = ""
    source: str = ""
    age: str = "Unknown"
    count: int = 1
    first_seen: datetime | None = None
    last_seen: datetime | None = None
    object: str = ""
    namespace: str = ""
    involved_kind: str = ""
    involved_name: str = ""

    @property
    def is_warning(self) -> bool:
        """True for Warning events."""
        return self.type == "Warning"
