"""Event parser for cluster controller - parses events into EventInfo rows."""

from __future__ import annotations

from contextlib import suppress
from datetime import datetime
from typing import Any

from kubeprobe.models.events.event_info import EventInfo
from kubeprobe.utils.timestamps import format_age, parse_iso_timestamp


class EventParser:
    """Parses core/v1 events."""

    def __init__(self, now: datetime | None = None) -> None:
        self._now = now

    @staticmethod
    def _parse_event_count(event: dict[str, Any]) -> int:
        """Parse event count across legacy and series shapes."""
        raw_value = (
            event.get("count")
            or (event.get("series") or {}).get("count")
            or 1
        )
        with suppress(ValueError, TypeError):
            return max(1, int(raw_value))
        return 1

    @staticmethod
    def _parse_source(event: dict[str, Any]) -> str:
        source = event.get("source") or {}
        component = source.get("component") or event.get("reportingComponent") or ""
        host = source.get("host") or ""
        if component and host:
            return f"{component}, {host}"
        return component or host

    @staticmethod
    def event_times(event: dict[str, Any]) -> tuple[datetime | None, datetime | None]:
        """Return (first_seen, last_seen).

        Zero legacy timestamps fall back to eventTime, then to the series
        observation time and creation time. last_seen never precedes first_seen.
        """
        event_time = parse_iso_timestamp(event.get("eventTime"))
        created = parse_iso_timestamp((event.get("metadata") or {}).get("creationTimestamp"))
        first_seen = parse_iso_timestamp(event.get("firstTimestamp")) or event_time or created
        last_seen = (
            parse_iso_timestamp(event.get("lastTimestamp"))
            or parse_iso_timestamp((event.get("series") or {}).get("lastObservedTime"))
            or event_time
            or first_seen
        )
        if first_seen is None:
            first_seen = last_seen
        if first_seen is not None and last_seen is not None and last_seen < first_seen:
            last_seen = first_seen
        return first_seen, last_seen

    def parse_event(self, event: dict[str, Any]) -> EventInfo:
        """Parse a single event into EventInfo."""
        involved = event.get("involvedObject") or {}
        kind = involved.get("kind") or ""
        name = involved.get("name") or ""
        first_seen, last_seen = self.event_times(event)
        return EventInfo(
            type=event.get("type") or "Normal",
            reason=event.get("reason") or "",
            message=(event.get("message") or "").strip(),
            source=self._parse_source(event),
            age=format_age(last_seen, self._now),
            count=self._parse_event_count(event),
            first_seen=first_seen,
            last_seen=last_seen,
            object=f"{kind}/{name}",
            namespace=(event.get("metadata") or {}).get("namespace") or involved.get("namespace") or "",
            involved_kind=kind,
            involved_name=name,
        )

    def parse_events(self, events: list[dict[str, Any]]) -> list[EventInfo]:
        """Parse events sorted by last_seen descending (undated events last)."""
        parsed = [self.parse_event(event) for event in events]
        dated = [event for event in parsed if event.last_seen is not None]
        undated = [event for event in parsed if event.last_seen is None]
        dated.sort(key=lambda event: event.last_seen, reverse=True)
        return dated + undated
