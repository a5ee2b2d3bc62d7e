"""Pure filters over parsed log lines."""

from __future__ import annotations

from datetime import datetime, timedelta

from kubeprobe.models.logs.log_line import LogLine


def search_logs(logs: list[LogLine], query: str) -> list[LogLine]:
    """Lines whose content contains ``query`` case-insensitively."""
    if not query:
        return logs
    needle = query.lower()
    return [line for line in logs if needle in line.content.lower()]


def filter_error_logs(logs: list[LogLine]) -> list[LogLine]:
    """Lines classified as errors."""
    return [line for line in logs if line.is_error]


def get_logs_around_time(logs: list[LogLine], target: datetime, window_minutes: int) -> list[LogLine]:
    """Timestamped lines strictly within ``window_minutes`` of ``target``."""
    window = timedelta(minutes=window_minutes)
    start, end = target - window, target + window
    return [
        line
        for line in logs
        if line.timestamp is not None and start < line.timestamp < end
    ]


def filter_logs(
    logs: list[LogLine],
    *,
    query: str = "",
    container: str = "",
    since: datetime | None = None,
    errors_only: bool = False,
) -> list[LogLine]:
    """Combine the query, container, time cutoff and error filters.

    Lines without a timestamp are dropped when ``since`` is given.
    """
    result = search_logs(logs, query)
    if container:
        result = [line for line in result if line.container == container]
    if since is not None:
        result = [line for line in result if line.timestamp is not None and line.timestamp >= since]
    if errors_only:
        result = filter_error_logs(result)
    return result


def sort_logs_by_time(logs: list[LogLine]) -> list[LogLine]:
    """Stable ascending sort by timestamp; untimestamped lines come first."""
    return sorted(
        logs,
        key=lambda line: (line.timestamp is not None, line.timestamp or datetime.min),
    )
