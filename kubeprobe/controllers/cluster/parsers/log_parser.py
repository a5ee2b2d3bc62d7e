"""Log parser for cluster controller - turns a raw log stream into LogLine records."""

from __future__ import annotations

from datetime import datetime
from typing import BinaryIO

from kubeprobe.constants.limits import MAX_LOG_LINE_BYTES
from kubeprobe.constants.patterns import ERROR_LOG_MARKERS, RFC3339_PATTERN
from kubeprobe.errors import LogStreamError
from kubeprobe.models.logs.log_line import LogLine

# Width of an RFC3339Nano prefix ("2024-01-15T10:30:45.123456789Z") and of a
# whole-second RFC3339 prefix ("2024-01-15T10:30:45Z").
_NANO_PREFIX_WIDTH = 30
_SECOND_PREFIX_WIDTH = 20


def parse_rfc3339(text: str) -> datetime | None:
    """Parse an RFC3339 timestamp with optional nanosecond fraction.

    Fractions beyond microseconds are truncated.
    """
    match = RFC3339_PATTERN.match(text)
    if match is None:
        return None
    iso = f"{match['date']}T{match['time']}"
    if match["fraction"]:
        iso += "." + match["fraction"][:6].ljust(6, "0")
    iso += "+00:00" if match["tz"] == "Z" else match["tz"]
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        return None


def is_error_line(content: str) -> bool:
    """True when the content contains any error marker (case-insensitive)."""
    lowered = content.lower()
    return any(marker in lowered for marker in ERROR_LOG_MARKERS)


def split_timestamp(line: str) -> tuple[datetime | None, str]:
    """Split a timestamp prefix from a log line.

    Only lines of at least 30 characters carry a prefix: RFC3339Nano is tried
    first, then whole-second RFC3339. Shorter or unparsed lines keep their
    content.
    """
    if len(line) < _NANO_PREFIX_WIDTH:
        return None, line
    timestamp = parse_rfc3339(line[:_NANO_PREFIX_WIDTH])
    if timestamp is not None:
        return timestamp, line[_NANO_PREFIX_WIDTH + 1 :].strip()
    timestamp = parse_rfc3339(line[:_SECOND_PREFIX_WIDTH])
    if timestamp is not None:
        return timestamp, line[_SECOND_PREFIX_WIDTH + 1 :].strip()
    return None, line


def parse_log_line(line: str, container: str = "", has_timestamps: bool = True) -> LogLine:
    """Build one LogLine from a decoded line."""
    timestamp: datetime | None = None
    content = line
    if has_timestamps:
        timestamp, content = split_timestamp(line)
    return LogLine(
        timestamp=timestamp,
        container=container,
        content=content,
        is_error=is_error_line(content),
    )


def parse_log_stream(
    reader: BinaryIO,
    container: str = "",
    has_timestamps: bool = True,
) -> list[LogLine]:
    """Read newline-delimited records until EOF.

    Args:
        reader: Binary stream supporting ``readline(size)``
        container: Container name stamped on every record
        has_timestamps: Whether lines carry a timestamp prefix

    Returns:
        Parsed records in stream order.

    Raises:
        LogStreamError: If a single record exceeds MAX_LOG_LINE_BYTES.
    """
    lines: list[LogLine] = []
    while True:
        raw = reader.readline(MAX_LOG_LINE_BYTES + 1)
        if not raw:
            break
        if not raw.endswith(b"\n") and len(raw) > MAX_LOG_LINE_BYTES:
            raise LogStreamError(
                f"log line exceeds {MAX_LOG_LINE_BYTES} bytes in container {container or '<default>'}"
            )
        text = raw.decode("utf-8", errors="replace").rstrip("\n").rstrip("\r")
        lines.append(parse_log_line(text, container, has_timestamps))
    return lines
