"""Tests for the log stream parser."""

from __future__ import annotations

import io
from datetime import datetime, timezone

import pytest

from kubeprobe.constants.limits import MAX_LOG_LINE_BYTES
from kubeprobe.controllers.cluster.parsers.log_parser import (
    parse_log_line,
    parse_log_stream,
    parse_rfc3339,
    split_timestamp,
)
from kubeprobe.errors import LogStreamError


class TestParseRfc3339:
    """Tests for timestamp decoding."""

    def test_nanoseconds_truncated_to_microseconds(self) -> None:
        """Fractions beyond six digits are dropped."""
        assert parse_rfc3339("2024-01-15T10:30:45.123456789Z") == datetime(
            2024, 1, 15, 10, 30, 45, 123456, tzinfo=timezone.utc
        )

    def test_offset_timezone(self) -> None:
        """Numeric offsets are honoured."""
        parsed = parse_rfc3339("2024-01-15T10:30:45+02:00")
        assert parsed is not None
        assert parsed.utcoffset().total_seconds() == 7200

    def test_garbage(self) -> None:
        """Non-timestamps decode to None."""
        assert parse_rfc3339("not a timestamp") is None


class TestSplitTimestamp:
    """Tests for the prefix split."""

    def test_nano_prefix(self) -> None:
        """A 30-character prefix is stripped with the separating space."""
        timestamp, content = split_timestamp("2024-01-15T10:30:45.123456789Z INFO: Starting")
        assert timestamp == datetime(2024, 1, 15, 10, 30, 45, 123456, tzinfo=timezone.utc)
        assert content == "INFO: Starting"

    def test_second_prefix_on_long_line(self) -> None:
        """Whole-second prefixes are tried when the nano prefix fails."""
        timestamp, content = split_timestamp("2024-01-15T10:30:45Z a fairly long message body")
        assert timestamp == datetime(2024, 1, 15, 10, 30, 45, tzinfo=timezone.utc)
        assert content == "a fairly long message body"

    def test_short_line_keeps_second_prefix(self) -> None:
        """Lines shorter than 30 characters are never split."""
        assert split_timestamp("2024-01-15T10:30:45Z ok") == (None, "2024-01-15T10:30:45Z ok")

    def test_short_line_in_stream_has_no_timestamp(self) -> None:
        """The stream parser leaves short timestamped lines whole."""
        lines = parse_log_stream(io.BytesIO(b"2024-01-15T10:30:45Z ok\n"), "app", True)
        assert len(lines) == 1
        assert lines[0].timestamp is None
        assert lines[0].content == "2024-01-15T10:30:45Z ok"

    def test_no_prefix(self) -> None:
        """Lines without a timestamp keep their content."""
        assert split_timestamp("plain") == (None, "plain")


class TestParseLogLine:
    """Tests for single-line parsing."""

    def test_error_detection_without_timestamps(self) -> None:
        """Error markers flag the line even when timestamps are disabled."""
        line = parse_log_line("Error: boom", container="app", has_timestamps=False)
        assert line.timestamp is None
        assert line.content == "Error: boom"
        assert line.is_error is True
        assert line.container == "app"

    def test_plain_line_is_not_error(self) -> None:
        """Ordinary lines are not errors."""
        assert parse_log_line("GET /healthz 200").is_error is False


class TestParseLogStream:
    """Tests for stream consumption."""

    def test_crlf_and_missing_final_newline(self) -> None:
        """CRLF endings are stripped and the final unterminated line is kept."""
        reader = io.BytesIO(b"first\r\nsecond")
        lines = parse_log_stream(reader, container="app", has_timestamps=False)
        assert [line.content for line in lines] == ["first", "second"]
        assert all(line.container == "app" for line in lines)

    def test_empty_stream(self) -> None:
        """An empty stream yields no lines."""
        assert parse_log_stream(io.BytesIO(b"")) == []

    def test_oversized_line_raises(self) -> None:
        """A record longer than the line limit fails the stream."""
        reader = io.BytesIO(b"x" * (MAX_LOG_LINE_BYTES + 10) + b"\n")
        with pytest.raises(LogStreamError):
            parse_log_stream(reader, container="app")

    def test_line_at_limit_is_accepted(self) -> None:
        """A record of exactly the limit (plus newline) is fine."""
        reader = io.BytesIO(b"y" * MAX_LOG_LINE_BYTES + b"\n")
        lines = parse_log_stream(reader, has_timestamps=False)
        assert len(lines) == 1
        assert len(lines[0].content) == MAX_LOG_LINE_BYTES
