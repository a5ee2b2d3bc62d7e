"""Tests for timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from kubeprobe.utils.timestamps import format_age, format_rfc3339, parse_iso_timestamp


class TestParseIsoTimestamp:
    """Tests for parse_iso_timestamp."""

    def test_parses_zulu(self) -> None:
        """Z suffix yields an aware UTC datetime."""
        parsed = parse_iso_timestamp("2024-01-15T10:30:45Z")
        assert parsed == datetime(2024, 1, 15, 10, 30, 45, tzinfo=timezone.utc)

    def test_naive_datetime_gets_utc(self) -> None:
        """Naive datetimes are treated as UTC."""
        parsed = parse_iso_timestamp(datetime(2024, 1, 1))
        assert parsed is not None
        assert parsed.tzinfo is timezone.utc

    def test_invalid_values(self) -> None:
        """Empty, malformed and non-string values return None."""
        assert parse_iso_timestamp("") is None
        assert parse_iso_timestamp("yesterday") is None
        assert parse_iso_timestamp(42) is None


class TestFormatAge:
    """Tests for format_age."""

    def test_units(self) -> None:
        """Ages pick seconds, minutes, hours or days."""
        now = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        assert format_age(now - timedelta(seconds=45), now) == "45s"
        assert format_age(now - timedelta(minutes=5), now) == "5m"
        assert format_age(now - timedelta(hours=2), now) == "2h"
        assert format_age(now - timedelta(days=3), now) == "3d"

    def test_missing_timestamp(self) -> None:
        """Missing timestamps render as Unknown."""
        assert format_age(None) == "Unknown"

    def test_future_timestamp_clamps_to_zero(self) -> None:
        """Clock skew never yields negative ages."""
        now = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        assert format_age(now + timedelta(minutes=1), now) == "0s"


def test_format_rfc3339_converts_to_utc() -> None:
    """RFC3339 rendering is in UTC with second precision."""
    local = datetime(2024, 1, 15, 14, 0, 0, 999, tzinfo=timezone(timedelta(hours=2)))
    assert format_rfc3339(local) == "2024-01-15T12:00:00Z"
