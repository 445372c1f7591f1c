"""Tests for time utilities."""

from datetime import datetime, timedelta, timezone

import pytest

from pipeline_status.utils.time import format_timestamp, now_timestamp, parse_duration


class TestFormatTimestamp:
    """Test status timestamp formatting."""

    def test_numeric_offset(self):
        ts = datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone(timedelta(hours=-7)))
        assert format_timestamp(ts) == "2006-01-02T15:04:05-0700"

    def test_utc(self):
        ts = datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)
        assert format_timestamp(ts) == "2006-01-02T15:04:05+0000"

    def test_naive_is_local(self):
        formatted = format_timestamp(datetime(2006, 1, 2, 15, 4, 5))
        assert formatted.startswith("2006-01-02T15:04:05")
        assert formatted[-5] in "+-"

    def test_now_timestamp(self):
        parsed = datetime.strptime(now_timestamp(), "%Y-%m-%dT%H:%M:%S%z")
        assert parsed.tzinfo is not None


class TestParseDuration:
    """Test poll interval parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("0", timedelta(0)),
        ("1m", timedelta(minutes=1)),
        ("90s", timedelta(seconds=90)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("1m30s", timedelta(minutes=1, seconds=30)),
        ("1.5h", timedelta(minutes=90)),
        ("250ms", timedelta(milliseconds=250)),
        ("-5s", timedelta(seconds=-5)),
    ])
    def test_valid(self, value, expected):
        assert parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["", "  ", "-", "5", "m", "1d", "1m 30s", "abc", "1mx"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)
