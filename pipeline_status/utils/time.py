"""
Time utilities for status timestamps and poll intervals.

Status documents carry an ISO-8601 timestamp with a numeric zone offset
(``2006-01-02T15:04:05-0700``). Poll intervals are written the way the
orchestrator's other resources write them: ``"30s"``, ``"1m"``, ``"1h30m"``.
"""

import re
from datetime import datetime, timedelta
from typing import Optional

ISO8601_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def format_timestamp(ts: datetime) -> str:
    """
    Format a timestamp for a status document.

    Naive datetimes are interpreted as local time.
    """
    if ts.tzinfo is None:
        ts = ts.astimezone()
    return ts.strftime(ISO8601_FORMAT)


def now_timestamp(now: Optional[datetime] = None) -> str:
    """Current local time formatted for a status document."""
    return format_timestamp(now or datetime.now().astimezone())


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration such as ``"90s"``, ``"1m"`` or ``"1h30m"``.

    Args:
        value: Duration string; an optional leading sign is allowed

    Returns:
        Parsed duration

    Raises:
        ValueError: If the string is empty or not a valid duration
    """
    text = value.strip()
    if not text:
        raise ValueError("empty duration")

    sign = 1.0
    if text[0] in "+-":
        if text[0] == "-":
            sign = -1.0
        text = text[1:]

    if text == "0":
        return timedelta(0)

    seconds = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    if pos == 0 or pos != len(text):
        raise ValueError(f"invalid duration: {value!r}")

    return timedelta(seconds=sign * seconds)
