from __future__ import annotations

import re
from datetime import datetime, timezone

import pandas as pd

# Common Jira export formats, tried before the generic parser.
# Numeric slash dates are left to the generic parser, which reads them month first.
_JIRA_FORMATS = (
    "%d/%b/%y %I:%M %p",
    "%d/%b/%Y %I:%M %p",
    "%Y-%m-%dT%H:%M:%S.%f%z",
)
_DIGIT = re.compile(r"\d")


# This is a function to parse Jira-export date strings safely (best-effort).
def _parse_dt(value: str) -> datetime | None:
    for fmt in _JIRA_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue

    # pandas accepts keywords such as "now" and "today"; a date cell needs digits.
    if not _DIGIT.search(value):
        return None
    try:
        ts = pd.to_datetime(value, utc=True)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    return ts.to_pydatetime()


def to_iso8601(value: str | None) -> str:
    """
    Format a date cell as an ISO-8601 UTC timestamp with milliseconds,
    e.g. ``2024-01-02T00:00:00.000Z``.

    Naive values are read as UTC. Empty, unparseable or out-of-range input gives "".
    """
    if not value or not value.strip():
        return ""

    parsed = _parse_dt(value.strip())
    if parsed is None:
        return ""

    try:
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        else:
            parsed = parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        return ""

    return (
        f"{parsed.year:04d}-{parsed.month:02d}-{parsed.day:02d}"
        f"T{parsed.hour:02d}:{parsed.minute:02d}:{parsed.second:02d}"
        f".{parsed.microsecond // 1000:03d}Z"
    )
