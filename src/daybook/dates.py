"""Date and timestamp normalization.

Dates are stored as canonical ``YYYY-MM-DD`` strings and timestamps as local
wall-clock ISO-8601 strings. Bad input never raises: dates fall back to
today, timestamps to ``INVALID_TIMESTAMP``.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

INVALID_TIMESTAMP = "Invalid Date"

_RELATIVE_DAYS = {"today": 0, "tomorrow": 1, "next week": 7}

# Written forms accepted in addition to ISO-8601.
_DATE_FORMATS = (
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%d %b %Y",
    "%d %B %Y",
)


def _parse_datetime(value: str) -> datetime | None:
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def normalize_date(value: str, now: datetime | None = None) -> str:
    """Map 'today', 'tomorrow', 'next week' or a date string to YYYY-MM-DD.

    Unparseable input falls back to the current date.
    """
    now = now or datetime.now()
    keyword = value.strip().lower()
    if keyword in _RELATIVE_DAYS:
        return (now.date() + timedelta(days=_RELATIVE_DAYS[keyword])).isoformat()

    parsed = _parse_datetime(value)
    if parsed is None:
        return now.date().isoformat()
    return parsed.date().isoformat()


def today(now: datetime | None = None) -> str:
    return (now or datetime.now()).date().isoformat()


def parse_timestamp(value: str) -> str:
    """Normalize a date or datetime string to a full local timestamp.

    Date-only input becomes midnight; timezone-aware input is converted to
    local time. Unparseable input yields INVALID_TIMESTAMP.
    """
    parsed = _parse_datetime(value)
    if parsed is None:
        return INVALID_TIMESTAMP
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed.isoformat()


def timestamp_to_datetime(value: str | None) -> datetime | None:
    """Inverse of parse_timestamp for stored values; None if unusable."""
    if not value or value == INVALID_TIMESTAMP:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def falls_on(value: str | None, day: str | date) -> bool:
    """True if the stored timestamp is on the given calendar date."""
    parsed = timestamp_to_datetime(value)
    if parsed is None:
        return False
    return parsed.date().isoformat() == str(day)
