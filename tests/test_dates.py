from datetime import datetime, timedelta

import pytest

from daybook.dates import (
    INVALID_TIMESTAMP,
    falls_on,
    normalize_date,
    parse_timestamp,
    timestamp_to_datetime,
)

NOW = datetime(2025, 10, 6, 10, 30)


@pytest.mark.parametrize(
    "now",
    [datetime(2025, 10, 6, 0, 0), datetime(2025, 10, 6, 23, 59, 59), datetime(2025, 12, 31, 12, 0)],
)
def test_relative_keywords(now):
    today = now.date()
    assert normalize_date("today", now) == today.isoformat()
    assert normalize_date("tomorrow", now) == (today + timedelta(days=1)).isoformat()
    assert normalize_date("next week", now) == (today + timedelta(days=7)).isoformat()


def test_keywords_are_trimmed_and_case_insensitive():
    assert normalize_date("  TOMORROW ", NOW) == "2025-10-07"
    assert normalize_date("Next Week", NOW) == "2025-10-13"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2025-12-25", "2025-12-25"),
        ("2025-12-25T18:00:00", "2025-12-25"),
        ("12/25/2025", "2025-12-25"),
        ("Dec 25, 2025", "2025-12-25"),
        ("25 December 2025", "2025-12-25"),
    ],
)
def test_parses_calendar_dates(value, expected):
    assert normalize_date(value, NOW) == expected


def test_unparseable_date_falls_back_to_today():
    assert normalize_date("someday soon", NOW) == "2025-10-06"
    assert normalize_date("", NOW) == "2025-10-06"


def test_parse_timestamp_keeps_time_of_day():
    assert parse_timestamp("2025-10-06T14:00:00") == "2025-10-06T14:00:00"
    assert parse_timestamp("2025-10-06") == "2025-10-06T00:00:00"


def test_parse_timestamp_converts_aware_values_to_local():
    stamp = parse_timestamp("2025-10-06T14:00:00Z")
    parsed = datetime.fromisoformat(stamp)
    assert parsed.tzinfo is None
    expected = datetime.fromisoformat("2025-10-06T14:00:00+00:00").astimezone().replace(tzinfo=None)
    assert parsed == expected


def test_parse_timestamp_invalid():
    assert parse_timestamp("whenever") == INVALID_TIMESTAMP
    assert timestamp_to_datetime(INVALID_TIMESTAMP) is None
    assert timestamp_to_datetime(None) is None


def test_falls_on():
    assert falls_on("2025-10-06T23:59:00", "2025-10-06")
    assert not falls_on("2025-10-07T00:00:00", "2025-10-06")
    assert not falls_on(INVALID_TIMESTAMP, "2025-10-06")
