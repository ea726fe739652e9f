import datetime as dt

import pytest

from extraction.datetime_extractor import (
    extract_date,
    extract_time,
    format_time,
    match_date_keyword,
    next_weekday,
)


def test_today_and_tomorrow(today):
    assert extract_date("do it today", today) == today
    assert extract_date("finish it TOMORROW", today) == dt.date(2026, 1, 2)


def test_no_keyword_defaults_to_today(today):
    assert extract_date("read chapter 4", today) == today
    assert match_date_keyword("read chapter 4", today) is None


def test_weekday_equal_to_today_is_next_week(today):
    # today is a Thursday
    assert extract_date("meet on thursday", today) == dt.date(2026, 1, 8)


def test_today_wins_over_trailing_weekday(today):
    assert extract_date("today, not friday", today) == today


@pytest.mark.parametrize(
    "text,expected",
    [
        ("friday", dt.date(2026, 1, 2)),
        ("sunday", dt.date(2026, 1, 4)),
        ("monday", dt.date(2026, 1, 5)),
        ("wednesday", dt.date(2026, 1, 7)),
    ],
)
def test_weekdays_resolve_forward(today, text, expected):
    assert extract_date(text, today) == expected


def test_next_weekday_uses_sunday_zero(today):
    assert next_weekday(0, today) == dt.date(2026, 1, 4)
    assert next_weekday(4, today) == dt.date(2026, 1, 8)


def test_extract_time_examples():
    assert extract_time("at 3pm") == "03:00 PM"
    assert extract_time("by 9:30 am") == "09:30 AM"
    assert extract_time("no time here") is None


def test_extract_time_edge_hours():
    assert extract_time("lunch at 12pm") == "12:00 PM"
    assert extract_time("deploy at 12am") == "12:00 AM"
    assert extract_time("call at 11:45 P.M.") == "11:45 PM"


def test_bare_hour_needs_at_or_by():
    assert extract_time("meet at 7") == "07:00 AM"
    assert extract_time("submit by 12") == "12:00 PM"
    assert extract_time("read chapter 7") is None


def test_format_time_pads():
    assert format_time(6, 5, "p") == "06:05 PM"
    assert format_time(9, 0) == "09:00 AM"
