from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Optional

# 0=Sunday .. 6=Saturday
WEEKDAYS = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")

# Keyword chain, checked in this order; the first keyword found wins.
DATE_KEYWORDS = (
    "today",
    "tomorrow",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

_TIME_WITH_PERIOD = re.compile(
    r"\b(1[0-2]|0?[1-9])(?::([0-5]\d))?\s*([ap])\.?m\.?(?![a-z])",
    re.IGNORECASE,
)
_TIME_AFTER_MARKER = re.compile(
    r"\b(?:at|by)\s+(1[0-2]|0?[1-9])(?::([0-5]\d))?\b",
    re.IGNORECASE,
)


def next_weekday(target: int, today: Optional[date] = None) -> date:
    """Next occurrence of ``target`` (0=Sunday). Today's own weekday maps to next week."""
    today = today or date.today()
    current = (today.weekday() + 1) % 7
    days_until = target - current
    if days_until <= 0:
        days_until += 7
    return today + timedelta(days=days_until)


def resolve_day_keyword(keyword: str, today: Optional[date] = None) -> Optional[date]:
    today = today or date.today()
    keyword = keyword.lower()
    if keyword == "today":
        return today
    if keyword == "tomorrow":
        return today + timedelta(days=1)
    if keyword in WEEKDAYS:
        return next_weekday(WEEKDAYS.index(keyword), today)
    return None


def match_date_keyword(text: str, today: Optional[date] = None) -> Optional[date]:
    """Like extract_date, but None when the text carries no day keyword."""
    lowered = text.lower()
    for keyword in DATE_KEYWORDS:
        if keyword in lowered:
            return resolve_day_keyword(keyword, today)
    return None


def extract_date(text: str, today: Optional[date] = None) -> date:
    today = today or date.today()
    found = match_date_keyword(text, today)
    return found if found is not None else today


def format_time(hour: int, minute: int, period: str = "") -> str:
    """Render an hour/minute pair as ``HH:MM AM/PM``."""
    period = period.lower()
    if period == "p" and hour != 12:
        hour += 12
    if period == "a" and hour == 12:
        hour = 0

    if hour > 12:
        display = hour - 12
    elif hour == 0:
        display = 12
    else:
        display = hour
    suffix = "PM" if hour >= 12 else "AM"
    return f"{display:02d}:{minute:02d} {suffix}"


def extract_time(text: str) -> Optional[str]:
    match = _TIME_WITH_PERIOD.search(text)
    if match:
        hour, minute, period = match.group(1), match.group(2), match.group(3)
        return format_time(int(hour), int(minute or 0), period)

    match = _TIME_AFTER_MARKER.search(text)
    if match:
        return format_time(int(match.group(1)), int(match.group(2) or 0))

    return None
