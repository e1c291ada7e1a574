"""Allowed shift window: date horizon, time-of-day grid and durations.

All "today" computations use the configured reference timezone so that
workers in one location agree on what is in the past, whatever timezone
their own device is in. Dates are ``YYYY-MM-DD`` strings and times are
zero-padded ``HH:MM`` strings, which compare correctly as strings.
"""
from __future__ import annotations

import calendar
import re
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from core.config_loader import settings

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def today_local(now: Optional[datetime] = None) -> date:
    tz = ZoneInfo(settings.SHIFT_TIMEZONE)
    if now is None:
        return datetime.now(tz).date()
    return now.astimezone(tz).date()


def add_months(d: date, months: int) -> date:
    # clamp to the last day of the target month (Jan 31 + 1 -> Feb 28/29)
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def parse_date(value: str) -> Optional[date]:
    if not isinstance(value, str) or not DATE_RE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def is_valid_time(value: str) -> bool:
    return isinstance(value, str) and bool(TIME_RE.match(value))


def to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def from_minutes(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"


def max_allowed_date(today: Optional[date] = None) -> date:
    today = today or today_local()
    return add_months(today, settings.BOOKING_HORIZON_MONTHS)


def validate_date_range(value: str, today: Optional[date] = None) -> Optional[str]:
    """Return the reason ``value`` is outside the booking window, or None."""
    d = parse_date(value)
    if d is None:
        return "Date must be in YYYY-MM-DD format"
    today = today or today_local()
    if d < today:
        return "Date cannot be in the past"
    if d > max_allowed_date(today):
        return f"Date cannot be more than {settings.BOOKING_HORIZON_MONTHS} month(s) in the future"
    return None


def is_within_allowed_window(value: str, today: Optional[date] = None) -> bool:
    return validate_date_range(value, today) is None


def validate_time_slot(start: str, end: str) -> Optional[str]:
    if not is_valid_time(start):
        return "Start time must be in HH:MM format"
    if not is_valid_time(end):
        return "End time must be in HH:MM format"
    step = settings.SLOT_MINUTES
    if to_minutes(start) % step or to_minutes(end) % step:
        return f"Times must fall on a {step}-minute boundary"
    if start < settings.DAY_START or start > settings.DAY_END:
        return f"Start time must be between {settings.DAY_START} and {settings.DAY_END}"
    if end < settings.DAY_START or end > settings.DAY_END:
        return f"End time must be between {settings.DAY_START} and {settings.DAY_END}"
    if start >= end:
        return "End time must be after start time"
    return None


def valid_time_slot(start: str, end: str) -> bool:
    return validate_time_slot(start, end) is None


def valid_duration(hours: int) -> bool:
    return hours in settings.ALLOWED_DURATIONS


def time_options() -> list[str]:
    """Selectable start times, DAY_START up to the last slot before DAY_END."""
    first = to_minutes(settings.DAY_START)
    last = to_minutes(settings.DAY_END)
    return [from_minutes(m) for m in range(first, last, settings.SLOT_MINUTES)]
