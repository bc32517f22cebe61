"""Calendar period arithmetic for day, week and month buckets."""

from __future__ import annotations

from datetime import datetime, timedelta

from timeline_engine.schema import Granularity

RESOLUTION = timedelta(milliseconds=1)

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_iso_week(value: datetime) -> datetime:
    """Return Monday 00:00 of the ISO week containing ``value``."""

    day = start_of_day(value)
    return day - timedelta(days=day.weekday())


def start_of_month(value: datetime) -> datetime:
    return start_of_day(value).replace(day=1)


def align(value: datetime, granularity: Granularity) -> datetime:
    """Return the start of the bucket containing ``value``."""

    granularity = Granularity(granularity)
    if granularity is Granularity.MONTH:
        return start_of_month(value)
    if granularity is Granularity.WEEK:
        return start_of_iso_week(value)
    return start_of_day(value)


def next_period_start(start: datetime, granularity: Granularity) -> datetime:
    """Step an aligned bucket start forward by one unit."""

    granularity = Granularity(granularity)
    if granularity is Granularity.MONTH:
        if start.month == 12:
            return start.replace(year=start.year + 1, month=1, day=1)
        return start.replace(month=start.month + 1, day=1)
    if granularity is Granularity.WEEK:
        return start + timedelta(days=7)
    return start + timedelta(days=1)


def period_end(start: datetime, granularity: Granularity) -> datetime:
    return next_period_start(start, granularity) - RESOLUTION


def iso_week_number(value: datetime) -> int:
    """ISO-8601 week number; week 1 holds the year's first Thursday."""

    return value.isocalendar()[1]


def period_label(start: datetime, granularity: Granularity) -> str:
    """Header label for the bucket beginning at ``start``."""

    granularity = Granularity(granularity)
    month = _MONTH_ABBR[start.month - 1]
    if granularity is Granularity.MONTH:
        return f"{month} {start.year}"
    if granularity is Granularity.WEEK:
        return f"W{iso_week_number(start)} {start.year}"
    return f"{month} {start.day:02d}"
