# money_manager/utils/periods.py
import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Optional
from zoneinfo import ZoneInfo

from money_manager.core.config import settings

# Inclusive upper bound of a calendar day, millisecond precision
END_OF_DAY = time(23, 59, 59, 999000)


class TimePeriod(str, Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"


@dataclass(frozen=True)
class DateRange:
    period: TimePeriod
    start: datetime
    end: datetime


def local_now() -> datetime:
    """Current wall-clock time in the configured calendar, without tzinfo."""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).replace(tzinfo=None)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


def normalize_period(period: Optional[str]) -> TimePeriod:
    try:
        return TimePeriod(period)
    except ValueError:
        return TimePeriod.monthly


def resolve_date_range(period: Optional[str], now: Optional[datetime] = None) -> DateRange:
    """
    Map a period keyword onto the closed [start, end] interval of the calendar
    unit containing ``now``. Weeks run Monday through Sunday. Anything that is
    not daily/weekly/monthly/yearly resolves as monthly.
    """
    now = now or local_now()
    slug = normalize_period(period)
    today = now.date()

    if slug == TimePeriod.daily:
        first, last = today, today
    elif slug == TimePeriod.weekly:
        first = today - timedelta(days=today.weekday())
        last = first + timedelta(days=6)
    elif slug == TimePeriod.yearly:
        first = date(today.year, 1, 1)
        last = date(today.year, 12, 31)
    else:
        first = today.replace(day=1)
        last = today.replace(day=calendar.monthrange(today.year, today.month)[1])

    return DateRange(slug, start_of_day(first), end_of_day(last))


def as_local(value: datetime) -> datetime:
    """Drop tzinfo from an aware datetime after shifting it into the configured calendar."""
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(settings.TIMEZONE)).replace(tzinfo=None)
