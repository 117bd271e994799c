from datetime import datetime, time, timedelta

import pytest

from money_manager.utils.periods import (
    END_OF_DAY,
    TimePeriod,
    end_of_day,
    resolve_date_range,
)


def test_daily_covers_the_whole_day() -> None:
    r = resolve_date_range("daily", datetime(2024, 3, 14, 15, 30))
    assert r.period == TimePeriod.daily
    assert r.start == datetime(2024, 3, 14, 0, 0)
    assert r.end == datetime(2024, 3, 14, 23, 59, 59, 999000)


@pytest.mark.parametrize(
    "now",
    [
        datetime(2024, 1, 8, 0, 0),  # Monday
        datetime(2024, 1, 10, 12, 0),  # Wednesday
        datetime(2024, 1, 13, 23, 59),  # Saturday
        datetime(2024, 1, 14, 18, 0),  # Sunday rolls back, not forward
    ],
)
def test_weekly_runs_monday_through_sunday(now) -> None:
    r = resolve_date_range("weekly", now)
    assert r.start == datetime(2024, 1, 8)
    assert r.start.weekday() == 0
    assert r.end == datetime(2024, 1, 14, 23, 59, 59, 999000)
    assert r.end.weekday() == 6


def test_weekly_across_a_month_boundary() -> None:
    r = resolve_date_range("weekly", datetime(2024, 3, 3, 9, 0))  # Sunday
    assert r.start == datetime(2024, 2, 26)
    assert r.end.date() == datetime(2024, 3, 3).date()


@pytest.mark.parametrize(
    "now, last_day",
    [
        (datetime(2024, 2, 10), 29),  # leap year
        (datetime(2023, 2, 10), 28),
        (datetime(2024, 4, 30, 23, 0), 30),
        (datetime(2024, 12, 1), 31),
    ],
)
def test_monthly_ends_on_the_last_day_of_that_month(now, last_day) -> None:
    r = resolve_date_range("monthly", now)
    assert r.start == datetime(now.year, now.month, 1)
    assert r.end == datetime(now.year, now.month, last_day, 23, 59, 59, 999000)


def test_yearly_covers_january_through_december() -> None:
    r = resolve_date_range("yearly", datetime(2024, 6, 15))
    assert r.start == datetime(2024, 1, 1)
    assert r.end == datetime(2024, 12, 31, 23, 59, 59, 999000)


@pytest.mark.parametrize("keyword", ["fortnightly", "", None, "MONTHLY"])
def test_unknown_keyword_falls_back_to_monthly(keyword) -> None:
    now = datetime(2024, 1, 20, 10, 0)
    r = resolve_date_range(keyword, now)
    assert r == resolve_date_range("monthly", now)
    assert r.period == TimePeriod.monthly


@pytest.mark.parametrize("keyword", ["daily", "weekly", "monthly", "yearly"])
def test_start_never_after_end(keyword) -> None:
    now = datetime(2024, 1, 1)
    for offset in range(0, 400, 7):
        r = resolve_date_range(keyword, now + timedelta(days=offset))
        assert r.start <= now + timedelta(days=offset) <= r.end
        assert r.start.time() == time.min
        assert r.end.time() == END_OF_DAY


def test_end_of_day_is_millisecond_precise() -> None:
    assert end_of_day(datetime(2024, 1, 31).date()) == datetime(2024, 1, 31, 23, 59, 59, 999000)
