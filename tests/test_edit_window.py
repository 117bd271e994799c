from datetime import datetime, timedelta, timezone

from money_manager.utils.edit_window import EDIT_WINDOW, can_mutate

CREATED = datetime(2024, 1, 5, 8, 0, 0)


def test_edit_window_is_twelve_hours() -> None:
    assert EDIT_WINDOW == timedelta(hours=12)


def test_just_inside_the_window_is_mutable() -> None:
    assert can_mutate(CREATED, CREATED + timedelta(hours=11, minutes=59, seconds=59, milliseconds=999))


def test_exactly_twelve_hours_is_frozen() -> None:
    assert not can_mutate(CREATED, CREATED + timedelta(hours=12))


def test_one_second_after_creation_is_mutable() -> None:
    assert can_mutate(CREATED, CREATED + timedelta(seconds=1))


def test_days_later_is_frozen() -> None:
    assert not can_mutate(CREATED, CREATED + timedelta(days=3))


def test_aware_timestamps_are_compared_in_utc() -> None:
    created = datetime(2024, 1, 5, 8, 0, tzinfo=timezone.utc)
    now = datetime(2024, 1, 5, 19, 0, tzinfo=timezone(timedelta(hours=5)))  # 14:00 UTC
    assert can_mutate(created, now)
    assert not can_mutate(created.replace(tzinfo=None), datetime(2024, 1, 5, 20, 0))
