"""Unit tests for civil-calendar primitives"""

import pytest
from datetime import date, timedelta
from finance_tracker.domain.calendar_ops import (
    ROLL_FORWARD_DAYS,
    Weekday,
    add_months,
    clip_day,
    days_in_month,
    roll_forward_if_weekend,
    weekday_of,
)
from finance_tracker.domain.exceptions import InvalidCalendarInputError


@pytest.mark.parametrize(
    "year,month,expected",
    [
        (2025, 1, 31),
        (2025, 2, 28),
        (2024, 2, 29),
        (2000, 2, 29),
        (2100, 2, 28),
        (2025, 4, 30),
        (2025, 12, 31),
    ],
)
def test_days_in_month(year, month, expected):
    assert days_in_month(year, month) == expected


def test_clip_day_to_month_length():
    """Configured days that a month lacks fall back to its last day"""
    assert clip_day(2025, 2, 31) == 28
    assert clip_day(2024, 2, 30) == 29
    assert clip_day(2025, 4, 31) == 30
    assert clip_day(2025, 1, 15) == 15


def test_clip_day_rejects_day_zero():
    with pytest.raises(InvalidCalendarInputError):
        clip_day(2025, 1, 0)


def test_weekday_of_matches_real_calendar():
    assert weekday_of(date(2025, 9, 1)) == Weekday.MONDAY
    assert weekday_of(date(2025, 9, 4)) == Weekday.THURSDAY
    assert weekday_of(date(2025, 10, 4)) == Weekday.SATURDAY
    assert weekday_of(date(2025, 10, 5)) == Weekday.SUNDAY


def test_roll_forward_saturday_and_sunday_to_monday():
    assert roll_forward_if_weekend(date(2025, 10, 4)) == date(2025, 10, 6)
    assert roll_forward_if_weekend(date(2025, 10, 5)) == date(2025, 10, 6)


def test_roll_forward_leaves_weekdays_unchanged():
    monday = date(2025, 9, 29)
    for offset in range(5):
        day = monday + timedelta(days=offset)
        assert roll_forward_if_weekend(day) == day


def test_roll_forward_crosses_month_end():
    """Nov 30, 2025 is a Sunday"""
    assert roll_forward_if_weekend(date(2025, 11, 30)) == date(2025, 12, 1)


def test_roll_table_covers_every_weekday():
    assert set(ROLL_FORWARD_DAYS) == set(Weekday)


@pytest.mark.parametrize(
    "year,month,delta,expected",
    [
        (2026, 1, -1, (2025, 12)),
        (2025, 12, 1, (2026, 1)),
        (2025, 6, 0, (2025, 6)),
        (2025, 3, -15, (2023, 12)),
        (2025, 1, 25, (2027, 2)),
        (2025, 12, 12, (2026, 12)),
    ],
)
def test_add_months_carries_year(year, month, delta, expected):
    assert add_months(year, month, delta) == expected


@pytest.mark.parametrize("month", [0, 13, -1])
def test_invalid_month_is_rejected(month):
    with pytest.raises(InvalidCalendarInputError):
        add_months(2025, month, 1)
    with pytest.raises(InvalidCalendarInputError):
        days_in_month(2025, month)


@pytest.mark.parametrize("year,month,delta", [(9999, 12, 1), (1, 1, -1), (9999, 1, 12)])
def test_add_months_rejects_years_outside_calendar(year, month, delta):
    with pytest.raises(InvalidCalendarInputError):
        add_months(year, month, delta)


def test_add_months_at_calendar_edges():
    assert add_months(9999, 11, 1) == (9999, 12)
    assert add_months(1, 2, -1) == (1, 1)


@pytest.mark.parametrize("year", [0, 10000, -1])
def test_days_in_month_rejects_years_outside_calendar(year):
    with pytest.raises(InvalidCalendarInputError):
        days_in_month(year, 1)
