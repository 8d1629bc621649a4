"""Primitive civil-calendar arithmetic shared by billing, installments and subscriptions"""

from calendar import monthrange
from datetime import MAXYEAR, MINYEAR, date, timedelta
from enum import IntEnum
from typing import Dict, Tuple

from finance_tracker.domain.exceptions import InvalidCalendarInputError


class Weekday(IntEnum):
    """Monday-first weekday, values match date.weekday()"""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


# Days to add so a closing date lands on a business day.
# Every weekday must have an entry.
ROLL_FORWARD_DAYS: Dict[Weekday, int] = {
    Weekday.MONDAY: 0,
    Weekday.TUESDAY: 0,
    Weekday.WEDNESDAY: 0,
    Weekday.THURSDAY: 0,
    Weekday.FRIDAY: 0,
    Weekday.SATURDAY: 2,
    Weekday.SUNDAY: 1,
}


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidCalendarInputError(f"Month must be between 1 and 12, got {month}")


def _check_year(year: int) -> None:
    if not MINYEAR <= year <= MAXYEAR:
        raise InvalidCalendarInputError(f"Year must be between {MINYEAR} and {MAXYEAR}, got {year}")


def days_in_month(year: int, month: int) -> int:
    """Number of days in the month (Gregorian, leap years included)"""
    _check_year(year)
    _check_month(month)
    return monthrange(year, month)[1]


def clip_day(year: int, month: int, day: int) -> int:
    """
    Clamp a configured day-of-month to the last day the month actually has.

    Example: day 31 in February 2025 -> 28, in February 2024 -> 29
    """
    if day < 1:
        raise InvalidCalendarInputError(f"Day must be at least 1, got {day}")
    return min(day, days_in_month(year, month))


def weekday_of(day: date) -> Weekday:
    return Weekday(day.weekday())


def roll_forward_if_weekend(day: date) -> date:
    """Saturday -> next Monday (+2), Sunday -> next Monday (+1), weekdays unchanged"""
    return day + timedelta(days=ROLL_FORWARD_DAYS[weekday_of(day)])


def add_months(year: int, month: int, delta: int) -> Tuple[int, int]:
    """
    Shift a (year, month) pair by delta months, carrying into the year.

    add_months(2026, 1, -1) -> (2025, 12)
    add_months(2025, 12, 1) -> (2026, 1)
    """
    _check_month(month)
    carry, month_index = divmod(month - 1 + delta, 12)
    _check_year(year + carry)
    return year + carry, month_index + 1
