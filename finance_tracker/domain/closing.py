"""Effective closing date of a card statement"""

from datetime import date

from finance_tracker.domain.calendar_ops import clip_day, roll_forward_if_weekend
from finance_tracker.domain.exceptions import InvalidBillingConfigError


def validate_day_of_month(value: object, field: str) -> int:
    """Reject anything that is not an integer day in 1..31"""
    # bool is an int subclass; True/False are never valid days
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidBillingConfigError(f"{field} must be an integer, got {value!r}")
    if not 1 <= value <= 31:
        raise InvalidBillingConfigError(f"{field} must be between 1 and 31, got {value}")
    return value


def effective_closing_date(year: int, month: int, closing_day: int) -> date:
    """
    Closing date actually applied by the issuer for the given month.

    The configured day is clipped to the month length, then moved to the
    following Monday if it falls on a weekend. The result is always one of
    the raw date, raw + 1 day or raw + 2 days.

    Example: closing day 4, October 2025 -> Oct 4 is a Saturday -> Oct 6
    """
    validate_day_of_month(closing_day, "closing_day")
    raw_date = date(year, month, clip_day(year, month, closing_day))
    return roll_forward_if_weekend(raw_date)
