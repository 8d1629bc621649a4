"""Installment and subscription date spacing built on the calendar primitives"""

from datetime import date, timedelta
from enum import Enum
from typing import List, Optional

from finance_tracker.domain.calendar_ops import add_months, clip_day
from finance_tracker.domain.cycle_assigner import assign
from finance_tracker.domain.exceptions import InvalidCalendarInputError
from finance_tracker.domain.models import CardBillingConfig, Installment


class Frequency(str, Enum):
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"
    CUSTOM = "CUSTOM"


def shift_months(day: date, months: int) -> date:
    """Same day-of-month `months` later, clipped to the target month length"""
    year, month = add_months(day.year, day.month, months)
    return date(year, month, clip_day(year, month, day.day))


def generate_installment_plan(
    amount_cents: int,
    num_installments: int,
    start_date: date,
    billing: Optional[CardBillingConfig] = None,
) -> List[Installment]:
    """
    Split an installment purchase into monthly payments.

    Requirements:
    - Equal installments, last one absorbs the rounding remainder
    - Installment i is dated i months after start_date (Jan 31 -> Feb 28/29)
    - When charged to a card, each installment carries its invoice month

    Example:
        R$100.00 in 3x -> [33.33, 33.33, 33.34]
        10000 cents / 3 = 3333 base, remainder 1
    """
    if amount_cents <= 0:
        return []
    if num_installments < 1:
        raise InvalidCalendarInputError(f"Installment count must be at least 1, got {num_installments}")

    base_amount = amount_cents // num_installments
    remainder = amount_cents % num_installments

    installments = []
    for i in range(num_installments):
        due_date = shift_months(start_date, i)
        amount = base_amount + (remainder if i == num_installments - 1 else 0)

        installments.append(
            Installment(
                number=i + 1,
                due_date=due_date,
                amount_cents=amount,
                invoice_month=assign(billing, due_date) if billing else None,
            )
        )

    return installments


def shift_days(day: date, days: int) -> date:
    try:
        return day + timedelta(days=days)
    except OverflowError as e:
        raise InvalidCalendarInputError(f"{day.isoformat()} + {days} days is outside the supported calendar") from e


def next_billing_date(start_date: date, frequency: Frequency, custom_days: Optional[int] = None) -> date:
    """Next charge date of a recurring subscription"""
    if frequency == Frequency.WEEKLY:
        return shift_days(start_date, 7)
    if frequency == Frequency.MONTHLY:
        return shift_months(start_date, 1)
    if frequency == Frequency.YEARLY:
        return shift_months(start_date, 12)
    # CUSTOM without a day count keeps the start date
    return shift_days(start_date, custom_days or 0)
