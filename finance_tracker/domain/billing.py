"""Bill period calculator - resolves the purchase window of each card invoice"""

from datetime import date, timedelta

from finance_tracker.domain.calendar_ops import add_months, clip_day
from finance_tracker.domain.closing import effective_closing_date
from finance_tracker.domain.models import BillPeriod, CardBillingConfig


def period_for_invoice_month(config: CardBillingConfig, due_year: int, due_month: int) -> BillPeriod:
    """
    Purchase window of the invoice due in (due_year, due_month).

    The window starts on the previous month's effective closing date and
    ends the day before this month's effective closing date.

    Example: closing day 4, invoice 2025-10
    - Sep 4, 2025 is a Thursday -> start 2025-09-04
    - Oct 4, 2025 is a Saturday -> closes Oct 6 -> end 2025-10-05 23:59:59
    """
    end_close = effective_closing_date(due_year, due_month, config.closing_day)
    prev_year, prev_month = add_months(due_year, due_month, -1)
    start_close = effective_closing_date(prev_year, prev_month, config.closing_day)

    return BillPeriod(
        start_date=start_close,
        end_date=end_close - timedelta(days=1),
        due_year=due_year,
        due_month=due_month,
    )


def due_date_for(config: CardBillingConfig, due_year: int, due_month: int) -> date:
    """Payment deadline shown to the user; never shifts the purchase window"""
    return date(due_year, due_month, clip_day(due_year, due_month, config.due_day))


def current_period(config: CardBillingConfig, reference_date: date) -> BillPeriod:
    """
    Invoice whose purchase window contains reference_date.

    Rules:
    - reference on or before the day preceding this month's effective closing
      date -> invoice due this month (a purchase on a weekend closing day
      that rolled to Monday still lands here)
    - reference on/after the effective closing date -> next month's invoice
    - reference before this month's window start (previous closing rolled
      into this month) -> previous month's invoice
    """
    year, month = reference_date.year, reference_date.month
    candidate = period_for_invoice_month(config, year, month)

    if reference_date > candidate.end_date:
        next_year, next_month = add_months(year, month, 1)
        return period_for_invoice_month(config, next_year, next_month)

    if reference_date < candidate.start_date:
        prev_year, prev_month = add_months(year, month, -1)
        return period_for_invoice_month(config, prev_year, prev_month)

    return candidate
