"""Unit tests for mapping transactions to invoice months"""

from datetime import date, timedelta
from finance_tracker.domain.billing import current_period
from finance_tracker.domain.cycle_assigner import assign, in_window
from finance_tracker.domain.models import CardBillingConfig, InvoiceMonth

CLOSES_4TH = CardBillingConfig(closing_day=4, due_day=10)
CLOSES_1ST = CardBillingConfig(closing_day=1, due_day=7)


def _days(start: date, end: date):
    """Every date from start to end, inclusive"""
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def test_assign_around_saturday_closing():
    assert assign(CLOSES_4TH, date(2025, 10, 3)) == InvoiceMonth(2025, 10)
    assert assign(CLOSES_4TH, date(2025, 10, 4)) == InvoiceMonth(2025, 10)
    assert assign(CLOSES_4TH, date(2025, 10, 5)) == InvoiceMonth(2025, 10)
    assert assign(CLOSES_4TH, date(2025, 10, 6)) == InvoiceMonth(2025, 11)


def test_assign_around_sunday_closing():
    assert assign(CLOSES_1ST, date(2026, 2, 1)) == InvoiceMonth(2026, 2)
    assert assign(CLOSES_1ST, date(2026, 2, 2)) == InvoiceMonth(2026, 3)


def test_assign_agrees_with_current_period():
    for day in _days(date(2025, 1, 1), date(2026, 12, 31)):
        assert assign(CLOSES_4TH, day) == current_period(CLOSES_4TH, day).invoice_month


def test_in_window_bounds_are_inclusive():
    october = InvoiceMonth(2025, 10)
    november = InvoiceMonth(2025, 11)

    assert in_window(CLOSES_4TH, date(2025, 10, 5), october, october)
    assert not in_window(CLOSES_4TH, date(2025, 10, 6), october, october)
    assert in_window(CLOSES_4TH, date(2025, 10, 6), october, november)
    assert in_window(CLOSES_4TH, date(2025, 10, 6), start=november)
    assert not in_window(CLOSES_4TH, date(2025, 10, 6), end=october)
    assert in_window(CLOSES_4TH, date(2025, 10, 6))


def test_invoice_month_label_and_ordering():
    assert str(InvoiceMonth(2025, 3)) == "2025-03"
    assert InvoiceMonth(2025, 12) < InvoiceMonth(2026, 1)
    assert sorted([InvoiceMonth(2026, 1), InvoiceMonth(2025, 2)]) == [InvoiceMonth(2025, 2), InvoiceMonth(2026, 1)]
