"""Maps transaction dates to the invoice month they are billed in"""

from datetime import date
from typing import Optional

from finance_tracker.domain.billing import current_period
from finance_tracker.domain.models import CardBillingConfig, InvoiceMonth


def assign(config: CardBillingConfig, transaction_date: date) -> InvoiceMonth:
    """Invoice month label for a purchase made on transaction_date"""
    return current_period(config, transaction_date).invoice_month


def in_window(
    config: CardBillingConfig,
    transaction_date: date,
    start: Optional[InvoiceMonth] = None,
    end: Optional[InvoiceMonth] = None,
) -> bool:
    """Whether the purchase is billed in an invoice month within [start, end]"""
    label = assign(config, transaction_date)
    if start is not None and label < start:
        return False
    if end is not None and label > end:
        return False
    return True
