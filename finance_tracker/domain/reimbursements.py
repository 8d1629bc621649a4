"""Per-person reimbursement reports grouped by invoice month"""

from datetime import date
from typing import Dict, List, Optional, Tuple

from finance_tracker.domain.cycle_assigner import assign, in_window
from finance_tracker.domain.invoices import group_by_category
from finance_tracker.domain.models import (
    CardInvoiceBucket,
    InvoiceMonth,
    PersonDetail,
    PersonTotals,
    ReimbursementReport,
    Transaction,
)


def _calendar_month(day: date) -> InvoiceMonth:
    return InvoiceMonth(day.year, day.month)


def billing_month(txn: Transaction) -> InvoiceMonth:
    """
    Month a transaction is charged in.

    Card purchases belong to the invoice their date resolves to; direct
    payments (PIX, transfer, cash) to the calendar month of their date.
    """
    if txn.card is not None:
        return assign(txn.card.billing, txn.date)
    return _calendar_month(txn.date)


def filter_by_invoice_window(
    transactions: List[Transaction],
    start: Optional[InvoiceMonth] = None,
    end: Optional[InvoiceMonth] = None,
) -> List[Transaction]:
    """Keep transactions whose billing month falls in [start, end]"""
    if start is None and end is None:
        return list(transactions)

    kept = []
    for txn in transactions:
        if txn.card is not None:
            if in_window(txn.card.billing, txn.date, start, end):
                kept.append(txn)
            continue

        month = _calendar_month(txn.date)
        if start is not None and month < start:
            continue
        if end is not None and month > end:
            continue
        kept.append(txn)

    return kept


def _totals(transactions: List[Transaction]) -> Tuple[int, int, int]:
    total = sum(t.amount_cents for t in transactions)
    reimbursed = sum(t.amount_cents for t in transactions if t.is_reimbursed)
    return total, total - reimbursed, reimbursed


def build_person_report(
    transactions: List[Transaction],
    start: Optional[InvoiceMonth] = None,
    end: Optional[InvoiceMonth] = None,
) -> ReimbursementReport:
    """
    Group expenses paid on behalf of other people.

    Only transactions with a paid_by are considered. People are ordered by
    pending amount, largest first.
    """
    filtered = filter_by_invoice_window(
        [t for t in transactions if t.paid_by], start, end
    )

    by_person: Dict[str, PersonTotals] = {}
    for txn in filtered:
        person = by_person.setdefault(txn.paid_by, PersonTotals(person_name=txn.paid_by))
        person.total_cents += txn.amount_cents
        person.transaction_count += 1
        person.transactions.append(txn)
        if txn.is_reimbursed:
            person.reimbursed_cents += txn.amount_cents
        else:
            person.pending_cents += txn.amount_cents

    people = sorted(by_person.values(), key=lambda p: p.pending_cents, reverse=True)
    total, pending, reimbursed = _totals(filtered)

    return ReimbursementReport(
        people=people,
        total_people=len(people),
        total_cents=total,
        pending_cents=pending,
        reimbursed_cents=reimbursed,
    )


def build_person_detail(
    person_name: str,
    month: InvoiceMonth,
    transactions: List[Transaction],
) -> PersonDetail:
    """Breakdown of one person's expenses for a single invoice month"""
    selected = filter_by_invoice_window(
        [t for t in transactions if t.paid_by == person_name], month, month
    )

    buckets: Dict[Tuple[str, InvoiceMonth], CardInvoiceBucket] = {}
    direct: List[Transaction] = []

    for txn in selected:
        if txn.card is None:
            direct.append(txn)
            continue

        label = billing_month(txn)
        key = (txn.card.card_id, label)
        if key not in buckets:
            buckets[key] = CardInvoiceBucket(
                card_id=txn.card.card_id,
                card_name=txn.card.name,
                card_color=txn.card.color,
                closing_day=txn.card.billing.closing_day,
                invoice_month=label,
            )
        buckets[key].total_cents += txn.amount_cents
        buckets[key].transactions.append(txn)

    total, pending, reimbursed = _totals(selected)

    return PersonDetail(
        person_name=person_name,
        month=month,
        total_cents=total,
        pending_cents=pending,
        reimbursed_cents=reimbursed,
        card_bills=sorted(buckets.values(), key=lambda b: (b.invoice_month, b.card_name), reverse=True),
        direct_transactions=sorted(direct, key=lambda t: t.date, reverse=True),
        categories=group_by_category(selected),
    )
