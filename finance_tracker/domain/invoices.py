"""Invoice detail aggregation for a single card and billing period"""

from typing import Dict, List

from finance_tracker.domain.billing import due_date_for
from finance_tracker.domain.models import (
    BillPeriod,
    Card,
    CategorySpending,
    InvoiceSummary,
    Transaction,
)

NO_CATEGORY_ID = "no-category"
NO_CATEGORY_NAME = "Sem categoria"
NO_CATEGORY_ICON = "❓"
NO_CATEGORY_COLOR = "#666666"


def _percentage(part: int, whole: int) -> float:
    return (part / whole) * 100 if whole > 0 else 0.0


def group_by_category(transactions: List[Transaction]) -> List[CategorySpending]:
    """
    Group transactions by category, largest spend first.

    Transactions without a category share a single "no-category" group.
    Percentages are relative to the total of the given transactions.
    """
    groups: Dict[str, CategorySpending] = {}

    for txn in transactions:
        category = txn.category
        key = category.category_id if category else NO_CATEGORY_ID

        if key not in groups:
            groups[key] = CategorySpending(
                category_id=key,
                name=category.name if category else NO_CATEGORY_NAME,
                icon=category.icon if category else NO_CATEGORY_ICON,
                color=category.color if category else NO_CATEGORY_COLOR,
                budget_cents=category.budget_cents if category else 0,
            )

        groups[key].spent_cents += txn.amount_cents
        groups[key].transactions.append(txn)

    total = sum(t.amount_cents for t in transactions)
    for group in groups.values():
        group.percentage = _percentage(group.spent_cents, total)
        group.budget_percentage = _percentage(group.spent_cents, group.budget_cents)

    return sorted(groups.values(), key=lambda g: g.spent_cents, reverse=True)


def summarize_invoice(card: Card, period: BillPeriod, transactions: List[Transaction]) -> InvoiceSummary:
    """
    Build the invoice detail shown for one card.

    Transactions are expected to be already bounded by the period
    (date BETWEEN period.start_date AND period.end_date).
    """
    total = sum(t.amount_cents for t in transactions)
    categories = group_by_category(transactions)
    total_budget = sum(c.budget_cents for c in categories)

    return InvoiceSummary(
        card=card,
        period=period,
        due_date=due_date_for(card.billing, period.due_year, period.due_month),
        total_cents=total,
        total_budget_cents=total_budget,
        budget_usage_percentage=_percentage(total, total_budget),
        available_limit_cents=card.limit_cents - total,
        usage_percentage=_percentage(total, card.limit_cents),
        categories=categories,
        transactions=sorted(transactions, key=lambda t: t.date, reverse=True),
    )
