"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import List, Optional

from finance_tracker.domain.closing import validate_day_of_month


@dataclass(frozen=True)
class CardBillingConfig:
    """Closing and due day configured on a card"""

    closing_day: int
    due_day: int

    def __post_init__(self) -> None:
        validate_day_of_month(self.closing_day, "closing_day")
        validate_day_of_month(self.due_day, "due_day")


@dataclass(frozen=True, order=True)
class InvoiceMonth:
    """Invoice label: the year/month in which the invoice is due"""

    year: int
    month: int

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class BillPeriod:
    """Inclusive range of purchase dates belonging to one invoice"""

    start_date: date
    end_date: date
    due_year: int
    due_month: int

    @property
    def invoice_month(self) -> InvoiceMonth:
        return InvoiceMonth(self.due_year, self.due_month)

    @property
    def starts_at(self) -> datetime:
        return datetime.combine(self.start_date, time.min)

    @property
    def ends_at(self) -> datetime:
        """End of the last day of the period (23:59:59)"""
        return datetime.combine(self.end_date, time(23, 59, 59))

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass
class Card:
    """Credit card owned by a user"""

    card_id: str
    name: str
    limit_cents: int
    billing: CardBillingConfig
    color: str = "#3B82F6"
    nickname: Optional[str] = None


@dataclass
class Category:
    """Spending category with an optional monthly budget"""

    category_id: str
    name: str
    icon: str
    color: str
    budget_cents: int = 0


@dataclass
class Transaction:
    """Expense recorded by the user, optionally charged to a card"""

    transaction_id: str
    date: date
    amount_cents: int
    description: Optional[str] = None
    type: str = "EXPENSE"
    category: Optional[Category] = None
    card: Optional[Card] = None
    paid_by: Optional[str] = None  # person who owes this expense back
    is_reimbursed: bool = False


@dataclass
class CategorySpending:
    """Spending of one category inside an invoice or report"""

    category_id: str
    name: str
    icon: str
    color: str
    budget_cents: int
    spent_cents: int = 0
    percentage: float = 0.0
    budget_percentage: float = 0.0
    transactions: List[Transaction] = field(default_factory=list)


@dataclass
class InvoiceSummary:
    """Invoice detail for one card and one billing period"""

    card: Card
    period: BillPeriod
    due_date: date
    total_cents: int
    total_budget_cents: int
    budget_usage_percentage: float
    available_limit_cents: int
    usage_percentage: float
    categories: List[CategorySpending]
    transactions: List[Transaction]


@dataclass
class PersonTotals:
    """Amounts a single person owes"""

    person_name: str
    total_cents: int = 0
    pending_cents: int = 0
    reimbursed_cents: int = 0
    transaction_count: int = 0
    transactions: List[Transaction] = field(default_factory=list)


@dataclass
class ReimbursementReport:
    """Per-person report over an invoice-month window"""

    people: List[PersonTotals]
    total_people: int
    total_cents: int
    pending_cents: int
    reimbursed_cents: int


@dataclass
class CardInvoiceBucket:
    """Transactions of one person on one card invoice"""

    card_id: str
    card_name: str
    card_color: str
    closing_day: int
    invoice_month: InvoiceMonth
    total_cents: int = 0
    transactions: List[Transaction] = field(default_factory=list)


@dataclass
class PersonDetail:
    """Breakdown of one person's expenses for one invoice month"""

    person_name: str
    month: InvoiceMonth
    total_cents: int
    pending_cents: int
    reimbursed_cents: int
    card_bills: List[CardInvoiceBucket]
    direct_transactions: List[Transaction]
    categories: List[CategorySpending]


@dataclass
class Installment:
    """Single payment of an installment purchase"""

    number: int
    due_date: date
    amount_cents: int
    invoice_month: Optional[InvoiceMonth] = None
