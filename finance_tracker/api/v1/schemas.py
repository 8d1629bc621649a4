"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import List, Optional

from finance_tracker.domain.models import (
    BillPeriod,
    Card,
    CardInvoiceBucket,
    CategorySpending,
    PersonTotals,
    Transaction,
)
from finance_tracker.domain.installments import Frequency


class CardCreateRequest(BaseModel):
    """Request body for POST /v1/cards"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    name: str = Field(..., min_length=1, max_length=100)
    nickname: Optional[str] = Field(None, max_length=100)
    limit_cents: int = Field(..., gt=0, description="Credit limit in cents")
    closing_day: int = Field(..., ge=1, le=31, description="Statement closing day of month")
    due_day: int = Field(..., ge=1, le=31, description="Payment due day of month")
    color: str = Field("#3B82F6", pattern=r"^#[0-9A-Fa-f]{6}$")


class TransactionCreateRequest(BaseModel):
    """Request body for POST /v1/transactions"""

    user_id: str = Field(..., min_length=1)
    amount_cents: int = Field(..., gt=0)
    transaction_date: date
    description: Optional[str] = None
    card_id: Optional[str] = None
    category_id: Optional[str] = None
    paid_by: Optional[str] = Field(None, min_length=1)
    payment_method: str = "CREDIT_CARD"


class TransactionCreatedResponse(BaseModel):
    transaction_id: str
    invoice_month: Optional[str] = None


class InstallmentPreviewRequest(BaseModel):
    """Request body for POST /v1/cards/{card_id}/installments/preview"""

    user_id: str = Field(..., min_length=1)
    amount_cents: int = Field(..., gt=0)
    installments: int = Field(..., ge=1, le=72)
    start_date: date


class SubscriptionPreviewRequest(BaseModel):
    """Request body for POST /v1/cards/{card_id}/subscriptions/preview"""

    user_id: str = Field(..., min_length=1)
    start_date: date
    frequency: Frequency
    custom_days: Optional[int] = Field(None, ge=1)


class MarkReimbursedRequest(BaseModel):
    """Request body for POST /v1/reports/by-person/mark-reimbursed"""

    user_id: str = Field(..., min_length=1)
    person_name: str = Field(..., min_length=1)


class MarkReimbursedResponse(BaseModel):
    updated_count: int


class PeriodSchema(BaseModel):
    """Purchase window of an invoice"""

    start: datetime
    end: datetime
    due_year: int
    due_month: int
    invoice_month: str

    @classmethod
    def from_domain(cls, period: BillPeriod) -> "PeriodSchema":
        return cls(
            start=period.starts_at,
            end=period.ends_at,
            due_year=period.due_year,
            due_month=period.due_month,
            invoice_month=str(period.invoice_month),
        )


class CardSchema(BaseModel):
    card_id: str
    name: str
    nickname: Optional[str] = None
    limit_cents: int
    closing_day: int
    due_day: int
    color: str

    @classmethod
    def from_domain(cls, card: Card) -> "CardSchema":
        return cls(
            card_id=card.card_id,
            name=card.name,
            nickname=card.nickname,
            limit_cents=card.limit_cents,
            closing_day=card.billing.closing_day,
            due_day=card.billing.due_day,
            color=card.color,
        )


class CardSummarySchema(CardSchema):
    """Card with its current invoice figures"""

    current_period: PeriodSchema
    current_bill_cents: int
    available_limit_cents: int
    usage_percentage: float


class TransactionSchema(BaseModel):
    transaction_id: str
    transaction_date: date
    amount_cents: int
    description: Optional[str] = None
    category_id: Optional[str] = None
    card_id: Optional[str] = None
    paid_by: Optional[str] = None
    is_reimbursed: bool

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionSchema":
        return cls(
            transaction_id=txn.transaction_id,
            transaction_date=txn.date,
            amount_cents=txn.amount_cents,
            description=txn.description,
            category_id=txn.category.category_id if txn.category else None,
            card_id=txn.card.card_id if txn.card else None,
            paid_by=txn.paid_by,
            is_reimbursed=txn.is_reimbursed,
        )


class CategorySpendingSchema(BaseModel):
    category_id: str
    name: str
    icon: str
    color: str
    budget_cents: int
    spent_cents: int
    percentage: float
    budget_percentage: float
    transactions: List[TransactionSchema]

    @classmethod
    def from_domain(cls, group: CategorySpending) -> "CategorySpendingSchema":
        return cls(
            category_id=group.category_id,
            name=group.name,
            icon=group.icon,
            color=group.color,
            budget_cents=group.budget_cents,
            spent_cents=group.spent_cents,
            percentage=group.percentage,
            budget_percentage=group.budget_percentage,
            transactions=[TransactionSchema.from_domain(t) for t in group.transactions],
        )


class BillResponse(BaseModel):
    """Response for GET /v1/cards/{card_id}/bill"""

    card: CardSchema
    period: PeriodSchema
    due_date: date
    total_bill_cents: int
    total_budget_cents: int
    budget_usage_percentage: float
    available_limit_cents: int
    usage_percentage: float
    categories: List[CategorySpendingSchema]
    transactions: List[TransactionSchema]


class InstallmentSchema(BaseModel):
    """Single installment of a purchase"""

    number: int
    due_date: date
    amount_cents: int
    invoice_month: Optional[str] = None


class InstallmentPreviewResponse(BaseModel):
    card_id: str
    total_cents: int
    installments: List[InstallmentSchema]


class SubscriptionPreviewResponse(BaseModel):
    card_id: str
    next_billing_date: date
    invoice_month: str


class PersonTotalsSchema(BaseModel):
    person_name: str
    total_cents: int
    pending_cents: int
    reimbursed_cents: int
    transaction_count: int
    transactions: List[TransactionSchema]

    @classmethod
    def from_domain(cls, person: PersonTotals) -> "PersonTotalsSchema":
        return cls(
            person_name=person.person_name,
            total_cents=person.total_cents,
            pending_cents=person.pending_cents,
            reimbursed_cents=person.reimbursed_cents,
            transaction_count=person.transaction_count,
            transactions=[TransactionSchema.from_domain(t) for t in person.transactions],
        )


class ReportSummarySchema(BaseModel):
    total_people: int
    total_cents: int
    pending_cents: int
    reimbursed_cents: int


class PersonReportResponse(BaseModel):
    """Response for GET /v1/reports/by-person"""

    report: List[PersonTotalsSchema]
    summary: ReportSummarySchema


class CardInvoiceBucketSchema(BaseModel):
    card_id: str
    card_name: str
    card_color: str
    closing_day: int
    invoice_month: str
    total_cents: int
    transactions: List[TransactionSchema]

    @classmethod
    def from_domain(cls, bucket: CardInvoiceBucket) -> "CardInvoiceBucketSchema":
        return cls(
            card_id=bucket.card_id,
            card_name=bucket.card_name,
            card_color=bucket.card_color,
            closing_day=bucket.closing_day,
            invoice_month=str(bucket.invoice_month),
            total_cents=bucket.total_cents,
            transactions=[TransactionSchema.from_domain(t) for t in bucket.transactions],
        )


class PersonDetailResponse(BaseModel):
    """Response for GET /v1/reports/by-person/detail"""

    person_name: str
    month: str
    total_cents: int
    pending_cents: int
    reimbursed_cents: int
    card_bills: List[CardInvoiceBucketSchema]
    direct_transactions: List[TransactionSchema]
    categories: List[CategorySpendingSchema]
