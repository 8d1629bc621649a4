"""Card endpoints - listing, creation, invoice detail, installment and subscription preview"""

import time
import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import (
    BillResponse,
    CardCreateRequest,
    CardSchema,
    CardSummarySchema,
    CategorySpendingSchema,
    InstallmentPreviewRequest,
    InstallmentPreviewResponse,
    InstallmentSchema,
    PeriodSchema,
    SubscriptionPreviewRequest,
    SubscriptionPreviewResponse,
    TransactionSchema,
)
from finance_tracker.api.dependencies import get_request_id, get_today, parse_card_id
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import (
    CardRepository,
    TransactionRepository,
    to_domain_card,
)
from finance_tracker.domain.billing import current_period, period_for_invoice_month
from finance_tracker.domain.cycle_assigner import assign
from finance_tracker.domain.installments import generate_installment_plan, next_billing_date
from finance_tracker.domain.invoices import summarize_invoice
from finance_tracker.domain.exceptions import CardNotFoundError, DomainException
from finance_tracker.infrastructure.observability.metrics import record_bill_resolution
from finance_tracker.infrastructure.observability.logging import log_bill_resolution
from finance_tracker.utils.date_utils import parse_month

router = APIRouter()


@router.post("/cards", response_model=CardSchema, status_code=201)
def create_card(request_body: CardCreateRequest, db: Session = Depends(get_db)):
    """Register a card; closing/due days are range-checked by the request schema"""
    card_repo = CardRepository(db)
    try:
        record = card_repo.create_card(
            user_id=request_body.user_id,
            name=request_body.name,
            nickname=request_body.nickname,
            limit_cents=request_body.limit_cents,
            closing_day=request_body.closing_day,
            due_day=request_body.due_day,
            color=request_body.color,
        )
        card = to_domain_card(record)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to create card: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return CardSchema.from_domain(card)


@router.get("/cards", response_model=List[CardSummarySchema])
def list_cards(
    user_id: str = Query(..., description="User identifier"),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """
    List the user's cards with their current invoice.

    The current bill only counts purchases inside the invoice window that
    contains today, resolved the same way as the bill endpoint.
    """
    card_repo = CardRepository(db)
    txn_repo = TransactionRepository(db)

    summaries = []
    for card in card_repo.list_cards(user_id):
        period = current_period(card.billing, today)
        transactions = txn_repo.find_for_card_period(
            user_id, parse_card_id(card.card_id), period.start_date, period.end_date
        )
        current_bill = sum(t.amount_cents for t in transactions)
        base = CardSchema.from_domain(card)
        summaries.append(
            CardSummarySchema(
                **base.model_dump(),
                current_period=PeriodSchema.from_domain(period),
                current_bill_cents=current_bill,
                available_limit_cents=card.limit_cents - current_bill,
                usage_percentage=(current_bill / card.limit_cents) * 100 if card.limit_cents > 0 else 0.0,
            )
        )

    return summaries


@router.get("/cards/{card_id}/bill", response_model=BillResponse)
def get_bill(
    card_id: str,
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    month: Optional[str] = Query(None, description="Invoice month (YYYY-MM); defaults to the current invoice"),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """
    Invoice detail for a card.

    Flow:
    1. Resolve the purchase window (explicit invoice month or the one containing today)
    2. Fetch card purchases with date inside the window
    3. Aggregate totals, category breakdown and limit usage
    """
    start_time = time.time()
    request_id = get_request_id(request)
    card_uuid = parse_card_id(card_id)

    try:
        card = CardRepository(db).get_card(user_id, card_uuid)

        if month:
            invoice_month = parse_month(month)
            period = period_for_invoice_month(card.billing, invoice_month.year, invoice_month.month)
        else:
            period = current_period(card.billing, today)

        transactions = TransactionRepository(db).find_for_card_period(
            user_id, card_uuid, period.start_date, period.end_date
        )
        summary = summarize_invoice(card, period, transactions)

    except CardNotFoundError as e:
        logging.warning(f"Card not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Card not found")

    except DomainException as e:
        logging.warning(f"Invalid bill request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_bill_resolution(bool(month), summary.total_cents)
    log_bill_resolution(request_id, card_id, "explicit" if month else "current", period, summary.total_cents, duration_ms)

    return BillResponse(
        card=CardSchema.from_domain(card),
        period=PeriodSchema.from_domain(summary.period),
        due_date=summary.due_date,
        total_bill_cents=summary.total_cents,
        total_budget_cents=summary.total_budget_cents,
        budget_usage_percentage=summary.budget_usage_percentage,
        available_limit_cents=summary.available_limit_cents,
        usage_percentage=summary.usage_percentage,
        categories=[CategorySpendingSchema.from_domain(c) for c in summary.categories],
        transactions=[TransactionSchema.from_domain(t) for t in summary.transactions],
    )


@router.get("/cards/{card_id}/bill/period", response_model=PeriodSchema)
def get_bill_period(
    card_id: str,
    user_id: str = Query(..., description="User identifier"),
    on: Optional[date] = Query(None, description="Purchase date (YYYY-MM-DD); defaults to today"),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    """Which invoice a purchase made on the given date is billed in"""
    try:
        card = CardRepository(db).get_card(user_id, parse_card_id(card_id))
        period = current_period(card.billing, on or today)
    except CardNotFoundError:
        raise HTTPException(status_code=404, detail="Card not found")
    except DomainException as e:
        raise HTTPException(status_code=422, detail=str(e))

    return PeriodSchema.from_domain(period)


@router.post("/cards/{card_id}/installments/preview", response_model=InstallmentPreviewResponse)
def preview_installments(
    card_id: str,
    request_body: InstallmentPreviewRequest,
    db: Session = Depends(get_db),
):
    """Monthly installment schedule with the invoice each installment lands in"""
    try:
        card = CardRepository(db).get_card(request_body.user_id, parse_card_id(card_id))
        installments = generate_installment_plan(
            request_body.amount_cents,
            request_body.installments,
            request_body.start_date,
            billing=card.billing,
        )
    except CardNotFoundError:
        raise HTTPException(status_code=404, detail="Card not found")
    except DomainException as e:
        raise HTTPException(status_code=422, detail=str(e))

    return InstallmentPreviewResponse(
        card_id=card.card_id,
        total_cents=request_body.amount_cents,
        installments=[
            InstallmentSchema(
                number=inst.number,
                due_date=inst.due_date,
                amount_cents=inst.amount_cents,
                invoice_month=str(inst.invoice_month) if inst.invoice_month else None,
            )
            for inst in installments
        ],
    )


@router.post("/cards/{card_id}/subscriptions/preview", response_model=SubscriptionPreviewResponse)
def preview_subscription(
    card_id: str,
    request_body: SubscriptionPreviewRequest,
    db: Session = Depends(get_db),
):
    """Next charge of a recurring subscription and the invoice it is billed in"""
    try:
        card = CardRepository(db).get_card(request_body.user_id, parse_card_id(card_id))
        next_date = next_billing_date(
            request_body.start_date, request_body.frequency, request_body.custom_days
        )
        invoice_month = assign(card.billing, next_date)
    except CardNotFoundError:
        raise HTTPException(status_code=404, detail="Card not found")
    except DomainException as e:
        raise HTTPException(status_code=422, detail=str(e))

    return SubscriptionPreviewResponse(
        card_id=card.card_id,
        next_billing_date=next_date,
        invoice_month=str(invoice_month),
    )
