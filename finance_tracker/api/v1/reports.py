"""Per-person reimbursement report endpoints"""

import time
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import (
    CardInvoiceBucketSchema,
    CategorySpendingSchema,
    MarkReimbursedRequest,
    MarkReimbursedResponse,
    PersonDetailResponse,
    PersonReportResponse,
    PersonTotalsSchema,
    ReportSummarySchema,
    TransactionSchema,
)
from finance_tracker.api.dependencies import get_request_id
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import TransactionRepository
from finance_tracker.domain.reimbursements import build_person_detail, build_person_report
from finance_tracker.domain.exceptions import DomainException
from finance_tracker.infrastructure.observability.metrics import report_counter, reimbursed_transactions_counter
from finance_tracker.infrastructure.observability.logging import log_report
from finance_tracker.utils.date_utils import parse_month, parse_optional_month

router = APIRouter()


@router.get("/reports/by-person", response_model=PersonReportResponse)
def get_report_by_person(
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    start: Optional[str] = Query(None, description="First invoice month (YYYY-MM)"),
    end: Optional[str] = Query(None, description="Last invoice month (YYYY-MM)"),
    only_pending: bool = Query(False, description="Only transactions not yet reimbursed"),
    db: Session = Depends(get_db),
):
    """
    Expenses paid on behalf of other people, grouped by person.

    Card purchases are matched against [start, end] by the invoice month
    they are billed in, not by their raw date.
    """
    start_time = time.time()
    try:
        start_month = parse_optional_month(start)
        end_month = parse_optional_month(end)
        transactions = TransactionRepository(db).find_paid_by_others(user_id, only_pending=only_pending)
        report = build_person_report(transactions, start_month, end_month)
    except DomainException as e:
        raise HTTPException(status_code=422, detail=str(e))

    report_counter.labels(kind="by_person").inc()
    log_report(
        get_request_id(request),
        "by_person",
        sum(p.transaction_count for p in report.people),
        (time.time() - start_time) * 1000,
    )

    return PersonReportResponse(
        report=[PersonTotalsSchema.from_domain(p) for p in report.people],
        summary=ReportSummarySchema(
            total_people=report.total_people,
            total_cents=report.total_cents,
            pending_cents=report.pending_cents,
            reimbursed_cents=report.reimbursed_cents,
        ),
    )


@router.get("/reports/by-person/detail", response_model=PersonDetailResponse)
def get_person_detail(
    request: Request,
    user_id: str = Query(..., description="User identifier"),
    person: str = Query(..., min_length=1, description="Person name"),
    month: str = Query(..., description="Invoice month (YYYY-MM)"),
    db: Session = Depends(get_db),
):
    """One person's expenses for a single invoice month, split by card invoice"""
    start_time = time.time()
    try:
        invoice_month = parse_month(month)
        transactions = TransactionRepository(db).find_paid_by_others(user_id, person_name=person)
        detail = build_person_detail(person, invoice_month, transactions)
    except DomainException as e:
        raise HTTPException(status_code=422, detail=str(e))

    report_counter.labels(kind="person_detail").inc()
    log_report(
        get_request_id(request),
        "person_detail",
        len(detail.direct_transactions) + sum(len(b.transactions) for b in detail.card_bills),
        (time.time() - start_time) * 1000,
    )

    return PersonDetailResponse(
        person_name=detail.person_name,
        month=str(detail.month),
        total_cents=detail.total_cents,
        pending_cents=detail.pending_cents,
        reimbursed_cents=detail.reimbursed_cents,
        card_bills=[CardInvoiceBucketSchema.from_domain(b) for b in detail.card_bills],
        direct_transactions=[TransactionSchema.from_domain(t) for t in detail.direct_transactions],
        categories=[CategorySpendingSchema.from_domain(c) for c in detail.categories],
    )


@router.post("/reports/by-person/mark-reimbursed", response_model=MarkReimbursedResponse)
def mark_reimbursed(
    request_body: MarkReimbursedRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Flag every pending transaction of a person as reimbursed"""
    request_id = get_request_id(request)
    try:
        updated = TransactionRepository(db).mark_reimbursed(request_body.user_id, request_body.person_name)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to mark reimbursed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    reimbursed_transactions_counter.inc(updated)
    logging.info(
        "Transactions marked as reimbursed",
        extra={"request_id": request_id, "person_name": request_body.person_name, "updated_count": updated},
    )
    return MarkReimbursedResponse(updated_count=updated)
