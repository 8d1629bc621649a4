"""POST /v1/transactions - record an expense"""

import uuid
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import TransactionCreateRequest, TransactionCreatedResponse
from finance_tracker.api.dependencies import parse_card_id
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import CardRepository, TransactionRepository
from finance_tracker.domain.cycle_assigner import assign
from finance_tracker.domain.exceptions import CardNotFoundError, DomainException

router = APIRouter()


@router.post("/transactions", response_model=TransactionCreatedResponse, status_code=201)
def create_transaction(request_body: TransactionCreateRequest, db: Session = Depends(get_db)):
    """
    Record an expense.

    Card purchases report the invoice month they will be billed in.
    """
    invoice_month = None
    card_uuid = None
    if request_body.card_id:
        card_uuid = parse_card_id(request_body.card_id)
        try:
            card = CardRepository(db).get_card(request_body.user_id, card_uuid)
            invoice_month = assign(card.billing, request_body.transaction_date)
        except CardNotFoundError:
            raise HTTPException(status_code=404, detail="Card not found")
        except DomainException as e:
            raise HTTPException(status_code=422, detail=str(e))

    category_uuid = None
    if request_body.category_id:
        try:
            category_uuid = uuid.UUID(request_body.category_id)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid category ID format")

    try:
        record = TransactionRepository(db).create_transaction(
            user_id=request_body.user_id,
            amount_cents=request_body.amount_cents,
            on=request_body.transaction_date,
            description=request_body.description,
            card_id=card_uuid,
            category_id=category_uuid,
            paid_by=request_body.paid_by,
            payment_method=request_body.payment_method,
        )
        transaction_id = str(record.id)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to record transaction: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return TransactionCreatedResponse(
        transaction_id=transaction_id,
        invoice_month=str(invoice_month) if invoice_month else None,
    )
