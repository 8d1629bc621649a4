"""Data access layer for cards, categories and transactions"""

import uuid
from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from finance_tracker.infrastructure.database.models import CardRecord, CategoryRecord, TransactionRecord
from finance_tracker.domain.exceptions import CardNotFoundError
from finance_tracker.domain.models import Card, CardBillingConfig, Category, Transaction


def to_domain_card(record: CardRecord) -> Card:
    return Card(
        card_id=str(record.id),
        name=record.name,
        nickname=record.nickname,
        limit_cents=record.limit_cents,
        billing=CardBillingConfig(closing_day=record.closing_day, due_day=record.due_day),
        color=record.color,
    )


def to_domain_category(record: CategoryRecord) -> Category:
    return Category(
        category_id=str(record.id),
        name=record.name,
        icon=record.icon,
        color=record.color,
        budget_cents=record.budget_cents,
    )


def to_domain_transaction(record: TransactionRecord) -> Transaction:
    return Transaction(
        transaction_id=str(record.id),
        date=record.date,
        amount_cents=record.amount_cents,
        description=record.description,
        type=record.type,
        category=to_domain_category(record.category) if record.category else None,
        card=to_domain_card(record.card) if record.card else None,
        paid_by=record.paid_by,
        is_reimbursed=record.is_reimbursed,
    )


class CardRepository:
    """Repository for cards"""

    def __init__(self, db: Session):
        self.db = db

    def create_card(
        self,
        user_id: str,
        name: str,
        limit_cents: int,
        closing_day: int,
        due_day: int,
        color: str = "#3B82F6",
        nickname: Optional[str] = None,
    ) -> CardRecord:
        """Persist a card; days are validated by the caller"""
        db_card = CardRecord(
            user_id=user_id,
            name=name,
            nickname=nickname,
            limit_cents=limit_cents,
            closing_day=closing_day,
            due_day=due_day,
            color=color,
        )
        self.db.add(db_card)
        self.db.flush()  # Get ID without committing
        return db_card

    def get_card(self, user_id: str, card_id: uuid.UUID) -> Card:
        """
        Fetch a card owned by the user.

        Raises:
            CardNotFoundError: card missing or owned by someone else
        """
        record = self.db.query(CardRecord).filter(CardRecord.id == card_id).first()
        if record is None or record.user_id != user_id:
            raise CardNotFoundError(f"Card {card_id} not found")
        return to_domain_card(record)

    def list_cards(self, user_id: str) -> List[Card]:
        records = (
            self.db.query(CardRecord)
            .filter(CardRecord.user_id == user_id)
            .order_by(CardRecord.name)
            .all()
        )
        return [to_domain_card(r) for r in records]


class CategoryRepository:
    """Repository for spending categories"""

    def __init__(self, db: Session):
        self.db = db

    def create_category(
        self,
        user_id: str,
        name: str,
        icon: str = "📦",
        color: str = "#6B7280",
        budget_cents: int = 0,
    ) -> CategoryRecord:
        db_category = CategoryRecord(
            user_id=user_id,
            name=name,
            icon=icon,
            color=color,
            budget_cents=budget_cents,
        )
        self.db.add(db_category)
        self.db.flush()
        return db_category


class TransactionRepository:
    """Repository for transactions"""

    def __init__(self, db: Session):
        self.db = db

    def create_transaction(
        self,
        user_id: str,
        amount_cents: int,
        on: date,
        description: Optional[str] = None,
        card_id: Optional[uuid.UUID] = None,
        category_id: Optional[uuid.UUID] = None,
        paid_by: Optional[str] = None,
        is_reimbursed: bool = False,
        payment_method: str = "CREDIT_CARD",
    ) -> TransactionRecord:
        db_transaction = TransactionRecord(
            user_id=user_id,
            amount_cents=amount_cents,
            date=on,
            description=description,
            card_id=card_id,
            category_id=category_id,
            paid_by=paid_by,
            is_reimbursed=is_reimbursed,
            payment_method=payment_method,
        )
        self.db.add(db_transaction)
        self.db.flush()
        return db_transaction

    def _base_query(self, user_id: str):
        return (
            self.db.query(TransactionRecord)
            .options(joinedload(TransactionRecord.card), joinedload(TransactionRecord.category))
            .filter(TransactionRecord.user_id == user_id)
        )

    def find_for_card_period(self, user_id: str, card_id: uuid.UUID, start: date, end: date) -> List[Transaction]:
        """Card purchases with date BETWEEN start AND end (inclusive)"""
        records = (
            self._base_query(user_id)
            .filter(
                TransactionRecord.card_id == card_id,
                TransactionRecord.date >= start,
                TransactionRecord.date <= end,
            )
            .order_by(TransactionRecord.date.desc())
            .all()
        )
        return [to_domain_transaction(r) for r in records]

    def find_paid_by_others(
        self,
        user_id: str,
        person_name: Optional[str] = None,
        only_pending: bool = False,
    ) -> List[Transaction]:
        """
        All transactions paid on behalf of someone.

        Date filtering happens afterwards, by invoice month, since a card
        purchase may be billed in a later month than its date.
        """
        query = self._base_query(user_id).filter(TransactionRecord.paid_by.isnot(None))
        if person_name is not None:
            query = query.filter(TransactionRecord.paid_by == person_name)
        if only_pending:
            query = query.filter(TransactionRecord.is_reimbursed.is_(False))

        records = query.order_by(TransactionRecord.date.desc()).all()
        return [to_domain_transaction(r) for r in records]

    def mark_reimbursed(self, user_id: str, person_name: str) -> int:
        """Flag every pending transaction of the person as reimbursed, returns count"""
        return (
            self.db.query(TransactionRecord)
            .filter(
                TransactionRecord.user_id == user_id,
                TransactionRecord.paid_by == person_name,
                TransactionRecord.is_reimbursed.is_(False),
            )
            .update({TransactionRecord.is_reimbursed: True}, synchronize_session=False)
        )
