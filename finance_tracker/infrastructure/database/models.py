"""SQLAlchemy ORM models for cards, categories and transactions"""

import uuid
from sqlalchemy import Column, String, BigInteger, Boolean, DateTime, Date, Integer, ForeignKey, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class CardRecord(Base):
    """Credit card with its billing configuration"""

    __tablename__ = "cards"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    nickname = Column(Text, nullable=True)
    limit_cents = Column(BigInteger, nullable=False)
    closing_day = Column(Integer, nullable=False)
    due_day = Column(Integer, nullable=False)
    color = Column(String(7), nullable=False, default="#3B82F6")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    transactions = relationship("TransactionRecord", back_populates="card")


class CategoryRecord(Base):
    """Spending category with monthly budget"""

    __tablename__ = "categories"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    icon = Column(Text, nullable=False, default="📦")
    color = Column(String(7), nullable=False, default="#6B7280")
    budget_cents = Column(BigInteger, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    transactions = relationship("TransactionRecord", back_populates="category")


class TransactionRecord(Base):
    """Recorded expense; card_id set for card purchases"""

    __tablename__ = "transactions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    type = Column(Text, nullable=False, default="EXPENSE")
    amount_cents = Column(BigInteger, nullable=False)
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False, index=True)
    payment_method = Column(Text, nullable=False, default="CREDIT_CARD")
    paid_by = Column(Text, nullable=True, index=True)
    is_reimbursed = Column(Boolean, nullable=False, default=False)
    category_id = Column(UUID(as_uuid=True), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    card_id = Column(UUID(as_uuid=True), ForeignKey("cards.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    card = relationship("CardRecord", back_populates="transactions")
    category = relationship("CategoryRecord", back_populates="transactions")
