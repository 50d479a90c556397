"""SQLAlchemy ORM models for credit accounts, their ledger and recorded statements"""

import uuid
from sqlalchemy import (
    Column,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

# Currency columns: 2 decimal places, enough integer digits for any card limit
Money = Numeric(14, 2)


class CreditAccount(Base):
    """Revolving credit line"""

    __tablename__ = "credit_account"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False, default="")
    credit_limit = Column(Money, nullable=False, default=0)
    balance = Column(Money, nullable=False, default=0)
    due_day = Column(Integer, nullable=True)
    cut_off_day = Column(Integer, nullable=True)
    annual_rate = Column(Numeric(7, 4), nullable=True)  # percentage, 36.0 = 36%
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    entries = relationship("LedgerEntry", back_populates="account", cascade="all, delete-orphan")


class LedgerEntry(Base):
    """Charge or payment posted against a credit account"""

    __tablename__ = "ledger_entry"
    __table_args__ = (Index("ix_ledger_entry_account_date", "account_id", "entry_date"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    account_id = Column(Text, ForeignKey("credit_account.id", ondelete="CASCADE"), nullable=False)
    entry_date = Column(Date, nullable=False)
    entry_type = Column(Text, nullable=False)  # charge | payment
    amount = Column(Money, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    account = relationship("CreditAccount", back_populates="entries")


class CreditStatement(Base):
    """One recorded billing cycle; unique per (account_id, statement_date)"""

    __tablename__ = "credit_statement"
    __table_args__ = (UniqueConstraint("account_id", "statement_date", name="uq_credit_statement_cycle"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    account_id = Column(Text, ForeignKey("credit_account.id", ondelete="CASCADE"), nullable=False, index=True)
    statement_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    previous_balance = Column(Money, nullable=False)
    charges = Column(Money, nullable=False)
    interests = Column(Money, nullable=False)
    payments = Column(Money, nullable=False)
    statement_balance = Column(Money, nullable=False)
    forgivable_interest = Column(Money, nullable=False)
    installment_balance = Column(Money, nullable=False)
    annual_rate = Column(Numeric(9, 6), nullable=False)  # unit fraction, 0.36 = 36%
    period_days = Column(Integer, nullable=False)
    payment_made = Column(Money, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())
