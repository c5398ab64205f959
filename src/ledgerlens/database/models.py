"""SQLAlchemy models for ledgerlens database."""

import uuid
from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    String,
    ForeignKey,
    DateTime,
    Integer,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(UTC)


class Account(Base):
    """Bank or card account model."""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, unique=True, nullable=False)
    type = Column(String, nullable=False, default="bank")
    is_primary = Column(Boolean, default=False, nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    credit_limit = Column(Numeric(12, 2), nullable=True)
    actual_balance = Column(Numeric(12, 2), nullable=True)
    actual_balance_date = Column(DateTime, nullable=True)
    linked_primary_account_id = Column(String, ForeignKey("accounts.id"), nullable=True)
    purpose = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)


class Transaction(Base):
    """Transaction model.

    Account references are plain strings: they may hold wallet ids or loan
    virtual account ids, which have no row in ``accounts``.
    """

    __tablename__ = "transactions"

    id = Column(String, primary_key=True, default=_new_id)
    date = Column(DateTime, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False, default="")
    subcategory = Column(String, nullable=True)
    category_id = Column(String, nullable=True)
    payment_method = Column(String, nullable=True)
    account_id = Column(String, nullable=True)
    from_account_id = Column(String, nullable=True)
    to_account_id = Column(String, nullable=True)
    loan_transaction_id = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)


class Loan(Base):
    """Person-level loan model."""

    __tablename__ = "loans"

    id = Column(String, primary_key=True, default=_new_id)
    person_name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    entries = relationship(
        "LoanTransaction",
        back_populates="loan",
        cascade="all, delete-orphan",
        order_by="LoanTransaction.date",
    )


class LoanTransaction(Base):
    """Loan or repayment entry model."""

    __tablename__ = "loan_transactions"

    id = Column(String, primary_key=True, default=_new_id)
    loan_id = Column(String, ForeignKey("loans.id"), nullable=False)
    date = Column(DateTime, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(String, nullable=False)
    account_id = Column(String, nullable=True)
    description = Column(String, nullable=True)

    # Relationships
    loan = relationship("Loan", back_populates="entries")


class WalletPreferences(Base):
    """Single-row wallet reconciliation snapshot model."""

    __tablename__ = "wallet_preferences"

    id = Column(Integer, primary_key=True)
    cash_balance = Column(Numeric(12, 2), nullable=True)
    cash_date = Column(DateTime, nullable=True)
    digital_balance = Column(Numeric(12, 2), nullable=True)
    digital_date = Column(DateTime, nullable=True)
    reconciliation_date = Column(DateTime, nullable=True)


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, unique=True, nullable=False)
    type = Column(String, nullable=False, default="expense")
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    subcategories = relationship(
        "SubCategory",
        back_populates="category",
        cascade="all, delete-orphan",
        order_by="SubCategory.sort_order",
    )


class SubCategory(Base):
    """Subcategory model with optional budget."""

    __tablename__ = "subcategories"

    id = Column(String, primary_key=True, default=_new_id)
    category_id = Column(String, ForeignKey("categories.id"), nullable=False)
    name = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=True)
    frequency = Column(String, nullable=True)
    # Comma-separated month names
    selected_months = Column(String, nullable=False, default="")
    sort_order = Column(Integer, nullable=False, default=0)

    # Relationships
    category = relationship("Category", back_populates="subcategories")


class Bill(Base):
    """Bill model."""

    __tablename__ = "bills"

    id = Column(String, primary_key=True, default=_new_id)
    title = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    due_date = Column(DateTime, nullable=False)
    type = Column(String, nullable=False, default="bill")
    recurrence = Column(String, nullable=False, default="none")
    paid_on = Column(DateTime, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
