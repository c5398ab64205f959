"""Shared pytest fixtures for ledgerlens tests."""

import itertools
import os
import tempfile
from datetime import datetime
from decimal import Decimal

import pytest

from ledgerlens.database.factories import create_sqlite_database
from ledgerlens.domain.account import AccountService
from ledgerlens.domain.bills import BillService
from ledgerlens.domain.category import CategoryService
from ledgerlens.domain.entities import (
    Account,
    AccountType,
    PaymentMethod,
    Transaction,
    TransactionType,
)
from ledgerlens.domain.ledger import LedgerService
from ledgerlens.domain.loans import LoanService
from ledgerlens.domain.reports import ReportService
from ledgerlens.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def loan_service(temp_db):
    """Create a LoanService with a temporary database."""
    return LoanService(temp_db)


@pytest.fixture
def bill_service(temp_db):
    """Create a BillService with a temporary database."""
    return BillService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def primary_setup(account_service):
    """Primary bank account, a second bank account and an associated card.

    Returns a dict of account IDs keyed by 'primary', 'savings' and 'card'.
    """
    primary_id = account_service.create_account(name="Main Bank", is_primary=True)
    savings_id = account_service.create_account(name="Savings")
    card_id = account_service.create_account(
        name="Credit Card", account_type=AccountType.CARD, limit=Decimal("50000")
    )
    return {"primary": primary_id, "savings": savings_id, "card": card_id}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


# In-memory builders for the pure ledger engine


@pytest.fixture
def make_account():
    """Factory for Account entities."""

    def _make(account_id, account_type=AccountType.BANK, is_primary=False, order=0, **kwargs):
        return Account(
            id=account_id,
            name=kwargs.pop("name", account_id.title()),
            type=account_type,
            is_primary=is_primary,
            order=order,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_tx():
    """Factory for Transaction entities with sequential ids."""
    counter = itertools.count(1)

    def _make(tx_type, amount, day=1, **kwargs):
        return Transaction(
            id=kwargs.pop("id", f"t{next(counter):03d}"),
            date=kwargs.pop("date", datetime(2024, 1, day)),
            amount=Decimal(str(amount)) if not isinstance(amount, (Decimal, float)) else amount,
            type=tx_type,
            **kwargs,
        )

    def income(account_id, amount, day=1, **kwargs):
        return _make(TransactionType.INCOME, amount, day, account_id=account_id, **kwargs)

    def expense(account_id, amount, day=1, method=PaymentMethod.ONLINE, **kwargs):
        return _make(
            TransactionType.EXPENSE,
            amount,
            day,
            account_id=account_id,
            payment_method=method,
            **kwargs,
        )

    def transfer(from_id, to_id, amount, day=1, **kwargs):
        return _make(
            TransactionType.TRANSFER,
            amount,
            day,
            from_account_id=from_id,
            to_account_id=to_id,
            **kwargs,
        )

    _make.income = income
    _make.expense = expense
    _make.transfer = transfer
    return _make
