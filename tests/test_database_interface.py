"""Tests for the SQLAlchemy database implementation."""

from datetime import datetime
from decimal import Decimal

import pytest

from ledgerlens.database.factories import create_memory_database
from ledgerlens.domain.entities import (
    Account,
    AccountType,
    Bill,
    LoanEntryType,
    LoanType,
    Recurrence,
    Transaction,
    TransactionType,
    WalletKind,
    WalletPreferences,
)
from ledgerlens.domain.errors import NotFoundError


def test_returns_domain_models(temp_db):
    """Test that database methods hand back domain entities, not ORM rows."""
    account_id = temp_db.create_account(name="Bank")
    tx_id = temp_db.create_transaction(
        date=datetime(2024, 1, 1),
        amount=Decimal("10.50"),
        type=TransactionType.INCOME,
        account_id=account_id,
    )

    account = temp_db.get_account(account_id)
    transaction = temp_db.get_transaction(tx_id)

    assert isinstance(account, Account)
    assert isinstance(transaction, Transaction)
    assert transaction.amount == Decimal("10.50")
    assert transaction.type == TransactionType.INCOME


def test_missing_rows_return_none(temp_db):
    assert temp_db.get_account("missing") is None
    assert temp_db.get_transaction("missing") is None
    assert temp_db.get_loan("missing") is None
    assert temp_db.get_category_by_name("missing") is None


def test_account_order_is_assigned(temp_db):
    first = temp_db.create_account(name="First")
    second = temp_db.create_account(name="Second", type=AccountType.CARD)
    orders = {acc.id: acc.order for acc in temp_db.list_accounts()}
    assert orders[first] < orders[second]


def test_set_primary_clears_others(temp_db):
    first = temp_db.create_account(name="First")
    second = temp_db.create_account(name="Second")
    temp_db.set_primary_account(first)
    temp_db.set_primary_account(second)
    primaries = [acc.id for acc in temp_db.list_accounts() if acc.is_primary]
    assert primaries == [second]


def test_set_primary_unknown_account(temp_db):
    with pytest.raises(NotFoundError):
        temp_db.set_primary_account("missing")


def test_wallet_preferences_default_to_empty(temp_db):
    assert temp_db.get_wallet_preferences() == WalletPreferences()


def test_wallet_snapshot_round_trip(temp_db):
    temp_db.update_wallet_snapshot(WalletKind.CASH, Decimal("75"), datetime(2024, 2, 1))
    prefs = temp_db.get_wallet_preferences()
    assert prefs.snapshot_for(WalletKind.CASH).balance == Decimal("75")
    assert prefs.snapshot_for(WalletKind.DIGITAL) is None


def test_loans_and_entries(temp_db):
    loan_id = temp_db.create_loan("Ravi", LoanType.GIVEN)
    temp_db.add_loan_transaction(
        loan_id, datetime(2024, 1, 1), Decimal("1000"), LoanEntryType.LOAN
    )
    temp_db.add_loan_transaction(
        loan_id, datetime(2024, 1, 9), Decimal("400"), LoanEntryType.REPAYMENT
    )

    loan = temp_db.find_loan("Ravi", LoanType.GIVEN)

    assert loan.id == loan_id
    assert loan.balance == Decimal("600")
    assert temp_db.find_loan("Ravi", LoanType.TAKEN) is None


def test_loan_entry_for_missing_loan(temp_db):
    with pytest.raises(NotFoundError):
        temp_db.add_loan_transaction(
            "missing", datetime(2024, 1, 1), Decimal("1"), LoanEntryType.LOAN
        )


def test_bill_lookup_and_payment(temp_db):
    bill_id = temp_db.create_bill(
        "Internet", Decimal("999"), datetime(2024, 5, 10), recurrence=Recurrence.MONTHLY
    )

    bill = temp_db.get_bill(bill_id)
    assert isinstance(bill, Bill)
    assert bill.title == "Internet"
    assert bill.paid_on is None
    assert temp_db.get_bill("missing") is None

    temp_db.update_bill_payment(bill_id, datetime(2024, 5, 8), datetime(2024, 6, 10))
    bill = temp_db.get_bill(bill_id)
    assert bill.paid_on == datetime(2024, 5, 8)
    assert bill.due_date == datetime(2024, 6, 10)

    with pytest.raises(NotFoundError):
        temp_db.update_bill_payment("missing", datetime(2024, 5, 8), datetime(2024, 6, 10))


def test_memory_database():
    """Test the in-memory factory for throwaway ledgers."""
    db = create_memory_database()
    db.connect()
    db.initialize_schema()
    try:
        db.create_account(name="Scratch")
        assert [acc.name for acc in db.list_accounts()] == ["Scratch"]
    finally:
        db.disconnect()
