"""Tests for the ledger service over a stored ledger."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from ledgerlens.domain.entities import (
    CASH_WALLET_ID,
    DIGITAL_WALLET_ID,
    LoanEntryType,
    LoanType,
    WalletKind,
)
from ledgerlens.domain.errors import NotFoundError
from ledgerlens.domain.views import ViewKind


@pytest.fixture
def ledger(primary_setup, transaction_service, loan_service):
    """A month of activity around the primary account."""
    ids = primary_setup
    transaction_service.add_income(ids["primary"], Decimal("50000"), date(2024, 1, 1), "Salary")
    transaction_service.add_transfer(ids["primary"], CASH_WALLET_ID, Decimal("2000"), date(2024, 1, 2))
    transaction_service.add_expense(CASH_WALLET_ID, Decimal("500"), date(2024, 1, 3), "Vegetables")
    transaction_service.add_expense(ids["card"], Decimal("3000"), date(2024, 1, 4), "Shoes")
    transaction_service.add_transfer(ids["primary"], ids["card"], Decimal("3000"), date(2024, 1, 20))
    transaction_service.add_transfer(ids["savings"], DIGITAL_WALLET_ID, Decimal("700"), date(2024, 1, 21))
    loan_service.record_entry(
        person_name="Ravi",
        loan_type=LoanType.GIVEN,
        entry_type=LoanEntryType.LOAN,
        amount=Decimal("1000"),
        account_id=ids["primary"],
        date=datetime(2024, 1, 22),
    )
    return ids


def test_balances(ledger_service, ledger):
    balances = ledger_service.balances()
    assert balances.get(ledger["primary"]) == Decimal("44000")
    assert balances.get(ledger["savings"]) == Decimal("-700")
    assert balances.get(ledger["card"]) == Decimal("0")
    assert balances.cash == Decimal("1500")
    assert balances.digital == Decimal("700")
    assert balances.skipped == ()


def test_primary_feed(ledger_service, ledger):
    feed = ledger_service.view_feed(ledger["primary"])
    assert feed.view.kind is ViewKind.PRIMARY
    # Primary + wallets: 50000 - 500 - 3000 + 700 - 1000
    assert feed.closing_balance == Decimal("46200")
    assert feed.rows[0].running_balance == feed.closing_balance
    assert feed.rows[0].display_label == "Loan to Ravi"


def test_card_expense_is_listed_in_primary_feed(ledger_service, ledger):
    feed = ledger_service.view_feed(ledger["primary"], search="shoes")
    assert [row.effect for row in feed.rows] == [Decimal("0")]


def test_wallet_feed_with_date_range(ledger_service, ledger):
    feed = ledger_service.view_feed(CASH_WALLET_ID, start=date(2024, 1, 3), end=date(2024, 1, 3))
    assert feed.view.wallet is WalletKind.CASH
    assert len(feed.rows) == 1
    assert feed.closing_balance == Decimal("1500")


def test_unknown_view(ledger_service, ledger):
    with pytest.raises(NotFoundError):
        ledger_service.view_feed("missing")


def test_reconcile(ledger_service, ledger, account_service):
    account_service.set_actual_balance(ledger["primary"], Decimal("44000"))
    account_service.set_wallet_actual_balance(WalletKind.CASH, Decimal("1400"))

    results = {r.account_id: r for r in ledger_service.reconcile()}

    assert results[ledger["primary"]].is_reconciled
    assert results[CASH_WALLET_ID].difference == Decimal("100")
    assert results[ledger["savings"]].difference is None
