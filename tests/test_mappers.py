"""Tests for ORM to domain mappers."""

from datetime import datetime
from decimal import Decimal

from ledgerlens.database.mappers import (
    account_to_domain,
    subcategory_to_domain,
    transaction_to_domain,
    wallet_preferences_to_domain,
)
from ledgerlens.database.models import (
    Account as ORMAccount,
    SubCategory as ORMSubCategory,
    Transaction as ORMTransaction,
    WalletPreferences as ORMWalletPreferences,
)
from ledgerlens.domain.entities import (
    AccountType,
    BudgetFrequency,
    PaymentMethod,
    TransactionType,
    WalletPreferences,
)


def test_account_to_domain():
    orm = ORMAccount(
        id="a1",
        name="Amex",
        type="card",
        is_primary=False,
        sort_order=3,
        credit_limit=Decimal("1000.00"),
        linked_primary_account_id="a0",
    )
    account = account_to_domain(orm)
    assert account.type == AccountType.CARD
    assert account.order == 3
    assert account.limit == Decimal("1000.00")
    assert account.linked_primary_account_id == "a0"


def test_transaction_to_domain():
    orm = ORMTransaction(
        id="t1",
        date=datetime(2024, 1, 1),
        amount=Decimal("5.00"),
        type="expense",
        description=None,
        category="Food",
        payment_method="cash",
    )
    tx = transaction_to_domain(orm)
    assert tx.type == TransactionType.EXPENSE
    assert tx.payment_method == PaymentMethod.CASH
    assert tx.description == ""
    assert tx.account_id is None


def test_transaction_without_payment_method():
    orm = ORMTransaction(
        id="t2",
        date=datetime(2024, 1, 1),
        amount=Decimal("5.00"),
        type="transfer",
        from_account_id="a",
        to_account_id="b",
    )
    tx = transaction_to_domain(orm)
    assert tx.payment_method is None
    assert tx.category == ""


def test_subcategory_months_are_split():
    orm = ORMSubCategory(
        id="s1",
        name="Festival",
        amount=Decimal("20000.00"),
        frequency="occasional",
        selected_months="October,November",
        sort_order=0,
    )
    sub = subcategory_to_domain(orm)
    assert sub.frequency == BudgetFrequency.OCCASIONAL
    assert sub.selected_months == ("October", "November")


def test_subcategory_without_budget():
    orm = ORMSubCategory(id="s2", name="Misc", selected_months="", sort_order=1)
    sub = subcategory_to_domain(orm)
    assert sub.amount is None
    assert sub.frequency is None
    assert sub.selected_months == ()


def test_missing_wallet_preferences():
    assert wallet_preferences_to_domain(None) == WalletPreferences()


def test_wallet_preferences_partial():
    orm = ORMWalletPreferences(
        id=1,
        digital_balance=Decimal("12.00"),
        digital_date=datetime(2024, 3, 1),
        reconciliation_date=datetime(2024, 3, 1),
    )
    prefs = wallet_preferences_to_domain(orm)
    assert prefs.cash is None
    assert prefs.digital.balance == Decimal("12.00")
    assert prefs.digital.date == datetime(2024, 3, 1)
