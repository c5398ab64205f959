"""Tests for the transaction service."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from ledgerlens.domain.entities import (
    CASH_WALLET_ID,
    DIGITAL_WALLET_ID,
    PaymentMethod,
    TransactionType,
)
from ledgerlens.domain.errors import NotFoundError, ValidationError


class TestAddIncome:
    """Tests for recording income."""

    def test_income_into_bank(self, transaction_service, primary_setup):
        tx_id = transaction_service.add_income(
            primary_setup["primary"], Decimal("5000"), date(2024, 1, 1), description="Salary"
        )
        tx = transaction_service.get_transaction(tx_id)
        assert tx.type == TransactionType.INCOME
        assert tx.account_id == primary_setup["primary"]
        assert tx.date == datetime(2024, 1, 1)
        assert tx.category == "Uncategorized"

    def test_income_into_wallet(self, transaction_service):
        tx_id = transaction_service.add_income(CASH_WALLET_ID, Decimal("100"), date(2024, 1, 1))
        assert transaction_service.get_transaction(tx_id).account_id == CASH_WALLET_ID

    def test_income_to_card_is_rejected(self, transaction_service, primary_setup):
        with pytest.raises(ValidationError, match="card"):
            transaction_service.add_income(primary_setup["card"], Decimal("10"), date(2024, 1, 1))

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5"), Decimal("NaN")])
    def test_amount_must_be_positive(self, transaction_service, primary_setup, amount):
        with pytest.raises(ValidationError):
            transaction_service.add_income(primary_setup["primary"], amount, date(2024, 1, 1))

    def test_unknown_account(self, transaction_service):
        with pytest.raises(NotFoundError):
            transaction_service.add_income("missing", Decimal("10"), date(2024, 1, 1))

    def test_unknown_category(self, transaction_service, primary_setup):
        with pytest.raises(NotFoundError):
            transaction_service.add_income(
                primary_setup["primary"], Decimal("10"), date(2024, 1, 1), category="Nope"
            )

    def test_category_is_linked(self, transaction_service, category_service, primary_setup):
        category_id = category_service.create_category("Salary")
        tx_id = transaction_service.add_income(
            primary_setup["primary"], Decimal("10"), date(2024, 1, 1), category="Salary"
        )
        tx = transaction_service.get_transaction(tx_id)
        assert tx.category == "Salary"
        assert tx.category_id == category_id


class TestAddExpense:
    """Tests for recording expenses."""

    def test_online_expense(self, transaction_service, primary_setup):
        tx_id = transaction_service.add_expense(
            primary_setup["card"], Decimal("300"), date(2024, 1, 2)
        )
        tx = transaction_service.get_transaction(tx_id)
        assert tx.payment_method == PaymentMethod.ONLINE
        assert tx.account_id == primary_setup["card"]

    @pytest.mark.parametrize(
        "wallet_id,method",
        [(CASH_WALLET_ID, PaymentMethod.CASH), (DIGITAL_WALLET_ID, PaymentMethod.DIGITAL)],
    )
    def test_wallet_expense(self, transaction_service, wallet_id, method):
        tx_id = transaction_service.add_expense(wallet_id, Decimal("20"), date(2024, 1, 2))
        tx = transaction_service.get_transaction(tx_id)
        assert tx.payment_method == method
        assert tx.account_id is None

    def test_loan_virtual_account_is_rejected(self, transaction_service):
        with pytest.raises(ValidationError):
            transaction_service.add_expense(
                "loan-virtual-account-x", Decimal("20"), date(2024, 1, 2)
            )


class TestAddTransfer:
    """Tests for recording transfers."""

    def test_transfer_with_default_description(self, transaction_service, primary_setup):
        tx_id = transaction_service.add_transfer(
            primary_setup["primary"], CASH_WALLET_ID, Decimal("500"), date(2024, 1, 3)
        )
        tx = transaction_service.get_transaction(tx_id)
        assert tx.type == TransactionType.TRANSFER
        assert tx.description == "Transfer from Main Bank to Cash Wallet"
        assert tx.category == "Transfer"

    def test_same_account(self, transaction_service, primary_setup):
        with pytest.raises(ValidationError, match="same account"):
            transaction_service.add_transfer(
                primary_setup["primary"], primary_setup["primary"], Decimal("5"), date(2024, 1, 3)
            )

    def test_unknown_destination(self, transaction_service, primary_setup):
        with pytest.raises(NotFoundError):
            transaction_service.add_transfer(
                primary_setup["primary"], "missing", Decimal("5"), date(2024, 1, 3)
            )

    def test_list_newest_first(self, transaction_service, primary_setup):
        transaction_service.add_income(primary_setup["primary"], Decimal("1"), date(2024, 1, 1))
        transaction_service.add_income(primary_setup["primary"], Decimal("2"), date(2024, 1, 5))
        amounts = [tx.amount for tx in transaction_service.list_transactions()]
        assert amounts == [Decimal("2"), Decimal("1")]
