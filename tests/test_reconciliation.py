"""Tests for reconciliation against actual balances."""

from datetime import datetime
from decimal import Decimal

import pytest

from ledgerlens.domain.balances import compute_balances
from ledgerlens.domain.entities import (
    CASH_WALLET_ID,
    DIGITAL_WALLET_ID,
    BalanceSnapshot,
    WalletPreferences,
)
from ledgerlens.domain.reconciliation import balance_difference, reconcile


class TestBalanceDifference:
    """Tests for the signed difference with one-cent tolerance."""

    def test_no_actual(self):
        assert balance_difference(Decimal("10"), None) is None

    @pytest.mark.parametrize(
        "computed,actual",
        [
            (100.004, 100.0),
            (Decimal("100.004"), Decimal("100")),
            (Decimal("99.995"), Decimal("100")),
            (Decimal("50"), Decimal("50")),
        ],
    )
    def test_within_a_cent_is_zero(self, computed, actual):
        assert balance_difference(computed, actual) == Decimal("0")

    def test_float_difference(self):
        assert balance_difference(100.02, 100.0) == Decimal("0.02")

    def test_sign(self):
        assert balance_difference(Decimal("90"), Decimal("100")) == Decimal("-10")
        assert balance_difference(Decimal("110"), Decimal("100")) == Decimal("10")


class TestReconcile:
    """Tests for reconciling every account and wallet."""

    def test_accounts_then_wallets(self, make_account, make_tx):
        accounts = [
            make_account("b", order=1, name="Second"),
            make_account(
                "a",
                order=0,
                name="First",
                actual_balance=Decimal("500.005"),
                actual_balance_date=datetime(2024, 2, 1),
            ),
        ]
        balances = compute_balances(
            accounts,
            [make_tx.income("a", 500), make_tx.transfer("a", CASH_WALLET_ID, 20)],
        )
        preferences = WalletPreferences(
            cash=BalanceSnapshot(Decimal("15"), datetime(2024, 2, 1)),
        )

        results = reconcile(accounts, balances, preferences)

        assert [r.account_id for r in results] == ["a", "b", CASH_WALLET_ID, DIGITAL_WALLET_ID]
        first, second, cash, digital = results
        assert first.label == "First"
        assert first.computed == Decimal("480")
        assert first.difference == Decimal("-20.005")
        assert second.difference is None
        assert not second.is_reconciled
        assert cash.difference == Decimal("5")
        assert cash.actual_date == datetime(2024, 2, 1)
        assert digital.actual is None

    def test_reconciled_entry(self, make_account):
        accounts = [make_account("a", actual_balance=Decimal("0.004"))]
        results = reconcile(accounts, compute_balances(accounts, []))
        assert results[0].is_reconciled
