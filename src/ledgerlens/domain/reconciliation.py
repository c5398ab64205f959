"""Reconciliation of computed balances against user-entered actuals."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence, Union

from ledgerlens.domain.balances import LedgerBalances, to_decimal
from ledgerlens.domain.entities import Account, WalletKind, WalletPreferences

RECONCILIATION_TOLERANCE = Decimal("0.01")

Number = Union[Decimal, int, float]


def balance_difference(computed: Number, actual: Optional[Number]) -> Optional[Decimal]:
    """Return ``computed - actual``, or None when no actual is recorded.

    Differences below one cent are reported as exactly zero. A positive
    difference means the ledger shows more than the real-world figure.
    """
    if actual is None:
        return None
    delta = to_decimal(computed) - to_decimal(actual)
    if abs(delta) < RECONCILIATION_TOLERANCE:
        return Decimal("0")
    return delta


@dataclass(frozen=True)
class ReconciliationResult:
    account_id: str
    label: str
    computed: Decimal
    actual: Optional[Decimal]
    actual_date: Optional[datetime]
    difference: Optional[Decimal]

    @property
    def is_reconciled(self) -> bool:
        return self.difference is not None and self.difference == 0


def reconcile(
    accounts: Sequence[Account],
    balances: LedgerBalances,
    preferences: Optional[WalletPreferences] = None,
) -> list[ReconciliationResult]:
    """Compare every account and wallet with its recorded actual balance.

    Accounts come first in display order, then the cash and digital wallets.
    Entries without a recorded actual have ``difference`` None.
    """
    results: list[ReconciliationResult] = []
    for account in sorted(accounts, key=lambda a: (a.order, a.id)):
        computed = balances.per_account.get(account.id, Decimal("0"))
        results.append(
            ReconciliationResult(
                account_id=account.id,
                label=account.name,
                computed=computed,
                actual=account.actual_balance,
                actual_date=account.actual_balance_date,
                difference=balance_difference(computed, account.actual_balance),
            )
        )

    preferences = preferences or WalletPreferences()
    for wallet in (WalletKind.CASH, WalletKind.DIGITAL):
        snapshot = preferences.snapshot_for(wallet)
        computed = balances.wallets.for_wallet(wallet)
        actual = snapshot.balance if snapshot is not None else None
        results.append(
            ReconciliationResult(
                account_id=wallet.account_id,
                label=wallet.label,
                computed=computed,
                actual=actual,
                actual_date=snapshot.date if snapshot is not None else None,
                difference=balance_difference(computed, actual),
            )
        )
    return results
