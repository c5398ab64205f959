"""Balance accumulation over a ledger snapshot."""

import logging
import math
from dataclasses import dataclass, replace
from decimal import Decimal
from operator import attrgetter
from typing import Mapping, Optional, Sequence

from ledgerlens.domain.entities import (
    Account,
    Transaction,
    TransactionType,
    WalletKind,
)
from ledgerlens.domain.refs import (
    AccountRef,
    RefKind,
    expense_account_id,
    expense_wallet,
    parse_account_ref,
    wallet_for_id,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class WalletBalances:
    cash: Decimal = ZERO
    digital: Decimal = ZERO

    def for_wallet(self, wallet: WalletKind) -> Decimal:
        return self.cash if wallet is WalletKind.CASH else self.digital


@dataclass(frozen=True)
class LedgerBalances:
    """Absolute balances of every known account and both wallets.

    Card balances are accumulated debt (positive means owed). ``skipped``
    lists ids of transactions left out because of bad data.
    """

    per_account: Mapping[str, Decimal]
    cash: Decimal = ZERO
    digital: Decimal = ZERO
    skipped: tuple[str, ...] = ()

    @property
    def warning_count(self) -> int:
        return len(self.skipped)

    @property
    def wallets(self) -> WalletBalances:
        return WalletBalances(cash=self.cash, digital=self.digital)

    def get(self, account_id: str) -> Optional[Decimal]:
        """Balance for a real account id or a wallet id."""
        wallet = wallet_for_id(account_id)
        if wallet is not None:
            return self.wallets.for_wallet(wallet)
        return self.per_account.get(account_id)


def to_decimal(amount) -> Decimal:
    """Exact Decimal for a stored amount; floats go through their shortest repr."""
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        return Decimal(str(amount))
    return Decimal(amount)


def with_decimal_amount(tx: Transaction) -> Transaction:
    if isinstance(tx.amount, Decimal):
        return tx
    return replace(tx, amount=to_decimal(tx.amount))


def is_finite_amount(amount) -> bool:
    if amount is None:
        return False
    if isinstance(amount, Decimal):
        return amount.is_finite()
    try:
        return math.isfinite(amount)
    except TypeError:
        return False


def is_self_transfer(tx: Transaction) -> bool:
    return (
        tx.type == TransactionType.TRANSFER
        and tx.from_account_id is not None
        and tx.from_account_id == tx.to_account_id
    )


def is_postable(tx: Transaction) -> bool:
    """Whether a transaction can take part in balance folding."""
    return is_finite_amount(tx.amount) and not is_self_transfer(tx)


def partition_postable(
    transactions: Sequence[Transaction],
) -> tuple[list[Transaction], tuple[str, ...]]:
    """Split transactions into postable ones and ids of skipped ones.

    Postable transactions come back with Decimal amounts.
    """
    postable: list[Transaction] = []
    skipped: list[str] = []
    for tx in transactions:
        if is_postable(tx):
            postable.append(with_decimal_amount(tx))
        else:
            skipped.append(tx.id)
    if skipped:
        logger.warning(
            "Skipped %d transaction(s) with invalid amount or self-transfer: %s",
            len(skipped),
            ", ".join(skipped),
        )
    return postable, tuple(skipped)


def _transfer_leg(
    ref: Optional[AccountRef],
    amount: Decimal,
    accounts_by_id: Mapping[str, Account],
    outgoing: bool,
) -> list[tuple[AccountRef, Decimal]]:
    if ref is None or ref.kind is RefKind.LOAN_VIRTUAL:
        return []
    if ref.is_wallet:
        return [(ref, -amount if outgoing else amount)]
    account = accounts_by_id.get(ref.key)
    if account is None:
        return []
    # Cards carry debt: money leaving a card raises it, money arriving pays it down.
    if account.is_card:
        return [(ref, amount if outgoing else -amount)]
    return [(ref, -amount if outgoing else amount)]


def absolute_postings(
    tx: Transaction, accounts_by_id: Mapping[str, Account]
) -> list[tuple[AccountRef, Decimal]]:
    """Signed postings of one transaction onto known accounts and wallets."""
    amount = tx.amount

    if tx.type == TransactionType.INCOME:
        ref = parse_account_ref(tx.account_id)
        if ref is None or ref.kind is RefKind.LOAN_VIRTUAL:
            return []
        if ref.is_wallet:
            return [(ref, amount)]
        account = accounts_by_id.get(ref.key)
        if account is None or account.is_card:
            return []
        return [(ref, amount)]

    if tx.type == TransactionType.EXPENSE:
        wallet = expense_wallet(tx)
        if wallet is not None:
            return [(AccountRef.wallet(wallet), -amount)]
        account_id = expense_account_id(tx)
        account = accounts_by_id.get(account_id) if account_id else None
        if account is None:
            return []
        return [(AccountRef.real(account.id), amount if account.is_card else -amount)]

    if tx.type == TransactionType.TRANSFER:
        return _transfer_leg(
            parse_account_ref(tx.from_account_id), amount, accounts_by_id, outgoing=True
        ) + _transfer_leg(
            parse_account_ref(tx.to_account_id), amount, accounts_by_id, outgoing=False
        )

    return []


def compute_balances(
    accounts: Sequence[Account], transactions: Sequence[Transaction]
) -> LedgerBalances:
    """Fold the whole transaction history into absolute balances.

    Args:
        accounts: Known accounts; every one starts at zero
        transactions: Full transaction history, in any order

    Returns:
        LedgerBalances for all accounts and both wallets
    """
    accounts_by_id = {acc.id: acc for acc in accounts}
    per_account = {acc.id: ZERO for acc in accounts}
    wallets = {WalletKind.CASH: ZERO, WalletKind.DIGITAL: ZERO}

    postable, skipped = partition_postable(transactions)
    for tx in sorted(postable, key=attrgetter("date")):
        for ref, delta in absolute_postings(tx, accounts_by_id):
            if ref.is_wallet:
                wallets[ref.wallet_kind] += delta
            else:
                per_account[ref.key] += delta

    return LedgerBalances(
        per_account=per_account,
        cash=wallets[WalletKind.CASH],
        digital=wallets[WalletKind.DIGITAL],
        skipped=skipped,
    )


def compute_absolute_balances(
    accounts: Sequence[Account], transactions: Sequence[Transaction]
) -> dict[str, Decimal]:
    return dict(compute_balances(accounts, transactions).per_account)


def compute_wallet_balances(transactions: Sequence[Transaction]) -> WalletBalances:
    return compute_balances((), transactions).wallets
