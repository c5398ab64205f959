"""Account views: which transactions belong to a view and how they move it.

A view is a real account, one of the wallets, or the primary ecosystem. The
primary ecosystem merges the primary bank account with both wallets and
shows associated cards alongside; its balance answers "how much liquid
money do I have", so card debt never moves it.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Sequence

from ledgerlens.domain.balances import ZERO
from ledgerlens.domain.entities import (
    WALLET_IDS,
    Account,
    AccountType,
    Transaction,
    TransactionType,
    WalletKind,
)
from ledgerlens.domain.refs import (
    expense_account_id,
    expense_wallet,
    wallet_for_id,
)


class ViewKind(str, Enum):
    ACCOUNT = "account"
    WALLET = "wallet"
    PRIMARY = "primary"


@dataclass(frozen=True)
class ViewSpec:
    """Selected account view."""

    kind: ViewKind
    account_id: Optional[str] = None
    wallet: Optional[WalletKind] = None

    @classmethod
    def for_account(cls, account_id: str) -> "ViewSpec":
        return cls(ViewKind.ACCOUNT, account_id=account_id)

    @classmethod
    def for_wallet(cls, wallet: WalletKind) -> "ViewSpec":
        return cls(ViewKind.WALLET, wallet=wallet)

    @classmethod
    def primary(cls, account_id: str) -> "ViewSpec":
        return cls(ViewKind.PRIMARY, account_id=account_id)

    @property
    def view_id(self) -> str:
        if self.kind is ViewKind.WALLET:
            return self.wallet.account_id
        return self.account_id


def find_primary_account(accounts: Sequence[Account]) -> Optional[Account]:
    """Return the primary account, or None when no account is primary."""
    primaries = sorted(
        (acc for acc in accounts if acc.is_primary), key=lambda a: (a.order, a.id)
    )
    return primaries[0] if primaries else None


def associated_card_ids(
    accounts: Sequence[Account], primary_account_id: str
) -> frozenset[str]:
    """Cards shown with the primary ecosystem.

    A card without an explicit link belongs to the primary ecosystem; a card
    linked to another account does not.
    """
    return frozenset(
        acc.id
        for acc in accounts
        if acc.type == AccountType.CARD
        and acc.linked_primary_account_id in (None, primary_account_id)
    )


def resolve_view(view_id: str, accounts: Sequence[Account]) -> ViewSpec:
    """Turn a selected id into a ViewSpec.

    Selecting the primary account's id selects the primary ecosystem. Use
    ``ViewSpec.for_account`` to look at the primary account on its own.
    """
    wallet = wallet_for_id(view_id)
    if wallet is not None:
        return ViewSpec.for_wallet(wallet)
    primary = find_primary_account(accounts)
    if primary is not None and primary.id == view_id:
        return ViewSpec.primary(view_id)
    return ViewSpec.for_account(view_id)


class ViewResolver:
    """Membership and signed effect of transactions for one view."""

    def __init__(self, view: ViewSpec, accounts: Sequence[Account]):
        """Initialize view resolver.

        Args:
            view: Selected view
            accounts: Known accounts of the user
        """
        self.view = view
        self._accounts = {acc.id: acc for acc in accounts}
        self._card_ids: frozenset[str] = frozenset()
        self._liquid_ids: frozenset[str] = frozenset()
        if view.kind is ViewKind.PRIMARY:
            self._card_ids = associated_card_ids(accounts, view.account_id)
            self._liquid_ids = frozenset((view.account_id, *WALLET_IDS))

    @property
    def is_card_view(self) -> bool:
        if self.view.kind is not ViewKind.ACCOUNT:
            return False
        account = self._accounts.get(self.view.account_id)
        return account is not None and account.is_card

    def contains(self, tx: Transaction) -> bool:
        """Whether the transaction is listed in this view."""
        kind = self.view.kind
        if tx.type == TransactionType.TRANSFER:
            ends = (tx.from_account_id, tx.to_account_id)
            if kind is ViewKind.PRIMARY:
                members = self._liquid_ids | self._card_ids
                return any(end in members for end in ends)
            return self.view.view_id in ends

        if kind is ViewKind.ACCOUNT:
            return tx.account_id == self.view.account_id
        if kind is ViewKind.WALLET:
            if tx.type == TransactionType.EXPENSE:
                return expense_wallet(tx) is self.view.wallet
            return tx.account_id == self.view.view_id
        # Primary ecosystem
        if tx.type == TransactionType.EXPENSE and expense_wallet(tx) is not None:
            return True
        return tx.account_id in self._liquid_ids or tx.account_id in self._card_ids

    def effect(self, tx: Transaction) -> Decimal:
        """Signed amount the transaction applies to this view's balance."""
        if not self.contains(tx):
            return ZERO
        if self.view.kind is ViewKind.PRIMARY:
            return self._primary_effect(tx)
        if self.is_card_view:
            return self._card_effect(tx)
        return self._standard_effect(tx)

    def _standard_effect(self, tx: Transaction) -> Decimal:
        view_id = self.view.view_id
        amount = tx.amount
        if tx.type == TransactionType.INCOME:
            return amount if tx.account_id == view_id else ZERO
        if tx.type == TransactionType.EXPENSE:
            if self.view.kind is ViewKind.WALLET:
                return -amount if expense_wallet(tx) is self.view.wallet else ZERO
            return -amount if expense_account_id(tx) == view_id else ZERO
        if tx.from_account_id == view_id:
            return -amount
        if tx.to_account_id == view_id:
            return amount
        return ZERO

    def _card_effect(self, tx: Transaction) -> Decimal:
        card_id = self.view.account_id
        amount = tx.amount
        if tx.type == TransactionType.EXPENSE:
            return amount if expense_account_id(tx) == card_id else ZERO
        if tx.type == TransactionType.TRANSFER:
            if tx.from_account_id == card_id:
                return amount
            if tx.to_account_id == card_id:
                return -amount
        # Income never posts to a card.
        return ZERO

    def _primary_effect(self, tx: Transaction) -> Decimal:
        amount = tx.amount
        if tx.type == TransactionType.INCOME:
            return amount if tx.account_id in self._liquid_ids else ZERO
        if tx.type == TransactionType.EXPENSE:
            if expense_wallet(tx) is not None:
                return -amount
            if expense_account_id(tx) == self.view.account_id:
                return -amount
            # Card expenses are debt, tracked on the card itself.
            return ZERO
        from_liquid = tx.from_account_id in self._liquid_ids
        to_liquid = tx.to_account_id in self._liquid_ids
        if from_liquid and to_liquid:
            return ZERO
        if from_liquid:
            return -amount
        if to_liquid:
            return amount
        return ZERO


def transactions_in_view(
    view: ViewSpec, transactions: Sequence[Transaction], accounts: Sequence[Account]
) -> list[Transaction]:
    resolver = ViewResolver(view, accounts)
    return [tx for tx in transactions if resolver.contains(tx)]


def effect_on_view(
    tx: Transaction, view: ViewSpec, accounts: Sequence[Account]
) -> Decimal:
    return ViewResolver(view, accounts).effect(tx)
