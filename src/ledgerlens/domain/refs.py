"""Tagged references for the account-id namespace.

Raw transaction fields hold plain strings that may name a real account, one
of the two wallets, or a loan virtual account. They are parsed once into an
``AccountRef`` so posting and membership logic can switch on ``kind``
instead of sniffing string prefixes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ledgerlens.domain.entities import (
    CASH_WALLET_ID,
    DIGITAL_WALLET_ID,
    LOAN_VIRTUAL_ACCOUNT_PREFIX,
    PaymentMethod,
    Transaction,
    TransactionType,
    WalletKind,
)


class RefKind(str, Enum):
    REAL = "real"
    CASH_WALLET = "cash_wallet"
    DIGITAL_WALLET = "digital_wallet"
    LOAN_VIRTUAL = "loan_virtual"


@dataclass(frozen=True)
class AccountRef:
    """One side of a posting."""

    kind: RefKind
    key: Optional[str] = None

    @classmethod
    def real(cls, account_id: str) -> "AccountRef":
        return cls(RefKind.REAL, account_id)

    @classmethod
    def wallet(cls, wallet: WalletKind) -> "AccountRef":
        if wallet is WalletKind.CASH:
            return cls(RefKind.CASH_WALLET)
        return cls(RefKind.DIGITAL_WALLET)

    @classmethod
    def loan_virtual(cls, person_key: Optional[str] = None) -> "AccountRef":
        return cls(RefKind.LOAN_VIRTUAL, person_key)

    @property
    def wallet_kind(self) -> Optional[WalletKind]:
        if self.kind is RefKind.CASH_WALLET:
            return WalletKind.CASH
        if self.kind is RefKind.DIGITAL_WALLET:
            return WalletKind.DIGITAL
        return None

    @property
    def is_wallet(self) -> bool:
        return self.wallet_kind is not None

    @property
    def person_name(self) -> Optional[str]:
        """Counterparty name of a loan virtual account, if it carries one."""
        if self.kind is not RefKind.LOAN_VIRTUAL or not self.key:
            return None
        return self.key.replace("-", " ")

    @property
    def raw_id(self) -> str:
        """Return the string id this reference was parsed from."""
        if self.kind is RefKind.REAL:
            return self.key or ""
        if self.kind is RefKind.CASH_WALLET:
            return CASH_WALLET_ID
        if self.kind is RefKind.DIGITAL_WALLET:
            return DIGITAL_WALLET_ID
        if self.key:
            return f"{LOAN_VIRTUAL_ACCOUNT_PREFIX}-{self.key}"
        return LOAN_VIRTUAL_ACCOUNT_PREFIX


def parse_account_ref(raw_id: Optional[str]) -> Optional[AccountRef]:
    """Parse a stored account id. Empty ids yield None."""
    if not raw_id:
        return None
    if raw_id == CASH_WALLET_ID:
        return AccountRef.wallet(WalletKind.CASH)
    if raw_id == DIGITAL_WALLET_ID:
        return AccountRef.wallet(WalletKind.DIGITAL)
    if raw_id == LOAN_VIRTUAL_ACCOUNT_PREFIX:
        return AccountRef.loan_virtual()
    if raw_id.startswith(LOAN_VIRTUAL_ACCOUNT_PREFIX + "-"):
        return AccountRef.loan_virtual(raw_id[len(LOAN_VIRTUAL_ACCOUNT_PREFIX) + 1 :])
    return AccountRef.real(raw_id)


def wallet_for_id(raw_id: Optional[str]) -> Optional[WalletKind]:
    ref = parse_account_ref(raw_id)
    return ref.wallet_kind if ref is not None else None


def expense_wallet(tx: Transaction) -> Optional[WalletKind]:
    """Return the wallet an expense was paid from, if any.

    The payment method wins; an online expense booked directly against a
    wallet id is treated as paid from that wallet.
    """
    if tx.type != TransactionType.EXPENSE:
        return None
    if tx.payment_method == PaymentMethod.CASH:
        return WalletKind.CASH
    if tx.payment_method == PaymentMethod.DIGITAL:
        return WalletKind.DIGITAL
    return wallet_for_id(tx.account_id)


def expense_account_id(tx: Transaction) -> Optional[str]:
    """Return the real account an online expense was posted to."""
    if tx.type != TransactionType.EXPENSE or expense_wallet(tx) is not None:
        return None
    ref = parse_account_ref(tx.account_id)
    if ref is None or ref.kind is not RefKind.REAL:
        return None
    return ref.key
