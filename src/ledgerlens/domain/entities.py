"""Domain model entities for ledgerlens.

These are pure data classes representing the ledger snapshot delivered by
the store. The balance engine never mutates them; it only derives new
read-only aggregates.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

CASH_WALLET_ID = "cash-wallet"
DIGITAL_WALLET_ID = "digital-wallet"
WALLET_IDS = (CASH_WALLET_ID, DIGITAL_WALLET_ID)
LOAN_VIRTUAL_ACCOUNT_PREFIX = "loan-virtual-account"


class AccountType(str, Enum):
    """Kind of real account."""

    BANK = "bank"
    CARD = "card"


class TransactionType(str, Enum):
    """Kind of ledger event."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class PaymentMethod(str, Enum):
    """How an expense was paid."""

    ONLINE = "online"
    CASH = "cash"
    DIGITAL = "digital"


class LoanType(str, Enum):
    """Direction of a person-level loan."""

    TAKEN = "taken"
    GIVEN = "given"


class LoanEntryType(str, Enum):
    """Kind of entry inside a loan."""

    LOAN = "loan"
    REPAYMENT = "repayment"


class CategoryType(str, Enum):
    EXPENSE = "expense"
    INCOME = "income"
    BANK_EXPENSE = "bank-expense"


class BudgetFrequency(str, Enum):
    MONTHLY = "monthly"
    OCCASIONAL = "occasional"


class BillType(str, Enum):
    BILL = "bill"
    SPECIAL_DAY = "special_day"


class Recurrence(str, Enum):
    NONE = "none"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class WalletKind(str, Enum):
    """The two wallet pseudo-accounts."""

    CASH = "cash"
    DIGITAL = "digital"

    @property
    def account_id(self) -> str:
        return CASH_WALLET_ID if self is WalletKind.CASH else DIGITAL_WALLET_ID

    @property
    def label(self) -> str:
        return "Cash Wallet" if self is WalletKind.CASH else "Digital Wallet"


@dataclass(frozen=True)
class Account:
    """Bank or card account domain entity."""

    id: str
    name: str
    type: AccountType = AccountType.BANK
    is_primary: bool = False
    order: int = 0
    limit: Optional[Decimal] = None
    actual_balance: Optional[Decimal] = None
    actual_balance_date: Optional[datetime] = None
    linked_primary_account_id: Optional[str] = None
    purpose: Optional[str] = None

    @property
    def is_card(self) -> bool:
        return self.type == AccountType.CARD

    def available_credit(self, balance: Decimal) -> Optional[Decimal]:
        """Return remaining credit for a card given its accumulated debt."""
        if not self.is_card or self.limit is None:
            return None
        return self.limit - balance


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``amount`` is always a non-negative magnitude; direction comes from
    ``type``, ``payment_method`` and the role of each referenced account.
    """

    id: str
    date: datetime
    amount: Decimal
    type: TransactionType
    description: str = ""
    category: str = ""
    subcategory: Optional[str] = None
    category_id: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    account_id: Optional[str] = None
    from_account_id: Optional[str] = None
    to_account_id: Optional[str] = None
    loan_transaction_id: Optional[str] = None


@dataclass(frozen=True)
class LoanTransaction:
    """Single loan or repayment entry within a Loan."""

    id: str
    date: datetime
    amount: Decimal
    type: LoanEntryType
    account_id: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Loan:
    """Person-level loan ledger. Balance is always derived."""

    id: str
    person_name: str
    type: LoanType
    transactions: tuple[LoanTransaction, ...] = ()

    @property
    def total_loan(self) -> Decimal:
        return sum(
            (t.amount for t in self.transactions if t.type == LoanEntryType.LOAN),
            Decimal("0"),
        )

    @property
    def total_repayment(self) -> Decimal:
        return sum(
            (t.amount for t in self.transactions if t.type == LoanEntryType.REPAYMENT),
            Decimal("0"),
        )

    @property
    def balance(self) -> Decimal:
        return self.total_loan - self.total_repayment

    def find_entry(self, loan_transaction_id: str) -> Optional[LoanTransaction]:
        for entry in self.transactions:
            if entry.id == loan_transaction_id:
                return entry
        return None


@dataclass(frozen=True)
class BalanceSnapshot:
    """User-entered real-world balance at a point in time."""

    balance: Decimal
    date: Optional[datetime] = None


@dataclass(frozen=True)
class WalletPreferences:
    """Per-user wallet reconciliation snapshots."""

    cash: Optional[BalanceSnapshot] = None
    digital: Optional[BalanceSnapshot] = None
    reconciliation_date: Optional[datetime] = None

    def snapshot_for(self, wallet: WalletKind) -> Optional[BalanceSnapshot]:
        return self.cash if wallet is WalletKind.CASH else self.digital


@dataclass(frozen=True)
class SubCategory:
    """Subcategory with an optional budget amount."""

    id: str
    name: str
    amount: Optional[Decimal] = None
    frequency: Optional[BudgetFrequency] = None
    selected_months: tuple[str, ...] = ()
    order: int = 0


@dataclass(frozen=True)
class Category:
    """Category domain entity with its subcategories."""

    id: str
    name: str
    type: CategoryType = CategoryType.EXPENSE
    order: int = 0
    subcategories: tuple[SubCategory, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Bill:
    """Recurring bill or special day reminder."""

    id: str
    title: str
    amount: Decimal
    due_date: datetime
    type: BillType = BillType.BILL
    recurrence: Recurrence = Recurrence.NONE
    paid_on: Optional[datetime] = None
