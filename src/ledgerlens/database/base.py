"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerlens.domain.entities import (
    Account,
    AccountType,
    Bill,
    BillType,
    BudgetFrequency,
    Category,
    CategoryType,
    Loan,
    LoanEntryType,
    LoanType,
    PaymentMethod,
    Recurrence,
    Transaction,
    TransactionType,
    WalletKind,
    WalletPreferences,
)


class Database(ABC):
    """Abstract database interface for ledgerlens.

    The read methods return full snapshots; the balance engine recomputes
    everything from them on every call.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        name: str,
        type: AccountType = AccountType.BANK,
        order: Optional[int] = None,
        limit: Optional[Decimal] = None,
        linked_primary_account_id: Optional[str] = None,
        purpose: Optional[str] = None,
    ) -> str:
        """Create a new account. Returns account ID.

        When ``order`` is None the account is placed after all others.
        """
        pass

    @abstractmethod
    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts in display order."""
        pass

    @abstractmethod
    def set_primary_account(self, account_id: str) -> None:
        """Make one account primary and clear the flag on all others."""
        pass

    @abstractmethod
    def update_account_actual_balance(
        self, account_id: str, balance: Optional[Decimal], as_of: Optional[datetime]
    ) -> None:
        """Store the user-entered actual balance of an account."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        date: datetime,
        amount: Decimal,
        type: TransactionType,
        description: str = "",
        category: str = "",
        subcategory: Optional[str] = None,
        category_id: Optional[str] = None,
        payment_method: Optional[PaymentMethod] = None,
        account_id: Optional[str] = None,
        from_account_id: Optional[str] = None,
        to_account_id: Optional[str] = None,
        loan_transaction_id: Optional[str] = None,
    ) -> str:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """List every transaction, newest first."""
        pass

    # Loan operations
    @abstractmethod
    def create_loan(self, person_name: str, type: LoanType) -> str:
        """Create an empty loan. Returns loan ID."""
        pass

    @abstractmethod
    def get_loan(self, loan_id: str) -> Optional[Loan]:
        """Get loan by ID, with its entries."""
        pass

    @abstractmethod
    def find_loan(self, person_name: str, type: LoanType) -> Optional[Loan]:
        """Get the loan of a person in one direction."""
        pass

    @abstractmethod
    def list_loans(self) -> list[Loan]:
        """List all loans with their entries."""
        pass

    @abstractmethod
    def add_loan_transaction(
        self,
        loan_id: str,
        date: datetime,
        amount: Decimal,
        type: LoanEntryType,
        account_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> str:
        """Append an entry to a loan. Returns loan transaction ID."""
        pass

    # Wallet preferences
    @abstractmethod
    def get_wallet_preferences(self) -> WalletPreferences:
        """Get wallet reconciliation snapshots."""
        pass

    @abstractmethod
    def update_wallet_snapshot(
        self, wallet: WalletKind, balance: Optional[Decimal], as_of: Optional[datetime]
    ) -> None:
        """Store the user-entered actual balance of a wallet."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self, name: str, type: CategoryType = CategoryType.EXPENSE, order: Optional[int] = None
    ) -> str:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def add_subcategory(
        self,
        category_id: str,
        name: str,
        amount: Optional[Decimal] = None,
        frequency: Optional[BudgetFrequency] = None,
        selected_months: tuple[str, ...] = (),
    ) -> str:
        """Add a subcategory to a category. Returns subcategory ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: str) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List categories in display order, with subcategories."""
        pass

    # Bill operations
    @abstractmethod
    def create_bill(
        self,
        title: str,
        amount: Decimal,
        due_date: datetime,
        recurrence: Recurrence = Recurrence.NONE,
        type: BillType = BillType.BILL,
    ) -> str:
        """Create a bill. Returns bill ID."""
        pass

    @abstractmethod
    def get_bill(self, bill_id: str) -> Optional[Bill]:
        """Get bill by ID."""
        pass

    @abstractmethod
    def list_bills(self) -> list[Bill]:
        """List all bills."""
        pass

    @abstractmethod
    def update_bill_payment(self, bill_id: str, paid_on: datetime, due_date: datetime) -> None:
        """Record a bill payment and its next due date."""
        pass
