"""Account domain service."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from ledgerlens.database.base import Database
from ledgerlens.domain.entities import Account as AccountEntity
from ledgerlens.domain.entities import AccountType, WalletKind
from ledgerlens.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    duplicate_account_name,
)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        name: str,
        account_type: AccountType = AccountType.BANK,
        is_primary: bool = False,
        limit: Optional[Decimal] = None,
        linked_primary_account_id: Optional[str] = None,
        purpose: Optional[str] = None,
    ) -> str:
        """Create a new account.

        Args:
            name: Account name
            account_type: Bank or card
            is_primary: Make this the primary account (bank only)
            limit: Credit limit (cards only)
            linked_primary_account_id: Primary account a card belongs with
            purpose: Optional free-text purpose

        Returns:
            Account ID

        Raises:
            ConflictError: If account name already exists
            ValidationError: If card-only fields are given for a bank account,
                or a primary account already exists
            NotFoundError: If the linked account does not exist
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name is required")

        for acc in self.db.list_accounts():
            if acc.name == name:
                raise ConflictError(duplicate_account_name(name))

        if account_type != AccountType.CARD and (
            limit is not None or linked_primary_account_id is not None
        ):
            raise ValidationError("Only card accounts have a limit or a linked account")
        if limit is not None and limit < 0:
            raise ValidationError(f"Credit limit cannot be negative, got {limit}")
        if linked_primary_account_id is not None:
            self.require_account(linked_primary_account_id)
        if is_primary:
            if account_type == AccountType.CARD:
                raise ValidationError(f"Card account '{name}' cannot be primary")
            current = self.get_primary_account()
            if current is not None:
                raise ValidationError(
                    f"Primary account already set to '{current.name}'; use set-primary to change it"
                )

        account_id = self.db.create_account(
            name=name,
            type=account_type,
            limit=limit,
            linked_primary_account_id=linked_primary_account_id,
            purpose=purpose,
        )
        if is_primary:
            self.db.set_primary_account(account_id)
        return account_id

    def get_account(self, account_id: str) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: str) -> AccountEntity:
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts in display order."""
        return self.db.list_accounts()

    def get_primary_account(self) -> Optional[AccountEntity]:
        for acc in self.db.list_accounts():
            if acc.is_primary:
                return acc
        return None

    def set_primary(self, account_id: str) -> None:
        """Make a bank account the primary account.

        Any previous primary account loses the flag, so at most one account
        is primary at any time.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If the account is a card
        """
        account = self.require_account(account_id)
        if account.is_card:
            raise ValidationError(f"Card account '{account.name}' cannot be primary")
        self.db.set_primary_account(account_id)

    def set_actual_balance(
        self, account_id: str, balance: Optional[Decimal], as_of: Optional[datetime] = None
    ) -> None:
        """Record the real-world balance of an account for reconciliation.

        Passing None clears the snapshot.
        """
        self.require_account(account_id)
        if balance is not None and not balance.is_finite():
            raise ValidationError(f"Actual balance must be a number, got {balance}")
        self.db.update_account_actual_balance(
            account_id, balance, as_of if balance is not None else None
        )

    def set_wallet_actual_balance(
        self, wallet: WalletKind, balance: Optional[Decimal], as_of: Optional[datetime] = None
    ) -> None:
        """Record the real-world balance of a wallet for reconciliation."""
        if balance is not None and not balance.is_finite():
            raise ValidationError(f"Actual balance must be a number, got {balance}")
        self.db.update_wallet_snapshot(wallet, balance, as_of if balance is not None else None)
