"""Transaction domain service.

This is the write boundary: amounts, account references and transfer ends
are validated here so the balance engine can assume clean input.
"""

import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional, Union

from ledgerlens.database.base import Database
from ledgerlens.domain.entities import (
    Account,
    PaymentMethod,
    Transaction as TransactionEntity,
    TransactionType,
    WalletKind,
)
from ledgerlens.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    income_to_card,
    non_positive_amount,
    same_account_transfer,
)
from ledgerlens.domain.refs import RefKind, parse_account_ref

logger = logging.getLogger(__name__)

TRANSFER_CATEGORY = "Transfer"
UNCATEGORIZED = "Uncategorized"


def as_datetime(value: Union[date, datetime]) -> datetime:
    """Promote a plain date to midnight of that day."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time())


class TransactionService:
    """Service for recording transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate_amount(self, amount: Decimal) -> None:
        if amount is None or not amount.is_finite() or amount <= 0:
            raise ValidationError(non_positive_amount(amount))

    def _require_real_account(self, account_id: str) -> Account:
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def _account_label(self, account_id: str) -> str:
        ref = parse_account_ref(account_id)
        if ref is not None and ref.is_wallet:
            return ref.wallet_kind.label
        account = self.db.get_account(account_id)
        return account.name if account is not None else account_id

    def _resolve_category(
        self, category_name: Optional[str]
    ) -> tuple[str, Optional[str]]:
        """Return (category name, category id) for a category name."""
        if not category_name:
            return UNCATEGORIZED, None
        category = self.db.get_category_by_name(category_name)
        if category is None:
            raise NotFoundError(category_not_found(category_name))
        return category.name, category.id

    def add_income(
        self,
        account_id: str,
        amount: Decimal,
        when: Union[date, datetime],
        description: str = "",
        category: Optional[str] = None,
        subcategory: Optional[str] = None,
    ) -> str:
        """Record income into a bank account or wallet.

        Returns:
            Transaction ID

        Raises:
            ValidationError: If amount is not positive or the account is a card
            NotFoundError: If the account or category does not exist
        """
        self._validate_amount(amount)
        ref = parse_account_ref(account_id)
        if ref is None or ref.kind is RefKind.LOAN_VIRTUAL:
            raise ValidationError("Income needs a destination account")
        if ref.kind is RefKind.REAL:
            account = self._require_real_account(account_id)
            if account.is_card:
                raise ValidationError(income_to_card(account.name))
        category_name, category_id = self._resolve_category(category)
        return self.db.create_transaction(
            date=as_datetime(when),
            amount=amount,
            type=TransactionType.INCOME,
            description=description,
            category=category_name,
            subcategory=subcategory,
            category_id=category_id,
            account_id=account_id,
        )

    def add_expense(
        self,
        account_id: str,
        amount: Decimal,
        when: Union[date, datetime],
        description: str = "",
        category: Optional[str] = None,
        subcategory: Optional[str] = None,
    ) -> str:
        """Record an expense paid from an account, card or wallet.

        A wallet id sets the payment method to cash or digital; a real
        account is an online payment.

        Returns:
            Transaction ID

        Raises:
            ValidationError: If amount is not positive
            NotFoundError: If the account or category does not exist
        """
        self._validate_amount(amount)
        ref = parse_account_ref(account_id)
        if ref is None or ref.kind is RefKind.LOAN_VIRTUAL:
            raise ValidationError("Expense needs a paying account or wallet")

        if ref.is_wallet:
            payment_method = (
                PaymentMethod.CASH if ref.wallet_kind is WalletKind.CASH else PaymentMethod.DIGITAL
            )
            posted_account_id = None
        else:
            self._require_real_account(account_id)
            payment_method = PaymentMethod.ONLINE
            posted_account_id = account_id

        category_name, category_id = self._resolve_category(category)
        transaction_id = self.db.create_transaction(
            date=as_datetime(when),
            amount=amount,
            type=TransactionType.EXPENSE,
            description=description,
            category=category_name,
            subcategory=subcategory,
            category_id=category_id,
            payment_method=payment_method,
            account_id=posted_account_id,
        )
        return transaction_id

    def add_transfer(
        self,
        from_account_id: str,
        to_account_id: str,
        amount: Decimal,
        when: Union[date, datetime],
        description: Optional[str] = None,
    ) -> str:
        """Move money between accounts and wallets.

        Returns:
            Transaction ID

        Raises:
            ValidationError: If amount is not positive or both ends are the same
            NotFoundError: If either account does not exist
        """
        self._validate_amount(amount)
        if from_account_id == to_account_id:
            raise ValidationError(same_account_transfer(from_account_id))
        for account_id in (from_account_id, to_account_id):
            ref = parse_account_ref(account_id)
            if ref is None or ref.kind is RefKind.LOAN_VIRTUAL:
                raise ValidationError("Transfers need two accounts or wallets")
            if ref.kind is RefKind.REAL:
                self._require_real_account(account_id)

        if not description:
            description = (
                f"Transfer from {self._account_label(from_account_id)} "
                f"to {self._account_label(to_account_id)}"
            )
        return self.db.create_transaction(
            date=as_datetime(when),
            amount=amount,
            type=TransactionType.TRANSFER,
            description=description,
            category=TRANSFER_CATEGORY,
            from_account_id=from_account_id,
            to_account_id=to_account_id,
        )

    def get_transaction(self, transaction_id: str) -> Optional[TransactionEntity]:
        return self.db.get_transaction(transaction_id)

    def list_transactions(self) -> list[TransactionEntity]:
        return self.db.list_transactions()
