"""Loans: derived totals and the loan entry service."""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ledgerlens.database.base import Database
from ledgerlens.domain.classifier import LOAN_CATEGORY, loan_entry_label
from ledgerlens.domain.entities import (
    LOAN_VIRTUAL_ACCOUNT_PREFIX,
    Loan,
    LoanEntryType,
    LoanType,
    PaymentMethod,
    TransactionType,
)
from ledgerlens.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    loan_not_found,
    non_positive_amount,
)
from ledgerlens.domain.refs import RefKind, parse_account_ref, wallet_for_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoanSummary:
    """Outstanding totals across all loans."""

    total_taken: Decimal
    total_given: Decimal
    taken: tuple[Loan, ...]
    given: tuple[Loan, ...]

    @property
    def net_position(self) -> Decimal:
        """Money owed to the user minus money the user owes."""
        return self.total_given - self.total_taken


def summarize_loans(loans: Sequence[Loan]) -> LoanSummary:
    """Split loans by direction, largest outstanding balance first."""

    def ordered(loan_type: LoanType) -> tuple[Loan, ...]:
        selected = [loan for loan in loans if loan.type == loan_type]
        return tuple(sorted(selected, key=lambda l: (-l.balance, l.person_name, l.id)))

    taken = ordered(LoanType.TAKEN)
    given = ordered(LoanType.GIVEN)
    return LoanSummary(
        total_taken=sum((loan.balance for loan in taken), Decimal("0")),
        total_given=sum((loan.balance for loan in given), Decimal("0")),
        taken=taken,
        given=given,
    )


def person_key(person_name: str) -> str:
    """Hyphenate a person name for use in an account id, e.g. "Ravi Kumar" -> "Ravi-Kumar"."""
    return "-".join(person_name.split())


def loan_virtual_account_id(person_name: str) -> str:
    """Counterparty side of a loan transfer, keyed by the person."""
    return f"{LOAN_VIRTUAL_ACCOUNT_PREFIX}-{person_key(person_name)}"


def money_leaves_account(loan_type: LoanType, entry_type: LoanEntryType) -> bool:
    """Whether the user's account pays out for this kind of entry."""
    return (loan_type, entry_type) in (
        (LoanType.GIVEN, LoanEntryType.LOAN),
        (LoanType.TAKEN, LoanEntryType.REPAYMENT),
    )


def transfer_ends(
    loan_type: LoanType, entry_type: LoanEntryType, account_id: str, person_name: str
) -> tuple[str, str]:
    """Return (from_account_id, to_account_id) of the linked transfer."""
    virtual = loan_virtual_account_id(person_name)
    if money_leaves_account(loan_type, entry_type):
        return account_id, virtual
    return virtual, account_id


class LoanService:
    """Service for recording and reading loans."""

    def __init__(self, db: Database):
        """Initialize loan service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_loans(self, loan_type: Optional[LoanType] = None) -> list[Loan]:
        loans = self.db.list_loans()
        if loan_type is not None:
            loans = [loan for loan in loans if loan.type == loan_type]
        return loans

    def get_loan(self, loan_id: str) -> Loan:
        loan = self.db.get_loan(loan_id)
        if loan is None:
            raise NotFoundError(loan_not_found(loan_id))
        return loan

    def summary(self) -> LoanSummary:
        return summarize_loans(self.db.list_loans())

    def record_entry(
        self,
        person_name: str,
        loan_type: LoanType,
        entry_type: LoanEntryType,
        amount: Decimal,
        account_id: str,
        date: datetime,
        description: Optional[str] = None,
    ) -> tuple[str, str]:
        """Record a loan or repayment and its linked transfer.

        The person's loan of this type is reused when it exists, otherwise a
        new one is created.

        Args:
            person_name: Counterparty name
            loan_type: Whether money was taken or given
            entry_type: Loan or repayment
            amount: Positive amount
            account_id: Account or wallet through which the money moved
            date: When the money moved
            description: Optional description; defaults to the loan label

        Returns:
            Tuple of (loan transaction ID, transaction ID)

        Raises:
            ValidationError: If the amount or names are invalid
            NotFoundError: If the account does not exist
        """
        person_name = (person_name or "").strip()
        if not person_name:
            raise ValidationError("Person name is required")
        if amount is None or not amount.is_finite() or amount <= 0:
            raise ValidationError(non_positive_amount(amount))

        ref = parse_account_ref(account_id)
        if ref is None or ref.kind is RefKind.LOAN_VIRTUAL:
            raise ValidationError("Loan entries need a real account or wallet")
        if ref.kind is RefKind.REAL and self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        loan = self.db.find_loan(person_name, loan_type)
        loan_id = loan.id if loan is not None else self.db.create_loan(person_name, loan_type)
        label = loan_entry_label(loan_type, entry_type, person_name)

        loan_transaction_id = self.db.add_loan_transaction(
            loan_id=loan_id,
            date=date,
            amount=amount,
            type=entry_type,
            account_id=account_id,
            description=description,
        )
        from_id, to_id = transfer_ends(loan_type, entry_type, account_id, person_name)
        wallet = wallet_for_id(account_id)
        transaction_id = self.db.create_transaction(
            date=date,
            amount=amount,
            type=TransactionType.TRANSFER,
            description=description or label,
            category=LOAN_CATEGORY,
            payment_method=PaymentMethod(wallet.value) if wallet else PaymentMethod.ONLINE,
            from_account_id=from_id,
            to_account_id=to_id,
            loan_transaction_id=loan_transaction_id,
        )
        logger.info("Recorded %s for loan %s (%s)", entry_type.value, loan_id, label)
        return loan_transaction_id, transaction_id
