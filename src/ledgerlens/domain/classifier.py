"""Display classification of transactions.

Loan-linked transfers get person-level labels, transfers between the
primary account and a wallet become issue/return, everything else passes
through. The resulting ``kind`` also drives same-day ordering.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from ledgerlens.domain.entities import (
    Loan,
    LoanEntryType,
    LoanTransaction,
    LoanType,
    Transaction,
    TransactionType,
)
from ledgerlens.domain.refs import wallet_for_id

LOAN_CATEGORY = "Loan"


class TransactionKind(str, Enum):
    RETURN = "return"
    TRANSFER = "transfer"
    REPAYMENT_MADE = "repayment_made"
    LOAN_GIVEN = "loan_given"
    EXPENSE = "expense"
    ISSUE = "issue"
    REPAYMENT_RECEIVED = "repayment_received"
    LOAN_TAKEN = "loan_taken"
    INCOME = "income"
    OTHER = "other"


@dataclass(frozen=True)
class Classification:
    is_loan: bool
    display_type: str
    display_category: str
    display_description: str
    kind: TransactionKind


_LOAN_LABELS = {
    (LoanType.TAKEN, LoanEntryType.LOAN): ("Loan from {person}", TransactionKind.LOAN_TAKEN),
    (LoanType.TAKEN, LoanEntryType.REPAYMENT): ("Repayment to {person}", TransactionKind.REPAYMENT_MADE),
    (LoanType.GIVEN, LoanEntryType.LOAN): ("Loan to {person}", TransactionKind.LOAN_GIVEN),
    (LoanType.GIVEN, LoanEntryType.REPAYMENT): ("Repayment from {person}", TransactionKind.REPAYMENT_RECEIVED),
}

_PLAIN_KINDS = {
    TransactionType.INCOME: TransactionKind.INCOME,
    TransactionType.EXPENSE: TransactionKind.EXPENSE,
    TransactionType.TRANSFER: TransactionKind.TRANSFER,
}


def loan_entry_label(loan_type: LoanType, entry_type: LoanEntryType, person_name: str) -> str:
    """Return the person-level label for a loan entry, e.g. 'Loan to Ravi'."""
    template, _ = _LOAN_LABELS[(loan_type, entry_type)]
    return template.format(person=person_name)


class TransactionClassifier:
    """Classifier bound to one loans snapshot and primary account."""

    def __init__(self, loans: Sequence[Loan], primary_account_id: Optional[str]):
        self.primary_account_id = primary_account_id
        self._entries: dict[str, tuple[Loan, LoanTransaction]] = {}
        for loan in loans:
            for entry in loan.transactions:
                self._entries.setdefault(entry.id, (loan, entry))

    def find_loan_entry(
        self, loan_transaction_id: Optional[str]
    ) -> Optional[tuple[Loan, LoanTransaction]]:
        if not loan_transaction_id:
            return None
        return self._entries.get(loan_transaction_id)

    def classify(self, tx: Transaction) -> Classification:
        if tx.type == TransactionType.TRANSFER:
            found = self.find_loan_entry(tx.loan_transaction_id)
            if found is not None:
                loan, entry = found
                template, kind = _LOAN_LABELS[(loan.type, entry.type)]
                return Classification(
                    is_loan=True,
                    display_type=entry.type.value,
                    display_category=LOAN_CATEGORY,
                    display_description=template.format(person=loan.person_name),
                    kind=kind,
                )

            kind = self._wallet_movement(tx)
            if kind is not None:
                return Classification(
                    is_loan=False,
                    display_type=kind.value,
                    display_category=tx.category,
                    display_description=tx.description,
                    kind=kind,
                )

        kind = _PLAIN_KINDS.get(tx.type, TransactionKind.OTHER)
        return Classification(
            is_loan=False,
            display_type=tx.type.value,
            display_category=tx.category,
            display_description=tx.description,
            kind=kind,
        )

    def _wallet_movement(self, tx: Transaction) -> Optional[TransactionKind]:
        primary = self.primary_account_id
        if primary is None:
            return None
        if tx.from_account_id == primary and wallet_for_id(tx.to_account_id) is not None:
            return TransactionKind.ISSUE
        if tx.to_account_id == primary and wallet_for_id(tx.from_account_id) is not None:
            return TransactionKind.RETURN
        return None


def classify(
    tx: Transaction, loans: Sequence[Loan], primary_account_id: Optional[str]
) -> Classification:
    """Classify a single transaction for display."""
    return TransactionClassifier(loans, primary_account_id).classify(tx)
