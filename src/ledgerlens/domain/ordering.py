"""Chronological ordering of transactions.

When several transactions share a timestamp they are placed by what kind of
money movement they are: outflows before inflows, loans given before loans
taken. The table is a policy; ``DEFAULT_SORT_POLICY`` is the one used
everywhere unless a caller passes its own.
"""

from types import MappingProxyType
from typing import Callable, Mapping, Sequence

from ledgerlens.domain.classifier import Classification, TransactionKind
from ledgerlens.domain.entities import Transaction

SortPolicy = Mapping[TransactionKind, int]

UNRANKED_PRIORITY = 99

DEFAULT_SORT_POLICY: SortPolicy = MappingProxyType(
    {
        TransactionKind.RETURN: 1,
        TransactionKind.TRANSFER: 2,
        TransactionKind.REPAYMENT_MADE: 3,
        TransactionKind.LOAN_GIVEN: 4,
        TransactionKind.EXPENSE: 5,
        TransactionKind.ISSUE: 6,
        TransactionKind.REPAYMENT_RECEIVED: 7,
        TransactionKind.LOAN_TAKEN: 8,
        TransactionKind.INCOME: 9,
    }
)


def sort_priority(kind: TransactionKind, policy: SortPolicy = DEFAULT_SORT_POLICY) -> int:
    return policy.get(kind, UNRANKED_PRIORITY)


def chronological_key(
    tx: Transaction, kind: TransactionKind, policy: SortPolicy = DEFAULT_SORT_POLICY
) -> tuple:
    """Ascending sort key: date, then priority, then amount, then id."""
    return (tx.date, sort_priority(kind, policy), tx.amount, tx.id)


def sort_chronologically(
    transactions: Sequence[Transaction],
    classify: Callable[[Transaction], Classification],
    descending: bool = False,
    policy: SortPolicy = DEFAULT_SORT_POLICY,
) -> list[Transaction]:
    """Total-order transactions.

    Descending order is the exact reverse of ascending order, so a running
    balance folded oldest-first lines up with a newest-first listing. Same-day
    rows are therefore listed in reversed priority too (income above a return),
    not date-descending with priority ascending.

    Args:
        transactions: Transactions with finite amounts
        classify: Function returning the classification of a transaction
        descending: If True, newest first
        policy: Same-day priority table

    Returns:
        New sorted list
    """
    ordered = sorted(
        transactions,
        key=lambda tx: chronological_key(tx, classify(tx).kind, policy),
    )
    if descending:
        ordered.reverse()
    return ordered
