"""Per-view transaction feed with running balances."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence, Union

from ledgerlens.domain.balances import ZERO, partition_postable
from ledgerlens.domain.classifier import Classification, TransactionClassifier
from ledgerlens.domain.entities import Account, Loan, Transaction
from ledgerlens.domain.ordering import (
    DEFAULT_SORT_POLICY,
    SortPolicy,
    sort_chronologically,
)
from ledgerlens.domain.views import (
    ViewResolver,
    ViewSpec,
    find_primary_account,
    resolve_view,
)


@dataclass(frozen=True)
class FeedRow:
    transaction: Transaction
    classification: Classification
    effect: Decimal
    running_balance: Decimal

    @property
    def display_type(self) -> str:
        return self.classification.display_type

    @property
    def display_label(self) -> str:
        return self.classification.display_description

    @property
    def display_category(self) -> str:
        return self.classification.display_category


@dataclass(frozen=True)
class ViewFeed:
    """Newest-first rows of one view.

    ``closing_balance`` is the view balance after its whole history, even
    when ``rows`` is narrowed by date or search filters.
    """

    view: ViewSpec
    rows: tuple[FeedRow, ...]
    closing_balance: Decimal
    skipped: tuple[str, ...] = ()


def _matches_search(tx: Transaction, query: str) -> bool:
    needle = query.lower()
    haystacks = (tx.description, tx.category, tx.subcategory)
    return any(text and needle in text.lower() for text in haystacks)


def _within(tx: Transaction, start: Optional[date], end: Optional[date]) -> bool:
    day = tx.date.date()
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def view_feed(
    view_id: Union[str, ViewSpec],
    accounts: Sequence[Account],
    transactions: Sequence[Transaction],
    loans: Sequence[Loan] = (),
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
    search: Optional[str] = None,
    policy: SortPolicy = DEFAULT_SORT_POLICY,
) -> ViewFeed:
    """Build the ordered, annotated feed for a view.

    Args:
        view_id: Account id, wallet id, primary account id, or a ViewSpec
        accounts: Known accounts
        transactions: Full transaction history
        loans: Loans used to label loan-linked transfers
        start: Optional first day shown (inclusive)
        end: Optional last day shown (inclusive)
        search: Optional case-insensitive text matched against description,
            category and subcategory
        policy: Same-day ordering policy

    Returns:
        ViewFeed with rows newest first
    """
    view = view_id if isinstance(view_id, ViewSpec) else resolve_view(view_id, accounts)
    resolver = ViewResolver(view, accounts)
    primary = find_primary_account(accounts)
    classifier = TransactionClassifier(loans, primary.id if primary else None)

    members = [tx for tx in transactions if resolver.contains(tx)]
    postable, skipped = partition_postable(members)
    classifications = {tx.id: classifier.classify(tx) for tx in postable}
    ordered = sort_chronologically(
        postable, lambda tx: classifications[tx.id], policy=policy
    )

    running = ZERO
    rows: list[FeedRow] = []
    for tx in ordered:
        effect = resolver.effect(tx)
        running += effect
        rows.append(
            FeedRow(
                transaction=tx,
                classification=classifications[tx.id],
                effect=effect,
                running_balance=running,
            )
        )
    rows.reverse()

    visible = [
        row
        for row in rows
        if _within(row.transaction, start, end)
        and (not search or _matches_search(row.transaction, search))
    ]
    return ViewFeed(
        view=view,
        rows=tuple(visible),
        closing_balance=running,
        skipped=skipped,
    )
