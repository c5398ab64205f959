"""Domain layer for ledgerlens application.

Only the pure ledger engine is re-exported here. Services live in their own
modules (``ledgerlens.domain.account`` etc.) because they depend on the
database layer, which itself imports the domain entities.
"""

from ledgerlens.domain.balances import LedgerBalances, compute_balances
from ledgerlens.domain.classifier import Classification, TransactionKind, classify
from ledgerlens.domain.feed import FeedRow, ViewFeed, view_feed
from ledgerlens.domain.ordering import DEFAULT_SORT_POLICY, sort_chronologically
from ledgerlens.domain.reconciliation import balance_difference, reconcile
from ledgerlens.domain.views import ViewKind, ViewSpec, resolve_view

__all__ = [
    "LedgerBalances",
    "compute_balances",
    "Classification",
    "TransactionKind",
    "classify",
    "FeedRow",
    "ViewFeed",
    "view_feed",
    "DEFAULT_SORT_POLICY",
    "sort_chronologically",
    "balance_difference",
    "reconcile",
    "ViewKind",
    "ViewSpec",
    "resolve_view",
]
