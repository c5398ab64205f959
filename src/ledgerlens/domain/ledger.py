"""Ledger service: balances, view feeds and reconciliation over stored data."""

import logging
from datetime import date
from typing import Optional

from ledgerlens.database.base import Database
from ledgerlens.domain.balances import LedgerBalances, compute_balances
from ledgerlens.domain.errors import NotFoundError, account_not_found
from ledgerlens.domain.feed import ViewFeed, view_feed
from ledgerlens.domain.ordering import DEFAULT_SORT_POLICY, SortPolicy
from ledgerlens.domain.reconciliation import ReconciliationResult, reconcile
from ledgerlens.domain.views import ViewKind, resolve_view

logger = logging.getLogger(__name__)


class LedgerService:
    """Read-side service over one database snapshot per call."""

    def __init__(self, db: Database, policy: SortPolicy = DEFAULT_SORT_POLICY):
        """Initialize ledger service.

        Args:
            db: Database instance
            policy: Same-day ordering policy for feeds
        """
        self.db = db
        self.policy = policy

    def balances(self) -> LedgerBalances:
        """Compute absolute balances of all accounts and both wallets."""
        balances = compute_balances(self.db.list_accounts(), self.db.list_transactions())
        if balances.skipped:
            logger.warning("%d transaction(s) left out of balances", balances.warning_count)
        return balances

    def view_feed(
        self,
        view_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        search: Optional[str] = None,
    ) -> ViewFeed:
        """Build the feed of one view.

        Args:
            view_id: Account id, wallet id or primary account id
            start: Optional first day shown (inclusive)
            end: Optional last day shown (inclusive)
            search: Optional text filter

        Returns:
            ViewFeed, newest first

        Raises:
            NotFoundError: If the id names no account or wallet
        """
        accounts = self.db.list_accounts()
        view = resolve_view(view_id, accounts)
        if view.kind is ViewKind.ACCOUNT and self.db.get_account(view_id) is None:
            raise NotFoundError(account_not_found(view_id))
        return view_feed(
            view,
            accounts,
            self.db.list_transactions(),
            self.db.list_loans(),
            start=start,
            end=end,
            search=search,
            policy=self.policy,
        )

    def reconcile(self) -> list[ReconciliationResult]:
        """Compare computed balances with recorded actual balances."""
        accounts = self.db.list_accounts()
        balances = compute_balances(accounts, self.db.list_transactions())
        return reconcile(accounts, balances, self.db.get_wallet_preferences())
