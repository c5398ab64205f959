"""Bill domain service: due dates, status and payments."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Union

from dateutil.relativedelta import relativedelta

from ledgerlens.database.base import Database
from ledgerlens.domain.entities import (
    Bill,
    BillType,
    PaymentMethod,
    Recurrence,
    TransactionType,
)
from ledgerlens.domain.errors import (
    NotFoundError,
    ValidationError,
    bill_not_found,
    non_positive_amount,
)
from ledgerlens.domain.transaction import as_datetime
from ledgerlens.domain.views import find_primary_account

logger = logging.getLogger(__name__)

BILLS_CATEGORY = "Bills"

_RECURRENCE_STEPS = {
    Recurrence.MONTHLY: relativedelta(months=1),
    Recurrence.QUARTERLY: relativedelta(months=3),
    Recurrence.YEARLY: relativedelta(years=1),
}


def next_due_date(due_date: datetime, recurrence: Recurrence) -> datetime:
    """Advance a due date by one recurrence period."""
    step = _RECURRENCE_STEPS.get(recurrence)
    if step is None:
        return due_date
    return due_date + step


def is_paid_for_cycle(bill: Bill) -> bool:
    """Whether the bill's current due date is settled.

    Paying a recurring bill moves its due date to the next cycle, so only a
    one-off bill can stay paid.
    """
    return bill.recurrence == Recurrence.NONE and bill.paid_on is not None


@dataclass(frozen=True)
class BillStatus:
    bill: Bill
    days_until_due: int
    is_paid: bool

    @property
    def is_overdue(self) -> bool:
        return self.days_until_due < 0 and not self.is_paid


def bill_status(bill: Bill, today: date) -> BillStatus:
    return BillStatus(
        bill=bill,
        days_until_due=(bill.due_date.date() - today).days,
        is_paid=is_paid_for_cycle(bill),
    )


class BillService:
    """Service for managing bills."""

    def __init__(self, db: Database):
        """Initialize bill service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_bill(
        self,
        title: str,
        amount: Decimal,
        due_date: datetime,
        recurrence: Recurrence = Recurrence.NONE,
        bill_type: BillType = BillType.BILL,
    ) -> str:
        """Create a bill.

        Raises:
            ValidationError: If title is empty or amount is not positive
        """
        if not title or not title.strip():
            raise ValidationError("Bill title is required")
        if amount is None or not amount.is_finite() or amount <= 0:
            raise ValidationError(non_positive_amount(amount))
        return self.db.create_bill(
            title=title.strip(),
            amount=amount,
            due_date=due_date,
            recurrence=recurrence,
            type=bill_type,
        )

    def list_statuses(self, today: date) -> list[BillStatus]:
        """List bills with their status, soonest due first."""
        statuses = [bill_status(bill, today) for bill in self.db.list_bills()]
        return sorted(statuses, key=lambda s: (s.bill.due_date, s.bill.title))

    def find_bill(self, bill: str) -> Bill:
        """Look up a bill by ID, then by title ignoring case.

        Raises:
            NotFoundError: If no bill matches
        """
        found = self.db.get_bill(bill)
        if found is not None:
            return found
        key = bill.strip().lower()
        for candidate in self.db.list_bills():
            if candidate.title.lower() == key:
                return candidate
        raise NotFoundError(bill_not_found(bill))

    def pay_bill(self, bill_id: str, when: Union[date, datetime]) -> str:
        """Pay a bill from the primary account.

        Writes an online expense "Bill Payment: {title}" in the Bills
        category, then moves a recurring bill to its next due date or marks
        a one-off bill paid.

        Args:
            bill_id: Bill ID
            when: When the payment was made

        Returns:
            Transaction ID of the payment

        Raises:
            NotFoundError: If the bill does not exist
            ValidationError: If there is no primary account, the bill is a
                special day, or a one-off bill is already paid
        """
        bill = self.db.get_bill(bill_id)
        if bill is None:
            raise NotFoundError(bill_not_found(bill_id))
        if bill.type != BillType.BILL:
            raise ValidationError(f"'{bill.title}' is a special day, not a bill")
        if is_paid_for_cycle(bill):
            raise ValidationError(f"Bill '{bill.title}' is already paid")
        primary = find_primary_account(self.db.list_accounts())
        if primary is None:
            raise ValidationError("Set a primary account to pay bills")

        paid_on = as_datetime(when)
        category = self.db.get_category_by_name(BILLS_CATEGORY)
        transaction_id = self.db.create_transaction(
            date=paid_on,
            amount=bill.amount,
            type=TransactionType.EXPENSE,
            description=f"Bill Payment: {bill.title}",
            category=BILLS_CATEGORY,
            category_id=category.id if category is not None else None,
            payment_method=PaymentMethod.ONLINE,
            account_id=primary.id,
        )
        self.db.update_bill_payment(
            bill_id=bill.id,
            paid_on=paid_on,
            due_date=next_due_date(bill.due_date, bill.recurrence),
        )
        logger.info("Paid bill %s from %s (transaction %s)", bill.id, primary.id, transaction_id)
        return transaction_id
