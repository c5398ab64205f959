"""Monthly report and budget-vs-actual domain service."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from dateutil.relativedelta import relativedelta

from ledgerlens.database.base import Database
from ledgerlens.domain.balances import is_finite_amount, with_decimal_amount
from ledgerlens.domain.entities import (
    BudgetFrequency,
    Category,
    Transaction,
    TransactionType,
)

ZERO = Decimal("0")
UNCATEGORIZED = "Uncategorized"
UNSPECIFIED = "Unspecified"


@dataclass(frozen=True)
class CategoryBreakdown:
    name: str
    total: Decimal
    subcategories: tuple[tuple[str, Decimal], ...] = ()


@dataclass(frozen=True)
class MonthlyReport:
    """Income and expense totals for one calendar month."""

    month: date
    total_income: Decimal
    total_expense: Decimal
    income_by_category: tuple[tuple[str, Decimal], ...]
    expense_by_category: tuple[CategoryBreakdown, ...]
    transaction_count: int

    @property
    def net_savings(self) -> Decimal:
        return self.total_income - self.total_expense

    @property
    def expense_ratio(self) -> Optional[Decimal]:
        """Share of income spent, as a percentage; None without income."""
        if self.total_income == 0:
            return None
        return self.total_expense / self.total_income * 100


@dataclass(frozen=True)
class BudgetLine:
    category_id: str
    name: str
    budget: Decimal
    spent: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.budget - self.spent

    @property
    def percent_used(self) -> Decimal:
        """Spent as a percentage of budget, capped at 100."""
        if self.budget <= 0:
            return ZERO
        return min(self.spent / self.budget * 100, Decimal("100"))


@dataclass(frozen=True)
class BudgetReport:
    month: date
    lines: tuple[BudgetLine, ...]

    @property
    def total_budget(self) -> Decimal:
        return sum((line.budget for line in self.lines), ZERO)

    @property
    def total_spent(self) -> Decimal:
        return sum((line.spent for line in self.lines), ZERO)

    @property
    def percent_used(self) -> Decimal:
        if self.total_budget == 0:
            return ZERO
        return self.total_spent / self.total_budget * 100


def month_bounds(month: date) -> tuple[datetime, datetime]:
    """Return [start, end) instants of the calendar month containing ``month``."""
    start = datetime(month.year, month.month, 1)
    return start, start + relativedelta(months=1)


def transactions_in_month(
    transactions: Sequence[Transaction], month: date
) -> list[Transaction]:
    start, end = month_bounds(month)
    return [
        with_decimal_amount(tx)
        for tx in transactions
        if start <= tx.date.replace(tzinfo=None) < end and is_finite_amount(tx.amount)
    ]


def _by_total_desc(totals: dict[str, Decimal]) -> tuple[tuple[str, Decimal], ...]:
    return tuple(sorted(totals.items(), key=lambda item: (-item[1], item[0])))


def monthly_report(transactions: Sequence[Transaction], month: date) -> MonthlyReport:
    """Summarize one month of income and expenses by category.

    Transfers are not counted. Categories are ordered by total, largest
    first; a missing category counts as "Uncategorized" and a missing
    subcategory as "Unspecified".
    """
    monthly = transactions_in_month(transactions, month)
    income: dict[str, Decimal] = {}
    expense: dict[str, Decimal] = {}
    expense_subs: dict[str, dict[str, Decimal]] = {}
    total_income = ZERO
    total_expense = ZERO
    count = 0

    for tx in monthly:
        category = tx.category or UNCATEGORIZED
        if tx.type == TransactionType.INCOME:
            total_income += tx.amount
            income[category] = income.get(category, ZERO) + tx.amount
            count += 1
        elif tx.type == TransactionType.EXPENSE:
            total_expense += tx.amount
            expense[category] = expense.get(category, ZERO) + tx.amount
            subs = expense_subs.setdefault(category, {})
            sub = tx.subcategory or UNSPECIFIED
            subs[sub] = subs.get(sub, ZERO) + tx.amount
            count += 1

    breakdown = tuple(
        CategoryBreakdown(
            name=name,
            total=total,
            subcategories=_by_total_desc(expense_subs[name]),
        )
        for name, total in _by_total_desc(expense)
    )
    return MonthlyReport(
        month=date(month.year, month.month, 1),
        total_income=total_income,
        total_expense=total_expense,
        income_by_category=_by_total_desc(income),
        expense_by_category=breakdown,
        transaction_count=count,
    )


def category_budget(category: Category, month: date) -> Decimal:
    """Budget of a category for a month.

    Monthly subcategories always count; occasional ones only in their
    selected months.
    """
    month_name = month.strftime("%B")
    total = ZERO
    for sub in category.subcategories:
        if sub.amount is None:
            continue
        if sub.frequency == BudgetFrequency.MONTHLY or (
            sub.frequency == BudgetFrequency.OCCASIONAL
            and month_name in sub.selected_months
        ):
            total += sub.amount
    return total


def budget_vs_actual(
    categories: Sequence[Category], transactions: Sequence[Transaction], month: date
) -> BudgetReport:
    """Compare each category's budget with what was spent in the month."""
    by_id = {cat.id: cat for cat in categories}
    by_name = {cat.name: cat for cat in categories}
    spent = {cat.id: ZERO for cat in categories}

    for tx in transactions_in_month(transactions, month):
        if tx.type != TransactionType.EXPENSE:
            continue
        category = by_id.get(tx.category_id) if tx.category_id else None
        if category is None:
            category = by_name.get(tx.category)
        if category is not None:
            spent[category.id] += tx.amount

    lines = []
    for cat in sorted(categories, key=lambda c: (c.order, c.name)):
        budget = category_budget(cat, month)
        if budget > 0 or spent[cat.id] > 0:
            lines.append(
                BudgetLine(category_id=cat.id, name=cat.name, budget=budget, spent=spent[cat.id])
            )
    return BudgetReport(month=date(month.year, month.month, 1), lines=tuple(lines))


class ReportService:
    """Service for building reports from the stored ledger."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def monthly_report(self, month: date) -> MonthlyReport:
        return monthly_report(self.db.list_transactions(), month)

    def budget_vs_actual(self, month: date) -> BudgetReport:
        return budget_vs_actual(
            self.db.list_categories(), self.db.list_transactions(), month
        )
