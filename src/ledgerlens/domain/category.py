"""Category domain service."""

from decimal import Decimal
from typing import Optional, Sequence

from ledgerlens.database.base import Database
from ledgerlens.domain.entities import BudgetFrequency, Category, CategoryType
from ledgerlens.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_not_found,
    duplicate_category_name,
)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def normalize_months(months: Sequence[str]) -> tuple[str, ...]:
    """Turn month names or abbreviations into full month names.

    Raises:
        ValidationError: If a name is not a month
    """
    normalized = []
    for raw in months:
        key = raw.strip().lower()
        match = next((m for m in MONTH_NAMES if m.lower().startswith(key) and len(key) >= 3), None)
        if match is None:
            raise ValidationError(f"Unknown month '{raw}'")
        if match not in normalized:
            normalized.append(match)
    return tuple(sorted(normalized, key=MONTH_NAMES.index))


class CategoryService:
    """Service for managing categories and their budgets."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, name: str, category_type: CategoryType = CategoryType.EXPENSE) -> str:
        """Create a category.

        Raises:
            ConflictError: If a category with this name already exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")
        if self.db.get_category_by_name(name) is not None:
            raise ConflictError(duplicate_category_name(name))
        return self.db.create_category(name=name, type=category_type)

    def require_category(self, name: str) -> Category:
        category = self.db.get_category_by_name(name)
        if category is None:
            raise NotFoundError(category_not_found(name))
        return category

    def add_subcategory(
        self,
        category_name: str,
        name: str,
        budget: Optional[Decimal] = None,
        frequency: Optional[BudgetFrequency] = None,
        months: Sequence[str] = (),
    ) -> str:
        """Add a subcategory, optionally with a budget.

        An occasional budget applies only in the given months; a budget
        without a frequency is monthly.

        Raises:
            NotFoundError: If the category does not exist
            ValidationError: If the budget settings are inconsistent
        """
        category = self.require_category(category_name)
        if any(sub.name == name for sub in category.subcategories):
            raise ConflictError(f"Subcategory '{name}' already exists in '{category.name}'")
        if budget is not None and (not budget.is_finite() or budget <= 0):
            raise ValidationError(f"Budget must be a positive number, got {budget}")
        if budget is not None and frequency is None:
            frequency = BudgetFrequency.MONTHLY
        selected = normalize_months(months)
        if frequency == BudgetFrequency.OCCASIONAL and not selected:
            raise ValidationError("Occasional budgets need at least one month")
        if frequency != BudgetFrequency.OCCASIONAL and selected:
            raise ValidationError("Months only apply to occasional budgets")
        return self.db.add_subcategory(
            category_id=category.id,
            name=name,
            amount=budget,
            frequency=frequency,
            selected_months=selected,
        )

    def list_categories(self) -> list[Category]:
        return self.db.list_categories()
