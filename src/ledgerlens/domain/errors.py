"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(ValidationError):
    """Domain conflict, such as uniqueness violations."""


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def loan_not_found(loan_id: str) -> str:
    """Return message for missing loan."""
    return f"Loan {loan_id} not found"


def category_not_found(category: str) -> str:
    """Return message for missing category by ID or name."""
    return f"Category '{category}' not found"


def duplicate_account_name(name: str) -> str:
    return f"Account with name '{name}' already exists"


def duplicate_category_name(name: str) -> str:
    return f"Category with name '{name}' already exists"


def non_positive_amount(amount) -> str:
    return f"Amount must be a positive number, got {amount}"


def same_account_transfer(account_id: str) -> str:
    """Return message for a transfer whose ends are the same account."""
    return f"Cannot transfer funds to and from the same account ({account_id})"


def income_to_card(account_name: str) -> str:
    return f"Income cannot be posted to card account '{account_name}'"


def bill_not_found(bill: str) -> str:
    """Return message for missing bill by ID or title."""
    return f"Bill '{bill}' not found"
