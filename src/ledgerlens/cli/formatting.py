"""CLI output formatting helpers."""

from decimal import Decimal


def format_amount(amount: Decimal) -> str:
    """Format a money amount with grouping and two decimals."""
    return f"{amount:,.2f}"
