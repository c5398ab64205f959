"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic: enum columns are stored as their
string values and turned back into domain enums here.
"""

from ledgerlens.domain import entities as domain
from ledgerlens.database.models import (
    Account as ORMAccount,
    Bill as ORMBill,
    Category as ORMCategory,
    Loan as ORMLoan,
    LoanTransaction as ORMLoanTransaction,
    SubCategory as ORMSubCategory,
    Transaction as ORMTransaction,
    WalletPreferences as ORMWalletPreferences,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        is_primary=orm_account.is_primary,
        order=orm_account.sort_order,
        limit=orm_account.credit_limit,
        actual_balance=orm_account.actual_balance,
        actual_balance_date=orm_account.actual_balance_date,
        linked_primary_account_id=orm_account.linked_primary_account_id,
        purpose=orm_account.purpose,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    payment_method = orm_transaction.payment_method
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        amount=orm_transaction.amount,
        type=domain.TransactionType(orm_transaction.type),
        description=orm_transaction.description or "",
        category=orm_transaction.category or "",
        subcategory=orm_transaction.subcategory,
        category_id=orm_transaction.category_id,
        payment_method=domain.PaymentMethod(payment_method) if payment_method else None,
        account_id=orm_transaction.account_id,
        from_account_id=orm_transaction.from_account_id,
        to_account_id=orm_transaction.to_account_id,
        loan_transaction_id=orm_transaction.loan_transaction_id,
    )


def loan_transaction_to_domain(orm_entry: ORMLoanTransaction) -> domain.LoanTransaction:
    """Convert SQLAlchemy LoanTransaction model to domain LoanTransaction entity."""
    return domain.LoanTransaction(
        id=orm_entry.id,
        date=orm_entry.date,
        amount=orm_entry.amount,
        type=domain.LoanEntryType(orm_entry.type),
        account_id=orm_entry.account_id,
        description=orm_entry.description,
    )


def loan_to_domain(orm_loan: ORMLoan) -> domain.Loan:
    """Convert SQLAlchemy Loan model to domain Loan entity."""
    return domain.Loan(
        id=orm_loan.id,
        person_name=orm_loan.person_name,
        type=domain.LoanType(orm_loan.type),
        transactions=tuple(loan_transaction_to_domain(e) for e in orm_loan.entries),
    )


def wallet_preferences_to_domain(
    orm_prefs: ORMWalletPreferences | None,
) -> domain.WalletPreferences:
    """Convert the wallet preferences row (possibly missing) to a domain entity."""
    if orm_prefs is None:
        return domain.WalletPreferences()
    cash = None
    if orm_prefs.cash_balance is not None:
        cash = domain.BalanceSnapshot(orm_prefs.cash_balance, orm_prefs.cash_date)
    digital = None
    if orm_prefs.digital_balance is not None:
        digital = domain.BalanceSnapshot(orm_prefs.digital_balance, orm_prefs.digital_date)
    return domain.WalletPreferences(
        cash=cash,
        digital=digital,
        reconciliation_date=orm_prefs.reconciliation_date,
    )


def subcategory_to_domain(orm_sub: ORMSubCategory) -> domain.SubCategory:
    """Convert SQLAlchemy SubCategory model to domain SubCategory entity."""
    months = tuple(m for m in (orm_sub.selected_months or "").split(",") if m)
    return domain.SubCategory(
        id=orm_sub.id,
        name=orm_sub.name,
        amount=orm_sub.amount,
        frequency=domain.BudgetFrequency(orm_sub.frequency) if orm_sub.frequency else None,
        selected_months=months,
        order=orm_sub.sort_order,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        type=domain.CategoryType(orm_category.type),
        order=orm_category.sort_order,
        subcategories=tuple(subcategory_to_domain(s) for s in orm_category.subcategories),
    )


def bill_to_domain(orm_bill: ORMBill) -> domain.Bill:
    """Convert SQLAlchemy Bill model to domain Bill entity."""
    return domain.Bill(
        id=orm_bill.id,
        title=orm_bill.title,
        amount=orm_bill.amount,
        due_date=orm_bill.due_date,
        type=domain.BillType(orm_bill.type),
        recurrence=domain.Recurrence(orm_bill.recurrence),
        paid_on=orm_bill.paid_on,
    )
