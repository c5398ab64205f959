"""Add transaction commands."""

import click
from ledgerlens.cli.account_resolution import resolve_account_or_exit
from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.cli.formatting import format_amount
from ledgerlens.domain.account import AccountService
from ledgerlens.domain.transaction import TransactionService
from ledgerlens.utils.amount_parser import parse_amount
from ledgerlens.utils.date_parser import parse_datetime

DATE_HELP = "Transaction date (YYYY-MM-DD, optional time, or relative like 'today')"


def _parse_inputs(ctx, amount: str, when: str):
    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)
    try:
        txn_date = parse_datetime(when)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)
    return txn_amount, txn_date


@click.group("add")
def add_group():
    """Record income, expenses and transfers."""
    pass


@add_group.command("income")
@click.option("--account", required=True, help="Account name, ID, or 'cash'/'digital'")
@click.option("--amount", required=True, help="Amount received (e.g., 5000 or ₹5,000)")
@click.option("--date", "when", default="today", show_default=True, help=DATE_HELP)
@click.option("--description", default="", help="Transaction description")
@click.option("--category", help="Category name")
@click.option("--subcategory", help="Subcategory name")
@click.pass_context
def add_income(
    ctx,
    account: str,
    amount: str,
    when: str,
    description: str,
    category: str | None,
    subcategory: str | None,
):
    """Record income into an account or wallet.

    Examples:
        ledgerlens add income --account "HDFC Savings" --amount 50000 --category Salary
        ledgerlens add income --account cash --amount 500 --description "Gift"
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    txn_amount, txn_date = _parse_inputs(ctx, amount, when)

    try:
        transaction_id = TransactionService(db).add_income(
            account_id=account_id,
            amount=txn_amount,
            when=txn_date,
            description=description,
            category=category,
            subcategory=subcategory,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Income: {format_amount(txn_amount)} on {txn_date:%Y-%m-%d}")


@add_group.command("expense")
@click.option("--account", required=True, help="Account or card name, ID, or 'cash'/'digital'")
@click.option("--amount", required=True, help="Amount spent")
@click.option("--date", "when", default="today", show_default=True, help=DATE_HELP)
@click.option("--description", default="", help="Transaction description")
@click.option("--category", help="Category name")
@click.option("--subcategory", help="Subcategory name")
@click.pass_context
def add_expense(
    ctx,
    account: str,
    amount: str,
    when: str,
    description: str,
    category: str | None,
    subcategory: str | None,
):
    """Record an expense paid online, by card, or from a wallet.

    An expense whose description and amount match an unpaid bill marks that
    bill paid.

    Examples:
        ledgerlens add expense --account Amex --amount 1200 --category Food
        ledgerlens add expense --account cash --amount 80 --description "Chai"
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    txn_amount, txn_date = _parse_inputs(ctx, amount, when)

    try:
        transaction_id = TransactionService(db).add_expense(
            account_id=account_id,
            amount=txn_amount,
            when=txn_date,
            description=description,
            category=category,
            subcategory=subcategory,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Expense: {format_amount(txn_amount)} on {txn_date:%Y-%m-%d}")


@add_group.command("transfer")
@click.option("--from", "from_account", required=True, help="Source account or wallet")
@click.option("--to", "to_account", required=True, help="Destination account or wallet")
@click.option("--amount", required=True, help="Amount moved")
@click.option("--date", "when", default="today", show_default=True, help=DATE_HELP)
@click.option("--description", help="Transaction description")
@click.pass_context
def add_transfer(
    ctx,
    from_account: str,
    to_account: str,
    amount: str,
    when: str,
    description: str | None,
):
    """Move money between accounts, cards and wallets.

    Examples:
        ledgerlens add transfer --from "HDFC Savings" --to cash --amount 2000
        ledgerlens add transfer --from "HDFC Savings" --to Amex --amount 15000
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    from_id = resolve_account_or_exit(ctx, account_service, from_account)
    to_id = resolve_account_or_exit(ctx, account_service, to_account)
    txn_amount, txn_date = _parse_inputs(ctx, amount, when)

    try:
        transaction_id = TransactionService(db).add_transfer(
            from_account_id=from_id,
            to_account_id=to_id,
            amount=txn_amount,
            when=txn_date,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Transfer: {format_amount(txn_amount)} on {txn_date:%Y-%m-%d}")


def register_commands(cli):
    """Register add commands with main CLI."""
    cli.add_command(add_group, name="add")
