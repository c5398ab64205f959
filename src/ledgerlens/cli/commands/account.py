"""Account management commands."""

from datetime import datetime

import click
from ledgerlens.cli.account_resolution import resolve_account_or_exit
from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.cli.formatting import format_amount
from ledgerlens.domain.account import AccountService
from ledgerlens.domain.entities import AccountType, WalletKind
from ledgerlens.domain.ledger import LedgerService
from ledgerlens.utils.amount_parser import parse_amount
from ledgerlens.utils.date_parser import parse_datetime


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    default=AccountType.BANK.value,
    help="Account type (default: bank)",
)
@click.option("--primary", is_flag=True, help="Make this the primary account")
@click.option("--limit", help="Credit limit (cards only)")
@click.option("--linked-to", help="Account a card belongs with (cards only)")
@click.option("--purpose", help="What the account is used for")
@click.pass_context
def create_account(
    ctx,
    name: str,
    account_type: str,
    primary: bool,
    limit: str | None,
    linked_to: str | None,
    purpose: str | None,
):
    """Create a new account.

    Examples:
        ledgerlens account create "HDFC Savings" --primary
        ledgerlens account create "Amex" --type card --limit 50000
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    linked_id = None
    if linked_to:
        linked_id = resolve_account_or_exit(ctx, service, linked_to, allow_wallets=False)

    try:
        credit_limit = parse_amount(limit) if limit else None
        account_id = service.create_account(
            name=name,
            account_type=AccountType(account_type.lower()),
            is_primary=primary,
            limit=credit_limit,
            linked_primary_account_id=linked_id,
            purpose=purpose,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created account '{name}' (ID: {account_id})")
    if primary:
        click.echo("Set as primary account")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their computed balances."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    balances = LedgerService(db).balances()
    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        marker = "*" if acc.is_primary else " "
        balance = balances.get(acc.id)
        line = f"{marker} {acc.name:20s} | {acc.type.value:4s} | {format_amount(balance):>14s}"
        if acc.is_card and acc.limit is not None:
            line += f" | available {format_amount(acc.available_credit(balance))}"
        click.echo(f"{line} | ID: {acc.id}")
    click.echo("-" * 80)
    for wallet in WalletKind:
        click.echo(
            f"  {wallet.label:20s} | wallet | {format_amount(balances.wallets.for_wallet(wallet)):>12s}"
        )


@account_group.command("set-primary")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def set_primary(ctx, account: str) -> None:
    """Make ACCOUNT (name or ID) the primary account."""
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account, allow_wallets=False)

    try:
        service.set_primary(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Primary account is now '{service.get_account(account_id).name}'")


@account_group.command("set-actual")
@click.argument("account", metavar="ACCOUNT")
@click.argument("balance", metavar="BALANCE")
@click.option("--date", "as_of", help="When the balance was observed (default: now)")
@click.pass_context
def set_actual(ctx, account: str, balance: str, as_of: str | None) -> None:
    """Record the real-world BALANCE of ACCOUNT for reconciliation.

    Use "clear" as BALANCE to remove the recorded value.
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account, allow_wallets=False)

    try:
        amount = None if balance.lower() == "clear" else parse_amount(balance)
        when = parse_datetime(as_of) if as_of else datetime.now()
        service.set_actual_balance(account_id, amount, when)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo("Cleared actual balance" if amount is None else f"Actual balance set to {format_amount(amount)}")


@account_group.command("set-wallet-actual")
@click.argument(
    "wallet", type=click.Choice([w.value for w in WalletKind], case_sensitive=False)
)
@click.argument("balance", metavar="BALANCE")
@click.option("--date", "as_of", help="When the balance was observed (default: now)")
@click.pass_context
def set_wallet_actual(ctx, wallet: str, balance: str, as_of: str | None) -> None:
    """Record the real-world BALANCE of the cash or digital wallet."""
    db = ctx.obj["db"]
    service = AccountService(db)
    kind = WalletKind(wallet.lower())

    try:
        amount = None if balance.lower() == "clear" else parse_amount(balance)
        when = parse_datetime(as_of) if as_of else datetime.now()
        service.set_wallet_actual_balance(kind, amount, when)
    except ValueError as e:
        handle_domain_error(ctx, e)
    if amount is None:
        click.echo(f"Cleared {kind.label} actual balance")
    else:
        click.echo(f"{kind.label} actual balance set to {format_amount(amount)}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
