"""Balance and reconciliation commands."""

import click
from ledgerlens.cli.formatting import format_amount
from ledgerlens.domain.entities import WalletKind
from ledgerlens.domain.ledger import LedgerService
from ledgerlens.domain.views import find_primary_account


@click.command("balances")
@click.pass_context
def show_balances(ctx):
    """Show computed balances of all accounts and wallets.

    Card balances are outstanding debt. The primary line adds the primary
    account and both wallets.
    """
    db = ctx.obj["db"]
    service = LedgerService(db)
    balances = service.balances()
    accounts = db.list_accounts()

    click.echo("\nBalances:")
    click.echo("-" * 50)
    for acc in accounts:
        label = f"{acc.name} (card debt)" if acc.is_card else acc.name
        click.echo(f"{label:32s} {format_amount(balances.get(acc.id)):>16s}")
    for wallet in WalletKind:
        click.echo(f"{wallet.label:32s} {format_amount(balances.wallets.for_wallet(wallet)):>16s}")

    primary = find_primary_account(accounts)
    if primary is not None:
        feed = service.view_feed(primary.id)
        click.echo("-" * 50)
        click.echo(f"{'Primary + wallets':32s} {format_amount(feed.closing_balance):>16s}")

    if balances.skipped:
        click.echo(
            f"\nWarning: {balances.warning_count} transaction(s) skipped due to invalid data",
            err=True,
        )


@click.command("reconcile")
@click.option("--all", "show_all", is_flag=True, help="Include entries without an actual balance")
@click.pass_context
def reconcile_balances(ctx, show_all: bool):
    """Compare computed balances with recorded real-world balances.

    A positive difference means the ledger shows more than reality.
    """
    db = ctx.obj["db"]
    results = LedgerService(db).reconcile()
    if not show_all:
        results = [r for r in results if r.actual is not None]

    if not results:
        click.echo("No actual balances recorded. Use 'account set-actual' or 'account set-wallet-actual'.")
        return

    click.echo("\nReconciliation:")
    click.echo("-" * 80)
    for result in results:
        actual = format_amount(result.actual) if result.actual is not None else "-"
        if result.difference is None:
            status = ""
        elif result.is_reconciled:
            status = "OK"
        else:
            status = f"off by {format_amount(result.difference)}"
        click.echo(
            f"{result.label:24s} | computed {format_amount(result.computed):>12s}"
            f" | actual {actual:>12s} | {status}"
        )


def register_commands(cli):
    """Register balance commands with main CLI."""
    cli.add_command(show_balances)
    cli.add_command(reconcile_balances)
