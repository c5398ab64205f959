"""Account view feed command."""

import click
from ledgerlens.cli.account_resolution import resolve_account_or_exit
from ledgerlens.cli.date_filters import period_options, resolve_cli_date_range
from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.cli.formatting import format_amount
from ledgerlens.domain.account import AccountService
from ledgerlens.domain.ledger import LedgerService
from ledgerlens.domain.views import ViewKind


def _view_title(view, account_service: AccountService) -> str:
    if view.kind is ViewKind.WALLET:
        return view.wallet.label
    name = account_service.get_account(view.account_id).name
    if view.kind is ViewKind.PRIMARY:
        return f"{name} + wallets"
    return name


@click.command("feed")
@click.argument("view", metavar="VIEW")
@period_options
@click.option("--search", help="Text to find in description, category or subcategory")
@click.option("--limit", type=int, help="Show at most this many rows")
@click.pass_context
def show_feed(
    ctx,
    view: str,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    search: str | None,
    limit: int | None,
):
    """Show transactions of VIEW, newest first, with running balance.

    VIEW is an account name or ID, or 'cash'/'digital'. Naming the primary
    account shows the primary account together with both wallets.

    Examples:
        ledgerlens feed "HDFC Savings" --period this-month
        ledgerlens feed cash --search groceries
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    view_id = resolve_account_or_exit(ctx, account_service, view)
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )

    try:
        feed = LedgerService(db).view_feed(view_id, start=start, end=end, search=search)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{_view_title(feed.view, account_service)}")
    click.echo(f"Balance: {format_amount(feed.closing_balance)}")

    rows = feed.rows[:limit] if limit else feed.rows
    if not rows:
        click.echo("No transactions found.")
    else:
        click.echo("-" * 100)
        for row in rows:
            click.echo(
                f"{row.transaction.date:%Y-%m-%d} | {row.display_type:18s}"
                f" | {row.display_label[:30]:30s} | {row.display_category[:14]:14s}"
                f" | {format_amount(row.effect):>12s} | {format_amount(row.running_balance):>12s}"
            )

    if feed.skipped:
        click.echo(
            f"\nWarning: {len(feed.skipped)} transaction(s) skipped due to invalid data",
            err=True,
        )


def register_commands(cli):
    """Register feed command with main CLI."""
    cli.add_command(show_feed)
