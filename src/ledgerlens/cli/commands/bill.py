"""Bill commands."""

from datetime import date

import click
from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.cli.formatting import format_amount
from ledgerlens.domain.bills import BillService
from ledgerlens.domain.entities import BillType, Recurrence
from ledgerlens.utils.amount_parser import parse_amount
from ledgerlens.utils.date_parser import parse_datetime


@click.group()
def bill_group():
    """Track bills and their due dates."""
    pass


@bill_group.command("add")
@click.argument("title")
@click.option("--amount", required=True, help="Bill amount")
@click.option("--due", required=True, help="Due date (YYYY-MM-DD or relative)")
@click.option(
    "--recurrence",
    type=click.Choice([r.value for r in Recurrence], case_sensitive=False),
    default=Recurrence.NONE.value,
    show_default=True,
    help="How often the bill repeats",
)
@click.option(
    "--type",
    "bill_type",
    type=click.Choice([t.value for t in BillType], case_sensitive=False),
    default=BillType.BILL.value,
    show_default=True,
    help="Bill or special day reminder",
)
@click.pass_context
def add_bill(ctx, title: str, amount: str, due: str, recurrence: str, bill_type: str):
    """Add a bill.

    Pay it with "ledgerlens bill pay TITLE".

    Examples:
        ledgerlens bill add "Electricity" --amount 1450 --due 2024-02-10 --recurrence monthly
    """
    db = ctx.obj["db"]
    try:
        bill_id = BillService(db).create_bill(
            title=title,
            amount=parse_amount(amount),
            due_date=parse_datetime(due),
            recurrence=Recurrence(recurrence.lower()),
            bill_type=BillType(bill_type.lower()),
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created bill '{title}' (ID: {bill_id})")


@bill_group.command("list")
@click.pass_context
def list_bills(ctx):
    """List bills, soonest due first."""
    db = ctx.obj["db"]
    statuses = BillService(db).list_statuses(date.today())
    if not statuses:
        click.echo("No bills found.")
        return

    click.echo("\nBills:")
    click.echo("-" * 80)
    for status in statuses:
        bill = status.bill
        if status.is_paid:
            state = "paid"
        elif status.is_overdue:
            state = f"overdue by {-status.days_until_due} day(s)"
        else:
            state = f"due in {status.days_until_due} day(s)"
        click.echo(
            f"{bill.title:24s} | {format_amount(bill.amount):>12s}"
            f" | {bill.due_date:%Y-%m-%d} | {bill.recurrence.value:9s} | {state}"
        )


@bill_group.command("pay")
@click.argument("bill")
@click.option("--date", "paid_date", default="today", show_default=True, help="Payment date")
@click.pass_context
def pay_bill(ctx, bill: str, paid_date: str):
    """Pay BILL (ID or title) from the primary account.

    Records an online expense and moves a recurring bill to its next due
    date.

    Examples:
        ledgerlens bill pay Electricity
        ledgerlens bill pay Rent --date 2024-02-01
    """
    db = ctx.obj["db"]
    service = BillService(db)
    try:
        found = service.find_bill(bill)
        transaction_id = service.pay_bill(found.id, parse_datetime(paid_date))
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Paid bill '{found.title}': {format_amount(found.amount)} (transaction ID: {transaction_id})"
    )
    if found.recurrence != Recurrence.NONE:
        updated = db.get_bill(found.id)
        click.echo(f"Next due: {updated.due_date:%Y-%m-%d}")


def register_commands(cli):
    """Register bill commands with main CLI."""
    cli.add_command(bill_group, name="bill")
