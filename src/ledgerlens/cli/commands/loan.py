"""Loan commands."""

import click
from ledgerlens.cli.account_resolution import resolve_account_or_exit
from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.cli.formatting import format_amount
from ledgerlens.domain.account import AccountService
from ledgerlens.domain.entities import LoanEntryType, LoanType
from ledgerlens.domain.loans import LoanService
from ledgerlens.utils.amount_parser import parse_amount
from ledgerlens.utils.date_parser import parse_datetime


@click.group()
def loan_group():
    """Track money lent and borrowed."""
    pass


@loan_group.command("add")
@click.argument("person", metavar="PERSON")
@click.option(
    "--type",
    "loan_type",
    type=click.Choice([t.value for t in LoanType], case_sensitive=False),
    required=True,
    help="'given' when you lent money, 'taken' when you borrowed it",
)
@click.option(
    "--entry",
    type=click.Choice([t.value for t in LoanEntryType], case_sensitive=False),
    default=LoanEntryType.LOAN.value,
    show_default=True,
    help="New loan amount or a repayment",
)
@click.option("--amount", required=True, help="Amount")
@click.option("--account", required=True, help="Account or wallet the money moved through")
@click.option("--date", "when", default="today", show_default=True, help="Date of the entry")
@click.option("--description", help="Description (default: e.g. 'Loan to PERSON')")
@click.pass_context
def add_loan_entry(
    ctx,
    person: str,
    loan_type: str,
    entry: str,
    amount: str,
    account: str,
    when: str,
    description: str | None,
):
    """Record a loan or repayment with PERSON.

    Examples:
        ledgerlens loan add Ravi --type given --amount 1000 --account "HDFC Savings"
        ledgerlens loan add Ravi --type given --entry repayment --amount 400 --account cash
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    service = LoanService(db)

    try:
        service.record_entry(
            person_name=person,
            loan_type=LoanType(loan_type.lower()),
            entry_type=LoanEntryType(entry.lower()),
            amount=parse_amount(amount),
            account_id=account_id,
            date=parse_datetime(when),
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    loan = next(
        item
        for item in service.list_loans(LoanType(loan_type.lower()))
        if item.person_name == person.strip()
    )
    click.echo(f"Recorded {entry.lower()} for {loan.person_name}")
    click.echo(f"  Outstanding: {format_amount(loan.balance)}")


@loan_group.command("list")
@click.option(
    "--type",
    "loan_type",
    type=click.Choice([t.value for t in LoanType], case_sensitive=False),
    help="Only loans of this type",
)
@click.pass_context
def list_loans(ctx, loan_type: str | None):
    """List loans with totals, largest outstanding first."""
    db = ctx.obj["db"]
    summary = LoanService(db).summary()

    sections = [
        (LoanType.GIVEN, "Lent (owed to you)", summary.given, summary.total_given),
        (LoanType.TAKEN, "Borrowed (you owe)", summary.taken, summary.total_taken),
    ]
    if loan_type:
        sections = [s for s in sections if s[0].value == loan_type.lower()]

    if not any(loans for _, _, loans, _ in sections):
        click.echo("No loans found.")
        return

    for _, title, loans, total in sections:
        if not loans:
            continue
        click.echo(f"\n{title}:")
        click.echo("-" * 70)
        for loan in loans:
            click.echo(
                f"{loan.person_name:20s} | loan {format_amount(loan.total_loan):>12s}"
                f" | repaid {format_amount(loan.total_repayment):>12s}"
                f" | due {format_amount(loan.balance):>12s}"
            )
        click.echo(f"{'Total outstanding':20s}   {format_amount(total):>12s}")

    if not loan_type:
        click.echo(f"\nNet position: {format_amount(summary.net_position)}")


def register_commands(cli):
    """Register loan commands with main CLI."""
    cli.add_command(loan_group, name="loan")
