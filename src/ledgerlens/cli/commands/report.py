"""Report commands."""

import click
from ledgerlens.cli.formatting import format_amount
from ledgerlens.domain.reports import ReportService
from ledgerlens.utils.date_parser import parse_month


def _month_or_exit(ctx, month: str):
    try:
        return parse_month(month)
    except ValueError as e:
        click.echo(f"Error: Invalid month: {e}", err=True)
        ctx.exit(1)


@click.group()
def report_group():
    """Monthly income, expense and budget reports."""
    pass


@report_group.command("monthly")
@click.option("--month", default="this month", show_default=True, help="Month (e.g. 2024-03, 'last month')")
@click.pass_context
def monthly(ctx, month: str):
    """Show income and expenses by category for one month."""
    db = ctx.obj["db"]
    report = ReportService(db).monthly_report(_month_or_exit(ctx, month))

    click.echo(f"\nReport for {report.month:%B %Y}")
    click.echo("-" * 50)
    if report.transaction_count == 0:
        click.echo("No transactions found.")
        return

    click.echo(f"{'Income':30s} {format_amount(report.total_income):>16s}")
    click.echo(f"{'Expenses':30s} {format_amount(report.total_expense):>16s}")
    click.echo(f"{'Net savings':30s} {format_amount(report.net_savings):>16s}")
    if report.expense_ratio is not None:
        click.echo(f"{'Spent of income':30s} {report.expense_ratio:>15.1f}%")

    if report.income_by_category:
        click.echo("\nIncome by category:")
        for name, total in report.income_by_category:
            click.echo(f"  {name:28s} {format_amount(total):>16s}")

    if report.expense_by_category:
        click.echo("\nExpenses by category:")
        for breakdown in report.expense_by_category:
            click.echo(f"  {breakdown.name:28s} {format_amount(breakdown.total):>16s}")
            for sub_name, sub_total in breakdown.subcategories:
                click.echo(f"      {sub_name:24s} {format_amount(sub_total):>16s}")


@report_group.command("budget")
@click.option("--month", default="this month", show_default=True, help="Month (e.g. 2024-03, 'last month')")
@click.pass_context
def budget(ctx, month: str):
    """Compare category budgets with spending for one month."""
    db = ctx.obj["db"]
    report = ReportService(db).budget_vs_actual(_month_or_exit(ctx, month))

    click.echo(f"\nBudget for {report.month:%B %Y}")
    if not report.lines:
        click.echo("No budgets or spending found.")
        return

    click.echo("-" * 80)
    for line in report.lines:
        click.echo(
            f"{line.name:24s} | budget {format_amount(line.budget):>12s}"
            f" | spent {format_amount(line.spent):>12s}"
            f" | left {format_amount(line.remaining):>12s} | {line.percent_used:5.1f}%"
        )
    click.echo("-" * 80)
    click.echo(
        f"{'Total':24s} | budget {format_amount(report.total_budget):>12s}"
        f" | spent {format_amount(report.total_spent):>12s}"
        f" | {report.percent_used:.1f}% used"
    )


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
