"""Category management commands."""

import click
from ledgerlens.cli.error_handling import handle_domain_error
from ledgerlens.cli.formatting import format_amount
from ledgerlens.domain.category import CategoryService
from ledgerlens.domain.entities import BudgetFrequency, CategoryType
from ledgerlens.utils.amount_parser import parse_amount


@click.group()
def category_group():
    """Manage categories and budgets."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List categories with their subcategories and budgets."""
    db = ctx.obj["db"]
    categories = CategoryService(db).list_categories()
    if not categories:
        click.echo("No categories found. Use 'category create' to add one.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        click.echo(f"{cat.name} [{cat.type.value}]")
        for sub in cat.subcategories:
            line = f"  {sub.name}"
            if sub.amount is not None:
                line += f" ({format_amount(sub.amount)} {sub.frequency.value}"
                if sub.selected_months:
                    line += f": {', '.join(sub.selected_months)}"
                line += ")"
            click.echo(line)


@category_group.command("create")
@click.argument("name")
@click.option(
    "--type",
    "category_type",
    type=click.Choice([t.value for t in CategoryType], case_sensitive=False),
    default=CategoryType.EXPENSE.value,
    help="Category type (default: expense)",
)
@click.pass_context
def create_category(ctx, name: str, category_type: str):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(
            name=name, category_type=CategoryType(category_type.lower())
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{name}' (ID: {category_id})")


@category_group.command("add-sub")
@click.argument("category")
@click.argument("name")
@click.option("--budget", help="Budget amount")
@click.option(
    "--frequency",
    type=click.Choice([f.value for f in BudgetFrequency], case_sensitive=False),
    help="Budget frequency (default: monthly when --budget is given)",
)
@click.option("--month", "months", multiple=True, help="Month an occasional budget applies to (repeatable)")
@click.pass_context
def add_subcategory(
    ctx,
    category: str,
    name: str,
    budget: str | None,
    frequency: str | None,
    months: tuple[str, ...],
):
    """Add subcategory NAME to CATEGORY.

    Examples:
        ledgerlens category add-sub Food Groceries --budget 8000
        ledgerlens category add-sub Shopping Festival --budget 20000 --frequency occasional --month Oct --month Nov
    """
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        service.add_subcategory(
            category_name=category,
            name=name,
            budget=parse_amount(budget) if budget else None,
            frequency=BudgetFrequency(frequency.lower()) if frequency else None,
            months=months,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added subcategory '{name}' to '{category}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
