"""Budget commands."""

import click
from budgetkeeper.cli.date_filters import parse_date_or_exit
from budgetkeeper.cli.error_handling import format_amount, handle_domain_error
from budgetkeeper.domain.budget import BudgetService
from budgetkeeper.utils.amount_parser import parse_amount


@click.group()
def budget_group():
    """Manage monthly category budgets."""
    pass


@budget_group.command("set")
@click.argument("category")
@click.argument("amount")
@click.pass_context
def set_budget(ctx, category: str, amount: str):
    """Set the monthly limit for a category."""
    db = ctx.obj["db"]
    service = BudgetService(db)

    try:
        service.set_budget(category, parse_amount(amount))
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Budget for '{category}' set to {format_amount(service.get_budgets()[category.strip()])}")


@budget_group.command("delete")
@click.argument("category")
@click.pass_context
def delete_budget(ctx, category: str):
    """Remove the budget for a category."""
    db = ctx.obj["db"]
    service = BudgetService(db)

    try:
        service.delete_budget(category)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted budget for '{category}'")


@budget_group.command("status")
@click.option("--as-of", default="today", show_default=True, help="Reference date")
@click.pass_context
def budget_status(ctx, as_of: str):
    """Show this month's spending against each budget."""
    db = ctx.obj["db"]
    service = BudgetService(db)

    statuses = service.get_budget_status(parse_date_or_exit(ctx, as_of, "as-of date"))
    if not statuses:
        click.echo("No budgets set.")
        return

    click.echo(f"{'Category':<20} {'Budget':>12} {'Spent':>12} {'Remaining':>12} {'Used':>8}")
    click.echo("-" * 68)
    for status in statuses:
        if status.percentage is None:
            used = "no budget set"
        else:
            used = f"{status.percentage:.0f}%"
            if status.remaining < 0:
                used += " OVER"
        click.echo(
            f"{status.category:<20.20} {format_amount(status.budget):>12} "
            f"{format_amount(status.spent):>12} {format_amount(status.remaining):>12} {used:>8}"
        )


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
