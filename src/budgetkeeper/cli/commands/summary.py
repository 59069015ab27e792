"""Summary commands."""

import click
from budgetkeeper.cli.date_filters import period_options, resolve_cli_date_range
from budgetkeeper.cli.error_handling import format_amount
from budgetkeeper.domain.recurring import RecurringService
from budgetkeeper.domain.summary import SummaryService


@click.command("summary")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@period_options
@click.option("--by-month", is_flag=True, help="Show income and expenses per month")
@click.pass_context
def summary(ctx, start_date: str | None, end_date: str | None, by_month: bool, **period_flags: bool):
    """Show spending by category, or income and expenses per month."""
    db = ctx.obj["db"]
    service = SummaryService(db)

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )

    if by_month:
        periods = service.monthly_totals(start_date=start, end_date=end)
        if not periods:
            click.echo("No transactions found.")
            return
        click.echo(f"{'Month':<8} {'Income':>14} {'Expenses':>14} {'Net':>14}")
        click.echo("-" * 53)
        for period in periods:
            click.echo(
                f"{period.period:<8} {format_amount(period.income):>14} "
                f"{format_amount(period.expenses):>14} {format_amount(period.net):>14}"
            )
        return

    totals = service.category_totals(start_date=start, end_date=end)
    if not totals:
        click.echo("No expenses found.")
    else:
        overall = sum(amount for _, amount in totals)
        click.echo(f"{'Category':<30} {'Spent':>14}")
        click.echo("-" * 45)
        for category, amount in totals:
            click.echo(f"{category:<30.30} {format_amount(amount):>14}")
        click.echo("-" * 45)
        click.echo(f"{'Total':<30} {format_amount(overall):>14}")

    recurring = RecurringService(db).monthly_totals()
    click.echo(f"\nBalance: {format_amount(service.balance())}")
    click.echo(
        f"Recurring per month: +{format_amount(recurring['income'])} / "
        f"-{format_amount(recurring['expense'])}"
    )


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
