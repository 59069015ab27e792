"""CLI helpers for date parsing and date range resolution."""

from datetime import date

import click

from budgetkeeper.utils.date_parser import PERIODS, get_date_range, parse_date


def parse_date_or_exit(ctx: click.Context, value: str | None, label: str = "date") -> date | None:
    """Parse a date option, or exit with a CLI error."""
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def period_options(func):
    """Attach --this-month, --last-year, ... flags to a command."""
    for period in reversed(PERIODS):
        func = click.option(f"--{period}", is_flag=True, help=f"Filter to {period.replace('-', ' ')}")(func)
    return func


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        click.echo("Error: Only one period option can be specified at a time.", err=True)
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if selected:
        return get_date_range(selected[0].replace("_", "-"))

    return (
        parse_date_or_exit(ctx, start_date, "start date"),
        parse_date_or_exit(ctx, end_date, "end date"),
    )
