"""Recurring transaction commands."""

from datetime import date as date_type

import click
from budgetkeeper.cli.date_filters import parse_date_or_exit
from budgetkeeper.cli.error_handling import format_amount, handle_domain_error
from budgetkeeper.domain.entities import FREQUENCIES, TRANSACTION_TYPES
from budgetkeeper.domain.recurrence import next_occurrence
from budgetkeeper.domain.recurring import RecurringService
from budgetkeeper.utils.amount_parser import parse_amount


@click.group()
def recurring_group():
    """Manage recurring transactions."""
    pass


@recurring_group.command("add")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice(TRANSACTION_TYPES, case_sensitive=False),
    default="expense",
    show_default=True,
    help="Transaction type",
)
@click.option("--category", required=True, help="Category name")
@click.option("--amount", required=True, help="Amount of each occurrence")
@click.option(
    "--frequency",
    type=click.Choice(FREQUENCIES, case_sensitive=False),
    default="monthly",
    show_default=True,
    help="How often the transaction repeats",
)
@click.option("--start-date", default="today", show_default=True, help="First occurrence date")
@click.option("--description", default="", help="Description copied to each occurrence")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable)")
@click.pass_context
def add_rule(
    ctx,
    transaction_type: str,
    category: str,
    amount: str,
    frequency: str,
    start_date: str,
    description: str,
    tags: tuple[str, ...],
):
    """Create a recurring rule and record any occurrences already due.

    Examples:
        budgetkeeper recurring add --category Housing --amount 1500 --start-date 2024-01-01
        budgetkeeper recurring add --type income --category Salary --amount 2500 --frequency biweekly
    """
    db = ctx.obj["db"]
    service = RecurringService(db)

    start = parse_date_or_exit(ctx, start_date, "start date")
    try:
        rule_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        rule_id = service.create_rule(
            type=transaction_type.lower(),
            category=category,
            amount=rule_amount,
            frequency=frequency.lower(),
            start_date=start,
            description=description,
            tags=tags,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    created = service.generate_for_rule(rule_id)
    click.echo(f"Created recurring rule {rule_id} ({frequency.lower()} from {start})")
    if created:
        click.echo(f"  Recorded {len(created)} occurrence(s) already due")


@recurring_group.command("list")
@click.pass_context
def list_rules(ctx):
    """List recurring rules with their next occurrence."""
    db = ctx.obj["db"]
    service = RecurringService(db)

    rules = service.list_rules()
    if not rules:
        click.echo("No recurring rules found.")
        return

    today = date_type.today()
    click.echo(f"{'ID':<5} {'Type':<8} {'Category':<20} {'Amount':>12}  {'Frequency':<10} {'Next':<10}  Description")
    click.echo("-" * 90)
    for rule in rules:
        upcoming = next_occurrence(rule.start_date, rule.frequency, today)
        next_str = str(upcoming) if upcoming is not None else "n/a"
        click.echo(
            f"{rule.id:<5} {rule.type:<8} {rule.category:<20.20} {format_amount(rule.amount):>12}  "
            f"{rule.frequency:<10} {next_str:<10}  {rule.description}"
        )


@recurring_group.command("delete")
@click.argument("rule_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_rule(ctx, rule_id: int, yes: bool):
    """Delete a recurring rule and every transaction it generated."""
    db = ctx.obj["db"]
    service = RecurringService(db)

    try:
        service.require_rule(rule_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Delete recurring rule {rule_id} and its generated transactions?"
    ):
        click.echo("Cancelled.")
        return

    deleted = service.delete_rule(rule_id)
    click.echo(f"Deleted recurring rule {rule_id} and {deleted} generated transaction(s)")


@recurring_group.command("generate")
@click.option("--as-of", default="today", show_default=True, help="Generate occurrences due by this date")
@click.pass_context
def generate(ctx, as_of: str):
    """Record every recurring occurrence due by a date."""
    db = ctx.obj["db"]
    service = RecurringService(db)

    result = service.regenerate(parse_date_or_exit(ctx, as_of, "as-of date"))
    click.echo(
        f"Created {result.transactions_created} transaction(s) from "
        f"{result.rules_processed} rule(s) as of {result.as_of}"
    )
    if result.rules_skipped:
        click.echo(f"Skipped {result.rules_skipped} rule(s) with an unknown frequency", err=True)


@recurring_group.command("upcoming")
@click.option("--days", type=int, default=7, show_default=True, help="Look-ahead window in days")
@click.pass_context
def upcoming(ctx, days: int):
    """Show recurring transactions due soon."""
    db = ctx.obj["db"]
    service = RecurringService(db)

    items = service.upcoming(days=days)
    if not items:
        click.echo(f"Nothing due in the next {days} day(s).")
        return

    for item in items:
        click.echo(
            f"{item.due_date}  {item.rule.category:<20.20} {format_amount(item.rule.amount):>12}  "
            f"{item.rule.description} (in {item.days_until_due} day(s))"
        )


def register_commands(cli):
    """Register recurring commands with main CLI."""
    cli.add_command(recurring_group, name="recurring")
