"""Add transaction command."""

import click
from budgetkeeper.cli.date_filters import parse_date_or_exit
from budgetkeeper.cli.error_handling import format_amount, handle_domain_error
from budgetkeeper.domain.entities import TRANSACTION_TYPES
from budgetkeeper.domain.transaction import TransactionService
from budgetkeeper.utils.amount_parser import parse_amount


@click.command("add")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice(TRANSACTION_TYPES, case_sensitive=False),
    default="expense",
    show_default=True,
    help="Transaction type",
)
@click.option("--category", required=True, help="Category name (e.g., 'Food & Dining')")
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45)")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", default="", help="Transaction description")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable)")
@click.pass_context
def add_transaction(
    ctx,
    transaction_type: str,
    category: str,
    amount: str,
    date: str,
    description: str,
    tags: tuple[str, ...],
):
    """Add a transaction manually.

    Examples:
        budgetkeeper add --category Groceries --amount 54.20 --date 2024-02-03
        budgetkeeper add --type income --category Salary --amount 5000 --tag work
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    txn_date = parse_date_or_exit(ctx, date)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = service.create_transaction(
            type=transaction_type.lower(),
            category=category,
            amount=txn_amount,
            date=txn_date,
            description=description,
            tags=tags,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Type: {transaction_type.lower()}")
    click.echo(f"  Category: {category}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: {format_amount(txn_amount)}")
    if description:
        click.echo(f"  Description: {description}")
    if tags:
        click.echo(f"  Tags: {', '.join(sorted(set(tags)))}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
