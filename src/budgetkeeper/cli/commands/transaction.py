"""Transaction management commands."""

import click
from budgetkeeper.cli.date_filters import period_options, resolve_cli_date_range
from budgetkeeper.cli.error_handling import format_amount, handle_domain_error
from budgetkeeper.domain.entities import TRANSACTION_TYPES
from budgetkeeper.domain.transaction import TransactionService


def _format_transaction_line(txn) -> str:
    sign = "+" if txn.is_income else "-"
    amount = f"{sign}{format_amount(txn.amount)}"
    line = f"{txn.id:<6} {txn.date}  {txn.category:<20.20} {amount:>14}  {txn.description}"
    if txn.tags:
        line += f"  [{', '.join(sorted(txn.tags))}]"
    if txn.recurring_id is not None:
        line += f"  (recurring #{txn.recurring_id})"
    return line


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@period_options
@click.option("--category", help="Category name")
@click.option("--type", "transaction_type", type=click.Choice(TRANSACTION_TYPES), help="Only this type")
@click.option("--tag", help="Only transactions with this tag")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    category: str | None,
    transaction_type: str | None,
    tag: str | None,
    **period_flags: bool,
):
    """View transactions with optional filters, newest first."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )

    transactions = service.list_transactions(
        start_date=start,
        end_date=end,
        category=category,
        transaction_type=transaction_type,
        tag=tag,
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"{'ID':<6} {'Date':<10}  {'Category':<20} {'Amount':>14}  Description")
    click.echo("-" * 80)
    for txn in transactions:
        click.echo(_format_transaction_line(txn))


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool):
    """Delete a transaction."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        txn = service.require_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not yes:
        click.echo(_format_transaction_line(txn))
        if not click.confirm("Delete this transaction?"):
            click.echo("Cancelled.")
            return

    service.delete_transaction(transaction_id)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("tag")
@click.argument("transaction_id", type=int)
@click.argument("tag")
@click.pass_context
def tag_transaction(ctx, transaction_id: int, tag: str):
    """Add a tag to a transaction."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        txn = service.add_tag(transaction_id, tag)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Transaction {transaction_id} tags: {', '.join(sorted(txn.tags))}")


@transaction_group.command("untag")
@click.argument("transaction_id", type=int)
@click.argument("tag")
@click.pass_context
def untag_transaction(ctx, transaction_id: int, tag: str):
    """Remove a tag from a transaction."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        txn = service.remove_tag(transaction_id, tag)
    except ValueError as e:
        handle_domain_error(ctx, e)

    tags = ", ".join(sorted(txn.tags)) or "(none)"
    click.echo(f"Transaction {transaction_id} tags: {tags}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
