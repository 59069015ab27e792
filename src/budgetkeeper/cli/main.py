"""Main CLI entry point."""

import logging

import click
from budgetkeeper.database.factories import DB_PATH_ENV_VAR, create_sqlite_database
from budgetkeeper.domain.category import CategoryService
from budgetkeeper.domain.recurring import RecurringService

# Import and register all commands at module level
from budgetkeeper.cli.commands import (
    add,
    transaction,
    recurring,
    budget,
    goal,
    category,
    summary,
    data,
)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option(
    "--no-regenerate",
    is_flag=True,
    help="Do not materialize due recurring transactions on startup",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, no_regenerate: bool, verbose: bool):
    """Budgetkeeper - Personal finance tracking.

    Record income and expenses, schedule recurring transactions, and follow
    monthly budgets and financial goals.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)

    # Open the store only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db

        CategoryService(db).ensure_defaults()
        if not no_regenerate:
            RecurringService(db).regenerate()


# Register all commands
add.register_commands(cli)
transaction.register_commands(cli)
recurring.register_commands(cli)
budget.register_commands(cli)
goal.register_commands(cli)
category.register_commands(cli)
summary.register_commands(cli)
data.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
