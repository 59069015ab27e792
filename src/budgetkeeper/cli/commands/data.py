"""Export and import commands."""

from pathlib import Path

import click
from budgetkeeper.cli.error_handling import handle_domain_error
from budgetkeeper.domain.data_transfer import DataTransferService


@click.command("export")
@click.argument("output", type=click.Path(dir_okay=False), required=False)
@click.pass_context
def export_data(ctx, output: str | None):
    """Export all data to a JSON file.

    Writes finance_data_<date>.json in the current directory when no output
    path is given. Use '-' to print to stdout.
    """
    db = ctx.obj["db"]
    service = DataTransferService(db)

    if output == "-":
        click.echo(service.export_json())
        return

    path = Path(output) if output else Path(service.default_export_filename())
    service.write_export(path)
    click.echo(f"Exported data to {path}")


@click.command("import")
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def import_data(ctx, input_file: str, yes: bool):
    """Import data from a JSON export, replacing the collections it contains."""
    db = ctx.obj["db"]
    service = DataTransferService(db)

    if not yes and not click.confirm("Importing replaces existing data. Continue?"):
        click.echo("Cancelled.")
        return

    try:
        result = service.read_import_file(input_file)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo("Data imported successfully")
    click.echo(f"  Transactions: {result.transactions}")
    click.echo(f"  Recurring rules: {result.recurring}")
    click.echo(f"  Budgets: {result.budgets}")
    click.echo(f"  Goals: {result.goals}")
    click.echo(f"  Categories: {result.categories}")
    if result.skipped:
        click.echo(f"  Skipped malformed entries: {result.skipped}")


def register_commands(cli):
    """Register export and import commands with main CLI."""
    cli.add_command(export_data)
    cli.add_command(import_data)
