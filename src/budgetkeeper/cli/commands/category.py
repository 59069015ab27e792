"""Category management commands."""

import click
from budgetkeeper.cli.error_handling import handle_domain_error
from budgetkeeper.domain.category import CategoryService
from budgetkeeper.domain.entities import TRANSACTION_TYPES


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--type", "category_type", type=click.Choice(TRANSACTION_TYPES), help="Only this type")
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List income and expense categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.get_categories()
    for current_type, names in categories.items():
        if category_type is not None and current_type != category_type:
            continue
        click.echo(f"\n{current_type.capitalize()} categories:")
        if not names:
            click.echo("  (none)")
        for name in names:
            click.echo(f"  {name}")


@category_group.command("add")
@click.argument("name")
@click.option(
    "--type",
    "category_type",
    type=click.Choice(TRANSACTION_TYPES, case_sensitive=False),
    default="expense",
    show_default=True,
    help="Category type",
)
@click.pass_context
def add_category(ctx, name: str, category_type: str):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        created = service.add_category(category_type.lower(), name)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if created:
        click.echo(f"Created {category_type.lower()} category '{name}'")
    else:
        click.echo(f"Category '{name}' already exists")


@category_group.command("delete")
@click.argument("name")
@click.option(
    "--type",
    "category_type",
    type=click.Choice(TRANSACTION_TYPES, case_sensitive=False),
    default="expense",
    show_default=True,
    help="Category type",
)
@click.pass_context
def delete_category(ctx, name: str, category_type: str):
    """Delete a category. Existing transactions keep their category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        service.delete_category(category_type.lower(), name)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted {category_type.lower()} category '{name}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
