"""Goal commands."""

from datetime import date as date_type

import click
from budgetkeeper.cli.date_filters import parse_date_or_exit
from budgetkeeper.cli.error_handling import format_amount, handle_domain_error
from budgetkeeper.domain.entities import GOAL_TYPES
from budgetkeeper.domain.goal import GoalService, days_remaining
from budgetkeeper.utils.amount_parser import parse_amount


def _format_progress(goal, progress) -> str:
    if progress.percentage is None:
        percent = "n/a"
    else:
        percent = f"{progress.percentage:.0f}%"
    status = "completed" if progress.is_completed else f"{days_remaining(goal)} day(s) left"
    return (
        f"{goal.id:<5} {goal.type:<19} {format_amount(progress.current):>12} / "
        f"{format_amount(goal.target_amount):<12} {percent:>6}  {status}  {goal.description}"
    )


@click.group()
def goal_group():
    """Manage financial goals."""
    pass


@goal_group.command("add")
@click.option("--type", "goal_type", type=click.Choice(GOAL_TYPES), required=True, help="Goal type")
@click.option("--target", required=True, help="Target amount")
@click.option("--start-date", default="today", show_default=True, help="First day counted")
@click.option("--target-date", required=True, help="Last day counted")
@click.option("--category", help="Category tracked by debt_payment goals")
@click.option("--description", default="", help="Goal description")
@click.pass_context
def add_goal(
    ctx,
    goal_type: str,
    target: str,
    start_date: str,
    target_date: str,
    category: str | None,
    description: str,
):
    """Create a goal.

    Examples:
        budgetkeeper goal add --type savings --target 1000 --target-date 2024-12-31
        budgetkeeper goal add --type debt_payment --category "Credit Card" --target 3000 --target-date "next year"
    """
    db = ctx.obj["db"]
    service = GoalService(db)

    start = parse_date_or_exit(ctx, start_date, "start date")
    end = parse_date_or_exit(ctx, target_date, "target date")
    try:
        target_amount = parse_amount(target)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        goal_id = service.create_goal(
            type=goal_type,
            target_amount=target_amount,
            start_date=start,
            target_date=end,
            description=description,
            category=category,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created goal {goal_id} ({goal_type}, {format_amount(target_amount)} by {end})")


@goal_group.command("list")
@click.pass_context
def list_goals(ctx):
    """List goals with their progress."""
    db = ctx.obj["db"]
    service = GoalService(db)

    results = service.list_progress()
    if not results:
        click.echo("No goals found.")
        return

    for goal, progress in results:
        click.echo(_format_progress(goal, progress))


@goal_group.command("progress")
@click.argument("goal_id", type=int)
@click.pass_context
def goal_progress(ctx, goal_id: int):
    """Show detailed progress of one goal."""
    db = ctx.obj["db"]
    service = GoalService(db)

    try:
        goal = service.require_goal(goal_id)
        progress = service.get_progress(goal_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Goal {goal.id}: {goal.description or goal.type}")
    click.echo(f"  Type: {goal.type}")
    if goal.category:
        click.echo(f"  Category: {goal.category}")
    click.echo(f"  Period: {goal.start_date} to {goal.target_date}")
    click.echo(f"  Target: {format_amount(goal.target_amount)}")
    click.echo(f"  Current: {format_amount(progress.current)}")
    click.echo(f"  Remaining: {format_amount(progress.remaining)}")
    if progress.percentage is not None:
        click.echo(f"  Progress: {progress.percentage:.1f}%")
    click.echo(f"  Completed: {'yes' if progress.is_completed else 'no'}")
    if not progress.is_completed and goal.target_date >= date_type.today():
        click.echo(f"  Days remaining: {days_remaining(goal)}")


@goal_group.command("delete")
@click.argument("goal_id", type=int)
@click.pass_context
def delete_goal(ctx, goal_id: int):
    """Delete a goal."""
    db = ctx.obj["db"]
    service = GoalService(db)

    try:
        service.delete_goal(goal_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted goal {goal_id}")


def register_commands(cli):
    """Register goal commands with main CLI."""
    cli.add_command(goal_group, name="goal")
