"""Goal management commands for the trading journal CLI.

Handles personal trading goals and the free-form personal notes.
"""

from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import console, fail, get_store


@click.group()
def goals() -> None:
    """Manage personal trading goals.

    Three default goals (monthly P&L, win rate and trade count) are
    always present and cannot be removed.

    \b
    Examples:
      tradejournal goals list
      tradejournal goals add "Green weeks" 4 --unit weeks
      tradejournal goals edit 1 --current 2750
      tradejournal goals notes --set "Only A+ setups"
    """
    pass


@goals.command("list")
def list_goals() -> None:
    """Show all goals with their progress."""
    from tradejournal.analytics import format_goal_value, goal_progress, is_completed

    table = Table(title="Goals", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Goal", style="bold")
    table.add_column("Current", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("", justify="center")

    for goal in get_store().get_goals():
        pct = goal_progress(goal)
        color = "green" if is_completed(goal) else "yellow" if pct >= 50 else "white"
        table.add_row(
            str(goal.id),
            goal.title + (" [dim](default)[/dim]" if goal.is_default else ""),
            format_goal_value(goal.current, goal.unit),
            format_goal_value(goal.target, goal.unit),
            f"[{color}]{pct:.0f}%[/{color}]",
            "✓" if is_completed(goal) else "",
        )

    console.print(table)


@goals.command("add")
@click.argument("title")
@click.argument("target", type=float)
@click.option("--current", type=float, default=0.0, help="Starting value.")
@click.option("--unit", default="", help="Unit label (ILS, %, trades, ...).")
@click.option("--icon", default="Target", help="Display icon name.")
def add_goal(title: str, target: float, current: float, unit: str, icon: str) -> None:
    """Create a new goal."""
    from tradejournal.models import Goal

    try:
        goal = get_store().save_goal(
            Goal(title=title, target=target, current=current, unit=unit, icon=icon)
        )
    except ValidationError as e:
        fail(str(e), title="Invalid Goal")

    console.print(f"[green]✓[/green] Goal created: [bold]{goal.title}[/bold] [dim](ID {goal.id})[/dim]")


@goals.command("edit")
@click.argument("goal_id", type=int)
@click.option("--title", default=None, help="New title.")
@click.option("--target", type=float, default=None, help="New target value.")
@click.option("--current", type=float, default=None, help="New current value.")
@click.option("--unit", default=None, help="New unit label.")
def edit_goal(
    goal_id: int,
    title: Optional[str],
    target: Optional[float],
    current: Optional[float],
    unit: Optional[str],
) -> None:
    """Update a goal's title, target or current value."""
    from tradejournal.models import Goal

    store = get_store()
    goal = next((g for g in store.get_goals() if g.id == goal_id), None)
    if goal is None:
        fail(f"Goal {goal_id} not found")

    changes = {
        key: value
        for key, value in {"title": title, "target": target, "current": current, "unit": unit}.items()
        if value is not None
    }
    try:
        updated = store.save_goal(Goal.model_validate({**goal.model_dump(), **changes}))
    except ValidationError as e:
        fail(str(e), title="Invalid Goal")

    console.print(f"[green]✓[/green] Goal updated: [bold]{updated.title}[/bold]")


@goals.command("remove")
@click.argument("goal_id", type=int)
def remove_goal(goal_id: int) -> None:
    """Remove a goal. Default goals cannot be removed."""
    store = get_store()
    goal = next((g for g in store.get_goals() if g.id == goal_id), None)

    if goal is None:
        fail(f"Goal {goal_id} not found")
    if goal.is_default:
        fail(f"'{goal.title}' is a default goal and cannot be removed")

    store.delete_goal(goal_id)
    console.print(f"[green]✓[/green] Removed goal [bold]{goal.title}[/bold]")


@goals.command("notes")
@click.option("--set", "new_notes", default=None, help="Replace the personal notes.")
def notes(new_notes: Optional[str]) -> None:
    """Show or replace your personal trading notes."""
    store = get_store()

    if new_notes is not None:
        store.save_personal_notes(new_notes)
        console.print("[green]✓[/green] Notes saved")
        return

    text = store.get_personal_notes()
    console.print(Panel(
        text or "[dim]No notes yet. Add some with --set.[/dim]",
        title="[bold cyan]Personal Notes[/bold cyan]",
        border_style="cyan",
    ))
