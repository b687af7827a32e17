"""Goal progress and display values."""

from tradejournal.formatting import format_ils
from tradejournal.models import Goal


def goal_progress(goal: Goal) -> float:
    """Completion percentage, capped at 100. Goals without a target are at 0."""
    if goal.target <= 0:
        return 0.0
    return min(goal.current / goal.target * 100, 100.0)


def is_completed(goal: Goal) -> bool:
    return goal_progress(goal) >= 100


def format_goal_value(value: float, unit: str) -> str:
    """Format a goal value for its unit."""
    if unit == "ILS":
        return format_ils(value)
    if unit == "%":
        return f"{value:.1f}%"
    if unit == "trades":
        return f"{value:.0f}"
    return f"{value:.0f} {unit}".strip()
