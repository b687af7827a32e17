"""Journal analytics: dashboard stats, calendar, funded account, payouts and goals."""

from tradejournal.analytics.dashboard import DashboardStats, calculate_stats, recent_trades
from tradejournal.analytics.calendar_view import DaySummary, group_by_day, month_grid
from tradejournal.analytics.funded import (
    CHALLENGE_PRESETS,
    FundedProgress,
    calculate_progress,
    get_preset,
)
from tradejournal.analytics.withdrawal import (
    WithdrawalProgress,
    calculate_withdrawal_progress,
)
from tradejournal.analytics.goals import format_goal_value, goal_progress, is_completed
from tradejournal.analytics.performance import (
    MIN_TRADES_FOR_ANALYSIS,
    PerformanceAnalysis,
    StrategyStats,
    analyze_performance,
    strategy_breakdown,
)

__all__ = [
    "DashboardStats",
    "calculate_stats",
    "recent_trades",
    "DaySummary",
    "group_by_day",
    "month_grid",
    "CHALLENGE_PRESETS",
    "FundedProgress",
    "calculate_progress",
    "get_preset",
    "WithdrawalProgress",
    "calculate_withdrawal_progress",
    "format_goal_value",
    "goal_progress",
    "is_completed",
    "MIN_TRADES_FOR_ANALYSIS",
    "PerformanceAnalysis",
    "StrategyStats",
    "analyze_performance",
    "strategy_breakdown",
]
