"""Dashboard statistics over the trade history."""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel

from tradejournal.analytics.performance import trading_trades
from tradejournal.models import Trade


class DashboardStats(BaseModel):
    """Headline numbers of the journal. Withdrawals are not counted."""

    total_pnl: float = 0.0
    win_rate: float = 0.0
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    best_trade: float = 0.0
    worst_trade: float = 0.0
    avg_rr: float = 0.0
    weekly_pnl: float = 0.0
    monthly_pnl: float = 0.0


def start_of_week(now: datetime) -> datetime:
    """Midnight of the most recent Sunday."""
    days_back = (now.weekday() + 1) % 7
    return (now - timedelta(days=days_back)).replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def calculate_stats(trades: list[Trade], now: Optional[datetime] = None) -> DashboardStats:
    """Calculate dashboard statistics.

    Args:
        trades: Trade history, withdrawals included.
        now: Reference time for the weekly and monthly windows.

    Returns:
        Statistics over non-withdrawal trades.
    """
    now = now or datetime.now()
    trades = trading_trades(trades)
    if not trades:
        return DashboardStats()

    week_start = start_of_week(now)
    month_start = start_of_month(now)

    wins = [t.pnl for t in trades if t.pnl > 0]
    losses = [t.pnl for t in trades if t.pnl < 0]
    rrs = [t.rr for t in trades if t.rr is not None and t.rr > 0]

    return DashboardStats(
        total_pnl=sum(t.pnl for t in trades),
        win_rate=len(wins) / len(trades) * 100,
        total_trades=len(trades),
        winning_trades=len(wins),
        losing_trades=len(losses),
        avg_win=sum(wins) / len(wins) if wins else 0.0,
        avg_loss=abs(sum(losses) / len(losses)) if losses else 0.0,
        best_trade=max([0.0, *(t.pnl for t in trades)]),
        worst_trade=min([0.0, *(t.pnl for t in trades)]),
        avg_rr=sum(rrs) / len(rrs) if rrs else 0.0,
        weekly_pnl=sum(t.pnl for t in trades if week_start <= t.date <= now),
        monthly_pnl=sum(t.pnl for t in trades if month_start <= t.date <= now),
    )


def recent_trades(trades: list[Trade], limit: int = 5) -> list[Trade]:
    """Most recent non-withdrawal trades."""
    return sorted(trading_trades(trades), key=lambda t: t.date, reverse=True)[:limit]
