"""Per-day grouping of trades for the calendar view."""

import calendar
from datetime import date

from pydantic import BaseModel, Field

from tradejournal.models import Trade


class DaySummary(BaseModel):
    """Everything that happened on one calendar day."""

    day: date
    pnl: float = 0.0
    count: int = 0
    has_withdrawal: bool = False
    trades: list[Trade] = Field(default_factory=list)


def group_by_day(trades: list[Trade]) -> dict[date, DaySummary]:
    """Group trades by calendar day.

    Day P&L includes withdrawals; the trade count does not.
    """
    days: dict[date, DaySummary] = {}
    for trade in sorted(trades, key=lambda t: t.date):
        day = trade.date.date()
        summary = days.setdefault(day, DaySummary(day=day))
        summary.pnl += trade.pnl
        summary.trades.append(trade)
        if trade.is_withdrawal:
            summary.has_withdrawal = True
        else:
            summary.count += 1
    return days


def month_grid(year: int, month: int) -> list[list[date]]:
    """Weeks covering a month, Sunday first, padded with adjacent days."""
    return calendar.Calendar(firstweekday=calendar.SUNDAY).monthdatescalendar(year, month)


def month_total(days: dict[date, DaySummary], year: int, month: int) -> float:
    return sum(s.pnl for d, s in days.items() if d.year == year and d.month == month)
