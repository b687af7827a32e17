"""Payout eligibility: profitable days since the last withdrawal."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from tradejournal.models import Trade

WITHDRAWAL_TARGET_DAYS = 5
WITHDRAWAL_PROFIT_MINIMUM = 100.0


class WithdrawalProgress(BaseModel):
    profitable_days: list[tuple[date, float]] = Field(default_factory=list)
    target_days: int = WITHDRAWAL_TARGET_DAYS
    last_withdrawal: Optional[datetime] = None
    withdrawals: list[Trade] = Field(default_factory=list)

    @property
    def progress(self) -> int:
        return len(self.profitable_days)

    @property
    def is_eligible(self) -> bool:
        return self.progress >= self.target_days


def calculate_withdrawal_progress(
    trades: list[Trade],
    target_days: int = WITHDRAWAL_TARGET_DAYS,
    profit_minimum: float = WITHDRAWAL_PROFIT_MINIMUM,
) -> WithdrawalProgress:
    """Count days with at least ``profit_minimum`` profit since the last withdrawal.

    Args:
        trades: Trade history, withdrawals included.
        target_days: Profitable days needed for a payout.
        profit_minimum: Daily P&L that makes a day count.

    Returns:
        Progress with qualifying days, newest first.
    """
    withdrawals = sorted(
        (t for t in trades if t.is_withdrawal), key=lambda t: t.date, reverse=True
    )
    last = withdrawals[0].date if withdrawals else None

    daily: dict[date, float] = {}
    for trade in trades:
        if trade.is_withdrawal or (last is not None and trade.date <= last):
            continue
        day = trade.date.date()
        daily[day] = daily.get(day, 0.0) + trade.pnl

    qualifying = sorted(
        ((day, pnl) for day, pnl in daily.items() if pnl >= profit_minimum),
        reverse=True,
    )
    return WithdrawalProgress(
        profitable_days=qualifying,
        target_days=target_days,
        last_withdrawal=last,
        withdrawals=withdrawals,
    )
