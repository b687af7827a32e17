"""Strategy-level performance breakdown and strengths/weaknesses analysis."""

from typing import Optional

from pydantic import BaseModel, Field

from tradejournal.formatting import format_currency
from tradejournal.models import Trade

MIN_TRADES_FOR_ANALYSIS = 5


class StrategyStats(BaseModel):
    """Aggregate results of one strategy."""

    strategy: str
    pnl: float = 0.0
    wins: int = 0
    losses: int = 0
    count: int = 0

    @property
    def win_rate(self) -> float:
        return self.wins / self.count * 100 if self.count else 0.0


class PerformanceAnalysis(BaseModel):
    """Strengths and weaknesses found in a trade history."""

    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    strategies: list[StrategyStats] = Field(default_factory=list)
    avg_win: float = 0.0
    avg_loss: float = 0.0


def trading_trades(trades: list[Trade]) -> list[Trade]:
    """Drop withdrawal records, keeping only real trades."""
    return [t for t in trades if not t.is_withdrawal]


def strategy_breakdown(trades: list[Trade]) -> list[StrategyStats]:
    """Aggregate P&L and win/loss counts per strategy.

    Trades without a strategy and withdrawals are skipped. A trade with
    zero P&L counts as a loss.

    Returns:
        Per-strategy stats, best P&L first.
    """
    stats: dict[str, StrategyStats] = {}
    for trade in trading_trades(trades):
        if not trade.strategy:
            continue
        entry = stats.setdefault(trade.strategy, StrategyStats(strategy=trade.strategy))
        entry.pnl += trade.pnl
        entry.count += 1
        if trade.pnl > 0:
            entry.wins += 1
        else:
            entry.losses += 1
    return sorted(stats.values(), key=lambda s: s.pnl, reverse=True)


def analyze_performance(trades: list[Trade]) -> Optional[PerformanceAnalysis]:
    """Find strengths and weaknesses in a trade history.

    Args:
        trades: Trade history. Withdrawals are ignored.

    Returns:
        The analysis, or None when there are fewer than
        ``MIN_TRADES_FOR_ANALYSIS`` trades.
    """
    trades = trading_trades(trades)
    if len(trades) < MIN_TRADES_FOR_ANALYSIS:
        return None

    analysis = PerformanceAnalysis(strategies=strategy_breakdown(trades))

    if analysis.strategies:
        best = analysis.strategies[0]
        if best.pnl > 0:
            analysis.strengths.append(
                f"**האסטרטגיה החזקה ביותר שלך היא '{best.strategy}',** "
                f"שהניבה רווח של {format_currency(best.pnl)}."
            )
        worst = analysis.strategies[-1]
        if worst.pnl < 0:
            analysis.weaknesses.append(
                f"**האסטרטגיה '{worst.strategy}' היא נקודת התורפה שלך,** "
                f"עם הפסד כולל של {format_currency(worst.pnl)}."
            )

    wins = [t.pnl for t in trades if t.pnl > 0]
    losses = [t.pnl for t in trades if t.pnl < 0]
    analysis.avg_win = sum(wins) / len(wins) if wins else 0.0
    analysis.avg_loss = sum(losses) / len(losses) if losses else 0.0

    if analysis.avg_win > 0:
        analysis.strengths.append(
            f"**הרווח הממוצע שלך בעסקה מנצחת הוא {format_currency(analysis.avg_win)},** "
            "מה שמראה שאתה נותן לרווחים לגדול."
        )
    if abs(analysis.avg_loss) > analysis.avg_win and analysis.avg_loss != 0:
        analysis.weaknesses.append(
            f"**ההפסד הממוצע שלך ({format_currency(abs(analysis.avg_loss))}) גדול מהרווח הממוצע,** "
            "מה שמרמז שאתה אולי נותן להפסדים לרוץ יותר מדי."
        )

    return analysis
