"""Funded-account evaluation tracking."""

from pydantic import BaseModel

from tradejournal.models import ChallengeRules, Trade

CHALLENGE_PRESETS: dict[str, ChallengeRules] = {
    "50K": ChallengeRules(account_size="50K", profit_target=3000, max_drawdown=2000, starting_balance=50000),
    "100K": ChallengeRules(account_size="100K", profit_target=6000, max_drawdown=3500, starting_balance=100000),
    "150K": ChallengeRules(account_size="150K", profit_target=9000, max_drawdown=5000, starting_balance=150000),
}

DEFAULT_ACCOUNT_SIZE = "100K"


class FundedProgress(BaseModel):
    """Where an account stands against its challenge rules."""

    total_pnl: float
    current_balance: float
    historical_high: float
    trailing_drawdown: float
    profit_target_pct: float
    drawdown_pct: float
    is_violation: bool
    target_reached: bool


def get_preset(account_size: str) -> ChallengeRules:
    """Get the rules of a preset.

    Raises:
        ValueError: If the preset does not exist.
    """
    try:
        return CHALLENGE_PRESETS[account_size.upper()]
    except KeyError:
        raise ValueError(
            f"Unknown account size: {account_size}. Must be one of {list(CHALLENGE_PRESETS)}"
        )


def calculate_progress(trades: list[Trade], rules: ChallengeRules) -> FundedProgress:
    """Measure progress toward the profit target and the trailing drawdown.

    The balance high is tracked in chronological order; withdrawals lower
    the balance like any other cash movement.
    """
    balance = rules.starting_balance
    high = balance
    for trade in sorted(trades, key=lambda t: t.date):
        balance += trade.pnl
        high = max(high, balance)

    total_pnl = balance - rules.starting_balance
    drawdown = high - balance
    target_pct = min(total_pnl / rules.profit_target * 100, 100) if rules.profit_target else 0.0

    return FundedProgress(
        total_pnl=total_pnl,
        current_balance=balance,
        historical_high=high,
        trailing_drawdown=drawdown,
        profit_target_pct=target_pct,
        drawdown_pct=min(drawdown / rules.max_drawdown * 100, 100),
        is_violation=drawdown > rules.max_drawdown,
        target_reached=total_pnl >= rules.profit_target,
    )
