"""Data models for the trading journal."""

from tradejournal.models.trade import Trade, TradeStatus, TradeUpdate
from tradejournal.models.goal import Goal
from tradejournal.models.funded import ChallengeRules

__all__ = [
    "Trade",
    "TradeStatus",
    "TradeUpdate",
    "Goal",
    "ChallengeRules",
]
