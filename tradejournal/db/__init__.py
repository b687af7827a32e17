"""Persistence layer for the trading journal."""

from tradejournal.db.base import BaseTradeStore, TradeNotFoundError
from tradejournal.db.store import TradeStore

__all__ = ["BaseTradeStore", "TradeNotFoundError", "TradeStore"]
