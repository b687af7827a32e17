"""Shared fixtures for the trading journal tests."""

import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from tradejournal.db.store import TradeStore
from tradejournal.models import Trade

NOW = datetime(2025, 3, 12, 15, 30)


def make_trade(
    symbol: str = "NQ",
    pnl: float = 100.0,
    days_ago: float = 0,
    strategy: str | None = "smt",
    trade_id: int | None = None,
    rr: float | None = None,
    status: str | None = None,
) -> Trade:
    """Build a trade relative to the fixed test clock."""
    return Trade(
        id=trade_id,
        symbol=symbol,
        status=status or ("win" if pnl >= 0 else "loss"),
        pnl=pnl,
        date=NOW - timedelta(days=days_ago),
        strategy=strategy,
        rr=rr,
    )


@pytest.fixture
def temp_store():
    """Create a store backed by a temporary database."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield TradeStore(Path(tmpdir) / "test.db")


@pytest.fixture
def sample_trades() -> list[Trade]:
    """Three ES and two NQ trades on different days."""
    return [
        make_trade("ES", 200, days_ago=4, trade_id=1, strategy="smt", rr=2.0),
        make_trade("NQ", -150, days_ago=3, trade_id=2, strategy="ifvg", rr=1.0),
        make_trade("ES", -80, days_ago=2, trade_id=3, strategy="ifvg"),
        make_trade("NQ", 300, days_ago=1, trade_id=4, strategy="smt", rr=3.0),
        make_trade("ES", 120, days_ago=0, trade_id=5, strategy="turtle soup"),
    ]
