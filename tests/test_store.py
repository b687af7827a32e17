"""Property-based tests for the trade store.

**Feature: trade-journal**
"""

import tempfile
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from tradejournal.db.base import TradeNotFoundError
from tradejournal.db.store import DEFAULT_GOALS, TradeStore
from tradejournal.models import ChallengeRules, Goal, Trade, TradeUpdate
from tests.conftest import NOW, make_trade


class TestDatabaseSchemaCompleteness:
    """
    **Feature: trade-journal, Property 1: Database Schema Completeness**

    *For any* fresh database, all required tables (trades, goals,
    personal_notes, funded_account_settings) should exist.
    """

    def test_schema_completeness(self, temp_store: TradeStore):
        tables = temp_store.get_tables()

        for table in TradeStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    def test_stats_counts_rows(self, temp_store: TradeStore):
        temp_store.create_trade(make_trade())
        stats = temp_store.get_stats()

        assert stats["trades"] == 1
        assert stats["goals"] == 0


class TestTradePersistence:
    """
    **Feature: trade-journal, Property 2: Trade Persistence Round Trip**

    *For any* valid trade, storing and reading it back yields the same
    fields with a new ID.
    """

    @given(
        symbol=st.sampled_from(["NQ", "ES", "BTC", "AAPL"]),
        pnl=st.floats(min_value=-10000, max_value=10000, allow_nan=False),
        rr=st.one_of(st.none(), st.floats(min_value=0, max_value=10, allow_nan=False)),
        images=st.lists(st.text(alphabet="abcdef/.:", min_size=1, max_size=20), max_size=5),
        followed_plan=st.booleans(),
    )
    @settings(max_examples=30, deadline=None)
    def test_round_trip(self, symbol, pnl, rr, images, followed_plan):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = TradeStore(Path(tmpdir) / "test.db")
            trade = Trade(
                symbol=symbol,
                status="win" if pnl >= 0 else "loss",
                pnl=pnl,
                date=NOW,
                strategy="smt",
                notes="note",
                image_urls=images,
                rr=rr,
                followed_plan=followed_plan,
            )

            stored = store.create_trade(trade)
            loaded = store.get_trade(stored.id)

            assert loaded == stored
            assert loaded.model_dump(exclude={"id"}) == trade.model_dump(exclude={"id"})

    def test_list_newest_first(self, temp_store: TradeStore):
        for days_ago in [3, 0, 5, 1]:
            temp_store.create_trade(make_trade(days_ago=days_ago))

        dates = [t.date for t in temp_store.list_trades()]
        assert dates == sorted(dates, reverse=True)

    def test_get_trades_by_day(self, temp_store: TradeStore):
        temp_store.create_trade(make_trade("NQ", days_ago=0))
        temp_store.create_trade(make_trade("ES", days_ago=1))

        trades = temp_store.get_trades(NOW.date() - timedelta(days=1))

        assert [t.symbol for t in trades] == ["ES"]


class TestTradeUpdates:
    """Partial updates keep the status/P&L rule."""

    def test_partial_update(self, temp_store: TradeStore):
        stored = temp_store.create_trade(make_trade("NQ", 100, rr=1.0))

        updated = temp_store.update_trade(stored.id, TradeUpdate(rr=2.5, notes="moved stop"))

        assert updated.rr == 2.5
        assert updated.notes == "moved stop"
        assert updated.pnl == 100
        assert temp_store.get_trade(stored.id) == updated

    def test_update_breaking_sign_rule_rejected(self, temp_store: TradeStore):
        stored = temp_store.create_trade(make_trade("NQ", 100))

        with pytest.raises(ValidationError):
            temp_store.update_trade(stored.id, TradeUpdate(pnl=-50))

        assert temp_store.get_trade(stored.id).pnl == 100

    def test_update_missing(self, temp_store: TradeStore):
        with pytest.raises(TradeNotFoundError) as exc_info:
            temp_store.update_trade(42, TradeUpdate(pnl=1))
        assert exc_info.value.trade_id == 42

    def test_delete(self, temp_store: TradeStore):
        stored = temp_store.create_trade(make_trade())
        temp_store.delete_trade(stored.id)

        assert temp_store.get_trade(stored.id) is None
        with pytest.raises(TradeNotFoundError):
            temp_store.delete_trade(stored.id)


class TestWithdrawals:
    """
    **Feature: trade-journal, Property 3: Withdrawal Records**

    *For any* positive amount, a withdrawal is stored with the amount as
    negative P&L.
    """

    @given(st.floats(min_value=0.01, max_value=1_000_000, allow_nan=False))
    @settings(max_examples=20, deadline=None)
    def test_withdrawal_record(self, amount: float):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = TradeStore(Path(tmpdir) / "test.db")

            withdrawal = store.add_withdrawal(amount, when=NOW)

            assert withdrawal.symbol == "WITHDRAWAL"
            assert withdrawal.status == "withdrawal"
            assert withdrawal.pnl == -amount
            assert withdrawal.is_withdrawal

    def test_notes(self, temp_store: TradeStore):
        withdrawal = temp_store.add_withdrawal(1500)
        assert withdrawal.notes == "Withdrew $1,500.00"

    @pytest.mark.parametrize("amount", [0, -10])
    def test_invalid_amount(self, temp_store: TradeStore, amount: float):
        with pytest.raises(ValueError):
            temp_store.add_withdrawal(amount)
        assert temp_store.list_trades() == []


class TestGoals:
    """Default goals are seeded once and cannot be deleted."""

    def test_defaults_seeded(self, temp_store: TradeStore):
        goals = temp_store.get_goals()

        assert [g.title for g in goals] == [g.title for g in DEFAULT_GOALS]
        assert all(g.is_default for g in goals)
        assert len(temp_store.get_goals()) == 3

    def test_add_edit_delete(self, temp_store: TradeStore):
        temp_store.get_goals()
        goal = temp_store.save_goal(Goal(title="Green weeks", target=4, unit="weeks"))

        assert goal.id is not None
        updated = temp_store.save_goal(goal.model_copy(update={"current": 2}))
        assert updated.current == 2
        assert temp_store.delete_goal(goal.id) is True
        assert len(temp_store.get_goals()) == 3

    def test_default_goal_not_deleted(self, temp_store: TradeStore):
        default = temp_store.get_goals()[0]

        assert temp_store.delete_goal(default.id) is False
        assert len(temp_store.get_goals()) == 3

    def test_save_missing_goal(self, temp_store: TradeStore):
        with pytest.raises(LookupError):
            temp_store.save_goal(Goal(id=99, title="Ghost", target=1))


class TestSettingsRows:
    """Personal notes and funded settings are single rows."""

    def test_personal_notes(self, temp_store: TradeStore):
        assert temp_store.get_personal_notes() == ""

        temp_store.save_personal_notes("Only A+ setups")
        temp_store.save_personal_notes("No trading after 11")

        assert temp_store.get_personal_notes() == "No trading after 11"

    def test_funded_settings(self, temp_store: TradeStore):
        assert temp_store.get_funded_settings() is None

        rules = ChallengeRules(
            account_size="50K", profit_target=3000, max_drawdown=2000, starting_balance=50000
        )
        temp_store.save_funded_settings(rules)

        assert temp_store.get_funded_settings() == rules


def test_day_filter_uses_calendar_day(temp_store: TradeStore):
    late = make_trade().model_copy(update={"date": datetime(2025, 3, 12, 23, 59)})
    temp_store.create_trade(late)
    assert len(temp_store.get_trades(date(2025, 3, 12))) == 1
