"""Tests for CLI helpers and commands.

**Feature: trade-journal**
"""

import tempfile
from pathlib import Path

import pytest
from click.testing import CliRunner
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.cli.main import LAZY_SUBCOMMANDS, cli
from tradejournal.cli.stats import progress_bar
from tradejournal.cli.trades import MAX_IMAGES, build_trade, filter_trade_list, signed_pnl
from tradejournal.config import AppConfig, load_config
from tradejournal.db.store import TradeStore
from tests.conftest import make_trade


@pytest.fixture
def journal(monkeypatch):
    """Point the CLI at a temporary config and database."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "journal.db"
        config_path = Path(tmpdir) / "config.toml"
        config_path.write_text(f'[journal]\ndb_path = "{db_path.as_posix()}"\n')
        monkeypatch.setenv("TRADEJOURNAL_CONFIG", str(config_path))
        yield TradeStore(db_path)


class TestTradeForm:
    """
    **Feature: trade-journal, Property 7: Outcome Sign**

    *For any* amount, the chosen outcome decides the sign of the stored P&L.
    """

    @given(
        pnl=st.floats(min_value=-10000, max_value=10000, allow_nan=False),
        status=st.sampled_from([None, "win", "loss"]),
    )
    @settings(max_examples=50)
    def test_status_forces_sign(self, pnl: float, status):
        trade = build_trade("nq", pnl, "smt", status=status)

        assert trade.symbol == "NQ"
        assert trade.pnl == signed_pnl(pnl, status)
        if status is None:
            assert trade.status == ("win" if pnl >= 0 else "loss")
        else:
            assert trade.status == status

    def test_image_limit(self):
        images = tuple(f"img{i}.png" for i in range(MAX_IMAGES + 1))
        with pytest.raises(ValueError):
            build_trade("NQ", 100, "smt", images=images)


class TestTradeList:
    """Search, outcome filter and sort for the list view."""

    def test_search_fields(self, sample_trades):
        notes = make_trade("BTC", 50, trade_id=9, strategy="amd").model_copy(
            update={"notes": "Great SMT divergence"}
        )
        trades = sample_trades + [notes]

        result = filter_trade_list(trades, search="smt")

        assert {t.id for t in result} == {1, 4, 9}

    def test_outcome_filter(self, sample_trades):
        assert {t.id for t in filter_trade_list(sample_trades, outcome="loss")} == {2, 3}
        assert len(filter_trade_list(sample_trades, outcome="all")) == 5

    @pytest.mark.parametrize(
        "sort_by, expected",
        [
            ("date", [5, 4, 3, 2, 1]),
            ("pnl", [4, 1, 5, 3, 2]),
            ("rr", [4, 1, 2, 3, 5]),
            ("symbol", [1, 3, 5, 2, 4]),
        ],
    )
    def test_sort(self, sample_trades, sort_by, expected):
        assert [t.id for t in filter_trade_list(sample_trades, sort_by=sort_by)] == expected


class TestConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.toml") == AppConfig()

    def test_invalid_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[withdrawal]\ntarget_days = -1\n")
        assert load_config(path) == AppConfig()

    def test_values(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            "[assistant]\nsummary_includes_withdrawals = false\n"
            "[assistant.strategies]\norb = [\"opening range\"]\n"
            "[withdrawal]\ntarget_days = 3\n"
        )

        config = load_config(path)

        assert config.assistant.summary_includes_withdrawals is False
        assert config.assistant.strategies == {"orb": ["opening range"]}
        assert config.withdrawal.target_days == 3


class TestCommands:
    """End-to-end runs of the CLI against a temporary journal."""

    def test_lazy_commands_listed(self):
        result = CliRunner().invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in LAZY_SUBCOMMANDS:
            assert name in result.output

    def test_add_and_list(self, journal):
        runner = CliRunner()

        result = runner.invoke(cli, ["add", "NQ", "250", "-s", "smt", "--rr", "2"])
        assert result.exit_code == 0, result.output

        trades = journal.list_trades()
        assert len(trades) == 1
        assert trades[0].pnl == 250
        assert trades[0].rr == 2

        result = runner.invoke(cli, ["trades"])
        assert result.exit_code == 0
        assert "NQ" in result.output

    def test_add_loss_status(self, journal):
        result = CliRunner().invoke(cli, ["add", "ES", "120", "-s", "ifvg", "--status", "loss"])

        assert result.exit_code == 0
        assert journal.list_trades()[0].pnl == -120

    def test_edit_and_delete(self, journal):
        stored = journal.create_trade(make_trade("NQ", 100))
        runner = CliRunner()

        result = runner.invoke(cli, ["edit", str(stored.id), "--pnl", "-40"])
        assert result.exit_code == 0, result.output
        edited = journal.get_trade(stored.id)
        assert edited.pnl == -40
        assert edited.status == "loss"

        result = runner.invoke(cli, ["delete", str(stored.id), "--yes"])
        assert result.exit_code == 0
        assert journal.get_trade(stored.id) is None

    def test_edit_missing_trade(self, journal):
        result = CliRunner().invoke(cli, ["edit", "99", "--pnl", "10"])
        assert result.exit_code == 1

    def test_withdraw(self, journal):
        result = CliRunner().invoke(cli, ["withdraw", "500"])

        assert result.exit_code == 0
        assert journal.list_trades()[0].is_withdrawal

    def test_withdraw_rejects_zero(self, journal):
        result = CliRunner().invoke(cli, ["withdraw", "0"])
        assert result.exit_code == 1
        assert journal.list_trades() == []

    def test_chat_one_shot_applies_actions(self, journal):
        result = CliRunner().invoke(cli, ["chat", "profit 300 on NQ smt"])

        assert result.exit_code == 0, result.output
        trades = journal.list_trades()
        assert len(trades) == 1
        assert trades[0].symbol == "NQ"
        assert trades[0].strategy == "smt"

    def test_chat_repl(self, journal):
        result = CliRunner().invoke(cli, ["chat"], input="add NQ\nprofit 80 smt\nexit\n")

        assert result.exit_code == 0, result.output
        assert len(journal.list_trades()) == 1

    @pytest.mark.parametrize("command", [["dashboard"], ["calendar"], ["funded"], ["payout"], ["goals", "list"]])
    def test_views_render(self, journal, command):
        journal.create_trade(make_trade("NQ", 150))

        result = CliRunner().invoke(cli, command)

        assert result.exit_code == 0, result.output

    def test_funded_size_saved(self, journal):
        result = CliRunner().invoke(cli, ["funded", "--size", "150K"])

        assert result.exit_code == 0
        assert journal.get_funded_settings().account_size == "150K"

    def test_goals_remove_default_rejected(self, journal):
        default = journal.get_goals()[0]

        result = CliRunner().invoke(cli, ["goals", "remove", str(default.id)])

        assert result.exit_code == 1
        assert len(journal.get_goals()) == 3


def test_progress_bar_clamped():
    assert progress_bar(150).endswith("100.0%")
    assert progress_bar(-5).endswith("0.0%")
