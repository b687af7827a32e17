"""Property-based tests for entity extraction.

**Feature: trading-assistant**
"""

from datetime import datetime

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.assistant.entities import (
    extract_entities,
    extract_strategies,
    extract_symbol,
    parse_numbers,
    split_date,
)
from tradejournal.assistant.terms import LOSS_TERMS, strategy_groups

NOW = datetime(2025, 3, 12, 15, 30)


class TestLossAmountsAreNegative:
    """
    **Feature: trading-assistant, Property 1: Loss Sign**

    *For any* utterance with a loss alias and a positive number, the
    extracted P&L is negative.
    """

    @given(
        loss_term=st.sampled_from(LOSS_TERMS),
        amount=st.decimals(min_value="0.01", max_value="100000", places=2),
    )
    @settings(max_examples=30, deadline=None)
    def test_loss_alias_makes_pnl_negative(self, loss_term: str, amount):
        entities = extract_entities(f"{loss_term} {amount} on NQ", now=NOW)

        assert entities["pnl"] < 0
        assert entities["pnl"] == -float(amount)

    def test_profit_stays_positive(self):
        entities = extract_entities("profit 250 on NQ", now=NOW)
        assert entities["pnl"] == 250

    def test_explicit_negative_kept(self):
        entities = extract_entities("pnl -75", now=NOW)
        assert entities["pnl"] == -75

    def test_hebrew_loss(self):
        entities = extract_entities("הפסדתי 200 על NQ", now=NOW)
        assert entities["pnl"] == -200
        assert entities["symbol"] == "NQ"


class TestNumberParsing:
    """Numbers are parsed after currency signs and thousands separators are stripped."""

    def test_currency_and_commas_stripped(self):
        assert parse_numbers("made $1,250.50 today") == [1250.5]
        assert parse_numbers("₪300 and €20") == [300.0, 20.0]

    def test_only_first_number_used(self):
        entities = extract_entities("profit 100 then 200", now=NOW)
        assert entities["pnl"] == 100

    def test_rr_is_absolute(self):
        entities = extract_entities("r:r -2.5", now=NOW)
        assert entities["rr"] == 2.5

    def test_number_without_keyword_ignored(self):
        entities = extract_entities("NQ 150", now=NOW)
        assert "pnl" not in entities
        assert "rr" not in entities


class TestSymbolExtraction:
    """Known instruments match in any case; other tickers must be upper-case."""

    def test_known_symbol_lower_case(self):
        assert extract_symbol("took a long on nq") == "NQ"

    def test_upper_case_ticker(self):
        assert extract_symbol("bought AAPL calls") == "AAPL"

    def test_keywords_never_symbols(self):
        assert extract_symbol("lost 150 dollars, it was a breakout") is None
        assert extract_symbol("SMT setup, PNL was great") is None

    def test_common_words_skipped(self):
        assert extract_symbol("BUY THE dip on ES") == "ES"

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("ADD NQ 250 smt", "NQ"),
            ("DELETE ES", "ES"),
            ("SHOW ME BTC trades", "BTC"),
            ("UPDATE ETH rr 2", "ETH"),
        ],
    )
    def test_command_words_in_capitals_skipped(self, text: str, expected: str):
        assert extract_symbol(text) == expected

    @given(st.sampled_from(["nq", "NQ", "Nq", "es", "BTC", "eth"]))
    @settings(max_examples=10)
    def test_known_symbols_upper_cased(self, token: str):
        assert extract_symbol(f"trade on {token}") == token.upper()


class TestStrategyExtraction:
    """Strategy tags come from the alias groups only."""

    def test_multiple_groups(self):
        assert extract_strategies("smt with an ifvg entry") == ["smt", "ifvg"]

    def test_hebrew_alias(self):
        assert extract_strategies("עסקת צבי מרק") == ["turtle soup"]

    def test_keyword_groups_are_not_strategies(self):
        assert extract_strategies("pnl and win rate and rr") == []

    def test_configured_groups(self):
        extra = {"ORB": ["opening range"]}
        assert extract_strategies("opening range breakout", extra) == ["breakout", "orb"]

    def test_configured_aliases_merge(self):
        groups = strategy_groups({"smt": ["SMT divergence"]})
        assert groups["smt"] == ["smt", "smart money technique", "smt divergence"]


class TestDateExtraction:
    """Relative dates resolve against the reference time."""

    def test_yesterday(self):
        entities = extract_entities("lost 150 on NQ yesterday", now=NOW)
        assert entities["date"].date() == datetime(2025, 3, 11).date()

    def test_amount_is_not_a_date(self):
        entities = extract_entities("profit 150", now=NOW)
        assert "date" not in entities

    @pytest.mark.parametrize(
        "text, pnl",
        [
            ("profit 300 on ES breakout, may have exited early", 300),
            ("log NQ smt profit 250 second entry", 250),
        ],
    )
    def test_ordinary_words_are_not_dates(self, text: str, pnl: float):
        entities = extract_entities(text, now=NOW)

        assert "date" not in entities
        assert entities["pnl"] == pnl

    def test_date_digits_are_not_the_amount(self):
        entities = extract_entities("on 3/10 lost 150 on NQ", now=NOW)

        assert "date" in entities
        assert entities["pnl"] == -150

    def test_split_date_removes_fragment(self):
        day, rest = split_date("edit the trade from 2 days ago to 250", now=NOW)

        assert day.date() == datetime(2025, 3, 10).date()
        assert parse_numbers(rest) == [250.0]
