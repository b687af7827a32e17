"""Property-based tests for intent classification.

**Feature: trading-assistant**
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.assistant.intents import INTENT_RULES, VALID_INTENTS, classify_intent
from tradejournal.assistant.terms import ANALYSIS_TERMS, PNL_TERMS


class TestAnalysisPriority:
    """
    **Feature: trading-assistant, Property 2: Analysis Priority**

    *For any* utterance matching both an analysis alias and a P&L alias,
    the intent is get_analysis.
    """

    @given(
        analysis_term=st.sampled_from(ANALYSIS_TERMS),
        pnl_term=st.sampled_from(PNL_TERMS),
        analysis_first=st.booleans(),
    )
    @settings(max_examples=50)
    def test_analysis_beats_pnl(self, analysis_term: str, pnl_term: str, analysis_first: bool):
        parts = [analysis_term, pnl_term] if analysis_first else [pnl_term, analysis_term]
        assert classify_intent(" ".join(parts)) == "get_analysis"


class TestIntentTable:
    """Each message maps to exactly one intent from the closed set."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("add NQ 250 smt", "add_trade"),
            ("הוסף עסקה", "add_trade"),
            ("profit 300 on ES", "add_trade"),
            ("update the last trade to 200", "update_trade"),
            ("מחק את העסקה האחרונה", "delete_trade"),
            ("show me my ES trades", "search_trades"),
            ("compare smt and ifvg", "compare_strategies"),
            ("סיכום", "get_summary"),
            ("what's my win rate?", "get_summary"),
            ("מה קורה", "casual_greeting"),
            ("how are you?", "how_are_you"),
            ("what now?", "what_now"),
            ("hello", "greeting"),
            ("שלום", "greeting"),
            ("qwerty", "unknown"),
            ("", "unknown"),
        ],
    )
    def test_examples(self, text: str, expected: str):
        assert classify_intent(text) == expected

    def test_case_insensitive(self):
        assert classify_intent("SUMMARY PLEASE") == "get_summary"

    def test_add_beats_update(self):
        assert classify_intent("update pnl to 100") == "add_trade"

    def test_rules_cover_closed_set(self):
        assert len(VALID_INTENTS) == 12
        assert VALID_INTENTS[0] == "get_analysis"
        assert VALID_INTENTS[-1] == "unknown"
        assert [rule.intent for rule in INTENT_RULES][:2] == ["get_analysis", "add_trade"]

    @given(st.text(max_size=40))
    @settings(max_examples=100)
    def test_always_valid(self, text: str):
        assert classify_intent(text) in VALID_INTENTS
