"""Intent classification for chat messages.

Intents are decided by an ordered table of keyword rules; the first rule
whose predicate matches wins. The order is the tie-break: a message that
mentions both analysis and P&L is an analysis request, never a new trade.

    Priority  Intent              Matches
    --------  ------------------  ------------------------------------
    1         get_analysis        analysis terms
    2         add_trade           add terms or any P&L alias
    3         update_trade        update terms
    4         delete_trade        delete terms
    5         search_trades       search terms
    6         compare_strategies  compare terms
    7         get_summary         summary terms or win-rate alias
    8         casual_greeting     casual greetings
    9         how_are_you         "how are you"
    10        what_now            "what now"
    11        greeting            bare greetings
    -         unknown             nothing matched
"""

from typing import Callable, Literal, NamedTuple

from tradejournal.assistant.terms import (
    ADD_TERMS,
    ANALYSIS_TERMS,
    CASUAL_GREETINGS,
    COMPARE_TERMS,
    DELETE_TERMS,
    GREETINGS,
    HOW_ARE_YOU,
    PNL_TERMS,
    SEARCH_TERMS,
    SUMMARY_TERMS,
    UPDATE_TERMS,
    WHAT_NOW,
    WINRATE_TERMS,
    contains_any,
)

Intent = Literal[
    "get_analysis",
    "add_trade",
    "update_trade",
    "delete_trade",
    "search_trades",
    "compare_strategies",
    "get_summary",
    "casual_greeting",
    "how_are_you",
    "what_now",
    "greeting",
    "unknown",
]


class IntentRule(NamedTuple):
    """A single row of the priority table."""

    intent: Intent
    predicate: Callable[[str], bool]


def _keywords(*groups: list[str]) -> Callable[[str], bool]:
    terms = [term for group in groups for term in group]
    return lambda text: contains_any(text, terms)


INTENT_RULES: list[IntentRule] = [
    IntentRule("get_analysis", _keywords(ANALYSIS_TERMS)),
    IntentRule("add_trade", _keywords(ADD_TERMS, PNL_TERMS)),
    IntentRule("update_trade", _keywords(UPDATE_TERMS)),
    IntentRule("delete_trade", _keywords(DELETE_TERMS)),
    IntentRule("search_trades", _keywords(SEARCH_TERMS)),
    IntentRule("compare_strategies", _keywords(COMPARE_TERMS)),
    IntentRule("get_summary", _keywords(SUMMARY_TERMS, WINRATE_TERMS)),
    IntentRule("casual_greeting", _keywords(CASUAL_GREETINGS)),
    IntentRule("how_are_you", _keywords(HOW_ARE_YOU)),
    IntentRule("what_now", _keywords(WHAT_NOW)),
    IntentRule("greeting", _keywords(GREETINGS)),
]

VALID_INTENTS: tuple[str, ...] = tuple(rule.intent for rule in INTENT_RULES) + ("unknown",)


def classify_intent(text: str) -> Intent:
    """Classify a message into exactly one intent.

    Args:
        text: Raw utterance.

    Returns:
        The intent of the first matching rule, or ``"unknown"``.
    """
    lowered = text.lower()
    for rule in INTENT_RULES:
        if rule.predicate(lowered):
            return rule.intent
    return "unknown"
