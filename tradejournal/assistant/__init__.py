"""Rule-based trading assistant.

This package turns chat messages (Hebrew or English) into trade-journal
actions:
- entities: amounts, R:R, symbol, strategy tags and dates from free text
- intents: keyword priority table mapping a message to one intent
- handlers: one reply builder per intent
- session: per-conversation state and turn orchestration
- actions: executing emitted actions against a trade store
"""

from tradejournal.assistant.actions import apply_action, apply_actions
from tradejournal.assistant.context import Action, ConversationContext, TurnResponse
from tradejournal.assistant.entities import extract_entities
from tradejournal.assistant.intents import INTENT_RULES, VALID_INTENTS, classify_intent
from tradejournal.assistant.session import (
    INITIAL_GREETING,
    ConversationSession,
    SessionRegistry,
    reset_conversation,
    submit_turn,
)

__all__ = [
    # Turn processing
    "ConversationSession",
    "SessionRegistry",
    "submit_turn",
    "reset_conversation",
    "INITIAL_GREETING",
    # Models
    "Action",
    "ConversationContext",
    "TurnResponse",
    # Building blocks
    "extract_entities",
    "classify_intent",
    "INTENT_RULES",
    "VALID_INTENTS",
    "apply_action",
    "apply_actions",
]
