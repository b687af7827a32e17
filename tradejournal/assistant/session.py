"""Conversation orchestration for the trading assistant.

A ``ConversationSession`` owns the transcript and dialogue state of one
conversation. Each turn runs extraction, intent classification, the
pending-trade override, handler dispatch and the state update, in that
order, and returns the reply together with any trade actions.
"""

import asyncio
import logging
import random
import threading
from datetime import datetime
from typing import Any, Callable, Optional

from tradejournal.assistant.context import ConversationContext, TurnResponse
from tradejournal.assistant.entities import extract_entities
from tradejournal.assistant.handlers import (
    handle_add_trade,
    handle_analysis,
    handle_casual_greeting,
    handle_compare_strategies,
    handle_delete_trade,
    handle_get_summary,
    handle_greeting,
    handle_how_are_you,
    handle_search_trades,
    handle_unknown,
    handle_update_trade,
    handle_what_now,
)
from tradejournal.assistant.intents import Intent, classify_intent
from tradejournal.config import AssistantSettings
from tradejournal.models import Trade

logger = logging.getLogger(__name__)

INITIAL_GREETING = (
    "שלום! אני מאמן המסחר האישי שלך. אני מבין עברית ואנגלית, זוכר את השיחות שלנו, "
    "ויכול לעזור לך לנתח את הביצועים, לתעד עסקאות, ועוד.\n\nאיך אני יכול לעזור לך היום?"
)

DEFAULT_SESSION_ID = "default"


class ConversationSession:
    """State and turn processing for a single conversation.

    Turns on one session are serialized by a lock, so a session may be
    shared between threads. Separate conversations need separate sessions.
    """

    def __init__(
        self,
        session_id: str = DEFAULT_SESSION_ID,
        settings: Optional[AssistantSettings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the session.

        Args:
            session_id: Identifier of the conversation.
            settings: Assistant settings. Uses defaults if not specified.
            clock: Source of the current time, for relative dates.
        """
        self.session_id = session_id
        self.settings = settings or AssistantSettings()
        self._clock = clock or datetime.now
        self._lock = threading.Lock()
        self.transcript: list[dict[str, str]] = []
        self.context = ConversationContext()

    def reset(self) -> None:
        """Clear the transcript and dialogue state."""
        with self._lock:
            self.transcript = []
            self.context = ConversationContext()

    def _resolve_intent(self, text: str) -> Intent:
        intent = classify_intent(text)
        # A follow-up while a trade is incomplete keeps filling that trade
        if (
            self.context.last_intent == "add_trade"
            and self.context.pending_trade
            and intent != "get_analysis"
        ):
            return "add_trade"
        return intent

    def _dispatch(
        self,
        intent: Intent,
        entities: dict[str, Any],
        text: str,
        trades: list[Trade],
        now: datetime,
    ) -> TurnResponse:
        if intent == "add_trade":
            return handle_add_trade(
                entities, text, self.context, now, self.settings.strategies
            )
        if intent == "search_trades":
            return handle_search_trades(entities, trades)
        if intent == "get_summary":
            return handle_get_summary(trades, self.settings.summary_includes_withdrawals)
        if intent == "get_analysis":
            return handle_analysis(trades)
        if intent == "compare_strategies":
            return handle_compare_strategies(entities, trades)
        if intent == "update_trade":
            return handle_update_trade(entities, text, trades, self.context, now)
        if intent == "delete_trade":
            return handle_delete_trade(entities, trades, self.context)
        if intent == "greeting":
            return handle_greeting()
        if intent == "casual_greeting":
            return handle_casual_greeting(trades)
        if intent == "how_are_you":
            return handle_how_are_you()
        if intent == "what_now":
            return handle_what_now(trades, now)
        return handle_unknown()

    def process_turn(self, text: str, trades: list[Trade]) -> TurnResponse:
        """Handle one user message and update the conversation state.

        Faults inside extraction or a handler are logged and answered with
        the generic fallback reply; this method does not raise.

        Args:
            text: The user's message.
            trades: Current trade history (read-only).

        Returns:
            Reply text and requested trade actions.
        """
        with self._lock:
            now = self._clock()
            self.transcript.append({"role": "user", "content": text})

            try:
                entities = extract_entities(text, now, self.settings.strategies)
                intent = self._resolve_intent(text)
                logger.debug("Session %s: intent=%s entities=%s", self.session_id, intent, entities)
                response = self._dispatch(intent, entities, text, trades, now)
            except Exception:
                logger.exception("Failed to handle message in session %s", self.session_id)
                intent = "unknown"
                response = handle_unknown()

            self.context.last_intent = intent
            if intent != "add_trade":
                self.context.pending_trade = None

            self.transcript.append({"role": "assistant", "content": response.content})
            return response

    async def submit_turn(self, text: str, trades: list[Trade]) -> TurnResponse:
        """Asynchronous entry point for a turn.

        The turn runs in a worker thread so the event loop stays free while
        the session lock is held. State is fully updated before the optional
        reply delay, so a caller that stops waiting leaves the session
        consistent.
        """
        response = await asyncio.to_thread(self.process_turn, text, list(trades))
        if self.settings.reply_delay > 0:
            await asyncio.sleep(self.settings.reply_delay * (1 + random.random()))
        return response

    def submit_turn_sync(self, text: str, trades: list[Trade]) -> TurnResponse:
        """Run a turn synchronously.

        Must not be called from inside a running event loop.
        """
        return asyncio.run(self.submit_turn(text, trades))


class SessionRegistry:
    """Conversation sessions keyed by session ID."""

    def __init__(self, settings: Optional[AssistantSettings] = None):
        self.settings = settings or AssistantSettings()
        self._sessions: dict[str, ConversationSession] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str = DEFAULT_SESSION_ID) -> ConversationSession:
        """Get the session for an ID, creating it on first use."""
        with self._lock:
            if session_id not in self._sessions:
                self._sessions[session_id] = ConversationSession(session_id, self.settings)
            return self._sessions[session_id]

    def reset(self, session_id: str = DEFAULT_SESSION_ID) -> None:
        """Reset a session to its initial state. Unknown IDs are ignored."""
        with self._lock:
            session = self._sessions.get(session_id)
        if session is not None:
            session.reset()

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)


_registry = SessionRegistry()


async def submit_turn(
    text: str, trades: list[Trade], session_id: str = DEFAULT_SESSION_ID
) -> TurnResponse:
    """Send a message to a conversation of the process-wide registry."""
    return await _registry.get(session_id).submit_turn(text, trades)


def reset_conversation(session_id: str = DEFAULT_SESSION_ID) -> None:
    """Reset a conversation of the process-wide registry."""
    _registry.reset(session_id)
