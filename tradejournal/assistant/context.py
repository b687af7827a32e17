"""Conversation state and turn result models."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from tradejournal.assistant.intents import Intent

ActionType = Literal["add_trade", "update_trade", "delete_trade"]
DialogueState = Literal["idle", "awaiting_trade_fields"]


class Action(BaseModel):
    """A trade mutation requested by the assistant.

    Payloads by type:
        add_trade: full trade fields.
        update_trade: ``{"id": ..., "updates": {...}}``.
        delete_trade: ``{"id": ...}``.
    """

    type: ActionType = Field(..., description="Mutation kind")
    payload: dict[str, Any] = Field(default_factory=dict, description="Mutation data")

    model_config = {"frozen": True}


class TurnResponse(BaseModel):
    """The assistant's reply to one message."""

    content: str = Field(..., description="Markdown reply text")
    actions: list[Action] = Field(default_factory=list, description="Requested mutations")

    model_config = {"frozen": True}


class ConversationContext(BaseModel):
    """Mutable state carried between turns of one conversation."""

    last_intent: Optional[Intent] = None
    pending_trade: Optional[dict[str, Any]] = None
    last_added_trade: Optional[dict[str, Any]] = None

    @property
    def state(self) -> DialogueState:
        return "awaiting_trade_fields" if self.pending_trade else "idle"
