"""Execution of assistant actions against a trade store."""

import logging
from typing import Optional

from tradejournal.assistant.context import Action
from tradejournal.db.base import BaseTradeStore
from tradejournal.models import Trade, TradeUpdate

logger = logging.getLogger(__name__)


def apply_action(store: BaseTradeStore, action: Action) -> Optional[Trade]:
    """Carry out one action.

    Args:
        store: Store to write to.
        action: Action emitted by the assistant.

    Returns:
        The created or updated trade; None for deletions.

    Raises:
        pydantic.ValidationError: If the payload is not a valid trade.
        TradeNotFoundError: If the referenced trade does not exist.
    """
    logger.info("Applying %s: %s", action.type, action.payload)

    if action.type == "add_trade":
        return store.create_trade(Trade.model_validate(action.payload))
    if action.type == "update_trade":
        updates = TradeUpdate.model_validate(action.payload.get("updates", {}))
        return store.update_trade(action.payload["id"], updates)
    if action.type == "delete_trade":
        store.delete_trade(action.payload["id"])
        return None
    raise ValueError(f"Unsupported action type: {action.type}")


def apply_actions(store: BaseTradeStore, actions: list[Action]) -> list[Optional[Trade]]:
    """Carry out actions in order, stopping at the first failure."""
    return [apply_action(store, action) for action in actions]
