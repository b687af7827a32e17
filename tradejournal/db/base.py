"""Trade store interface."""

from abc import ABC, abstractmethod

from tradejournal.models import Trade, TradeUpdate


class TradeNotFoundError(LookupError):
    """Raised when a trade ID does not exist in the store."""

    def __init__(self, trade_id: int):
        super().__init__(f"Trade {trade_id} not found")
        self.trade_id = trade_id


class BaseTradeStore(ABC):
    """Abstract base class for trade persistence.

    The assistant only reads trades; writes are requested as actions and
    carried out by whoever owns the store.
    """

    @abstractmethod
    def list_trades(self) -> list[Trade]:
        """Get all trades, newest first."""
        pass

    @abstractmethod
    def create_trade(self, trade: Trade) -> Trade:
        """Persist a new trade.

        Args:
            trade: Trade to store. Its ``id`` is ignored.

        Returns:
            The stored trade with its assigned ID.
        """
        pass

    @abstractmethod
    def update_trade(self, trade_id: int, updates: TradeUpdate) -> Trade:
        """Apply a partial update to a trade.

        Args:
            trade_id: ID of the trade to change.
            updates: Fields to change. Unset fields are left as they are.

        Returns:
            The updated trade.

        Raises:
            TradeNotFoundError: If no trade has this ID.
        """
        pass

    @abstractmethod
    def delete_trade(self, trade_id: int) -> None:
        """Delete a trade.

        Raises:
            TradeNotFoundError: If no trade has this ID.
        """
        pass
