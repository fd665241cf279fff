"""Read-only view of a buyer's past purchases."""

from tickets.domain import BuyerId, OrderHistoryEntry
from tickets.stores.interfaces import TicketStore


class OrderHistoryService:
    """Service for listing a buyer's orders."""

    def __init__(self, store: TicketStore) -> None:
        self._store = store

    def list_orders(self, buyer_id: BuyerId) -> list[OrderHistoryEntry]:
        """Return the buyer's orders, newest first. Empty when there are none."""
        return self._store.list_orders_for_buyer(buyer_id)
