"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractContextManager

from tickets.domain import (
    Addon,
    Buyer,
    BuyerId,
    Concert,
    ConcertId,
    Money,
    Order,
    OrderHistoryEntry,
    OrderId,
    Quantity,
)


class TicketStore(ABC):
    """Interface for concert, order and add-on persistence."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Open a unit of work. Writes inside it commit or roll back together.

        Raises:
            PurchaseConflictError: If lock contention aborted the unit of work.
        """
        ...

    @abstractmethod
    def list_concerts(self) -> list[Concert]:
        """Return all concerts ordered by date ascending."""
        ...

    @abstractmethod
    def get_concert(self, concert_id: ConcertId) -> Concert | None:
        """Return a concert by ID, or None if not found."""
        ...

    @abstractmethod
    def lock_concert(self, concert_id: ConcertId) -> Concert | None:
        """Return a concert and hold it exclusively until the unit of work ends.

        Must be called inside atomic().
        """
        ...

    @abstractmethod
    def quantity_bought(self, buyer_id: BuyerId, concert_id: ConcertId) -> int:
        """Return the total tickets a buyer already holds for a concert."""
        ...

    @abstractmethod
    def decrement_stock(self, concert_id: ConcertId, quantity: Quantity) -> None:
        """Take quantity tickets off a locked concert's stock."""
        ...

    @abstractmethod
    def create_order(
        self,
        buyer_id: BuyerId,
        concert_id: ConcertId,
        quantity: Quantity,
        total_price: Money,
    ) -> Order:
        """Insert an order and return it."""
        ...

    @abstractmethod
    def create_addons(
        self, order_id: OrderId, item_names: Sequence[str]
    ) -> tuple[Addon, ...]:
        """Insert add-ons for an order, keeping the given order."""
        ...

    @abstractmethod
    def list_orders_for_buyer(self, buyer_id: BuyerId) -> list[OrderHistoryEntry]:
        """Return a buyer's orders with concert and add-ons, newest first."""
        ...


class BuyerStore(ABC):
    """Interface for buyer account persistence."""

    @abstractmethod
    def create_buyer(self, handle: str, password_hash: str) -> Buyer:
        """Insert a buyer with the default role.

        Raises:
            HandleTakenError: If the handle already exists.
        """
        ...

    @abstractmethod
    def get_buyer(self, buyer_id: BuyerId) -> Buyer | None:
        """Return a buyer by ID, or None if not found."""
        ...

    @abstractmethod
    def get_credentials(self, handle: str) -> tuple[Buyer, str] | None:
        """Return a buyer and their password hash, or None if not found."""
        ...
