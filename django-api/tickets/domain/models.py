"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in tickets/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from tickets.domain.value_objects import (
    AddonId,
    BuyerId,
    ConcertId,
    Money,
    OrderId,
    Stock,
)

DEFAULT_ROLE = "customer"


@dataclass(frozen=True)
class Buyer:
    """Domain representation of an account that can buy tickets."""

    id: BuyerId
    handle: str
    role: str
    created_at: datetime


@dataclass(frozen=True)
class Concert:
    """Domain representation of a sellable concert."""

    id: ConcertId
    name: str
    artist: str
    price: Money
    stock: Stock
    venue: str
    date: datetime
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Addon:
    """A named extra item attached to one order."""

    id: AddonId
    order_id: OrderId
    item_name: str


@dataclass(frozen=True)
class Order:
    """Domain representation of a completed purchase."""

    id: OrderId
    buyer_id: BuyerId
    concert_id: ConcertId
    quantity: int
    total_price: Money
    created_at: datetime
    updated_at: datetime
    addons: tuple[Addon, ...] = ()


@dataclass(frozen=True)
class OrderHistoryEntry:
    """An order joined with the concert it was bought for."""

    order: Order
    concert: Concert

    @property
    def addons(self) -> tuple[Addon, ...]:
        return self.order.addons
