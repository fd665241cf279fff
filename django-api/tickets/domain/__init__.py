from tickets.domain.models import (
    DEFAULT_ROLE,
    Addon,
    Buyer,
    Concert,
    Order,
    OrderHistoryEntry,
)
from tickets.domain.value_objects import (
    AddonId,
    BuyerId,
    ConcertId,
    Money,
    OrderId,
    Quantity,
    Stock,
)

__all__ = [
    "DEFAULT_ROLE",
    "Addon",
    "Buyer",
    "Concert",
    "Order",
    "OrderHistoryEntry",
    "AddonId",
    "BuyerId",
    "ConcertId",
    "OrderId",
    "Money",
    "Quantity",
    "Stock",
]
