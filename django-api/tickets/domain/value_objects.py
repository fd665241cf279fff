"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class BuyerId:
    """Unique identifier for a Buyer."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ConcertId:
    """Unique identifier for a Concert."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class OrderId:
    """Unique identifier for an Order."""

    value: UUID

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class AddonId:
    """Unique identifier for an order add-on."""

    value: UUID

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Money:
    """Price in the smallest currency unit."""

    amount: int

    def __post_init__(self) -> None:
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValueError("Money amount must be an integer")
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def times(self, quantity: "Quantity") -> "Money":
        return Money(amount=self.amount * quantity.value)

    def __str__(self) -> str:
        return str(self.amount)


@dataclass(frozen=True)
class Stock:
    """Non-negative count of tickets left for sale."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Stock cannot be negative")

    def covers(self, quantity: "Quantity") -> bool:
        return self.value >= quantity.value


@dataclass(frozen=True)
class Quantity:
    """Strictly positive number of tickets requested in one purchase."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("Quantity must be an integer")
        if self.value <= 0:
            raise ValueError("Quantity must be positive")
