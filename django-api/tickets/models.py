"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models

from tickets.domain.models import DEFAULT_ROLE


class Buyer(models.Model):
    """Persistence model for ticket buyers."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    handle = models.CharField(max_length=150, unique=True)
    password_hash = models.CharField(max_length=255)
    role = models.CharField(max_length=32, default=DEFAULT_ROLE)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.handle


class Concert(models.Model):
    """Persistence model for concerts. `stock` is the contended counter."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    artist = models.CharField(max_length=255)
    price = models.PositiveIntegerField()
    stock = models.PositiveIntegerField()
    venue = models.CharField(max_length=255)
    date = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date"]
        indexes = [
            models.Index(fields=["date"], name="concert_date_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Order(models.Model):
    """Persistence model for completed purchases. Never updated after insert."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    buyer = models.ForeignKey(Buyer, on_delete=models.PROTECT, related_name="orders")
    concert = models.ForeignKey(
        Concert, on_delete=models.PROTECT, related_name="orders"
    )
    quantity = models.PositiveIntegerField()
    total_price = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["buyer", "-created_at"], name="order_buyer_recent_idx"
            ),
            models.Index(fields=["buyer", "concert"], name="order_buyer_concert_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name="order_quantity_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.buyer} - {self.concert} x{self.quantity}"


class OrderAddon(models.Model):
    """Persistence model for add-ons attached to an order."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="addons")
    item_name = models.CharField(max_length=100)
    position = models.PositiveSmallIntegerField()

    class Meta:
        ordering = ["order", "position"]
        indexes = [
            models.Index(fields=["order", "position"], name="addon_order_position_idx"),
        ]

    def __str__(self) -> str:
        return self.item_name
