"""Django ORM implementation of the stores."""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from django.db import IntegrityError, OperationalError, connection, transaction
from django.db.models import F, Sum

from tickets import models
from tickets.domain import (
    Addon,
    AddonId,
    Buyer,
    BuyerId,
    Concert,
    ConcertId,
    Money,
    Order,
    OrderHistoryEntry,
    OrderId,
    Quantity,
    Stock,
)
from tickets.domain.errors import HandleTakenError, PurchaseConflictError
from tickets.stores.interfaces import BuyerStore, TicketStore

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE raised when lock_timeout expires.
LOCK_NOT_AVAILABLE = "55P03"
SQLITE_BUSY_MESSAGE = "database is locked"


def is_lock_contention(exc: OperationalError) -> bool:
    """True when the error means a lock wait ran out, not a broken database."""
    cause = exc.__cause__
    sqlstate = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if sqlstate == LOCK_NOT_AVAILABLE:
        return True
    return SQLITE_BUSY_MESSAGE in str(exc)


def _to_concert(row: models.Concert) -> Concert:
    return Concert(
        id=ConcertId(row.id),
        name=row.name,
        artist=row.artist,
        price=Money(row.price),
        stock=Stock(row.stock),
        venue=row.venue,
        date=row.date,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_addon(row: models.OrderAddon) -> Addon:
    return Addon(
        id=AddonId(row.id),
        order_id=OrderId(row.order_id),
        item_name=row.item_name,
    )


def _to_order(row: models.Order, addons: tuple[Addon, ...] = ()) -> Order:
    return Order(
        id=OrderId(row.id),
        buyer_id=BuyerId(row.buyer_id),
        concert_id=ConcertId(row.concert_id),
        quantity=row.quantity,
        total_price=Money(row.total_price),
        created_at=row.created_at,
        updated_at=row.updated_at,
        addons=addons,
    )


def _to_buyer(row: models.Buyer) -> Buyer:
    return Buyer(
        id=BuyerId(row.id),
        handle=row.handle,
        role=row.role,
        created_at=row.created_at,
    )


class DjangoTicketStore(TicketStore):
    """Relational ticket store using Django ORM.

    Concert rows are locked with SELECT ... FOR UPDATE where the backend
    supports it. SQLite has no row locks; there the database is configured
    with transaction_mode IMMEDIATE so purchase transactions serialize on
    the write lock instead.
    """

    def __init__(self, lock_timeout_ms: int = 5000) -> None:
        self._lock_timeout_ms = lock_timeout_ms

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            with transaction.atomic():
                yield
        except OperationalError as exc:
            if not is_lock_contention(exc):
                raise
            logger.warning("Purchase transaction rolled back on contention: %s", exc)
            raise PurchaseConflictError() from exc

    def list_concerts(self) -> list[Concert]:
        return [_to_concert(row) for row in models.Concert.objects.order_by("date")]

    def get_concert(self, concert_id: ConcertId) -> Concert | None:
        try:
            row = models.Concert.objects.get(pk=concert_id.value)
        except models.Concert.DoesNotExist:
            return None
        return _to_concert(row)

    def lock_concert(self, concert_id: ConcertId) -> Concert | None:
        if connection.vendor == "postgresql":
            with connection.cursor() as cursor:
                # SET does not take bind parameters.
                cursor.execute(
                    "SET LOCAL lock_timeout = %d" % int(self._lock_timeout_ms)
                )
        try:
            row = models.Concert.objects.select_for_update().get(pk=concert_id.value)
        except models.Concert.DoesNotExist:
            return None
        return _to_concert(row)

    def quantity_bought(self, buyer_id: BuyerId, concert_id: ConcertId) -> int:
        result = models.Order.objects.filter(
            buyer_id=buyer_id.value, concert_id=concert_id.value
        ).aggregate(total=Sum("quantity"))
        return result["total"] or 0

    def decrement_stock(self, concert_id: ConcertId, quantity: Quantity) -> None:
        row = models.Concert.objects.get(pk=concert_id.value)
        row.stock = F("stock") - quantity.value
        # save() rather than update() so post_save fires for cache invalidation.
        row.save(update_fields=["stock", "updated_at"])

    def create_order(
        self,
        buyer_id: BuyerId,
        concert_id: ConcertId,
        quantity: Quantity,
        total_price: Money,
    ) -> Order:
        row = models.Order.objects.create(
            buyer_id=buyer_id.value,
            concert_id=concert_id.value,
            quantity=quantity.value,
            total_price=total_price.amount,
        )
        return _to_order(row)

    def create_addons(
        self, order_id: OrderId, item_names: Sequence[str]
    ) -> tuple[Addon, ...]:
        if not item_names:
            return ()
        rows = models.OrderAddon.objects.bulk_create(
            [
                models.OrderAddon(
                    order_id=order_id.value, item_name=name, position=position
                )
                for position, name in enumerate(item_names)
            ]
        )
        return tuple(_to_addon(row) for row in rows)

    def list_orders_for_buyer(self, buyer_id: BuyerId) -> list[OrderHistoryEntry]:
        rows = (
            models.Order.objects.filter(buyer_id=buyer_id.value)
            .select_related("concert")
            .prefetch_related("addons")
            .order_by("-created_at")
        )
        return [
            OrderHistoryEntry(
                order=_to_order(row, tuple(_to_addon(a) for a in row.addons.all())),
                concert=_to_concert(row.concert),
            )
            for row in rows
        ]


class DjangoBuyerStore(BuyerStore):
    """Buyer account store using Django ORM."""

    def create_buyer(self, handle: str, password_hash: str) -> Buyer:
        try:
            with transaction.atomic():
                row = models.Buyer.objects.create(
                    handle=handle, password_hash=password_hash
                )
        except IntegrityError as exc:
            raise HandleTakenError() from exc
        return _to_buyer(row)

    def get_buyer(self, buyer_id: BuyerId) -> Buyer | None:
        try:
            row = models.Buyer.objects.get(pk=buyer_id.value)
        except models.Buyer.DoesNotExist:
            return None
        return _to_buyer(row)

    def get_credentials(self, handle: str) -> tuple[Buyer, str] | None:
        try:
            row = models.Buyer.objects.get(handle=handle)
        except models.Buyer.DoesNotExist:
            return None
        return _to_buyer(row), row.password_hash
