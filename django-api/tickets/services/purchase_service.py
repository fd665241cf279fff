"""Purchase service - the only code path that sells tickets.

A purchase runs as one unit of work against the store:
- Lock the concert row
- Check the sale window, the per-account cap and the remaining stock
- Decrement stock, create the order and its add-ons

Any error inside the unit of work rolls every write back.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import datetime

from django.utils import timezone

from tickets.domain import BuyerId, Concert, ConcertId, Order, Quantity
from tickets.domain.errors import (
    ConcertNotFoundError,
    DomainError,
    InsufficientStockError,
    InvalidAddonError,
    InvalidConcertIdError,
    InvalidQuantityError,
    QuotaExceededError,
    SalesClosedError,
)
from tickets.services.policy import SalesPolicy
from tickets.stores.interfaces import TicketStore

logger = logging.getLogger(__name__)

ADDON_NAME_MAX_LENGTH = 100


class PurchaseService:
    """Service for buying concert tickets."""

    def __init__(
        self,
        store: TicketStore,
        policy: SalesPolicy | None = None,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._policy = policy or SalesPolicy()
        self._clock = clock

    def purchase(
        self,
        buyer_id: BuyerId,
        concert_id: str,
        quantity: int,
        addon_names: Sequence[str] = (),
    ) -> Order:
        """Buy tickets for a concert and return the created order.

        Raises:
            InvalidConcertIdError: If the concert_id is not a valid UUID.
            InvalidQuantityError: If quantity is not a positive integer.
            InvalidAddonError: If an add-on name is blank or too long.
            ConcertNotFoundError: If the concert does not exist.
            SalesClosedError: If the sale deadline has passed.
            QuotaExceededError: If the buyer would go over the per-account cap.
            InsufficientStockError: If not enough tickets are left.
            PurchaseConflictError: If lock contention aborted the purchase.
        """
        key = _parse_concert_id(concert_id)
        requested = _parse_quantity(quantity)
        item_names = _normalize_addon_names(addon_names)

        try:
            with self._store.atomic():
                concert = self._store.lock_concert(key)
                if concert is None:
                    raise ConcertNotFoundError(str(key))
                self._check_sale_window(concert)
                self._check_quota(buyer_id, concert, requested)
                if not concert.stock.covers(requested):
                    raise InsufficientStockError(remaining=concert.stock.value)

                total_price = concert.price.times(requested)
                self._store.decrement_stock(concert.id, requested)
                order = self._store.create_order(
                    buyer_id, concert.id, requested, total_price
                )
                addons = self._store.create_addons(order.id, item_names)
        except DomainError as exc:
            logger.info(
                "Purchase rejected buyer=%s concert=%s quantity=%d code=%s",
                buyer_id,
                key,
                requested.value,
                exc.code.value,
            )
            raise

        logger.info(
            "Purchase committed order=%s buyer=%s concert=%s quantity=%d total=%s",
            order.id,
            buyer_id,
            key,
            requested.value,
            total_price,
        )
        return replace(order, addons=addons)

    def _check_sale_window(self, concert: Concert) -> None:
        if self._clock() > self._policy.sale_deadline(concert.date):
            raise SalesClosedError(cutoff_days=self._policy.sales_cutoff.days)

    def _check_quota(
        self, buyer_id: BuyerId, concert: Concert, requested: Quantity
    ) -> None:
        already_bought = self._store.quantity_bought(buyer_id, concert.id)
        if already_bought + requested.value > self._policy.per_account_cap:
            raise QuotaExceededError(
                cap=self._policy.per_account_cap, already_bought=already_bought
            )


def _parse_concert_id(concert_id: str) -> ConcertId:
    try:
        return ConcertId.from_string(concert_id)
    except (TypeError, ValueError) as exc:
        raise InvalidConcertIdError() from exc


def _parse_quantity(quantity: int) -> Quantity:
    try:
        return Quantity(quantity)
    except ValueError as exc:
        raise InvalidQuantityError() from exc


def _normalize_addon_names(addon_names: Sequence[str]) -> tuple[str, ...]:
    """Trim names, keeping order and duplicates."""
    if isinstance(addon_names, str):
        raise InvalidAddonError("add-ons must be a list of names")
    names = []
    for name in addon_names:
        if not isinstance(name, str):
            raise InvalidAddonError("add-on names must be strings")
        name = name.strip()
        if not name:
            raise InvalidAddonError("name cannot be blank")
        if len(name) > ADDON_NAME_MAX_LENGTH:
            raise InvalidAddonError(
                f"name cannot exceed {ADDON_NAME_MAX_LENGTH} characters"
            )
        names.append(name)
    return tuple(names)
