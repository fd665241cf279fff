"""Integration tests for the purchase transaction against the database.

Run with: pytest tests/test_purchases.py -v
"""

import threading
from datetime import timedelta

import pytest
from django.db import OperationalError, connection
from django.utils import timezone

from tickets import models
from tickets.domain import BuyerId
from tickets.domain.errors import (
    DomainError,
    ErrorCode,
    InsufficientStockError,
    PurchaseConflictError,
    QuotaExceededError,
    SalesClosedError,
)
from tickets.services.order_history import OrderHistoryService
from tickets.services.policy import SalesPolicy
from tickets.services.purchase_service import PurchaseService
from tickets.stores.django_store import DjangoTicketStore


@pytest.fixture
def service() -> PurchaseService:
    return PurchaseService(DjangoTicketStore())


def table_state(concert: models.Concert) -> tuple:
    concert.refresh_from_db()
    return (
        concert.stock,
        list(models.Order.objects.values_list("id", flat=True)),
        list(models.OrderAddon.objects.values_list("id", flat=True)),
    )


@pytest.mark.django_db
class TestPurchaseTransaction:
    """Tests for PurchaseService with DjangoTicketStore."""

    def test_purchase_decrements_stock_and_records_order(
        self, service, concert_factory, buyer
    ):
        concert = concert_factory(price=50, stock=3)

        order = service.purchase(BuyerId(buyer.id), str(concert.id), 2)

        concert.refresh_from_db()
        assert concert.stock == 1
        row = models.Order.objects.get(pk=order.id.value)
        assert (row.quantity, row.total_price) == (2, 100)
        assert row.buyer_id == buyer.id

    def test_quota_violation_leaves_tables_unchanged(
        self, service, concert_factory, buyer
    ):
        concert = concert_factory(price=50, stock=3)
        service.purchase(BuyerId(buyer.id), str(concert.id), 2)
        before = table_state(concert)

        with pytest.raises(QuotaExceededError):
            service.purchase(BuyerId(buyer.id), str(concert.id), 1, ["Latte"])

        assert table_state(concert) == before
        assert before[0] == 1

    def test_sales_closed_three_days_out(self, service, concert_factory, buyer):
        concert = concert_factory(date=timezone.now() + timedelta(days=3))
        before = table_state(concert)

        with pytest.raises(SalesClosedError):
            service.purchase(BuyerId(buyer.id), str(concert.id), 1)

        assert table_state(concert) == before

    def test_insufficient_stock(self, service, concert_factory, buyer):
        concert = concert_factory(stock=1)

        with pytest.raises(InsufficientStockError):
            service.purchase(BuyerId(buyer.id), str(concert.id), 2)

        concert.refresh_from_db()
        assert concert.stock == 1

    def test_addons_persisted_in_order(self, service, concert_factory, buyer):
        concert = concert_factory()

        order = service.purchase(
            BuyerId(buyer.id), str(concert.id), 1, ["Latte", "Mocha"]
        )

        rows = models.OrderAddon.objects.filter(order_id=order.id.value)
        assert [r.item_name for r in rows] == ["Latte", "Mocha"]
        assert [a.item_name for a in order.addons] == ["Latte", "Mocha"]

    def test_failure_while_adding_addons_rolls_back(
        self, service, concert_factory, buyer, monkeypatch
    ):
        concert = concert_factory(stock=3)
        before = table_state(concert)

        def explode(self, order_id, item_names):
            raise RuntimeError("disk full")

        monkeypatch.setattr(DjangoTicketStore, "create_addons", explode)

        with pytest.raises(RuntimeError):
            service.purchase(BuyerId(buyer.id), str(concert.id), 1, ["Latte"])

        assert table_state(concert) == before

    def test_lock_contention_surfaces_as_conflict(
        self, service, concert_factory, buyer, monkeypatch
    ):
        concert = concert_factory(stock=3)
        before = table_state(concert)

        def locked(self, concert_id):
            raise OperationalError("database is locked")

        monkeypatch.setattr(DjangoTicketStore, "lock_concert", locked)

        with pytest.raises(PurchaseConflictError):
            service.purchase(BuyerId(buyer.id), str(concert.id), 1)

        assert table_state(concert) == before

    def test_postgres_lock_timeout_surfaces_as_conflict(
        self, service, concert_factory, buyer, monkeypatch
    ):
        concert = concert_factory(stock=3)

        class LockNotAvailable(Exception):
            sqlstate = "55P03"

        def timed_out(self, concert_id):
            raise OperationalError(
                "canceling statement due to lock timeout"
            ) from LockNotAvailable()

        monkeypatch.setattr(DjangoTicketStore, "lock_concert", timed_out)

        with pytest.raises(PurchaseConflictError):
            service.purchase(BuyerId(buyer.id), str(concert.id), 1)

    def test_other_operational_errors_propagate(
        self, service, concert_factory, buyer, monkeypatch
    ):
        concert = concert_factory(stock=3)
        before = table_state(concert)

        def broken(self, concert_id):
            raise OperationalError("server closed the connection unexpectedly")

        monkeypatch.setattr(DjangoTicketStore, "lock_concert", broken)

        with pytest.raises(OperationalError):
            service.purchase(BuyerId(buyer.id), str(concert.id), 1)

        assert table_state(concert) == before

    def test_total_price_fixed_at_purchase_time(
        self, service, concert_factory, buyer
    ):
        concert = concert_factory(price=50)
        service.purchase(BuyerId(buyer.id), str(concert.id), 2)

        concert.price = 90
        concert.save()

        [entry] = OrderHistoryService(DjangoTicketStore()).list_orders(
            BuyerId(buyer.id)
        )
        assert entry.order.total_price.amount == 100
        assert entry.concert.price.amount == 90


@pytest.mark.django_db
class TestOrderHistory:
    """Tests for OrderHistoryService with DjangoTicketStore."""

    def test_no_orders(self, buyer):
        history = OrderHistoryService(DjangoTicketStore())
        assert history.list_orders(BuyerId(buyer.id)) == []

    def test_newest_first_with_concert_and_addons(
        self, service, concert_factory, buyer_factory
    ):
        me, someone_else = buyer_factory(), buyer_factory()
        first_concert = concert_factory(name="First")
        second_concert = concert_factory(name="Second")
        older = service.purchase(BuyerId(me.id), str(first_concert.id), 1)
        newer = service.purchase(
            BuyerId(me.id), str(second_concert.id), 2, ["Latte", "Latte"]
        )
        service.purchase(BuyerId(someone_else.id), str(first_concert.id), 1)
        models.Order.objects.filter(pk=older.id.value).update(
            created_at=timezone.now() - timedelta(hours=1)
        )

        entries = OrderHistoryService(DjangoTicketStore()).list_orders(BuyerId(me.id))

        assert [e.order.id for e in entries] == [newer.id, older.id]
        assert entries[0].concert.name == "Second"
        assert [a.item_name for a in entries[0].addons] == ["Latte", "Latte"]
        assert entries[1].addons == ()


def run_concurrently(
    concert_id: str, buyer_ids: list[BuyerId], quantity: int = 1
) -> list:
    """Fire one purchase per entry in buyer_ids at the same moment."""
    barrier = threading.Barrier(len(buyer_ids))
    outcomes = []

    def attempt(buyer_id: BuyerId) -> None:
        service = PurchaseService(DjangoTicketStore())
        try:
            barrier.wait()
            service.purchase(buyer_id, concert_id, quantity)
            outcomes.append("committed")
        except DomainError as exc:
            outcomes.append(exc.code)
        finally:
            connection.close()

    threads = [threading.Thread(target=attempt, args=(b,)) for b in buyer_ids]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return outcomes


@pytest.mark.django_db(transaction=True)
class TestConcurrentPurchases:
    """Races between buyers for the same concert."""

    def test_last_ticket_sold_exactly_once(self, concert_factory, buyer_factory):
        concert = concert_factory(stock=1)
        buyers = [BuyerId(buyer_factory().id) for _ in range(2)]

        outcomes = run_concurrently(str(concert.id), buyers)

        assert sorted(outcomes, key=str) == sorted(
            ["committed", ErrorCode.INSUFFICIENT_STOCK], key=str
        )
        concert.refresh_from_db()
        assert concert.stock == 0
        assert models.Order.objects.count() == 1

    def test_no_oversell_under_contention(self, concert_factory, buyer_factory):
        concert = concert_factory(stock=3)
        buyers = [BuyerId(buyer_factory().id) for _ in range(6)]

        outcomes = run_concurrently(str(concert.id), buyers)

        assert outcomes.count("committed") == 3
        assert outcomes.count(ErrorCode.INSUFFICIENT_STOCK) == 3
        concert.refresh_from_db()
        assert concert.stock == 0
        assert sum(models.Order.objects.values_list("quantity", flat=True)) == 3

    def test_cap_holds_for_one_buyer_racing_itself(
        self, concert_factory, buyer_factory
    ):
        concert = concert_factory(stock=10)
        buyer_id = BuyerId(buyer_factory().id)

        outcomes = run_concurrently(str(concert.id), [buyer_id] * 4, quantity=2)

        assert outcomes.count("committed") == 1
        assert outcomes.count(ErrorCode.QUOTA_EXCEEDED) == 3
        assert sum(models.Order.objects.values_list("quantity", flat=True)) == 2
        concert.refresh_from_db()
        assert concert.stock == 8

    def test_different_concerts_do_not_block_each_other(
        self, concert_factory, buyer_factory, monkeypatch
    ):
        if connection.vendor != "postgresql":
            pytest.skip("row locks need PostgreSQL; SQLite serializes all writers")

        held = concert_factory(name="Held")
        other = concert_factory(name="Other")
        holder_id, other_id = (BuyerId(buyer_factory().id) for _ in range(2))
        holding, release = threading.Event(), threading.Event()
        original = DjangoTicketStore.create_addons

        def slow_for_held(self, order_id, item_names):
            if list(item_names) == ["hold"]:
                holding.set()
                release.wait(timeout=10)
            return original(self, order_id, item_names)

        monkeypatch.setattr(DjangoTicketStore, "create_addons", slow_for_held)
        holder_outcome = []

        def hold_lock() -> None:
            try:
                PurchaseService(DjangoTicketStore()).purchase(
                    holder_id, str(held.id), 1, ["hold"]
                )
                holder_outcome.append("committed")
            finally:
                connection.close()

        holder = threading.Thread(target=hold_lock)
        holder.start()
        assert holding.wait(timeout=10)
        try:
            service = PurchaseService(
                DjangoTicketStore(lock_timeout_ms=1000),
                SalesPolicy(lock_timeout_ms=1000),
            )
            service.purchase(other_id, str(other.id), 1)
        finally:
            release.set()
            holder.join(timeout=30)

        assert holder_outcome == ["committed"]
        assert models.Order.objects.count() == 2
