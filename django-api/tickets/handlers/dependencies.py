"""Builds services with their stores for each request."""

from tickets.services.account_service import AccountService
from tickets.services.catalog_service import CatalogService
from tickets.services.order_history import OrderHistoryService
from tickets.services.policy import SalesPolicy
from tickets.services.purchase_service import PurchaseService
from tickets.services.tokens import TokenIssuer
from tickets.stores.django_store import DjangoBuyerStore, DjangoTicketStore


def get_purchase_service() -> PurchaseService:
    policy = SalesPolicy.from_settings()
    store = DjangoTicketStore(lock_timeout_ms=policy.lock_timeout_ms)
    return PurchaseService(store, policy)


def get_order_history_service() -> OrderHistoryService:
    return OrderHistoryService(DjangoTicketStore())


def get_catalog_service() -> CatalogService:
    return CatalogService(DjangoTicketStore())


def get_account_service() -> AccountService:
    return AccountService(DjangoBuyerStore(), TokenIssuer.from_settings())
