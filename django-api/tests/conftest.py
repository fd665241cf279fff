"""Pytest configuration and shared fixtures."""

from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from tickets import models
from tickets.domain import BuyerId
from tickets.services.tokens import TokenIssuer
from tickets.stores.django_store import DjangoBuyerStore


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()



@pytest.fixture
def concert_factory(db):
    def create(**overrides) -> models.Concert:
        fields = {
            "name": "POISONYA SYNDROME",
            "artist": "Nekomata Okayu",
            "price": 50,
            "stock": 3,
            "venue": "Tachikawa Stage Garden",
            "date": timezone.now() + timedelta(days=30),
        }
        fields.update(overrides)
        return models.Concert.objects.create(**fields)

    return create


@pytest.fixture
def buyer_factory(db):
    counter = iter(range(1, 1000))

    def create(handle: str | None = None) -> models.Buyer:
        return models.Buyer.objects.create(
            handle=handle or f"buyer{next(counter)}", password_hash="unusable"
        )

    return create


@pytest.fixture
def buyer(buyer_factory) -> models.Buyer:
    return buyer_factory("nekomata_okayu")


@pytest.fixture
def auth_client(buyer) -> APIClient:
    domain_buyer = DjangoBuyerStore().get_buyer(BuyerId(buyer.id))
    client = APIClient()
    client.credentials(
        HTTP_AUTHORIZATION=f"Bearer {TokenIssuer.from_settings().issue(domain_buyer)}"
    )
    return client
