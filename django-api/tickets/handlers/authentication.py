"""Bearer token authentication for DRF views."""

from dataclasses import dataclass
from typing import Self

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.request import Request

from tickets.domain import Buyer, BuyerId
from tickets.domain.errors import DomainError
from tickets.handlers.dependencies import get_account_service


@dataclass(frozen=True)
class BuyerPrincipal:
    """The authenticated caller attached to request.user."""

    buyer_id: BuyerId
    handle: str
    role: str

    @classmethod
    def from_buyer(cls, buyer: Buyer) -> Self:
        return cls(buyer_id=buyer.id, handle=buyer.handle, role=buyer.role)

    @property
    def is_authenticated(self) -> bool:
        return True


class BearerTokenAuthentication(BaseAuthentication):
    """Authorization: Bearer <token>.

    A missing header leaves the request anonymous (401 on protected views).
    A bad token or an unknown buyer is rejected with 403.
    """

    keyword = "Bearer"

    def authenticate(self, request: Request) -> tuple[BuyerPrincipal, str] | None:
        parts = get_authorization_header(request).split()
        if not parts or parts[0].lower() != self.keyword.lower().encode():
            return None
        if len(parts) != 2:
            raise exceptions.PermissionDenied("Invalid authorization header")
        try:
            token = parts[1].decode()
        except UnicodeError as exc:
            raise exceptions.PermissionDenied("Invalid authorization header") from exc

        try:
            buyer = get_account_service().authenticate(token)
        except DomainError as exc:
            raise exceptions.PermissionDenied(exc.message) from exc
        return BuyerPrincipal.from_buyer(buyer), token

    def authenticate_header(self, request: Request) -> str:
        return self.keyword
