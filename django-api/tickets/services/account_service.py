"""Account service - registration, login and token authentication."""

import logging

from django.contrib.auth.hashers import check_password, make_password

from tickets.domain import Buyer
from tickets.domain.errors import BuyerNotFoundError, InvalidCredentialsError
from tickets.services.tokens import TokenIssuer
from tickets.stores.interfaces import BuyerStore

logger = logging.getLogger(__name__)


class AccountService:
    """Service for buyer accounts."""

    def __init__(self, store: BuyerStore, tokens: TokenIssuer) -> None:
        self._store = store
        self._tokens = tokens

    def register(self, handle: str, password: str) -> Buyer:
        """Create a buyer with the default role.

        Raises:
            HandleTakenError: If the handle is already registered.
        """
        buyer = self._store.create_buyer(handle, make_password(password))
        logger.info("Registered buyer=%s", buyer.id)
        return buyer

    def login(self, handle: str, password: str) -> str:
        """Return a bearer token for valid credentials.

        Raises:
            InvalidCredentialsError: If the handle is unknown or the password is wrong.
        """
        found = self._store.get_credentials(handle)
        if found is None:
            raise InvalidCredentialsError()
        buyer, password_hash = found
        if not check_password(password, password_hash):
            raise InvalidCredentialsError()
        return self._tokens.issue(buyer)

    def authenticate(self, token: str) -> Buyer:
        """Resolve a bearer token to an existing buyer.

        Raises:
            InvalidTokenError: If the token does not verify.
            BuyerNotFoundError: If the token's buyer no longer exists.
        """
        buyer = self._store.get_buyer(self._tokens.verify(token))
        if buyer is None:
            raise BuyerNotFoundError()
        return buyer
