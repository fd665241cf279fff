"""Signed bearer tokens for authenticated buyers."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Self

import jwt
from django.conf import settings
from django.utils import timezone

from tickets.domain import Buyer, BuyerId
from tickets.domain.errors import InvalidTokenError

logger = logging.getLogger(__name__)


class TokenIssuer:
    """Issues and verifies HS256 JWTs whose subject is the buyer id."""

    def __init__(
        self,
        secret: str,
        ttl: timedelta = timedelta(hours=24),
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock

    @classmethod
    def from_settings(cls) -> Self:
        return cls(
            secret=settings.JWT_SECRET,
            ttl=timedelta(hours=settings.JWT_TTL_HOURS),
        )

    def issue(self, buyer: Buyer) -> str:
        now = self._clock()
        payload = {
            "sub": str(buyer.id),
            "handle": buyer.handle,
            "role": buyer.role,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> BuyerId:
        """Return the buyer id a token was issued for.

        Raises:
            InvalidTokenError: If the token is malformed, tampered with or expired.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
            return BuyerId.from_string(payload["sub"])
        except (jwt.PyJWTError, ValueError) as exc:
            logger.debug("Rejected token: %s", exc)
            raise InvalidTokenError() from exc
