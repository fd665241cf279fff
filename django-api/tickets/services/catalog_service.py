"""Catalog service - concert listing and lookup."""

from tickets.domain import Concert, ConcertId
from tickets.domain.errors import ConcertNotFoundError, InvalidConcertIdError
from tickets.stores.interfaces import TicketStore


class CatalogService:
    """Service for concert catalog operations."""

    def __init__(self, store: TicketStore) -> None:
        self._store = store

    def list_concerts(self) -> list[Concert]:
        """Return all concerts."""
        return self._store.list_concerts()

    def get_concert(self, concert_id: str) -> Concert:
        """Return a concert by ID.

        Raises:
            InvalidConcertIdError: If the concert_id is not a valid UUID.
            ConcertNotFoundError: If the concert does not exist.
        """
        try:
            key = ConcertId.from_string(concert_id)
        except ValueError as exc:
            raise InvalidConcertIdError() from exc

        concert = self._store.get_concert(key)
        if concert is None:
            raise ConcertNotFoundError(concert_id)
        return concert
