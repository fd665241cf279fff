"""Domain error codes for the tickets module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CONCERT_ID = "INVALID_CONCERT_ID"
    CONCERT_NOT_FOUND = "CONCERT_NOT_FOUND"
    SALES_CLOSED = "SALES_CLOSED"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    PURCHASE_CONFLICT = "PURCHASE_CONFLICT"
    HANDLE_TAKEN = "HANDLE_TAKEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    BUYER_NOT_FOUND = "BUYER_NOT_FOUND"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidConcertIdError(DomainError):
    """Raised when a concert ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CONCERT_ID,
            message="Invalid concert ID format",
        )


class InvalidQuantityError(DomainError):
    """Raised when the requested ticket quantity is not a positive integer."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message="Quantity must be a positive integer",
        )


class InvalidAddonError(DomainError):
    """Raised when an add-on name is blank or too long."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=f"Invalid add-on: {reason}",
        )


class ConcertNotFoundError(DomainError):
    """Raised when a concert is not found."""

    def __init__(self, concert_id: str) -> None:
        super().__init__(
            code=ErrorCode.CONCERT_NOT_FOUND,
            message="Concert not found",
        )
        self.concert_id = concert_id


class SalesClosedError(DomainError):
    """Raised when the sale window for a concert has closed."""

    def __init__(self, cutoff_days: int) -> None:
        super().__init__(
            code=ErrorCode.SALES_CLOSED,
            message=(
                "Sales are closed. Tickets must be bought at least "
                f"{cutoff_days} days before the concert."
            ),
        )


class QuotaExceededError(DomainError):
    """Raised when a purchase would take a buyer past the per-account cap."""

    def __init__(self, cap: int, already_bought: int) -> None:
        super().__init__(
            code=ErrorCode.QUOTA_EXCEEDED,
            message=(
                f"Ticket limit of {cap} per account exceeded "
                f"({already_bought} already bought)"
            ),
        )
        self.cap = cap
        self.already_bought = already_bought


class InsufficientStockError(DomainError):
    """Raised when fewer tickets remain than were requested."""

    def __init__(self, remaining: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_STOCK,
            message="Not enough tickets left",
        )
        self.remaining = remaining


class PurchaseConflictError(DomainError):
    """Raised when lock contention kept a purchase from completing in time."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PURCHASE_CONFLICT,
            message="Too many concurrent purchases, please retry",
        )


class HandleTakenError(DomainError):
    """Raised when registering a handle that already exists."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.HANDLE_TAKEN,
            message="Handle is already taken",
        )


class InvalidCredentialsError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid handle or password",
        )


class InvalidTokenError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TOKEN,
            message="Invalid or expired token",
        )


class BuyerNotFoundError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.BUYER_NOT_FOUND,
            message="Buyer not found",
        )
