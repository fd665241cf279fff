"""Business limits for ticket sales."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Self

from django.conf import settings

DEFAULT_PER_ACCOUNT_CAP = 2
DEFAULT_SALES_CUTOFF_DAYS = 7
DEFAULT_LOCK_TIMEOUT_MS = 5000


@dataclass(frozen=True)
class SalesPolicy:
    """Per-account ticket cap, sale cutoff and purchase lock timeout."""

    per_account_cap: int = DEFAULT_PER_ACCOUNT_CAP
    sales_cutoff: timedelta = timedelta(days=DEFAULT_SALES_CUTOFF_DAYS)
    lock_timeout_ms: int = DEFAULT_LOCK_TIMEOUT_MS

    @classmethod
    def from_settings(cls) -> Self:
        """Build the policy from the TICKET_SALES setting."""
        config = getattr(settings, "TICKET_SALES", {})
        return cls(
            per_account_cap=int(
                config.get("PER_ACCOUNT_CAP", DEFAULT_PER_ACCOUNT_CAP)
            ),
            sales_cutoff=timedelta(
                days=int(config.get("SALES_CUTOFF_DAYS", DEFAULT_SALES_CUTOFF_DAYS))
            ),
            lock_timeout_ms=int(
                config.get("LOCK_TIMEOUT_MS", DEFAULT_LOCK_TIMEOUT_MS)
            ),
        )

    def sale_deadline(self, concert_date: datetime) -> datetime:
        return concert_date - self.sales_cutoff
