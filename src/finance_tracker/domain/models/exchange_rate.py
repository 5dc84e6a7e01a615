"""Exchange rate snapshot."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class ExchangeRateSnapshot:
    """
    Point-in-time mapping of currency code -> rate relative to ``base_currency``.

    Immutable once built: the rate mapping is wrapped in a read-only proxy, so
    one snapshot can be shared by concurrent requests.
    """

    base_currency: str
    rates: Mapping[str, Decimal]
    fetched_at: datetime
    source_updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        normalized = {code.upper(): Decimal(str(rate)) for code, rate in self.rates.items()}
        object.__setattr__(self, "base_currency", self.base_currency.upper())
        object.__setattr__(self, "rates", MappingProxyType(normalized))

    def rate_for(self, currency: str) -> Optional[Decimal]:
        """Return the rate for a currency, or None if it is not quoted."""
        return self.rates.get(currency.upper())

    def is_stale(self, now: datetime, max_age_seconds: int) -> bool:
        """Return True if the snapshot is older than the allowed age."""
        return now - self.fetched_at >= timedelta(seconds=max_age_seconds)
