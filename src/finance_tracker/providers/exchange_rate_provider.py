"""Exchange rate provider protocol and base types."""

from typing import Protocol

from finance_tracker.domain.models import ExchangeRateSnapshot


class RateProviderError(Exception):
    """Raised when a provider cannot deliver a usable rate table."""


class ExchangeRateProvider(Protocol):
    """
    Protocol for exchange rate providers.

    Implementations return a full snapshot of rates relative to one base
    currency, or raise RateProviderError. Caching and fallback to earlier
    snapshots are the caller's concern.
    """

    def fetch_rates(self) -> ExchangeRateSnapshot:
        """Fetch the latest rate table."""
        ...
