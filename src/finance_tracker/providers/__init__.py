"""Exchange rate providers module."""

from finance_tracker.providers.exchange_rate_provider import (
    ExchangeRateProvider,
    RateProviderError,
)
from finance_tracker.providers.open_er_api_provider import OpenErApiRateProvider
from finance_tracker.providers.static_provider import StaticRateProvider

__all__ = [
    "ExchangeRateProvider",
    "RateProviderError",
    "OpenErApiRateProvider",
    "StaticRateProvider",
]
