"""Static exchange rate provider for offline/testing use."""

from decimal import Decimal
from typing import Mapping, Optional

from finance_tracker.core.timezone import now_utc
from finance_tracker.domain.models import ExchangeRateSnapshot


# Approximate units of each currency per 1 USD
STATIC_RATES: dict[str, Decimal] = {
    "USD": Decimal("1"),
    "EUR": Decimal("0.92"),
    "GBP": Decimal("0.79"),
    "MAD": Decimal("10.0"),
    "JPY": Decimal("150.0"),
    "CAD": Decimal("1.35"),
    "AUD": Decimal("1.5"),
    "CHF": Decimal("0.9"),
    "CNY": Decimal("7.2"),
    "AED": Decimal("3.67"),
}


class StaticRateProvider:
    """Provider returning a fixed rate table; never touches the network."""

    def __init__(
        self,
        rates: Optional[Mapping[str, Decimal]] = None,
        base_currency: str = "USD",
    ):
        self._rates = dict(rates if rates is not None else STATIC_RATES)
        self._base_currency = base_currency

    def fetch_rates(self) -> ExchangeRateSnapshot:
        """Return the fixed rate table stamped with the current time."""
        return ExchangeRateSnapshot(
            base_currency=self._base_currency,
            rates=self._rates,
            fetched_at=now_utc(),
        )
