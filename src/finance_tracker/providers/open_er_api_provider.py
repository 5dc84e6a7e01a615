"""Exchange rate provider backed by the open.er-api.com HTTP API."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

import httpx

from finance_tracker.core.timezone import now_utc, parse_datetime_utc
from finance_tracker.domain.models import ExchangeRateSnapshot
from finance_tracker.providers.exchange_rate_provider import RateProviderError

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://open.er-api.com/v6/latest/USD"


class OpenErApiRateProvider:
    """
    Fetch rates from ``GET /v6/latest/<base>``.

    The response carries ``result``, ``base_code``, ``rates`` and
    ``time_last_update_utc`` (an RFC 2822 timestamp).
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        timeout_seconds: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self._url = url
        self._timeout = timeout_seconds
        self._client = client

    def fetch_rates(self) -> ExchangeRateSnapshot:
        """Fetch the latest rate table."""
        try:
            if self._client is not None:
                response = self._client.get(self._url, timeout=self._timeout)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.get(self._url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise RateProviderError(f"Exchange rate request failed: {exc}") from exc
        except ValueError as exc:
            raise RateProviderError("Exchange rate response is not valid JSON") from exc

        return self._parse(payload)

    @staticmethod
    def _parse(payload: dict) -> ExchangeRateSnapshot:
        if not isinstance(payload, dict) or payload.get("result") != "success":
            raise RateProviderError(f"Exchange rate API returned an error: {payload!r:.200}")

        raw_rates = payload.get("rates")
        if not isinstance(raw_rates, dict) or not raw_rates:
            raise RateProviderError("Exchange rate response has no rates")

        rates: dict[str, Decimal] = {}
        for currency, value in raw_rates.items():
            try:
                rate = Decimal(str(value))
            except InvalidOperation:
                logger.warning("Skipping unparseable rate for %s: %r", currency, value)
                continue
            if rate > 0:
                rates[currency.upper()] = rate

        source_updated_at = None
        if payload.get("time_last_update_utc"):
            try:
                source_updated_at = parse_datetime_utc(payload["time_last_update_utc"])
            except (ValueError, OverflowError):
                logger.warning(
                    "Unparseable rate timestamp: %r", payload["time_last_update_utc"]
                )

        return ExchangeRateSnapshot(
            base_currency=payload.get("base_code", "USD"),
            rates=rates,
            fetched_at=now_utc(),
            source_updated_at=source_updated_at,
        )
