"""Exchange rate service: cached access to the current rate snapshot."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.core.exceptions import PersistenceError, RateUnavailableError
from finance_tracker.core.timezone import now_utc
from finance_tracker.domain.models import ExchangeRateSnapshot
from finance_tracker.providers.exchange_rate_provider import (
    ExchangeRateProvider,
    RateProviderError,
)
from finance_tracker.repositories.protocols import ExchangeRateRepository
from finance_tracker.repositories.sqlalchemy.database import atomic
from finance_tracker.services.currency_converter import convert

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE_SECONDS = 24 * 60 * 60


class ExchangeRateService:
    """
    Serves the current exchange-rate snapshot.

    The snapshot is persisted so every request and process shares it. When it
    is older than ``max_age_seconds`` a fresh table is fetched from the
    provider; if the fetch fails the previous snapshot stays in effect. With no
    snapshot at all, RateUnavailableError is raised.

    ``get_snapshot`` may commit its own refresh, so call it before opening a
    unit of work, not inside one.
    """

    def __init__(
        self,
        db: Session,
        rate_repo: ExchangeRateRepository,
        provider: ExchangeRateProvider,
        max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS,
    ):
        self._db = db
        self._repo = rate_repo
        self._provider = provider
        self._max_age = max_age_seconds
        self._snapshot: Optional[ExchangeRateSnapshot] = None

    def get_snapshot(self) -> ExchangeRateSnapshot:
        """Return a fresh snapshot, refreshing or falling back as needed."""
        now = now_utc()
        if self._snapshot is not None and not self._snapshot.is_stale(now, self._max_age):
            return self._snapshot

        stored = self._repo.get_snapshot()
        if stored is not None and not stored.is_stale(now, self._max_age):
            self._snapshot = stored
            return stored

        try:
            fetched = self._provider.fetch_rates()
        except RateProviderError as exc:
            if stored is not None:
                logger.warning(
                    "Rate refresh failed, using snapshot from %s: %s",
                    stored.fetched_at.isoformat(),
                    exc,
                )
                self._snapshot = stored
                return stored
            logger.error("Rate refresh failed and no snapshot is cached: %s", exc)
            raise RateUnavailableError("Exchange rates are currently unavailable") from exc

        self._store(fetched)
        self._snapshot = fetched
        return fetched

    def convert(self, amount: int, from_currency: str, to_currency: str) -> int:
        """Convert using the current snapshot; same-currency needs no rates."""
        if from_currency.upper() == to_currency.upper():
            return amount
        return convert(amount, from_currency, to_currency, self.get_snapshot().rates)

    def _store(self, snapshot: ExchangeRateSnapshot) -> None:
        # A concurrent refresh may win the write; either snapshot is valid.
        try:
            with atomic(self._db):
                self._repo.save_snapshot(snapshot)
        except PersistenceError:
            logger.warning("Could not persist refreshed exchange rates; using them in memory")
        else:
            logger.info(
                "Stored %d exchange rates (base %s)",
                len(snapshot.rates),
                snapshot.base_currency,
            )
