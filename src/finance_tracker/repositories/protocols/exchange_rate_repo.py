"""Exchange rate repository protocol."""

from typing import Protocol, Optional

from finance_tracker.domain.models import ExchangeRateSnapshot


class ExchangeRateRepository(Protocol):
    """Interface for the persisted exchange-rate snapshot."""

    def get_snapshot(self) -> Optional[ExchangeRateSnapshot]:
        """Return the stored snapshot, or None if rates were never fetched."""
        ...

    def save_snapshot(self, snapshot: ExchangeRateSnapshot) -> None:
        """Replace stored rates with the snapshot's (last writer wins)."""
        ...
