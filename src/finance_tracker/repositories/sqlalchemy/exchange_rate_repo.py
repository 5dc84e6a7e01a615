"""SQLAlchemy implementation of ExchangeRateRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from finance_tracker.core.timezone import to_naive_utc, to_utc
from finance_tracker.domain.models import ExchangeRateSnapshot
from finance_tracker.repositories.sqlalchemy.orm_models import ExchangeRateORM


class SqlAlchemyExchangeRateRepository:
    """
    Persists the rate snapshot as one row per currency.

    Saving overwrites every row, so concurrent refreshes converge on whichever
    snapshot was written last.
    """

    def __init__(self, db: Session):
        self._db = db

    def get_snapshot(self) -> Optional[ExchangeRateSnapshot]:
        """Return the stored snapshot, or None if rates were never fetched."""
        rows = self._db.query(ExchangeRateORM).all()
        if not rows:
            return None

        fetched_at = min(r.updated_at for r in rows)
        source_times = [r.source_updated_at for r in rows if r.source_updated_at]
        return ExchangeRateSnapshot(
            base_currency=rows[0].base_currency,
            rates={r.currency: Decimal(str(r.rate)) for r in rows},
            fetched_at=to_utc(fetched_at),
            source_updated_at=to_utc(min(source_times)) if source_times else None,
        )

    def save_snapshot(self, snapshot: ExchangeRateSnapshot) -> None:
        """Replace stored rates with the snapshot's."""
        updated_at = to_naive_utc(snapshot.fetched_at)
        source_updated_at = (
            to_naive_utc(snapshot.source_updated_at) if snapshot.source_updated_at else None
        )

        self._db.query(ExchangeRateORM).filter(
            ExchangeRateORM.currency.notin_(list(snapshot.rates))
        ).delete(synchronize_session=False)

        for currency, rate in snapshot.rates.items():
            self._db.merge(
                ExchangeRateORM(
                    currency=currency,
                    base_currency=snapshot.base_currency,
                    rate=rate,
                    source_updated_at=source_updated_at,
                    updated_at=updated_at,
                )
            )
        self._db.flush()
